"""
Module: analyzer.timing

Purpose:
    Timing instrumentation for the analysis pipeline, to see which phase
    (parsing or one of the detectors) dominates on large documents.

Key Classes:
    - TimingLog: Collects per-phase durations across analysis runs

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - analyzer.pipeline: analyze()
    - cli: --timing
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Generator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Timing metrics for analysis runs.

    Each phase keeps every recorded duration, so one log can be shared
    across several ``analyze`` calls.

    Attributes:
        phase_timings: Dict of phase_name -> list of duration_seconds

    Example:
        >>> log = TimingLog()
        >>> log.log_phase("parse", 0.004)
        >>> log.log_phase("parse", 0.006)
        >>> log.get_phase_averages()["parse"]
        0.005
    """
    phase_timings: Dict[str, List[float]] = field(default_factory=dict)

    def log_phase(self, phase: str, duration: float) -> None:
        """Record one duration for a phase."""
        self.phase_timings.setdefault(phase, []).append(duration)

    def get_phase_total(self, phase: str) -> float:
        return sum(self.phase_timings.get(phase, []))

    def get_total(self) -> float:
        """Total time across all phases."""
        return sum(sum(durations) for durations in self.phase_timings.values())

    def get_phase_averages(self) -> Dict[str, float]:
        """Average duration per phase."""
        return {
            phase: sum(durations) / len(durations)
            for phase, durations in self.phase_timings.items()
            if durations
        }

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Analysis Timing Summary ==="]
        for phase, durations in self.phase_timings.items():
            lines.append(
                f"  {phase:12s} {sum(durations):.4f}s over {len(durations)} run(s)"
            )
        lines.append(f"  {'total':12s} {self.get_total():.4f}s")
        return "\n".join(lines)


@contextmanager
def timed_phase(
    log: Optional[TimingLog],
    phase: str,
) -> Generator[None, None, None]:
    """
    Time a block of code and record it in ``log``.

    A ``None`` log makes this a no-op, so callers do not need to branch.

    Example:
        >>> with timed_phase(log, "parse"):
        ...     document = load_html(html)
    """
    if log is None:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        log.log_phase(phase, duration)
        logger.debug(f"Phase {phase} took {duration:.4f}s")
