"""
Module: analyzer.diagnostics

Captures detection issues during analysis (a problem statement was
recognised but no suggestion could be built) and writes diagnostic
reports for tuning the heuristics.

Structure:
- Each issue records the rule that gave up, a message and the element text
- Issues are collected in encounter order
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

# Issue types
NO_STEPS = "no_steps"
ZERO_COEFFICIENT = "zero_coefficient"
UNPARSEABLE_NUMBER = "unparseable_number"
UNVERIFIED_SOLUTION = "unverified_solution"


@dataclass(frozen=True)
class DetectionIssue:
    """
    A single detection issue with diagnostic context.

    Fields:
    - issue_type: One of the module-level issue constants
    - element_tag: Tag of the candidate element
    - element_text: Text of the candidate element (truncated on export)
    """
    issue_type: str
    message: str
    element_tag: str = ""
    element_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "issue_type": self.issue_type,
            "message": self.message,
        }
        if self.element_tag:
            d["element_tag"] = self.element_tag
        if self.element_text:
            d["element_text"] = self.element_text[:2000]
        return d


class DiagnosticsCollector:
    """
    Thread-safe collector for detection issues.

    Analysis itself is pure; a collector is the only state a caller can
    pass in, and it is written to under a lock so one collector may be
    shared by concurrent ``analyze`` calls.
    """

    def __init__(self):
        self._issues: List[DetectionIssue] = []
        self._lock = threading.Lock()

    def add_issue(
        self,
        issue_type: str,
        message: str,
        *,
        element_tag: str = "",
        element_text: str = "",
    ) -> None:
        """Record an issue."""
        issue = DetectionIssue(
            issue_type=issue_type,
            message=message,
            element_tag=element_tag,
            element_text=element_text,
        )
        with self._lock:
            self._issues.append(issue)
        logger.debug(f"Detection issue [{issue_type}]: {message}")

    @property
    def issues(self) -> List[DetectionIssue]:
        with self._lock:
            return list(self._issues)

    def counts(self) -> Dict[str, int]:
        """Number of issues per issue type."""
        counts: Dict[str, int] = {}
        for issue in self.issues:
            counts[issue.issue_type] = counts.get(issue.issue_type, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        issues = self.issues
        return {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "issue_count": len(issues),
            "counts": self.counts(),
            "issues": [issue.to_dict() for issue in issues],
        }

    def write_report(self, path: Path) -> Path:
        """
        Write the collected issues as JSON.

        Args:
            path: Output file (parent directories are created)

        Returns:
            The path written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Wrote {len(self.issues)} detection issue(s) to {path}")
        return path
