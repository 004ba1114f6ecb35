"""
Module: analyzer.pipeline

Purpose:
    Main analysis entry point. Parses HTML, runs the equation and problem
    detectors over the same document and aggregates their suggestions
    into one list ranked by confidence.

Key Functions:
    - analyze(): HTML string -> ranked suggestions
    - analyze_document(): Same, for an already parsed document
    - aggregate_suggestions(): Number and rank detector output

Dependencies:
    - analyzer.utils.html: HTML loading
    - analyzer.detection: Detectors
    - analyzer.timing: Optional phase timing

Used By:
    - mathblocks.analyze (package export)
    - cli: mathblocks-analyze
"""

from __future__ import annotations

import logging
from dataclasses import replace
from itertools import chain
from typing import Iterable, List, Optional

from mathblocks.core.models.suggestions import TransformationSuggestion
from .config import AnalysisConfig
from .detection.equations import detect_equation_patterns
from .detection.problems import detect_problem_patterns
from .diagnostics import DiagnosticsCollector
from .timing import TimingLog, timed_phase
from .utils.html import HtmlDocument, load_html

logger = logging.getLogger(__name__)


def aggregate_suggestions(
    *groups: Iterable[TransformationSuggestion],
) -> List[TransformationSuggestion]:
    """
    Merge detector outputs into one ranked list.

    Suggestions are numbered ``suggestion-1``, ``suggestion-2``, ... in
    encounter order (groups in argument order), then sorted by confidence,
    highest first. The sort is stable: equal confidences keep encounter
    order.

    Args:
        *groups: Detector outputs, in detector order.

    Returns:
        New, numbered suggestions sorted by descending confidence.
    """
    numbered = [
        replace(suggestion, id=f"suggestion-{index}")
        for index, suggestion in enumerate(chain.from_iterable(groups), start=1)
    ]
    return sorted(numbered, key=lambda s: s.confidence, reverse=True)


def analyze_document(
    document: HtmlDocument,
    *,
    config: Optional[AnalysisConfig] = None,
    timing_log: Optional[TimingLog] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> List[TransformationSuggestion]:
    """
    Run all detectors over a parsed document.

    See analyze() for the contract.
    """
    config = config or AnalysisConfig()

    with timed_phase(timing_log, "equations"):
        equations = detect_equation_patterns(document, config)

    with timed_phase(timing_log, "problems"):
        problems = detect_problem_patterns(document, config, diagnostics)

    with timed_phase(timing_log, "aggregate"):
        suggestions = aggregate_suggestions(equations, problems)

    logger.debug(
        f"Analysis produced {len(suggestions)} suggestion(s) "
        f"({len(equations)} equation, {len(problems)} problem)"
    )
    return suggestions


def analyze(
    html_content: Optional[str],
    *,
    config: Optional[AnalysisConfig] = None,
    timing_log: Optional[TimingLog] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> List[TransformationSuggestion]:
    """
    Analyse HTML lesson content and suggest interactive blocks.

    Pipeline:
    1. Parse the HTML (malformed markup is tolerated, never raises)
    2. Detect equations in p / div / span / li elements
    3. Detect problem statements and their solution steps
    4. Number suggestions and sort by confidence, highest first

    The call is pure: no I/O, no shared state. Calling it twice on the
    same input gives equal results: suggestions compare by their source
    fingerprint, not by parsed node identity.

    Args:
        html_content: Raw HTML.
        config: Analysis configuration (defaults if None).
        timing_log: Optional log to record phase durations in.
        diagnostics: Optional collector for detection issues.

    Returns:
        Suggestions sorted by non-increasing confidence.

    Example:
        >>> [s.confidence for s in analyze("<p>y = x^2 + 2x + 1</p><p>y = 3*x</p>")]
        [0.9, 0.7]
    """
    with timed_phase(timing_log, "parse"):
        document = load_html(html_content)

    if document.is_empty:
        logger.debug("No elements in document; nothing to analyse")
        return []

    return analyze_document(
        document,
        config=config,
        timing_log=timing_log,
        diagnostics=diagnostics,
    )
