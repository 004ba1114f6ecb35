"""
Module: analyzer.detection.problems

Purpose:
    Problem / solution detection - identifies problem statements
    ("Solve for x: ...", "Find the value of y ...") and pairs them with
    worked solution steps. Each problem with at least one step becomes a
    problem-solver suggestion.

Key Functions:
    - detect_problem_patterns(): Scan a document for problems
    - collect_problem_candidates(): Build the de-duplicated candidate pool
    - match_problem(): Test text against the problem cues

Dependencies:
    - analyzer.utils.patterns: Problem cue expressions
    - analyzer.detection.steps: Step discovery

Used By:
    - analyzer.pipeline: Problem phase
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from mathblocks.core.models.steps import ProblemSolverStep
from mathblocks.core.models.suggestions import SuggestionType, TransformationSuggestion
from ..config import AnalysisConfig
from ..diagnostics import NO_STEPS, DiagnosticsCollector
from ..utils.html import HtmlDocument, SourceElement
from ..utils.patterns import PROBLEM_CUE_PATTERNS
from .steps import discover_steps

logger = logging.getLogger(__name__)

PROBLEM_CONFIDENCE = 0.8
PROBLEM_DESCRIPTION = "Interactive Problem Solver"


def collect_problem_candidates(document: HtmlDocument) -> List[SourceElement]:
    """
    Gather elements that may hold a problem statement.

    Pools, in order:
    1. Paragraphs directly after an h2 / h3 / h4
    2. Elements with class ``problem``
    3. Elements with ``data-type="problem"``
    4. Paragraphs containing bold or strong text
    5. Divs whose first child element is a paragraph

    An element found by several pools is kept once, at its first position.
    """
    pools = (
        document.select("h2 + p"),
        document.select("h3 + p"),
        document.select("h4 + p"),
        document.find_by_class("problem"),
        document.find_by_attribute("data-type", "problem"),
        document.select("p:has(strong, b)"),
        document.select("div:has(> p:first-child)"),
    )

    seen = set()
    candidates: List[SourceElement] = []
    for pool in pools:
        for element in pool:
            if element in seen:
                continue
            seen.add(element)
            candidates.append(element)
    return candidates


def match_problem(text: str) -> Optional[re.Match]:
    """
    Return the first problem cue found in ``text``, or None.

    Example:
        >>> match_problem("Find the value of y when x = 3").group(1)
        'y'
    """
    for pattern in PROBLEM_CUE_PATTERNS:
        found = pattern.search(text)
        if found is not None:
            return found
    return None


def problem_parameters(problem: str, steps: Sequence[ProblemSolverStep]) -> Dict[str, Any]:
    """Build a complete problem-solver parameter set."""
    return {
        "problem": problem,
        "steps": [step.to_dict() for step in steps],
        "showHints": True,
        "progressiveReveal": True,
        "requireUserInput": False,
        "feedbackLevel": "detailed",
        "solutionVisible": "after-attempt",
    }


def detect_problem_patterns(
    document: HtmlDocument,
    config: Optional[AnalysisConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> List[TransformationSuggestion]:
    """
    Detect problem statements with solution steps.

    A candidate becomes a suggestion only if its text matches a problem
    cue and step discovery yields at least one step.

    Args:
        document: Parsed HTML document.
        config: Analysis configuration (defaults if None).
        diagnostics: Optional collector for problems left without steps.

    Returns:
        Suggestions in candidate order (unsorted, un-numbered).
    """
    config = config or AnalysisConfig()
    candidates = collect_problem_candidates(document)
    suggestions: List[TransformationSuggestion] = []

    for element in candidates:
        text = element.text
        if len(text) < config.min_problem_text_length:
            continue
        if match_problem(text) is None:
            continue

        steps = discover_steps(document, element, diagnostics=diagnostics)
        if not steps:
            logger.debug(f"Problem without steps skipped: {text[:60]!r}")
            if diagnostics is not None:
                diagnostics.add_issue(
                    NO_STEPS,
                    "Problem statement recognised but no solution steps found",
                    element_tag=element.tag,
                    element_text=text,
                )
            continue

        suggestions.append(
            TransformationSuggestion(
                type=SuggestionType.PROBLEM_SOLVER,
                source_elements=(element,),
                description=PROBLEM_DESCRIPTION,
                confidence=PROBLEM_CONFIDENCE,
                block_parameters=problem_parameters(text, steps),
            )
        )

    logger.debug(f"Problem detection: {len(suggestions)} suggestion(s) from {len(candidates)} candidate(s)")
    return suggestions
