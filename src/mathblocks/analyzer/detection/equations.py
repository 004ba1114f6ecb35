"""
Module: analyzer.detection.equations

Purpose:
    Equation pattern detection - finds elements whose text contains a
    single-variable equation and classifies it as linear, quadratic or
    general. Each match becomes an equation-explorer suggestion.

Key Functions:
    - detect_equation_patterns(): Scan a document for equations
    - match_equation(): Classify one piece of text

Key Classes:
    - EquationRule: One (pattern, extractor) entry of the rule list
    - EquationMatch: Result of matching text against the rules

Dependencies:
    - analyzer.utils.patterns: Equation regular expressions

Used By:
    - analyzer.pipeline: Equation phase
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from re import Pattern
from typing import Any, Callable, Dict, List, Optional

from mathblocks.core.models.suggestions import SuggestionType, TransformationSuggestion
from ..config import AnalysisConfig
from ..utils.html import HtmlDocument
from ..utils.patterns import (
    ASSIGNED_VARIABLE_PATTERN,
    GENERAL_EQUATION_PATTERN,
    LEADING_TERM_PATTERN,
    LETTER_PATTERN,
    LINEAR_EQUATION_PATTERN,
    QUADRATIC_EQUATION_PATTERN,
    SQUARED_TERM_PATTERN,
)

logger = logging.getLogger(__name__)

EQUATION_CANDIDATE_TAGS = ("p", "div", "span", "li")
DEFAULT_VARIABLE = "x"

LINEAR_CONFIDENCE = 0.85
QUADRATIC_CONFIDENCE = 0.9
GENERAL_CONFIDENCE = 0.7


@dataclass(frozen=True)
class EquationRule:
    """
    One equation shape.

    Attributes:
        kind: "linear", "quadratic" or "general".
        pattern: Regex locating the equation inside element text.
        confidence: Fixed score for suggestions from this rule.
        description: Label for the resulting suggestion.
        extract_variable: Returns the variable letter of a matched snippet,
            or None if it cannot tell.
    """
    kind: str
    pattern: Pattern[str]
    confidence: float
    description: str
    extract_variable: Callable[[str], Optional[str]]


@dataclass(frozen=True)
class EquationMatch:
    """An equation found in text: the rule that matched, the snippet and its variable."""
    rule: EquationRule
    equation: str
    variable: str


def _linear_variable(snippet: str) -> Optional[str]:
    # Prefer the assigned variable ("y = ..."), else the leading term ("2x + 3 = 7")
    match = ASSIGNED_VARIABLE_PATTERN.search(snippet) or LEADING_TERM_PATTERN.search(snippet)
    if match is None:
        return None
    letter = LETTER_PATTERN.search(match.group(1))
    return letter.group(0).lower() if letter else None


def _quadratic_variable(snippet: str) -> Optional[str]:
    match = ASSIGNED_VARIABLE_PATTERN.search(snippet) or SQUARED_TERM_PATTERN.search(snippet)
    return match.group(1).lower() if match else None


def _assigned_variable(snippet: str) -> Optional[str]:
    match = ASSIGNED_VARIABLE_PATTERN.search(snippet)
    return match.group(1).lower() if match else None


# Most specific shapes first; the first rule that matches wins
EQUATION_RULES = (
    EquationRule(
        kind="linear",
        pattern=LINEAR_EQUATION_PATTERN,
        confidence=LINEAR_CONFIDENCE,
        description="Interactive Linear Equation Explorer",
        extract_variable=_linear_variable,
    ),
    EquationRule(
        kind="quadratic",
        pattern=QUADRATIC_EQUATION_PATTERN,
        confidence=QUADRATIC_CONFIDENCE,
        description="Interactive Quadratic Function Explorer",
        extract_variable=_quadratic_variable,
    ),
    EquationRule(
        kind="general",
        pattern=GENERAL_EQUATION_PATTERN,
        confidence=GENERAL_CONFIDENCE,
        description="Interactive Function Explorer",
        extract_variable=_assigned_variable,
    ),
)


def match_equation(text: str) -> Optional[EquationMatch]:
    """
    Classify the first equation shape found in ``text``.

    Args:
        text: Flattened element text.

    Returns:
        EquationMatch for the highest-priority rule that matches, or None.

    Example:
        >>> m = match_equation("The line y = 2x + 1 crosses the axis")
        >>> m.rule.kind, m.equation, m.variable
        ('linear', 'y = 2x + 1', 'y')
    """
    for rule in EQUATION_RULES:
        found = rule.pattern.search(text)
        if found is None:
            continue
        snippet = found.group(0).strip()
        variable = rule.extract_variable(snippet) or DEFAULT_VARIABLE
        return EquationMatch(rule=rule, equation=snippet, variable=variable)
    return None


def equation_parameters(equation: str, variable: str, config: AnalysisConfig) -> Dict[str, Any]:
    """Build a complete equation-explorer parameter set."""
    low, high = config.variable_range
    return {
        "equation": equation,
        "variables": [variable],
        "range": {variable: [low, high]},
        "initialValues": {variable: config.initial_value},
        "showGraph": True,
        "showFormula": True,
    }


def detect_equation_patterns(
    document: HtmlDocument,
    config: Optional[AnalysisConfig] = None,
) -> List[TransformationSuggestion]:
    """
    Detect equations in paragraph, div, span and list-item elements.

    Candidates are grouped by tag (all p, then div, span, li), each group
    in document order. Nested candidates are considered independently.
    At most one suggestion is produced per element.

    Args:
        document: Parsed HTML document.
        config: Analysis configuration (defaults if None).

    Returns:
        Suggestions in candidate order (unsorted, un-numbered).
    """
    config = config or AnalysisConfig()
    candidates = document.select_tags(*EQUATION_CANDIDATE_TAGS)
    suggestions: List[TransformationSuggestion] = []

    for element in candidates:
        text = element.text
        if len(text) < config.min_equation_text_length:
            continue

        match = match_equation(text)
        if match is None:
            continue

        suggestions.append(
            TransformationSuggestion(
                type=SuggestionType.EQUATION_EXPLORER,
                source_elements=(element,),
                description=match.rule.description,
                confidence=match.rule.confidence,
                block_parameters=equation_parameters(match.equation, match.variable, config),
            )
        )

    logger.debug(f"Equation detection: {len(suggestions)} suggestion(s) from {len(candidates)} candidate(s)")
    return suggestions
