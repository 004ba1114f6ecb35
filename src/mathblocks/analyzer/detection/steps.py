"""
Module: analyzer.detection.steps

Purpose:
    Solution step discovery for problem statements. Steps are read from a
    solution container near the problem when one exists; otherwise, for
    a linear equation "ax ± b = c", two algebraic steps are synthesized.

Key Functions:
    - discover_steps(): Container lookup, then synthesis
    - find_solution_container(): Locate a container for a problem element
    - extract_container_steps(): One step per li / p / div.step
    - synthesize_linear_steps(): Isolate-then-divide steps for ax ± b = c
    - format_number(): Render computed values without float noise

Dependencies:
    - analyzer.utils.patterns: Step and linear-equation expressions
    - analyzer.expressions: Verifies synthesized solutions

Used By:
    - analyzer.detection.problems: Step discovery per problem
"""

from __future__ import annotations

import logging
from typing import List, Optional

from mathblocks.core.models.steps import ProblemSolverStep
from ..diagnostics import (
    UNPARSEABLE_NUMBER,
    UNVERIFIED_SOLUTION,
    ZERO_COEFFICIENT,
    DiagnosticsCollector,
)
from ..expressions import ExpressionError, solve_check
from ..utils.html import HtmlDocument, SourceElement
from ..utils.patterns import SOLVABLE_LINEAR_PATTERN, STEP_EXPRESSION_PATTERN, STEP_TOKEN_PATTERN

logger = logging.getLogger(__name__)

STEP_SELECTOR = "li, p, div.step"


def format_number(value: float) -> str:
    """
    Render a number the way it would be written in a worked solution.

    Example:
        >>> format_number(4.0), format_number(-2.5), format_number(1 / 3)
        ('4', '-2.5', '0.3333333333')
    """
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.10g}"


def _parse_number(text: str) -> Optional[float]:
    cleaned = text.rstrip(".")
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


# ─────────────────────────────────────────────────────────────────────────────
# Solution Containers
# ─────────────────────────────────────────────────────────────────────────────

def find_following_steps(element: SourceElement) -> Optional[SourceElement]:
    """
    Find a list or div of steps after a problem element.

    Looks for the nearest following ``ol``, then ``ul``; failing that,
    the nearest following ``div`` is accepted only if it holds more than
    one child element.
    """
    ordered = element.find_next_sibling("ol")
    if ordered is not None:
        return ordered

    unordered = element.find_next_sibling("ul")
    if unordered is not None:
        return unordered

    div = element.find_next_sibling("div")
    if div is not None and len(div.children) > 1:
        return div

    return None


def find_solution_container(
    document: HtmlDocument,
    element: SourceElement,
) -> Optional[SourceElement]:
    """
    Locate the solution container for a problem element.

    Priority:
    1. ``.solution`` inside the nearest ``.problem-container`` ancestor
    2. The element with id ``solution-<problem id>``
    3. A following sibling list or div (see find_following_steps)
    """
    problem_container = element.closest(".problem-container")
    if problem_container is not None:
        solution = problem_container.select_one(".solution")
        if solution is not None:
            return solution

    if element.element_id:
        solution = document.find_by_id(f"solution-{element.element_id}")
        if solution is not None:
            return solution

    return find_following_steps(element)


def _step_expression(text: str) -> Optional[str]:
    found = STEP_EXPRESSION_PATTERN.search(text) or STEP_TOKEN_PATTERN.search(text)
    return found.group(0).strip() if found else None


def extract_container_steps(container: SourceElement) -> List[ProblemSolverStep]:
    """
    Turn every ``li``, ``p`` and ``div.step`` inside a container into a step.

    The expression is the first operator-bearing algebraic run in the step
    text, else its first run of letters/digits/operators; the explanation
    is whatever text remains.

    Example:
        For ``<li>Subtract 3 from both sides: 2x = 4</li>`` the step is
        ``Step 1`` / ``2x = 4`` / ``Subtract 3 from both sides:``.
    """
    steps: List[ProblemSolverStep] = []
    for index, step_element in enumerate(container.select(STEP_SELECTOR), start=1):
        label = f"Step {index}"
        text = step_element.text
        expression = _step_expression(text) or label
        explanation = text.replace(expression, "", 1).strip()
        steps.append(
            ProblemSolverStep(
                description=label,
                expression=expression,
                explanation=explanation or None,
            )
        )
    return steps


# ─────────────────────────────────────────────────────────────────────────────
# Step Synthesis
# ─────────────────────────────────────────────────────────────────────────────

def synthesize_linear_steps(
    text: str,
    *,
    element: Optional[SourceElement] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> List[ProblemSolverStep]:
    """
    Derive two algebraic steps for a linear equation ``ax ± b = c``.

    Step 1 isolates the variable term (``ax = c ∓ b``), step 2 divides by
    the coefficient (``x = (c ∓ b) / a``). Computed values are written into
    the step expressions.

    No steps are produced when the text has no such equation, a number
    cannot be parsed, the coefficient is zero, or the computed solution
    does not satisfy the original equation.

    Args:
        text: Problem text.
        element: Source element, for diagnostics only.
        diagnostics: Optional collector for the reasons synthesis gave up.

    Returns:
        Two steps, or an empty list.

    Example:
        >>> [s.expression for s in synthesize_linear_steps("Solve for x: 2x + 3 = 7")]
        ['2x = 4', 'x = 2']
    """
    if "=" not in text:
        return []
    match = SOLVABLE_LINEAR_PATTERN.search(text)
    if match is None:
        return []

    coefficient_text, variable_text, sign, constant_text, rhs_text = match.groups()
    variable = variable_text.lower()
    coefficient = _parse_number(coefficient_text) if coefficient_text else 1.0
    constant = _parse_number(constant_text)
    rhs = _parse_number(rhs_text)

    def _give_up(issue_type: str, message: str) -> List[ProblemSolverStep]:
        if diagnostics is not None:
            diagnostics.add_issue(
                issue_type,
                message,
                element_tag=element.tag if element is not None else "",
                element_text=text,
            )
        return []

    if coefficient is None or constant is None or rhs is None:
        logger.debug(f"Unparseable number in {match.group(0)!r}")
        return _give_up(UNPARSEABLE_NUMBER, f"Unparseable number in {match.group(0)!r}")

    if coefficient == 0:
        logger.warning(f"Zero coefficient in {match.group(0)!r}; no steps synthesized")
        return _give_up(ZERO_COEFFICIENT, f"Zero coefficient in {match.group(0)!r}")

    signed_constant = constant if sign == "+" else -constant
    isolated = rhs - signed_constant
    solution = isolated / coefficient

    try:
        verified = solve_check(match.group(0), variable, solution)
    except ExpressionError as e:
        logger.debug(f"Could not verify {match.group(0)!r}: {e}")
        verified = False
    if not verified:
        return _give_up(UNVERIFIED_SOLUTION, f"{variable} = {format_number(solution)} does not satisfy {match.group(0)!r}")

    coefficient_str = format_number(coefficient)
    constant_str = format_number(constant)
    term = variable if coefficient == 1 else f"{coefficient_str}{variable}"
    if sign == "+":
        move = f"subtracting {constant_str} from both sides"
        undo = f"adding {constant_str}"
    else:
        move = f"adding {constant_str} to both sides"
        undo = f"subtracting {constant_str}"

    return [
        ProblemSolverStep(
            description="Isolate the variable term",
            expression=f"{term} = {format_number(isolated)}",
            explanation=f"Move the constant to the right side by {move}.",
            hint=f"Which operation undoes {undo}?",
        ),
        ProblemSolverStep(
            description="Solve for the variable",
            expression=f"{variable} = {format_number(solution)}",
            explanation=(
                f"Divide both sides by the coefficient {coefficient_str} "
                f"to find the value of {variable}."
            ),
            hint=f"Divide both sides by {coefficient_str}.",
        ),
    ]


def discover_steps(
    document: HtmlDocument,
    element: SourceElement,
    *,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> List[ProblemSolverStep]:
    """
    Find solution steps for a problem element.

    A solution container is tried first; if there is none, or it holds no
    step elements, steps are synthesized from the problem text.

    Returns:
        Steps in order; empty if neither strategy produced any.
    """
    container = find_solution_container(document, element)
    if container is not None:
        steps = extract_container_steps(container)
        if steps:
            return steps
        logger.debug(f"Solution container <{container.tag}> holds no steps")

    return synthesize_linear_steps(element.text, element=element, diagnostics=diagnostics)
