"""
Module: steps

Purpose:
    Provides the ProblemSolverStep dataclass - one worked step of a
    problem-solver block. Steps are either read from a solution container
    in the source document or synthesized from a linear equation.

Key Classes:
    - ProblemSolverStep: Immutable step with label, expression and notes

Dependencies:
    - dataclasses (std)

Used By:
    - analyzer.detection.steps: Builds steps
    - analyzer.detection.problems: Packs steps into block parameters
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class ProblemSolverStep:
    """
    A single step in a worked solution.

    Attributes:
        description: Step label, e.g. "Step 1" or "Isolate the variable term".
        expression: Algebraic or display content of the step, e.g. "2x = 4".
        explanation: Optional prose explaining the step.
        hint: Optional hint shown before the step is revealed.

    Invariants:
        - description and expression are non-empty

    Example:
        >>> step = ProblemSolverStep("Step 1", "2x = 4", "Subtract 3")
        >>> step.to_dict()
        {'description': 'Step 1', 'expression': '2x = 4', 'explanation': 'Subtract 3'}
    """

    description: str
    expression: str
    explanation: Optional[str] = None
    hint: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate step on construction."""
        if not self.description:
            raise ValueError("Step description cannot be empty")
        if not self.expression:
            raise ValueError("Step expression cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the problem-solver parameter shape, omitting absent fields."""
        d: dict[str, Any] = {
            "description": self.description,
            "expression": self.expression,
        }
        if self.explanation:
            d["explanation"] = self.explanation
        if self.hint:
            d["hint"] = self.hint
        return d
