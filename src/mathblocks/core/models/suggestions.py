"""
Module: suggestions

Purpose:
    Provides the TransformationSuggestion dataclass - the output record
    of content analysis. A suggestion proposes turning one or more source
    elements into an interactive block, with a fixed rule confidence and
    a complete parameter set for the target block type.

Key Classes:
    - SuggestionType: Enumeration of suggestion kinds
    - TransformationSuggestion: Immutable suggestion record

Dependencies:
    - dataclasses (std)
    - enum (std)
    - analyzer.utils.html.SourceElement (TYPE_CHECKING only)

Used By:
    - analyzer.detection: Detectors create suggestions
    - analyzer.pipeline: Aggregates, numbers and sorts suggestions
    - builder: Selection and application
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Tuple

if TYPE_CHECKING:
    from mathblocks.analyzer.utils.html import SourceElement


class SuggestionType(str, Enum):
    """
    Kinds of transformation a suggestion can propose.

    The value is the label carried on the suggestion itself;
    ``block_type`` is the registry key of the block it maps onto.
    Only EQUATION_EXPLORER and PROBLEM_SOLVER are produced by the
    current detectors.
    """

    EQUATION_EXPLORER = "equationExplorer"
    PROBLEM_SOLVER = "problem-solver"
    CONCEPT_VISUALIZER = "concept-visualizer"
    DATA_EXPLORER = "data-explorer"

    @property
    def block_type(self) -> str:
        """Registry key for the block type this suggestion targets."""
        if self is SuggestionType.EQUATION_EXPLORER:
            return "equation-explorer"
        return self.value


@dataclass(frozen=True)
class TransformationSuggestion:
    """
    Proposed mapping from static content to an interactive block.

    Attributes:
        type: Kind of block suggested.
        source_elements: Elements that justified the suggestion (at least one).
        description: Human-readable label, e.g. "Interactive Problem Solver".
        confidence: Fixed rule score in [0, 1], used for ranking only.
        block_parameters: Complete parameter set for the target block type.
        id: Stable synthetic id assigned by the pipeline ("" until numbered).
        source_fingerprint: ``(tag, text)`` per source element, derived on
            construction. Equality uses it instead of the elements themselves,
            so suggestions from two parses of the same HTML compare equal.

    Invariants:
        - 0 <= confidence <= 1
        - len(source_elements) >= 1
        - problem-solver suggestions carry at least one step

    Example:
        >>> s = TransformationSuggestion(
        ...     SuggestionType.EQUATION_EXPLORER, (elem,), "Explorer", 0.85, {...})
        >>> s.source_text
        'y = 2x + 1'
    """

    type: SuggestionType
    source_elements: Tuple[SourceElement, ...] = field(compare=False)
    description: str
    confidence: float
    block_parameters: dict[str, Any] = field(default_factory=dict)
    id: str = ""
    source_fingerprint: Tuple[Tuple[str, str], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate suggestion on construction."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within [0, 1]: {self.confidence}")
        if not self.source_elements:
            raise ValueError("Suggestion needs at least one source element")
        if self.type is SuggestionType.PROBLEM_SOLVER and not self.block_parameters.get("steps"):
            raise ValueError("Problem-solver suggestion needs at least one step")
        object.__setattr__(
            self,
            "source_fingerprint",
            tuple((element.tag, element.text) for element in self.source_elements),
        )

    @property
    def primary_element(self) -> SourceElement:
        """First source element (the one shown to the user)."""
        return self.source_elements[0]

    @property
    def source_text(self) -> str:
        """Trimmed text of the primary source element."""
        return self.primary_element.text

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"TransformationSuggestion({self.id or '?'}, {self.type.value!r}, "
            f"{self.confidence}, {self.source_text[:40]!r})"
        )
