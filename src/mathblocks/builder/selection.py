"""
Module: builder.selection

Purpose:
    Tracks which suggestions a user wants applied. Selection is by
    suggestion id, so two suggestions built from identical text stay
    independently selectable.

Key Classes:
    - SuggestionSelection: Immutable set of selected suggestion ids

Dependencies:
    - core.models.suggestions: TransformationSuggestion

Used By:
    - builder.applier: apply_suggestions()
    - cli: --apply
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Sequence

from mathblocks.core.models.suggestions import TransformationSuggestion

DEFAULT_SELECTION_THRESHOLD = 0.7


@dataclass(frozen=True)
class SuggestionSelection:
    """
    Selected suggestion ids.

    Attributes:
        selected_ids: Ids of the selected suggestions.

    Example:
        >>> selection = SuggestionSelection.defaults(suggestions)
        >>> selection = selection.toggle("suggestion-2")
        >>> selection.is_selected(suggestions[0])
        True
    """

    selected_ids: FrozenSet[str] = frozenset()

    @classmethod
    def defaults(
        cls,
        suggestions: Iterable[TransformationSuggestion],
        threshold: float = DEFAULT_SELECTION_THRESHOLD,
    ) -> SuggestionSelection:
        """Select every suggestion whose confidence reaches ``threshold``."""
        return cls(frozenset(s.id for s in suggestions if s.confidence >= threshold))

    @classmethod
    def of(cls, ids: Iterable[str]) -> SuggestionSelection:
        return cls(frozenset(ids))

    def is_selected(self, suggestion: TransformationSuggestion) -> bool:
        return suggestion.id in self.selected_ids

    def toggle(self, suggestion_id: str) -> SuggestionSelection:
        """Return a new selection with ``suggestion_id`` flipped."""
        if suggestion_id in self.selected_ids:
            return SuggestionSelection(self.selected_ids - {suggestion_id})
        return SuggestionSelection(self.selected_ids | {suggestion_id})

    def filter(self, suggestions: Sequence[TransformationSuggestion]) -> list[TransformationSuggestion]:
        """Selected suggestions, in the given order."""
        return [s for s in suggestions if self.is_selected(s)]

    def __len__(self) -> int:
        return len(self.selected_ids)
