"""
Module: builder

Purpose:
    Turns analysis output into blocks: default selection of suggestions
    by confidence, toggling, and conversion into BlockInstance records
    using an explicitly passed block type registry.
"""

from .applier import apply_suggestion, apply_suggestions, default_block_id
from .selection import DEFAULT_SELECTION_THRESHOLD, SuggestionSelection

__all__ = [
    "apply_suggestion",
    "apply_suggestions",
    "default_block_id",
    "DEFAULT_SELECTION_THRESHOLD",
    "SuggestionSelection",
]
