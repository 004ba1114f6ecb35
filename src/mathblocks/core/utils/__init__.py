"""
Utils Package

Serialization functions.
"""

from .serialization import (
    serialize_suggestion,
    serialize_suggestions,
    serialize_block,
    suggestions_to_json,
    blocks_to_json,
    save_suggestions_json,
)

__all__ = [
    "serialize_suggestion",
    "serialize_suggestions",
    "serialize_block",
    "suggestions_to_json",
    "blocks_to_json",
    "save_suggestions_json",
]
