"""
Serialization Utilities

Converts suggestions and blocks to JSON-compatible dictionaries.

Output uses the camelCase keys consumed by the block renderers and the
selection UI (``blockParameters``, ``sourceElements``). Source elements
are reduced to ``{"tag", "text"}`` records since parsed nodes are not
serializable. There is no deserializer for suggestions: they are
always rebuilt by analysing the HTML again.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Iterable

from ..models.blocks import BlockInstance
from ..models.suggestions import TransformationSuggestion
from ..schemas.validator import BLOCK_SCHEMA_VERSION


# ─────────────────────────────────────────────────────────────────────────────
# Suggestion Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_suggestion(suggestion: TransformationSuggestion) -> dict[str, Any]:
    """
    Serialize a TransformationSuggestion to a dictionary.

    Args:
        suggestion: Suggestion to serialize

    Returns:
        Dictionary suitable for JSON serialization. ``blockParameters`` is
        a deep copy, so callers may modify it freely.
    """
    return {
        "id": suggestion.id,
        "type": suggestion.type.value,
        "description": suggestion.description,
        "confidence": suggestion.confidence,
        "blockParameters": copy.deepcopy(suggestion.block_parameters),
        "sourceElements": [
            {"tag": element.tag, "text": element.text}
            for element in suggestion.source_elements
        ],
    }


def serialize_suggestions(suggestions: Iterable[TransformationSuggestion]) -> list[dict[str, Any]]:
    """Serialize suggestions, preserving order."""
    return [serialize_suggestion(s) for s in suggestions]


def serialize_block(block: BlockInstance) -> dict[str, Any]:
    """Serialize a BlockInstance to a dictionary."""
    return copy.deepcopy(block.to_dict())


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def suggestions_to_json(suggestions: Iterable[TransformationSuggestion], *, indent: int | None = 2) -> str:
    """
    Render suggestions as a JSON document.

    The document carries ``schema_version`` so stored reports can be
    matched to the parameter schemas that produced them.
    """
    payload = {
        "schema_version": BLOCK_SCHEMA_VERSION,
        "suggestions": serialize_suggestions(suggestions),
    }
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def blocks_to_json(blocks: Iterable[BlockInstance], *, indent: int | None = 2) -> str:
    """Render blocks as a JSON document."""
    payload = {
        "schema_version": BLOCK_SCHEMA_VERSION,
        "blocks": [serialize_block(b) for b in blocks],
    }
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def save_suggestions_json(suggestions: Iterable[TransformationSuggestion], path: Path) -> None:
    """
    Write suggestions to a JSON file.

    Args:
        suggestions: Suggestions to write
        path: Output file (parent directories are created)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(suggestions_to_json(suggestions), encoding="utf-8")
