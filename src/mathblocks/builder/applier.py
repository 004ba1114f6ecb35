"""
Module: builder.applier

Purpose:
    Applies selected suggestions: each one becomes a BlockInstance of its
    target block type, with registry defaults overlaid by the suggestion's
    parameters.

Key Functions:
    - apply_suggestions(): Selected suggestions -> blocks
    - apply_suggestion(): One suggestion -> block

Dependencies:
    - core.schemas.registry: Defaults and validation
    - builder.selection: SuggestionSelection

Used By:
    - cli: --apply
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, List, Optional, Sequence

from mathblocks.core.models.blocks import BlockInstance
from mathblocks.core.models.suggestions import TransformationSuggestion
from mathblocks.core.schemas.registry import BlockTypeRegistry
from .selection import SuggestionSelection

logger = logging.getLogger(__name__)

BlockIdFactory = Callable[[int], str]


def default_block_id(index: int) -> str:
    """Fresh block id: ``block-<index>-<random hex>``."""
    return f"block-{index}-{uuid.uuid4().hex[:8]}"


def apply_suggestion(
    suggestion: TransformationSuggestion,
    registry: BlockTypeRegistry,
    *,
    block_id: str,
    strict: bool = False,
) -> BlockInstance:
    """
    Build the block for one suggestion.

    Args:
        suggestion: Suggestion to apply.
        registry: Block type registry holding the target type.
        block_id: Id for the new block.
        strict: Also validate against the block type's JSON schema.

    Returns:
        BlockInstance titled with the suggestion description.

    Raises:
        ValidationError: If the target type is unknown or the parameters
            are invalid for it.
    """
    return registry.create_block(
        suggestion.type.block_type,
        suggestion.block_parameters,
        block_id=block_id,
        title=suggestion.description,
        description=f"Transformed from {suggestion.primary_element.tag} element",
        strict=strict,
    )


def apply_suggestions(
    suggestions: Sequence[TransformationSuggestion],
    selection: SuggestionSelection,
    registry: BlockTypeRegistry,
    *,
    id_factory: Optional[BlockIdFactory] = None,
    strict: bool = False,
) -> List[BlockInstance]:
    """
    Build blocks for the selected suggestions.

    Blocks are returned in suggestion order; ``id_factory`` receives the
    0-based position of the block in the result.

    Raises:
        ValidationError: On the first suggestion whose parameters are
            invalid for its block type.
    """
    id_factory = id_factory or default_block_id
    selected = selection.filter(suggestions)
    blocks = [
        apply_suggestion(suggestion, registry, block_id=id_factory(index), strict=strict)
        for index, suggestion in enumerate(selected)
    ]
    logger.info(f"Applied {len(blocks)} of {len(suggestions)} suggestion(s)")
    return blocks
