"""
Module: blocks

Purpose:
    Provides the BlockInstance dataclass - a block configuration produced
    by applying a selected suggestion. This is the hand-off record for the
    downstream block renderers.

Key Classes:
    - BlockInstance: Immutable block configuration

Dependencies:
    - dataclasses (std)

Used By:
    - core.schemas.registry: create_block()
    - builder.applier: apply_suggestions()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BlockInstance:
    """
    A constructed interactive block.

    Attributes:
        id: Freshly generated block id.
        type: Block type registry key, e.g. "equation-explorer".
        parameters: Full parameter set (type defaults overlaid with overrides).
        title: Display title.
        description: Short provenance note, e.g. "Transformed from p element".
    """

    id: str
    type: str
    parameters: dict[str, Any] = field(default_factory=dict)
    title: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "parameters": self.parameters,
            "title": self.title,
            "description": self.description,
        }
