"""
Schemas Package

Block type registry and JSON schema validation for block parameters.
"""

from .validator import (
    validate_block_schema,
    load_schema,
    ValidationError,
    BLOCK_SCHEMA_VERSION,
)
from .registry import (
    BlockTypeDefinition,
    BlockTypeRegistry,
    default_registry,
)

__all__ = [
    "validate_block_schema",
    "load_schema",
    "ValidationError",
    "BLOCK_SCHEMA_VERSION",
    "BlockTypeDefinition",
    "BlockTypeRegistry",
    "default_registry",
]
