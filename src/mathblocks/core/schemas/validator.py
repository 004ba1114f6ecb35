"""
Schema Validation Utilities

Validates block parameter sets against the JSON schema shipped for each
block type.

Block parameters are checked in two layers:
- Basic checks: required keys and per-parameter validators held by the
  block type registry (see registry.py)
- Strict checks: the full ``<block-type>.schema.json`` document, run
  through jsonschema
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)

# Schema version constant, bumped whenever a parameter schema changes shape
BLOCK_SCHEMA_VERSION = 1

# Load schemas lazily
_SCHEMA_DIR = Path(__file__).parent


class ValidationError(Exception):
    """Raised when block parameters fail validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def load_schema(block_type: str) -> dict[str, Any]:
    """
    Load the parameter schema for a block type.

    Each call reads the file again; callers that validate in a loop
    should hold on to the result.

    Args:
        block_type: Registry key, e.g. "equation-explorer"

    Returns:
        Parsed JSON schema

    Raises:
        FileNotFoundError: If no schema ships for the block type
    """
    schema_path = _SCHEMA_DIR / f"{block_type}.schema.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_block_schema(block_type: str, parameters: dict[str, Any]) -> None:
    """
    Validate a parameter set against its block type's JSON schema.

    Args:
        block_type: Registry key of the target block type
        parameters: Parameter mapping to validate

    Raises:
        ValidationError: If the parameters violate the schema
        FileNotFoundError: If no schema ships for the block type
    """
    schema = load_schema(block_type)
    try:
        jsonschema.validate(parameters, schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path)
        logger.debug(f"Schema validation failed for {block_type} at {path or '<root>'}: {e.message}")
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=path,
            errors=[e.message],
        ) from e
