"""
Module: core.schemas.registry

Purpose:
    Block type registry. Maps block type keys to their definition: display
    name, default parameters, required parameters and per-parameter
    validators. The registry is an ordinary value that is built once and
    handed to whatever needs it; there is no process-wide instance.

Key Functions:
    - default_registry(): Registry with the four built-in block types

Key Classes:
    - BlockTypeDefinition: Immutable definition of one block type
    - BlockTypeRegistry: Read-only mapping of type key -> definition

Dependencies:
    - core.schemas.validator: ValidationError, JSON schema checks
    - core.models.blocks: BlockInstance

Used By:
    - builder.applier: Merges defaults and validates applied suggestions
    - cli: --apply and --strict
"""

from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from ..models.blocks import BlockInstance
from .validator import ValidationError, validate_block_schema

logger = logging.getLogger(__name__)

ParameterValidator = Callable[[Any], bool]


@dataclass(frozen=True)
class BlockTypeDefinition:
    """
    Definition of an interactive block type.

    Attributes:
        type: Registry key, e.g. "problem-solver".
        name: Display name.
        description: One-line description.
        default_parameters: Parameters a fresh block starts with.
        required_parameters: Keys that must be present on every block.
        validators: Per-parameter predicates; keys without one are unchecked.
    """

    type: str
    name: str
    description: str
    default_parameters: Mapping[str, Any] = field(default_factory=dict)
    required_parameters: Tuple[str, ...] = ()
    validators: Mapping[str, ParameterValidator] = field(default_factory=dict)

    def defaults(self) -> Dict[str, Any]:
        """Deep copy of the default parameters, safe for the caller to modify."""
        return copy.deepcopy(dict(self.default_parameters))


class BlockTypeRegistry:
    """
    Read-only registry of block type definitions.

    Example:
        >>> registry = default_registry()
        >>> registry.validate_parameters("problem-solver", {"problem": "x"})
        ['Missing required parameter: steps']
    """

    def __init__(self, definitions: Mapping[str, BlockTypeDefinition] | None = None):
        self._definitions: Mapping[str, BlockTypeDefinition] = MappingProxyType(dict(definitions or {}))

    def __contains__(self, block_type: object) -> bool:
        return block_type in self._definitions

    def __iter__(self) -> Iterator[BlockTypeDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def types(self) -> List[str]:
        """Registered type keys in registration order."""
        return list(self._definitions)

    def has(self, block_type: str) -> bool:
        return block_type in self._definitions

    def get(self, block_type: str) -> Optional[BlockTypeDefinition]:
        return self._definitions.get(block_type)

    def register(self, definition: BlockTypeDefinition) -> BlockTypeRegistry:
        """
        Return a new registry with ``definition`` added (or replaced).

        The receiver is left untouched.
        """
        definitions = dict(self._definitions)
        definitions[definition.type] = definition
        return BlockTypeRegistry(definitions)

    def validate_parameters(
        self,
        block_type: str,
        parameters: Mapping[str, Any],
        *,
        strict: bool = False,
    ) -> List[str]:
        """
        Check a parameter set against a block type.

        Args:
            block_type: Registry key of the target type
            parameters: Parameter mapping to check
            strict: Also validate against the type's JSON schema

        Returns:
            List of error messages; empty when the parameters are valid.
        """
        definition = self.get(block_type)
        if definition is None:
            return [f'Block type "{block_type}" not found in registry.']

        errors = [
            f"Missing required parameter: {name}"
            for name in definition.required_parameters
            if name not in parameters
        ]
        for key, value in parameters.items():
            validator = definition.validators.get(key)
            if validator is not None and not validator(value):
                errors.append(f"Invalid value for parameter: {key}")

        if strict and not errors:
            try:
                validate_block_schema(block_type, dict(parameters))
            except ValidationError as e:
                errors.extend(e.errors or [str(e)])
        return errors

    def create_block(
        self,
        block_type: str,
        parameters: Mapping[str, Any] | None = None,
        *,
        block_id: Optional[str] = None,
        title: Optional[str] = None,
        description: str = "",
        strict: bool = False,
    ) -> BlockInstance:
        """
        Create a block of a registered type.

        Default parameters are overlaid with ``parameters``; the result is
        validated before the block is returned.

        Raises:
            ValidationError: If the type is unknown or the merged
                parameters are invalid.
        """
        definition = self.get(block_type)
        if definition is None:
            raise ValidationError(f'Block type "{block_type}" not found in registry.', path="type")

        merged = definition.defaults()
        merged.update(copy.deepcopy(dict(parameters or {})))

        errors = self.validate_parameters(block_type, merged, strict=strict)
        if errors:
            raise ValidationError(
                f"Invalid parameters for {block_type}: {errors}",
                path="parameters",
                errors=errors,
            )

        return BlockInstance(
            id=block_id or _generate_block_id(),
            type=block_type,
            parameters=merged,
            title=title or definition.name,
            description=description,
        )


def _generate_block_id() -> str:
    return f"block-{uuid.uuid4().hex[:12]}"


# ─────────────────────────────────────────────────────────────────────────────
# Validators
# ─────────────────────────────────────────────────────────────────────────────

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _one_of(*options: str) -> ParameterValidator:
    return lambda value: isinstance(value, str) and value in options


def _number_pair(value: Any, ordered: bool = False) -> bool:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return False
    if not all(_is_number(v) for v in value):
        return False
    return value[0] < value[1] if ordered else True


def _ordered_pair(value: Any) -> bool:
    return _number_pair(value, ordered=True)


def _string_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0 and all(isinstance(v, str) for v in value)


def _range_map(value: Any) -> bool:
    return isinstance(value, dict) and all(_ordered_pair(r) for r in value.values())


def _number_map(value: Any) -> bool:
    return isinstance(value, dict) and all(_is_number(v) for v in value.values())


def _steps(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(
            isinstance(step, dict)
            and isinstance(step.get("description"), str)
            and isinstance(step.get("expression"), str)
            for step in value
        )
    )


def _transformations(value: Any) -> bool:
    return isinstance(value, list) and all(
        isinstance(t, dict)
        and isinstance(t.get("type"), str)
        and isinstance(t.get("axis"), str)
        and _is_number(t.get("value"))
        for t in value
    )


def _data_rows(value: Any) -> bool:
    # Rows are either all objects or all arrays
    if not isinstance(value, list):
        return False
    if not value:
        return True
    if isinstance(value[0], dict):
        return all(isinstance(row, dict) for row in value)
    if isinstance(value[0], list):
        return all(isinstance(row, list) for row in value)
    return False


# ─────────────────────────────────────────────────────────────────────────────
# Built-in Block Types
# ─────────────────────────────────────────────────────────────────────────────

EQUATION_EXPLORER = BlockTypeDefinition(
    type="equation-explorer",
    name="Equation Explorer",
    description="Interactive tool for exploring mathematical equations by manipulating variables and observing changes",
    default_parameters={
        "equation": "y = x",
        "variables": ["a"],
        "range": {"a": [-5, 5]},
        "initialValues": {"a": 1},
        "step": 0.1,
        "showGraph": True,
        "showFormula": True,
        "showTable": False,
        "graphDomain": [-10, 10],
        "graphRange": [-10, 10],
        "gridLines": True,
        "animationSpeed": "medium",
    },
    required_parameters=("equation", "variables", "range", "initialValues"),
    validators={
        "equation": _non_empty_string,
        "variables": _string_list,
        "range": _range_map,
        "initialValues": _number_map,
        "step": lambda value: _is_number(value) and value > 0,
        "showGraph": _is_bool,
        "showFormula": _is_bool,
        "showTable": _is_bool,
        "graphDomain": _ordered_pair,
        "graphRange": _ordered_pair,
        "gridLines": _is_bool,
        "animationSpeed": _one_of("slow", "medium", "fast"),
    },
)

PROBLEM_SOLVER = BlockTypeDefinition(
    type="problem-solver",
    name="Problem Solver",
    description="Interactive tool for stepping through mathematical problem solutions with guidance",
    default_parameters={
        "problem": "Solve for x: 2x + 3 = 7",
        "steps": [
            {
                "description": "Subtract 3 from both sides",
                "expression": "2x = 4",
                "explanation": "To isolate the term with the variable, we subtract 3 from both sides of the equation.",
            },
            {
                "description": "Divide both sides by 2",
                "expression": "x = 2",
                "explanation": "To solve for x, we divide both sides by the coefficient of x, which is 2.",
            },
        ],
        "showHints": True,
        "progressiveReveal": True,
        "requireUserInput": False,
        "feedbackLevel": "detailed",
        "interactiveMode": "guided",
        "solutionVisible": "after-attempt",
    },
    required_parameters=("problem", "steps"),
    validators={
        "problem": _non_empty_string,
        "steps": _steps,
        "showHints": _is_bool,
        "progressiveReveal": _is_bool,
        "requireUserInput": _is_bool,
        "feedbackLevel": _one_of("minimal", "moderate", "detailed"),
        "interactiveMode": _one_of("guided", "practice", "assessment"),
        "solutionVisible": _one_of("always", "after-attempt", "never"),
    },
)

CONCEPT_VISUALIZER = BlockTypeDefinition(
    type="concept-visualizer",
    name="Concept Visualizer",
    description="Visual exploration of mathematical concepts through interactive transformations",
    default_parameters={
        "conceptType": "function-transformation",
        "baseFunction": "y = x^2",
        "transformations": [
            {"type": "translation", "axis": "x", "value": 0},
            {"type": "translation", "axis": "y", "value": 0},
            {"type": "scale", "axis": "x", "value": 1},
            {"type": "scale", "axis": "y", "value": 1},
        ],
        "domain": [-10, 10],
        "range": [-10, 10],
        "showGrid": True,
        "showAxis": True,
        "showLabels": True,
        "interactive": True,
        "animationSpeed": 1,
        "description": "Explore how transformations affect the graph of a function",
    },
    required_parameters=("conceptType", "baseFunction"),
    validators={
        "conceptType": _one_of(
            "function-transformation",
            "vector-operation",
            "geometric-transformation",
            "trigonometric-circle",
            "coordinate-system",
            "slope-intercept",
        ),
        "baseFunction": _non_empty_string,
        "transformations": _transformations,
        "domain": _number_pair,
        "range": _number_pair,
        "showGrid": _is_bool,
        "showAxis": _is_bool,
        "showLabels": _is_bool,
        "interactive": _is_bool,
    },
)

DATA_EXPLORER = BlockTypeDefinition(
    type="data-explorer",
    name="Data Explorer",
    description="Statistical data visualization and analysis",
    default_parameters={
        "dataSource": "inline",
        "data": [
            {"x": 1, "y": 2},
            {"x": 2, "y": 4},
            {"x": 3, "y": 9},
            {"x": 4, "y": 16},
            {"x": 5, "y": 25},
        ],
        "chartType": "scatter",
        "xAxisLabel": "X Axis",
        "yAxisLabel": "Y Axis",
        "title": "Data Visualization",
        "showLegend": True,
        "showGridLines": True,
        "enableZoom": True,
        "enablePan": True,
        "enableTooltips": True,
        "enableDataLabels": False,
        "colorScheme": "default",
        "trendLine": "none",
        "dataColumns": ["x", "y"],
        "sortData": False,
        "calculatedFields": [],
    },
    required_parameters=("data", "chartType"),
    validators={
        "dataSource": _one_of("inline", "url", "csv", "json"),
        "data": _data_rows,
        "chartType": _one_of("line", "bar", "scatter", "pie", "histogram", "box", "heatmap"),
        "xAxisLabel": lambda value: isinstance(value, str),
        "yAxisLabel": lambda value: isinstance(value, str),
        "title": lambda value: isinstance(value, str),
        "showLegend": _is_bool,
        "showGridLines": _is_bool,
        "enableZoom": _is_bool,
        "enablePan": _is_bool,
        "enableTooltips": _is_bool,
        "enableDataLabels": _is_bool,
        "colorScheme": _one_of("default", "blues", "greens", "oranges", "purples", "rainbow", "grayscale"),
        "trendLine": _one_of("none", "linear", "exponential", "logarithmic", "polynomial"),
    },
)


def default_registry() -> BlockTypeRegistry:
    """Build a fresh registry holding the four built-in block types."""
    return BlockTypeRegistry({
        definition.type: definition
        for definition in (EQUATION_EXPLORER, PROBLEM_SOLVER, CONCEPT_VISUALIZER, DATA_EXPLORER)
    })
