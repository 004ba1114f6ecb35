"""
Unit Tests for BlockTypeRegistry

Tests for block type lookup, parameter validation and block creation.
"""

import pytest

from mathblocks.core.schemas.registry import (
    BlockTypeDefinition,
    BlockTypeRegistry,
    EQUATION_EXPLORER,
    default_registry,
)
from mathblocks.core.schemas.validator import ValidationError


@pytest.fixture
def registry() -> BlockTypeRegistry:
    return default_registry()


def equation_params(**overrides):
    params = {
        "equation": "y = 2x + 1",
        "variables": ["x"],
        "range": {"x": [-10, 10]},
        "initialValues": {"x": 0},
    }
    params.update(overrides)
    return params


class TestRegistryLookup:
    """Tests for registry membership and lookup."""

    def test_types_when_default_registry_then_four_builtin_types(self, registry):
        assert registry.types() == [
            "equation-explorer",
            "problem-solver",
            "concept-visualizer",
            "data-explorer",
        ]
        assert len(registry) == 4

    def test_get_when_unknown_type_then_returns_none(self, registry):
        assert registry.get("graph-plotter") is None
        assert "graph-plotter" not in registry

    def test_default_registry_when_called_twice_then_independent_instances(self):
        assert default_registry() is not default_registry()

    def test_defaults_when_modified_then_definition_unchanged(self):
        defaults = EQUATION_EXPLORER.defaults()
        defaults["variables"].append("b")
        assert EQUATION_EXPLORER.default_parameters["variables"] == ["a"]

    def test_register_when_new_type_then_original_untouched(self, registry):
        custom = BlockTypeDefinition(
            type="number-line",
            name="Number Line",
            description="Drag a point along a number line",
            default_parameters={"min": -5, "max": 5},
        )
        extended = registry.register(custom)
        assert extended.has("number-line")
        assert not registry.has("number-line")


class TestValidateParameters:
    """Tests for BlockTypeRegistry.validate_parameters()."""

    def test_validate_when_valid_equation_params_then_no_errors(self, registry):
        assert registry.validate_parameters("equation-explorer", equation_params()) == []

    def test_validate_when_unknown_type_then_single_error(self, registry):
        errors = registry.validate_parameters("graph-plotter", {})
        assert errors == ['Block type "graph-plotter" not found in registry.']

    def test_validate_when_required_missing_then_reports_each(self, registry):
        errors = registry.validate_parameters("problem-solver", {"problem": "Solve x + 1 = 2"})
        assert errors == ["Missing required parameter: steps"]

    def test_validate_when_bad_enum_then_invalid_value(self, registry):
        errors = registry.validate_parameters(
            "data-explorer", {"data": [], "chartType": "donut"}
        )
        assert errors == ["Invalid value for parameter: chartType"]

    def test_validate_when_range_reversed_then_invalid_value(self, registry):
        errors = registry.validate_parameters(
            "equation-explorer", equation_params(range={"x": [10, -10]})
        )
        assert errors == ["Invalid value for parameter: range"]

    def test_validate_when_strict_then_schema_errors_included(self, registry):
        """Step explanations must be strings under the JSON schema."""
        params = {
            "problem": "Solve x + 1 = 2",
            "steps": [{"description": "Step 1", "expression": "x = 1", "explanation": 5}],
        }
        assert registry.validate_parameters("problem-solver", params) == []
        errors = registry.validate_parameters("problem-solver", params, strict=True)
        assert len(errors) == 1
        assert "5" in errors[0]


class TestCreateBlock:
    """Tests for BlockTypeRegistry.create_block()."""

    def test_create_when_overrides_given_then_merged_over_defaults(self, registry):
        block = registry.create_block("equation-explorer", equation_params(), block_id="block-1")
        assert block.id == "block-1"
        assert block.type == "equation-explorer"
        assert block.parameters["equation"] == "y = 2x + 1"
        assert block.parameters["step"] == 0.1
        assert block.parameters["animationSpeed"] == "medium"

    def test_create_when_no_title_then_uses_type_name(self, registry):
        block = registry.create_block("concept-visualizer")
        assert block.title == "Concept Visualizer"
        assert block.id.startswith("block-")

    def test_create_when_overrides_mutated_later_then_block_unaffected(self, registry):
        params = equation_params()
        block = registry.create_block("equation-explorer", params)
        params["variables"].append("z")
        assert block.parameters["variables"] == ["x"]

    def test_create_when_unknown_type_then_raises_validation_error(self, registry):
        with pytest.raises(ValidationError, match="not found in registry") as exc:
            registry.create_block("graph-plotter")
        assert exc.value.path == "type"

    def test_create_when_invalid_params_then_raises_with_errors(self, registry):
        with pytest.raises(ValidationError) as exc:
            registry.create_block("concept-visualizer", {"conceptType": "bogus"})
        assert exc.value.errors == ["Invalid value for parameter: conceptType"]

    @pytest.mark.parametrize("block_type", [
        "equation-explorer", "problem-solver", "concept-visualizer", "data-explorer",
    ])
    def test_create_when_defaults_only_and_strict_then_valid(self, registry, block_type):
        """Built-in defaults satisfy their own schemas."""
        block = registry.create_block(block_type, strict=True)
        assert block.type == block_type
