"""
MathBlocks Core Package

Shared data models, the block type registry and serialization helpers.
These models are the single source of truth for the analyzer and the
builder.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; the pipeline uses ``dataclasses.replace`` to
     number suggestions instead of mutating them

2. **Explicit Registry**
   - Block types live in a ``BlockTypeRegistry`` value passed to callers,
     never in module-level mutable state

3. **Stable Suggestion Identity**
   - Each suggestion gets a synthetic id when the pipeline numbers it;
     identity is never rebuilt from type + source text
"""

from .models import BlockInstance, ProblemSolverStep, SuggestionType, TransformationSuggestion
from .schemas import BlockTypeDefinition, BlockTypeRegistry, ValidationError, default_registry

__all__ = [
    "BlockInstance",
    "ProblemSolverStep",
    "SuggestionType",
    "TransformationSuggestion",
    "BlockTypeDefinition",
    "BlockTypeRegistry",
    "ValidationError",
    "default_registry",
]
