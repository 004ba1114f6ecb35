"""
Core Models Package

Immutable data models shared by the analyzer and the builder.

All models in this package are frozen dataclasses. Suggestions are
constructed once by a detector, numbered by the pipeline and then only
read by callers.
"""

from .steps import ProblemSolverStep
from .suggestions import SuggestionType, TransformationSuggestion
from .blocks import BlockInstance

__all__ = [
    "ProblemSolverStep",
    "SuggestionType",
    "TransformationSuggestion",
    "BlockInstance",
]
