"""
Module: analyzer.detection

Purpose:
    Detection subpackage for identifying mathematical content in parsed
    HTML. Each detector scans its own candidate pool and returns
    suggestions; detectors share no state and can run in any order.

Key Modules:
    - equations: Linear / quadratic / general equations
    - problems: Problem statements with worked solutions
    - steps: Solution container lookup and step synthesis

Dependencies:
    - bs4 (via analyzer.utils.html): Parsed document access

Used By:
    - analyzer.pipeline: Orchestrates detection modules
"""

from .equations import detect_equation_patterns, match_equation
from .problems import detect_problem_patterns, match_problem
from .steps import discover_steps

__all__ = [
    "detect_equation_patterns",
    "detect_problem_patterns",
    "discover_steps",
    "match_equation",
    "match_problem",
]
