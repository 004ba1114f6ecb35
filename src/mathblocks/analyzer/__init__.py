"""
Module: analyzer

Purpose:
    Content analysis pipeline: parses HTML lesson content, detects
    equations and worked problems with regular-expression and DOM-shape
    heuristics, and returns ranked transformation suggestions.

Key Functions:
    - analyze(): Main entry point for analysis

Key Classes:
    - AnalysisConfig: Configuration for analysis settings
    - TimingLog: Optional phase timing
    - DiagnosticsCollector: Optional detection issue log

Dependencies:
    - bs4 / soupsieve: HTML parsing and CSS queries
    - mathblocks.core.models: Suggestion and step models

Used By:
    - mathblocks.cli: Command-line analysis
    - mathblocks.builder: Consumes suggestions
"""

from .config import AnalysisConfig
from .diagnostics import DiagnosticsCollector
from .pipeline import aggregate_suggestions, analyze, analyze_document
from .timing import TimingLog

__all__ = [
    "analyze",
    "analyze_document",
    "aggregate_suggestions",
    "AnalysisConfig",
    "DiagnosticsCollector",
    "TimingLog",
]
