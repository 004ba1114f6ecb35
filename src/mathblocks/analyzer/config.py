"""
Module: analyzer.config

Purpose:
    Configuration dataclass for the analysis pipeline. Provides immutable
    settings for candidate filtering and the defaults written into
    detected block parameters.

Key Classes:
    - AnalysisConfig: Main configuration for analysis

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - analyzer.pipeline: Passes config to detectors
    - analyzer.detection: Reads thresholds and parameter defaults
    - builder.selection: Default selection threshold
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Configuration for content analysis.

    Confidence scores are fixed per detection rule and live with the
    detectors; they are not configurable.

    Attributes:
        min_equation_text_length: Skip equation candidates with shorter text (default 3)
        min_problem_text_length: Skip problem candidates with shorter text (default 10)
        variable_range: Slider range written for each detected variable (default (-10, 10))
        initial_value: Starting value written for each detected variable (default 0)
        selection_threshold: Minimum confidence selected by default (default 0.7)
    """
    min_equation_text_length: int = 3
    min_problem_text_length: int = 10
    variable_range: Tuple[float, float] = (-10, 10)
    initial_value: float = 0
    selection_threshold: float = 0.7

    def __post_init__(self) -> None:
        low, high = self.variable_range
        if low >= high:
            raise ValueError(f"variable_range must be increasing: {self.variable_range}")
        if not 0.0 <= self.selection_threshold <= 1.0:
            raise ValueError(f"selection_threshold must be within [0, 1]: {self.selection_threshold}")
