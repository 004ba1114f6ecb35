"""
Unit Tests for the Analysis Pipeline

Tests for analyze(), analyze_document() and aggregate_suggestions(),
including end-to-end checks on small lesson pages.
"""

import pytest

from mathblocks import analyze
from mathblocks.analyzer import (
    AnalysisConfig,
    DiagnosticsCollector,
    TimingLog,
    aggregate_suggestions,
    analyze_document,
)
from mathblocks.analyzer.detection import detect_equation_patterns
from mathblocks.analyzer.utils.html import load_html
from mathblocks.core.models.suggestions import SuggestionType
from mathblocks.core.utils.serialization import serialize_suggestions


def of_type(suggestions, kind):
    return [s for s in suggestions if s.type == kind]


class TestAnalyzeScenarios:
    """Small documents with known results."""

    def test_analyze_when_linear_paragraph_then_one_explorer(self, linear_html):
        suggestions = analyze(linear_html)
        assert len(suggestions) == 1
        s = suggestions[0]
        assert s.type == SuggestionType.EQUATION_EXPLORER
        assert s.confidence == 0.85
        assert s.block_parameters["variables"] == ["y"]

    def test_analyze_when_quadratic_paragraph_then_quadratic_confidence(self):
        suggestions = analyze("<p>y = x^2 + 2x + 1</p>")
        assert [s.confidence for s in suggestions] == [0.9]
        assert suggestions[0].description == "Interactive Quadratic Function Explorer"

    def test_analyze_when_heading_problem_then_solver_with_steps(self, heading_problem_html):
        suggestions = analyze(heading_problem_html)
        solvers = of_type(suggestions, SuggestionType.PROBLEM_SOLVER)
        assert len(solvers) == 1
        steps = solvers[0].block_parameters["steps"]
        assert [s["expression"] for s in steps] == ["2x = 4", "x = 2"]

    def test_analyze_when_heading_problem_then_equation_also_suggested(self, heading_problem_html):
        """The problem's equation is itself linear, so both detectors fire."""
        suggestions = analyze(heading_problem_html)
        assert [s.type for s in suggestions] == [
            SuggestionType.EQUATION_EXPLORER,
            SuggestionType.PROBLEM_SOLVER,
        ]

    @pytest.mark.parametrize("markup", [None, "", "<p>Hello world</p>", "<!-- y = 2x + 1 -->"])
    def test_analyze_when_nothing_to_find_then_empty(self, markup):
        assert analyze(markup) == []

    def test_analyze_when_malformed_markup_then_still_detects(self):
        suggestions = analyze("<div><p>y = 2x + 1")
        assert len(suggestions) == 2
        assert {s.block_parameters["equation"] for s in suggestions} == {"y = 2x + 1"}

    def test_analyze_when_lesson_page_then_ranked_and_numbered(self, lesson_html):
        suggestions = analyze(lesson_html)
        assert [s.id for s in suggestions] == [
            "suggestion-2",
            "suggestion-1",
            "suggestion-4",
            "suggestion-7",
            "suggestion-3",
            "suggestion-5",
            "suggestion-6",
        ]
        assert len(of_type(suggestions, SuggestionType.PROBLEM_SOLVER)) == 1
        solver = of_type(suggestions, SuggestionType.PROBLEM_SOLVER)[0]
        assert [s["expression"] for s in solver.block_parameters["steps"]] == ["y = 6 + 4", "y = 10"]


class TestAnalyzeProperties:
    """Properties that hold for any input."""

    @pytest.fixture(params=[
        "<p>y = 2x + 1</p><p>y = 3*x</p><p>y = x^2 + 2x + 1</p>",
        "<h3>Problem</h3><p>Solve for x: 2x + 3 = 7</p><ul><li>2x = 4</li><li>x = 2</li></ul>",
        '<div class="problem"><p>Determine x when 5x - 1 = 9.</p><p>More text</p></div>',
    ])
    def html(self, request):
        return request.param

    def test_analyze_when_any_input_then_confidence_non_increasing(self, html):
        confidences = [s.confidence for s in analyze(html)]
        assert confidences == sorted(confidences, reverse=True)
        assert all(0.0 <= c <= 1.0 for c in confidences)

    def test_analyze_when_called_twice_then_equal_results(self, html):
        assert analyze(html) == analyze(html)
        assert serialize_suggestions(analyze(html)) == serialize_suggestions(analyze(html))

    def test_analyze_when_any_input_then_ids_unique(self, html):
        ids = [s.id for s in analyze(html)]
        assert len(ids) == len(set(ids))

    def test_analyze_when_any_input_then_required_parameters_present(self, html):
        for s in analyze(html):
            params = s.block_parameters
            if s.type == SuggestionType.EQUATION_EXPLORER:
                assert {"equation", "variables", "range", "initialValues"} <= params.keys()
            else:
                assert params["problem"]
                assert len(params["steps"]) >= 1


class TestAggregateSuggestions:
    """Tests for aggregate_suggestions()."""

    def test_aggregate_when_ties_then_encounter_order_kept(self):
        doc = load_html("<p>y = 2x + 1</p><p>z = 3x - 2</p>")
        suggestions = aggregate_suggestions(detect_equation_patterns(doc))
        assert [s.id for s in suggestions] == ["suggestion-1", "suggestion-2"]
        assert [s.block_parameters["variables"] for s in suggestions] == [["y"], ["z"]]

    def test_aggregate_when_groups_given_then_numbered_across_groups(self):
        doc = load_html("<p>y = 3*x</p><p>y = x^2 + 2x + 1</p>")
        equations = detect_equation_patterns(doc)
        suggestions = aggregate_suggestions(equations[:1], equations[1:])
        assert [(s.id, s.confidence) for s in suggestions] == [
            ("suggestion-2", 0.9),
            ("suggestion-1", 0.7),
        ]

    def test_aggregate_when_called_then_inputs_untouched(self, linear_html):
        equations = detect_equation_patterns(load_html(linear_html))
        aggregate_suggestions(equations)
        assert equations[0].id == ""


class TestInstrumentation:
    """Tests for timing and diagnostics hooks."""

    def test_analyze_when_timing_log_then_all_phases_recorded(self, heading_problem_html):
        log = TimingLog()
        analyze(heading_problem_html, timing_log=log)
        assert set(log.phase_timings) == {"parse", "equations", "problems", "aggregate"}

    def test_analyze_when_empty_document_then_only_parse_timed(self):
        log = TimingLog()
        analyze("", timing_log=log)
        assert set(log.phase_timings) == {"parse"}

    def test_analyze_when_diagnostics_then_issues_collected(self):
        collector = DiagnosticsCollector()
        analyze("<h2>Q</h2><p>Determine x using the graph below.</p>", diagnostics=collector)
        assert collector.counts() == {"no_steps": 1}

    def test_analyze_document_when_config_given_then_applied(self):
        doc = load_html("<p>y = 2x + 1</p>")
        suggestions = analyze_document(doc, config=AnalysisConfig(variable_range=(0, 5)))
        assert suggestions[0].block_parameters["range"] == {"y": [0, 5]}
