"""
Unit Tests for Analysis Support Classes

Tests for AnalysisConfig, TimingLog and DiagnosticsCollector.
"""

import json
import threading

import pytest

from mathblocks.analyzer.config import AnalysisConfig
from mathblocks.analyzer.diagnostics import NO_STEPS, ZERO_COEFFICIENT, DiagnosticsCollector
from mathblocks.analyzer.timing import TimingLog, timed_phase


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_defaults_when_created_then_documented_values(self):
        config = AnalysisConfig()
        assert config.min_equation_text_length == 3
        assert config.min_problem_text_length == 10
        assert config.variable_range == (-10, 10)
        assert config.initial_value == 0
        assert config.selection_threshold == 0.7

    def test_init_when_range_not_increasing_then_raises(self):
        with pytest.raises(ValueError, match="variable_range"):
            AnalysisConfig(variable_range=(5, 5))

    @pytest.mark.parametrize("threshold", [-0.1, 1.01])
    def test_init_when_threshold_out_of_range_then_raises(self, threshold):
        with pytest.raises(ValueError, match="selection_threshold"):
            AnalysisConfig(selection_threshold=threshold)


class TestTimingLog:
    """Tests for TimingLog and timed_phase()."""

    def test_log_phase_when_repeated_then_accumulates(self):
        log = TimingLog()
        log.log_phase("parse", 0.25)
        log.log_phase("parse", 0.75)
        log.log_phase("equations", 1.0)
        assert log.get_phase_total("parse") == pytest.approx(1.0)
        assert log.get_total() == pytest.approx(2.0)
        assert log.get_phase_averages() == {"parse": pytest.approx(0.5), "equations": pytest.approx(1.0)}
        assert log.get_phase_total("missing") == 0

    def test_summary_when_phases_logged_then_lists_each(self):
        log = TimingLog()
        log.log_phase("parse", 0.5)
        summary = log.summary()
        assert "=== Analysis Timing Summary ===" in summary
        assert "parse" in summary
        assert "total" in summary

    def test_timed_phase_when_log_given_then_records_duration(self):
        log = TimingLog()
        with timed_phase(log, "parse"):
            pass
        assert len(log.phase_timings["parse"]) == 1
        assert log.phase_timings["parse"][0] >= 0

    def test_timed_phase_when_body_raises_then_still_records(self):
        log = TimingLog()
        with pytest.raises(RuntimeError):
            with timed_phase(log, "parse"):
                raise RuntimeError("boom")
        assert "parse" in log.phase_timings

    def test_timed_phase_when_log_none_then_no_op(self):
        with timed_phase(None, "parse"):
            value = 1
        assert value == 1


class TestDiagnosticsCollector:
    """Tests for DiagnosticsCollector."""

    def test_add_issue_when_several_types_then_counted(self):
        collector = DiagnosticsCollector()
        collector.add_issue(NO_STEPS, "no steps", element_tag="p", element_text="Determine x")
        collector.add_issue(NO_STEPS, "no steps")
        collector.add_issue(ZERO_COEFFICIENT, "zero")
        assert collector.counts() == {NO_STEPS: 2, ZERO_COEFFICIENT: 1}
        assert collector.issues[0].element_tag == "p"

    def test_to_dict_when_optional_context_missing_then_omitted(self):
        collector = DiagnosticsCollector()
        collector.add_issue(NO_STEPS, "no steps")
        report = collector.to_dict()
        assert report["issue_count"] == 1
        assert report["issues"] == [{"issue_type": NO_STEPS, "message": "no steps"}]
        assert "generated_at" in report

    def test_to_dict_when_long_text_then_truncated(self):
        collector = DiagnosticsCollector()
        collector.add_issue(NO_STEPS, "no steps", element_text="x" * 5000)
        assert len(collector.to_dict()["issues"][0]["element_text"]) == 2000

    def test_write_report_when_nested_path_then_json_written(self, tmp_path):
        collector = DiagnosticsCollector()
        collector.add_issue(ZERO_COEFFICIENT, "zero", element_tag="p")
        path = collector.write_report(tmp_path / "out" / "issues.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["counts"] == {ZERO_COEFFICIENT: 1}

    def test_add_issue_when_concurrent_then_none_lost(self):
        collector = DiagnosticsCollector()

        def worker():
            for _ in range(100):
                collector.add_issue(NO_STEPS, "no steps")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert collector.counts()[NO_STEPS] == 400
