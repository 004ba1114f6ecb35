"""
Unit Tests for SuggestionSelection

Tests for default selection, toggling and filtering.
"""

import pytest

from mathblocks import analyze
from mathblocks.builder.selection import SuggestionSelection


@pytest.fixture
def suggestions(lesson_html):
    return analyze(lesson_html)


class TestSuggestionSelection:
    """Tests for SuggestionSelection."""

    def test_defaults_when_threshold_then_inclusive_cutoff(self, suggestions):
        selection = SuggestionSelection.defaults(suggestions, threshold=0.85)
        assert selection.selected_ids == {"suggestion-1", "suggestion-2", "suggestion-4"}

    def test_defaults_when_default_threshold_then_all_lesson_suggestions(self, suggestions):
        assert len(SuggestionSelection.defaults(suggestions)) == len(suggestions)

    def test_toggle_when_selected_then_removed_and_original_kept(self, suggestions):
        selection = SuggestionSelection.of(["suggestion-1"])
        toggled = selection.toggle("suggestion-1")
        assert len(toggled) == 0
        assert selection.selected_ids == {"suggestion-1"}

    def test_toggle_when_not_selected_then_added(self):
        assert SuggestionSelection().toggle("suggestion-3").selected_ids == {"suggestion-3"}

    def test_filter_when_selected_then_suggestion_order_kept(self, suggestions):
        selection = SuggestionSelection.of(["suggestion-3", "suggestion-2"])
        assert [s.id for s in selection.filter(suggestions)] == ["suggestion-2", "suggestion-3"]
        assert selection.is_selected(suggestions[0])
        assert not selection.is_selected(suggestions[1])
