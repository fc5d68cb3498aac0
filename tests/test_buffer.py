"""Tests for the line buffer helpers.

Covers lossless splitting and joining of note text and the clipped context
windows used by change previews and ambiguity reports.
"""

import pytest

from obsidian_editor.core.buffer import context_window, join_lines, split_lines


@pytest.mark.parametrize(
    "text",
    ["", "single", "a\nb\nc", "trailing newline\n", "\n\n", "crlf\r\nkept\r\n", "  indented\n\ttab"],
)
def test_split_join_is_lossless(text):
    """Joining the split lines reproduces the original text exactly."""
    assert join_lines(split_lines(text)) == text


def test_split_keeps_trailing_empty_line():
    """A trailing newline shows up as a final empty line."""
    assert split_lines("a\nb\n") == ["a", "b", ""]


def test_empty_document_is_one_empty_line():
    """An empty document still has one (empty) line."""
    assert split_lines("") == [""]


class TestContextWindow:
    """Test suite for context_window clipping."""

    lines = ["L1", "L2", "L3", "L4", "L5", "L6"]

    def test_middle_span(self):
        """A span in the middle gets full context on both sides."""
        before, after = context_window(self.lines, 3, 4, radius=2)
        assert before == ["L1", "L2"]
        assert after == ["L5", "L6"]

    def test_first_line_has_no_before(self):
        """Nothing precedes the first line."""
        before, after = context_window(self.lines, 1, 1)
        assert before == []
        assert after == ["L2", "L3"]

    def test_last_line_has_no_after(self):
        """Nothing follows the last line."""
        before, after = context_window(self.lines, 6, 6)
        assert before == ["L4", "L5"]
        assert after == []

    def test_clips_to_available_lines(self):
        """A large radius is clipped at the document boundaries."""
        before, after = context_window(self.lines, 2, 5, radius=10)
        assert before == ["L1"]
        assert after == ["L6"]

    def test_empty_span_sits_between_lines(self):
        """end == start - 1 describes a point just before start."""
        before, after = context_window(self.lines, 3, 2)
        assert before == ["L1", "L2"]
        assert after == ["L3", "L4"]

    def test_out_of_bounds_spans_do_not_raise(self):
        """Spans outside the document are clipped instead of raising."""
        assert context_window(self.lines, 50, 60) == (["L5", "L6"], [])
        assert context_window(self.lines, 0, 0) == ([], ["L1", "L2"])

    def test_empty_document(self):
        """Empty documents yield empty context."""
        assert context_window([], 1, 1) == ([], [])
        assert context_window([""], 1, 1) == ([], [])

    def test_zero_radius(self):
        """A zero radius returns no context."""
        assert context_window(self.lines, 3, 3, radius=0) == ([], [])
