"""Line-indexed view over a note's text.

Documents are handled as plain strings split on ``\\n``. Nothing is normalized:
a trailing newline shows up as a final empty line, and ``\\r`` characters stay
attached to their line. Line numbers exposed outside this package are 1-based.
"""

from __future__ import annotations

from collections.abc import Sequence

from obsidian_editor.constants import CONTEXT_LINES


def split_lines(document: str) -> list[str]:
    """Split a document into lines. ``join_lines(split_lines(text)) == text``."""
    return document.split("\n")


def join_lines(lines: Sequence[str]) -> str:
    """Join lines back into a document using ``\\n`` separators."""
    return "\n".join(lines)


def context_window(
    lines: Sequence[str],
    start: int,
    end: int,
    radius: int = CONTEXT_LINES,
) -> tuple[list[str], list[str]]:
    """Return the lines surrounding a 1-based inclusive span.

    Args:
        lines: Document lines.
        start: First line of the span (1-based).
        end: Last line of the span (1-based). ``end == start - 1`` describes an
            empty span located just before ``start``.
        radius: Maximum number of lines to return on each side.

    Returns:
        A ``(before, after)`` tuple. Each list holds at most ``radius`` lines and
        is clipped at the document boundaries.
    """
    radius = max(0, radius)
    before_stop = min(max(0, start - 1), len(lines))
    before_start = max(0, before_stop - radius)
    after_start = min(max(0, end), len(lines))
    after_stop = min(len(lines), after_start + radius)
    return list(lines[before_start:before_stop]), list(lines[after_start:after_stop])
