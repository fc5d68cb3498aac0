"""Exception hierarchy for anchor patching and diff application.

Every error is a :class:`ValueError` so callers that already treat bad input as
``ValueError`` keep working. Messages are written for the LLM on the other end
of the tool call: they name the anchor or hunk that failed so the caller can
retry with a corrected request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from obsidian_editor.core.anchors import MatchSpan


class EditorError(ValueError):
    """Base class for every failure raised by the editing core."""


# ==============================================================================
# PATCH ERRORS
# ==============================================================================


class PatchError(EditorError):
    """A content patch could not be resolved or applied."""


class AnchorNotFoundError(PatchError):
    """The heading, block, text or frontmatter key is absent from the document."""


class AmbiguousMatchError(PatchError):
    """A text match anchor occurs more than once."""

    def __init__(self, message: str, pattern: str, matches: Sequence["MatchSpan"]) -> None:
        super().__init__(message)
        self.pattern = pattern
        self.matches = list(matches)


class InvalidLineNumberError(PatchError):
    """A line anchor value is not a strict integer."""


class LineOutOfRangeError(PatchError):
    """A line anchor points outside ``1..len(lines)``."""


class InvalidPatternError(PatchError):
    """A text match pattern is empty or whitespace only."""


class InvalidAnchorError(PatchError):
    """Unknown anchor type or position, or an unusable anchor value."""


# ==============================================================================
# DIFF ERRORS
# ==============================================================================


class DiffError(EditorError):
    """A unified diff could not be parsed or applied."""


class InvalidDiffFormatError(DiffError):
    """Missing or malformed hunk headers, or hunks that cannot be ordered."""


class DiffContextMismatchError(DiffError):
    """A hunk's context and deletion lines disagree with the current file."""
