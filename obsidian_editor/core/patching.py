"""Anchor-addressed content patches.

A patch resolves an anchor, then inserts new content before or after it or
replaces it. Line ranges reported in :class:`PatchResult` describe where the
new content sits in the *patched* document, which is what the change preview
is built from.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Union

from obsidian_editor.core.anchors import (
    FRONTMATTER_DELIMITER,
    Anchor,
    AnchorType,
    MatchSpan,
    frontmatter_bounds,
    frontmatter_key_pattern,
    is_matching_heading,
    resolve_anchor,
)
from obsidian_editor.core.buffer import join_lines, split_lines
from obsidian_editor.errors import InvalidAnchorError

logger = logging.getLogger(__name__)

SECTION_BOUNDARY_PATTERN = re.compile(r"^#+\s")


class Position(str, enum.Enum):
    """Where new content goes relative to the resolved anchor."""

    BEFORE = "before"
    AFTER = "after"
    REPLACE = "replace"

    @classmethod
    def parse(cls, value: Union[str, "Position"]) -> "Position":
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidAnchorError(f"Unknown position: {value}") from exc


@dataclass(frozen=True)
class LineRange:
    """1-based inclusive line range. ``end == start - 1`` marks an empty range."""

    start: int
    end: int

    def as_payload(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class PatchResult:
    """Outcome of a patch or diff application."""

    content: str
    line_range: LineRange
    changed_lines: list[str] = field(default_factory=list)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def strip_duplicate_heading(new_content: str, heading: str) -> str:
    """Drop a leading line of ``new_content`` that repeats the anchor heading.

    Callers frequently restate the heading they are anchoring on. When the
    first line, trimmed, is a heading titled ``heading`` (any level, any case)
    it is removed; any other leading line is kept verbatim.
    """
    content_lines = new_content.split("\n")
    if is_matching_heading(content_lines[0].strip(), heading):
        logger.debug("Stripped duplicate heading '%s' from inserted content", heading)
        return "\n".join(content_lines[1:])
    return new_content


def section_end(lines: list[str], heading_index: int) -> int:
    """Return the index of the first heading (any level) after ``heading_index``.

    ``len(lines)`` is returned when the section runs to the end of the document.
    """
    index = heading_index + 1
    while index < len(lines) and not SECTION_BOUNDARY_PATTERN.match(lines[index]):
        index += 1
    return index


def _splice(lines: list[str], start: int, stop: int, replacement: list[str]) -> None:
    lines[start:stop] = replacement


# ==============================================================================
# PATCH OPERATIONS
# ==============================================================================


def upsert_frontmatter(document: str, key: str, value: str) -> PatchResult:
    """Set ``key: value`` in the document's frontmatter.

    The existing ``key:`` line is replaced when present; otherwise the line is
    added just before the closing delimiter. A document without frontmatter
    gets a new block at the top holding only this key.

    Raises:
        InvalidAnchorError: If ``key`` is empty.
    """
    if not key.strip():
        raise InvalidAnchorError("Frontmatter key cannot be empty.")

    lines = split_lines(document)
    new_lines = f"{key}: {value}".split("\n")
    closing = frontmatter_bounds(lines)

    if closing is None:
        _splice(lines, 0, 0, [FRONTMATTER_DELIMITER, *new_lines, FRONTMATTER_DELIMITER, ""])
        start = 2
    else:
        pattern = frontmatter_key_pattern(key)
        existing = next(
            (index for index in range(1, closing) if pattern.match(lines[index])),
            None,
        )
        if existing is not None:
            _splice(lines, existing, existing + 1, new_lines)
            start = existing + 1
        else:
            _splice(lines, closing, closing, new_lines)
            start = closing + 1

    return PatchResult(
        content=join_lines(lines),
        line_range=LineRange(start, start + len(new_lines) - 1),
        changed_lines=new_lines,
    )


def apply_patch(
    document: str,
    anchor: Anchor,
    position: Union[Position, str],
    new_content: str,
) -> PatchResult:
    """Insert or replace ``new_content`` relative to ``anchor``.

    Args:
        document: Full note text.
        anchor: Target location.
        position: ``before`` and ``after`` insert around the anchor span.
            ``replace`` swaps the span itself, except for headings where the
            section body (up to the next heading of any level) is replaced and
            the heading line is kept. Ignored for frontmatter anchors, which
            always upsert ``key: value``.
        new_content: Text to insert; split on ``\\n``.

    Returns:
        A :class:`PatchResult` whose ``line_range`` locates the inserted lines
        in the patched document.

    Raises:
        PatchError: When the anchor cannot be resolved or is ambiguous.
    """
    position = Position.parse(position)

    if anchor.type is AnchorType.FRONTMATTER:
        return upsert_frontmatter(document, str(anchor.value), new_content)

    lines = split_lines(document)
    span: MatchSpan = resolve_anchor(lines, anchor)

    if anchor.type is AnchorType.HEADING and position is not Position.REPLACE:
        new_content = strip_duplicate_heading(new_content, str(anchor.value))

    inserted = new_content.split("\n")

    if position is Position.BEFORE:
        _splice(lines, span.start - 1, span.start - 1, inserted)
        start = span.start
    elif position is Position.AFTER:
        _splice(lines, span.end, span.end, inserted)
        start = span.end + 1
    elif anchor.type is AnchorType.HEADING:
        heading_index = span.start - 1
        _splice(lines, heading_index + 1, section_end(lines, heading_index), inserted)
        start = span.start + 1
    else:
        _splice(lines, span.start - 1, span.end, inserted)
        start = span.start

    return PatchResult(
        content=join_lines(lines),
        line_range=LineRange(start, start + len(inserted) - 1),
        changed_lines=inserted,
    )


def resolve_and_patch(
    document: str,
    anchor_type: str,
    anchor_value: Union[str, int],
    position: Union[Position, str],
    new_content: str,
) -> PatchResult:
    """String-level entry point used by the tool handlers."""
    anchor = Anchor.parse(anchor_type, anchor_value)
    return apply_patch(document, anchor, position, new_content)
