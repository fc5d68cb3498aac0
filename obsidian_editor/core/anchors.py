"""Anchor resolution: locating a target span inside a note.

An anchor names a place in a document by heading text, block identifier,
frontmatter key, literal text or line number. Each variant has its own
resolver working on the document's lines; :func:`resolve_anchor` dispatches on
the anchor type and returns a 1-based inclusive :class:`MatchSpan`.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from obsidian_editor.constants import CONTEXT_LINES
from obsidian_editor.core.buffer import context_window
from obsidian_editor.errors import (
    AmbiguousMatchError,
    AnchorNotFoundError,
    InvalidAnchorError,
    InvalidLineNumberError,
    InvalidPatternError,
    LineOutOfRangeError,
)

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"
LINE_NUMBER_PATTERN = re.compile(r"[+-]?\d+")


class AnchorType(str, enum.Enum):
    """Supported anchor strategies."""

    HEADING = "heading"
    BLOCK = "block"
    FRONTMATTER = "frontmatter"
    TEXT_MATCH = "text_match"
    LINE = "line"


@dataclass(frozen=True)
class MatchSpan:
    """A resolved anchor location (1-based, inclusive)."""

    start: int
    end: int

    def as_payload(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class Anchor:
    """A typed anchor. ``value`` is an ``int`` only for line anchors."""

    type: AnchorType
    value: Union[str, int]

    @classmethod
    def parse(cls, anchor_type: str, value: Union[str, int]) -> "Anchor":
        """Build an anchor from the tool-level string discriminator.

        Line anchors are parsed strictly here so that a bad value fails before
        the document is touched.

        Raises:
            InvalidAnchorError: If ``anchor_type`` is not a known strategy.
            InvalidLineNumberError: If a line anchor value is not an integer.
        """
        try:
            kind = AnchorType(anchor_type)
        except ValueError as exc:
            raise InvalidAnchorError(f"Unknown anchor type: {anchor_type}") from exc

        if kind is AnchorType.LINE:
            return cls(kind, parse_line_number(value))
        return cls(kind, str(value))

    def describe(self) -> str:
        return f"{self.type.value} '{self.value}'"


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def heading_pattern(text: str) -> re.Pattern[str]:
    """Pattern matching a heading line of any level whose title is ``text``."""
    return re.compile(rf"^#+\s+{re.escape(text)}\s*$", re.IGNORECASE)


def is_matching_heading(line: str, text: str) -> bool:
    """Return True when ``line`` is a heading titled ``text`` (case-insensitive)."""
    return heading_pattern(text).match(line) is not None


def block_pattern(block_id: str) -> re.Pattern[str]:
    """Pattern matching a line that ends with ``^block_id``."""
    return re.compile(rf"\^{re.escape(block_id)}\s*$")


def frontmatter_key_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(key)}:\s*")


def frontmatter_bounds(lines: Sequence[str]) -> Optional[int]:
    """Return the index of the closing ``---`` of a leading frontmatter block.

    Returns:
        ``None`` when the document does not open with ``---``. When the block is
        never closed, ``len(lines)`` is returned so that the block extends to the
        end of the document.
    """
    if not lines or lines[0] != FRONTMATTER_DELIMITER:
        return None
    closing = 1
    while closing < len(lines) and lines[closing] != FRONTMATTER_DELIMITER:
        closing += 1
    return closing


def parse_line_number(value: Union[str, int]) -> int:
    """Parse a line anchor value as a strict integer.

    Raises:
        InvalidLineNumberError: For anything other than an optionally signed run
            of digits (surrounding whitespace is tolerated).
    """
    if isinstance(value, bool):
        raise InvalidLineNumberError(
            f'Invalid line number: "{value}". Line number must be an integer.'
        )
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not LINE_NUMBER_PATTERN.fullmatch(text):
        raise InvalidLineNumberError(
            f'Invalid line number: "{value}". Line number must be an integer.'
        )
    return int(text)


def find_text_matches(lines: Sequence[str], pattern_lines: Sequence[str]) -> list[MatchSpan]:
    """Return every span whose lines equal ``pattern_lines`` exactly.

    Every start index is tried, so overlapping occurrences are all reported.
    """
    width = len(pattern_lines)
    if width == 0 or width > len(lines):
        return []

    matches: list[MatchSpan] = []
    for index in range(len(lines) - width + 1):
        if all(lines[index + offset] == pattern_lines[offset] for offset in range(width)):
            matches.append(MatchSpan(start=index + 1, end=index + width))
    return matches


def _format_ambiguous_matches(
    pattern: str,
    lines: Sequence[str],
    matches: Sequence[MatchSpan],
) -> str:
    entries: list[str] = []
    for match in matches:
        before, after = context_window(lines, match.start, match.end, CONTEXT_LINES)
        body = [f"  | {line}" for line in before]
        body.extend(f"  > {line}" for line in lines[match.start - 1 : match.end])
        body.extend(f"  | {line}" for line in after)
        entries.append(f"Lines {match.start}-{match.end}:\n" + "\n".join(body))

    return (
        f'Text "{pattern}" found {len(matches)} times. '
        "The text_match anchor must identify exactly one location.\n\n"
        + "\n\n".join(entries)
        + "\n\nProvide a longer or more specific text_match value "
        "(include neighbouring lines) so that it matches only once."
    )


# ==============================================================================
# RESOLVERS
# ==============================================================================


def resolve_heading(lines: Sequence[str], heading: str) -> MatchSpan:
    """Locate the first heading line titled ``heading`` at any level."""
    pattern = heading_pattern(heading)
    for index, line in enumerate(lines):
        if pattern.match(line):
            return MatchSpan(start=index + 1, end=index + 1)
    raise AnchorNotFoundError(f'Heading "{heading}" not found')


def resolve_block(lines: Sequence[str], block_id: str) -> MatchSpan:
    """Locate the first line carrying the ``^block_id`` marker."""
    pattern = block_pattern(block_id)
    for index, line in enumerate(lines):
        if pattern.search(line):
            return MatchSpan(start=index + 1, end=index + 1)
    raise AnchorNotFoundError(f"Block ID ^{block_id} not found")


def resolve_frontmatter_key(lines: Sequence[str], key: str) -> MatchSpan:
    """Locate the ``key:`` line inside the leading frontmatter block."""
    if not key.strip():
        raise InvalidAnchorError("Frontmatter key cannot be empty.")

    closing = frontmatter_bounds(lines)
    if closing is not None:
        pattern = frontmatter_key_pattern(key)
        for index in range(1, closing):
            if pattern.match(lines[index]):
                return MatchSpan(start=index + 1, end=index + 1)
    raise AnchorNotFoundError(f'Frontmatter key "{key}" not found')


def resolve_text_match(lines: Sequence[str], pattern: str) -> MatchSpan:
    """Locate the single occurrence of ``pattern`` (exact, line by line).

    Raises:
        InvalidPatternError: If ``pattern`` is empty or whitespace only.
        AnchorNotFoundError: If the pattern does not occur.
        AmbiguousMatchError: If the pattern occurs more than once. The message
            lists every occurrence with surrounding context.
    """
    if not pattern or not pattern.strip():
        raise InvalidPatternError(
            "Text match pattern cannot be empty. Provide the exact text to anchor on."
        )

    matches = find_text_matches(lines, pattern.split("\n"))
    if not matches:
        raise AnchorNotFoundError(f'Text "{pattern}" not found')
    if len(matches) > 1:
        logger.debug("Text match is ambiguous (%d occurrences)", len(matches))
        raise AmbiguousMatchError(
            _format_ambiguous_matches(pattern, lines, matches),
            pattern=pattern,
            matches=matches,
        )
    return matches[0]


def resolve_line(lines: Sequence[str], value: Union[str, int]) -> MatchSpan:
    """Validate a line anchor against the document length."""
    number = parse_line_number(value)
    if number < 1 or number > len(lines):
        raise LineOutOfRangeError(f"Line {number} out of range (1-{len(lines)})")
    return MatchSpan(start=number, end=number)


_RESOLVERS: dict[AnchorType, Callable[[Sequence[str], Union[str, int]], MatchSpan]] = {
    AnchorType.HEADING: lambda lines, value: resolve_heading(lines, str(value)),
    AnchorType.BLOCK: lambda lines, value: resolve_block(lines, str(value)),
    AnchorType.FRONTMATTER: lambda lines, value: resolve_frontmatter_key(lines, str(value)),
    AnchorType.TEXT_MATCH: lambda lines, value: resolve_text_match(lines, str(value)),
    AnchorType.LINE: resolve_line,
}


def resolve_anchor(lines: Sequence[str], anchor: Anchor) -> MatchSpan:
    """Resolve ``anchor`` against ``lines`` using the strategy for its type."""
    span = _RESOLVERS[anchor.type](lines, anchor.value)
    logger.debug("Resolved %s to lines %d-%d", anchor.describe(), span.start, span.end)
    return span
