"""Unified diff parsing and application.

Supports the hunk subset of the unified diff format::

    @@ -<old_start>,<old_count> +<new_start>,<new_count> @@
     context line
    -deleted line
    +inserted line

Counts default to 1 when omitted. Every hunk is checked against the original
document before anything is applied, so a diff either applies completely or
leaves the document untouched.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from obsidian_editor.core.buffer import join_lines, split_lines
from obsidian_editor.core.patching import LineRange, PatchResult
from obsidian_editor.errors import DiffContextMismatchError, InvalidDiffFormatError

logger = logging.getLogger(__name__)

HUNK_HEADER_PATTERN = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
FILE_HEADER_PREFIXES = ("--- ", "+++ ", "diff ", "index ")
NO_NEWLINE_MARKER = "\\"

FORMAT_HINT = (
    "Expected unified diff format with hunk headers like '@@ -12,3 +12,4 @@' "
    "followed by lines prefixed with ' ' (context), '-' (remove) or '+' (add)."
)


class HunkLineKind(str, enum.Enum):
    CONTEXT = "context"
    DELETE = "delete"
    INSERT = "insert"


@dataclass(frozen=True)
class HunkLine:
    kind: HunkLineKind
    text: str


@dataclass
class Hunk:
    """One ``@@`` block of a unified diff."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: list[HunkLine] = field(default_factory=list)

    @property
    def header(self) -> str:
        return f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"

    @property
    def old_lines(self) -> list[str]:
        """Context and deletion lines, in order."""
        return [line.text for line in self.lines if line.kind is not HunkLineKind.INSERT]

    @property
    def new_lines(self) -> list[str]:
        """Context and insertion lines, in order."""
        return [line.text for line in self.lines if line.kind is not HunkLineKind.DELETE]

    @property
    def start_index(self) -> int:
        """0-based index of the first old line.

        A pure insertion (``old_count == 0``) goes after line ``old_start``.
        """
        if self.old_count == 0:
            return self.old_start
        return self.old_start - 1

    def changed_region(self) -> tuple[int, list[str]]:
        """Locate the changed part of the hunk on its new side.

        Returns:
            ``(offset, lines)`` where ``offset`` is the position of the first
            changed line relative to the start of the hunk's new side and
            ``lines`` spans from the first to the last insertion or deletion
            point. Pure deletions yield an empty list.
        """
        first: int | None = None
        last = 0
        cursor = 0
        for line in self.lines:
            if line.kind is HunkLineKind.CONTEXT:
                cursor += 1
                continue
            if first is None:
                first = cursor
            if line.kind is HunkLineKind.INSERT:
                cursor += 1
            last = cursor

        if first is None:
            return 0, []
        return first, self.new_lines[first:last]


# ==============================================================================
# PARSING
# ==============================================================================


def _parse_hunk_line(raw: str) -> HunkLine | None:
    if raw.startswith(NO_NEWLINE_MARKER):
        return None
    if raw.startswith("+"):
        return HunkLine(HunkLineKind.INSERT, raw[1:])
    if raw.startswith("-"):
        return HunkLine(HunkLineKind.DELETE, raw[1:])
    if raw.startswith(" "):
        return HunkLine(HunkLineKind.CONTEXT, raw[1:])
    return HunkLine(HunkLineKind.CONTEXT, raw)


def _trim_trailing_blank_context(hunk: Hunk) -> None:
    """Drop blank context lines that run past both declared counts.

    Extra trailing newlines in a pasted diff, and blank lines between hunks,
    arrive here as empty context lines.
    """
    while (
        hunk.lines
        and hunk.lines[-1] == HunkLine(HunkLineKind.CONTEXT, "")
        and len(hunk.old_lines) > hunk.old_count
        and len(hunk.new_lines) > hunk.new_count
    ):
        hunk.lines.pop()


def parse_unified_diff(diff_text: str) -> list[Hunk]:
    """Parse ``diff_text`` into hunks.

    Raises:
        InvalidDiffFormatError: If no hunk header is present or a line starting
            with ``@@`` does not follow the hunk header grammar.
    """
    raw_lines = diff_text.split("\n")
    if len(raw_lines) > 1 and raw_lines[-1] == "":
        raw_lines.pop()

    if not any(raw.startswith("@@") for raw in raw_lines):
        raise InvalidDiffFormatError(
            f"Invalid diff format: missing hunk header. {FORMAT_HINT}"
        )

    hunks: list[Hunk] = []
    current: Hunk | None = None
    for raw in raw_lines:
        if raw.startswith("@@"):
            match = HUNK_HEADER_PATTERN.match(raw)
            if match is None:
                raise InvalidDiffFormatError(
                    f"Invalid diff format: invalid hunk header '{raw}'. {FORMAT_HINT}"
                )
            old_start, old_count, new_start, new_count = match.groups()
            current = Hunk(
                old_start=int(old_start),
                old_count=int(old_count) if old_count is not None else 1,
                new_start=int(new_start),
                new_count=int(new_count) if new_count is not None else 1,
            )
            hunks.append(current)
            continue

        if current is None:
            if not raw.startswith(FILE_HEADER_PREFIXES) and raw.strip():
                logger.debug("Ignoring text before first hunk header: %r", raw)
            continue

        parsed = _parse_hunk_line(raw)
        if parsed is not None:
            current.lines.append(parsed)

    for hunk in hunks:
        _trim_trailing_blank_context(hunk)
    return hunks


# ==============================================================================
# APPLICATION
# ==============================================================================


def _describe_lines(lines: Sequence[str]) -> str:
    if not lines:
        return "  (none)"
    return "\n".join(f"  {line!r}" for line in lines)


def _verify_hunk(lines: Sequence[str], hunk: Hunk, number: int) -> None:
    expected = hunk.old_lines
    prefix = f"Failed to apply patch: hunk {number} ({hunk.header}) does not match file content."

    if len(expected) != hunk.old_count:
        raise DiffContextMismatchError(
            f"{prefix} The header declares {hunk.old_count} old line(s) but the hunk "
            f"contains {len(expected)} context/removed line(s)."
        )

    start = hunk.start_index
    if start < 0 or start + hunk.old_count > len(lines):
        raise DiffContextMismatchError(
            f"{prefix} The hunk covers lines {hunk.old_start}-"
            f"{hunk.old_start + hunk.old_count - 1} but the file has {len(lines)} line(s)."
        )

    actual = list(lines[start : start + hunk.old_count])
    if actual != expected:
        raise DiffContextMismatchError(
            f"{prefix}\nExpected:\n{_describe_lines(expected)}\n"
            f"Found:\n{_describe_lines(actual)}"
        )


def apply_hunks(document: str, hunks: Sequence[Hunk]) -> PatchResult:
    """Apply parsed hunks to ``document``.

    Hunk positions refer to the original document. All hunks are verified
    before any is applied; later hunks are shifted by the net line change of
    the earlier ones.

    Returns:
        A :class:`PatchResult` whose line range and changed lines describe the
        first hunk's changed region.

    Raises:
        InvalidDiffFormatError: If no hunks are given or hunks overlap.
        DiffContextMismatchError: If any hunk disagrees with the document.
    """
    if not hunks:
        raise InvalidDiffFormatError(f"Invalid diff format: missing hunk header. {FORMAT_HINT}")

    original = split_lines(document)

    previous_end = 0
    for number, hunk in enumerate(hunks, start=1):
        if hunk.start_index < previous_end:
            raise InvalidDiffFormatError(
                f"Invalid diff format: hunk {number} ({hunk.header}) overlaps the previous "
                "hunk. Hunks must be ordered by line number and must not overlap."
            )
        _verify_hunk(original, hunk, number)
        previous_end = hunk.start_index + hunk.old_count

    lines = list(original)
    offset = 0
    for hunk in hunks:
        index = hunk.start_index + offset
        replacement = hunk.new_lines
        lines[index : index + hunk.old_count] = replacement
        offset += len(replacement) - hunk.old_count

    first = hunks[0]
    region_offset, region = first.changed_region()
    start = first.start_index + region_offset + 1
    logger.debug("Applied %d hunk(s); first change at line %d", len(hunks), start)

    return PatchResult(
        content=join_lines(lines),
        line_range=LineRange(start, start + len(region) - 1),
        changed_lines=region,
    )


def apply_unified_diff(document: str, diff_text: str) -> PatchResult:
    """Parse ``diff_text`` and apply it to ``document``."""
    return apply_hunks(document, parse_unified_diff(diff_text))
