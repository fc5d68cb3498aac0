"""Change previews returned alongside successful edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from obsidian_editor.constants import CONTEXT_LINES
from obsidian_editor.core.buffer import context_window, split_lines
from obsidian_editor.core.patching import LineRange, PatchResult


@dataclass(frozen=True)
class ChangePreview:
    """Changed lines plus a little surrounding context from the patched note."""

    line_range: LineRange
    context_before: list[str]
    changed_content: list[str]
    context_after: list[str]

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "line_range": self.line_range.as_payload(),
            "context_before": self.context_before,
            "changed_content": self.changed_content,
            "context_after": self.context_after,
        }


def build_change_preview(result: PatchResult, radius: int = CONTEXT_LINES) -> ChangePreview:
    """Slice up to ``radius`` lines either side of ``result.line_range``."""
    lines = split_lines(result.content)
    before, after = context_window(lines, result.line_range.start, result.line_range.end, radius)
    return ChangePreview(
        line_range=result.line_range,
        context_before=before,
        changed_content=list(result.changed_lines),
        context_after=after,
    )
