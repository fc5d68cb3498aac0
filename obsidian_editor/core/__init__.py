"""Core editing logic: anchor patches, unified diffs and vault-bound operations."""

from obsidian_editor.core.anchors import Anchor, AnchorType, MatchSpan, resolve_anchor
from obsidian_editor.core.diff import Hunk, apply_unified_diff, parse_unified_diff
from obsidian_editor.core.patching import LineRange, PatchResult, Position, apply_patch, resolve_and_patch
from obsidian_editor.core.preview import ChangePreview, build_change_preview

__all__ = [
    "Anchor",
    "AnchorType",
    "MatchSpan",
    "resolve_anchor",
    "Hunk",
    "apply_unified_diff",
    "parse_unified_diff",
    "LineRange",
    "PatchResult",
    "Position",
    "apply_patch",
    "resolve_and_patch",
    "ChangePreview",
    "build_change_preview",
]
