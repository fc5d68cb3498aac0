"""Obsidian Editor MCP Server

Anchor-addressed patches and unified diffs over Obsidian notes, exposed via the
Model Context Protocol. The editing core (``obsidian_editor.core``) is pure and
can be used without a server or a vault configuration.
"""

from obsidian_editor.core.anchors import Anchor, AnchorType, MatchSpan, resolve_anchor
from obsidian_editor.core.diff import Hunk, apply_unified_diff, parse_unified_diff
from obsidian_editor.core.patching import (
    LineRange,
    PatchResult,
    Position,
    apply_patch,
    resolve_and_patch,
)
from obsidian_editor.core.preview import ChangePreview, build_change_preview
from obsidian_editor.data_models import JournalConfig, VaultConfiguration, VaultMetadata

__version__ = "0.1.0"
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
    "JournalConfig",
    "VaultConfiguration",
    "VaultMetadata",
]
