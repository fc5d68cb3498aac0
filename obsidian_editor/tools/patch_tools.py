"""Structured editing MCP tools: anchor patches and unified diffs."""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_editor.config import get_vault_configuration
from obsidian_editor.server import mcp
from obsidian_editor.session import resolve_vault_manager
from obsidian_editor.models import PatchContentInput, ApplyDiffPatchInput
from obsidian_editor.core.note_operations import patch_content, apply_diff_patch


# ==============================================================================
# STRUCTURED EDITING
# ==============================================================================

@mcp.tool(name="patch-content")
async def patch_content_tool(
    input: PatchContentInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Insert or replace content at an anchor inside a note.

    Anchors:
        - heading: heading text without # markers (first match, any level, case-insensitive).
          position=replace swaps the section body up to the next heading.
          If content starts with the same heading it is dropped for before/after.
        - block: block id without ^ (line ending in ^id)
        - frontmatter: key; always writes 'key: content', creating the block if needed
        - text_match: exact text (may span lines). Must occur exactly once; otherwise
          the error lists every occurrence so a longer pattern can be chosen.
        - line: 1-based line number

    Returns:
        {"success": true, "data": {"path": str, "change_preview": {
            "line_range": {"start": int, "end": int},
            "context_before": [str], "changed_content": [str], "context_after": [str]}}}

    Error Handling:
        - Anchor not found → "not found"
        - Ambiguous text_match → "found N times" with every location
        - Bad line → "must be an integer" / "out of range (1-N)"
        - Missing file with create_if_missing=false → "does not exist"
    """
    vault = resolve_vault_manager(input.vault, ctx)
    return patch_content(
        vault,
        input.path,
        input.content,
        input.anchor_type,
        input.anchor_value,
        input.position,
        create_if_missing=input.create_if_missing,
        journal=get_vault_configuration().journal,
    )


@mcp.tool(name="apply-diff-patch")
async def apply_diff_patch_tool(
    input: ApplyDiffPatchInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Apply unified diff hunks to an existing note.

    Each hunk needs a header '@@ -old_start,old_count +new_start,new_count @@'
    followed by ' ' context, '-' removed and '+' added lines. Line numbers refer to
    the note before any hunk is applied. All hunks are checked first: if any does
    not match the note, nothing is written.

    Error Handling:
        - No/invalid '@@' header → "Invalid diff format ... hunk header"
        - Context mismatch → "Failed to apply patch ... does not match file content"
        - Missing file → "does not exist"
    """
    vault = resolve_vault_manager(input.vault, ctx)
    return apply_diff_patch(vault, input.path, input.diff)
