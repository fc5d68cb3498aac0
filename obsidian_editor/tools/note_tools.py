"""Note management MCP tools.

Thin wrappers over obsidian_editor.core.note_operations:
- read-note, create-note, edit-note
- append-content
- move-note, delete-note
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_editor.config import get_vault_configuration
from obsidian_editor.server import mcp
from obsidian_editor.session import resolve_vault_manager
from obsidian_editor.models import (
    ReadNoteInput,
    CreateNoteInput,
    EditNoteInput,
    AppendContentInput,
    DeleteNoteInput,
    MoveNoteInput,
)
from obsidian_editor.core.note_operations import (
    read_note,
    create_note,
    edit_note,
    append_content,
    delete_note,
    move_note,
)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================

@mcp.tool(name="read-note")
async def read_note_tool(
    input: ReadNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read the full content of a note.

    Args:
        input (ReadNoteInput): path, optional vault, include_frontmatter

    Returns:
        {"success": true, "data": {"content": str, "path": str, "frontmatter"?: dict}}
    """
    vault = resolve_vault_manager(input.vault, ctx)
    return read_note(vault, input.path, include_frontmatter=input.include_frontmatter)


# ==============================================================================
# WRITE OPERATIONS
# ==============================================================================

@mcp.tool(name="create-note")
async def create_note_tool(
    input: CreateNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Create a new note. Fails if it exists unless overwrite=true."""
    vault = resolve_vault_manager(input.vault, ctx)
    return create_note(vault, input.path, input.content, overwrite=input.overwrite)


@mcp.tool(name="edit-note")
async def edit_note_tool(
    input: EditNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Replace the entire content of a note.

    For targeted edits prefer patch-content (anchor based) or apply-diff-patch.
    """
    vault = resolve_vault_manager(input.vault, ctx)
    return edit_note(vault, input.path, input.content)


@mcp.tool(name="append-content")
async def append_content_tool(
    input: AppendContentInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Append content to the end of a note.

    Missing journal notes are created from the configured daily-note template.
    """
    vault = resolve_vault_manager(input.vault, ctx)
    return append_content(
        vault,
        input.path,
        input.content,
        newline=input.newline,
        create_if_missing=input.create_if_missing,
        journal=get_vault_configuration().journal,
    )


@mcp.tool(name="move-note")
async def move_note_tool(
    input: MoveNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Move or rename a note within the vault."""
    vault = resolve_vault_manager(input.vault, ctx)
    return move_note(vault, input.source_path, input.destination_path, overwrite=input.overwrite)


@mcp.tool(name="delete-note")
async def delete_note_tool(
    input: DeleteNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Delete a note. Requires confirm=true."""
    vault = resolve_vault_manager(input.vault, ctx)
    return delete_note(vault, input.path, input.confirm)
