"""Folder and listing MCP tools.

- create-directory
- list-files-in-vault: discover paths to read or patch
- list-files-in-dir: same, scoped to one folder
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_editor.server import mcp
from obsidian_editor.session import resolve_vault_manager
from obsidian_editor.models import CreateDirectoryInput, ListFilesInVaultInput, ListFilesInDirInput
from obsidian_editor.core.note_operations import create_directory, list_files


@mcp.tool(name="create-directory")
async def create_directory_tool(
    input: CreateDirectoryInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Create a folder in the vault (parents too unless recursive=false)."""
    vault = resolve_vault_manager(input.vault, ctx)
    return create_directory(vault, input.path, recursive=input.recursive)


@mcp.tool(name="list-files-in-vault")
async def list_files_in_vault_tool(
    input: ListFilesInVaultInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List file paths in the vault.

    Use the returned paths with read-note, patch-content and apply-diff-patch.
    Hidden folders such as .obsidian are skipped.

    Returns:
        {"success": true, "data": {"files": [str], "count": int}}
    """
    vault = resolve_vault_manager(input.vault, ctx)
    return list_files(
        vault,
        recursive=input.recursive,
        include_directories=input.include_directories,
        file_types=input.file_types,
    )


@mcp.tool(name="list-files-in-dir")
async def list_files_in_dir_tool(
    input: ListFilesInDirInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List file paths below one folder. A missing folder lists as empty.

    Returns:
        {"success": true, "data": {"files": [str], "count": int, "directory": str}}
    """
    vault = resolve_vault_manager(input.vault, ctx)
    return list_files(
        vault,
        input.path,
        recursive=input.recursive,
        include_directories=input.include_directories,
        file_types=input.file_types,
    )
