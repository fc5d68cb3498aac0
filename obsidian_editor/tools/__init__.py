"""MCP tool definitions for Obsidian note editing.

Importing this package registers every @mcp.tool() with the server.
"""

from obsidian_editor.tools import vault_tools
from obsidian_editor.tools import note_tools
from obsidian_editor.tools import patch_tools
from obsidian_editor.tools import directory_tools

__all__ = [
    "vault_tools",
    "note_tools",
    "patch_tools",
    "directory_tools",
]
