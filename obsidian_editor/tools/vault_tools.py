"""MCP tools for vault management."""

import logging
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_editor.config import get_vault_configuration
from obsidian_editor.server import mcp
from obsidian_editor.models import ListVaultsInput, SetActiveVaultInput
from obsidian_editor.session import (
    set_active_vault as set_active_vault_session,
    get_active_vault,
    get_session_key,
)

logger = logging.getLogger(__name__)


@mcp.tool(name="list-vaults")
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List configured vaults, the default vault and this session's active vault."""
    configuration = get_vault_configuration()
    active = None
    if ctx is not None:
        try:
            active = get_active_vault(ctx).name
        except ValueError:
            active = None

    return {
        "default": configuration.default_vault,
        "active": active,
        "vaults": [metadata.as_payload() for metadata in configuration.vaults.values()],
    }


@mcp.tool(name="set-active-vault")
async def set_active_vault(
    input: SetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Set the vault used by later calls in this session that omit 'vault'."""
    metadata = set_active_vault_session(ctx, input.vault)
    logger.info("Active vault for session %s set to '%s'", get_session_key(ctx), metadata.name)
    return {
        "vault": metadata.name,
        "path": str(metadata.path),
        "status": "active",
    }
