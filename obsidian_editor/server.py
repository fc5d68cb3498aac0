"""FastMCP server initialization and tool registration."""

import logging

from mcp.server.fastmcp import FastMCP

from obsidian_editor.constants import LOG_LEVEL

# Initialize logger
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("obsidian_editor")

# Tool modules are imported in run_server() (and by obsidian_editor.tools) to
# register all @mcp.tool() decorators


def run_server():
    """Start the MCP server with stdio transport."""
    from obsidian_editor import tools  # noqa: F401

    logger.info("Starting Obsidian Editor MCP Server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
