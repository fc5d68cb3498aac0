"""Module-level constants for the Obsidian editor MCP server."""

import os
from pathlib import Path

# Configuration
CONFIG_PATH = Path(
    os.environ.get("OBSIDIAN_EDITOR_CONFIG", Path(__file__).parent.parent / "vaults.yaml")
)

# Change previews
CONTEXT_LINES = 2

# Template placeholder used by journal path and file templates
DATE_PLACEHOLDER = "{{date}}"

# Logging
LOG_LEVEL = "INFO"
