"""Configuration loading and vault registry."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml

from obsidian_editor.constants import CONFIG_PATH, DATE_PLACEHOLDER
from obsidian_editor.data_models import JournalConfig, VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)


def _load_journal_config(section: Any) -> Optional[JournalConfig]:
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ValueError("Journal configuration must be a mapping")

    path_template = section.get("path_template")
    file_template = section.get("file_template")
    if not isinstance(path_template, str) or DATE_PLACEHOLDER not in path_template:
        raise ValueError(
            f"Journal 'path_template' must be a string containing '{DATE_PLACEHOLDER}'"
        )
    if not isinstance(file_template, str) or not file_template.strip():
        raise ValueError("Journal 'file_template' must be a non-empty string")

    return JournalConfig(path_template=path_template.strip(), file_template=file_template.strip())


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to ``vaults.yaml``
        at the repository root, or ``$OBSIDIAN_EDITOR_CONFIG`` when set.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata, the configured default vault name and optional journal settings.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a YAML mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        description = entry.get("description") or ""
        if not isinstance(description, str):
            raise ValueError(f"Vault '{name}' has a non-string 'description'")

        resolved_path = Path(raw_path).expanduser().resolve(strict=False)
        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=description.strip(),
            exists=resolved_path.is_dir(),
        )

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    journal = _load_journal_config(raw_config.get("journal"))
    logger.debug("Loaded %d vault(s) from %s", len(processed), config_path)
    return VaultConfiguration(default_vault=default_vault, vaults=processed, journal=journal)


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Return the process-wide configuration, loading it on first use."""
    return load_vault_configuration(CONFIG_PATH)
