"""Data models for vault metadata and configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from obsidian_editor.constants import DATE_PLACEHOLDER


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


@dataclass(frozen=True)
class JournalConfig:
    """Daily-note settings used to seed missing journal files from a template.

    ``path_template`` is a vault-relative path containing ``{{date}}``, e.g.
    ``Journal/{{date}}.md``. ``file_template`` is the vault-relative note whose
    content seeds new journal files.
    """

    path_template: str
    file_template: str

    def match_date(self, path: str) -> Optional[str]:
        """Return the ``YYYY-MM-DD`` date when ``path`` is a journal path."""
        pattern = re.escape(self.path_template).replace(
            re.escape(DATE_PLACEHOLDER), r"(\d{4}-\d{2}-\d{2})"
        )
        match = re.fullmatch(pattern, path)
        return match.group(1) if match else None

    def as_payload(self) -> dict[str, str]:
        return {"path_template": self.path_template, "file_template": self.file_template}


@dataclass
class VaultConfiguration:
    """Holds vault metadata, the default vault and optional journal settings.

    Loaded once from vaults.yaml (see :func:`obsidian_editor.config.get_vault_configuration`).
    """

    default_vault: str
    vaults: dict[str, VaultMetadata]
    journal: Optional[JournalConfig] = field(default=None)

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.vaults)) or "none"
            raise ValueError(f"Unknown vault '{name}'. Available vaults: {available}") from exc

    def as_payload(self) -> dict[str, Any]:
        """Return serializable configuration payload."""
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
            "journal": self.journal.as_payload() if self.journal else None,
        }
