"""Shared fixtures: an in-memory vault standing in for the filesystem."""

from __future__ import annotations

from typing import Optional, Sequence

import pytest

from obsidian_editor.core.vault_operations import has_file_type, normalize_file_types
from obsidian_editor.data_models import JournalConfig


class InMemoryVaultManager:
    """Dictionary-backed VaultManager used by note operation tests."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.directories: set[str] = set()
        self.writes: list[str] = []
        for path in self.files:
            self._add_parents(path)

    def _add_parents(self, path: str) -> None:
        parts = path.split("/")[:-1]
        for index in range(1, len(parts) + 1):
            self.directories.add("/".join(parts[:index]))

    @property
    def vault_path(self) -> str:
        return "/fake/vault"

    def read_file(self, relative_path: str) -> str:
        if relative_path not in self.files:
            raise FileNotFoundError(f"Failed to read file {relative_path}: not found")
        return self.files[relative_path]

    def write_file(self, relative_path: str, content: str) -> None:
        self._add_parents(relative_path)
        self.files[relative_path] = content
        self.writes.append(relative_path)

    def delete_file(self, relative_path: str) -> None:
        if relative_path not in self.files:
            raise FileNotFoundError(f"Failed to delete file {relative_path}: not found")
        del self.files[relative_path]

    def move_file(self, source_path: str, destination_path: str) -> None:
        if source_path not in self.files:
            raise FileNotFoundError(f"Failed to move file {source_path}: not found")
        content = self.files.pop(source_path)
        self._add_parents(destination_path)
        self.files[destination_path] = content

    def create_directory(self, relative_path: str, recursive: bool = True) -> None:
        if relative_path in self.files:
            raise FileExistsError(
                f"Failed to create directory {relative_path}: a file exists at that path"
            )
        parent = relative_path.rpartition("/")[0]
        if not recursive and parent and parent not in self.directories:
            raise FileNotFoundError(
                f"Failed to create directory {relative_path}: parent directory does not exist"
            )
        self._add_parents(relative_path)
        self.directories.add(relative_path)

    def list_files(
        self,
        relative_path: str = "",
        recursive: bool = True,
        include_directories: bool = False,
        file_types: Optional[Sequence[str]] = None,
    ) -> list[str]:
        prefix = f"{relative_path.rstrip('/')}/" if relative_path else ""
        wanted = normalize_file_types(file_types)

        def _included(path: str) -> bool:
            if not path.startswith(prefix):
                return False
            return recursive or "/" not in path[len(prefix):]

        results = [path for path in self.files if _included(path) and has_file_type(path, wanted)]
        if include_directories:
            results.extend(path for path in self.directories if _included(path))
        return sorted(results)

    def file_exists(self, relative_path: str) -> bool:
        return relative_path in self.files


DAILY_TEMPLATE = """---
date: {{date}}
tags: [journal]
---

# {{date}}

## Journal
"""


@pytest.fixture
def make_vault():
    """Factory building an in-memory vault from a ``{path: content}`` mapping."""

    def _make(files: dict[str, str] | None = None) -> InMemoryVaultManager:
        return InMemoryVaultManager(files)

    return _make


@pytest.fixture
def journal() -> JournalConfig:
    """Journal settings pointing at ``Journal/<date>.md`` and a daily template."""
    return JournalConfig(
        path_template="Journal/{{date}}.md",
        file_template="Templates/Daily Note.md",
    )


@pytest.fixture
def daily_template() -> str:
    """Daily note template containing ``{{date}}`` placeholders."""
    return DAILY_TEMPLATE
