"""Vault access: the content provider behind every note operation.

The editing core never touches the filesystem; note operations read and
persist documents through a :class:`VaultManager`. The filesystem
implementation keeps every path sandboxed inside the configured vault.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import logging
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from obsidian_editor.data_models import VaultMetadata

logger = logging.getLogger(__name__)


@runtime_checkable
class VaultManager(Protocol):
    """Minimal file API over a vault, addressed by vault-relative paths."""

    def read_file(self, relative_path: str) -> str: ...

    def write_file(self, relative_path: str, content: str) -> None: ...

    def delete_file(self, relative_path: str) -> None: ...

    def move_file(self, source_path: str, destination_path: str) -> None:
        """Move a file, replacing ``destination_path`` if it exists."""

    def create_directory(self, relative_path: str, recursive: bool = True) -> None: ...

    def list_files(
        self,
        relative_path: str = "",
        recursive: bool = True,
        include_directories: bool = False,
        file_types: Optional[Sequence[str]] = None,
    ) -> list[str]: ...

    def file_exists(self, relative_path: str) -> bool: ...

    @property
    def vault_path(self) -> str: ...


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def resolve_vault_path(vault: VaultMetadata, relative_path: str) -> Path:
    """Resolve a vault-relative path to an absolute path inside the vault.

    Paths are used as given (extension included); folders use ``/``.

    Raises:
        ValueError: If the path is empty, absolute, contains ``.``/``..``
            segments, or resolves outside the vault root.
    """
    cleaned = relative_path.strip().replace("\\", "/")
    if not cleaned:
        raise ValueError("Path cannot be empty.")
    if cleaned.startswith("/"):
        raise ValueError(f"Path '{relative_path}' must be relative to the vault root.")

    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(f"Path '{relative_path}' cannot contain '.' or '..' segments.")

    candidate = (vault.path / Path(*parts)).resolve(strict=False)
    vault_root = vault.path.resolve(strict=False)
    if not candidate.is_relative_to(vault_root):
        raise ValueError(f"Path '{relative_path}' escapes vault '{vault.name}'.")
    return candidate


def normalize_file_types(file_types: Optional[Iterable[str]]) -> Optional[set[str]]:
    """Lower-cased extensions without a leading dot, or ``None`` when nothing is filtered."""
    if not file_types:
        return None
    cleaned = {ext.strip().lstrip(".").lower() for ext in file_types if ext.strip()}
    return cleaned or None


def has_file_type(path: str, file_types: Optional[set[str]]) -> bool:
    if file_types is None:
        return True
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return False
    return name.rsplit(".", 1)[1].lower() in file_types


class FileSystemVaultManager:
    """UTF-8 note storage rooted at a configured vault directory."""

    def __init__(self, vault: VaultMetadata) -> None:
        self.vault = vault

    @property
    def vault_path(self) -> str:
        return str(self.vault.path)

    def _resolve(self, relative_path: str) -> Path:
        ensure_vault_ready(self.vault)
        return resolve_vault_path(self.vault, relative_path)

    def read_file(self, relative_path: str) -> str:
        target = self._resolve(relative_path)
        if not target.is_file():
            raise FileNotFoundError(f"Failed to read file {relative_path}: not found")
        try:
            return target.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(
                f"Failed to read file {relative_path}: not UTF-8 encoded"
            ) from exc

    def write_file(self, relative_path: str, content: str) -> None:
        target = self._resolve(relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %d characters to '%s' (vault '%s')", len(content), relative_path, self.vault.name)

    def delete_file(self, relative_path: str) -> None:
        target = self._resolve(relative_path)
        if target.is_dir():
            raise IsADirectoryError(
                f"Failed to delete file {relative_path}: it is a directory"
            )
        if not target.is_file():
            raise FileNotFoundError(f"Failed to delete file {relative_path}: not found")
        target.unlink()

    def move_file(self, source_path: str, destination_path: str) -> None:
        source = self._resolve(source_path)
        destination = self._resolve(destination_path)
        if not source.is_file():
            raise FileNotFoundError(f"Failed to move file {source_path}: not found")
        if destination.is_dir():
            raise IsADirectoryError(
                f"Failed to move file {source_path}: {destination_path} is a directory"
            )
        destination.parent.mkdir(parents=True, exist_ok=True)
        source.replace(destination)

    def create_directory(self, relative_path: str, recursive: bool = True) -> None:
        target = self._resolve(relative_path)
        if target.exists() and not target.is_dir():
            raise FileExistsError(
                f"Failed to create directory {relative_path}: a file exists at that path"
            )
        try:
            target.mkdir(parents=recursive, exist_ok=True)
        except FileNotFoundError as exc:
            raise FileNotFoundError(
                f"Failed to create directory {relative_path}: parent directory does not exist"
            ) from exc

    def _walk(self, root: Path, recursive: bool) -> Iterator[Path]:
        for entry in sorted(root.iterdir()):
            if entry.name.startswith("."):
                continue
            yield entry
            if recursive and entry.is_dir() and not entry.is_symlink():
                yield from self._walk(entry, recursive)

    def list_files(
        self,
        relative_path: str = "",
        recursive: bool = True,
        include_directories: bool = False,
        file_types: Optional[Sequence[str]] = None,
    ) -> list[str]:
        """List vault-relative paths below ``relative_path`` (the vault root when empty).

        Hidden entries such as ``.obsidian`` and ``.git`` are skipped, and symlinked
        folders are not descended into. ``file_types`` filters files by extension
        only. A folder that does not exist lists as empty.

        Raises:
            NotADirectoryError: If ``relative_path`` names a file.
        """
        ensure_vault_ready(self.vault)
        vault_root = self.vault.path.resolve(strict=False)
        root = self._resolve(relative_path) if relative_path.strip() else vault_root
        if not root.exists():
            return []
        if not root.is_dir():
            raise NotADirectoryError(f"Failed to list files in {relative_path}: not a directory")

        wanted = normalize_file_types(file_types)
        results: list[str] = []
        for entry in self._walk(root, recursive):
            relative = entry.relative_to(vault_root).as_posix()
            if entry.is_dir():
                if include_directories:
                    results.append(relative)
            elif entry.is_file() and has_file_type(relative, wanted):
                results.append(relative)
        return sorted(results)

    def file_exists(self, relative_path: str) -> bool:
        return self._resolve(relative_path).is_file()
