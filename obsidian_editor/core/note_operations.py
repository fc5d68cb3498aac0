"""Note operations exposed as MCP tools.

Each operation reads a note through a :class:`VaultManager`, hands the text to
the editing core, persists the result and returns a response envelope::

    {"success": True, "data": {...}, "metadata": {"timestamp": ..., "affected_files": [...]}}
    {"success": False, "error": "<message>", "metadata": {"timestamp": ...}}

Failures never write to the vault. Error messages from the editing core are
passed through unchanged so the caller can correct its request.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

import frontmatter
import yaml

from obsidian_editor.constants import DATE_PLACEHOLDER
from obsidian_editor.core.diff import apply_unified_diff
from obsidian_editor.core.patching import Position, resolve_and_patch
from obsidian_editor.core.preview import build_change_preview
from obsidian_editor.core.vault_operations import VaultManager
from obsidian_editor.data_models import JournalConfig

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _success(data: dict[str, Any], affected_files: Optional[list[str]] = None) -> dict[str, Any]:
    metadata: dict[str, Any] = {"timestamp": _timestamp()}
    if affected_files:
        metadata["affected_files"] = affected_files
    return {"success": True, "data": data, "metadata": metadata}


def _failure(operation: str, exc: Exception) -> dict[str, Any]:
    logger.warning("%s failed: %s", operation, exc)
    return {"success": False, "error": str(exc), "metadata": {"timestamp": _timestamp()}}


def _parse_frontmatter(text: str) -> dict[str, Any]:
    """Extract YAML frontmatter metadata from raw note text.

    Raises:
        ValueError: If the frontmatter block exists but cannot be parsed as YAML.
    """
    if not text:
        return {}

    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Frontmatter contains invalid YAML: {exc}") from exc

    def _convert(value: Any) -> Any:
        if isinstance(value, Mapping):
            return {k: _convert(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_convert(item) for item in value]
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return value

    return {key: _convert(value) for key, value in (post.metadata or {}).items()}


def get_or_initialize_content(
    vault: VaultManager,
    path: str,
    journal: Optional[JournalConfig] = None,
) -> str:
    """Return a note's current text, or the text a new note should start from.

    Existing notes are read as-is. A missing note whose path matches the
    journal path template is seeded from the journal file template with
    ``{{date}}`` substituted. Any other missing note starts empty.
    """
    if vault.file_exists(path):
        return vault.read_file(path)

    if journal is None:
        return ""

    date_str = journal.match_date(path)
    if date_str is None:
        return ""

    template = vault.read_file(journal.file_template)
    logger.info("Initializing journal note '%s' from template '%s'", path, journal.file_template)
    return template.replace(DATE_PLACEHOLDER, date_str)


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


def read_note(vault: VaultManager, path: str, include_frontmatter: bool = False) -> dict[str, Any]:
    """Read a note's full text, optionally with its parsed frontmatter."""
    try:
        content = vault.read_file(path)
        data: dict[str, Any] = {"content": content, "path": path}
        if include_frontmatter:
            data["frontmatter"] = _parse_frontmatter(content)
        return _success(data)
    except (ValueError, OSError) as exc:
        return _failure("read-note", exc)


def create_note(vault: VaultManager, path: str, content: str, overwrite: bool = False) -> dict[str, Any]:
    """Create a note, refusing to replace an existing one unless ``overwrite``."""
    try:
        if vault.file_exists(path) and not overwrite:
            raise FileExistsError(f"File {path} already exists. Set overwrite=true to replace it.")
        vault.write_file(path, content)
        logger.info("Created note '%s'", path)
        return _success({"success": True, "path": path}, [path])
    except (ValueError, OSError) as exc:
        return _failure("create-note", exc)


def edit_note(vault: VaultManager, path: str, content: str) -> dict[str, Any]:
    """Replace a note's full content."""
    try:
        vault.write_file(path, content)
        logger.info("Replaced content of note '%s'", path)
        return _success({"success": True, "path": path}, [path])
    except (ValueError, OSError) as exc:
        return _failure("edit-note", exc)


def delete_note(vault: VaultManager, path: str, confirm: bool) -> dict[str, Any]:
    """Delete a note. ``confirm`` must be true."""
    try:
        if not confirm:
            raise ValueError("Must set confirm=true to delete file")
        vault.delete_file(path)
        logger.info("Deleted note '%s'", path)
        return _success({"success": True, "path": path}, [path])
    except (ValueError, OSError) as exc:
        return _failure("delete-note", exc)


def move_note(
    vault: VaultManager,
    source_path: str,
    destination_path: str,
    overwrite: bool = False,
) -> dict[str, Any]:
    """Move or rename a note.

    Every precondition is checked before the vault is touched, so a failed move
    never removes the source or an existing destination.
    """
    try:
        if not vault.file_exists(source_path):
            raise FileNotFoundError(f"File {source_path} does not exist")
        if source_path == destination_path:
            raise ValueError(f"Source and destination are the same path: {source_path}")
        if vault.file_exists(destination_path) and not overwrite:
            raise FileExistsError(
                f"Destination {destination_path} already exists. Set overwrite=true to replace it."
            )

        vault.move_file(source_path, destination_path)
        logger.info("Moved note '%s' to '%s'", source_path, destination_path)
        return _success(
            {"success": True, "source_path": source_path, "destination_path": destination_path},
            [source_path, destination_path],
        )
    except (ValueError, OSError) as exc:
        return _failure("move-note", exc)


def append_content(
    vault: VaultManager,
    path: str,
    content: str,
    newline: bool = True,
    create_if_missing: bool = True,
    journal: Optional[JournalConfig] = None,
) -> dict[str, Any]:
    """Append text to the end of a note, creating it when allowed."""
    try:
        if not create_if_missing and not vault.file_exists(path):
            raise FileNotFoundError(f"File {path} does not exist")

        updated = get_or_initialize_content(vault, path, journal)
        if newline and updated and not updated.endswith("\n"):
            updated += "\n"
        updated += content

        vault.write_file(path, updated)
        logger.info("Appended %d characters to note '%s'", len(content), path)
        return _success({"success": True, "path": path}, [path])
    except (ValueError, OSError) as exc:
        return _failure("append-content", exc)


def patch_content(
    vault: VaultManager,
    path: str,
    content: str,
    anchor_type: str,
    anchor_value: str,
    position: str = Position.REPLACE.value,
    create_if_missing: bool = True,
    journal: Optional[JournalConfig] = None,
) -> dict[str, Any]:
    """Insert or replace content relative to an anchor and persist the note.

    Returns:
        On success ``data`` holds ``path`` and a ``change_preview`` with the
        changed line range, the changed lines and up to two lines of context on
        each side.
    """
    try:
        if not create_if_missing and not vault.file_exists(path):
            raise FileNotFoundError(f"File {path} does not exist")

        current = get_or_initialize_content(vault, path, journal)
        result = resolve_and_patch(current, anchor_type, anchor_value, position, content)
        vault.write_file(path, result.content)

        logger.info(
            "Patched note '%s' at %s '%s' (%s), lines %d-%d",
            path,
            anchor_type,
            anchor_value,
            position,
            result.line_range.start,
            result.line_range.end,
        )
        preview = build_change_preview(result)
        return _success(
            {"success": True, "path": path, "change_preview": preview.as_payload()},
            [path],
        )
    except (ValueError, OSError) as exc:
        return _failure("patch-content", exc)


def apply_diff_patch(vault: VaultManager, path: str, diff: str) -> dict[str, Any]:
    """Apply a unified diff to an existing note.

    Either every hunk applies or the note is left untouched.
    """
    try:
        if not vault.file_exists(path):
            raise FileNotFoundError(f"File {path} does not exist")

        current = vault.read_file(path)
        result = apply_unified_diff(current, diff)
        vault.write_file(path, result.content)

        logger.info(
            "Applied diff to note '%s', first change at lines %d-%d",
            path,
            result.line_range.start,
            result.line_range.end,
        )
        preview = build_change_preview(result)
        return _success(
            {"success": True, "path": path, "change_preview": preview.as_payload()},
            [path],
        )
    except (ValueError, OSError) as exc:
        return _failure("apply-diff-patch", exc)


# ==============================================================================
# DIRECTORY OPERATIONS
# ==============================================================================


def create_directory(vault: VaultManager, path: str, recursive: bool = True) -> dict[str, Any]:
    """Create a folder inside the vault. Existing folders are left as they are."""
    try:
        vault.create_directory(path, recursive=recursive)
        logger.info("Created directory '%s'", path)
        return _success({"success": True, "path": path}, [path])
    except (ValueError, OSError) as exc:
        return _failure("create-directory", exc)


def list_files(
    vault: VaultManager,
    directory: Optional[str] = None,
    recursive: bool = True,
    include_directories: bool = False,
    file_types: Optional[list[str]] = None,
) -> dict[str, Any]:
    """List vault-relative file paths, across the vault or below ``directory``.

    Returns:
        ``data`` holds the sorted ``files`` and their ``count``; ``directory``
        is echoed back when one was given.
    """
    operation = "list-files-in-dir" if directory else "list-files-in-vault"
    try:
        files = vault.list_files(
            directory or "",
            recursive=recursive,
            include_directories=include_directories,
            file_types=file_types,
        )
        data: dict[str, Any] = {"files": files, "count": len(files)}
        if directory:
            data["directory"] = directory
        return _success(data)
    except (ValueError, OSError) as exc:
        return _failure(operation, exc)
