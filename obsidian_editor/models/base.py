"""Base Pydantic models for MCP tool input validation.

Base Models:
- BaseNoteInput: Common validation for note paths and vault names
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


def validate_note_path(v: str) -> str:
    """Validate a vault-relative note path.

    Enforces:
    - Non-empty path
    - Relative path only (no leading '/')
    - No '.' or '..' segments

    Unlike note titles, paths keep their extension: ``Notes/todo.md`` and
    ``NoExtension`` are both valid.
    """
    cleaned = v.strip()

    if not cleaned:
        raise ValueError(
            "Note path cannot be empty. "
            "Provide a vault-relative path like 'Daily Notes/2025-10-27.md'."
        )

    if cleaned.startswith("/"):
        raise ValueError(
            "Note path must be relative to the vault root. "
            "Do not start with '/'. "
            f"Invalid path: '{cleaned}'"
        )

    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(
            "Note path cannot contain '.' or '..' path segments. "
            f"Invalid path: '{cleaned}'"
        )

    return cleaned


class BaseNoteInput(BaseModel):
    """Base model for single-note operations.

    All note-related input models inherit the ``path`` and ``vault`` fields.
    """

    path: str = Field(
        min_length=1,
        description=(
            "Vault-relative path of the note, including its extension. "
            "Examples: 'Daily Notes/2025-10-27.md', 'Projects/Plan.md'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Daily Notes/2025-10-27.md", "Projects/Plan.md", "README.md"],
    )

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list-vaults to discover available vaults."
        ),
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        return validate_note_path(v)

    @field_validator("vault")
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Reject empty vault names; strip surrounding whitespace."""
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list-vaults."
            )

        return v.strip() if v else None
