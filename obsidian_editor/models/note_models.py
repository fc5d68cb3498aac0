"""Pydantic input models for note CRUD operations.

- Read note content
- Create new notes
- Replace note content
- Append to notes
- Move/rename notes
- Delete notes
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from .base import BaseNoteInput, validate_note_path


class ReadNoteInput(BaseNoteInput):
    """Input model for the read-note tool.

    Examples:
        >>> ReadNoteInput(path="Daily Notes/2025-10-27.md")
    """

    include_frontmatter: bool = Field(
        False,
        description="When true, also return the parsed YAML frontmatter as a dictionary.",
    )


class CreateNoteInput(BaseNoteInput):
    """Input model for the create-note tool."""

    content: str = Field(
        description="Full markdown content for the note. Can be empty to create a blank note."
    )
    overwrite: bool = Field(
        False,
        description="Replace the note if it already exists.",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "path": "Projects/New Project.md",
                    "content": "# New Project\n\nGoals:\n- Goal 1",
                    "overwrite": False,
                    "vault": None
                }
            ]
        }


class EditNoteInput(BaseNoteInput):
    """Input model for the edit-note tool (full content replacement)."""

    content: str = Field(
        description=(
            "New complete markdown content that will replace the existing note. "
            "Prefer patch-content or apply-diff-patch for targeted edits."
        )
    )


class AppendContentInput(BaseNoteInput):
    """Input model for the append-content tool."""

    content: str = Field(
        min_length=1,
        description="Markdown to append to the end of the note.",
    )
    newline: bool = Field(
        True,
        description="Ensure the existing content ends with a newline before appending.",
    )
    create_if_missing: bool = Field(
        True,
        description="Create the note (from the journal template when applicable) if it does not exist.",
    )


class DeleteNoteInput(BaseNoteInput):
    """Input model for the delete-note tool."""

    confirm: bool = Field(
        False,
        description="Must be true to delete the note. Deletion cannot be undone.",
    )


class MoveNoteInput(BaseModel):
    """Input model for the move-note tool."""

    source_path: str = Field(
        min_length=1,
        description="Current vault-relative path of the note.",
    )
    destination_path: str = Field(
        min_length=1,
        description="New vault-relative path for the note.",
    )
    overwrite: bool = Field(
        False,
        description="Replace the destination if it already exists.",
    )
    vault: Optional[str] = Field(
        None,
        description="Vault name (omit to use active vault).",
    )

    @field_validator("source_path", "destination_path")
    @classmethod
    def validate_paths(cls, v: str) -> str:
        return validate_note_path(v)

    @field_validator("vault")
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list-vaults."
            )
        return v.strip() if v else None
