"""Pydantic input models for folder creation and file listing."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import validate_note_path


class _ListFilesOptions(BaseModel):
    """Filters shared by the listing tools."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list-vaults to discover available vaults."
        ),
    )
    recursive: bool = Field(
        True,
        description="Include files in subfolders.",
    )
    include_directories: bool = Field(
        False,
        description="Also list folder paths.",
    )
    file_types: Optional[list[str]] = Field(
        None,
        description="Only list files with these extensions, e.g. ['md', 'pdf']. Omit to list every file.",
        examples=[["md"], ["md", "canvas"]],
    )

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

    @field_validator("file_types")
    @classmethod
    def validate_file_types(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Strip leading dots so '.md' and 'md' behave the same."""
        if v is None:
            return None
        cleaned = [ext.strip().lstrip(".") for ext in v]
        if any(not ext for ext in cleaned):
            raise ValueError("File types cannot be empty. Use extensions like 'md' or 'pdf'.")
        return cleaned


class ListFilesInVaultInput(_ListFilesOptions):
    """Input model for the list-files-in-vault tool.

    Examples:
        >>> ListFilesInVaultInput(file_types=["md"])
    """


class ListFilesInDirInput(_ListFilesOptions):
    """Input model for the list-files-in-dir tool."""

    path: str = Field(
        min_length=1,
        description="Vault-relative folder path, e.g. 'Projects' or 'Daily Notes/2025'.",
        examples=["Projects", "Daily Notes/2025"],
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        return validate_note_path(v).rstrip("/")


class CreateDirectoryInput(BaseModel):
    """Input model for the create-directory tool."""

    path: str = Field(
        min_length=1,
        description="Vault-relative folder path to create, e.g. 'Projects/New'.",
    )
    recursive: bool = Field(
        True,
        description="Create missing parent folders as well.",
    )
    vault: Optional[str] = Field(
        None,
        description="Vault name (omit to use active vault).",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        return validate_note_path(v).rstrip("/")

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
