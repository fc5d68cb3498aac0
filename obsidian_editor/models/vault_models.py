"""Pydantic input models for vault management operations."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ListVaultsInput(BaseModel):
    """Input model for the list-vaults tool. Takes no parameters."""


class SetActiveVaultInput(BaseModel):
    """Input model for the set-active-vault tool.

    Examples:
        >>> SetActiveVaultInput(vault="personal")
    """

    vault: str = Field(
        min_length=1,
        description=(
            "Friendly vault name from vaults.yaml configuration. "
            "Use list-vaults to discover valid names."
        ),
        examples=["personal", "work"],
    )

    @field_validator("vault")
    @classmethod
    def validate_vault(cls, v: str) -> str:
        cleaned = v.strip()

        if not cleaned:
            raise ValueError(
                "Vault name cannot be empty. "
                "Provide a valid vault name from vaults.yaml configuration. "
                "Use list-vaults to see available vaults."
            )

        return cleaned
