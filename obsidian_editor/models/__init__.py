"""Pydantic input models for MCP tool validation.

Each model is the input schema for one tool, with field-level validation and
descriptions that end up in the JSON schema MCP clients see.

Architecture:
- base: BaseNoteInput (path + vault validation)
- note_models: note CRUD tools
- patch_models: patch-content and apply-diff-patch
- directory_models: create-directory and the file listing tools
- vault_models: vault management tools
"""

from .base import BaseNoteInput, validate_note_path
from .note_models import (
    ReadNoteInput,
    CreateNoteInput,
    EditNoteInput,
    AppendContentInput,
    DeleteNoteInput,
    MoveNoteInput,
)
from .patch_models import PatchContentInput, ApplyDiffPatchInput
from .directory_models import CreateDirectoryInput, ListFilesInVaultInput, ListFilesInDirInput
from .vault_models import ListVaultsInput, SetActiveVaultInput

__all__ = [
    "BaseNoteInput",
    "validate_note_path",
    "ReadNoteInput",
    "CreateNoteInput",
    "EditNoteInput",
    "AppendContentInput",
    "DeleteNoteInput",
    "MoveNoteInput",
    "PatchContentInput",
    "ApplyDiffPatchInput",
    "CreateDirectoryInput",
    "ListFilesInVaultInput",
    "ListFilesInDirInput",
    "ListVaultsInput",
    "SetActiveVaultInput",
]
