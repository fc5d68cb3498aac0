"""Pydantic input models for anchor patches and unified diffs."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator

from .base import BaseNoteInput


class PatchContentInput(BaseNoteInput):
    """Input model for the patch-content tool.

    Inserts or replaces content relative to an anchor inside one note.

    Examples:
        >>> PatchContentInput(path="Plan.md", anchor_type="heading", anchor_value="Tasks",
        ...                   position="after", content="- [ ] Review")
    """

    content: str = Field(
        description=(
            "Content to insert or use as replacement. For frontmatter anchors this is "
            "the value written as 'key: value'."
        )
    )
    anchor_type: Literal["heading", "block", "frontmatter", "text_match", "line"] = Field(
        description=(
            "How to locate the target: 'heading' (heading text, no # markers), "
            "'block' (block id without ^), 'frontmatter' (key), "
            "'text_match' (exact text, may span lines, must occur once), "
            "'line' (1-based line number)."
        )
    )
    anchor_value: str = Field(
        description="Heading text, block id, frontmatter key, exact text or line number.",
        examples=["Tasks", "block-id", "status", "Exact line of text", "12"],
    )
    position: Literal["before", "after", "replace"] = Field(
        description=(
            "'before'/'after' insert around the anchor. 'replace' replaces the anchor; "
            "for headings it replaces the section body up to the next heading. "
            "Ignored for frontmatter anchors."
        )
    )
    create_if_missing: bool = Field(
        True,
        description="Start from an empty (or journal template) note if the file does not exist.",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "path": "Projects/Plan.md",
                    "anchor_type": "heading",
                    "anchor_value": "Tasks",
                    "position": "after",
                    "content": "- [ ] Write tests",
                    "vault": None
                },
                {
                    "path": "Projects/Plan.md",
                    "anchor_type": "frontmatter",
                    "anchor_value": "status",
                    "position": "replace",
                    "content": "in-progress",
                    "vault": "work"
                }
            ]
        }


class ApplyDiffPatchInput(BaseNoteInput):
    """Input model for the apply-diff-patch tool."""

    diff: str = Field(
        min_length=1,
        description=(
            "Unified diff hunks to apply, e.g. '@@ -2,1 +2,1 @@\\n-old line\\n+new line'. "
            "Context (' ') and removed ('-') lines must match the note exactly."
        ),
    )

    @field_validator("diff")
    @classmethod
    def validate_diff_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(
                "Diff cannot be empty. Provide unified diff hunks starting with '@@'."
            )
        return v
