"""Result values printed by the toolkit commands.

Every command reports through one of these models rather than raising: the CLI
serialises the model to a single JSON line and derives its exit code from
`success`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Base for all command results."""

    success: bool = Field(default=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class Failure(ToolResult):
    """An expected, terminal failure of a single command."""

    success: bool = Field(default=False)
    error: str
