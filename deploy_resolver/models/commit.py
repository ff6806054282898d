"""Source-control commit models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommitRef(BaseModel):
    """A commit and its ordered parents (index 1 is the merged-in tip)."""

    model_config = ConfigDict(frozen=True)

    sha: str
    parents: list[str] = Field(default_factory=list)

    @field_validator("parents", mode="before")
    @classmethod
    def _parent_shas(cls, value: Any) -> Any:
        # The commits API returns parents as objects with a ``sha`` key
        if isinstance(value, list):
            return [p["sha"] if isinstance(p, dict) else p for p in value]
        return value

    @property
    def is_merge(self) -> bool:
        return len(self.parents) >= 2

    @property
    def merge_parent(self) -> str | None:
        return self.parents[1] if self.is_merge else None
