"""Deployment data models."""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ReadyState(str, Enum):
    """Lifecycle stages reported by the provider.

    Records keep the raw string, so values missing here pass through.
    """

    QUEUED = "QUEUED"
    BUILDING = "BUILDING"
    INITIALIZING = "INITIALIZING"
    READY = "READY"
    ERROR = "ERROR"
    CANCELED = "CANCELED"


class GitSource(BaseModel):
    """Nested git source info returned with ``withGitRepoInfo``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str | None = None
    ref: str | None = None
    sha: str | None = None


class DeploymentRef(BaseModel):
    """A list-query entry, only used to fetch the full record."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("uid", "id"))
    url: str = ""
    name: str | None = None


class DeploymentRecord(BaseModel):
    """Snapshot of a deployment as of the fetch that produced it."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("id", "uid"))
    url: str = ""
    name: str = ""
    ready_state: str = Field(
        default="",
        validation_alias=AliasChoices("readyState", "ready_state", "state"),
    )
    git_source: GitSource | None = Field(
        default=None, validation_alias=AliasChoices("gitSource", "git_source")
    )
    meta: dict[str, Any] = Field(default_factory=dict)

    @property
    def branch_ref(self) -> str | None:
        """Source branch, from git source info or the commit metadata."""
        if self.git_source and self.git_source.ref:
            return self.git_source.ref
        ref = self.meta.get("githubCommitRef")
        return str(ref) if ref else None
