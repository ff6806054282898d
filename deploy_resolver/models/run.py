"""Run-level models: search modes and coordinator results."""

from enum import Enum

from pydantic import BaseModel

from deploy_resolver.models.deployment import DeploymentRecord


class SearchMode(str, Enum):
    """How much patience a commit search gets."""

    # The triggering commit; its deployment may not exist yet
    INITIAL = "initial"
    # A merge parent; its deployment, if any, already exists
    ANCESTRY_HOP = "ancestry_hop"


class RunOutcome(str, Enum):
    """Named outcomes of a coordinator run."""

    READY = "ready"
    SKIPPED = "skipped"


class RunResult(BaseModel):
    """Result of a coordinator run."""

    outcome: RunOutcome
    commit_sha: str
    deployment: DeploymentRecord | None = None

    def outputs(self) -> dict[str, str]:
        """Values handed back to the pipeline; empty on the skipped path."""
        if self.outcome != RunOutcome.READY or self.deployment is None:
            return {}
        return {
            "url": self.deployment.url,
            "id": self.deployment.id,
            "name": self.deployment.name,
            "branchName": self.deployment.branch_ref or "",
        }
