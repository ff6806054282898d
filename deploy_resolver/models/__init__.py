"""Data models for deploy-resolver."""

from deploy_resolver.models.commit import CommitRef
from deploy_resolver.models.deployment import (
    DeploymentRecord,
    DeploymentRef,
    GitSource,
    ReadyState,
)
from deploy_resolver.models.run import (
    RunOutcome,
    RunResult,
    SearchMode,
)

__all__ = [
    # Commit models
    "CommitRef",
    # Deployment models
    "DeploymentRecord",
    "DeploymentRef",
    "GitSource",
    "ReadyState",
    # Run models
    "RunOutcome",
    "RunResult",
    "SearchMode",
]
