"""Core functionality for deploy-resolver."""

from deploy_resolver.core.exceptions import (
    ApiError,
    CommitLookupError,
    ConfigurationError,
    DeployResolverError,
    DeploymentFailedError,
    DeploymentNotFoundError,
    ReadyTimeoutError,
)
from deploy_resolver.core.locator import DeploymentLocator
from deploy_resolver.core.poller import ReadinessPoller
from deploy_resolver.core.coordinator import RunCoordinator

__all__ = [
    "ApiError",
    "CommitLookupError",
    "ConfigurationError",
    "DeployResolverError",
    "DeploymentFailedError",
    "DeploymentNotFoundError",
    "ReadyTimeoutError",
    "DeploymentLocator",
    "ReadinessPoller",
    "RunCoordinator",
]
