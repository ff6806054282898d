"""Custom exceptions for deploy-resolver."""

from typing import Any


class DeployResolverError(Exception):
    """Base exception for deploy-resolver."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DeployResolverError):
    """Missing or invalid run configuration."""

    pass


class ApiError(DeployResolverError):
    """The deployment provider answered with a non-success response."""

    def __init__(self, status_code: int | None, body: Any, path: str | None = None):
        super().__init__(
            "Something went wrong while trying to fetch deployments from the "
            f"Vercel API (status {status_code if status_code is not None else 'n/a'}).",
            {"status_code": status_code, "body": body, "path": path},
        )
        self.status_code = status_code
        self.body = body


class CommitLookupError(DeployResolverError, LookupError):
    """A commit could not be resolved through the source-control API."""

    def __init__(self, ref: str, reason: str):
        super().__init__(
            f"Could not resolve commit {ref}: {reason}",
            {"ref": ref},
        )
        self.ref = ref


class DeploymentNotFoundError(DeployResolverError):
    """No deployment exists for the commit or any merge ancestor."""

    def __init__(self, commit_sha: str):
        super().__init__(
            f"Could not find any Vercel deployments for the commit with SHA {commit_sha}.",
            {"commit_sha": commit_sha},
        )
        self.commit_sha = commit_sha


class DeploymentFailedError(DeployResolverError):
    """The provider reported the deployment as ERROR."""

    def __init__(self, deployment_id: str, url: str | None = None):
        super().__init__(
            "The Vercel deployment did not succeed.",
            {"deployment_id": deployment_id, "url": url},
        )
        self.deployment_id = deployment_id


class ReadyTimeoutError(DeployResolverError):
    """The deployment never reached a terminal state within the budget."""

    def __init__(self, deployment_id: str, retries: int):
        super().__init__(
            "The Vercel deployment is still not ready after running out of retries.",
            {"deployment_id": deployment_id, "retries": retries},
        )
        self.deployment_id = deployment_id
