"""External service clients for deploy-resolver."""

from deploy_resolver.services.github import GitHubCommitResolver
from deploy_resolver.services.vercel import VercelClient

__all__ = [
    "GitHubCommitResolver",
    "VercelClient",
]
