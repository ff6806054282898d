"""Commit ancestry lookups against the GitHub REST API."""

from typing import Any

import httpx
from pydantic import ValidationError

from deploy_resolver.core.exceptions import CommitLookupError
from deploy_resolver.models.commit import CommitRef
from deploy_resolver.utils.logging import get_logger

logger = get_logger("github_client")

DEFAULT_GITHUB_API_URL = "https://api.github.com"


class GitHubCommitResolver:
    """Resolves commit parents for one repository."""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.owner = owner
        self.repo = repo
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubCommitResolver":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_commit(self, ref: str) -> CommitRef:
        """Fetch a commit with its ordered parents.

        Raises:
            CommitLookupError: If the commit cannot be resolved for any reason
        """
        path = f"/repos/{self.owner}/{self.repo}/commits/{ref}"
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            raise CommitLookupError(ref, str(e)) from e

        if not response.is_success:
            raise CommitLookupError(ref, f"status {response.status_code}")

        try:
            data = response.json()
            return CommitRef(sha=data.get("sha") or ref, parents=data.get("parents") or [])
        except (ValueError, AttributeError, KeyError, TypeError, ValidationError) as e:
            raise CommitLookupError(ref, f"malformed commit payload: {e}") from e

    async def get_parents(self, ref: str) -> list[str]:
        """Ordered parent SHAs of ``ref``, possibly empty."""
        commit = await self.get_commit(ref)
        logger.debug("github_client.parents", ref=ref, parents=commit.parents)
        return commit.parents
