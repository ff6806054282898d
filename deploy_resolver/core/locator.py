"""Deployment Locator.

Finds the deployment built from a commit. The triggering commit gets a
multi-attempt search because its deployment may not exist yet when the
workflow starts. When nothing turns up, the search re-targets the second
parent of merge commits, one attempt per hop.
"""

import asyncio
from typing import Awaitable, Callable, Protocol

from deploy_resolver.models.commit import CommitRef
from deploy_resolver.models.deployment import DeploymentRecord, DeploymentRef, ReadyState
from deploy_resolver.models.run import SearchMode
from deploy_resolver.utils.logging import get_logger

Sleep = Callable[[float], Awaitable[None]]

DEFAULT_SEARCH_RETRIES = 3
# Seconds between searches for the same commit
DEPLOYMENT_SEARCH_INTERVAL = 5
# Search budget for every ancestry hop
ANCESTRY_HOP_RETRIES = 1


class DeploymentSource(Protocol):
    """The deployment API calls the locator and poller rely on."""

    async def list_deployments(
        self,
        commit_sha: str | None = None,
        state: str | None = None,
        branch: str | None = None,
        limit: int | None = None,
    ) -> list[DeploymentRef]: ...

    async def get_deployment(self, deployment_id: str) -> DeploymentRecord: ...


class AncestrySource(Protocol):
    """Resolves the ordered parents of a commit."""

    async def get_parents(self, ref: str) -> list[str]: ...


class DeploymentLocator:
    """Resolves a commit to its deployment record."""

    def __init__(
        self,
        client: DeploymentSource,
        ancestry: AncestrySource | None = None,
        search_retries: int = DEFAULT_SEARCH_RETRIES,
        search_interval: float = DEPLOYMENT_SEARCH_INTERVAL,
        sleep: Sleep = asyncio.sleep,
    ):
        self.client = client
        self.ancestry = ancestry
        self.search_retries = search_retries
        self.search_interval = search_interval
        self._sleep = sleep
        self.logger = get_logger("locator")

    def budget_for(self, mode: SearchMode) -> int:
        if mode == SearchMode.INITIAL:
            return self.search_retries
        return ANCESTRY_HOP_RETRIES

    async def locate(self, commit_sha: str) -> DeploymentRecord | None:
        """Find the deployment for ``commit_sha`` or a merge ancestor.

        Returns:
            The full deployment record, or None when every avenue is exhausted

        Raises:
            ApiError: If the deployment API fails at any point
        """
        target = commit_sha
        depth = 0

        while True:
            mode = SearchMode.INITIAL if depth == 0 else SearchMode.ANCESTRY_HOP
            deployment = await self.search(target, mode)
            if deployment is not None:
                if depth > 0:
                    self.logger.info(
                        "locator.found_via_ancestry",
                        commit=commit_sha,
                        ancestor=target,
                        depth=depth,
                    )
                return deployment

            merge_parent = await self._merge_parent(target)
            if merge_parent is None:
                return None

            depth += 1
            self.logger.info(
                "locator.ancestry_hop",
                commit=target,
                merge_parent=merge_parent,
                depth=depth,
            )
            target = merge_parent

    async def search(
        self, commit_sha: str, mode: SearchMode = SearchMode.INITIAL
    ) -> DeploymentRecord | None:
        """Poll the deployment list for ``commit_sha`` within the mode's budget."""
        retries = self.budget_for(mode)

        while retries > 0:
            self.logger.info(
                "locator.search.attempt",
                commit=commit_sha,
                mode=mode.value,
                retries_remaining=retries,
            )
            deployments = await self.client.list_deployments(commit_sha=commit_sha)

            if deployments:
                latest = deployments[0]
                self.logger.info(
                    "locator.search.found",
                    commit=commit_sha,
                    count=len(deployments),
                    deployment_id=latest.id,
                    url=latest.url,
                )
                return await self.client.get_deployment(latest.id)

            retries -= 1
            if retries > 0:
                self.logger.info(
                    "locator.search.waiting",
                    commit=commit_sha,
                    interval=self.search_interval,
                    retries_remaining=retries,
                )
                await self._sleep(self.search_interval)

        self.logger.info("locator.search.exhausted", commit=commit_sha, mode=mode.value)
        return None

    async def find_latest_successful_deployment(
        self, branch: str
    ) -> DeploymentRecord | None:
        """Most recent READY deployment on ``branch``, single query."""
        deployments = await self.client.list_deployments(
            state=ReadyState.READY.value, branch=branch, limit=1
        )
        if not deployments:
            self.logger.info("locator.branch.not_found", branch=branch)
            return None

        latest = deployments[0]
        self.logger.info(
            "locator.branch.found",
            branch=branch,
            deployment_id=latest.id,
            url=latest.url,
        )
        return await self.client.get_deployment(latest.id)

    async def _merge_parent(self, commit_sha: str) -> str | None:
        if self.ancestry is None:
            return None
        try:
            parents = await self.ancestry.get_parents(commit_sha)
        except LookupError as e:
            self.logger.warning(
                "locator.ancestry_unavailable", commit=commit_sha, error=str(e)
            )
            return None
        return CommitRef(sha=commit_sha, parents=parents).merge_parent
