"""Run Coordinator.

Resolves the commit's deployment, waits for it, and maps the outcome to
a RunResult.
"""

import time

from deploy_resolver.core.exceptions import DeploymentNotFoundError
from deploy_resolver.core.locator import DeploymentLocator
from deploy_resolver.core.poller import ReadinessPoller
from deploy_resolver.models.run import RunOutcome, RunResult
from deploy_resolver.utils.logging import get_logger


class RunCoordinator:
    """Runs locate then poll for a single commit."""

    def __init__(self, locator: DeploymentLocator, poller: ReadinessPoller):
        self.locator = locator
        self.poller = poller
        self.logger = get_logger("coordinator")

    async def run(self, commit_sha: str) -> RunResult:
        """Resolve ``commit_sha`` to a ready deployment.

        Raises:
            DeploymentNotFoundError: If no deployment exists for the commit
                or any of its merge ancestors
        """
        start_time = time.time()
        self.logger.info("coordinator.started", commit=commit_sha)

        deployment = await self.locator.locate(commit_sha)
        if deployment is None:
            raise DeploymentNotFoundError(commit_sha)

        self.logger.info(
            "coordinator.deployment_found",
            commit=commit_sha,
            deployment_id=deployment.id,
            url=deployment.url,
        )

        ready = await self.poller.wait_until_ready(deployment)
        duration_ms = int((time.time() - start_time) * 1000)

        if ready is None or not ready.url:
            self.logger.info(
                "coordinator.skipped",
                commit=commit_sha,
                deployment_id=deployment.id,
                duration_ms=duration_ms,
            )
            return RunResult(outcome=RunOutcome.SKIPPED, commit_sha=commit_sha)

        self.logger.info(
            "coordinator.completed",
            commit=commit_sha,
            deployment_id=ready.id,
            url=ready.url,
            branch=ready.branch_ref,
            duration_ms=duration_ms,
        )
        return RunResult(outcome=RunOutcome.READY, commit_sha=commit_sha, deployment=ready)
