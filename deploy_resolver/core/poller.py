"""Readiness Poller.

Re-fetches a deployment until the provider reports a terminal state.
"""

import asyncio

from deploy_resolver.core.exceptions import DeploymentFailedError, ReadyTimeoutError
from deploy_resolver.core.locator import DeploymentLocator, DeploymentSource, Sleep
from deploy_resolver.models.deployment import DeploymentRecord, ReadyState
from deploy_resolver.utils.logging import get_logger

DEFAULT_READY_RETRIES = 10
# Seconds between status fetches
DEPLOYMENT_READY_INTERVAL = 30


class ReadinessPoller:
    """Waits for a deployment to become READY.

    READY returns the record, ERROR raises, CANCELED falls back to the
    latest successful deployment of ``target_branch`` when one is set.
    Every other state is polled until the budget runs out.
    """

    def __init__(
        self,
        client: DeploymentSource,
        locator: DeploymentLocator | None = None,
        ready_retries: int = DEFAULT_READY_RETRIES,
        ready_interval: float = DEPLOYMENT_READY_INTERVAL,
        target_branch: str | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.client = client
        self.locator = locator
        self.ready_retries = ready_retries
        self.ready_interval = ready_interval
        self.target_branch = target_branch
        self._sleep = sleep
        self.logger = get_logger("poller")

    async def wait_until_ready(
        self, deployment: DeploymentRecord
    ) -> DeploymentRecord | None:
        """Poll ``deployment`` until it is terminal.

        Returns:
            The READY record, the branch fallback on cancellation, or None

        Raises:
            DeploymentFailedError: If the provider reports ERROR
            ReadyTimeoutError: If the readiness budget runs out first
            ApiError: If a status fetch fails
        """
        retries = self.ready_retries

        while True:
            state = deployment.ready_state
            self.logger.info(
                "poller.state",
                deployment_id=deployment.id,
                ready_state=state,
                retries_remaining=retries,
            )

            if state == ReadyState.READY:
                self.logger.info("poller.ready", deployment_id=deployment.id, url=deployment.url)
                return deployment

            if state == ReadyState.ERROR:
                raise DeploymentFailedError(deployment.id, deployment.url)

            if state == ReadyState.CANCELED:
                return await self._after_cancel(deployment)

            if retries <= 0:
                raise ReadyTimeoutError(deployment.id, self.ready_retries)

            self.logger.info(
                "poller.waiting",
                deployment_id=deployment.id,
                ready_state=state,
                interval=self.ready_interval,
                retries_remaining=retries,
            )
            await self._sleep(self.ready_interval)
            retries -= 1
            deployment = await self.client.get_deployment(deployment.id)

    async def _after_cancel(self, deployment: DeploymentRecord) -> DeploymentRecord | None:
        if not self.target_branch or self.locator is None:
            self.logger.info("poller.canceled", deployment_id=deployment.id)
            return None

        self.logger.info(
            "poller.canceled_fallback",
            deployment_id=deployment.id,
            branch=self.target_branch,
        )
        return await self.locator.find_latest_successful_deployment(self.target_branch)
