"""Command-line entry point, run as a GitHub Actions step."""

import asyncio
import sys
from contextlib import AsyncExitStack

import httpx

from deploy_resolver import __version__
from deploy_resolver.config import Settings, load_settings
from deploy_resolver.core.coordinator import RunCoordinator
from deploy_resolver.core.exceptions import ConfigurationError, DeployResolverError
from deploy_resolver.core.locator import DeploymentLocator, Sleep
from deploy_resolver.core.poller import ReadinessPoller
from deploy_resolver.models.run import RunResult
from deploy_resolver.services.actions import set_failed, set_outputs
from deploy_resolver.services.github import GitHubCommitResolver
from deploy_resolver.services.vercel import VercelClient
from deploy_resolver.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def run(
    settings: Settings,
    vercel_transport: httpx.AsyncBaseTransport | None = None,
    github_transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleep = asyncio.sleep,
) -> RunResult:
    """Wire the clients from ``settings`` and run the coordinator once."""
    async with AsyncExitStack() as stack:
        client = await stack.enter_async_context(
            VercelClient(
                token=settings.vercel_token,
                project_id=settings.project_id,
                team_id=settings.team_id,
                base_url=settings.vercel_api_url,
                timeout=settings.http_timeout,
                transport=vercel_transport,
            )
        )

        ancestry = None
        if settings.github_repository:
            slug = settings.repository_slug
            if slug is None:
                raise ConfigurationError(
                    f"GITHUB_REPOSITORY must look like owner/repo, got {settings.github_repository!r}"
                )
            owner, repo = slug
            ancestry = await stack.enter_async_context(
                GitHubCommitResolver(
                    token=settings.github_token,
                    owner=owner,
                    repo=repo,
                    base_url=settings.github_api_url,
                    timeout=settings.http_timeout,
                    transport=github_transport,
                )
            )
        else:
            logger.warning("main.ancestry_disabled", reason="GITHUB_REPOSITORY not set")

        locator = DeploymentLocator(
            client,
            ancestry=ancestry,
            search_retries=settings.search_retries,
            search_interval=settings.search_interval,
            sleep=sleep,
        )
        poller = ReadinessPoller(
            client,
            locator=locator,
            ready_retries=settings.ready_retries,
            ready_interval=settings.ready_interval,
            target_branch=settings.target_branch,
            sleep=sleep,
        )
        return await RunCoordinator(locator, poller).run(settings.commit_sha)


def main() -> int:
    """Run the resolver and translate the outcome into an exit code."""
    configure_logging()

    try:
        settings = load_settings()
        configure_logging(settings.log_level, settings.log_format)
        logger.info(
            "main.starting",
            version=__version__,
            project_id=settings.project_id,
            commit=settings.commit_sha,
        )

        result = asyncio.run(run(settings))
        outputs = result.outputs()
        if outputs:
            set_outputs(outputs)

        logger.info("main.finished", outcome=result.outcome.value)
        return 0

    except DeployResolverError as e:
        logger.error("main.failed", error=e.message, error_type=type(e).__name__, **e.details)
        set_failed(e.message)
        return 1

    except Exception as e:
        logger.error("main.unhandled_exception", error=str(e), exc_info=True)
        set_failed(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
