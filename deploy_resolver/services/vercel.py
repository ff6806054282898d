"""Read-only client for the Vercel deployments API."""

from typing import Any

import httpx
from pydantic import ValidationError

from deploy_resolver.core.exceptions import ApiError
from deploy_resolver.models.deployment import DeploymentRecord, DeploymentRef
from deploy_resolver.utils.logging import get_logger

logger = get_logger("vercel_client")

DEFAULT_VERCEL_API_URL = "https://api.vercel.com"


class VercelClient:
    """Thin wrapper over the deployments endpoints.

    Every call is a single request; retry policy belongs to the callers.
    Non-success responses and transport failures raise ApiError.
    """

    def __init__(
        self,
        token: str,
        project_id: str,
        team_id: str | None = None,
        base_url: str = DEFAULT_VERCEL_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.project_id = project_id
        self.team_id = team_id
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "VercelClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_deployments(
        self,
        commit_sha: str | None = None,
        state: str | None = None,
        branch: str | None = None,
        limit: int | None = None,
    ) -> list[DeploymentRef]:
        """List project deployments matching the metadata filter.

        Args:
            commit_sha: Filter on the ``githubCommitSha`` metadata
            state: Filter on ready state (used with ``branch``)
            branch: Filter on the ``githubCommitRef`` metadata
            limit: Maximum number of entries to return

        Returns:
            Matching entries, most recent first
        """
        params: dict[str, Any] = {"projectId": self.project_id}
        if self.team_id:
            params["teamId"] = self.team_id
        if commit_sha:
            params["meta-githubCommitSha"] = commit_sha
        if state:
            params["state"] = state
        if branch:
            params["meta-githubCommitRef"] = branch
        if limit is not None:
            params["limit"] = limit

        path = "/v6/deployments"
        status_code, payload = await self._get(path, params)
        deployments = payload.get("deployments") if isinstance(payload, dict) else None
        if not isinstance(deployments, list):
            return []
        try:
            return [DeploymentRef.model_validate(d) for d in deployments]
        except ValidationError as e:
            raise self._malformed(status_code, payload, path, e) from e

    async def get_deployment(self, deployment_id: str) -> DeploymentRecord:
        """Fetch the full record of a single deployment."""
        params: dict[str, Any] = {"withGitRepoInfo": "true"}
        if self.team_id:
            params["teamId"] = self.team_id
        path = f"/v13/deployments/{deployment_id}"
        status_code, payload = await self._get(path, params)
        try:
            return DeploymentRecord.model_validate(payload)
        except ValidationError as e:
            raise self._malformed(status_code, payload, path, e) from e

    @staticmethod
    def _malformed(status_code: int, body: Any, path: str, error: ValidationError) -> ApiError:
        logger.error(
            "vercel_client.malformed_response",
            path=path,
            status_code=status_code,
            errors=error.error_count(),
        )
        return ApiError(status_code, body, path)

    async def _get(self, path: str, params: dict[str, Any]) -> tuple[int, Any]:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error("vercel_client.transport_failed", path=path, error=str(e))
            raise ApiError(None, str(e), path) from e

        try:
            body: Any = response.json()
        except ValueError:
            body = response.text

        if not response.is_success:
            logger.error(
                "vercel_client.request_failed",
                path=path,
                status_code=response.status_code,
                body=body,
            )
            raise ApiError(response.status_code, body, path)

        return response.status_code, body
