"""Pytest configuration and fixtures."""

from collections import defaultdict
from typing import Any, Callable

import pytest

from deploy_resolver.models.deployment import DeploymentRecord, DeploymentRef


class FakeDeploymentClient:
    """In-memory stand-in for VercelClient.

    ``by_commit`` maps a SHA to the list responses returned on successive
    searches (the last one repeats). ``records`` maps a deployment id to
    the records returned on successive fetches (the last one repeats).
    """

    def __init__(self):
        self.by_commit: dict[str, list[list[DeploymentRef]]] = {}
        self.by_branch: dict[str, list[DeploymentRef]] = {}
        self.records: dict[str, list[DeploymentRecord]] = {}
        self.list_calls: list[dict[str, Any]] = []
        self.get_calls: list[str] = []
        self._fetches: dict[str, int] = defaultdict(int)

    async def list_deployments(
        self,
        commit_sha: str | None = None,
        state: str | None = None,
        branch: str | None = None,
        limit: int | None = None,
    ) -> list[DeploymentRef]:
        self.list_calls.append(
            {"commit_sha": commit_sha, "state": state, "branch": branch, "limit": limit}
        )
        if branch is not None:
            return list(self.by_branch.get(branch, []))[: limit or None]

        responses = self.by_commit.get(commit_sha or "", [])
        if not responses:
            return []
        searches = sum(1 for c in self.list_calls if c["commit_sha"] == commit_sha)
        return list(responses[min(searches, len(responses)) - 1])

    async def get_deployment(self, deployment_id: str) -> DeploymentRecord:
        self.get_calls.append(deployment_id)
        sequence = self.records[deployment_id]
        index = min(self._fetches[deployment_id], len(sequence) - 1)
        self._fetches[deployment_id] += 1
        return sequence[index]

    def searches_for(self, commit_sha: str) -> int:
        return sum(1 for c in self.list_calls if c["commit_sha"] == commit_sha)


class FakeAncestry:
    """Parent lookups backed by a dict; missing refs raise LookupError."""

    def __init__(self, parents: dict[str, list[str]] | None = None):
        self.parents = parents or {}
        self.calls: list[str] = []

    async def get_parents(self, ref: str) -> list[str]:
        self.calls.append(ref)
        if ref not in self.parents:
            raise LookupError(f"unknown ref {ref}")
        return self.parents[ref]


class RecordingSleep:
    """Async sleep replacement that records requested intervals."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_client() -> FakeDeploymentClient:
    """Create an empty fake deployment client."""
    return FakeDeploymentClient()


@pytest.fixture
def fake_ancestry() -> FakeAncestry:
    """Create an empty fake ancestry resolver."""
    return FakeAncestry()


@pytest.fixture
def sleep() -> RecordingSleep:
    """Create a recording sleep."""
    return RecordingSleep()


@pytest.fixture
def make_record() -> Callable[..., DeploymentRecord]:
    """Factory for deployment records as returned by the v13 endpoint."""

    def _make(
        deployment_id: str = "dpl_abc",
        ready_state: str = "READY",
        url: str = "my-app-abc.vercel.app",
        name: str = "my-app",
        branch: str | None = "main",
    ) -> DeploymentRecord:
        payload: dict[str, Any] = {
            "id": deployment_id,
            "url": url,
            "name": name,
            "readyState": ready_state,
        }
        if branch is not None:
            payload["gitSource"] = {"type": "github", "ref": branch}
        return DeploymentRecord.model_validate(payload)

    return _make


@pytest.fixture
def make_ref() -> Callable[..., DeploymentRef]:
    """Factory for list-query entries as returned by the v6 endpoint."""

    def _make(deployment_id: str = "dpl_abc", url: str = "my-app-abc.vercel.app") -> DeploymentRef:
        return DeploymentRef.model_validate({"uid": deployment_id, "url": url})

    return _make
