"""Unit tests for the GitHub commit resolver."""

import httpx
import pytest

from deploy_resolver.core.exceptions import CommitLookupError
from deploy_resolver.services.github import GitHubCommitResolver


def _resolver(handler) -> GitHubCommitResolver:
    return GitHubCommitResolver(
        token="secret",
        owner="acme",
        repo="web",
        transport=httpx.MockTransport(handler),
    )


class TestGitHubCommitResolver:
    """Tests for GitHubCommitResolver."""

    @pytest.mark.asyncio
    async def test_merge_commit_parents(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"sha": "m1", "parents": [{"sha": "p1"}, {"sha": "p2"}]},
            )

        async with _resolver(handler) as resolver:
            parents = await resolver.get_parents("m1")

        assert parents == ["p1", "p2"]
        assert seen[0].url.path == "/repos/acme/web/commits/m1"
        assert seen[0].headers["authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_root_commit(self):
        async with _resolver(lambda r: httpx.Response(200, json={"sha": "r", "parents": []})) as resolver:
            commit = await resolver.get_commit("r")

        assert commit.parents == []
        assert not commit.is_merge

    @pytest.mark.asyncio
    async def test_unknown_ref(self):
        async with _resolver(lambda r: httpx.Response(422, json={"message": "No commit found"})) as resolver:
            with pytest.raises(CommitLookupError) as exc_info:
                await resolver.get_parents("nope")

        assert isinstance(exc_info.value, LookupError)
        assert exc_info.value.ref == "nope"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _resolver(handler) as resolver:
            with pytest.raises(CommitLookupError):
                await resolver.get_parents("m1")

    @pytest.mark.asyncio
    async def test_malformed_payload(self):
        async with _resolver(lambda r: httpx.Response(200, json=["unexpected"])) as resolver:
            with pytest.raises(CommitLookupError):
                await resolver.get_parents("m1")
