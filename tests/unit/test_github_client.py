"""Unit tests for GitHubClient."""

import httpx
import pytest

from src.models import EntryKind, RepositoryRef
from src.protocols.repository_gateway_protocol import RepositoryGatewayProtocol
from src.services.errors import RetrievalFailure
from src.services.github_client import GitHubClient

TREE = {
    "sha": "abc123",
    "truncated": False,
    "tree": [
        {"path": "src", "type": "tree"},
        {"path": "src/a.txt", "type": "blob"},
        {"path": "vendor/lib", "type": "commit"},
        {"path": "readme.md", "type": "blob"},
    ],
}


def github_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if request.url.host == "api.github.com":
        if path == "/repos/octo/demo":
            return httpx.Response(200, json={"default_branch": "main"})
        if path == "/repos/octo/demo/git/refs/heads/main":
            return httpx.Response(200, json={"ref": "refs/heads/main", "object": {"sha": "abc123"}})
        if path == "/repos/octo/demo/git/refs/heads/feat":
            return httpx.Response(
                200,
                json=[
                    {"ref": "refs/heads/feature", "object": {"sha": "fff"}},
                    {"ref": "refs/heads/feat", "object": {"sha": "eee"}},
                ],
            )
        if path == "/repos/octo/demo/git/trees/abc123":
            assert request.url.params["recursive"] == "1"
            return httpx.Response(200, json=TREE)
    if request.url.host == "raw.githubusercontent.com":
        if path == "/octo/demo/abc123/src/a.txt":
            return httpx.Response(200, content=b"hello\n")
    return httpx.Response(404, json={"message": "Not Found"})


class TestGitHubClient:
    """Test cases for GitHubClient."""

    def setup_method(self):
        self.requests = []

        def handler(request):
            self.requests.append(request)
            return github_handler(request)

        self.client = GitHubClient(token="secret", transport=httpx.MockTransport(handler))

    def test_satisfies_protocol(self):
        assert isinstance(self.client, RepositoryGatewayProtocol)

    @pytest.mark.asyncio
    async def test_resolve_default_revision(self):
        ref = await self.client.resolve_default_revision("octo", "demo")

        assert ref == RepositoryRef(owner="octo", name="demo", branch="main", revision="abc123")
        headers = self.requests[0].headers
        assert headers["Authorization"] == "Bearer secret"
        assert headers["Accept"] == "application/vnd.github+json"
        assert headers["User-Agent"] == "telegram-github-bot"

    @pytest.mark.asyncio
    async def test_no_authorization_without_token(self):
        requests = []

        def handler(request):
            requests.append(request)
            return github_handler(request)

        client = GitHubClient(transport=httpx.MockTransport(handler))
        await client.resolve_revision("octo", "demo", "main")
        assert "Authorization" not in requests[0].headers

    @pytest.mark.asyncio
    async def test_resolve_revision_picks_exact_ref_from_prefix_match(self):
        ref = await self.client.resolve_revision("octo", "demo", "feat")
        assert ref.revision == "eee"

    @pytest.mark.asyncio
    async def test_fetch_tree(self):
        ref = RepositoryRef(owner="octo", name="demo", branch="main", revision="abc123")
        snapshot = await self.client.fetch_tree(ref)

        assert [(e.path, e.kind) for e in snapshot.entries] == [
            ("src", EntryKind.DIRECTORY),
            ("src/a.txt", EntryKind.FILE),
            ("readme.md", EntryKind.FILE),
        ]
        assert snapshot.repository == ref
        assert not snapshot.truncated

    @pytest.mark.asyncio
    async def test_fetch_blob(self):
        ref = RepositoryRef(owner="octo", name="demo", branch="main", revision="abc123")
        assert await self.client.fetch_blob(ref, "src/a.txt") == b"hello\n"

    @pytest.mark.asyncio
    async def test_missing_repository_is_retrieval_failure(self):
        with pytest.raises(RetrievalFailure) as exc_info:
            await self.client.resolve_default_revision("octo", "missing")
        assert exc_info.value.status_code == 404
        assert "repo" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_blob_is_retrieval_failure(self):
        ref = RepositoryRef(owner="octo", name="demo", branch="main", revision="abc123")
        with pytest.raises(RetrievalFailure):
            await self.client.fetch_blob(ref, "nope.txt")

    @pytest.mark.asyncio
    async def test_timeout_is_retrieval_failure(self):
        def timeout(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = GitHubClient(transport=httpx.MockTransport(timeout))
        with pytest.raises(RetrievalFailure, match="Timed out"):
            await client.resolve_default_revision("octo", "demo")

    @pytest.mark.asyncio
    async def test_transport_error_is_retrieval_failure(self):
        def refused(request):
            raise httpx.ConnectError("refused", request=request)

        client = GitHubClient(transport=httpx.MockTransport(refused))
        with pytest.raises(RetrievalFailure):
            await client.resolve_default_revision("octo", "demo")

    @pytest.mark.asyncio
    async def test_unresolved_revision_cannot_fetch_tree(self):
        with pytest.raises(RetrievalFailure):
            await self.client.fetch_tree(RepositoryRef(owner="octo", name="demo"))

    @pytest.mark.asyncio
    async def test_aclose(self):
        await self.client.aclose()
        assert self.client.client.is_closed
