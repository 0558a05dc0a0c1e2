"""GitHub REST API client used to read repository trees and file contents."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ..models import Entry, EntryKind, RepositoryRef, TreeSnapshot
from .errors import RetrievalFailure

logger = logging.getLogger(__name__)

USER_AGENT = "telegram-github-bot"


class GitHubClient:
    """Reads repository data from the GitHub API and the raw content host."""

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        raw_url: str = "https://raw.githubusercontent.com",
        token: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.raw_url = raw_url.rstrip("/")
        self.token = token
        self.client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )

    def _api_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, url: str, what: str, **kwargs: Any) -> httpx.Response:
        logger.debug("GET %s", url)
        try:
            response = await self.client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            raise RetrievalFailure(f"Timed out while fetching {what}") from e
        except httpx.HTTPError as e:
            raise RetrievalFailure(f"Failed to fetch {what}: {e}") from e

        if not response.is_success:
            raise RetrievalFailure(
                f"Failed to fetch {what} (HTTP {response.status_code})",
                status_code=response.status_code,
            )
        return response

    async def _get_json(self, path: str, what: str, **kwargs: Any) -> Any:
        response = await self._get(
            f"{self.api_url}{path}", what, headers=self._api_headers(), **kwargs
        )
        try:
            return response.json()
        except ValueError as e:
            raise RetrievalFailure(f"Invalid response while fetching {what}") from e

    async def resolve_default_revision(self, owner: str, name: str) -> RepositoryRef:
        data = await self._get_json(f"/repos/{owner}/{name}", "repo")
        branch = data.get("default_branch")
        if not branch:
            raise RetrievalFailure("Repository has no default branch")
        return await self.resolve_revision(owner, name, branch)

    async def resolve_revision(self, owner: str, name: str, branch: str) -> RepositoryRef:
        data = await self._get_json(
            f"/repos/{owner}/{name}/git/refs/heads/{quote(branch)}", "branch SHA"
        )
        # A prefix match returns a list of refs instead of a single object
        if isinstance(data, list):
            exact = [ref for ref in data if ref.get("ref") == f"refs/heads/{branch}"]
            if not exact:
                raise RetrievalFailure(f"Branch '{branch}' not found")
            data = exact[0]

        sha = (data.get("object") or {}).get("sha")
        if not sha:
            raise RetrievalFailure(f"Branch '{branch}' has no commit")
        return RepositoryRef(owner=owner, name=name, branch=branch, revision=sha)

    async def fetch_tree(self, repository: RepositoryRef) -> TreeSnapshot:
        revision = repository.revision or repository.branch
        if not revision:
            raise RetrievalFailure("Repository revision is not resolved")

        data = await self._get_json(
            f"/repos/{repository.owner}/{repository.name}/git/trees/{revision}",
            "tree",
            params={"recursive": "1"},
        )

        entries = []
        for item in data.get("tree", []):
            try:
                kind = EntryKind(item.get("type"))
            except ValueError:
                # Submodules ("commit") have no browsable content
                continue
            entries.append(Entry(path=item["path"], kind=kind))

        return TreeSnapshot(
            repository=repository,
            entries=entries,
            truncated=bool(data.get("truncated", False)),
        )

    async def fetch_blob(self, repository: RepositoryRef, path: str) -> bytes:
        revision = repository.revision or repository.branch
        url = (
            f"{self.raw_url}/{repository.owner}/{repository.name}/"
            f"{quote(revision or 'HEAD')}/{quote(path)}"
        )
        response = await self._get(url, path)
        return response.content

    async def aclose(self) -> None:
        await self.client.aclose()
