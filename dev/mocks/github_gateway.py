"""Mock implementation of RepositoryGatewayProtocol for development and testing."""

import logging
from pathlib import Path
from typing import List, Optional

from src.models import Entry, EntryKind, RepositoryRef, TreeSnapshot
from src.services.errors import RetrievalFailure

logger = logging.getLogger(__name__)


class MockRepositoryGateway:
    """Serves every repository from a directory on the local filesystem."""

    def __init__(self, root: Optional[str] = None, branch: str = "main"):
        # Use dev/mock-repo unless told otherwise
        self._root = Path(root) if root else Path(__file__).parent.parent / "mock-repo"
        self._branch = branch

    async def resolve_default_revision(self, owner: str, name: str) -> RepositoryRef:
        return await self.resolve_revision(owner, name, self._branch)

    async def resolve_revision(self, owner: str, name: str, branch: str) -> RepositoryRef:
        logger.info("Mock: Resolving %s/%s@%s", owner, name, branch)
        if not self._root.exists():
            raise RetrievalFailure(f"Mock repository not found at {self._root}", 404)
        return RepositoryRef(
            owner=owner, name=name, branch=branch, revision="mock-revision-12345"
        )

    async def fetch_tree(self, repository: RepositoryRef) -> TreeSnapshot:
        entries: List[Entry] = []
        for path in sorted(self._root.rglob("*")):
            relative = path.relative_to(self._root).as_posix()
            kind = EntryKind.DIRECTORY if path.is_dir() else EntryKind.FILE
            entries.append(Entry(path=relative, kind=kind))
        logger.info("Mock: Listing %d entries under %s", len(entries), self._root)
        return TreeSnapshot(repository=repository, entries=entries)

    async def fetch_blob(self, repository: RepositoryRef, path: str) -> bytes:
        root = self._root.resolve()
        full_path = (root / path).resolve()
        # Paths come from button data and must stay inside the mock repository
        if root not in full_path.parents or not full_path.is_file():
            raise RetrievalFailure(f"Failed to fetch {path} (HTTP 404)", 404)
        return full_path.read_bytes()

    async def aclose(self) -> None:
        return None
