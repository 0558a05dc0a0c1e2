"""Repository gateway protocol interface."""

from typing import Protocol, runtime_checkable

from ..models import RepositoryRef, TreeSnapshot


@runtime_checkable
class RepositoryGatewayProtocol(Protocol):
    """Protocol for reading trees and file contents from a repository host.

    Every method raises RetrievalFailure when the host cannot be reached, the
    request times out, or the response status is not a success.
    """

    async def resolve_default_revision(self, owner: str, name: str) -> RepositoryRef:
        """Resolve the default branch and its commit SHA."""
        ...

    async def resolve_revision(self, owner: str, name: str, branch: str) -> RepositoryRef:
        """Resolve the commit SHA of an explicit branch."""
        ...

    async def fetch_tree(self, repository: RepositoryRef) -> TreeSnapshot:
        """Fetch the full recursive tree of a resolved revision."""
        ...

    async def fetch_blob(self, repository: RepositoryRef, path: str) -> bytes:
        """Fetch the raw bytes of a single file."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
