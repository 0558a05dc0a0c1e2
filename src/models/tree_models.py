"""Repository tree model classes."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class EntryKind(str, Enum):
    """Kind of a node in a repository tree listing."""

    DIRECTORY = "tree"
    FILE = "blob"


class Entry(BaseModel):
    """One node of a repository's flat tree listing."""

    model_config = ConfigDict(frozen=True)

    path: str
    kind: EntryKind

    @property
    def name(self) -> str:
        """Final path segment, used as the display label."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY


class RepositoryRef(BaseModel):
    """Owner, name and (once resolved) revision of a hosted repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str
    branch: Optional[str] = None  # None until the default branch is resolved
    revision: Optional[str] = None  # commit SHA the tree was read from

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class TreeSnapshot(BaseModel):
    """Immutable ordered listing of every entry in one repository revision."""

    model_config = ConfigDict(frozen=True)

    repository: RepositoryRef
    entries: List[Entry]
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.entries)
