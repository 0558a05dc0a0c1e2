"""Hierarchical lookups over a flat repository tree listing."""

from collections import defaultdict
from typing import Dict, List

from ..models import Entry, EntryKind, TreeSnapshot

SEPARATOR = "/"


def parent_of(path: str) -> str:
    """Return the directory containing ``path`` ("" for top-level paths)."""
    head, sep, _ = path.rstrip(SEPARATOR).rpartition(SEPARATOR)
    return head if sep else ""


class TreeIndex:
    """Parent-path to children map built once per snapshot.

    Children keep the snapshot's original relative order. Unknown paths
    simply have no children.
    """

    def __init__(self, snapshot: TreeSnapshot):
        self.snapshot = snapshot
        self._children: Dict[str, List[Entry]] = defaultdict(list)
        for entry in snapshot.entries:
            self._children[parent_of(entry.path)].append(entry)

    def children_of(self, path: str) -> List[Entry]:
        """Immediate children of the directory at ``path`` (root is "")."""
        return list(self._children.get(path.strip(SEPARATOR), ()))

    def search_files(self, keyword: str) -> List[Entry]:
        """Files whose full path contains ``keyword``, ignoring case."""
        needle = keyword.strip().lower()
        if not needle:
            return []
        return [
            entry
            for entry in self.snapshot.entries
            if entry.kind == EntryKind.FILE and needle in entry.path.lower()
        ]

