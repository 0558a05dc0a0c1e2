"""Models for the application."""

from .session_models import BrowserMode, Session
from .tree_models import Entry, EntryKind, RepositoryRef, TreeSnapshot

__all__ = [
    "BrowserMode",
    "Entry",
    "EntryKind",
    "RepositoryRef",
    "Session",
    "TreeSnapshot",
]
