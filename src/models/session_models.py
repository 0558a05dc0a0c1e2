"""Per-chat browsing session model."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .tree_models import Entry, RepositoryRef, TreeSnapshot


class BrowserMode(str, Enum):
    """States of the navigation state machine."""

    BROWSING = "browsing"
    AWAITING_SEARCH_KEYWORD = "awaiting_search_keyword"
    SHOWING_SEARCH_RESULTS = "showing_search_results"


class Session(BaseModel):
    """Navigation state of a single chat."""

    snapshot: TreeSnapshot
    current_path: str = ""
    history: List[str] = Field(default_factory=list)  # directories to return to on back
    visible_entries: List[Entry] = Field(default_factory=list)
    page: int = 0
    mode: BrowserMode = BrowserMode.BROWSING
    search_keyword: Optional[str] = None

    @property
    def repository(self) -> RepositoryRef:
        return self.snapshot.repository

    @property
    def previous_path(self) -> Optional[str]:
        """Directory a back press returns to, if one was recorded."""
        return self.history[-1] if self.history else None
