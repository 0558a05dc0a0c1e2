"""Rendered keyboard descriptions and the action tokens attached to buttons."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ActionType(str, Enum):
    """Commands a rendered button can carry."""

    ENTER_DIRECTORY = "enter-directory"
    FETCH_FILE = "fetch-file"
    PAGE_NEXT = "page-next"
    PAGE_PREV = "page-prev"
    BACK = "back"
    START_SEARCH = "start-search"
    CANCEL_SEARCH = "cancel-search"


PATH_ACTIONS = frozenset({ActionType.ENTER_DIRECTORY, ActionType.FETCH_FILE})


class ActionToken(BaseModel):
    """A user-selectable command, serialized as ``<type>[:<path>]``."""

    model_config = ConfigDict(frozen=True)

    action: ActionType
    path: Optional[str] = None

    def encode(self) -> str:
        if self.action in PATH_ACTIONS:
            return f"{self.action.value}:{self.path or ''}"
        return self.action.value

    @classmethod
    def parse(cls, raw: str) -> "ActionToken":
        """Parse a serialized token. Raises ValueError on unknown actions."""
        name, sep, path = raw.partition(":")
        action = ActionType(name)
        if action in PATH_ACTIONS:
            if not sep:
                raise ValueError(f"Action '{name}' requires a path")
            return cls(action=action, path=path)
        return cls(action=action)


class Button(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    token: str


class ViewDescriptor(BaseModel):
    """Ordered button rows for one render of a session."""

    model_config = ConfigDict(frozen=True)

    rows: List[List[Button]]

    def tokens(self) -> List[str]:
        return [button.token for row in self.rows for button in row]

    def labels(self) -> List[str]:
        return [button.label for row in self.rows for button in row]
