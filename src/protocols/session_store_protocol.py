"""Session store protocol interface."""

from typing import Optional, Protocol, runtime_checkable

from ..models import Session


@runtime_checkable
class SessionStoreProtocol(Protocol):
    """Protocol for per-chat session storage. ``put`` always overwrites."""

    def get(self, chat_id: int) -> Optional[Session]:
        ...

    def put(self, chat_id: int, session: Session) -> None:
        ...

    def remove(self, chat_id: int) -> None:
        ...
