"""Process-wide per-chat session storage."""

from typing import Dict, Optional

from ..models import Session


class InMemorySessionStore:
    """Holds one session per chat for the lifetime of the process.

    There is no expiry or eviction; a restart forgets every session.
    """

    def __init__(self):
        self._sessions: Dict[int, Session] = {}

    def get(self, chat_id: int) -> Optional[Session]:
        return self._sessions.get(chat_id)

    def put(self, chat_id: int, session: Session) -> None:
        self._sessions[chat_id] = session

    def remove(self, chat_id: int) -> None:
        self._sessions.pop(chat_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
