"""Navigation state machine and the repository browser built on it."""

import logging
from typing import Dict, Optional

from ..models import BrowserMode, RepositoryRef, Session, TreeSnapshot
from ..protocols.delivery_gateway_protocol import DeliveryGatewayProtocol
from ..protocols.repository_gateway_protocol import RepositoryGatewayProtocol
from ..protocols.session_store_protocol import SessionStoreProtocol
from ..schemas import ActionToken, ActionType
from .callback_answer import CallbackAnswer
from .errors import RetrievalFailure
from .pager import DEFAULT_PAGE_SIZE, paginate
from .tree_index import TreeIndex, parent_of
from .view_renderer import render_header, render_session

logger = logging.getLogger(__name__)

SESSION_EXPIRED = "Session expired, send the repository link again."


class NavigationStateMachine:
    """Applies browsing transitions to a session in place.

    Transitions never touch the network. ``apply`` returns True when the
    session changed in a way that needs a re-render.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = page_size
        self._indexes: Dict[int, TreeIndex] = {}

    def index_for(self, snapshot: TreeSnapshot) -> TreeIndex:
        index = self._indexes.get(id(snapshot))
        if index is None or index.snapshot is not snapshot:
            index = TreeIndex(snapshot)
            self._indexes[id(snapshot)] = index
        return index

    def forget(self, snapshot: TreeSnapshot) -> None:
        self._indexes.pop(id(snapshot), None)

    def start(self, snapshot: TreeSnapshot) -> Session:
        """New session browsing the root of ``snapshot``."""
        return Session(
            snapshot=snapshot,
            visible_entries=self.index_for(snapshot).children_of(""),
        )

    def _show_directory(self, session: Session, path: str) -> None:
        session.current_path = path
        session.visible_entries = self.index_for(session.snapshot).children_of(path)
        session.page = 0
        session.mode = BrowserMode.BROWSING
        session.search_keyword = None

    def enter_directory(self, session: Session, path: str) -> bool:
        if session.mode != BrowserMode.BROWSING:
            return False
        session.history.append(session.current_path)
        self._show_directory(session, path)
        return True

    def back(self, session: Session) -> bool:
        if session.mode != BrowserMode.BROWSING or not session.current_path:
            return False
        if session.history:
            target = session.history.pop()
        else:
            target = parent_of(session.current_path)
        self._show_directory(session, target)
        return True

    def next_page(self, session: Session) -> bool:
        if session.mode == BrowserMode.AWAITING_SEARCH_KEYWORD:
            return False
        if not paginate(session.visible_entries, session.page, self.page_size).has_next:
            return False
        session.page += 1
        return True

    def prev_page(self, session: Session) -> bool:
        if session.mode == BrowserMode.AWAITING_SEARCH_KEYWORD or session.page == 0:
            return False
        session.page -= 1
        return True

    def start_search(self, session: Session) -> bool:
        if session.mode != BrowserMode.BROWSING:
            return False
        session.mode = BrowserMode.AWAITING_SEARCH_KEYWORD
        return True

    def cancel_search(self, session: Session) -> bool:
        # Always recomputes, so a second cancel leaves the session as the first did.
        self._show_directory(session, session.current_path)
        return True

    def search(self, session: Session, keyword: str) -> int:
        """Match ``keyword`` against every file path in the snapshot.

        With no matches the session is left untouched. Returns the match count.
        """
        matches = self.index_for(session.snapshot).search_files(keyword)
        if not matches:
            return 0
        session.visible_entries = matches
        session.page = 0
        session.mode = BrowserMode.SHOWING_SEARCH_RESULTS
        session.search_keyword = keyword.strip()
        return len(matches)

    def apply(self, session: Session, token: ActionToken) -> bool:
        """Run the transition for a navigation action.

        File selection is not a transition and is rejected here.
        """
        if token.action == ActionType.ENTER_DIRECTORY:
            return self.enter_directory(session, token.path or "")
        if token.action == ActionType.BACK:
            return self.back(session)
        if token.action == ActionType.PAGE_NEXT:
            return self.next_page(session)
        if token.action == ActionType.PAGE_PREV:
            return self.prev_page(session)
        if token.action == ActionType.START_SEARCH:
            return self.start_search(session)
        if token.action == ActionType.CANCEL_SEARCH:
            return self.cancel_search(session)
        raise ValueError(f"{token.action.value} is not a navigation action")


class RepositoryBrowser:
    """Serves chat events for the repository browser.

    Loads repositories through the repository gateway, keeps one session per
    chat in the session store, and renders every transition through the
    delivery gateway.
    """

    def __init__(
        self,
        repository_gateway: RepositoryGatewayProtocol,
        delivery_gateway: DeliveryGatewayProtocol,
        session_store: SessionStoreProtocol,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.repository_gateway = repository_gateway
        self.delivery_gateway = delivery_gateway
        self.session_store = session_store
        self.page_size = page_size
        self.machine = NavigationStateMachine(page_size=page_size)

    async def load_repository(self, chat_id: int, repository: RepositoryRef) -> Optional[Session]:
        """Fetch a repository tree and start browsing it at the root.

        The chat's previous session is replaced only once the new tree has
        been fetched and is non-empty.
        """
        await self.delivery_gateway.send_text(chat_id, "⏳ Fetching repository files…")
        try:
            if repository.branch:
                resolved = await self.repository_gateway.resolve_revision(
                    repository.owner, repository.name, repository.branch
                )
            else:
                resolved = await self.repository_gateway.resolve_default_revision(
                    repository.owner, repository.name
                )
            snapshot = await self.repository_gateway.fetch_tree(resolved)
        except RetrievalFailure as e:
            logger.warning("Failed to load %s: %s", repository.full_name, e)
            await self.delivery_gateway.send_text(chat_id, f"❌ Error: {e}")
            return None

        if snapshot.truncated:
            logger.warning(
                "Tree of %s@%s was truncated by the host",
                resolved.full_name,
                resolved.revision,
            )
        if not snapshot.entries:
            await self.delivery_gateway.send_text(chat_id, "⚠️ No files found in repository")
            return None

        previous = self.session_store.get(chat_id)
        if previous is not None:
            self.machine.forget(previous.snapshot)

        session = self.machine.start(snapshot)
        logger.info(
            "Loaded %s@%s (%s) with %d entries for chat %s",
            resolved.full_name,
            resolved.branch,
            resolved.revision,
            len(snapshot),
            chat_id,
        )
        self.session_store.put(chat_id, session)
        await self._send_view(chat_id, session)
        return session

    async def handle_text(self, chat_id: int, text: str) -> bool:
        """Consume a search keyword. Returns False when no search is pending."""
        session = self.session_store.get(chat_id)
        if session is None or session.mode != BrowserMode.AWAITING_SEARCH_KEYWORD:
            return False

        keyword = text.strip()
        if not self.machine.search(session, keyword):
            await self.delivery_gateway.send_text(
                chat_id,
                f"No files matching '{keyword}'. Send another keyword or cancel the search.",
            )
            return True

        self.session_store.put(chat_id, session)
        await self._send_view(chat_id, session)
        return True

    async def handle_action(
        self,
        chat_id: int,
        message_id: int,
        raw_token: str,
        answer: Optional[CallbackAnswer] = None,
    ) -> Optional[str]:
        """Handle a button press.

        Returns a short notice for the button acknowledgement, if any. File
        downloads acknowledge through ``answer`` before fetching, and report
        failures as a chat message.
        """
        session = self.session_store.get(chat_id)
        if session is None:
            return SESSION_EXPIRED

        try:
            token = ActionToken.parse(raw_token)
        except ValueError:
            logger.warning("Ignoring unknown action %r from chat %s", raw_token, chat_id)
            return None

        if token.action == ActionType.FETCH_FILE:
            if answer is not None:
                await answer.send()
            return await self.send_file(chat_id, session, token.path or "")

        if self.machine.apply(session, token):
            self.session_store.put(chat_id, session)
            await self.delivery_gateway.edit_keyboard(
                chat_id,
                message_id,
                render_session(session, self.page_size),
                text=render_header(session, self.page_size),
            )
        return None

    async def send_file(self, chat_id: int, session: Session, path: str) -> Optional[str]:
        """Stream one file to the chat without touching the session."""
        try:
            content = await self.repository_gateway.fetch_blob(session.repository, path)
        except RetrievalFailure as e:
            logger.warning("Failed to fetch %s from %s: %s", path, session.repository.full_name, e)
            await self.delivery_gateway.send_text(chat_id, f"❌ Failed to fetch {path}: {e}")
            return "Download failed"

        filename = path.rsplit("/", 1)[-1] or path
        await self.delivery_gateway.send_document(chat_id, content, filename)
        return None

    async def _send_view(self, chat_id: int, session: Session) -> None:
        await self.delivery_gateway.send_keyboard(
            chat_id,
            render_header(session, self.page_size),
            render_session(session, self.page_size),
        )
