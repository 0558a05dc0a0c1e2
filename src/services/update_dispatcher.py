"""Routes inbound chat events to the repository browser."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Dict, Optional

from telegram import Update

from .callback_answer import CallbackAnswer
from .callback_codec import CallbackCodec
from .errors import ParseError
from .navigation import RepositoryBrowser
from .repo_url import parse_repository_url

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "👋 Send me a GitHub repository link, e.g. https://github.com/owner/repo, "
    "and browse its files right here."
)
EXPIRED_BUTTON = "This button has expired, send the repository link again."


class UpdateDispatcher:
    """Handles each event to completion, one at a time per chat.

    Events for the same chat run in arrival order. A failure while handling
    one event is logged and reported to that chat only.
    """

    def __init__(self, browser: RepositoryBrowser, codec: Optional[CallbackCodec] = None):
        self.browser = browser
        self.codec = codec or CallbackCodec()
        self._chat_locks: Dict[int, asyncio.Lock] = {}
        # Holders plus waiters per chat; a lock is dropped when this reaches zero
        self._chat_users: Dict[int, int] = {}

    @property
    def delivery_gateway(self):
        return self.browser.delivery_gateway

    @asynccontextmanager
    async def _chat_turn(self, chat_id: int) -> AsyncIterator[None]:
        lock = self._chat_locks.setdefault(chat_id, asyncio.Lock())
        self._chat_users[chat_id] = self._chat_users.get(chat_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._chat_users[chat_id] -= 1
            if not self._chat_users[chat_id]:
                del self._chat_users[chat_id]
                del self._chat_locks[chat_id]

    async def dispatch(self, update: Update) -> None:
        query = update.callback_query
        if query is not None:
            if query.message is None or query.data is None:
                logger.debug("Ignoring callback query %s without message or data", query.id)
                return
            await self.on_button_press(
                query.message.chat.id, query.message.message_id, query.data, query.id
            )
            return

        message = update.message
        if message is not None and message.text:
            await self.on_text(message.chat.id, message.text)

    async def on_text(self, chat_id: int, text: str) -> None:
        async with self._chat_turn(chat_id):
            await self._guarded(chat_id, self._handle_text(chat_id, text))

    async def on_button_press(
        self,
        chat_id: int,
        message_id: int,
        data: str,
        callback_id: Optional[str] = None,
    ) -> None:
        answer = CallbackAnswer(self.delivery_gateway, callback_id)
        async with self._chat_turn(chat_id):
            notice = await self._guarded(
                chat_id, self._handle_button(chat_id, message_id, data, answer)
            )
            await answer.send(notice)

    async def _handle_text(self, chat_id: int, text: str) -> None:
        if text.strip().startswith("/start"):
            await self.delivery_gateway.send_text(chat_id, WELCOME_TEXT)
            return

        try:
            repository = parse_repository_url(text)
        except ParseError:
            if not await self.browser.handle_text(chat_id, text):
                logger.debug("Ignoring unrelated message in chat %s", chat_id)
            return

        await self.browser.load_repository(chat_id, repository)

    async def _handle_button(
        self, chat_id: int, message_id: int, data: str, answer: CallbackAnswer
    ) -> Optional[str]:
        token = self.codec.decode(data)
        if token is None:
            return EXPIRED_BUTTON
        return await self.browser.handle_action(chat_id, message_id, token, answer=answer)

    async def _guarded(self, chat_id: int, handler: Awaitable[Optional[str]]) -> Optional[str]:
        try:
            return await handler
        except Exception as e:
            logger.exception("Unhandled error while serving chat %s", chat_id)
            try:
                await self.delivery_gateway.send_text(chat_id, f"❌ Error: {e}")
            except Exception:
                logger.exception("Failed to report error to chat %s", chat_id)
            return None
