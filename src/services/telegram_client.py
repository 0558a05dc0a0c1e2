"""Telegram Bot API client used to deliver messages, keyboards and files."""

import logging
from typing import Any, Awaitable, Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.error import BadRequest, TelegramError
from telegram.request import HTTPXRequest

from ..schemas import ViewDescriptor
from .callback_codec import CallbackCodec
from .errors import DeliveryFailure

logger = logging.getLogger(__name__)

# Editing a message to identical content is reported as an error by Telegram
NOT_MODIFIED = "message is not modified"


class TelegramClient:
    """Delivers views to a chat through a python-telegram-bot ``Bot``."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.telegram.org",
        timeout: float = 30.0,
        codec: Optional[CallbackCodec] = None,
        bot: Optional[Bot] = None,
    ):
        self.codec = codec or CallbackCodec()
        self.bot = bot or Bot(
            token=token,
            base_url=f"{api_url.rstrip('/')}/bot",
            base_file_url=f"{api_url.rstrip('/')}/file/bot",
            request=HTTPXRequest(
                connect_timeout=timeout,
                read_timeout=timeout,
                write_timeout=timeout,
                pool_timeout=timeout,
            ),
        )

    def _reply_markup(self, view: ViewDescriptor) -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup(
            [
                [
                    InlineKeyboardButton(button.label, callback_data=self.codec.encode(button.token))
                    for button in row
                ]
                for row in view.rows
            ]
        )

    async def _call(self, method: str, request: Awaitable[Any]) -> Any:
        try:
            return await request
        except BadRequest as e:
            if NOT_MODIFIED in str(e).lower():
                logger.debug("%s: %s", method, e)
                return None
            raise DeliveryFailure(f"{method} failed: {e}") from e
        except TelegramError as e:
            raise DeliveryFailure(f"{method} failed: {e}") from e

    async def start(self) -> None:
        """Open the bot's connection pool and verify the token."""
        await self._call("getMe", self.bot.initialize())

    async def send_text(self, chat_id: int, text: str) -> None:
        await self._call("sendMessage", self.bot.send_message(chat_id=chat_id, text=text))

    async def send_keyboard(self, chat_id: int, text: str, view: ViewDescriptor) -> int:
        message = await self._call(
            "sendMessage",
            self.bot.send_message(
                chat_id=chat_id, text=text, reply_markup=self._reply_markup(view)
            ),
        )
        return message.message_id

    async def edit_keyboard(
        self,
        chat_id: int,
        message_id: int,
        view: ViewDescriptor,
        text: Optional[str] = None,
    ) -> None:
        if text is None:
            await self._call(
                "editMessageReplyMarkup",
                self.bot.edit_message_reply_markup(
                    chat_id=chat_id, message_id=message_id, reply_markup=self._reply_markup(view)
                ),
            )
        else:
            await self._call(
                "editMessageText",
                self.bot.edit_message_text(
                    text,
                    chat_id=chat_id,
                    message_id=message_id,
                    reply_markup=self._reply_markup(view),
                ),
            )

    async def send_document(self, chat_id: int, content: bytes, filename: str) -> None:
        await self._call(
            "sendDocument",
            self.bot.send_document(chat_id=chat_id, document=content, filename=filename),
        )

    async def answer_callback(self, callback_id: str, text: Optional[str] = None) -> None:
        await self._call(
            "answerCallbackQuery", self.bot.answer_callback_query(callback_id, text=text or None)
        )

    async def set_webhook(self, url: str, secret_token: str = "") -> None:
        await self._call(
            "setWebhook", self.bot.set_webhook(url=url, secret_token=secret_token or None)
        )

    async def aclose(self) -> None:
        await self.bot.shutdown()
