"""Mock implementation of DeliveryGatewayProtocol for development and testing."""

import logging
from typing import Any, List, Optional, Tuple

from src.schemas import ViewDescriptor

logger = logging.getLogger(__name__)


class MockDeliveryGateway:
    """Records every outbound call instead of talking to Telegram."""

    def __init__(self):
        self.sent: List[Tuple[str, Any]] = []
        self._next_message_id = 1

    async def send_text(self, chat_id: int, text: str) -> None:
        logger.info("Mock: [%s] %s", chat_id, text)
        self.sent.append(("text", (chat_id, text)))

    async def send_keyboard(self, chat_id: int, text: str, view: ViewDescriptor) -> int:
        message_id = self._next_message_id
        self._next_message_id += 1
        logger.info("Mock: [%s] keyboard #%d: %s %s", chat_id, message_id, text, view.labels())
        self.sent.append(("keyboard", (chat_id, message_id, text, view)))
        return message_id

    async def edit_keyboard(
        self,
        chat_id: int,
        message_id: int,
        view: ViewDescriptor,
        text: Optional[str] = None,
    ) -> None:
        logger.info("Mock: [%s] edit #%d: %s %s", chat_id, message_id, text, view.labels())
        self.sent.append(("edit", (chat_id, message_id, text, view)))

    async def send_document(self, chat_id: int, content: bytes, filename: str) -> None:
        logger.info("Mock: [%s] document %s (%d bytes)", chat_id, filename, len(content))
        self.sent.append(("document", (chat_id, filename, content)))

    async def answer_callback(self, callback_id: str, text: Optional[str] = None) -> None:
        self.sent.append(("answer", (callback_id, text)))

    async def aclose(self) -> None:
        return None
