"""One-shot acknowledgement of a button press."""

import logging
from typing import Optional

from ..protocols.delivery_gateway_protocol import DeliveryGatewayProtocol

logger = logging.getLogger(__name__)


class CallbackAnswer:
    """Answers a callback query at most once.

    Telegram only accepts an answer shortly after the press, so slow
    handlers answer early and later calls become no-ops.
    """

    def __init__(self, delivery_gateway: DeliveryGatewayProtocol, callback_id: Optional[str]):
        self.delivery_gateway = delivery_gateway
        self.callback_id = callback_id
        self.answered = callback_id is None

    async def send(self, text: Optional[str] = None) -> None:
        if self.answered:
            return
        self.answered = True
        try:
            await self.delivery_gateway.answer_callback(self.callback_id, text)
        except Exception:
            logger.exception("Failed to answer callback %s", self.callback_id)
