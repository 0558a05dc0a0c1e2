"""Delivery gateway protocol interface."""

from typing import Optional, Protocol, runtime_checkable

from ..schemas import ViewDescriptor


@runtime_checkable
class DeliveryGatewayProtocol(Protocol):
    """Protocol for sending messages, keyboards and files to a chat."""

    async def send_text(self, chat_id: int, text: str) -> None:
        """Send a plain text message."""
        ...

    async def send_keyboard(self, chat_id: int, text: str, view: ViewDescriptor) -> int:
        """Send a message with a button grid. Returns the new message id."""
        ...

    async def edit_keyboard(
        self,
        chat_id: int,
        message_id: int,
        view: ViewDescriptor,
        text: Optional[str] = None,
    ) -> None:
        """Replace the buttons (and optionally the text) of a sent message."""
        ...

    async def send_document(self, chat_id: int, content: bytes, filename: str) -> None:
        """Send a file attachment."""
        ...

    async def answer_callback(self, callback_id: str, text: Optional[str] = None) -> None:
        """Acknowledge a button press."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
