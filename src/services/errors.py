"""Error kinds raised by the browser services."""

from typing import Optional


class BrowserError(Exception):
    """Base class for errors raised while serving a chat event."""


class ParseError(BrowserError):
    """Text is not a recognized repository reference."""


class RetrievalFailure(BrowserError):
    """A call to the repository host did not succeed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DeliveryFailure(BrowserError):
    """The chat platform rejected or did not receive an outbound call."""
