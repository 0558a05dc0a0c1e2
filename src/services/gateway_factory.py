"""Factory for creating gateway instances with DEBUG mode support."""

import logging

from ..config.settings import Settings
from ..protocols.delivery_gateway_protocol import DeliveryGatewayProtocol
from ..protocols.repository_gateway_protocol import RepositoryGatewayProtocol
from .callback_codec import CallbackCodec
from .github_client import GitHubClient
from .telegram_client import TelegramClient

logger = logging.getLogger(__name__)


def create_repository_gateway(settings: Settings) -> RepositoryGatewayProtocol:
    """
    Create the repository gateway.

    In DEBUG mode a gateway backed by the local `dev/mock-repo` directory is
    returned, provided the `dev` directory is importable.
    """
    if settings.DEBUG:
        try:
            from mocks.github_gateway import MockRepositoryGateway

            logger.info("🔧 DEBUG mode: Using MockRepositoryGateway")
            return MockRepositoryGateway()
        except ImportError:
            logger.warning("⚠️ MockRepositoryGateway not available, falling back to GitHubClient")

    logger.info("🌐 Production mode: Using GitHubClient")
    return GitHubClient(
        api_url=settings.GITHUB_API_URL,
        raw_url=settings.GITHUB_RAW_URL,
        token=settings.GITHUB_TOKEN,
        timeout=settings.REQUEST_TIMEOUT,
    )


def create_delivery_gateway(settings: Settings, codec: CallbackCodec) -> DeliveryGatewayProtocol:
    """
    Create the delivery gateway.

    In DEBUG mode outgoing messages are recorded and logged instead of sent.
    """
    if settings.DEBUG:
        try:
            from mocks.telegram_gateway import MockDeliveryGateway

            logger.info("🔧 DEBUG mode: Using MockDeliveryGateway")
            return MockDeliveryGateway()
        except ImportError:
            logger.warning("⚠️ MockDeliveryGateway not available, falling back to TelegramClient")

    logger.info("🌐 Production mode: Using TelegramClient")
    return TelegramClient(
        token=settings.BOT_TOKEN,
        api_url=settings.TELEGRAM_API_URL,
        timeout=settings.REQUEST_TIMEOUT,
        codec=codec,
    )
