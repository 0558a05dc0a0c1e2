from functools import lru_cache
from typing import Optional

from fastapi import Depends

from src.config.settings import Settings, get_settings
from src.services import (
    InMemorySessionStore,
    RepositoryBrowser,
    UpdateDispatcher,
    create_delivery_gateway,
    create_repository_gateway,
)
from src.services.callback_codec import CallbackCodec

# Sessions and long callback tokens live for the lifetime of the process
_dispatcher: Optional[UpdateDispatcher] = None


@lru_cache
def get_session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@lru_cache
def get_callback_codec() -> CallbackCodec:
    return CallbackCodec()


def get_dispatcher(settings: Settings = Depends(get_settings)) -> UpdateDispatcher:
    """Get or create the process-wide dispatcher."""
    global _dispatcher
    if _dispatcher is None:
        codec = get_callback_codec()
        browser = RepositoryBrowser(
            repository_gateway=create_repository_gateway(settings),
            delivery_gateway=create_delivery_gateway(settings, codec),
            session_store=get_session_store(),
            page_size=settings.PAGE_SIZE,
        )
        _dispatcher = UpdateDispatcher(browser, codec=codec)
    return _dispatcher


async def close_dispatcher() -> None:
    """Close the gateways' HTTP clients, if the dispatcher was created."""
    global _dispatcher
    if _dispatcher is None:
        return
    browser = _dispatcher.browser
    await browser.repository_gateway.aclose()
    await browser.delivery_gateway.aclose()
    _dispatcher = None
