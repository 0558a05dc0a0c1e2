"""Services for the application."""

from .gateway_factory import create_delivery_gateway, create_repository_gateway
from .navigation import NavigationStateMachine, RepositoryBrowser
from .session_store import InMemorySessionStore
from .update_dispatcher import UpdateDispatcher

__all__ = [
    "InMemorySessionStore",
    "NavigationStateMachine",
    "RepositoryBrowser",
    "UpdateDispatcher",
    "create_delivery_gateway",
    "create_repository_gateway",
]
