import logging
import secrets
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException
from telegram import Update

from src.config.settings import Settings, get_settings
from src.dependencies import get_dispatcher, get_session_store
from src.services import InMemorySessionStore, UpdateDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/telegram", tags=["telegram"])


def _secret_matches(received: Optional[str], expected: str) -> bool:
    return secrets.compare_digest((received or "").encode("utf-8"), expected.encode("utf-8"))


@router.post("/webhook", response_model=Dict[str, Any])
async def telegram_webhook(
    payload: Dict[str, Any],
    background_tasks: BackgroundTasks,
    x_telegram_bot_api_secret_token: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    dispatcher: UpdateDispatcher = Depends(get_dispatcher),
):
    """Receive a Telegram update and handle it after acknowledging it."""
    if settings.WEBHOOK_SECRET and not _secret_matches(
        x_telegram_bot_api_secret_token, settings.WEBHOOK_SECRET
    ):
        raise HTTPException(status_code=403, detail="Invalid webhook secret")

    # Telegram retries anything but 2xx, so malformed updates are dropped here
    try:
        update = Update.de_json(payload, None)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Dropping malformed update: %s", e)
        return {"ok": True}
    if update is None:
        logger.warning("Dropping empty update")
        return {"ok": True}

    background_tasks.add_task(dispatcher.dispatch, update)
    return {"ok": True}


@router.get("/health")
async def telegram_health_check():
    """Simple health check for telegram endpoints."""
    return {"status": "telegram endpoints available"}


@router.get("/status", response_model=Dict[str, Any])
async def get_status(
    settings: Settings = Depends(get_settings),
    session_store: InMemorySessionStore = Depends(get_session_store),
):
    """Report active sessions and gateway mode."""
    return {
        "sessions": len(session_store),
        "page_size": settings.PAGE_SIZE,
        "debug": settings.DEBUG,
    }
