import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from src.apps.api import router
from src.config.settings import get_settings
from src.dependencies import close_dispatcher, get_dispatcher
from src.services.errors import DeliveryFailure
from src.services.telegram_client import TelegramClient

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# --- DEBUG設定に基づきモックを有効化 ---

if settings.DEBUG:
    dev_path = Path(__file__).parent.parent / "dev"
    if dev_path.exists():
        sys.path.append(str(dev_path))
        logger.info("🔧 'dev' directory added to sys.path for mock imports.")
    else:
        logger.warning("⚠️ 'dev' directory not found. Using real gateways.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.BOT_TOKEN and not settings.DEBUG:
        gateway = get_dispatcher(settings).delivery_gateway
        if isinstance(gateway, TelegramClient):
            try:
                await gateway.start()
                if settings.WEBHOOK_URL:
                    await gateway.set_webhook(settings.WEBHOOK_URL, settings.WEBHOOK_SECRET)
                    logger.info("Webhook registered at %s", settings.WEBHOOK_URL)
            except DeliveryFailure as e:
                logger.error("Failed to start Telegram bot: %s", e)
    yield
    await close_dispatcher()


# --- アプリケーション初期化 ---

app = FastAPI(
    title="Telegram GitHub Browser Bot",
    version="0.1.0",
    description="Browse GitHub repositories and fetch their files from a Telegram chat",
    lifespan=lifespan,
)

app.include_router(router.router, prefix="/api")


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "🤖 Telegram GitHub File Fetch Bot is running"


@app.get("/health")
async def health_check():
    """
    Simple health check endpoint to confirm the API is running.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
