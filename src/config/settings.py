from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Values are read from the process environment first and then from a `.env`
    file in the working directory, if one exists. Tokens default to empty
    strings so the app can start (e.g. for health checks) without them.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Telegram
    BOT_TOKEN: str = ""
    TELEGRAM_API_URL: str = "https://api.telegram.org"
    WEBHOOK_SECRET: str = ""  # Compared against X-Telegram-Bot-Api-Secret-Token
    WEBHOOK_URL: str = ""  # Registered with setWebhook on startup when set

    # GitHub
    GITHUB_TOKEN: str = ""  # Optional, raises the API rate limit
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_RAW_URL: str = "https://raw.githubusercontent.com"

    # Browser behavior
    PAGE_SIZE: int = 8
    REQUEST_TIMEOUT: float = 30.0  # Seconds, applies to every outbound call

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Development and debugging
    DEBUG: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
