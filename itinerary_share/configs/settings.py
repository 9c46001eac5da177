"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the itinerary share service.
"""

from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from pythonjsonlogger.json import JsonFormatter

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
SERVICE_NAME = "itinerary-share"
ITINERARIES_PATH = "/api/itineraries"
DEFAULT_SENDER = "me"  # Gmail API alias for the authenticated account
GMAIL_SEND_SCOPE = "https://www.googleapis.com/auth/gmail.send"


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Itinerary Share Service"
    DEBUG: bool = False
    PORT: int = 3004

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: Path = Path("logs") / "itinerary_share.log"
    FRONTEND_URLS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Itinerary storage backend
    ITINERARY_BACKEND_URL: str = "http://localhost:3001"
    BACKEND_TIMEOUT: float = 10.0  # seconds
    BACKEND_MAX_RETRIES: int = 2  # attempts, including the first one
    BACKEND_RETRY_DELAY: float = 0.5  # seconds
    BACKEND_MAX_RETRY_DELAY: float = 2.0  # seconds

    # Email Configuration (Gmail API)
    GMAIL_TOKEN_FILE: Path = Path("secrets") / "token.json"
    GMAIL_SCOPES: list[str] = [GMAIL_SEND_SCOPE]
    MAIL_FROM: str = ""
    EMAIL_TIMEOUT: float = 30.0  # seconds
    EMAIL_MAX_RETRIES: int = 2
    EMAIL_RETRY_DELAY: float = 1.0  # seconds

    # Rate limiting
    SHARE_RATE_LIMIT: str = "10/minute"


settings = Settings()


def file_logger(logger: Logger) -> Logger:
    """
    Attach the rotating JSON file handler to a logger when file logging is on.

    Args:
        logger: Logger returned by ``logging.getLogger``.

    Returns:
        The same logger, for ``logger = file_logger(getLogger(__name__))``.
    """
    if not settings.LOG_TO_FILE:
        return logger

    log_file = settings.LOG_FILE.resolve()
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == str(log_file):
            return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setLevel(INFO)
    handler.setFormatter(JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger
