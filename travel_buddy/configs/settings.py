"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Travel Buddy backend application.
"""

from pathlib import Path

from pydantic_settings.main import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MIN_TRIP_DAYS = 1
MAX_TRIP_DAYS = 14
MAX_DESTINATION_LENGTH = 100
PACKING_ITEMS_COUNT = 3

# Key name of the manually entered API key inside the local key store
USER_KEY_NAME = "TRAVEL_BUDDY_USER_KEY"

# Response constants
DEFAULT_SOURCE_TITLE = "참고 웹사이트"
GENERATION_ERROR_MESSAGE = "일정 생성 중 오류가 발생했습니다. 다시 시도해 주세요."

# Connection test
CONNECTION_TEST_PROMPT = "API Connection Test. Reply 'OK' only."
CONNECTION_TEST_MAX_TOKENS = 5


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Travel Buddy Backend"
    DEBUG: bool = False

    # AI Configuration
    GEMINI_API_KEY: str | None = None
    API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-3-pro-preview"
    GEMINI_TEST_MODEL: str = "gemini-3-flash-preview"

    # Itinerary output
    OUTPUT_LANGUAGE: str = "한국어"
    OUTPUT_CURRENCY: str = "KRW"
    MAP_SERVICE: str = "네이버 지도"
    STRICT_CONTRACT_VALIDATION: bool = True

    # Local key store (manually entered API key)
    USER_KEY_STORE: Path = Path.home() / ".travel_buddy" / "storage.json"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_TO_FILE: bool = True
    LOG_FILE: str = "logs/travel_buddy.log"
    LOG_LEVEL: str = "INFO"
    PRODUCTION_FRONTEND_URL: str | None = None


settings = Settings()
