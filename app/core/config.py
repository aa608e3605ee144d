# app/core/config.py

from pathlib import Path
from typing import List

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class ConfigurationError(RuntimeError):
    """Raised when required settings are missing; fatal at startup."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Pocket Ledger"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str
    DB_NAME: str
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Base URL the page uses to reach the API (empty: call the app in-process)
    API_BASE_URL: str = ""

    # Reject non-numeric amounts and unknown types instead of tolerating them
    STRICT_VALIDATION: bool = False

    @field_validator("DATABASE_URL", "DB_NAME")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()


def load_settings(**overrides) -> Settings:
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = sorted(
            str(err["loc"][0])
            for err in e.errors()
            if err["loc"] and err["loc"][0] in ("DATABASE_URL", "DB_NAME")
        )
        if missing:
            raise ConfigurationError(
                "Please define the DATABASE_URL and DB_NAME environment variables "
                f"(invalid or missing: {', '.join(missing)})"
            ) from e
        raise
