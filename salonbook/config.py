"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_base_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:5173"

    # Database - local SQLite file by default, Postgres for the hosted store
    database_url: str = "sqlite+aiosqlite:///./salonbook.db"

    # Redis (Celery broker)
    redis_url: str = "redis://localhost:6379/0"

    # Business calendar - "today" and "yesterday" are resolved in this zone
    business_timezone: str = "Asia/Kolkata"

    # WhatsApp
    whatsapp_country_code: str = "91"
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_whatsapp_number: str = ""

    # Reminders
    reminder_check_interval_seconds: float = 900.0
    reminder_offer_text: str = ""

    @property
    def async_database_url(self) -> str:
        """Database URL with an async driver.

        Hosted Postgres providers hand out postgres:// URLs, which SQLAlchemy
        can't use with asyncio.
        """
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def whatsapp_enabled(self) -> bool:
        """Twilio credentials and a sender number are set, so reminders go out over the API."""
        return bool(self.twilio_account_sid and self.twilio_auth_token and self.twilio_whatsapp_number)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
