"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.

Optional integrations are switched off by leaving their variables unset:
no DATABASE_URL selects the in-memory store, no RECAPTCHA_SECRET bypasses
verification, and no EMAIL_USER / ADMIN_EMAIL turns notifications into no-ops.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Structure: src/config/settings.py -> public/
DEFAULT_STATIC_DIR = Path(__file__).parent.parent.parent / "public"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    static_dir: Path = DEFAULT_STATIC_DIR

    # Database configuration (unset -> in-memory store)
    database_url: str | None = None
    pool_min_size: int = 1  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool

    # Mail relay
    notifier_backend: Literal["smtp", "console"] = "smtp"
    email_user: str | None = None
    email_pass: str | None = None
    admin_email: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_timeout_seconds: float = 10.0
    brand_name: str = "Athaan Fi Beit"

    # Bot mitigation (unset secret -> bypass)
    recaptcha_secret: str | None = None
    recaptcha_min_score: float = Field(default=0.5, ge=0.0, le=1.0)
    recaptcha_verify_url: str = "https://www.google.com/recaptcha/api/siteverify"
    recaptcha_timeout_seconds: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
