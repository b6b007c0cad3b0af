"""
Application Configuration
=========================
Centralized configuration management using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Estimator settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Pricing catalog (built-in catalog is used when unset or missing)
    pricing_config_path: str | None = None

    # Tokenizer
    tokenizer_encoding: str = "cl100k_base"

    # Session defaults
    default_model: str = "GPT-4o mini"
    default_user_count: int = Field(default=1000, ge=0)

    # Display
    display_decimal_places: int = Field(default=2, ge=0, le=10)
    slider_floor: int = Field(default=4000, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
