"""Package configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``GENERIC_OPTIONS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GENERIC_OPTIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(default="sqlite:///./generic_options.db")
    debug: bool = False

    # Options
    log_default_fallbacks: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return str(v).upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
