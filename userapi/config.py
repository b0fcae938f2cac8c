"""
Configuration management using Pydantic Settings.
Challenge: Centralized config, env validation, type safety.
Design: Defaults reproduce the fixed port and file names; env only overrides.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment. Validates at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "User API"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Database (SQLite file, async driver)
    database_url: str = "sqlite+aiosqlite:///./test.db"

    # Static page served at /frontend, read on every request
    frontend_path: str = "index.html"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    cors_origins: list[str] = ["*"]

    # False keeps the always-200 contract on not-found/conflict paths
    strict_status_codes: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Avoids re-reading env on every request (performance)."""
    return Settings()
