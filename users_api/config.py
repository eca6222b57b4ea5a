"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables, with an optional .env file
as a fallback. Nothing here is secret today, but keeping every knob in one
Settings class means deployment only ever has to touch the environment.

Pydantic Settings automatically:
  1. Reads from environment variables (highest priority)
  2. Falls back to .env file values
  3. Uses defaults defined here (lowest priority)

Usage:
    from users_api.config import settings
    print(settings.DATABASE_URL)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the Users API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Application ---
    APP_NAME: str = "Users API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- Database ---
    # SQLite for local runs; point at PostgreSQL (asyncpg driver) in production
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/users.db"

    # --- CORS ---
    # Any origin may call the API unless narrowed here
    ALLOWED_ORIGINS: list[str] = ["*"]


# Singleton: import this instance everywhere instead of creating new Settings()
settings = Settings()
