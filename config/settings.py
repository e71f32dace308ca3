"""
Application settings loaded from environment variables (and `.env`).
"""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./smart_chef.db"

    # Session clock: one tick is one simulated minute
    tick_seconds: float = 60.0

    # Caller-side timeout for store and recipe source calls
    store_timeout_seconds: float = 5.0
    recipe_list_limit: int = 20

    # Voice
    voice_output_enabled: bool = True
    voice_input_enabled: bool = True
    voice_language: str = "zh-CN"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the app entry point."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
