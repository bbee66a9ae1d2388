"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Safety limits applied before/while parsing
DEFAULT_MAX_DOCUMENT_SIZE = 5_000_000  # characters
DEFAULT_MAX_DEPTH = 100  # nested collections


class Settings(BaseSettings):
    """Configuration for building YAML source maps.

    Values are read from ``YAMLSOURCEMAP_*`` environment variables and from a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="YAMLSOURCEMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    max_document_size: int = DEFAULT_MAX_DOCUMENT_SIZE
    max_depth: int = DEFAULT_MAX_DEPTH


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for applications embedding the source map."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())
