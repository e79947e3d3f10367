#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "PyShortcodes"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "testing", "production"] = "development"
    log_level: str = "INFO"

    # ── Shortcodes ─────────────────────────────────────────────────────────

    ignore_html: bool = False          # default for the render endpoint
    register_builtin_forms: bool = True

    # Only rendered into the sample forms; nothing here talks to it.
    service_api_base_url: str = "http://localhost:8000/wp-json/salon/api/v1/"

    # ── CORS ───────────────────────────────────────────────────────────────

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------

def debug_logging_allowed(settings: Settings) -> bool:
    return settings.debug and settings.environment != "production"


def configure_logging(settings: Settings | None = None) -> None:
    """
    Apply the configured log level to the root logger.

    ``debug`` switches to DEBUG except in production, where ``log_level``
    always applies.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if debug_logging_allowed(settings) else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)


# -----------------------------------------------------------------------------
