#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------

"""
PyShortcodes - FastAPI Application
==================================
Entry point.  Start with:
    uvicorn pyshortcodes.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pyshortcodes.core.config import configure_logging, get_settings
from pyshortcodes.routes import shortcodes
from pyshortcodes.services.shortcodes import register_all_builtins

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup / shutdown."""
        if settings.register_builtin_forms:
            register_all_builtins()
            logger.info("Registered built-in shortcodes")
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Bracket shortcode expansion service",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────
    API = "/api/v1"
    app.include_router(shortcodes.router, prefix=API)

    @app.get("/health", tags=["meta"])
    async def health():
        return {
            "status": "ok",
            "version": settings.app_version,
            "environment": settings.environment,
        }

    return app


app = create_app()
