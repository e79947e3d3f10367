#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Test fixtures
=============
Every test gets its own ShortcodeRegistry / ShortcodeHooks, so nothing
leaks through the application-wide registry.  The HTTP client runs the
FastAPI app in-process with the engine dependency overridden.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ── Env vars must be set before importing app modules ────────────────────────
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("REGISTER_BUILTIN_FORMS", "false")

from pyshortcodes.main import create_app
from pyshortcodes.routes.shortcodes import get_engine
from pyshortcodes.services.shortcodes import (
    ShortcodeEngine,
    ShortcodeHooks,
    ShortcodeRegistry,
)


# ── Isolated registry / hooks / engine ────────────────────────────────────────
@pytest.fixture
def registry() -> ShortcodeRegistry:
    return ShortcodeRegistry()


@pytest.fixture
def hooks() -> ShortcodeHooks:
    return ShortcodeHooks()


@pytest.fixture
def engine(registry: ShortcodeRegistry, hooks: ShortcodeHooks) -> ShortcodeEngine:
    return ShortcodeEngine(registry=registry, hooks=hooks)


class Recorder:
    """Handler that records every call and echoes what it received."""

    def __init__(self, output: str | None = None) -> None:
        self.calls: list[tuple] = []
        self.output = output

    def __call__(self, attrs, content, tag):
        self.calls.append((attrs, content, tag))
        if self.output is not None:
            return self.output
        return f"<{tag}:{'' if content is None else content}>"


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


# ── HTTP client bound to the test engine ──────────────────────────────────────
@pytest_asyncio.fixture
async def client(engine: ShortcodeEngine) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()
    app.dependency_overrides[get_engine] = lambda: engine

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
