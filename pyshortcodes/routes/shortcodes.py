#!/usr/bin/env python3
# -----------------------------------------------------------------------------
"""
Shortcode API routes.

GET    /api/v1/shortcodes               List registered tags
GET    /api/v1/shortcodes/{tag}         Is this tag registered?
POST   /api/v1/render                   Expand shortcodes in content
POST   /api/v1/strip                    Remove shortcodes from content
POST   /api/v1/parse-atts               Parse a shortcode attribute string
POST   /api/v1/has-shortcode            Does content use a given tag?
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from pyshortcodes.core.config import Settings, get_settings
from pyshortcodes.schemas import (
    ContentResponse,
    HasShortcodeRequest,
    HasShortcodeResponse,
    ParseAttsRequest,
    ParseAttsResponse,
    RenderRequest,
    ShortcodeInfo,
    StripRequest,
)
from pyshortcodes.services.shortcodes import ShortcodeEngine, parse_atts

router = APIRouter(tags=["shortcodes"])


def get_engine() -> ShortcodeEngine:
    """Engine bound to the shared registry; overridden in tests."""
    return ShortcodeEngine()


# ── Registry ──────────────────────────────────────────────────────────────────

@router.get("/shortcodes", response_model=list[ShortcodeInfo])
async def list_shortcodes(engine: ShortcodeEngine = Depends(get_engine)):
    return [ShortcodeInfo(tag=tag) for tag in sorted(engine.registry.names())]


@router.get("/shortcodes/{tag}", response_model=ShortcodeInfo)
async def get_shortcode(tag: str, engine: ShortcodeEngine = Depends(get_engine)):
    if not engine.registry.exists(tag):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shortcode not registered: {tag}",
        )
    return ShortcodeInfo(tag=tag)


# ── Processing ────────────────────────────────────────────────────────────────

@router.post("/render", response_model=ContentResponse)
async def render(
    data: RenderRequest,
    engine: ShortcodeEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
):
    ignore_html = settings.ignore_html if data.ignore_html is None else data.ignore_html
    return ContentResponse(content=engine.process(data.content, ignore_html=ignore_html))


@router.post("/strip", response_model=ContentResponse)
async def strip(data: StripRequest, engine: ShortcodeEngine = Depends(get_engine)):
    return ContentResponse(content=engine.strip(data.content))


@router.post("/parse-atts", response_model=ParseAttsResponse)
async def parse_attributes(data: ParseAttsRequest):
    atts = parse_atts(data.text)
    if isinstance(atts, str):
        return ParseAttsResponse(raw=atts)
    return ParseAttsResponse(named=atts.named, positional=atts.positional)


@router.post("/has-shortcode", response_model=HasShortcodeResponse)
async def has_shortcode(
    data: HasShortcodeRequest,
    engine: ShortcodeEngine = Depends(get_engine),
):
    return HasShortcodeResponse(found=engine.has_shortcode(data.content, data.tag))
