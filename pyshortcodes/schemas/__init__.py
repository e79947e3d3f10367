"""
Pydantic v2 schemas for request validation and response serialisation.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Shortcodes
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ShortcodeInfo(BaseModel):
    tag: str
    registered: bool = True


# -----------------------------------------------------------------------------

class RenderRequest(BaseModel):
    content: str
    ignore_html: Optional[bool] = None   # None → settings default


# -----------------------------------------------------------------------------

class StripRequest(BaseModel):
    content: str


# -----------------------------------------------------------------------------

class ContentResponse(BaseModel):
    content: str


# -----------------------------------------------------------------------------

class ParseAttsRequest(BaseModel):
    text: str


# -----------------------------------------------------------------------------

class ParseAttsResponse(BaseModel):
    named: dict[str, str] = Field(default_factory=dict)
    positional: list[str] = Field(default_factory=list)
    raw: Optional[str] = None     # set when the text is not an attribute list


# -----------------------------------------------------------------------------

class HasShortcodeRequest(BaseModel):
    content: str
    tag: str = Field(..., min_length=1)


# -----------------------------------------------------------------------------

class HasShortcodeResponse(BaseModel):
    found: bool
