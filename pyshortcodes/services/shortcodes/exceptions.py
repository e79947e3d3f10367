"""
Shortcode exceptions and warnings.

Nothing in the expansion path raises these at the caller: invalid names and
broken handlers are reported and degrade to leaving the text alone.
"""

from __future__ import annotations


class ShortcodeError(Exception):
    """Base class for shortcode errors."""


class InvalidTagNameError(ShortcodeError):
    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        self.reason = reason
        super().__init__(f"Invalid shortcode name: {tag!r}. {reason}")


class ShortcodeWarning(UserWarning):
    """Emitted for misuse when a registry is created with strict_warnings."""
