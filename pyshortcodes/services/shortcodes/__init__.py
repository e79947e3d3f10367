"""
Shortcode subsystem - public API.
"""

from .attributes import ShortcodeAttributes, parse_atts, shortcode_atts, strip_cslashes
from .builtins import register_all_builtins
from .engine import (
    ShortcodeEngine,
    add_shortcode,
    apply_shortcodes,
    do_shortcode,
    has_shortcode,
    remove_all_shortcodes,
    remove_shortcode,
    shortcode_exists,
    strip_shortcodes,
)
from .exceptions import InvalidTagNameError, ShortcodeError, ShortcodeWarning
from .hooks import ShortcodeHooks, shortcode_hooks
from .pattern import ShortcodeMatch, get_shortcode_regex
from .registry import ShortcodeRegistry, shortcode_registry

__all__ = [
    "ShortcodeAttributes",
    "ShortcodeEngine",
    "ShortcodeError",
    "ShortcodeHooks",
    "ShortcodeMatch",
    "ShortcodeRegistry",
    "ShortcodeWarning",
    "InvalidTagNameError",
    "add_shortcode",
    "apply_shortcodes",
    "do_shortcode",
    "get_shortcode_regex",
    "has_shortcode",
    "parse_atts",
    "register_all_builtins",
    "remove_all_shortcodes",
    "remove_shortcode",
    "shortcode_atts",
    "shortcode_exists",
    "shortcode_hooks",
    "shortcode_registry",
    "strip_cslashes",
    "strip_shortcodes",
]
