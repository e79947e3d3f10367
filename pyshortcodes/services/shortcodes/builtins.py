"""
Built-in shortcode registrations.
Call register_all_builtins() once at application startup.
"""

from __future__ import annotations

from . import shortcode_forms
from .hooks import ShortcodeHooks
from .registry import ShortcodeRegistry, shortcode_registry


def register_all_builtins(
    registry: ShortcodeRegistry | None = None,
    hooks: ShortcodeHooks | None = None,
) -> None:
    """
    Register every built-in shortcode with *registry* (default: shared).

    Handlers that filter their attributes use *hooks*; pass the same
    ShortcodeHooks the engine is built with.
    """
    registry = registry if registry is not None else shortcode_registry
    shortcode_forms.register(registry, hooks)
