"""
ShortcodeRegistry - central store of all registered shortcode handlers.

Handlers are plain callables:
    def my_handler(attrs: ShortcodeAttributes | str, content: str | None, tag: str) -> str

Register directly:
    shortcode_registry.register("gallery", gallery_handler)

or with the decorator form:
    @shortcode_registry.register("gallery")
    def gallery_handler(attrs, content, tag):
        return "<div class='gallery'></div>"

Registering an existing name replaces the previous handler.
"""

from __future__ import annotations

import logging
import re
import threading
import warnings
from typing import Any, Callable, Optional

from .exceptions import InvalidTagNameError, ShortcodeWarning

logger = logging.getLogger(__name__)


ShortcodeHandler = Callable[[Any, Optional[str], str], str]

RESERVED_CHARS = "& / < > [ ] ="

# Reserved characters plus whitespace and control characters.
_INVALID_NAME_RE = re.compile(r'[<>&/\[\]\x00-\x20=]')


class ShortcodeRegistry:
    """
    Tag name → handler mapping.

    All access goes through one re-entrant lock, so a document expansion
    can take a consistent :meth:`snapshot` while another thread registers.
    """

    def __init__(self, strict_warnings: bool = False) -> None:
        self._handlers: dict[str, ShortcodeHandler] = {}
        self._lock = threading.RLock()
        self.strict_warnings = strict_warnings

    # ---------------------------------------------------------------- register

    @staticmethod
    def validate_name(name: str) -> None:
        """Raise :class:`InvalidTagNameError` if *name* cannot be a tag."""
        if not isinstance(name, str) or name.strip() == "":
            raise InvalidTagNameError(str(name), "Empty name given.")
        if _INVALID_NAME_RE.search(name):
            raise InvalidTagNameError(
                name,
                f"Do not use spaces or reserved characters: {RESERVED_CHARS}",
            )

    def register(self, name: str, handler: ShortcodeHandler | None = None):
        """
        Bind *handler* to *name*.

        Returns ``True`` when registered, ``False`` when the name was
        rejected.  Called without a handler it returns a decorator.
        """
        if handler is None:
            def decorator(fn: ShortcodeHandler) -> ShortcodeHandler:
                self.register(name, fn)
                return fn
            return decorator

        try:
            self.validate_name(name)
        except InvalidTagNameError as exc:
            self.doing_it_wrong("register", str(exc))
            return False

        with self._lock:
            if name in self._handlers:
                logger.debug("Replacing shortcode handler: %s", name)
            self._handlers[name] = handler
        logger.debug("Registered shortcode: %s", name)
        return True

    def unregister(self, name: str) -> None:
        with self._lock:
            self._handlers.pop(name, None)

    def clear(self) -> None:
        with self._lock:
            self._handlers = {}

    # ------------------------------------------------------------------ lookup

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._handlers

    def get(self, name: str) -> ShortcodeHandler | None:
        with self._lock:
            return self._handlers.get(name)

    def names(self) -> set[str]:
        with self._lock:
            return set(self._handlers)

    def snapshot(self) -> dict[str, ShortcodeHandler]:
        """Copy of the current mapping, in registration order."""
        with self._lock:
            return dict(self._handlers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)

    # ------------------------------------------------------------ diagnostics

    def doing_it_wrong(self, where: str, message: str) -> None:
        """Report API misuse.  Never raises."""
        logger.warning("%s: %s", where, message)
        if self.strict_warnings:
            warnings.warn(f"{where}: {message}", ShortcodeWarning, stacklevel=3)


# Singleton shared across the application
shortcode_registry = ShortcodeRegistry()
