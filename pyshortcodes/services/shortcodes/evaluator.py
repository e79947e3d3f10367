"""
TagEvaluator - turns one pattern match into its replacement text.

Used as the ``repl`` callable of ``pattern.sub``.  Every failure mode ends
with the original shortcode text being put back, never with an exception
leaking out of the substitution.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from .attributes import parse_atts
from .hooks import ShortcodeHooks
from .pattern import ShortcodeMatch
from .registry import ShortcodeHandler, ShortcodeRegistry

logger = logging.getLogger(__name__)


class TagEvaluator:
    """
    Parameters
    ----------
    handlers : Mapping[str, ShortcodeHandler]
        Snapshot of the registry taken for the current document.
    hooks : ShortcodeHooks
        pre/post hooks run around each handler call.
    registry : ShortcodeRegistry, optional
        Only used to report misuse.
    """

    def __init__(
        self,
        handlers: Mapping[str, ShortcodeHandler],
        hooks: ShortcodeHooks,
        registry: ShortcodeRegistry | None = None,
    ) -> None:
        self._handlers = handlers
        self._hooks = hooks
        self._registry = registry

    # ----------------------------------------------------------------- public

    def do_tag(self, m: re.Match[str]) -> str:
        """Replacement for one shortcode: the handler output, or the original text."""
        match = ShortcodeMatch.from_match(m)

        # Allow [[foo]] syntax for escaping a tag.
        if match.is_escaped:
            return match.unescaped()

        tag = match.tag
        handler = self._handlers.get(tag)
        if not callable(handler):
            self._doing_it_wrong(
                f"Attempting to parse a shortcode without a valid callback: {tag}"
            )
            return match.text

        attrs = parse_atts(match.raw_attrs)

        short_circuit = self._hooks.run_pre_do_tag(tag, attrs, match)
        if short_circuit is not None:
            return short_circuit

        try:
            result = handler(attrs, match.content, tag)
        except Exception:
            logger.exception("Shortcode [%s] handler raised an error", tag)
            return match.text

        output = match.open_marker + _as_text(result) + match.close_marker
        return self._hooks.run_do_tag(output, tag, attrs, match)

    def strip_tag(self, m: re.Match[str]) -> str:
        """Replacement used by strip(): drop the shortcode, keep escapes."""
        match = ShortcodeMatch.from_match(m)
        if match.is_escaped:
            return match.unescaped()
        return match.open_marker + match.close_marker

    # ---------------------------------------------------------------- private

    def _doing_it_wrong(self, message: str) -> None:
        if self._registry is not None:
            self._registry.doing_it_wrong("do_tag", message)
        else:
            logger.warning("do_tag: %s", message)


def _as_text(result: object) -> str:
    if result is None:
        return ""
    return result if isinstance(result, str) else str(result)
