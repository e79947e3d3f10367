"""
ShortcodeEngine
===============
Entry point for expanding (or stripping) shortcodes in a document.

    engine = ShortcodeEngine(registry)
    html = engine.process('[gallery id="3"] and [[gallery]]')

One call works like this:

  1. bail out early when there is no "[" or nothing is registered
  2. collect the "[name" candidates and keep the registered ones
  3. expand / encode brackets inside HTML tags (scanner.py)
  4. one substitution pass with the pattern for those tags
  5. put the brackets encoded in step 3 back

The registry is read once per call through ``snapshot()``; handlers added
while a document is being processed only apply to the next call.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Optional

from .evaluator import TagEvaluator
from .hooks import ShortcodeHooks, shortcode_hooks
from .markup import sanitize_attribute_value
from .pattern import (
    ShortcodeMatch,
    compile_shortcode_regex,
    find_tagnames,
    get_shortcode_regex,
)
from .registry import ShortcodeRegistry, shortcode_registry
from .scanner import do_shortcodes_in_html_tags, unescape_invalid_shortcodes

logger = logging.getLogger(__name__)


class ShortcodeEngine:
    """
    Parameters
    ----------
    registry : ShortcodeRegistry, optional
        Defaults to the application-wide ``shortcode_registry``.
    hooks : ShortcodeHooks, optional
        Defaults to the application-wide ``shortcode_hooks``.
    sanitizer : callable, optional
        ``(attribute, element_name) -> str`` used on shortcode output placed
        inside quoted HTML attribute values.
    """

    def __init__(
        self,
        registry: ShortcodeRegistry | None = None,
        hooks: ShortcodeHooks | None = None,
        sanitizer: Callable[[str, str], str] | None = None,
    ) -> None:
        self.registry = registry if registry is not None else shortcode_registry
        self.hooks = hooks if hooks is not None else shortcode_hooks
        self.sanitizer = sanitizer or sanitize_attribute_value

    # ----------------------------------------------------------------- public

    def process(self, content: str, ignore_html: bool = False) -> str:
        """Return *content* with every registered shortcode expanded."""
        if "[" not in content:
            return content

        handlers = self.registry.snapshot()
        if not handlers:
            return content

        tagnames = self._present(handlers, content)
        if not tagnames:
            return content

        evaluator = TagEvaluator(handlers, self.hooks, self.registry)
        return self._run(content, tagnames, ignore_html, evaluator.do_tag)

    apply = process

    def strip(self, content: str) -> str:
        """Return *content* with registered shortcodes removed."""
        if "[" not in content:
            return content

        handlers = self.registry.snapshot()
        if not handlers:
            return content

        to_remove = self.hooks.run_strip_tagnames(list(handlers), content)
        found = set(find_tagnames(content))
        tagnames = [name for name in to_remove if name in found]
        if not tagnames:
            return content

        evaluator = TagEvaluator(handlers, self.hooks, self.registry)
        return self._run(content, tagnames, True, evaluator.strip_tag)

    def has_shortcode(self, content: str, tag: str) -> bool:
        """True if *tag* is registered and used in *content*, at any depth."""
        if "[" not in content or not self.registry.exists(tag):
            return False

        pattern = compile_shortcode_regex(self.registry.names())
        for m in pattern.finditer(content):
            match = ShortcodeMatch.from_match(m)
            if match.tag == tag:
                return True
            if match.content and self.has_shortcode(match.content, tag):
                return True
        return False

    def get_regex(self, tagnames: Optional[Iterable[str]] = None) -> str:
        """Pattern source for *tagnames*, or for every registered tag."""
        names = list(tagnames) if tagnames else list(self.registry.names())
        return get_shortcode_regex(names)

    # ---------------------------------------------------------------- private

    @staticmethod
    def _present(handlers: dict, content: str) -> list[str]:
        found = set(find_tagnames(content))
        return [name for name in handlers if name in found]

    def _run(
        self,
        content: str,
        tagnames: list[str],
        ignore_html: bool,
        evaluate: Callable[[re.Match[str]], str],
    ) -> str:
        pattern = compile_shortcode_regex(tagnames)
        logger.debug("Processing shortcodes: %s", ", ".join(tagnames))

        content = do_shortcodes_in_html_tags(
            content, ignore_html, pattern, evaluate, self.sanitizer
        )
        content = pattern.sub(evaluate, content)

        # Always restore square brackets so things like <!--[if IE ]> survive.
        return unescape_invalid_shortcodes(content)


# ---------------------------------------------------------------------------
# Module-level helpers bound to the shared registry and hooks
# ---------------------------------------------------------------------------

def _default_engine() -> ShortcodeEngine:
    return ShortcodeEngine(shortcode_registry, shortcode_hooks)


def do_shortcode(content: str, ignore_html: bool = False) -> str:
    return _default_engine().process(content, ignore_html)


def apply_shortcodes(content: str, ignore_html: bool = False) -> str:
    """Alias of :func:`do_shortcode`."""
    return do_shortcode(content, ignore_html)


def strip_shortcodes(content: str) -> str:
    return _default_engine().strip(content)


def has_shortcode(content: str, tag: str) -> bool:
    return _default_engine().has_shortcode(content, tag)


def add_shortcode(tag: str, handler) -> bool:
    return shortcode_registry.register(tag, handler)


def remove_shortcode(tag: str) -> None:
    shortcode_registry.unregister(tag)


def remove_all_shortcodes() -> None:
    shortcode_registry.clear()


def shortcode_exists(tag: str) -> bool:
    return shortcode_registry.exists(tag)
