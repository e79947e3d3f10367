"""
Extension hooks around shortcode evaluation.

  pre_do_tag      (tag, attrs, match) -> str | None
                  The first hook returning something other than None
                  replaces the shortcode and the handler is not called.
  do_tag          (output, tag, attrs, match) -> str
                  Rewrites handler output; hooks are chained.
  shortcode_atts  (out, pairs, atts, tag) -> dict
                  Per-tag filters run by shortcode_atts(..., shortcode=tag).
  strip_tagnames  (tagnames, content) -> list[str]
                  Chooses which tags strip() removes.

Hooks run in registration order.  Every ``add_*`` method returns the hook,
so it can be used as a decorator.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

PreDoTagHook = Callable[[str, Any, Any], Optional[str]]
DoTagHook = Callable[[str, str, Any, Any], str]
AttsHook = Callable[[dict, dict, Any, str], dict]
StripTagnamesHook = Callable[[list, str], list]


class ShortcodeHooks:
    def __init__(self) -> None:
        self._pre_do_tag: list[PreDoTagHook] = []
        self._do_tag: list[DoTagHook] = []
        self._atts: dict[str, list[AttsHook]] = defaultdict(list)
        self._strip_tagnames: list[StripTagnamesHook] = []

    # ---------------------------------------------------------------- register

    def add_pre_do_tag(self, hook: PreDoTagHook) -> PreDoTagHook:
        self._pre_do_tag.append(hook)
        return hook

    def remove_pre_do_tag(self, hook: PreDoTagHook) -> None:
        if hook in self._pre_do_tag:
            self._pre_do_tag.remove(hook)

    def add_do_tag(self, hook: DoTagHook) -> DoTagHook:
        self._do_tag.append(hook)
        return hook

    def remove_do_tag(self, hook: DoTagHook) -> None:
        if hook in self._do_tag:
            self._do_tag.remove(hook)

    def add_shortcode_atts(self, tag: str, hook: AttsHook | None = None):
        """Register an attribute filter for *tag* (decorator if no hook)."""
        if hook is None:
            def decorator(fn: AttsHook) -> AttsHook:
                self._atts[tag].append(fn)
                return fn
            return decorator
        self._atts[tag].append(hook)
        return hook

    def remove_shortcode_atts(self, tag: str, hook: AttsHook) -> None:
        if hook in self._atts.get(tag, []):
            self._atts[tag].remove(hook)

    def add_strip_tagnames(self, hook: StripTagnamesHook) -> StripTagnamesHook:
        self._strip_tagnames.append(hook)
        return hook

    def remove_strip_tagnames(self, hook: StripTagnamesHook) -> None:
        if hook in self._strip_tagnames:
            self._strip_tagnames.remove(hook)

    # --------------------------------------------------------------------- run

    def run_pre_do_tag(self, tag: str, attrs: Any, match: Any) -> Optional[str]:
        for hook in self._pre_do_tag:
            result = hook(tag, attrs, match)
            if result is not None:
                logger.debug("pre_do_tag hook %r short-circuited [%s]", hook, tag)
                return result
        return None

    def run_do_tag(self, output: str, tag: str, attrs: Any, match: Any) -> str:
        for hook in self._do_tag:
            output = hook(output, tag, attrs, match)
        return output

    def run_shortcode_atts(self, out: dict, pairs: dict, atts: Any, tag: str) -> dict:
        for hook in self._atts.get(tag, []):
            out = hook(out, pairs, atts, tag)
        return out

    def run_strip_tagnames(self, tagnames: list[str], content: str) -> list[str]:
        for hook in self._strip_tagnames:
            tagnames = list(hook(tagnames, content))
        return tagnames


# Shared hook set used by the module-level helpers
shortcode_hooks = ShortcodeHooks()
