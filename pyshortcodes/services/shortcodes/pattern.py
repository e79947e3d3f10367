"""
Shortcode pattern
=================
Builds the single regular expression that finds shortcodes for a set of
tag names.

The expression has six groups, in this order:

  escape_open    an extra ``[`` so that ``[[tag]]`` renders literally
  tag            the shortcode name
  attrs          the raw attribute list
  self_closing   the ``/`` of ``[tag /]``
  content        the text between ``[tag]`` and ``[/tag]``
  escape_close   an extra ``]`` paired with escape_open

The evaluator, the stripper and the HTML scanner all read matches through
:class:`ShortcodeMatch`, so the grouping must not change.

The attribute and content runs are possessive (Python 3.11+), so a failed
match never backtracks into them.  An enclosing tag that is never closed
still scans to the end of the text before giving up: a document with n
unclosed tags costs roughly n times its length.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

# Candidate names: "[" followed by anything that is not reserved.
_TAGNAME_SCAN_RE = re.compile(r'\[([^<>&/\[\]\x00-\x20=]+)')


def find_tagnames(content: str) -> list[str]:
    """Names that appear right after a ``[`` in *content*, in order."""
    return _TAGNAME_SCAN_RE.findall(content)


def _ordered(tagnames: Iterable[str]) -> list[str]:
    # Longest first so a name is never shadowed by one of its prefixes.
    return sorted(set(tagnames), key=lambda name: (-len(name), name))


def get_shortcode_regex(tagnames: Iterable[str]) -> str:
    """Return the shortcode expression source for *tagnames*."""
    tagregexp = "|".join(re.escape(name) for name in _ordered(tagnames))

    return (
        r'\['                                   # opening bracket
        r'(?P<escape_open>\[?)'                 # 1: [[tag]] escape
        r'(?P<tag>' + tagregexp + r')'          # 2: shortcode name
        r'(?![\w-])'                            # not followed by word char or hyphen
        r'(?P<attrs>'                           # 3: inside the opening tag
        r'[^\]/]*+'                             # not a closing bracket or slash
        r'(?:/(?!\])[^\]/]*+)*?'                # a slash not followed by ]
        r')'
        r'(?:'
        r'(?P<self_closing>/)\]'                # 4: self closing tag
        r'|'
        r'\]'
        r'(?:'
        r'(?P<content>'                         # 5: enclosed content
        r'[^\[]*+'                              # not an opening bracket
        r'(?:\[(?!/(?P=tag)\])[^\[]*+)*+'       # a [ not starting the closing tag
        r')'
        r'\[/(?P=tag)\]'                        # closing tag
        r')?'
        r')'
        r'(?P<escape_close>\]?)'                # 6: [[tag]] escape
    )


def compile_shortcode_regex(tagnames: Iterable[str]) -> re.Pattern[str]:
    return re.compile(get_shortcode_regex(tagnames))


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ShortcodeMatch:
    """One shortcode occurrence, field for field with the pattern groups."""

    text: str
    escaped_open: bool
    tag: str
    raw_attrs: str
    self_closing: bool
    content: Optional[str]
    escaped_close: bool

    @classmethod
    def from_match(cls, m: re.Match[str]) -> "ShortcodeMatch":
        return cls(
            text=m.group(0),
            escaped_open=m.group("escape_open") == "[",
            tag=m.group("tag"),
            raw_attrs=m.group("attrs"),
            self_closing=m.group("self_closing") is not None,
            content=m.group("content"),
            escaped_close=m.group("escape_close") == "]",
        )

    @property
    def is_escaped(self) -> bool:
        """``[[tag]]``: render the tag literally."""
        return self.escaped_open and self.escaped_close

    @property
    def open_marker(self) -> str:
        return "[" if self.escaped_open else ""

    @property
    def close_marker(self) -> str:
        return "]" if self.escaped_close else ""

    def unescaped(self) -> str:
        """The matched text with the outer bracket pair removed."""
        return self.text[1:-1]
