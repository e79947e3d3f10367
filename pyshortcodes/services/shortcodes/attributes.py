"""
ShortcodeAttributes
===================
Parses the attribute list of a shortcode tag.

Supported forms, tried left to right for every token
----------------------------------------------------
  name="value"          → named["name"] = "value"
  name='value'          → named["name"] = "value"
  name=value            → named["name"] = "value"
  "value"               → positional.append("value")
  'value'               → positional.append("value")
  value (bare word)     → positional.append("value")

Names are lower-cased.  Values have C-style backslash escapes removed.

  [gallery id="123" size="medium" lightbox]
  → named {"id": "123", "size": "medium"}, positional ["lightbox"]
"""

from __future__ import annotations

import re
from typing import Any, Iterator, Optional, Union

from .hooks import ShortcodeHooks, shortcode_hooks

_ATTS_RE = re.compile(
    r'([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)'
    r"|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)"
    r'|([\w-]+)\s*=\s*([^\s\'"]+)(?:\s|$)'
    r'|"([^"]*)"(?:\s|$)'
    r"|'([^']*)'(?:\s|$)"
    r'|(\S+)(?:\s|$)'
)

# Runs of no-break space / zero width space.
_SPACES_RE = re.compile('[\u00a0\u200b]+')

# Text with only complete <...> spans.
_BALANCED_RE = re.compile(r'[^<]*(?:<[^>]*>[^<]*)*')

_CSLASH_RE = re.compile(r'\\(?:([0-7]{1,3})|x([0-9A-Fa-f]{1,2})|(.))', re.DOTALL)
_CSLASH_CHARS = {
    "a": "\a", "b": "\b", "f": "\f", "n": "\n",
    "r": "\r", "t": "\t", "v": "\v",
}


def strip_cslashes(value: str) -> str:
    """Undo C-style backslash escaping (``\\n``, ``\\x41``, ``\\101``, ``\\"``)."""
    def _unescape(m: re.Match[str]) -> str:
        octal, hexa, char = m.groups()
        if octal is not None:
            return chr(int(octal, 8) & 0xFF)
        if hexa is not None:
            return chr(int(hexa, 16))
        return _CSLASH_CHARS.get(char, char)

    return _CSLASH_RE.sub(_unescape, value)


# -----------------------------------------------------------------------------

class ShortcodeAttributes:
    """
    Named and positional attribute values of one shortcode.

    ``attrs["size"]`` reads a named value, ``attrs[0]`` the first
    positional one.  Iteration, ``len`` and ``in`` cover named keys.
    """

    __slots__ = ("named", "positional")
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        named: Optional[dict[str, str]] = None,
        positional: Optional[list[str]] = None,
    ) -> None:
        self.named: dict[str, str] = dict(named or {})
        self.positional: list[str] = list(positional or [])

    def __getitem__(self, key: Union[str, int]) -> str:
        if isinstance(key, int):
            return self.positional[key]
        return self.named[key]

    def get(self, key: Union[str, int], default: Any = None) -> Any:
        try:
            return self[key]
        except (KeyError, IndexError):
            return default

    def __contains__(self, key: object) -> bool:
        return key in self.named

    def __iter__(self) -> Iterator[str]:
        return iter(self.named)

    def __len__(self) -> int:
        return len(self.named)

    def __bool__(self) -> bool:
        return bool(self.named or self.positional)

    def items(self):
        return self.named.items()

    def to_dict(self) -> dict[str, Any]:
        return {"named": dict(self.named), "positional": list(self.positional)}

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ShortcodeAttributes):
            return self.named == other.named and self.positional == other.positional
        if isinstance(other, dict):
            return not self.positional and self.named == other
        if isinstance(other, list):
            return not self.named and self.positional == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ShortcodeAttributes(named={self.named!r}, positional={self.positional!r})"


# -----------------------------------------------------------------------------

def parse_atts(text: str) -> Union[ShortcodeAttributes, str]:
    """
    Parse a shortcode attribute string.

    Returns
    -------
    ShortcodeAttributes | str
        ``""`` for blank input, an empty :class:`ShortcodeAttributes` for
        ``'""'``, and the left-stripped text itself when nothing in it
        looks like an attribute.
    """
    text = _SPACES_RE.sub(" ", text)
    matches = list(_ATTS_RE.finditer(text))
    if not matches:
        return text.lstrip()

    atts = ShortcodeAttributes()
    for m in matches:
        g = m.groups()
        if g[0]:
            atts.named[g[0].lower()] = strip_cslashes(g[1])
        elif g[2]:
            atts.named[g[2].lower()] = strip_cslashes(g[3])
        elif g[4]:
            atts.named[g[4].lower()] = strip_cslashes(g[5])
        elif g[6]:
            atts.positional.append(strip_cslashes(g[6]))
        elif g[7]:
            atts.positional.append(strip_cslashes(g[7]))
        elif g[8] is not None:
            atts.positional.append(strip_cslashes(g[8]))

    # Reject any unclosed HTML elements.
    for key, value in atts.named.items():
        atts.named[key] = _reject_unbalanced(value)
    atts.positional = [_reject_unbalanced(v) for v in atts.positional]

    return atts


def _reject_unbalanced(value: str) -> str:
    if "<" in value and not _BALANCED_RE.fullmatch(value):
        return ""
    return value


# -----------------------------------------------------------------------------

def shortcode_atts(
    pairs: dict[str, Any],
    atts: Union[ShortcodeAttributes, dict, str, None],
    shortcode: str = "",
    hooks: Optional[ShortcodeHooks] = None,
) -> dict[str, Any]:
    """
    Combine user attributes with the supported ones and their defaults.

    Only keys present in *pairs* are returned.  When *shortcode* is given
    the ``shortcode_atts`` hooks registered for that tag may adjust the
    result.
    """
    if isinstance(atts, ShortcodeAttributes):
        supplied: dict[str, Any] = atts.named
    elif isinstance(atts, dict):
        supplied = atts
    else:
        supplied = {}

    out = {name: supplied.get(name, default) for name, default in pairs.items()}

    if shortcode:
        hooks = hooks or shortcode_hooks
        out = hooks.run_shortcode_atts(out, pairs, atts, shortcode)

    return out
