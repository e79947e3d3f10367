"""
HTML helpers used by the shortcode scanner.

  html_split                 text / <tag> tokenisation of a document
  parse_tag_attributes       split one <tag ...> into front, attributes, back
  sanitize_attribute_value   default clean-up for shortcode output that ends
                             up inside a quoted attribute value

These are deliberately small: the input is assumed to be HTML that has
already been filtered once, we only need to know where tags start and end.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Document split.  Comments and CDATA run to their terminator (or the end
# of input); anything else runs to the next ">".
# ---------------------------------------------------------------------------
_HTML_SPLIT_RE = re.compile(
    r'('
    r'<'
    r'(?:'
    r'!(?=--)(?:-(?!->)[^-]*)*(?:-->)?'          # comment
    r'|'
    r'!\[CDATA\[[^\]]*(?:\](?!\]>)[^\]]*)*(?:\]\]>)?'  # CDATA section
    r'|'
    r'[^>]*>?'                                   # normal element
    r')'
    r')'
)

# <name ...attributes... >
_TAG_RE = re.compile(r'(<\s*)(/\s*)?([a-zA-Z0-9]+\s*)([^>]*)(>?)')
_XHTML_SLASH_RE = re.compile(r'\s*/\s*$')

_ATTR_RE = (
    r'(?:'
    r'[_a-zA-Z][-_a-zA-Z0-9:.]*'      # attribute name
    r'|'
    r'\[\[?[^\[\]]+\]\]?'             # shortcode in the name position
    r')'
    r'(?:'
    r'\s*=\s*'
    r'(?:'
    r'"[^"]*"'
    r'|'
    r"'[^']*'"
    r'|'
    r'[^\s"\']+(?:\s|$)'              # unquoted values need a space after
    r')'
    r'|'
    r'(?:\s|$)'                       # no value: space required
    r')'
    r'\s*'
)
_ATTR_VALIDATE_RE = re.compile(r'(?:' + _ATTR_RE + r')+')
_ATTR_EXTRACT_RE = re.compile(_ATTR_RE)


def html_split(text: str) -> list[str]:
    """
    Split *text* into alternating text and tag tokens.

    Even indexes are text (possibly empty), odd indexes are ``<...>``
    spans, comments or CDATA sections.
    """
    return _HTML_SPLIT_RE.split(text)


def parse_tag_attributes(element: str) -> Optional[list[str]]:
    """
    Split an opening tag into ``[front, attr, attr, ..., back]``.

    ``"".join(result) == element`` always holds.  Returns ``None`` for
    closing tags and for anything the attribute grammar cannot consume
    entirely.
    """
    m = _TAG_RE.fullmatch(element)
    if m is None:
        return None

    begin, slash, elname, attr, end = m.groups()
    if slash:
        return None

    xm = _XHTML_SLASH_RE.search(attr)
    if xm:
        xhtml_slash = xm.group(0)
        attr = attr[:len(attr) - len(xhtml_slash)]
    else:
        xhtml_slash = ""

    if not _ATTR_VALIDATE_RE.fullmatch(attr):
        return None

    parts = [begin + elname]
    parts.extend(am.group(0) for am in _ATTR_EXTRACT_RE.finditer(attr))
    parts.append(xhtml_slash + end)
    return parts


def element_name(front: str) -> str:
    m = re.search(r'[a-zA-Z0-9]+', front)
    return m.group(0) if m else ""


# ---------------------------------------------------------------------------
# Attribute sanitisation
# ---------------------------------------------------------------------------

ALLOWED_PROTOCOLS = frozenset({
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "irc6", "ircs",
    "gopher", "nntp", "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel",
    "fax", "xmpp", "webcal", "urn",
})

URI_ATTRIBUTES = frozenset({
    "action", "archive", "background", "cite", "classid", "codebase", "data",
    "formaction", "href", "icon", "longdesc", "manifest", "poster", "profile",
    "src", "usemap", "xmlns",
})

_ONE_ATTR_RE = re.compile(
    r'(?P<lead>\s*)(?P<name>[_a-zA-Z][-_a-zA-Z0-9:.]*)'
    r'(?:\s*=\s*(?:"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\'|(?P<bare>[^\s"\']+)))?'
    r'(?P<trail>\s*)'
)
_SCHEME_RE = re.compile(r'^([a-zA-Z][a-zA-Z0-9+.-]*):')
_URI_NOISE_RE = re.compile(r'[\x00-\x20]+')


def sanitize_attribute_value(attr: str, element: str) -> str:
    """
    Clean one attribute fragment such as ``title="..."``.

    Returns the cleaned fragment, or ``""`` when the attribute has to go:
    event handlers, URLs with a protocol outside :data:`ALLOWED_PROTOCOLS`,
    or anything that is not a single attribute.
    """
    m = _ONE_ATTR_RE.fullmatch(attr)
    if m is None:
        logger.debug("Rejected attribute on <%s>: %r", element, attr)
        return ""

    name = m.group("name").lower()
    if name.startswith("on"):
        logger.debug("Rejected event handler attribute %s on <%s>", name, element)
        return ""

    for quote, group in (('"', "dq"), ("'", "sq"), ("", "bare")):
        value = m.group(group)
        if value is not None:
            break
    else:
        return attr  # bare attribute name, nothing to clean

    if name in URI_ATTRIBUTES and not _protocol_allowed(value):
        logger.debug("Rejected %s=%r on <%s>: protocol not allowed", name, value, element)
        return ""

    value = value.replace("<", "&lt;").replace(">", "&gt;")
    return f'{m.group("lead")}{m.group("name")}={quote}{value}{quote}{m.group("trail")}'


def _protocol_allowed(value: str) -> bool:
    decoded = _URI_NOISE_RE.sub("", html.unescape(value))
    m = _SCHEME_RE.match(decoded)
    if m is None:
        return True
    return m.group(1).lower() in ALLOWED_PROTOCOLS
