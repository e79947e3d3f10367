"""
Shortcodes inside HTML tags
===========================
Expands shortcodes that live inside ``<...>`` spans and encodes every other
square bracket in those spans as ``&#91;`` / ``&#93;``, so the main pass
over the document cannot pair a bracket inside markup (``<!--[if IE]>``,
``<a title="]">``) with one outside it.

The encoding is undone by :func:`unescape_invalid_shortcodes` once the main
pass is done.  Brackets that were already written as ``&#91;`` / ``&#93;``
in the input are first re-written as ``&#091;`` / ``&#093;`` so they
survive that step untouched.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .markup import element_name, html_split, parse_tag_attributes

logger = logging.getLogger(__name__)

Evaluate = Callable[[re.Match[str]], str]
Sanitize = Callable[[str, str], str]

_NORMALIZE = {"&#91;": "&#091;", "&#93;": "&#093;"}
_ENCODE = str.maketrans({"[": "&#91;", "]": "&#93;"})
_UNESCAPE_RE = re.compile(r'&#9[13];')

# Some content does things like "[name] <[email]>".
_SHORTCODE_AS_TAG_RE = re.compile(r'^<\s*\[\[?[^\[\]]+\]')


def _encode_brackets(text: str) -> str:
    return text.translate(_ENCODE)


def do_shortcodes_in_html_tags(
    content: str,
    ignore_html: bool,
    pattern: re.Pattern[str],
    evaluate: Evaluate,
    sanitize: Sanitize,
) -> str:
    """
    Process shortcodes found inside HTML tags of *content*.

    Parameters
    ----------
    content : str
        The document.
    ignore_html : bool
        Encode every bracket inside tags instead of expanding shortcodes.
    pattern : re.Pattern
        Shortcode expression for the tags present in the document.
    evaluate : callable
        ``repl`` callable for *pattern* (expansion or stripping).
    sanitize : callable
        ``(attribute, element_name) -> str`` applied to quoted attribute
        values that received shortcode output.
    """
    for raw, normal in _NORMALIZE.items():
        content = content.replace(raw, normal)

    parts = html_split(content)

    for i, element in enumerate(parts):
        if not element or element[0] != "<":
            continue

        noopen = "[" not in element
        noclose = "]" not in element
        if noopen or noclose:
            # No shortcodes here, but a stray bracket still needs encoding.
            if noopen != noclose:
                parts[i] = _encode_brackets(element)
            continue

        if ignore_html or element.startswith("<!--") or element.startswith("<![CDATA["):
            parts[i] = _encode_brackets(element)
            continue

        attributes = parse_tag_attributes(element)
        if attributes is None:
            if _SHORTCODE_AS_TAG_RE.match(element):
                element = pattern.sub(evaluate, element)
            # Unparseable markup, leave it alone apart from the brackets.
            parts[i] = _encode_brackets(element)
            continue

        front = attributes[0]
        back = attributes[-1]
        attrs = attributes[1:-1]
        elname = element_name(front)

        for j, attr in enumerate(attrs):
            attrs[j] = _process_attribute(attr, elname, pattern, evaluate, sanitize)

        parts[i] = _encode_brackets(front + "".join(attrs) + back)

    return "".join(parts)


def _process_attribute(
    attr: str,
    elname: str,
    pattern: re.Pattern[str],
    evaluate: Evaluate,
    sanitize: Sanitize,
) -> str:
    open_pos = attr.find("[")
    close_pos = attr.find("]")
    if open_pos == -1 or close_pos == -1:
        return attr  # brackets get encoded with the rest of the tag

    double = attr.find('"')
    single = attr.find("'")
    if (single == -1 or open_pos < single) and (double == -1 or open_pos < double):
        # [shortcode] or name=[shortcode]: only a trusted author can have
        # written this, so the output is used as is.
        return pattern.sub(evaluate, attr)

    # name="[shortcode]": the output has to be sanitised before it goes in.
    new_attr, count = pattern.subn(evaluate, attr)
    if count > 0:
        new_attr = sanitize(new_attr, elname)
        if new_attr.strip() != "":
            return new_attr
        logger.debug("Discarded shortcode output in <%s> attribute %r", elname, attr)
    return attr


def unescape_invalid_shortcodes(content: str) -> str:
    """Turn the ``&#91;`` / ``&#93;`` placeholders back into brackets."""
    return _UNESCAPE_RE.sub(lambda m: "[" if m.group(0) == "&#91;" else "]", content)
