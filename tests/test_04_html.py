#!/usr/bin/env python
# -----------------------------------------------------------------------------
"""
Shortcodes and HTML
===================
  - html_split / parse_tag_attributes / sanitize_attribute_value
  - brackets inside comments, CDATA and attributes
  - trusted (unquoted) vs. quoted attribute shortcodes
  - ignore_html
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from pyshortcodes.services.shortcodes.markup import (
    html_split,
    parse_tag_attributes,
    sanitize_attribute_value,
)
from pyshortcodes.services.shortcodes.scanner import unescape_invalid_shortcodes


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. Markup helpers
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestHtmlSplit:
    def test_text_and_tags(self):
        assert html_split("a<b>c<!-- x -->d") == ["a", "<b>", "c", "<!-- x -->", "d"]

    def test_comment_keeps_inner_tags(self):
        parts = html_split("<!--[if IE]><p>ie</p><![endif]-->tail")
        assert parts[1] == "<!--[if IE]><p>ie</p><![endif]-->"
        assert parts[2] == "tail"

    def test_cdata(self):
        parts = html_split("<![CDATA[ a]b ]]>x")
        assert parts[1] == "<![CDATA[ a]b ]]>"

    def test_unterminated_comment_runs_to_end(self):
        assert html_split("x<!-- open")[1] == "<!-- open"

    def test_join_is_lossless(self):
        text = 'x <a href="[foo]">y</a> <!-- z --> <br/>'
        assert "".join(html_split(text)) == text


class TestParseTagAttributes:
    def test_split(self):
        element = '<img src="a.png" alt=\'x\' hidden />'
        parts = parse_tag_attributes(element)
        assert parts == ["<img ", 'src="a.png" ', "alt='x' ", "hidden", " />"]
        assert "".join(parts) == element

    def test_shortcode_in_name_position(self):
        assert parse_tag_attributes("<div [foo]>") == ["<div ", "[foo]", ">"]

    def test_closing_tag(self):
        assert parse_tag_attributes("</a>") is None

    def test_no_attributes(self):
        assert parse_tag_attributes("<p>") is None

    def test_garbage(self):
        assert parse_tag_attributes("<p =[foo]>") is None


class TestSanitizeAttributeValue:
    @pytest.mark.parametrize("attr", [
        'title="hello"',
        "title='hello'",
        'href="https://example.com/x"',
        'href="/relative/path"',
        'href="mailto:a@example.com" ',
    ])
    def test_kept(self, attr):
        assert sanitize_attribute_value(attr, "a") == attr

    @pytest.mark.parametrize("attr", [
        'onclick="alert(1)"',
        'href="javascript:alert(1)"',
        'href=" JavaScript:alert(1)"',
        'href="java&#115;cript:alert(1)"',
        'src="data:text/html,x"',
        'title="a" extra="b"',
    ])
    def test_rejected(self, attr):
        assert sanitize_attribute_value(attr, "a") == ""

    def test_angle_brackets_encoded(self):
        assert sanitize_attribute_value('title="<b>"', "a") == 'title="&lt;b&gt;"'


def test_unescape_only_touches_placeholders():
    assert unescape_invalid_shortcodes("&#91;x&#93; &#091;y&#093;") == "[x] &#091;y&#093;"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. process() over HTML
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestShortcodesInHtml:
    def test_conditional_comment_untouched(self, engine, registry, recorder):
        registry.register("foo", recorder)
        text = "<!--[if IE]><p>ie</p><![endif]--> [foo]"
        assert engine.process(text) == "<!--[if IE]><p>ie</p><![endif]--> <foo:>"

    def test_conditional_comment_without_registered_tags(self, engine, registry, recorder):
        registry.register("foo", recorder)
        text = "<!--[if IE]><link rel=stylesheet><![endif]-->"
        assert engine.process(text) == text

    def test_shortcode_in_comment_not_run(self, engine, registry, recorder):
        registry.register("foo", recorder)
        assert engine.process("<!-- [foo] -->") == "<!-- [foo] -->"
        assert recorder.calls == []

    def test_cdata_not_run(self, engine, registry, recorder):
        registry.register("foo", recorder)
        assert engine.process("<![CDATA[ [foo] ]]>") == "<![CDATA[ [foo] ]]>"
        assert recorder.calls == []

    def test_quoted_attribute_expanded(self, engine, registry):
        registry.register("foo", lambda a, c, t: "Hello")
        assert engine.process('<a title="[foo]">x</a>') == '<a title="Hello">x</a>'

    def test_quoted_attribute_unsafe_output_discarded(self, engine, registry):
        registry.register("link", lambda a, c, t: "javascript:alert(1)")
        text = '<a href="[link]">x</a>'
        assert engine.process(text) == text

    def test_quoted_attribute_custom_sanitizer(self, registry, hooks):
        from pyshortcodes.services.shortcodes import ShortcodeEngine

        seen = []

        def sanitizer(attr, element):
            seen.append((attr, element))
            return attr.upper()

        registry.register("foo", lambda a, c, t: "hi")
        engine = ShortcodeEngine(registry, hooks, sanitizer=sanitizer)
        assert engine.process('<span title="[foo]">') == '<span TITLE="HI">'
        assert seen == [('title="hi"', "span")]

    def test_unquoted_attribute_trusted(self, engine, registry):
        registry.register("foo", lambda a, c, t: "abc")
        assert engine.process("<input value=[foo]>") == "<input value=abc>"

    def test_shortcode_as_attribute(self, engine, registry):
        registry.register("cls", lambda a, c, t: 'class="big"')
        assert engine.process("<div [cls]>x</div>") == '<div class="big">x</div>'

    def test_bracket_in_attribute_cannot_close_outside_tag(self, engine, registry, recorder):
        registry.register("foo", recorder)
        text = '[foo]x<b title="[/foo]">y</b>'
        assert engine.process(text) == '<foo:>x<b title="[/foo]">y</b>'
        assert recorder.calls[0][1] is None

    def test_stray_bracket_in_tag(self, engine, registry, recorder):
        registry.register("foo", recorder)
        assert engine.process('<a title="]">[foo]</a>') == '<a title="]"><foo:></a>'

    def test_shortcode_in_angle_brackets(self, engine, registry):
        registry.register("name", lambda a, c, t: "Me")
        registry.register("email", lambda a, c, t: "me@example.com")
        assert engine.process("[name] <[email]>") == "Me <me@example.com>"

    def test_unparseable_tag_left_alone(self, engine, registry, recorder):
        registry.register("foo", recorder)
        assert engine.process("<p =[foo]>") == "<p =[foo]>"
        assert recorder.calls == []

    def test_ignore_html(self, engine, registry, recorder):
        registry.register("foo", recorder)
        text = '<a title="[foo]">[foo]</a>'
        assert engine.process(text, ignore_html=True) == '<a title="[foo]"><foo:></a>'
        assert len(recorder.calls) == 1

    def test_existing_entities_survive(self, engine, registry, recorder):
        registry.register("foo", recorder)
        assert engine.process("&#91;foo&#93; [foo]") == "&#091;foo&#093; <foo:>"
