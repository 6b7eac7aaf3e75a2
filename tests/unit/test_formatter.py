"""Tests for pretty / minimized / none output formatting."""

from __future__ import annotations

import pytest
from hypothesis import given

from mooltipage.formatting import (
    MINIMIZED_PRESET,
    NONE_PRESET,
    PRETTY_PRESET,
    FormatterMode,
    StandardHtmlFormatter,
    create_formatter_options,
    serialize,
)
from mooltipage.nodes import TextNode
from mooltipage.parser import parse_dom

from ..strategies import markup_tree


def _format(html: str, formatter: StandardHtmlFormatter) -> str:
    dom = parse_dom(html)
    formatter.format_dom(dom)
    return formatter.format_html(serialize(dom))


class TestMinimized:
    @pytest.fixture
    def formatter(self) -> StandardHtmlFormatter:
        return StandardHtmlFormatter(MINIMIZED_PRESET)

    def test_whitespace_between_tags_removed(self, formatter: StandardHtmlFormatter) -> None:
        assert _format("<div>\n   <p> Hi </p>\n</div>", formatter) == "<div><p>Hi</p></div>"

    def test_inner_whitespace_collapsed(self, formatter: StandardHtmlFormatter) -> None:
        assert _format("<p>  a    b  </p>", formatter) == "<p>a b</p>"

    def test_comments_stripped(self, formatter: StandardHtmlFormatter) -> None:
        assert _format("<div><!-- note --><p>x</p></div>", formatter) == "<div><p>x</p></div>"

    def test_cdata_stripped(self, formatter: StandardHtmlFormatter) -> None:
        assert _format("<div><![CDATA[x]]><p>y</p></div>", formatter) == "<div><p>y</p></div>"

    def test_sensitive_text_untouched(self, formatter: StandardHtmlFormatter) -> None:
        dom = parse_dom("<pre></pre><p>  squash   this  </p>")
        dom.first_child.append_child(TextNode("  keep   this  ", is_whitespace_sensitive=True))
        formatter.format_dom(dom)
        assert serialize(dom) == "<pre>  keep   this  </pre><p>squash this</p>"

    @given(html=markup_tree)
    def test_plain_markup_is_stable(self, html: str) -> None:
        once = _format(html, StandardHtmlFormatter(MINIMIZED_PRESET))
        assert _format(once, StandardHtmlFormatter(MINIMIZED_PRESET)) == once


class TestPretty:
    @pytest.fixture
    def formatter(self) -> StandardHtmlFormatter:
        return StandardHtmlFormatter(PRETTY_PRESET)

    def test_nested_tags_indented(self, formatter: StandardHtmlFormatter) -> None:
        assert _format("<div><p>Hi</p></div>", formatter) == "<div>\n    <p>Hi</p>\n</div>"

    def test_siblings_on_own_lines(self, formatter: StandardHtmlFormatter) -> None:
        assert _format("<ul><li>1</li><li>2</li></ul>", formatter) == "<ul>\n    <li>1</li>\n    <li>2</li>\n</ul>"

    def test_comments_kept(self, formatter: StandardHtmlFormatter) -> None:
        assert "<!-- note -->" in _format("<div><!-- note --></div>", formatter)

    def test_cdata_stripped(self, formatter: StandardHtmlFormatter) -> None:
        assert "CDATA" not in _format("<div><![CDATA[x]]></div>", formatter)


class TestNone:
    def test_output_unchanged(self) -> None:
        html = "<div>\n   <p> Hi </p>\n</div>\n"
        assert _format(html, StandardHtmlFormatter(NONE_PRESET)) == html

    def test_default_is_none(self) -> None:
        assert StandardHtmlFormatter().options.format_mode is FormatterMode.NONE


class TestOptions:
    def test_override_preset(self) -> None:
        options = create_formatter_options(PRETTY_PRESET, indent_string="\t")
        assert options.indent_string == "\t"
        assert options.format_mode is FormatterMode.PRETTY
        assert PRETTY_PRESET.indent_string == "    "

    def test_no_overrides_returns_defaults(self) -> None:
        assert create_formatter_options(MINIMIZED_PRESET) is MINIMIZED_PRESET

    def test_tabs_for_indent(self) -> None:
        formatter = StandardHtmlFormatter(create_formatter_options(PRETTY_PRESET, indent_string="\t"))
        assert _format("<div><p>Hi</p></div>", formatter) == "<div>\n\t<p>Hi</p>\n</div>"
