"""Tests for compiled anchors."""

from __future__ import annotations

import pytest

from mooltipage import MemoryInterface, StandardPipeline
from mooltipage._types import AnchorResolve
from mooltipage.compiler.modules import resolve_anchor_href
from mooltipage.environment.exceptions import TemplateSyntaxError
from mooltipage.pipeline import FragmentContext


@pytest.fixture
def nested_context() -> FragmentContext:
    """A fragment at ``nav/menu.html`` used by the page ``blog/2020/post.html``."""
    return FragmentContext(fragment_res_path="nav/menu.html", root_res_path="blog/2020/post.html")


class TestResolveAnchorHref:
    @pytest.mark.parametrize(
        ("resolve", "expected"),
        [
            (AnchorResolve.NONE, "about.html"),
            (AnchorResolve.LOCAL, "nav/about.html"),
            (AnchorResolve.ROOT, "blog/2020/about.html"),
            (AnchorResolve.BASE, "../../about.html"),
        ],
    )
    def test_modes(self, nested_context: FragmentContext, resolve: AnchorResolve, expected: str) -> None:
        assert resolve_anchor_href("about.html", resolve, nested_context) == expected

    def test_base_from_root_page(self) -> None:
        context = FragmentContext.for_root("index.html")
        assert resolve_anchor_href("about.html", AnchorResolve.BASE, context) == "about.html"

    def test_local_from_root_page(self) -> None:
        context = FragmentContext.for_root("index.html")
        assert resolve_anchor_href("about.html", AnchorResolve.LOCAL, context) == "./about.html"


class TestCompiledAnchor:
    def test_default_resolve_is_none(self, compile_html) -> None:
        assert compile_html('<a compiled href="x.html">X</a>') == '<a href="x.html">X</a>'

    def test_compiler_attributes_removed(self, compile_html) -> None:
        html = '<a compiled href="x.html" resolve="none" class="nav">X</a>'
        assert compile_html(html) == '<a href="x.html" class="nav">X</a>'

    def test_plain_anchor_untouched(self, compile_html) -> None:
        html = '<a href="x.html" resolve="base">X</a>'
        assert compile_html(html) == html

    def test_href_expression_evaluated_first(self, compile_html) -> None:
        html = '<m-var slug="post"></m-var><a compiled href="${ $.slug }.html" resolve="local">${ $.slug }</a>'
        assert compile_html(html, path="blog/page.html") == '<a href="blog/post.html">post</a>'

    def test_anchor_in_nested_fragment(self, interface: MemoryInterface, pipeline: StandardPipeline) -> None:
        interface.set_source(
            "nav/menu.html",
            '<a compiled href="about.html" resolve="local">L</a>'
            '<a compiled href="about.html" resolve="root">R</a>'
            '<a compiled href="about.html" resolve="base">B</a>',
        )
        interface.set_source("blog/2020/post.html", '<m-fragment src="@/nav/menu.html"></m-fragment>')
        dom = pipeline.compile_fragment("blog/2020/post.html").dom
        assert [tag.get_attribute("href") for tag in dom.get_child_tags()] == [
            "nav/about.html",
            "blog/2020/about.html",
            "../../about.html",
        ]

    def test_unknown_resolve_mode(self, compile_html) -> None:
        with pytest.raises(TemplateSyntaxError):
            compile_html('<a compiled href="x.html" resolve="absolute">X</a>')

    def test_missing_href(self, compile_html) -> None:
        with pytest.raises(TemplateSyntaxError):
            compile_html("<a compiled>X</a>")
