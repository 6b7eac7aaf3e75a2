"""Tests for <m-whitespace> sensitivity blocks."""

from __future__ import annotations

import pytest

from mooltipage import MemoryInterface, StandardPipeline
from mooltipage.compiler.modules import apply_whitespace_mode
from mooltipage.environment.exceptions import TemplateSyntaxError
from mooltipage.nodes import TextNode
from mooltipage.parser import parse_dom


@pytest.fixture
def compile_minimized(interface: MemoryInterface, pipeline_minimized: StandardPipeline):
    def _compile(html: str) -> str:
        interface.set_source("page.html", html)
        return pipeline_minimized.compile_fragment("page.html").dom.to_html()

    return _compile


class TestWhitespaceBlock:
    def test_tag_removed(self, compile_html) -> None:
        assert compile_html("<m-whitespace><b>x</b></m-whitespace>") == "<b>x</b>"

    def test_sensitive_text_survives_minimizing(self, compile_minimized) -> None:
        html = "<m-whitespace><span>  a   b  </span></m-whitespace><p>  c   d  </p>"
        assert compile_minimized(html) == "<span>  a   b  </span><p>c d</p>"

    def test_insensitive_mode(self, compile_minimized) -> None:
        html = '<m-whitespace mode="insensitive"><span>  a   b  </span></m-whitespace>'
        assert compile_minimized(html) == "<span>a b</span>"

    def test_innermost_mode_wins(self, compile_minimized) -> None:
        html = (
            "<m-whitespace>"
            "<span>  x  </span>"
            '<m-whitespace mode="insensitive"><em>  y  </em></m-whitespace>'
            "</m-whitespace>"
        )
        assert compile_minimized(html) == "<span>  x  </span><em>y</em>"

    def test_evaluated_text_keeps_flag(self, compile_minimized) -> None:
        html = "<m-var v=\"  spaced  \"></m-var><m-whitespace><i>${ $.v }</i></m-whitespace>"
        assert compile_minimized(html) == "<i>  spaced  </i>"

    def test_unknown_mode(self, compile_html) -> None:
        with pytest.raises(TemplateSyntaxError):
            compile_html('<m-whitespace mode="collapse"></m-whitespace>')


class TestApplyWhitespaceMode:
    def test_marks_descendants(self) -> None:
        dom = parse_dom("<div><p>a</p>b</div>")
        apply_whitespace_mode(True, dom.children)
        texts = [node for node in dom.walk() if isinstance(node, TextNode)]
        assert all(text.is_whitespace_sensitive for text in texts)

    def test_processed_nodes_left_alone(self) -> None:
        dom = parse_dom("<p>a</p>")
        apply_whitespace_mode(False, dom.children)
        apply_whitespace_mode(True, dom.children)
        assert not dom.first_child.first_child.is_whitespace_sensitive
