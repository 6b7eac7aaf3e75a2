"""Tests for page assembly: the single html/head/body shape."""

from __future__ import annotations

from mooltipage.parser import parse_dom
from mooltipage.pipeline import build_page

from .conftest import assert_contains


def _build(html: str) -> str:
    dom = parse_dom(html)
    build_page(dom)
    return dom.to_html()


class TestBuildPage:
    def test_bare_content_wrapped(self) -> None:
        assert _build("<p>x</p>") == "<html><head><title></title></head><body><p>x</p></body></html>"

    def test_doctype_kept_first(self) -> None:
        assert _build("<p>x</p><!DOCTYPE html>") == (
            "<!DOCTYPE html><html><head><title></title></head><body><p>x</p></body></html>"
        )

    def test_existing_structure_kept(self) -> None:
        html = "<html><head><title>T</title></head><body><p>x</p></body></html>"
        assert _build(html) == html

    def test_html_tags_merged(self) -> None:
        html = "<html><body><p>a</p></body></html><html><p>b</p></html>"
        assert _build(html) == "<html><head><title></title></head><body><p>a</p><p>b</p></body></html>"

    def test_head_tags_promoted(self) -> None:
        html = '<head><title>T</title></head><div><meta charset="utf-8"><p>x</p></div>'
        assert _build(html) == (
            '<html><head><title>T</title><meta charset="utf-8" /></head><body><div><p>x</p></div></body></html>'
        )

    def test_styles_and_links_promoted(self) -> None:
        html = '<body><style>a {}</style><link rel="icon" href="i.png"><p>x</p></body>'
        assert _build(html) == (
            '<html><head><style>a {}</style><link rel="icon" href="i.png" /><title></title></head>'
            "<body><p>x</p></body></html>"
        )

    def test_base_tag_promoted(self) -> None:
        assert_contains(_build('<base href="/"><p>x</p>'), '<head><base href="/" /><title></title></head>')

    def test_tags_inside_head_not_moved_twice(self) -> None:
        assert _build("<head><style>a {}</style></head>") == (
            "<html><head><style>a {}</style><title></title></head><body></body></html>"
        )

    def test_multiple_heads_merged(self) -> None:
        html = "<head><title>T</title></head><p>x</p><head><meta name='a' content='b'></head>"
        assert _build(html) == (
            '<html><head><title>T</title><meta name="a" content="b" /></head><body><p>x</p></body></html>'
        )

    def test_content_outside_html_kept(self) -> None:
        result = _build("<p>before</p><html><body><p>in</p></body></html>")
        assert_contains(result, "<p>before</p>", "<p>in</p>")
        assert result.count("<html>") == 1
        assert result.count("<body>") == 1

    def test_nested_body_unwrapped(self) -> None:
        assert _build("<body><body><p>x</p></body></body>") == (
            "<html><head><title></title></head><body><p>x</p></body></html>"
        )
