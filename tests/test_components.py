"""Tests for components: template, backing script and stylesheet sections."""

from __future__ import annotations

import pytest

from mooltipage import MemoryInterface, StandardPipeline
from mooltipage.environment.exceptions import ExpressionSyntaxError, TemplateSyntaxError
from mooltipage.utils.hashing import hash_content

CLASS_COMPONENT = """<template><p>${ $.greeting }</p></template>
<script>
class Greeter:
    def __init__(self, scope):
        self.greeting = "Hello, " + scope.name
</script>
"""

FUNCTION_COMPONENT = """<template><p>${ $.total }</p></template>
<script mode="function">
return {"total": $.a + $.b}
</script>
"""

STYLED_COMPONENT = """<template><div class="c">c</div></template>
<style>.c { color: red; }</style>
"""


class TestComponentTemplate:
    def test_template_only(self, compile_html) -> None:
        html = '<m-component src="c.html"></m-component>'
        assert compile_html(html, {"c.html": "<template><b>hi</b></template>"}) == "<b>hi</b>"

    def test_without_template_section(self, compile_html) -> None:
        sources = {"c.html": "<b>${ $.x }</b><script mode=\"function\">return {'x': 'y'}</script>"}
        assert compile_html('<m-component src="c.html"></m-component>', sources) == "<b>y</b>"

    def test_external_template(self, compile_html) -> None:
        sources = {
            "comp/c.html": '<template src="c.tpl.html"></template>',
            "comp/c.tpl.html": "<i>${ $.label }</i>",
        }
        html = '<m-component src="comp/c.html" label="L"></m-component>'
        assert compile_html(html, sources) == "<i>L</i>"

    def test_parameters_and_slots(self, compile_html) -> None:
        sources = {"c.html": "<template><section><h2>${ $.title }</h2><m-slot></m-slot></section></template>"}
        html = '<m-component src="c.html" title="T"><p>body</p></m-component>'
        assert compile_html(html, sources) == "<section><h2>T</h2><p>body</p></section>"


class TestComponentScript:
    def test_class_mode(self, compile_html) -> None:
        html = '<m-component src="c.html" name="World"></m-component>'
        assert compile_html(html, {"c.html": CLASS_COMPONENT}) == "<p>Hello, World</p>"

    def test_function_mode(self, compile_html) -> None:
        html = '<m-component src="c.html" a="{{ 2 }}" b="{{ 3 }}"></m-component>'
        assert compile_html(html, {"c.html": FUNCTION_COMPONENT}) == "<p>5</p>"

    def test_instance_per_use(self, compile_html) -> None:
        html = '<m-component src="c.html" name="A"></m-component><m-component src="c.html" name="B"></m-component>'
        assert compile_html(html, {"c.html": CLASS_COMPONENT}) == "<p>Hello, A</p><p>Hello, B</p>"

    def test_methods_bound(self, compile_html) -> None:
        component = """<template><p>${ $.shout('hi') }</p></template>
<script>
class Loud:
    def __init__(self):
        self.suffix = "!"

    def shout(self, text):
        return text.upper() + self.suffix
</script>
"""
        assert compile_html('<m-component src="c.html"></m-component>', {"c.html": component}) == "<p>HI!</p>"

    def test_private_members_not_bound(self, compile_html) -> None:
        component = """<template><p>[${ $._hidden }]</p></template>
<script>
class Quiet:
    def __init__(self):
        self._hidden = "x"
</script>
"""
        assert compile_html('<m-component src="c.html"></m-component>', {"c.html": component}) == "<p>[]</p>"

    def test_class_receives_context(self, compile_html) -> None:
        component = """<template><p>${ $.where }</p></template>
<script>
class Where:
    def __init__(self, scope, context):
        self.where = context.fragment_res_path
</script>
"""
        sources = {"parts/c.html": component}
        assert compile_html('<m-component src="parts/c.html"></m-component>', sources) == "<p>parts/c.html</p>"

    def test_external_script(self, compile_html) -> None:
        sources = {
            "comp/c.html": '<template><p>${ $.value }</p></template><script src="c.py" mode="function"></script>',
            "comp/c.py": "return {'value': 'external'}",
        }
        assert compile_html('<m-component src="comp/c.html"></m-component>', sources) == "<p>external</p>"

    def test_class_mode_without_class(self, compile_html) -> None:
        sources = {"c.html": "<template></template><script>x = 1</script>"}
        with pytest.raises(ExpressionSyntaxError):
            compile_html('<m-component src="c.html"></m-component>', sources)

    def test_unknown_script_mode(self, compile_html) -> None:
        sources = {"c.html": '<template></template><script mode="module">x = 1</script>'}
        with pytest.raises(TemplateSyntaxError):
            compile_html('<m-component src="c.html"></m-component>', sources)


class TestComponentStyle:
    def test_style_injected_before_markup(self, compile_html) -> None:
        result = compile_html('<m-component src="c.html"></m-component>', {"c.html": STYLED_COMPONENT})
        assert result == '<style>.c { color: red; }</style><div class="c">c</div>'

    def test_style_deduplicated_across_uses(self, compile_html) -> None:
        html = '<m-component src="c.html"></m-component><m-component src="c.html"></m-component>'
        result = compile_html(html, {"c.html": STYLED_COMPONENT})
        assert result.count("<style>") == 1
        assert result.count('<div class="c">') == 2

    def test_style_moved_to_head_on_page(self, interface: MemoryInterface, pipeline: StandardPipeline) -> None:
        interface.set_source("c.html", STYLED_COMPONENT)
        interface.set_source("index.html", '<m-component src="c.html"></m-component>')
        html = pipeline.compile_page("index.html").html
        assert html == (
            "<html><head><style>.c { color: red; }</style><title></title></head>"
            '<body><div class="c">c</div></body></html>'
        )

    def test_linked_style(self, interface: MemoryInterface, pipeline: StandardPipeline) -> None:
        css = ".c { color: blue; }"
        interface.set_source("c.html", f'<template><i>c</i></template><style bind="link">{css}</style>')
        interface.set_source("pages/x.html", '<m-component src="../c.html"></m-component>')
        html = pipeline.compile_page("pages/x.html").html

        res_path = f"resources/{hash_content(css)}.css"
        assert f'<link rel="stylesheet" href="../{res_path}" />' in html
        assert interface.created == {res_path: css}

    def test_external_style(self, compile_html) -> None:
        sources = {
            "comp/c.html": '<template><i>c</i></template><style src="c.css"></style>',
            "comp/c.css": "i { margin: 0; }",
        }
        result = compile_html('<m-component src="comp/c.html"></m-component>', sources)
        assert result == "<style>i { margin: 0; }</style><i>c</i>"
