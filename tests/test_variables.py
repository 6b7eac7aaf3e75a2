"""Tests for variable binding: m-var, m-scope, m-data, scripts and expressions in markup."""

from __future__ import annotations

import json

import pytest
from hypothesis import given, settings

from mooltipage import MemoryInterface, StandardPipeline
from mooltipage.environment.exceptions import ExpressionSyntaxError, ResourceNotFoundError

from .strategies import scope_bindings


class TestExpressionsInMarkup:
    def test_text_expression(self, compile_html) -> None:
        assert compile_html("<p>${ 1 + 2 }</p>") == "<p>3</p>"

    def test_attribute_expression(self, compile_html) -> None:
        assert compile_html("<div class=\"${ 'a' + 'b' }\"></div>") == '<div class="ab"></div>'

    def test_handlebars_attribute_keeps_raw_value(self, compile_html) -> None:
        assert compile_html('<div data-n="{{ 2 * 21 }}"></div>') == '<div data-n="42"></div>'

    def test_escaped_attribute_not_evaluated(self, compile_html) -> None:
        assert compile_html("<div value=\"\\${ 'x' }\"></div>") == "<div value=\"${ 'x' }\"></div>"

    def test_escaped_text_not_evaluated(self, compile_html) -> None:
        assert compile_html("<p>\\${ 1 + 1 }</p>") == "<p>${ 1 + 1 }</p>"

    def test_escaped_handlebars_beside_template_expression(self, compile_html) -> None:
        assert compile_html('<m-var b="B"></m-var><p>\\{{ a }} ${ $.b }</p>') == "<p>{{ a }} B</p>"

    def test_fstring_fields_see_scope(self, compile_html) -> None:
        html = '<m-var name="Ada"></m-var><p>${ f"{$.name}!" }</p>'
        assert compile_html(html) == "<p>Ada!</p>"

    def test_none_renders_empty(self, compile_html) -> None:
        assert compile_html("<p>[${ $.missing }]</p>") == "<p>[]</p>"

    def test_context_sigil(self, compile_html) -> None:
        assert compile_html("<p>${ $$.fragment_res_path }</p>") == "<p>page.html</p>"

    def test_result_escaped_on_output(self, compile_html) -> None:
        assert compile_html("<p>${ '&lt;b&gt;' }</p>") == "<p>&lt;b&gt;</p>"

    def test_runtime_error_propagates(self, compile_html) -> None:
        with pytest.raises(ZeroDivisionError):
            compile_html("<p>${ 1 / 0 }</p>")

    def test_invalid_expression(self, compile_html) -> None:
        with pytest.raises(ExpressionSyntaxError):
            compile_html("<p>${ 1 + }</p>")


class TestMVar:
    def test_binds_into_parent_scope(self, compile_html) -> None:
        html = '<m-var key="value"></m-var><div>${ $.key }</div>'
        assert compile_html(html) == "<div>value</div>"

    def test_names_camel_cased(self, compile_html) -> None:
        html = '<m-var page-title="Home"></m-var><h1>${ $.pageTitle }</h1>'
        assert compile_html(html) == "<h1>Home</h1>"

    def test_handlebars_value_kept_raw(self, compile_html) -> None:
        html = '<m-var items="{{ [1, 2, 3] }}"></m-var><p>${ sum($.items) }</p>'
        assert compile_html(html) == "<p>6</p>"

    def test_visible_to_following_siblings_only(self, compile_html) -> None:
        html = "<p>[${ $.x }]</p><m-var x=\"1\"></m-var><p>[${ $.x }]</p>"
        assert compile_html(html) == "<p>[]</p><p>[1]</p>"

    def test_nested_var_stays_in_its_parent(self, compile_html) -> None:
        html = '<div><m-var x="inner"></m-var>${ $.x }</div><p>[${ $.x }]</p>'
        assert compile_html(html) == "<div>inner</div><p>[]</p>"

    def test_later_binding_reads_earlier(self, compile_html) -> None:
        html = '<m-var a="1"></m-var><m-var b="${ $.a }2"></m-var><p>${ $.b }</p>'
        assert compile_html(html) == "<p>12</p>"


class TestMScope:
    def test_bindings_visible_to_descendants(self, compile_html) -> None:
        html = '<m-scope x="1"><p>${ $.x }</p></m-scope><p>[${ $.x }]</p>'
        assert compile_html(html) == "<p>1</p><p>[]</p>"

    def test_tag_removed_keeping_children(self, compile_html) -> None:
        html = '<div><m-scope x="a"><b>${ $.x }</b><i>${ $.x }</i></m-scope></div>'
        assert compile_html(html) == "<div><b>a</b><i>a</i></div>"

    def test_inner_scope_shadows_outer(self, compile_html) -> None:
        html = '<m-var x="outer"></m-var><m-scope x="inner"><p>${ $.x }</p></m-scope><p>${ $.x }</p>'
        assert compile_html(html) == "<p>inner</p><p>outer</p>"


class TestMData:
    def test_json_data(self, compile_html) -> None:
        html = '<m-data type="application/json" config="data.json"></m-data><p>${ $.config["title"] }</p>'
        sources = {"data.json": json.dumps({"title": "From JSON"})}
        assert compile_html(html, sources) == "<p>From JSON</p>"

    def test_text_data(self, compile_html) -> None:
        html = '<m-data type="text/plain" note="note.txt"></m-data><p>${ $.note.strip() }</p>'
        assert compile_html(html, {"note.txt": "  hello\n"}) == "<p>hello</p>"

    def test_multiple_references(self, compile_html) -> None:
        html = (
            '<m-data type="application/json" first-list="a.json" second="b.json"></m-data>'
            "<p>${ $.firstList + $.second }</p>"
        )
        assert compile_html(html, {"a.json": "[1]", "b.json": "[2]"}) == "<p>[1, 2]</p>"

    def test_path_relative_to_fragment(self, compile_html) -> None:
        html = '<m-data type="application/json" n="data/n.json"></m-data><p>${ $.n }</p>'
        assert compile_html(html, {"pages/data/n.json": "7"}, path="pages/page.html") == "<p>7</p>"

    def test_missing_resource(self, compile_html) -> None:
        with pytest.raises(ResourceNotFoundError) as exc_info:
            compile_html('<m-data type="application/json" x="nope.json"></m-data>')
        assert exc_info.value.res_path == "nope.json"


class TestScripts:
    def test_inline_script_sets_scope(self, compile_html) -> None:
        html = "<script compiled>$.total = 1 + 2</script><p>${ $.total }</p>"
        assert compile_html(html) == "<p>3</p>"

    def test_script_removed_from_output(self, compile_html) -> None:
        assert compile_html("<div><script compiled>x = 1</script></div>") == "<div></div>"

    def test_uncompiled_script_untouched(self, compile_html) -> None:
        html = "<script>var a = 1 < 2;</script>"
        assert compile_html(html) == html

    def test_multiline_script(self, compile_html) -> None:
        html = (
            "<script compiled>\n"
            "    names = ['a', 'b']\n"
            "    $.joined = '-'.join(names)\n"
            "</script><p>${ $.joined }</p>"
        )
        assert compile_html(html) == "<p>a-b</p>"

    def test_external_script(self, compile_html) -> None:
        html = '<script compiled src="init.py"></script><p>${ $.greeting }</p>'
        assert compile_html(html, {"init.py": "$.greeting = 'hey'"}) == "<p>hey</p>"

    def test_m_script(self, compile_html) -> None:
        html = '<m-script src="scripts/init.py"></m-script><p>${ $.value }</p>'
        assert compile_html(html, {"scripts/init.py": "$.value = 42"}) == "<p>42</p>"

    def test_require_module(self, compile_html) -> None:
        html = '<p>${ $$.require("helpers.py").shout("hi") }</p>'
        sources = {"helpers.py": "def shout(text):\n    return text.upper() + '!'\n"}
        assert compile_html(html, sources) == "<p>HI!</p>"

    def test_require_import_name(self, compile_html) -> None:
        assert compile_html("<p>${ $$.require('math').floor(2.7) }</p>") == "<p>2</p>"


class TestBindingProperties:
    @given(bindings=scope_bindings)
    @settings(max_examples=50)
    def test_bound_values_render_as_text(self, bindings: dict[str, object]) -> None:
        declarations = "".join(f'<m-var {name}="{{{{ {value!r} }}}}"></m-var>' for name, value in bindings.items())
        uses = "".join(f"<i>${{ $.{name} }}</i>" for name in bindings)
        interface = MemoryInterface({"page.html": declarations + uses})
        dom = StandardPipeline(interface).compile_fragment("page.html").dom
        assert [child.text_content for child in dom.children] == [str(value) for value in bindings.values()]
