"""Tests for terminal color helpers and compiler diagnostics."""

import pytest

from mooltipage.environment import terminal
from mooltipage.environment.exceptions import (
    ErrorCode,
    ExpressionSyntaxError,
    ResourceNotFoundError,
    TemplateSyntaxError,
    build_source_snippet,
)
from mooltipage.evaluation import parse_expression


@pytest.fixture
def colors_on(monkeypatch):
    monkeypatch.setattr(terminal, "_USE_COLORS", True)


@pytest.fixture
def colors_off(monkeypatch):
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


class TestColorDetection:
    def test_no_color_disables(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setenv("NO_COLOR", "1")
        assert not terminal._should_use_colors()

    def test_force_color_wins(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert terminal._should_use_colors()

    def test_supports_color_reads_cached_value(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        assert terminal.supports_color()


class TestColorize:
    def test_plain_when_disabled(self, colors_off):
        assert terminal.colorize("Error", "red", "bold") == "Error"

    def test_codes_when_enabled(self, colors_on):
        assert terminal.colorize("Error", "red", "bold") == "\033[31m\033[1mError\033[0m"

    def test_no_colors_given(self, colors_on):
        assert terminal.colorize("text") == "text"

    def test_unknown_color_ignored(self, colors_on):
        assert terminal.colorize("text", "unknown_color") == "text"

    def test_strip_colors(self, colors_on):
        assert terminal.strip_colors(terminal.error_code("M-PAR-001")) == "M-PAR-001"

    def test_roles_use_palette(self, colors_on):
        assert terminal.styled("location", "a.html") == "\033[36ma.html\033[0m"
        assert terminal.error_code("M-PAR-001") == "\033[91m\033[1mM-PAR-001\033[0m"

    def test_helpers_plain_when_disabled(self, colors_off):
        assert terminal.error_code("M-RES-001") == "M-RES-001"
        assert terminal.location("index.html:3") == "index.html:3"
        assert terminal.hint("Cause:") == "Cause:"
        assert terminal.dim_text("|") == "|"


class TestFormatting:
    def test_error_header_with_code(self, colors_off):
        assert terminal.format_error_header("M-EXP-001", "Invalid expression") == "M-EXP-001: Invalid expression"

    def test_error_header_without_code(self, colors_on):
        assert terminal.format_error_header(None, "Something went wrong") == "Something went wrong"

    def test_source_line_marks_error(self, colors_off):
        assert terminal.format_source_line(7, "<m-if>", is_error=True) == ">  7 | <m-if>"
        assert terminal.format_source_line(12, "<p>", is_error=False) == "  12 | <p>"

    def test_source_snippet_window(self):
        snippet = build_source_snippet("a\nb\nc\nd\ne", 3, context_lines=1)
        assert snippet.lines == ((2, "b"), (3, "c"), (4, "d"))
        assert snippet.error_line == 3


class TestDiagnostics:
    def test_template_error_location(self, colors_off):
        error = TemplateSyntaxError(
            "<m-for> is missing required attribute 'var'",
            tag_name="m-for",
            res_path="pages/list.html",
            lineno=2,
            source="<ul>\n<m-for of=\"{{ x }}\">\n</ul>",
        )
        compact = error.format_compact()
        assert compact.startswith("M-PAR-001: <m-for> is missing required attribute 'var'")
        assert "--> pages/list.html:2" in compact
        assert '<m-for of="{{ x }}">' in compact
        assert "pages/list.html:2" in str(error)

    def test_expression_error_cause(self, colors_off):
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            parse_expression("${ 1 + }")
        compact = exc_info.value.format_compact()
        assert compact.startswith("M-EXP-001: Invalid expression")
        assert "Expression: ${ 1 + }" in compact
        assert "Cause:" in compact

    def test_resource_error_compact(self, colors_off):
        error = ResourceNotFoundError("Resource 'x.html' not found", "x.html")
        assert error.format_compact() == "M-RES-001: Resource 'x.html' not found"
        assert error.code is ErrorCode.RESOURCE_NOT_FOUND

    def test_readable_without_colors(self, colors_off):
        error = TemplateSyntaxError("Unexpected closing tag </p>", res_path="a.html", lineno=1, source="</p>")
        assert "\033[" not in str(error)
        assert "\033[" not in error.format_compact()

    def test_error_categories(self):
        assert ErrorCode.MISSING_ATTRIBUTE.category == "markup"
        assert ErrorCode.INVALID_SCRIPT.category == "expression"
        assert ErrorCode.RESOURCE_NOT_FOUND.category == "resource"
        assert ErrorCode.CACHE_MISS.category == "pipeline"
