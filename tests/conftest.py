"""Pytest configuration and fixtures for mooltipage tests."""

from collections.abc import Callable

import pytest

from mooltipage import MemoryInterface, StandardPipeline
from mooltipage.formatting import MINIMIZED_PRESET, PRETTY_PRESET, StandardHtmlFormatter


@pytest.fixture
def interface():
    """Create an empty in-memory interface."""
    return MemoryInterface()


@pytest.fixture
def pipeline(interface):
    """Create a pipeline without output formatting."""
    return StandardPipeline(interface)


@pytest.fixture
def pipeline_minimized(interface):
    """Create a pipeline with the minimized formatter."""
    return StandardPipeline(interface, StandardHtmlFormatter(MINIMIZED_PRESET))


@pytest.fixture
def pipeline_pretty(interface):
    """Create a pipeline with the pretty formatter."""
    return StandardPipeline(interface, StandardHtmlFormatter(PRETTY_PRESET))


@pytest.fixture
def compile_html(interface, pipeline) -> Callable[..., str]:
    """Compile ``page.html`` as a fragment and return its HTML.

    Other resources the page references go in ``sources``.
    """

    def _compile(html: str, sources: dict[str, str] | None = None, path: str = "page.html") -> str:
        interface.set_source(path, html)
        for res_path, contents in (sources or {}).items():
            interface.set_source(res_path, contents)
        return pipeline.compile_fragment(path).dom.to_html()

    return _compile


def assert_html_equal(actual: str, expected: str) -> None:
    """Assert HTML equality, ignoring whitespace between tags.

    Args:
        actual: The compiled HTML.
        expected: The expected output.
    """
    actual_normalized = "".join(actual.split())
    expected_normalized = "".join(expected.split())
    assert actual_normalized == expected_normalized, (
        f"HTML output mismatch:\n"
        f"  Actual: {actual!r}\n"
        f"  Expected: {expected!r}"
    )


def assert_contains(html: str, *expected_parts: str) -> None:
    """Assert compiled HTML contains all expected parts.

    Args:
        html: The compiled HTML.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in html, (
            f"HTML output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {html!r}"
        )
