"""HTML output: serialization and whitespace formatting."""

from mooltipage.formatting.formatter import (
    MINIMIZED_PRESET,
    NONE_PRESET,
    PRETTY_PRESET,
    FormatterMode,
    FormatterOptions,
    HtmlFormatter,
    StandardHtmlFormatter,
    create_formatter_options,
)
from mooltipage.formatting.serializer import escape_attribute, escape_text, serialize

__all__ = [
    "MINIMIZED_PRESET",
    "NONE_PRESET",
    "PRETTY_PRESET",
    "FormatterMode",
    "FormatterOptions",
    "HtmlFormatter",
    "StandardHtmlFormatter",
    "create_formatter_options",
    "escape_attribute",
    "escape_text",
    "serialize",
]
