"""Whitespace formatting for compiled pages.

``StandardHtmlFormatter`` works in two passes: ``format_dom`` rewrites the
whitespace-only text between nodes (indenting in pretty mode, removing it
in minimized mode) and ``format_html`` trims the serialized result.

Text nodes flagged ``is_whitespace_sensitive`` (``<m-whitespace>``,
``<style skip-format>``) are never rewritten.

Example:
    >>> formatter = StandardHtmlFormatter(MINIMIZED_PRESET)
    >>> dom = parse_dom("<div>\\n   <p> Hi </p>\\n</div>")
    >>> formatter.format_dom(dom)
    >>> serialize(dom)
    '<div><p>Hi</p></div>'

"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Protocol, TypeGuard

from mooltipage.nodes import (
    DocumentNode,
    Node,
    NodeType,
    NodeWithChildren,
    TextNode,
)

_INLINE_TEXT = re.compile(r"\s*(?:\S| )+\s*")
_WHITESPACE_RUN = re.compile(r"\s{2,}")


class FormatterMode(Enum):
    PRETTY = "pretty"
    MINIMIZED = "minimized"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class FormatterOptions:
    """Configuration for ``StandardHtmlFormatter``.

    Attributes:
        format_mode: Overall formatting style.
        end_of_line: Line terminator used in pretty mode.
        indent_string: Repeated once per nesting level in pretty mode.
        strip_comments: Remove ``<!-- -->`` comments.
        strip_cdata: Remove CDATA sections.
    """

    format_mode: FormatterMode = FormatterMode.NONE
    end_of_line: str = ""
    indent_string: str = ""
    strip_comments: bool = False
    strip_cdata: bool = False


NONE_PRESET = FormatterOptions()
PRETTY_PRESET = FormatterOptions(
    format_mode=FormatterMode.PRETTY,
    end_of_line="\n",
    indent_string="    ",
    strip_cdata=True,
)
MINIMIZED_PRESET = FormatterOptions(
    format_mode=FormatterMode.MINIMIZED,
    strip_comments=True,
    strip_cdata=True,
)


def create_formatter_options(defaults: FormatterOptions = NONE_PRESET, **overrides: Any) -> FormatterOptions:
    """Start from ``defaults`` and override individual fields."""
    return replace(defaults, **overrides) if overrides else defaults


class HtmlFormatter(Protocol):
    """Hooks the pipeline calls before and after serializing a page."""

    def format_dom(self, dom: DocumentNode) -> None: ...

    def format_html(self, html: str) -> str: ...


class StandardHtmlFormatter:
    """Minimize, prettify or pass through compiled HTML."""

    __slots__ = ("options",)

    def __init__(self, options: FormatterOptions | None = None):
        self.options = options or NONE_PRESET

    def format_dom(self, dom: DocumentNode) -> None:
        if self.options.format_mode is FormatterMode.NONE:
            return
        if self.options.strip_comments:
            for node in dom.find_child_nodes_by_node_type(NodeType.COMMENT):
                node.remove_self()
        if self.options.strip_cdata:
            for node in dom.find_child_nodes_by_node_type(NodeType.CDATA):
                node.remove_self()
        if dom.first_child is not None:
            self._format_whitespace(dom.first_child, 0)

    def format_html(self, html: str) -> str:
        if self.options.format_mode is FormatterMode.NONE:
            return html
        return html.strip()

    # -- whitespace ----------------------------------------------------------

    def _format_whitespace(self, start: Node, depth: int) -> None:
        current: Node | None = start
        while current is not None:
            content = _get_content_node(current)
            text_node = _get_or_insert_text_node(current)
            _absorb_adjacent_text_nodes(text_node)
            self._format_text_node(text_node, depth)

            if content is None:
                break

            if isinstance(content, NodeWithChildren) and content.first_child is not None:
                self._format_whitespace(content.first_child, depth + 1)

            if content.next_sibling is not None:
                current = content.next_sibling
            else:
                # Trailing text node carries the closing indent.
                closing = TextNode()
                content.append_sibling(closing)
                current = closing

    def _format_text_node(self, node: TextNode, depth: int) -> None:
        content = _extract_text_content(node)
        opts = self.options

        if opts.format_mode is FormatterMode.MINIMIZED or _is_inline_text(node):
            if content is not None:
                node.text = content
            else:
                node.remove_self()
            return

        parts = [opts.end_of_line]
        if content is not None:
            parts.append(opts.indent_string * depth)
            parts.append(content)
            parts.append(opts.end_of_line)
        closing_depth = depth if node.next_sibling is not None else depth - 1
        parts.append(opts.indent_string * max(closing_depth, 0))
        node.text = "".join(parts)


def _is_formattable_text(node: Node | None) -> TypeGuard[TextNode]:
    return isinstance(node, TextNode) and not node.is_whitespace_sensitive


def _is_inline_text(node: TextNode) -> bool:
    """A lone single-line text node stays on its parent's line."""
    return (
        node.prev_sibling is None
        and node.next_sibling is None
        and _INLINE_TEXT.fullmatch(node.text) is not None
    )


def _extract_text_content(node: TextNode) -> str | None:
    if not node.has_content:
        return None
    return _WHITESPACE_RUN.sub(" ", node.text_content)


def _absorb_adjacent_text_nodes(node: TextNode) -> None:
    parts = [node.text]
    current = node.next_sibling
    while _is_formattable_text(current):
        nxt = current.next_sibling
        parts.append(current.text)
        current.remove_self()
        current = nxt
    node.text = "".join(parts)


def _get_or_insert_text_node(start: Node) -> TextNode:
    if _is_formattable_text(start):
        return start
    node = TextNode()
    start.prepend_sibling(node)
    return node


def _get_content_node(start: Node) -> Node | None:
    current: Node | None = start
    while _is_formattable_text(current):
        current = current.next_sibling
    return current
