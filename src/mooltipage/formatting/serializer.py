"""Serialize a node tree back into HTML text.

Attribute values are stringified here and nowhere earlier: a value
computed by an expression (number, bool, list...) goes through ``str()``.
A ``None`` value renders as a bare attribute name.
"""

from __future__ import annotations

from typing import Any

from mooltipage.nodes import (
    CDATANode,
    CommentNode,
    DocumentNode,
    Node,
    NodeWithChildren,
    ProcessingInstructionNode,
    TagNode,
    TextNode,
)
from mooltipage.parser.html import VOID_ELEMENTS

RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


def escape_text(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


def serialize(node: Node) -> str:
    """Render ``node`` and its descendants as HTML."""
    buf: list[str] = []
    _serialize_node(node, buf)
    return "".join(buf)


def _serialize_node(node: Node, buf: list[str]) -> None:
    if isinstance(node, TagNode):
        _serialize_tag(node, buf)
    elif isinstance(node, TextNode):
        _serialize_text(node, buf)
    elif isinstance(node, CommentNode):
        buf.append(f"<!--{node.text}-->")
    elif isinstance(node, CDATANode):
        buf.append("<![CDATA[")
        buf.extend(child.text for child in node.children if isinstance(child, TextNode))
        buf.append("]]>")
    elif isinstance(node, ProcessingInstructionNode):
        buf.append(f"<{node.data}>")
    elif isinstance(node, DocumentNode):
        _serialize_children(node, buf)
    else:
        raise TypeError(f"Cannot serialize node of type {node.node_type}")


def _serialize_children(parent: NodeWithChildren, buf: list[str]) -> None:
    for child in parent.children:
        _serialize_node(child, buf)


def _format_attribute(name: str, value: Any) -> str:
    if value is None:
        return name
    return f'{name}="{escape_attribute(str(value))}"'


def _serialize_tag(tag: TagNode, buf: list[str]) -> None:
    name = tag.tag_name
    buf.append(f"<{name}")
    for attr_name, value in tag.attributes.items():
        buf.append(" ")
        buf.append(_format_attribute(attr_name, value))

    if name in VOID_ELEMENTS:
        buf.append(" />")
        return

    buf.append(">")
    _serialize_children(tag, buf)
    buf.append(f"</{name}>")


def _serialize_text(node: TextNode, buf: list[str]) -> None:
    parent = node.parent
    if isinstance(parent, TagNode) and parent.tag_name in RAW_TEXT_ELEMENTS:
        buf.append(node.text)
    else:
        buf.append(escape_text(node.text))
