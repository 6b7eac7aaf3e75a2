"""Promote a compiled fragment DOM to a full page.

The result always has the shape::

    <processing instructions...>
    <html>
        <head>...</head>
        <body>...</body>
    </html>

Fragments contribute ``<html>``, ``<head>`` and ``<body>`` tags freely, so
a page assembled from several fragments may contain many of each. They
are merged: the first ``<html>`` survives with the others' children,
head-only tags anywhere in the document move to the single ``<head>``,
and everything else lands in the single ``<body>``.
"""

from __future__ import annotations

from mooltipage.nodes import DocumentNode, Node, NodeType, NodeWithChildren, TagNode, TextNode

HEAD_TAGS = frozenset({"style", "link", "meta", "head", "base"})
BODY_PROMOTE_TAGS = frozenset({"html", "body"})


def build_page(dom: DocumentNode) -> None:
    """Rebuild ``dom`` in place into page shape."""
    instructions = dom.find_child_nodes_by_node_type(NodeType.PROCESSING_INSTRUCTION)
    for instruction in instructions:
        instruction.remove_self()

    html = _merge_html(dom)
    head = _create_head(html)
    body = _create_body(html)

    dom.clear()
    html.clear()
    dom.append_children(instructions)
    dom.append_child(html)
    html.append_child(head)
    html.append_child(body)


def _merge_html(dom: DocumentNode) -> TagNode:
    html_tags = dom.find_child_tags_by_tag_name("html")
    if not html_tags:
        html = TagNode("html")
        html.append_children(dom.children)
        return html

    first, *rest = html_tags
    first.remove_self()
    for other in rest:
        other.remove_self()
        first.append_children(other.children)
    # Content outside every <html> tag still belongs in the page.
    first.append_children(node for node in dom.children if not _is_blank(node))
    return first


def _create_head(root: NodeWithChildren) -> TagNode:
    head = TagNode("head")

    candidates = root.find_child_tags(lambda tag: tag.tag_name in HEAD_TAGS)
    head.append_children(tag for tag in candidates if not _has_ancestor_in(tag, candidates))

    for nested in head.find_child_tags_by_tag_name("head"):
        nested.remove_self(keep_children=True)

    if head.find_child_tag_by_tag_name("title", deep=False) is None:
        head.append_child(TagNode("title"))
    return head


def _create_body(root: NodeWithChildren) -> TagNode:
    body = TagNode("body")
    body.append_children(root.children)
    for nested in body.find_child_tags(lambda tag: tag.tag_name in BODY_PROMOTE_TAGS):
        nested.remove_self(keep_children=True)
    return body


def _has_ancestor_in(node: Node, candidates: list[TagNode]) -> bool:
    parent = node.parent
    while parent is not None:
        if any(parent is candidate for candidate in candidates):
            return True
        parent = parent.parent
    return False


def _is_blank(node: Node) -> bool:
    return isinstance(node, TextNode) and not node.has_content
