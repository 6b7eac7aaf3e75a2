"""``<m-whitespace mode="sensitive|insensitive">``."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from mooltipage._types import WhitespaceMode
from mooltipage.nodes import MWhitespaceNode, Node, NodeWithChildren, NodeWithText

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext

WHITESPACE_PROCESSED = "whitespace.processed"


class WhitespaceModule:
    """Set the whitespace-sensitivity flag on descendants, then unwrap.

    Runs on exit, so nested ``<m-whitespace>`` tags have already marked
    their subtrees and the outer tag leaves those alone: the innermost
    mode wins.
    """

    __slots__ = ()

    def exit_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        if not isinstance(node, MWhitespaceNode):
            return

        apply_whitespace_mode(node.mode is WhitespaceMode.SENSITIVE, node.children)
        node.remove_self(keep_children=True)
        context.set_deleted()


def apply_whitespace_mode(is_sensitive: bool, nodes: Iterable[Node]) -> None:
    for node in nodes:
        if WHITESPACE_PROCESSED in node.markers:
            continue
        node.markers.add(WHITESPACE_PROCESSED)

        if isinstance(node, NodeWithText):
            node.is_whitespace_sensitive = is_sensitive
        if isinstance(node, NodeWithChildren):
            apply_whitespace_mode(is_sensitive, node.children)
