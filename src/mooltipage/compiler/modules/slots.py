"""Fill ``<m-slot>`` insertion points with caller-supplied content."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mooltipage.nodes import MSlotNode

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext


class SlotModule:
    """Replace each ``<m-slot>`` with a fresh copy of its content.

    Content is cloned per slot so a slot used twice yields two independent
    subtrees. With no content for the slot, the tag's own children are
    kept as fallback markup.
    """

    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        if not isinstance(node, MSlotNode):
            return

        content = context.pipeline_context.fragment_context.slot_contents.get(node.slot)
        if content is not None:
            node.replace_self(content.clone(True).children)
        else:
            node.remove_self(keep_children=True)
        context.set_deleted()
