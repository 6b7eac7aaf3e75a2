"""Expand ``<m-fragment>`` and ``<m-component>`` references.

Runs on exit, after the reference's own children (the slot content) have
been compiled in the caller's scope. The referenced template is then
compiled recursively with a fresh ``FragmentContext`` and its top-level
nodes are spliced in place of the reference tag.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mooltipage.nodes import (
    DEFAULT_SLOT_NAME,
    DocumentNode,
    ExternalReferenceNode,
    MComponentNode,
    MContentNode,
    ScopeData,
)
from mooltipage.utils.case import snake_to_camel

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext

logger = logging.getLogger(__name__)


class FragmentModule:
    __slots__ = ()

    def exit_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        if not isinstance(node, ExternalReferenceNode):
            return

        pipeline_context = context.pipeline_context
        slot_contents = extract_slot_contents(node)
        scope = ScopeData({snake_to_camel(name): value for name, value in node.parameters})
        child_context = pipeline_context.fragment_context.create_child(node.src, scope, slot_contents)

        pipeline = pipeline_context.pipeline
        logger.debug("Expanding <%s src=%r> in %s", node.tag_name, node.src, pipeline_context.fragment.path)
        if isinstance(node, MComponentNode):
            result = pipeline.compile_component(child_context.fragment_res_path, child_context)
        else:
            result = pipeline.compile_fragment(child_context.fragment_res_path, child_context)

        node.replace_self(result.dom.children)
        context.set_deleted()


def extract_slot_contents(node: ExternalReferenceNode) -> dict[str, DocumentNode]:
    """Partition a reference's children into slot name -> content.

    ``<m-content slot="x">`` contributes its children to slot ``x``;
    every other child goes to the default slot. Children are moved.
    """
    slots: dict[str, DocumentNode] = {}
    for child in list(node.children):
        if isinstance(child, MContentNode):
            name = child.slot
            content = list(child.children)
        else:
            name = DEFAULT_SLOT_NAME
            content = [child]

        dom = slots.get(name)
        if dom is None:
            dom = slots[name] = DocumentNode()
        dom.append_children(content)
    return slots
