"""Tag aliases: ``<m-import src="..." as="my-card">`` then ``<my-card>``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mooltipage._types import ImportKind
from mooltipage.compiler.context import ImportDefinition
from mooltipage.nodes import ExternalReferenceNode, MComponentNode, MFragmentNode, MImportNode, TagNode

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext


class ImportModule:
    """Register aliases and rewrite aliased tags into references.

    An alias is visible to the import tag's following siblings and their
    descendants. The rewritten tag keeps its attributes (as parameters)
    and children (as slot content).
    """

    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node

        if isinstance(node, MImportNode):
            target = context.parent_context or context
            target.define_import(ImportDefinition(node.as_name, node.src, node.kind))
            node.remove_self()
            context.set_deleted()

        elif isinstance(node, TagNode) and context.has_import(node.tag_name):
            definition = context.get_import(node.tag_name)
            replacement = _create_reference(definition, node)
            replacement.append_children(node.children)
            node.replace_self([replacement])
            context.set_deleted()


def _create_reference(definition: ImportDefinition, node: TagNode) -> ExternalReferenceNode:
    attributes = {name: value for name, value in node.attributes.items() if name != "src"}
    if definition.kind is ImportKind.COMPONENT:
        replacement: ExternalReferenceNode = MComponentNode(definition.source, attributes)
    else:
        replacement = MFragmentNode(definition.source, attributes)
    # Attributes were already evaluated on the alias tag.
    replacement.markers.update(node.markers)
    return replacement
