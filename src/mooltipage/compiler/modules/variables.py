"""Scope binding: ``<m-var>``, ``<m-scope>``, ``<m-data>`` and reference parameters.

Each tag writes into a different scope:

- ``<m-var>``: the parent's scope, then the tag is removed.
- ``<m-scope>``: its own scope. The tag survives until exit so its
  descendants can read the bindings, then it is unwrapped.
- ``<m-data>``: the parent's scope, one binding per loaded resource.
- ``<m-fragment>`` / ``<m-component>``: their own scope, so caller-side
  slot content can read the parameters.

Attribute names are camel-cased on the way in: ``page-title`` binds
``pageTitle``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from mooltipage._types import MimeType
from mooltipage.nodes import (
    DataReference,
    DocumentNode,
    ExternalReferenceNode,
    MDataNode,
    MScopeNode,
    MVarNode,
    Node,
    ScopeData,
)
from mooltipage.utils.case import snake_to_camel
from mooltipage.utils.paths import resolve_res_path

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext

logger = logging.getLogger(__name__)


class VarModule:
    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node

        if isinstance(node, DocumentNode):
            node.set_root_scope(context.pipeline_context.fragment_context.scope)

        elif isinstance(node, MVarNode):
            bind_attributes(target_scope(node, context, use_parent=True), node.attributes.items())
            node.remove_self()
            context.set_deleted()

        elif isinstance(node, MScopeNode):
            bind_attributes(node.scope, node.attributes.items())

        elif isinstance(node, MDataNode):
            _load_data(node, context)
            node.remove_self()
            context.set_deleted()

        elif isinstance(node, ExternalReferenceNode):
            bind_attributes(node.scope, node.parameters)

    def exit_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        if isinstance(node, MScopeNode):
            node.remove_self(keep_children=True)
            context.set_deleted()


def target_scope(node: Node, context: HtmlCompilerContext, *, use_parent: bool) -> ScopeData:
    """Scope a binding tag writes into.

    Parent-targeting tags at the top of a detached tree fall back to the
    fragment's root scope.
    """
    if not use_parent:
        return node.scope
    if node.parent is not None:
        return node.parent.scope
    return context.pipeline_context.fragment_context.scope


def bind_attributes(scope: ScopeData, attributes: Iterable[tuple[str, Any]]) -> None:
    for name, value in list(attributes):
        scope[snake_to_camel(name)] = value


def _load_data(node: MDataNode, context: HtmlCompilerContext) -> None:
    scope = target_scope(node, context, use_parent=True)
    mime_type = node.type
    for reference in node.references:
        scope[snake_to_camel(reference.var_name)] = _load_reference(reference, mime_type, context)


def _load_reference(reference: DataReference, mime_type: MimeType, context: HtmlCompilerContext) -> Any:
    pipeline_context = context.pipeline_context
    res_path = resolve_res_path(reference.res_path, pipeline_context.fragment.path)
    raw = pipeline_context.pipeline.get_raw_text(res_path, mime_type)
    logger.debug("Bound %s from %s", reference.var_name, res_path)

    if mime_type is MimeType.JSON:
        return json.loads(raw)
    return raw
