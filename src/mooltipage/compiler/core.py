"""HTML compiler: runs the feature modules over a fragment's DOM.

The compiler makes a single depth-first walk. For every node it calls each
module's ``enter_node`` in order, then walks the children, then calls each
module's ``exit_node``. Any module may mark the node deleted, which skips
the remaining modules and, on enter, the whole subtree.

Module order is a correctness contract:

1. Expression: evaluate ``${}`` / ``{{}}`` before anyone reads values
2. Var: seed and extend scopes
3. Script: run build-time scripts against those scopes
4. Slot: splice in caller content before logic or aliasing sees it
5. DomLogic: ``m-if`` / ``m-for``
6. Import: rewrite alias tags into references
7. Style: bind compiled styles
8. Deduplicate: drop repeated styles and links
9. Anchor: rewrite compiled hrefs
10. Whitespace: propagate the sensitivity flag (exit)
11. Fragment: expand references last, since each expansion recursively
    compiles another template (exit)

Mutation safety:
    Modules delete, replace and multiply nodes while their parent is being
    walked, so children are never iterated from a snapshot. After visiting
    a child the walker checks whether it is still attached to the same
    parent. If not, it resumes from the saved previous sibling's current
    next sibling (or the parent's current first child), which lands on
    whatever now occupies the child's old position.

"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from mooltipage.compiler.context import HtmlCompilerContext, SharedHtmlCompilerContext
from mooltipage.nodes import DocumentNode, Node, NodeWithChildren

if TYPE_CHECKING:
    from mooltipage.pipeline.context import PipelineContext
    from mooltipage.pipeline.objects import Fragment

logger = logging.getLogger(__name__)


@runtime_checkable
class EnterNodeModule(Protocol):
    """A module with a pre-order hook, called before the node's children."""

    def enter_node(self, context: HtmlCompilerContext) -> None: ...


@runtime_checkable
class ExitNodeModule(Protocol):
    """A module with a post-order hook, called after the node's children."""

    def exit_node(self, context: HtmlCompilerContext) -> None: ...


# A language feature implemented as walk callbacks. Modules are stateless;
# per-unit state lives on the context. A module implements either hook or both.
HtmlCompilerModule = EnterNodeModule | ExitNodeModule


def default_modules() -> list[HtmlCompilerModule]:
    from mooltipage.compiler.modules import (
        AnchorModule,
        DeduplicateModule,
        DomLogicModule,
        ExpressionModule,
        FragmentModule,
        ImportModule,
        ScriptModule,
        SlotModule,
        StyleModule,
        VarModule,
        WhitespaceModule,
    )

    return [
        ExpressionModule(),
        VarModule(),
        ScriptModule(),
        SlotModule(),
        DomLogicModule(),
        ImportModule(),
        StyleModule(),
        DeduplicateModule(),
        AnchorModule(),
        WhitespaceModule(),
        FragmentModule(),
    ]


class HtmlCompiler:
    """Compile a fragment's DOM in place.

    Produces a DOM that serializes to plain HTML. Page structure rules
    (single html/head/body) are applied separately by the page builder.
    """

    __slots__ = ("_enter", "_exit", "modules")

    def __init__(self, modules: Sequence[HtmlCompilerModule] | None = None):
        self.modules = list(modules) if modules is not None else default_modules()
        for module in self.modules:
            if not isinstance(module, HtmlCompilerModule):
                raise TypeError(f"{type(module).__name__} defines neither enter_node() nor exit_node()")
        # Pre-bind hooks once instead of probing per node.
        self._enter = [m.enter_node for m in self.modules if isinstance(m, EnterNodeModule)]
        self._exit = [m.exit_node for m in self.modules if isinstance(m, ExitNodeModule)]

    def compile_fragment(self, fragment: Fragment, pipeline_context: PipelineContext) -> None:
        logger.debug("Compiling %s", fragment.path)
        shared = SharedHtmlCompilerContext(pipeline_context)
        root = HtmlCompilerContext(shared, fragment.dom)
        self._compile_node(root)

    def _compile_node(self, context: HtmlCompilerContext) -> None:
        node = context.node

        for enter in self._enter:
            enter(context)
            if context.is_deleted:
                return

        # A removed node's subtree is no longer part of the output.
        if isinstance(node, DocumentNode) or (node.parent is not None and isinstance(node, NodeWithChildren)):
            self._compile_children(node, context)

        for exit_ in self._exit:
            exit_(context)
            if context.is_deleted:
                return

    def _compile_children(self, node: NodeWithChildren, context: HtmlCompilerContext) -> None:
        child: Node | None = node.first_child
        while child is not None:
            saved_prev = child.prev_sibling

            self._compile_node(context.create_child_context(child))

            if child.parent is not node:
                child = saved_prev.next_sibling if saved_prev is not None else node.first_child
            else:
                child = child.next_sibling
