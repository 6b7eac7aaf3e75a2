"""Structural logic: ``<m-if>`` chains and ``<m-for>`` loops.

Both run on enter, after the expression pass has replaced the ``?``,
``of`` and ``in`` attributes with their evaluated values.

Loop unrolling:
    The loop body is detached once as a template. For each item a clone
    of the template is wrapped in an ``<m-scope>`` holding the loop
    variable (and index), and inserted directly after the loop tag.
    Insertion runs in reverse so the final order matches iteration order.
    The loop tag is then removed and the walker continues at the first
    scope block, compiling each iteration in its own scope.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from mooltipage.nodes import ConditionalNode, MForInNode, MForNode, MScopeNode

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext


class DomLogicModule:
    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        if isinstance(node, ConditionalNode):
            _compile_conditional(node, context)
        elif isinstance(node, MForNode):
            _compile_for(node, context)


def _compile_conditional(node: ConditionalNode, context: HtmlCompilerContext) -> None:
    # Reaching a branch means every earlier branch in its chain was false.
    if node.is_truthy:
        following = node.next_conditional
        while following is not None:
            after = following.next_conditional
            following.remove_self()
            following = after
        node.remove_self(keep_children=True)
    else:
        node.remove_self()
    context.set_deleted()


def iterate_for_values(node: MForNode) -> list[tuple[Any, int]]:
    """Evaluate a loop's source into ``(value, index)`` pairs.

    ``of`` walks the values of any non-string iterable; ``in`` walks the
    keys of a mapping. Anything else gives zero iterations.
    """
    source = node.expression
    if isinstance(node, MForInNode):
        items: Iterable[Any] = source.keys() if isinstance(source, Mapping) else ()
    elif isinstance(source, (str, bytes, Mapping)) or not isinstance(source, Iterable):
        items = ()
    else:
        items = source
    return [(value, index) for index, value in enumerate(items)]


def _compile_for(node: MForNode, context: HtmlCompilerContext) -> None:
    template = node.create_dom_from_children()
    var_name = node.var_name
    index_name = node.index_name

    for value, index in reversed(iterate_for_values(node)):
        block = MScopeNode()
        block.append_children(template.clone(True).children)
        block.scope[var_name] = value
        if index_name is not None:
            block.scope[index_name] = index
        node.append_sibling(block)

    node.remove_self()
    context.set_deleted()
