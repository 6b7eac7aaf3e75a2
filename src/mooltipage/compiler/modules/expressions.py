"""Evaluate embedded expressions in text and attribute values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mooltipage.nodes import TagNode, TextNode

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext

# Content that is walked again after being spliced (m-scope unwrap, fragment
# expansion) has already been evaluated; evaluating it twice would run
# unescaped ``\${`` text as code.
EXPRESSION_COMPILED = "expression.compiled"


class ExpressionModule:
    """Replace ``${}`` and ``{{}}`` code with its result.

    Text nodes always end up with a string (``None`` becomes empty).
    Attributes keep the raw result object, so ``of="{{ items }}"`` stores
    the list itself. Only string-valued attributes are touched; anything
    else was already evaluated.
    """

    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        if EXPRESSION_COMPILED in node.markers:
            return

        if isinstance(node, TextNode):
            node.markers.add(EXPRESSION_COMPILED)
            _compile_text(node, context)
        elif isinstance(node, TagNode):
            node.markers.add(EXPRESSION_COMPILED)
            _compile_attributes(node, context)


def _compile_text(node: TextNode, context: HtmlCompilerContext) -> None:
    pipeline = context.pipeline_context.pipeline
    value = pipeline.compile_expression(node.text, context.create_eval_context())
    node.text = "" if value is None else str(value)


def _compile_attributes(node: TagNode, context: HtmlCompilerContext) -> None:
    pipeline = context.pipeline_context.pipeline
    eval_context = context.create_eval_context()
    for name, value in list(node.attributes.items()):
        if isinstance(value, str):
            node.set_raw_attribute(name, pipeline.compile_expression(value, eval_context))
