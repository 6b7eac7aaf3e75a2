"""Run build-time scripts: ``<script compiled>`` and ``<m-script>``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mooltipage._types import MimeType
from mooltipage.nodes import ExternalScriptNode, InternalScriptNode, MScriptNode
from mooltipage.utils.paths import resolve_res_path

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext


class ScriptModule:
    """Execute compiled scripts against the enclosing scope, then drop them.

    Scripts run with the parent's scope so ``$.name = value`` is visible to
    the tag's following siblings.
    """

    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node

        if isinstance(node, InternalScriptNode):
            script = node.script_content
        elif isinstance(node, (ExternalScriptNode, MScriptNode)):
            pipeline_context = context.pipeline_context
            res_path = resolve_res_path(node.src, pipeline_context.fragment.path)
            script = pipeline_context.pipeline.get_raw_text(res_path, MimeType.JAVASCRIPT)
        else:
            return

        context.pipeline_context.pipeline.compile_script(script, context.create_parent_scope_eval_context())

        node.remove_self()
        context.set_deleted()
