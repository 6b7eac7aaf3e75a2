"""Bind ``<style compiled>`` into the page.

``bind="head"`` (the default) produces a plain inline ``<style>``; the
page builder later moves it into ``<head>``. ``bind="link"`` writes the
CSS out as a content-addressed resource and produces
``<link rel="stylesheet">`` pointing at it from the page being built.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mooltipage._types import MimeType, StyleBind
from mooltipage.nodes import CompiledStyleNode, ExternalStyleNode, InternalStyleNode, StyleNode, TagNode, TextNode
from mooltipage.utils.paths import resolve_res_path

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext

logger = logging.getLogger(__name__)


class StyleModule:
    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        pipeline_context = context.pipeline_context

        if isinstance(node, InternalStyleNode):
            content = node.style_content
        elif isinstance(node, ExternalStyleNode):
            res_path = resolve_res_path(node.src, pipeline_context.fragment.path)
            content = pipeline_context.pipeline.get_raw_text(res_path, MimeType.CSS)
        else:
            return

        node.replace_self([_bind_style(node, content, context)])
        context.set_deleted()


def _bind_style(node: CompiledStyleNode, content: str, context: HtmlCompilerContext) -> TagNode:
    if node.bind is StyleBind.LINK:
        pipeline_context = context.pipeline_context
        href = pipeline_context.pipeline.link_resource(
            MimeType.CSS, content, pipeline_context.fragment_context.root_res_path
        )
        logger.debug("Linked stylesheet %s into %s", href, pipeline_context.fragment_context.root_res_path)
        return TagNode("link", {"rel": "stylesheet", "href": href})

    style = StyleNode()
    style.append_child(TextNode(content, is_whitespace_sensitive=node.skip_format))
    return style
