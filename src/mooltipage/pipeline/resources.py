"""Parse raw resources into fragments and components.

Component file layout (all sections top-level, all optional):

    ```html
    <template [src="external.html"]>
        ...markup...
    </template>
    <script [src="external.py"] [mode="class|function"]>
        ...python...
    </script>
    <style [src="external.css"] [bind="head|link"]>
        ...css...
    </style>
    ```

Without a ``<template>`` section, whatever markup remains after the
script and style sections are removed is the template. External ``src``
paths are relative to the component file.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mooltipage._types import MimeType, ScriptMode, StyleBind
from mooltipage.evaluation.engine import parse_component_class, parse_component_function
from mooltipage.nodes import DocumentNode, TagNode
from mooltipage.nodes.resources import parse_enum_attribute
from mooltipage.parser import DomParser
from mooltipage.pipeline.objects import Component, ComponentScript, ComponentStyle, Fragment
from mooltipage.utils.paths import resolve_res_path

if TYPE_CHECKING:
    from mooltipage.pipeline.core import StandardPipeline

logger = logging.getLogger(__name__)


class ResourceParser:
    """Turn resource text into pipeline objects.

    External component sections are read through the owning pipeline, so
    they are recorded as dependencies of the page being compiled.
    """

    __slots__ = ("pipeline",)

    def __init__(self, pipeline: StandardPipeline):
        self.pipeline = pipeline

    def parse_fragment(self, res_path: str, html: str) -> Fragment:
        return Fragment(res_path, DomParser(res_path).parse_dom(html))

    def parse_component(self, res_path: str, html: str) -> Component:
        dom = DomParser(res_path).parse_dom(html)

        script_node = dom.find_child_tag_by_tag_name("script", deep=False)
        style_node = dom.find_child_tag_by_tag_name("style", deep=False)
        template_node = dom.find_child_tag_by_tag_name("template", deep=False)

        script = self._parse_script(res_path, script_node) if script_node is not None else None
        style = self._parse_style(res_path, style_node) if style_node is not None else None

        template_src: str | None = None
        if template_node is not None:
            template_src = template_node.get_optional_value_attribute("src")
            template = self._resolve_dom_section(res_path, template_src, template_node)
        else:
            for section in (script_node, style_node):
                if section is not None:
                    section.remove_self()
            template = dom

        logger.debug(
            "Parsed component %s (script=%s, style=%s)",
            res_path,
            script.mode.value if script else None,
            style.bind.value if style else None,
        )
        return Component(res_path, template, template_src, script, style)

    def _parse_script(self, res_path: str, node: TagNode) -> ComponentScript:
        mode = parse_enum_attribute(node, "mode", ScriptMode, ScriptMode.CLASS)
        src = node.get_optional_value_attribute("src")
        text = self._resolve_text_section(res_path, src, node, MimeType.JAVASCRIPT)
        filename = resolve_res_path(src, res_path) if src else res_path

        if mode is ScriptMode.CLASS:
            content = parse_component_class(text, filename)
        else:
            content = parse_component_function(text, filename)
        return ComponentScript(mode, content, src)

    def _parse_style(self, res_path: str, node: TagNode) -> ComponentStyle:
        bind = parse_enum_attribute(node, "bind", StyleBind, StyleBind.HEAD)
        src = node.get_optional_value_attribute("src")
        text = self._resolve_text_section(res_path, src, node, MimeType.CSS)
        return ComponentStyle(text, bind, src)

    def _resolve_text_section(self, res_path: str, src: str | None, node: TagNode, mime_type: MimeType) -> str:
        if src is not None:
            return self.pipeline.get_raw_text(resolve_res_path(src, res_path), mime_type)
        return node.text_content

    def _resolve_dom_section(self, res_path: str, src: str | None, node: TagNode) -> DocumentNode:
        if src is not None:
            external_path = resolve_res_path(src, res_path)
            html = self.pipeline.get_raw_text(external_path, MimeType.HTML)
            return DomParser(external_path).parse_dom(html)
        return node.create_dom_from_children()
