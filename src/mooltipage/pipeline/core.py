"""The standard compilation pipeline.

Ties together the parser, the HTML compiler, the formatter and a
``PipelineInterface``:

    interface.get_resource -> ResourceParser -> (cache) -> clone
        -> HtmlCompiler -> build_page -> formatter -> serialize
        -> interface.write_resource

Caching:
    Parsed fragments and components are cached by resource path and
    compiled expressions and scripts by source text, for the lifetime of
    the pipeline (or until ``reset()``). Every compile works on a deep
    clone, so a cached template is never mutated.

Dependencies:
    While ``compile_page()`` runs, every template and raw resource read
    through the pipeline is recorded against the page in
    ``dependency_tracker``, cache hits included.

Example:
    >>> interface = MemoryInterface({"index.html": "<m-var name='World'></m-var><p>Hello ${ $.name }</p>"})
    >>> page = StandardPipeline(interface).compile_page("index.html")
    >>> "<p>Hello World</p>" in page.html
    True

"""

from __future__ import annotations

import logging
from typing import Any

from mooltipage._types import MimeType
from mooltipage.compiler import HtmlCompiler
from mooltipage.environment.interfaces import PipelineInterface
from mooltipage.evaluation import (
    EvalContent,
    EvalContext,
    bind_object,
    is_expression_string,
    parse_expression,
    parse_script,
    unescape_text,
)
from mooltipage.formatting import HtmlFormatter, StandardHtmlFormatter, serialize
from mooltipage.nodes import InternalStyleNode, TextNode
from mooltipage.pipeline.cache import PipelineCache
from mooltipage.pipeline.context import FragmentContext, PipelineContext
from mooltipage.pipeline.dependencies import DependencyTracker
from mooltipage.pipeline.objects import Component, Fragment, Page
from mooltipage.pipeline.page_builder import build_page
from mooltipage.pipeline.resources import ResourceParser
from mooltipage.utils.hashing import hash_content
from mooltipage.utils.paths import compute_relative_res_path, resolve_res_path

logger = logging.getLogger(__name__)


class StandardPipeline:
    """Compile pages, fragments and components from a ``PipelineInterface``.

    Attributes:
        interface: Resource source and output sink
        formatter: Applied to compiled pages and top-level fragments
        resource_parser: Parses raw resource text
        html_compiler: Runs the compiler modules over a DOM
        cache: Parsed templates and compiled code
        dependency_tracker: Page <-> resource edges recorded while compiling

    """

    __slots__ = (
        "_current_page",
        "cache",
        "dependency_tracker",
        "formatter",
        "html_compiler",
        "interface",
        "resource_parser",
    )

    def __init__(
        self,
        interface: PipelineInterface,
        formatter: HtmlFormatter | None = None,
        resource_parser: ResourceParser | None = None,
        html_compiler: HtmlCompiler | None = None,
    ):
        self.interface = interface
        self.formatter: HtmlFormatter = formatter or StandardHtmlFormatter()
        self.resource_parser = resource_parser or ResourceParser(self)
        self.html_compiler = html_compiler or HtmlCompiler()
        self.cache = PipelineCache()
        self.dependency_tracker = DependencyTracker()
        self._current_page: str | None = None

    # -- compilation ---------------------------------------------------------

    def compile_page(self, res_path: str) -> Page:
        """Compile a page and write its HTML through the interface."""
        logger.debug("Compiling page %s", res_path)
        previous_page = self._current_page
        self._current_page = res_path
        try:
            fragment = self._compile_fragment_only(res_path)
        finally:
            self._current_page = previous_page

        dom = fragment.dom
        build_page(dom)
        self.formatter.format_dom(dom)
        html = self.formatter.format_html(serialize(dom))

        self.interface.write_resource(MimeType.HTML, res_path, html)
        return Page(res_path, dom, html)

    def compile_fragment(self, res_path: str, context: FragmentContext | None = None) -> Fragment:
        """Compile a fragment.

        Without a context the fragment is compiled standalone and
        formatted; with one it is being used inside another template,
        which formats the combined result.
        """
        fragment = self._compile_fragment_only(res_path, context)
        if context is None:
            self.formatter.format_dom(fragment.dom)
        return fragment

    def _compile_fragment_only(self, res_path: str, context: FragmentContext | None = None) -> Fragment:
        fragment = self._get_or_parse_fragment(res_path)
        if context is None:
            context = FragmentContext.for_root(res_path)
        self.html_compiler.compile_fragment(fragment, PipelineContext(self, fragment, context))
        return fragment

    def compile_component(self, res_path: str, context: FragmentContext) -> Fragment:
        """Compile one use of a component.

        The backing script is instantiated for this use and its public
        members bound into the use's scope before the template compiles.
        The stylesheet, if any, is injected ahead of the template markup
        as a compiled style so it is bound and deduplicated like any other.
        """
        component = self._get_or_parse_component(res_path)
        fragment = Fragment(res_path, component.template)
        pipeline_context = PipelineContext(self, fragment, context)

        if component.script is not None:
            instance = component.script.content.invoke(EvalContext(pipeline_context, context.scope))
            bind_object(instance, context.scope)

        if component.style is not None:
            style = InternalStyleNode(component.style.bind)
            style.append_child(TextNode(component.style.content))
            fragment.dom.prepend_child(style)

        self.html_compiler.compile_fragment(fragment, pipeline_context)
        return fragment

    def compile_expression(self, text: str, context: EvalContext) -> Any:
        """Evaluate template text; plain text comes back with escapes removed."""
        if not is_expression_string(text):
            return unescape_text(text)
        return self._get_or_parse_expression(text).invoke(context)

    def compile_script(self, script: str, context: EvalContext) -> Any:
        return self._get_or_parse_script(script).invoke(context)

    # -- resources -----------------------------------------------------------

    def get_raw_text(self, res_path: str, mime_type: MimeType = MimeType.TEXT) -> str:
        """Read a resource through the interface, recording the dependency."""
        self._record_dependency(res_path)
        return self.interface.get_resource(mime_type, res_path)

    def link_resource(self, mime_type: MimeType, content: str, root_res_path: str) -> str:
        """Emit ``content`` as a generated resource and return its path from the page.

        Identical content is created once per pipeline; later links reuse
        the first path, via ``relink_created_resource`` when the interface
        provides it.
        """
        content_hash = hash_content(content)
        if self.cache.has_created_resource(content_hash):
            res_path = self.cache.get_created_resource(content_hash)
            relink = getattr(self.interface, "relink_created_resource", None)
            if relink is not None:
                res_path = relink(mime_type, content, root_res_path, res_path)
        else:
            res_path = self.interface.create_resource(mime_type, content, root_res_path)
            self.cache.store_created_resource(content_hash, res_path)
            logger.debug("Created resource %s", res_path)

        return compute_relative_res_path(root_res_path, res_path)

    def reset(self) -> None:
        """Drop every cached template, compiled unit and linked resource."""
        self.cache.clear()

    # -- cache ---------------------------------------------------------------

    def _record_dependency(self, res_path: str) -> None:
        if self._current_page is not None:
            self.dependency_tracker.record_dependency(self._current_page, res_path)

    def _get_or_parse_fragment(self, res_path: str) -> Fragment:
        if self.cache.has_fragment(res_path):
            logger.debug("Fragment cache hit: %s", res_path)
            self._record_dependency(res_path)
            fragment = self.cache.get_fragment(res_path)
        else:
            html = self.get_raw_text(res_path, MimeType.HTML)
            fragment = self.resource_parser.parse_fragment(res_path, html)
            self.cache.store_fragment(fragment)
        return fragment.clone()

    def _get_or_parse_component(self, res_path: str) -> Component:
        if self.cache.has_component(res_path):
            logger.debug("Component cache hit: %s", res_path)
            component = self.cache.get_component(res_path)
            self._record_dependency(res_path)
            for src in component.external_sources:
                self._record_dependency(resolve_res_path(src, res_path))
        else:
            html = self.get_raw_text(res_path, MimeType.HTML)
            component = self.resource_parser.parse_component(res_path, html)
            self.cache.store_component(component)
        return component.clone()

    def _get_or_parse_expression(self, text: str) -> EvalContent[Any]:
        if self.cache.has_expression(text):
            return self.cache.get_expression(text)
        content = parse_expression(text)
        self.cache.store_expression(text, content)
        return content

    def _get_or_parse_script(self, script: str) -> EvalContent[Any]:
        if self.cache.has_script(script):
            return self.cache.get_script(script)
        content = parse_script(script)
        self.cache.store_script(script, content)
        return content
