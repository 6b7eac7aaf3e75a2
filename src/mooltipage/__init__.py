"""Mooltipage: compile an HTML-superset template language into static pages.

Templates are plain HTML plus a handful of control tags:

- ``<m-fragment src="...">`` / ``<m-component src="...">``: include another
  template, passing attributes as variables and children as slot content
- ``<m-slot>`` / ``<m-content>``: named insertion points and their content
- ``<m-var>``, ``<m-scope>``, ``<m-data>``: bind variables
- ``<m-if>``, ``<m-else-if>``, ``<m-else>``, ``<m-for>``: structural logic
- ``<m-import>``: alias a fragment or component as a custom tag
- ``<style compiled>``, ``<script compiled>``, ``<a compiled>``: build-time
  styles, scripts and links
- ``${ expr }`` and ``{{ expr }}`` in text and attributes, where ``$`` is
  the current scope and ``$$`` the evaluation context

Quickstart:
    >>> from mooltipage import MemoryInterface, StandardPipeline
    >>> interface = MemoryInterface({"index.html": "<m-var who='World'></m-var><p>Hello ${ $.who }</p>"})
    >>> page = StandardPipeline(interface).compile_page("index.html")
    >>> "Hello World" in page.html
    True

Architecture:
Source → DomParser → Node tree → HtmlCompiler (ordered modules) → build_page
→ formatter → serialize → PipelineInterface

"""

from mooltipage._types import AnchorResolve, ImportKind, MimeType, ScriptMode, StyleBind, WhitespaceMode
from mooltipage.api import Mooltipage, create_formatter
from mooltipage.compiler import HtmlCompiler, HtmlCompilerContext, HtmlCompilerModule
from mooltipage.environment import (
    ErrorCode,
    ExpressionSyntaxError,
    FileSystemInterface,
    MemoryInterface,
    MooltipageError,
    MpOptions,
    PipelineCacheError,
    PipelineInterface,
    ResourceNotFoundError,
    TemplateSyntaxError,
    UndefinedImportError,
)
from mooltipage.evaluation import EvalContent, EvalContext
from mooltipage.formatting import FormatterMode, FormatterOptions, StandardHtmlFormatter
from mooltipage.nodes import DocumentNode, Node, ScopeData, TagNode, TextNode
from mooltipage.parser import DomParser
from mooltipage.pipeline import (
    Component,
    DependencyTracker,
    Fragment,
    FragmentContext,
    Page,
    StandardPipeline,
)

__version__ = "0.1.0"

__all__ = [
    "AnchorResolve",
    "Component",
    "DependencyTracker",
    "DocumentNode",
    "DomParser",
    "ErrorCode",
    "EvalContent",
    "EvalContext",
    "ExpressionSyntaxError",
    "FileSystemInterface",
    "FormatterMode",
    "FormatterOptions",
    "Fragment",
    "FragmentContext",
    "HtmlCompiler",
    "HtmlCompilerContext",
    "HtmlCompilerModule",
    "ImportKind",
    "MemoryInterface",
    "MimeType",
    "Mooltipage",
    "MooltipageError",
    "MpOptions",
    "Node",
    "Page",
    "PipelineCacheError",
    "PipelineInterface",
    "ResourceNotFoundError",
    "ScopeData",
    "ScriptMode",
    "StandardHtmlFormatter",
    "StandardPipeline",
    "StyleBind",
    "TagNode",
    "TemplateSyntaxError",
    "TextNode",
    "UndefinedImportError",
    "WhitespaceMode",
    "__version__",
    "create_formatter",
]
