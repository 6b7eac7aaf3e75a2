"""Runtime context handed to embedded code as ``$$``."""

from __future__ import annotations

import importlib
import logging
import types
from typing import TYPE_CHECKING, Any

from mooltipage._types import MimeType
from mooltipage.utils.paths import resolve_res_path

if TYPE_CHECKING:
    from mooltipage.nodes import Node, ScopeData
    from mooltipage.pipeline.context import FragmentContext, PipelineContext
    from mooltipage.pipeline.core import StandardPipeline
    from mooltipage.pipeline.objects import Fragment

logger = logging.getLogger(__name__)


class EvalContext:
    """Everything embedded code can reach besides the scope.

    Attributes:
        pipeline_context: The compilation unit being processed.
        scope: Scope the code reads and writes through ``$``.
        source_node: Node whose text or attribute is being evaluated, if any.
    """

    __slots__ = ("pipeline_context", "scope", "source_node")

    def __init__(self, pipeline_context: PipelineContext, scope: ScopeData, source_node: Node | None = None):
        self.pipeline_context = pipeline_context
        self.scope = scope
        self.source_node = source_node

    @property
    def pipeline(self) -> StandardPipeline:
        return self.pipeline_context.pipeline

    @property
    def fragment(self) -> Fragment:
        return self.pipeline_context.fragment

    @property
    def fragment_context(self) -> FragmentContext:
        return self.pipeline_context.fragment_context

    @property
    def fragment_res_path(self) -> str:
        return self.fragment_context.fragment_res_path

    @property
    def root_res_path(self) -> str:
        return self.fragment_context.root_res_path

    def require(self, name: str) -> Any:
        """Load a module for use in embedded code.

        A name ending in ``.py`` (or containing ``/``) is a resource path
        relative to the current fragment: it is read through the pipeline
        and executed as a fresh module on every call. Anything else is an
        import name resolved by ``importlib``.
        """
        if not (name.endswith(".py") or "/" in name):
            return importlib.import_module(name)

        res_path = resolve_res_path(name, self.fragment_res_path)
        source = self.pipeline.get_raw_text(res_path, MimeType.TEXT)
        logger.debug("Loading module %s for %s", res_path, self.fragment_res_path)

        module = types.ModuleType(res_path.rsplit("/", 1)[-1].removesuffix(".py"))
        module.__file__ = res_path
        exec(compile(source, res_path, "exec"), module.__dict__)
        return module
