"""Node-level and unit-level state for the HTML compiler walk."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mooltipage._types import ImportKind
from mooltipage.environment.exceptions import UndefinedImportError
from mooltipage.evaluation.context import EvalContext
from mooltipage.nodes import Node, TagNode

if TYPE_CHECKING:
    from mooltipage.pipeline.context import PipelineContext


@dataclass(frozen=True, slots=True)
class ImportDefinition:
    """An ``<m-import>`` alias visible to the importing node's subtree."""

    alias: str
    source: str
    kind: ImportKind = ImportKind.FRAGMENT


@dataclass(slots=True)
class SharedHtmlCompilerContext:
    """State shared by every node in one compilation unit.

    Attributes:
        pipeline_context: The unit being compiled.
        unique_styles: Normalized style text mapped to the node that kept it.
        unique_links: Link hrefs mapped to the node that kept them.
    """

    pipeline_context: PipelineContext
    unique_styles: dict[str, TagNode] = field(default_factory=dict)
    unique_links: dict[str, TagNode] = field(default_factory=dict)


class HtmlCompilerContext:
    """State for one node during the walk.

    Child contexts link to their parent's, mirroring the tree, so import
    aliases defined on an ancestor are visible to the whole subtree.
    """

    __slots__ = ("_imports", "_is_deleted", "node", "parent_context", "shared_context")

    def __init__(
        self,
        shared_context: SharedHtmlCompilerContext,
        node: Node,
        parent_context: HtmlCompilerContext | None = None,
    ):
        self.shared_context = shared_context
        self.node = node
        self.parent_context = parent_context
        self._imports: dict[str, ImportDefinition] = {}
        self._is_deleted = False

    @property
    def pipeline_context(self) -> PipelineContext:
        return self.shared_context.pipeline_context

    @property
    def is_deleted(self) -> bool:
        return self._is_deleted

    def set_deleted(self) -> None:
        """Stop processing this node: later modules and its children are skipped."""
        self._is_deleted = True

    def create_child_context(self, node: Node) -> HtmlCompilerContext:
        return HtmlCompilerContext(self.shared_context, node, self)

    # -- imports -----------------------------------------------------------

    def define_import(self, definition: ImportDefinition) -> None:
        self._imports[definition.alias.lower()] = definition

    def _find_import(self, alias: str) -> ImportDefinition | None:
        key = alias.lower()
        context: HtmlCompilerContext | None = self
        while context is not None:
            definition = context._imports.get(key)
            if definition is not None:
                return definition
            context = context.parent_context
        return None

    def has_import(self, alias: str) -> bool:
        return self._find_import(alias) is not None

    def get_import(self, alias: str) -> ImportDefinition:
        """Look up an alias here or on any ancestor.

        Raises:
            UndefinedImportError: Always call ``has_import()`` first.
        """
        definition = self._find_import(alias)
        if definition is None:
            raise UndefinedImportError(
                f"Alias '{alias.lower()}' is not defined. Always call has_import() before get_import()"
            )
        return definition

    # -- evaluation --------------------------------------------------------

    def create_eval_context(self) -> EvalContext:
        """EvalContext bound to this node's scope."""
        return EvalContext(self.pipeline_context, self.node.scope, self.node)

    def create_parent_scope_eval_context(self) -> EvalContext:
        """EvalContext bound to the parent node's scope, or this one's at the root."""
        if self.parent_context is None:
            return self.create_eval_context()
        return EvalContext(self.pipeline_context, self.parent_context.node.scope, self.node)
