"""Per-use compilation state threaded through recursive compilation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mooltipage.nodes import DocumentNode, ScopeData
from mooltipage.utils.paths import resolve_res_path

if TYPE_CHECKING:
    from mooltipage.pipeline.core import StandardPipeline
    from mooltipage.pipeline.objects import Fragment


@dataclass(slots=True)
class FragmentContext:
    """One use of a fragment or component.

    A fresh context is built for every reference, so two uses of the same
    template never share scope or slot content.

    Attributes:
        slot_contents: Caller-supplied markup by slot name.
        scope: Initial bindings for the referenced template's root.
        fragment_res_path: Path of the template being compiled.
        root_res_path: Path of the top-level page; shared by every nested use.
        parent_context: Context of the referencing template, if any.
    """

    fragment_res_path: str
    root_res_path: str
    scope: ScopeData = field(default_factory=ScopeData)
    slot_contents: dict[str, DocumentNode] = field(default_factory=dict)
    parent_context: FragmentContext | None = None

    @classmethod
    def for_root(cls, res_path: str) -> FragmentContext:
        """Context for a template compiled directly, not referenced."""
        return cls(fragment_res_path=res_path, root_res_path=res_path)

    def create_child(
        self,
        src: str,
        scope: ScopeData,
        slot_contents: dict[str, DocumentNode],
    ) -> FragmentContext:
        """Context for a template referenced from this one."""
        return FragmentContext(
            fragment_res_path=resolve_res_path(src, self.fragment_res_path),
            root_res_path=self.root_res_path,
            scope=scope,
            slot_contents=slot_contents,
            parent_context=self,
        )


@dataclass(frozen=True, slots=True)
class PipelineContext:
    """State for the compilation unit currently being walked."""

    pipeline: StandardPipeline
    fragment: Fragment
    fragment_context: FragmentContext
