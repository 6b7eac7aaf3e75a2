"""Tests for HtmlCompilerContext: import aliases and eval contexts."""

from __future__ import annotations

import pytest

from mooltipage._types import ImportKind
from mooltipage.compiler import HtmlCompilerContext, ImportDefinition, SharedHtmlCompilerContext
from mooltipage.environment.exceptions import ErrorCode, UndefinedImportError
from mooltipage.nodes import DocumentNode, ScopeData, TagNode


@pytest.fixture
def tree() -> tuple[DocumentNode, TagNode, TagNode]:
    root = DocumentNode()
    root.set_root_scope(ScopeData({"where": "root"}))
    outer = TagNode("div")
    inner = TagNode("p")
    outer.append_child(inner)
    root.append_child(outer)
    outer.scope["where"] = "outer"
    return root, outer, inner


@pytest.fixture
def contexts(tree):
    root, outer, inner = tree
    root_context = HtmlCompilerContext(SharedHtmlCompilerContext(None), root)
    outer_context = root_context.create_child_context(outer)
    return root_context, outer_context, outer_context.create_child_context(inner)


class TestImports:
    def test_alias_visible_to_descendants(self, contexts) -> None:
        root_context, outer_context, inner_context = contexts
        outer_context.define_import(ImportDefinition("Card", "card.html", ImportKind.COMPONENT))

        assert inner_context.has_import("card")
        assert inner_context.get_import("CARD").source == "card.html"
        assert not root_context.has_import("card")

    def test_nearest_definition_wins(self, contexts) -> None:
        root_context, _, inner_context = contexts
        root_context.define_import(ImportDefinition("nav", "a.html"))
        inner_context.define_import(ImportDefinition("nav", "b.html"))
        assert inner_context.get_import("nav").source == "b.html"

    def test_undefined_alias(self, contexts) -> None:
        with pytest.raises(UndefinedImportError) as exc_info:
            contexts[2].get_import("missing")
        assert exc_info.value.code is ErrorCode.UNDEFINED_IMPORT


class TestEvalContexts:
    def test_own_scope(self, contexts) -> None:
        _, outer_context, _ = contexts
        eval_context = outer_context.create_eval_context()
        assert eval_context.scope["where"] == "outer"

    def test_parent_scope(self, contexts) -> None:
        _, outer_context, _ = contexts
        assert outer_context.create_parent_scope_eval_context().scope["where"] == "root"

    def test_parent_scope_at_root(self, contexts) -> None:
        root_context = contexts[0]
        assert root_context.create_parent_scope_eval_context().scope["where"] == "root"


class TestDeletion:
    def test_flag(self, contexts) -> None:
        context = contexts[1]
        assert not context.is_deleted
        context.set_deleted()
        assert context.is_deleted
