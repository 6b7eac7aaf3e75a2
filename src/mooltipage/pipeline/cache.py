"""Process-lifetime stores for parsed templates and compiled code.

Stored fragments and components are canonical: callers must ``clone()``
before compiling them. Every ``get_*`` must be guarded by the matching
``has_*``; an unguarded miss raises ``PipelineCacheError``.
"""

from __future__ import annotations

from typing import Any, TypeVar

from mooltipage.environment.exceptions import PipelineCacheError
from mooltipage.evaluation.engine import EvalContent
from mooltipage.pipeline.objects import Component, Fragment

V = TypeVar("V")


def _get(store: dict[str, V], key: str, kind: str, method: str) -> V:
    try:
        return store[key]
    except KeyError:
        raise PipelineCacheError(
            f"{kind} not found in cache: {key}. Make sure to call has_{method}() before get_{method}()."
        ) from None


class PipelineCache:
    """Keyed stores for one pipeline.

    Attributes:
        fragments: Parsed fragments by resource path
        components: Parsed components by resource path
        expressions: Compiled expressions by source text
        scripts: Compiled scripts by source text
        created_resources: Linked resource paths by content hash
    """

    __slots__ = ("components", "created_resources", "expressions", "fragments", "scripts")

    def __init__(self) -> None:
        self.fragments: dict[str, Fragment] = {}
        self.components: dict[str, Component] = {}
        self.expressions: dict[str, EvalContent[Any]] = {}
        self.scripts: dict[str, EvalContent[Any]] = {}
        self.created_resources: dict[str, str] = {}

    # Fragments

    def has_fragment(self, res_path: str) -> bool:
        return res_path in self.fragments

    def get_fragment(self, res_path: str) -> Fragment:
        return _get(self.fragments, res_path, "Fragment", "fragment")

    def store_fragment(self, fragment: Fragment) -> None:
        self.fragments[fragment.path] = fragment

    # Components

    def has_component(self, res_path: str) -> bool:
        return res_path in self.components

    def get_component(self, res_path: str) -> Component:
        return _get(self.components, res_path, "Component", "component")

    def store_component(self, component: Component) -> None:
        self.components[component.path] = component

    # Expressions

    def has_expression(self, expression: str) -> bool:
        return expression in self.expressions

    def get_expression(self, expression: str) -> EvalContent[Any]:
        return _get(self.expressions, expression, "Expression", "expression")

    def store_expression(self, expression: str, content: EvalContent[Any]) -> None:
        self.expressions[expression] = content

    # Scripts

    def has_script(self, script: str) -> bool:
        return script in self.scripts

    def get_script(self, script: str) -> EvalContent[Any]:
        return _get(self.scripts, script, "Script", "script")

    def store_script(self, script: str, content: EvalContent[Any]) -> None:
        self.scripts[script] = content

    # Created resources

    def has_created_resource(self, content_hash: str) -> bool:
        return content_hash in self.created_resources

    def get_created_resource(self, content_hash: str) -> str:
        return _get(self.created_resources, content_hash, "Created resource", "created_resource")

    def store_created_resource(self, content_hash: str, res_path: str) -> None:
        self.created_resources[content_hash] = res_path

    def clear(self) -> None:
        self.fragments.clear()
        self.components.clear()
        self.expressions.clear()
        self.scripts.clear()
        self.created_resources.clear()
