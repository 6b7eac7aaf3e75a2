"""Pipeline data objects: parsed templates and compiled pages.

Cached objects are canonical and never mutated; every consumer works on a
``clone()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from mooltipage._types import ScriptMode, StyleBind
from mooltipage.evaluation.engine import EvalContent
from mooltipage.nodes import DocumentNode


@dataclass(slots=True)
class Fragment:
    """A parsed template: resource path plus DOM."""

    path: str
    dom: DocumentNode

    def clone(self) -> Fragment:
        return Fragment(self.path, self.dom.clone(True))


@dataclass(slots=True)
class Page(Fragment):
    """A compiled page with its final HTML text."""

    html: str = ""


@dataclass(frozen=True, slots=True)
class ComponentScript:
    """Backing script of a component.

    Attributes:
        mode: ``class`` (last defined class is instantiated) or ``function``
            (body returns the instance).
        content: Compiled script, invoked once per component use.
        src: External script path, if loaded from a separate file.
    """

    mode: ScriptMode
    content: EvalContent
    src: str | None = None


@dataclass(frozen=True, slots=True)
class ComponentStyle:
    """Stylesheet bound to every page that uses the component."""

    content: str
    bind: StyleBind = StyleBind.HEAD
    src: str | None = None


@dataclass(slots=True)
class Component:
    """A fragment with optional backing script and stylesheet.

    Attributes:
        path: Resource path of the component file.
        template: DOM rendered for each use.
        template_src: External template path, if any.
        script: Backing script, if any.
        style: Stylesheet, if any.
    """

    path: str
    template: DocumentNode
    template_src: str | None = None
    script: ComponentScript | None = None
    style: ComponentStyle | None = None

    @property
    def external_sources(self) -> list[str]:
        """``src`` paths of externally loaded sections, as written."""
        sources = [self.template_src]
        if self.script is not None:
            sources.append(self.script.src)
        if self.style is not None:
            sources.append(self.style.src)
        return [src for src in sources if src]

    def clone(self) -> Component:
        # Script and style are immutable and shared.
        return Component(self.path, self.template.clone(True), self.template_src, self.script, self.style)
