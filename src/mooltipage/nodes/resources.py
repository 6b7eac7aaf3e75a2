"""Compiled script, style and anchor tags, and ``<m-whitespace>``.

Adding the bare ``compiled`` attribute to ``<script>``, ``<style>`` or
``<a>`` hands the tag to the compiler; without it the tag is passed
through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from mooltipage._types import AnchorResolve, StyleBind, WhitespaceMode
from mooltipage.environment.exceptions import ErrorCode, TemplateSyntaxError
from mooltipage.nodes.base import TagNode, TextNode

E = TypeVar("E", bound=Enum)


def parse_enum_attribute(node: TagNode, name: str, enum_type: type[E], default: E) -> E:
    """Read an enum-valued attribute, raising on unknown values."""
    raw = node.get_attribute(name)
    if raw is None:
        return default
    try:
        return enum_type(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise TemplateSyntaxError(
            f"<{node.tag_name}> attribute '{name}' must be one of: {allowed} (got '{raw}')",
            tag_name=node.tag_name,
            code=ErrorCode.INVALID_ATTRIBUTE,
        ) from None


def _direct_text(node: TagNode) -> str:
    return "".join(child.text for child in node.children if isinstance(child, TextNode))


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------


class ScriptNode(TagNode):
    __slots__ = ()

    def __init__(self, compiled: bool = False, attributes: Mapping[str, Any] | None = None):
        attrs = dict(attributes) if attributes else {}
        if compiled:
            attrs["compiled"] = None
        else:
            attrs.pop("compiled", None)
        super().__init__("script", attrs)

    @property
    def compiled(self) -> bool:
        return self.has_attribute("compiled")


class InternalScriptNode(ScriptNode):
    """``<script compiled>`` whose body runs at build time."""

    __slots__ = ()

    def __init__(self, attributes: Mapping[str, Any] | None = None):
        super().__init__(True, attributes)

    @property
    def script_content(self) -> str:
        return _direct_text(self)


class ExternalScriptNode(ScriptNode):
    """``<script compiled src="...">`` that runs a file at build time."""

    __slots__ = ()

    def __init__(self, src: str, attributes: Mapping[str, Any] | None = None):
        attrs = dict(attributes) if attributes else {}
        attrs["src"] = src
        super().__init__(True, attrs)
        self.get_required_value_attribute("src")

    @property
    def src(self) -> str:
        return self.get_required_value_attribute("src")

    @src.setter
    def src(self, value: str) -> None:
        self.set_attribute("src", value)


class MScriptNode(TagNode):
    """``<m-script src="...">``: shorthand for an external compiled script."""

    __slots__ = ()

    def __init__(self, src: str, attributes: Mapping[str, Any] | None = None):
        attrs = dict(attributes) if attributes else {}
        attrs["src"] = src
        super().__init__("m-script", attrs)
        self.get_required_value_attribute("src")

    @property
    def src(self) -> str:
        return self.get_required_value_attribute("src")


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


class StyleNode(TagNode):
    __slots__ = ()

    def __init__(self, compiled: bool = False, attributes: Mapping[str, Any] | None = None):
        attrs = dict(attributes) if attributes else {}
        if compiled:
            attrs["compiled"] = None
        else:
            attrs.pop("compiled", None)
        super().__init__("style", attrs)

    @property
    def compiled(self) -> bool:
        return self.has_attribute("compiled")


class CompiledStyleNode(StyleNode):
    """Shared behavior for ``<style compiled>`` tags."""

    __slots__ = ()

    def __init__(
        self,
        bind: StyleBind | None = None,
        skip_format: bool = False,
        attributes: Mapping[str, Any] | None = None,
    ):
        attrs = dict(attributes) if attributes else {}
        if bind is not None:
            attrs["bind"] = bind.value
        if skip_format:
            attrs["skip-format"] = None
        super().__init__(True, attrs)
        # Validates eagerly.
        _ = self.bind

    @property
    def bind(self) -> StyleBind:
        return parse_enum_attribute(self, "bind", StyleBind, StyleBind.HEAD)

    @bind.setter
    def bind(self, value: StyleBind) -> None:
        self.set_attribute("bind", value.value)

    @property
    def skip_format(self) -> bool:
        return self.has_attribute("skip-format")


class InternalStyleNode(CompiledStyleNode):
    __slots__ = ()

    @property
    def style_content(self) -> str:
        return _direct_text(self)


class ExternalStyleNode(CompiledStyleNode):
    __slots__ = ()

    def __init__(
        self,
        src: str,
        bind: StyleBind | None = None,
        skip_format: bool = False,
        attributes: Mapping[str, Any] | None = None,
    ):
        attrs = dict(attributes) if attributes else {}
        attrs["src"] = src
        super().__init__(bind, skip_format, attrs)
        self.get_required_value_attribute("src")

    @property
    def src(self) -> str:
        return self.get_required_value_attribute("src")

    @src.setter
    def src(self, value: str) -> None:
        self.set_attribute("src", value)


# ---------------------------------------------------------------------------
# Anchors and whitespace
# ---------------------------------------------------------------------------


class CompiledAnchorNode(TagNode):
    """``<a compiled href="..." resolve="none|local|root|base">``."""

    __slots__ = ()

    def __init__(
        self,
        href: str,
        resolve: AnchorResolve | None = None,
        attributes: Mapping[str, Any] | None = None,
    ):
        attrs = dict(attributes) if attributes else {}
        attrs["href"] = href
        attrs["compiled"] = None
        if resolve is not None:
            attrs["resolve"] = resolve.value
        super().__init__("a", attrs)
        self.get_required_value_attribute("href")
        _ = self.resolve

    @property
    def href(self) -> str:
        return self.get_required_value_attribute("href")

    @href.setter
    def href(self, value: str) -> None:
        self.set_attribute("href", value)

    @property
    def resolve(self) -> AnchorResolve:
        return parse_enum_attribute(self, "resolve", AnchorResolve, AnchorResolve.NONE)

    def to_uncompiled(self) -> TagNode:
        """Plain ``<a>`` with the same attributes minus compiler ones.

        Children are moved, not copied.
        """
        attrs = {k: v for k, v in self.attributes.items() if k not in ("compiled", "resolve")}
        anchor = TagNode("a", attrs)
        anchor.append_children(self.children)
        return anchor


class MWhitespaceNode(TagNode):
    __slots__ = ()

    def __init__(self, mode: WhitespaceMode | None = None, attributes: Mapping[str, Any] | None = None):
        attrs = dict(attributes) if attributes else {}
        if mode is not None:
            attrs["mode"] = mode.value
        super().__init__("m-whitespace", attrs)
        _ = self.mode

    @property
    def mode(self) -> WhitespaceMode:
        return parse_enum_attribute(self, "mode", WhitespaceMode, WhitespaceMode.SENSITIVE)
