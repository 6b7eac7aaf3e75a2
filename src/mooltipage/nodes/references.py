"""Reference, slot and import tags.

``<m-fragment>`` and ``<m-component>`` pull another template into the
current document. ``<m-content>`` / ``<m-slot>`` move caller-supplied markup
into named insertion points. ``<m-import>`` defines a tag alias for a
fragment or component.

All typed fields are properties over the attribute map, so a plain
``TagNode.clone()`` preserves them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mooltipage._types import ImportKind
from mooltipage.environment.exceptions import ErrorCode, TemplateSyntaxError
from mooltipage.nodes.base import TagNode

DEFAULT_SLOT_NAME = "[default]"


def _with(attributes: Mapping[str, Any] | None, **values: Any) -> dict[str, Any]:
    merged = dict(attributes) if attributes else {}
    merged.update(values)
    return merged


class ExternalReferenceNode(TagNode):
    """Base for tags whose ``src`` names another template."""

    __slots__ = ()

    def __init__(self, tag_name: str, src: str, attributes: Mapping[str, Any] | None = None):
        super().__init__(tag_name, _with(attributes, src=src))
        self.get_required_value_attribute("src")

    @property
    def src(self) -> str:
        return self.get_required_value_attribute("src")

    @src.setter
    def src(self, value: str) -> None:
        self.set_attribute("src", value)

    @property
    def parameters(self) -> list[tuple[str, Any]]:
        """Attribute pairs passed into the referenced template's scope."""
        return [(name, value) for name, value in self.attributes.items() if name != "src"]


class MFragmentNode(ExternalReferenceNode):
    __slots__ = ()

    def __init__(self, src: str, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-fragment", src, attributes)


class MComponentNode(ExternalReferenceNode):
    __slots__ = ()

    def __init__(self, src: str, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-component", src, attributes)


class SlotReferenceNode(TagNode):
    """Base for tags that name a slot; unnamed slots use ``[default]``."""

    __slots__ = ()

    def __init__(self, tag_name: str, slot: str | None = None, attributes: Mapping[str, Any] | None = None):
        attrs = dict(attributes) if attributes else {}
        if slot is not None:
            attrs["slot"] = slot
        elif attrs.get("slot") is None:
            attrs["slot"] = DEFAULT_SLOT_NAME
        super().__init__(tag_name, attrs)

    @property
    def slot(self) -> str:
        return self.get_required_value_attribute("slot")

    @slot.setter
    def slot(self, value: str) -> None:
        self.set_attribute("slot", value)


class MContentNode(SlotReferenceNode):
    """Caller-side wrapper marking its children as content for one slot."""

    __slots__ = ()

    def __init__(self, slot: str | None = None, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-content", slot, attributes)


class MSlotNode(SlotReferenceNode):
    """Template-side insertion point, replaced by the matching content."""

    __slots__ = ()

    def __init__(self, slot: str | None = None, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-slot", slot, attributes)


class MImportNode(TagNode):
    """``<m-import src="..." as="alias" [fragment|component]>``.

    The kind defaults to fragment; a bare ``component`` attribute selects
    component.
    """

    __slots__ = ()

    def __init__(
        self,
        src: str,
        as_name: str,
        kind: ImportKind | None = None,
        attributes: Mapping[str, Any] | None = None,
    ):
        attrs = _with(attributes, src=src)
        attrs["as"] = as_name
        if kind is ImportKind.COMPONENT:
            attrs.pop("fragment", None)
            attrs["component"] = None
        elif kind is ImportKind.FRAGMENT:
            attrs.pop("component", None)
            attrs["fragment"] = None
        super().__init__("m-import", attrs)
        self.get_required_value_attribute("src")
        self.get_required_value_attribute("as")
        if "fragment" in self.attributes and "component" in self.attributes:
            raise TemplateSyntaxError(
                "<m-import> cannot be both a fragment and a component import",
                tag_name="m-import",
                code=ErrorCode.INVALID_ATTRIBUTE,
            )

    @property
    def src(self) -> str:
        return self.get_required_value_attribute("src")

    @property
    def as_name(self) -> str:
        return self.get_required_value_attribute("as")

    @property
    def kind(self) -> ImportKind:
        return ImportKind.COMPONENT if self.has_attribute("component") else ImportKind.FRAGMENT
