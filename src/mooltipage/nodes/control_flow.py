"""Structural logic tags: conditionals and loops.

The test and source expressions live in attributes (``?``, ``of``, ``in``)
so the expression pass evaluates them in place before the logic pass
reads them back as raw values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mooltipage.nodes.base import TagNode


def _required(attributes: Mapping[str, Any] | None, **values: Any) -> dict[str, Any]:
    merged = dict(attributes) if attributes else {}
    merged.update(values)
    return merged


class ConditionalNode(TagNode):
    """Base for ``<m-if>``, ``<m-else-if>`` and ``<m-else>``."""

    __slots__ = ()

    @property
    def condition(self) -> Any:
        return self.get_raw_attribute("?")

    @condition.setter
    def condition(self, value: Any) -> None:
        self.set_raw_attribute("?", value)

    @property
    def is_truthy(self) -> bool:
        return bool(self.condition)

    @property
    def prev_conditional(self) -> ConditionalNode | None:
        return None

    @property
    def next_conditional(self) -> ConditionalNode | None:
        return None

    def _prev_chain_link(self) -> ConditionalNode | None:
        prev = self.prev_sibling_tag
        if isinstance(prev, (MIfNode, MElseIfNode)):
            return prev
        return None

    def _next_chain_link(self) -> ConditionalNode | None:
        nxt = self.next_sibling_tag
        if isinstance(nxt, (MElseIfNode, MElseNode)):
            return nxt
        return None


class MIfNode(ConditionalNode):
    __slots__ = ()

    def __init__(self, condition: Any, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-if", _required(attributes, **{"?": condition}))
        self.get_required_value_attribute("?")

    @property
    def next_conditional(self) -> ConditionalNode | None:
        return self._next_chain_link()


class MElseIfNode(ConditionalNode):
    """Renders only when its own test holds and every earlier branch failed."""

    __slots__ = ()

    def __init__(self, condition: Any, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-else-if", _required(attributes, **{"?": condition}))
        self.get_required_value_attribute("?")

    @property
    def prev_conditional(self) -> ConditionalNode | None:
        return self._prev_chain_link()

    @property
    def next_conditional(self) -> ConditionalNode | None:
        return self._next_chain_link()


class MElseNode(ConditionalNode):
    __slots__ = ()

    def __init__(self, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-else", attributes)

    @property
    def condition(self) -> Any:
        return True

    @property
    def prev_conditional(self) -> ConditionalNode | None:
        return self._prev_chain_link()


class MForNode(TagNode):
    """Base for ``<m-for>``.

    Attributes:
        expression_attr_name: ``of`` for value iteration, ``in`` for keys.
    """

    __slots__ = ()

    expression_attr_name = ""

    def __init__(
        self,
        expression: Any,
        var_name: str,
        index_name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ):
        attrs = _required(attributes, var=var_name)
        attrs[self.expression_attr_name] = expression
        if index_name is not None:
            attrs["index"] = index_name
        super().__init__("m-for", attrs)
        self.get_required_value_attribute(self.expression_attr_name)
        self.get_required_value_attribute("var")

    @property
    def expression(self) -> Any:
        return self.get_raw_attribute(self.expression_attr_name)

    @property
    def var_name(self) -> str:
        return self.get_required_value_attribute("var")

    @property
    def index_name(self) -> str | None:
        return self.get_optional_value_attribute("index")


class MForOfNode(MForNode):
    """``<m-for of="{{ items }}" var="item" [index="i"]>``: iterate values."""

    __slots__ = ()

    expression_attr_name = "of"


class MForInNode(MForNode):
    """``<m-for in="{{ mapping }}" var="key" [index="i"]>``: iterate keys."""

    __slots__ = ()

    expression_attr_name = "in"
