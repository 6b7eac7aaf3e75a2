"""Map parsed tag names and attributes onto specialized node classes."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from mooltipage.environment.exceptions import ErrorCode, TemplateSyntaxError
from mooltipage.nodes.base import TagNode
from mooltipage.nodes.control_flow import MElseIfNode, MElseNode, MForInNode, MForOfNode, MIfNode
from mooltipage.nodes.references import MComponentNode, MContentNode, MFragmentNode, MImportNode, MSlotNode
from mooltipage.nodes.resources import (
    CompiledAnchorNode,
    ExternalScriptNode,
    ExternalStyleNode,
    InternalScriptNode,
    InternalStyleNode,
    MScriptNode,
    MWhitespaceNode,
    ScriptNode,
    StyleNode,
)
from mooltipage.nodes.variables import MDataNode, MScopeNode, MVarNode


def _missing(tag_name: str, name: str) -> TemplateSyntaxError:
    return TemplateSyntaxError(
        f"<{tag_name}> is missing required attribute '{name}'",
        tag_name=tag_name,
        code=ErrorCode.MISSING_ATTRIBUTE,
    )


def _require(tag_name: str, attrs: dict[str, Any], name: str) -> Any:
    if attrs.get(name) is None:
        raise _missing(tag_name, name)
    return attrs[name]


def _create_for(attrs: dict[str, Any]) -> TagNode:
    var_name = _require("m-for", attrs, "var")
    index_name = attrs.get("index")
    if "of" in attrs:
        return MForOfNode(_require("m-for", attrs, "of"), var_name, index_name, attrs)
    if "in" in attrs:
        return MForInNode(_require("m-for", attrs, "in"), var_name, index_name, attrs)
    raise _missing("m-for", "of' or 'in")


def _create_script(attrs: dict[str, Any]) -> TagNode:
    if "compiled" not in attrs:
        return ScriptNode(False, attrs)
    if "src" in attrs:
        return ExternalScriptNode(_require("script", attrs, "src"), attrs)
    return InternalScriptNode(attrs)


def _create_style(attrs: dict[str, Any]) -> TagNode:
    if "compiled" not in attrs:
        return StyleNode(False, attrs)
    if "src" in attrs:
        return ExternalStyleNode(_require("style", attrs, "src"), attributes=attrs)
    return InternalStyleNode(attributes=attrs)


def _create_anchor(attrs: dict[str, Any]) -> TagNode:
    if "compiled" not in attrs:
        return TagNode("a", attrs)
    return CompiledAnchorNode(_require("a", attrs, "href"), attributes=attrs)


def _create_data(attrs: dict[str, Any]) -> TagNode:
    mime_type = _require("m-data", attrs, "type")
    references = {k: v for k, v in attrs.items() if k != "type"}
    return MDataNode(mime_type, references)


_FACTORIES: dict[str, Callable[[dict[str, Any]], TagNode]] = {
    "m-fragment": lambda a: MFragmentNode(_require("m-fragment", a, "src"), a),
    "m-component": lambda a: MComponentNode(_require("m-component", a, "src"), a),
    "m-content": lambda a: MContentNode(attributes=a),
    "m-slot": lambda a: MSlotNode(attributes=a),
    "m-var": MVarNode,
    "m-scope": MScopeNode,
    "m-data": _create_data,
    "m-import": lambda a: MImportNode(_require("m-import", a, "src"), _require("m-import", a, "as"), attributes=a),
    "m-if": lambda a: MIfNode(_require("m-if", a, "?"), a),
    "m-else-if": lambda a: MElseIfNode(_require("m-else-if", a, "?"), a),
    "m-else": MElseNode,
    "m-for": _create_for,
    "m-script": lambda a: MScriptNode(_require("m-script", a, "src"), a),
    "m-whitespace": lambda a: MWhitespaceNode(attributes=a),
    "script": _create_script,
    "style": _create_style,
    "a": _create_anchor,
}


def create_tag(tag_name: str, attributes: Mapping[str, Any] | None = None) -> TagNode:
    """Build the node class matching ``tag_name`` and its attributes.

    Unrecognized tags become plain ``TagNode`` instances.

    Raises:
        TemplateSyntaxError: A template-control tag lacks a required attribute.
    """
    tag_name = tag_name.lower()
    attrs = dict(attributes) if attributes else {}
    factory = _FACTORIES.get(tag_name)
    if factory is None:
        return TagNode(tag_name, attrs)
    return factory(attrs)
