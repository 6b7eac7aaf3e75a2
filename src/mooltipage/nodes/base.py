"""Core DOM node types.

The tree keeps two representations of sibling order in lock-step: the
parent's ``children`` list and each node's ``prev_sibling`` /
``next_sibling`` pointers. Every mutation goes through the private
``_insert_child`` / ``_detach`` helpers so both always agree.

Ownership is exclusive: attaching a node detaches it from its previous
parent first. A ``DocumentNode`` is always a root and can never be
attached.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from enum import Enum
from typing import Any

from mooltipage.environment.exceptions import ErrorCode, TemplateSyntaxError
from mooltipage.nodes.scope import ScopeData

CloneCallback = Callable[["Node", "Node"], None]
NodeMatcher = Callable[["Node"], bool]
TagMatcher = Callable[["TagNode"], bool]


class NodeType(Enum):
    TAG = "tag"
    TEXT = "text"
    COMMENT = "comment"
    CDATA = "cdata"
    PROCESSING_INSTRUCTION = "processing_instruction"
    DOCUMENT = "document"


class Node:
    """Base class for all DOM nodes.

    Attributes:
        node_type: Discriminator for the concrete node kind
        parent: Owning node, or None when detached
        prev_sibling: Previous node in the parent's child list
        next_sibling: Next node in the parent's child list
        scope: Local variable bindings, chained beneath the parent's scope
        markers: Processing flags set by compiler modules
    """

    __slots__ = ("markers", "next_sibling", "node_type", "parent", "prev_sibling", "scope")

    def __init__(self, node_type: NodeType):
        self.node_type = node_type
        self.parent: NodeWithChildren | None = None
        self.prev_sibling: Node | None = None
        self.next_sibling: Node | None = None
        self.scope = ScopeData()
        self.markers: set[str] = set()

    # -- structure ---------------------------------------------------------

    def remove_self(self, keep_children: bool = False) -> None:
        """Detach this node from its parent.

        With ``keep_children``, the node's children are promoted into its
        former position first.
        """
        if keep_children and isinstance(self, NodeWithChildren):
            self.replace_self(list(self.children))
        else:
            _detach(self)

    def replace_self(self, replacements: Iterable[Node]) -> None:
        """Insert ``replacements`` as successive siblings, then detach self."""
        anchor: Node = self
        if self.parent is not None:
            for node in list(replacements):
                anchor.append_sibling(node)
                anchor = node
        _detach(self)

    def append_sibling(self, node: Node) -> None:
        """Insert ``node`` immediately after this node."""
        if node is self:
            return
        parent = self._require_parent()
        _detach(node)
        _insert_child(parent, node, _index_of(parent.children, self) + 1)

    def prepend_sibling(self, node: Node) -> None:
        """Insert ``node`` immediately before this node."""
        if node is self:
            return
        parent = self._require_parent()
        _detach(node)
        _insert_child(parent, node, _index_of(parent.children, self))

    def _require_parent(self) -> NodeWithChildren:
        if self.parent is None:
            raise ValueError(f"{self!r} has no parent")
        return self.parent

    @property
    def prev_sibling_tag(self) -> TagNode | None:
        node = self.prev_sibling
        while node is not None and not isinstance(node, TagNode):
            node = node.prev_sibling
        return node

    @property
    def next_sibling_tag(self) -> TagNode | None:
        node = self.next_sibling
        while node is not None and not isinstance(node, TagNode):
            node = node.next_sibling
        return node

    # -- copying / output --------------------------------------------------

    def clone(self, deep: bool = True, callback: CloneCallback | None = None) -> Node:
        raise NotImplementedError

    def _finish_clone(self, new: Node, callback: CloneCallback | None) -> None:
        new.scope = self.scope.copy_local()
        new.markers = set(self.markers)
        if callback is not None:
            callback(self, new)

    def to_html(self) -> str:
        from mooltipage.formatting.serializer import serialize

        return serialize(self)


class NodeWithChildren(Node):
    """A node that owns an ordered list of child nodes."""

    __slots__ = ("children",)

    def __init__(self, node_type: NodeType):
        super().__init__(node_type)
        self.children: list[Node] = []

    @property
    def first_child(self) -> Node | None:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> Node | None:
        return self.children[-1] if self.children else None

    def append_child(self, child: Node) -> None:
        _detach(child)
        _insert_child(self, child, len(self.children))

    def append_children(self, children: Iterable[Node]) -> None:
        for child in list(children):
            self.append_child(child)

    def prepend_child(self, child: Node) -> None:
        _detach(child)
        _insert_child(self, child, 0)

    def clear(self) -> None:
        """Detach all children."""
        for child in list(self.children):
            _detach(child)

    def create_dom_from_children(self) -> DocumentNode:
        """Move this node's children into a new DocumentNode."""
        dom = DocumentNode()
        dom.append_children(self.children)
        return dom

    # -- queries -----------------------------------------------------------

    def walk(self, deep: bool = True) -> Iterator[Node]:
        """Yield descendants in document (pre-) order."""
        for child in list(self.children):
            yield child
            if deep and isinstance(child, NodeWithChildren):
                yield from child.walk(deep)

    def find_child_node(self, matcher: NodeMatcher, deep: bool = True) -> Node | None:
        for node in self.walk(deep):
            if matcher(node):
                return node
        return None

    def find_child_nodes(self, matcher: NodeMatcher, deep: bool = True) -> list[Node]:
        return [node for node in self.walk(deep) if matcher(node)]

    def find_child_tag(self, matcher: TagMatcher, deep: bool = True) -> TagNode | None:
        for node in self.walk(deep):
            if isinstance(node, TagNode) and matcher(node):
                return node
        return None

    def find_child_tags(self, matcher: TagMatcher, deep: bool = True) -> list[TagNode]:
        return [node for node in self.walk(deep) if isinstance(node, TagNode) and matcher(node)]

    def find_child_tag_by_tag_name(self, tag_name: str, deep: bool = True) -> TagNode | None:
        tag_name = tag_name.lower()
        return self.find_child_tag(lambda tag: tag.tag_name == tag_name, deep)

    def find_child_tags_by_tag_name(self, tag_name: str, deep: bool = True) -> list[TagNode]:
        tag_name = tag_name.lower()
        return self.find_child_tags(lambda tag: tag.tag_name == tag_name, deep)

    def find_child_nodes_by_node_type(self, node_type: NodeType, deep: bool = True) -> list[Node]:
        return self.find_child_nodes(lambda node: node.node_type is node_type, deep)

    def get_child_tags(self) -> list[TagNode]:
        return [child for child in self.children if isinstance(child, TagNode)]

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(node.text for node in self.walk() if isinstance(node, TextNode))

    def _clone_children_into(self, new: NodeWithChildren, callback: CloneCallback | None) -> None:
        for child in self.children:
            new.append_child(child.clone(True, callback))


class TagNode(NodeWithChildren):
    """An element. Attribute values may hold any object once evaluated.

    Until an attribute's embedded expression is compiled its value is the
    raw string from the markup; afterwards it is whatever the expression
    produced (number, bool, list...) until serialization stringifies it.
    ``None`` means the attribute is present without a value.
    """

    __slots__ = ("attributes", "tag_name")

    def __init__(self, tag_name: str, attributes: Mapping[str, Any] | None = None):
        super().__init__(NodeType.TAG)
        self.tag_name = tag_name.lower()
        self.attributes: dict[str, Any] = dict(attributes) if attributes else {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.tag_name}>"

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_attribute(self, name: str) -> str | None:
        """String view of an attribute; None if absent or valueless."""
        value = self.attributes.get(name)
        return None if value is None else str(value)

    def get_raw_attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str | None) -> None:
        self.attributes[name] = value

    def set_raw_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def delete_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def get_optional_value_attribute(self, name: str) -> str | None:
        return self.get_attribute(name)

    def get_required_value_attribute(self, name: str) -> str:
        value = self.get_attribute(name)
        if value is None:
            raise TemplateSyntaxError(
                f"<{self.tag_name}> is missing required attribute '{name}'",
                tag_name=self.tag_name,
                code=ErrorCode.MISSING_ATTRIBUTE,
            )
        return value

    def clone(self, deep: bool = True, callback: CloneCallback | None = None) -> TagNode:
        # Bypass subclass constructors: their validation already passed.
        new = type(self).__new__(type(self))
        TagNode.__init__(new, self.tag_name, self.attributes)
        self._finish_clone(new, callback)
        if deep:
            self._clone_children_into(new, callback)
        return new


class NodeWithText(Node):
    """A node carrying a string payload (text or comment)."""

    __slots__ = ("is_whitespace_sensitive", "text")

    def __init__(self, node_type: NodeType, text: str = "", is_whitespace_sensitive: bool = False):
        super().__init__(node_type)
        self.text = text
        self.is_whitespace_sensitive = is_whitespace_sensitive

    @property
    def has_content(self) -> bool:
        """True unless the text is whitespace-only and may be dropped."""
        return self.is_whitespace_sensitive or bool(self.text.strip())

    @property
    def text_content(self) -> str:
        """Text as it should appear after formatting."""
        return self.text if self.is_whitespace_sensitive else self.text.strip()


class TextNode(NodeWithText):
    __slots__ = ()

    def __init__(self, text: str = "", is_whitespace_sensitive: bool = False):
        super().__init__(NodeType.TEXT, text, is_whitespace_sensitive)

    def __repr__(self) -> str:
        return f"<TextNode {self.text[:20]!r}>"

    def clone(self, deep: bool = True, callback: CloneCallback | None = None) -> TextNode:
        new = TextNode(self.text, self.is_whitespace_sensitive)
        self._finish_clone(new, callback)
        return new


class CommentNode(NodeWithText):
    __slots__ = ()

    def __init__(self, text: str = ""):
        super().__init__(NodeType.COMMENT, text)

    def clone(self, deep: bool = True, callback: CloneCallback | None = None) -> CommentNode:
        new = CommentNode(self.text)
        new.is_whitespace_sensitive = self.is_whitespace_sensitive
        self._finish_clone(new, callback)
        return new


class CDATANode(NodeWithChildren):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(NodeType.CDATA)

    def clone(self, deep: bool = True, callback: CloneCallback | None = None) -> CDATANode:
        new = CDATANode()
        self._finish_clone(new, callback)
        if deep:
            self._clone_children_into(new, callback)
        return new


class ProcessingInstructionNode(Node):
    """A processing instruction or declaration such as ``<!DOCTYPE html>``."""

    __slots__ = ("data", "name")

    def __init__(self, name: str = "", data: str = ""):
        super().__init__(NodeType.PROCESSING_INSTRUCTION)
        self.name = name
        self.data = data

    def clone(self, deep: bool = True, callback: CloneCallback | None = None) -> ProcessingInstructionNode:
        new = ProcessingInstructionNode(self.name, self.data)
        self._finish_clone(new, callback)
        return new


class DocumentNode(NodeWithChildren):
    """Root of a DOM tree. Can never be attached to another node."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(NodeType.DOCUMENT)

    def __repr__(self) -> str:
        return f"<DocumentNode children={len(self.children)}>"

    def set_root_scope(self, root_scope: ScopeData | Mapping[str, Any] | None) -> None:
        """Inherit bindings from ``root_scope`` for the whole tree."""
        if root_scope is None or isinstance(root_scope, ScopeData):
            self.scope.parent = root_scope
        else:
            self.scope.parent = ScopeData(root_scope)

    def clone(self, deep: bool = True, callback: CloneCallback | None = None) -> DocumentNode:
        new = DocumentNode()
        self._finish_clone(new, callback)
        if deep:
            self._clone_children_into(new, callback)
        return new


# ---------------------------------------------------------------------------
# Tree mutation primitives
# ---------------------------------------------------------------------------


def _index_of(children: list[Node], node: Node) -> int:
    for i, child in enumerate(children):
        if child is node:
            return i
    raise ValueError(f"{node!r} is not a child of its parent")


def _detach(node: Node) -> None:
    parent = node.parent
    if parent is not None:
        del parent.children[_index_of(parent.children, node)]
    prev, nxt = node.prev_sibling, node.next_sibling
    if prev is not None:
        prev.next_sibling = nxt
    if nxt is not None:
        nxt.prev_sibling = prev
    node.parent = None
    node.prev_sibling = None
    node.next_sibling = None
    node.scope.parent = None


def _insert_child(parent: NodeWithChildren, child: Node, index: int) -> None:
    if isinstance(child, DocumentNode):
        raise TypeError("A DocumentNode cannot be the child of another node")

    children = parent.children
    children.insert(index, child)

    prev = children[index - 1] if index > 0 else None
    nxt = children[index + 1] if index + 1 < len(children) else None
    child.prev_sibling = prev
    child.next_sibling = nxt
    if prev is not None:
        prev.next_sibling = child
    if nxt is not None:
        nxt.prev_sibling = child

    child.parent = parent
    child.scope.parent = parent.scope
