"""DOM node model for mooltipage.

Nodes form a mutable tree with parent and sibling pointers and a chained
variable scope per node. Template-control tags (``<m-if>``, ``<m-for>``,
``<m-fragment>``...) get dedicated subclasses built by ``create_tag``.
"""

from mooltipage.nodes.base import (
    CDATANode,
    CommentNode,
    DocumentNode,
    Node,
    NodeType,
    NodeWithChildren,
    NodeWithText,
    ProcessingInstructionNode,
    TagNode,
    TextNode,
)
from mooltipage.nodes.control_flow import (
    ConditionalNode,
    MElseIfNode,
    MElseNode,
    MForInNode,
    MForNode,
    MForOfNode,
    MIfNode,
)
from mooltipage.nodes.factory import create_tag
from mooltipage.nodes.references import (
    DEFAULT_SLOT_NAME,
    ExternalReferenceNode,
    MComponentNode,
    MContentNode,
    MFragmentNode,
    MImportNode,
    MSlotNode,
    SlotReferenceNode,
)
from mooltipage.nodes.resources import (
    CompiledAnchorNode,
    CompiledStyleNode,
    ExternalScriptNode,
    ExternalStyleNode,
    InternalScriptNode,
    InternalStyleNode,
    MScriptNode,
    MWhitespaceNode,
    ScriptNode,
    StyleNode,
)
from mooltipage.nodes.scope import ScopeData, ScopeView
from mooltipage.nodes.variables import DataReference, MDataNode, MScopeNode, MVarNode

__all__ = [
    "DEFAULT_SLOT_NAME",
    "CDATANode",
    "CommentNode",
    "CompiledAnchorNode",
    "CompiledStyleNode",
    "ConditionalNode",
    "DataReference",
    "DocumentNode",
    "ExternalReferenceNode",
    "ExternalScriptNode",
    "ExternalStyleNode",
    "InternalScriptNode",
    "InternalStyleNode",
    "MComponentNode",
    "MContentNode",
    "MDataNode",
    "MElseIfNode",
    "MElseNode",
    "MForInNode",
    "MForNode",
    "MForOfNode",
    "MFragmentNode",
    "MIfNode",
    "MImportNode",
    "MScopeNode",
    "MScriptNode",
    "MSlotNode",
    "MVarNode",
    "MWhitespaceNode",
    "Node",
    "NodeType",
    "NodeWithChildren",
    "NodeWithText",
    "ProcessingInstructionNode",
    "ScopeData",
    "ScopeView",
    "ScriptNode",
    "SlotReferenceNode",
    "StyleNode",
    "TagNode",
    "TextNode",
    "create_tag",
]
