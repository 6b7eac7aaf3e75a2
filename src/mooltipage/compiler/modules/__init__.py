"""One compiler module per language feature, in walk order."""

from mooltipage.compiler.modules.anchors import AnchorModule, resolve_anchor_href
from mooltipage.compiler.modules.deduplicate import DeduplicateModule, normalize_style
from mooltipage.compiler.modules.expressions import EXPRESSION_COMPILED, ExpressionModule
from mooltipage.compiler.modules.imports import ImportModule
from mooltipage.compiler.modules.logic import DomLogicModule, iterate_for_values
from mooltipage.compiler.modules.references import FragmentModule, extract_slot_contents
from mooltipage.compiler.modules.scripts import ScriptModule
from mooltipage.compiler.modules.slots import SlotModule
from mooltipage.compiler.modules.styles import StyleModule
from mooltipage.compiler.modules.variables import VarModule, bind_attributes, target_scope
from mooltipage.compiler.modules.whitespace import WHITESPACE_PROCESSED, WhitespaceModule, apply_whitespace_mode

__all__ = [
    "EXPRESSION_COMPILED",
    "WHITESPACE_PROCESSED",
    "AnchorModule",
    "DeduplicateModule",
    "DomLogicModule",
    "ExpressionModule",
    "FragmentModule",
    "ImportModule",
    "ScriptModule",
    "SlotModule",
    "StyleModule",
    "VarModule",
    "WhitespaceModule",
    "apply_whitespace_mode",
    "bind_attributes",
    "extract_slot_contents",
    "iterate_for_values",
    "normalize_style",
    "resolve_anchor_href",
    "target_scope",
]
