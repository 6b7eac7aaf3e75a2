"""Embedded expression and script evaluation."""

from mooltipage.evaluation.context import EvalContext
from mooltipage.evaluation.engine import (
    EvalContent,
    bind_object,
    is_expression_string,
    is_handlebars_string,
    is_template_string,
    parse_component_class,
    parse_component_function,
    parse_expression,
    parse_script,
    rewrite_sigils,
    split_template,
    unescape_text,
)

__all__ = [
    "EvalContent",
    "EvalContext",
    "bind_object",
    "is_expression_string",
    "is_handlebars_string",
    "is_template_string",
    "parse_component_class",
    "parse_component_function",
    "parse_expression",
    "parse_script",
    "rewrite_sigils",
    "split_template",
    "unescape_text",
]
