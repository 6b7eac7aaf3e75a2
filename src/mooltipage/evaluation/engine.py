"""Compile embedded template code into reusable ``EvalContent`` units.

Two inline syntaxes are recognized in text and attribute values:

``${ expr }``
    Template-literal style. Any number per string, mixed with plain text.
    The result is always a string; ``None`` renders as empty. ``\\${``
    escapes a literal ``${``.

``{{ expr }}``
    Handlebars style. Must be the whole value (surrounding whitespace is
    allowed) and yields the raw result object. ``\\{{`` escapes.

Embedded code is Python. ``$`` names the current scope (a ``ScopeView``)
and ``$$`` the ``EvalContext``; both are rewritten to plain identifiers
outside string literals before parsing. The replacement fields of
f-strings are code and are rewritten too.

Example:
    >>> content = parse_expression("Hello, ${ $.name }!")
    >>> content.invoke(EvalContext(pipeline_context, ScopeData({"name": "World"})))
    'Hello, World!'

Compile errors raise ``ExpressionSyntaxError``. Errors raised while the
code runs propagate unchanged.
"""

from __future__ import annotations

import ast
import builtins
import inspect
import re
import textwrap
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from mooltipage.environment.exceptions import ErrorCode, ExpressionSyntaxError
from mooltipage.nodes.scope import ScopeData, ScopeView

if TYPE_CHECKING:
    from mooltipage.evaluation.context import EvalContext

T = TypeVar("T")

_HANDLEBARS = re.compile(r"^\s*(?<!\\){{(.*)}}\s*$", re.DOTALL)
_TEMPLATE_START = re.compile(r"(?<!\\)\$\{")
_STRING_PREFIX = re.compile(r"(?:rb|br|fr|rf|[rbuf])(?=['\"])", re.IGNORECASE)

SCOPE_NAME = "_scope"
CONTEXT_NAME = "_context"

_SCRIPT_WRAPPER = f"def _script({SCOPE_NAME}, {CONTEXT_NAME}):\n    pass\n"


class EvalContent(Generic[T]):
    """A compiled, stateless unit of embedded code.

    Safe to cache and share: all per-use state arrives through the
    ``EvalContext`` passed to ``invoke``.

    Attributes:
        source: The template text this unit was compiled from.
    """

    __slots__ = ("_function", "source")

    def __init__(self, source: str, function: Callable[[ScopeView, EvalContext], T]):
        self.source = source
        self._function = function

    def __repr__(self) -> str:
        return f"EvalContent({self.source!r})"

    def invoke(self, context: EvalContext) -> T:
        return self._function(ScopeView(context.scope), context)


def _stringify(value: Any) -> str:
    return "" if value is None else str(value)


def _new_globals() -> dict[str, Any]:
    return {"__builtins__": builtins, "_str": _stringify}


# ---------------------------------------------------------------------------
# Classification and escapes
# ---------------------------------------------------------------------------


def is_template_string(text: str) -> bool:
    return _TEMPLATE_START.search(text) is not None


def is_handlebars_string(text: str) -> bool:
    return _HANDLEBARS.match(text) is not None


def is_expression_string(text: str) -> bool:
    """True if ``text`` contains unescaped embedded code."""
    return is_handlebars_string(text) or is_template_string(text)


def unescape_text(text: str) -> str:
    """Strip the backslash from escaped ``\\${`` and ``\\{{`` sequences."""
    return text.replace("\\${", "${").replace("\\{{", "{{")


# ---------------------------------------------------------------------------
# Source scanning
# ---------------------------------------------------------------------------


def _skip_string(code: str, start: int) -> int:
    """Index just past the string literal opening at ``start``."""
    quote = code[start]
    n = len(code)
    if code.startswith(quote * 3, start):
        terminator = quote * 3
        i = start + 3
    else:
        terminator = quote
        i = start + 1
    while i < n:
        if code[i] == "\\":
            i += 2
            continue
        if code.startswith(terminator, i):
            return i + len(terminator)
        if len(terminator) == 1 and code[i] == "\n":
            return i
        i += 1
    return n


def _find_closing_brace(text: str, start: int) -> int:
    """Index of the ``}`` balancing an opening brace just before ``start``, or -1."""
    depth = 1
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in "'\"":
            i = _skip_string(text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _rewrite_fstring(literal: str, prefix_len: int) -> str:
    """Rewrite sigils inside the replacement fields of an f-string literal."""
    quote = literal[prefix_len]
    width = 3 if literal.startswith(quote * 3, prefix_len) else 1
    body_start = prefix_len + width
    body_end = len(literal) - width
    if body_end < body_start or not literal.endswith(quote * width):
        # Unterminated; let the Python compiler report it.
        return literal

    body = literal[body_start:body_end]
    out: list[str] = []
    i = 0
    n = len(body)
    while i < n:
        if body.startswith("{{", i) or body.startswith("}}", i):
            out.append(body[i : i + 2])
            i += 2
        elif body[i] == "{":
            end = _find_closing_brace(body, i + 1)
            if end == -1:
                out.append(body[i:])
                break
            out.append("{" + rewrite_sigils(body[i + 1 : end]) + "}")
            i = end + 1
        else:
            out.append(body[i])
            i += 1
    return literal[:body_start] + "".join(out) + literal[body_end:]


def rewrite_sigils(code: str) -> str:
    """Replace ``$$`` / ``$`` with the context / scope parameter names.

    String literals and comments are copied through untouched, except for
    the replacement fields of f-strings, which are rewritten like any
    other code.

    Example:
        >>> rewrite_sigils("$.title + '$'")
        "_scope.title + '$'"
        >>> rewrite_sigils('f"{$.name}!"')
        'f"{_scope.name}!"'
    """
    out: list[str] = []
    i = 0
    n = len(code)
    while i < n:
        ch = code[i]
        prefix = _STRING_PREFIX.match(code, i) if ch.isalpha() else None
        if prefix is not None and (i == 0 or not _is_identifier_char(code[i - 1])):
            end = _skip_string(code, prefix.end())
            literal = code[i:end]
            if "f" in prefix.group().lower():
                literal = _rewrite_fstring(literal, len(prefix.group()))
            out.append(literal)
            i = end
        elif ch in "'\"":
            end = _skip_string(code, i)
            out.append(code[i:end])
            i = end
        elif ch == "#":
            end = code.find("\n", i)
            end = n if end == -1 else end
            out.append(code[i:end])
            i = end
        elif code.startswith("$$", i):
            out.append(CONTEXT_NAME)
            i += 2
        elif ch == "$":
            out.append(SCOPE_NAME)
            i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _is_identifier_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _find_expression_end(text: str, start: int) -> int:
    """Index of the ``}`` closing a ``${`` whose body begins at ``start``."""
    end = _find_closing_brace(text, start)
    if end == -1:
        raise ExpressionSyntaxError("Unterminated '${' in template text", text)
    return end


def split_template(text: str) -> list[tuple[bool, str]]:
    """Split template-literal text into ``(is_code, text)`` segments.

    Escaped openers (``\\${`` and ``\\{{``) become literal text without
    the backslash.
    """
    segments: list[tuple[bool, str]] = []
    literal: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        if text.startswith("\\${", i):
            literal.append("${")
            i += 3
        elif text.startswith("\\{{", i):
            literal.append("{{")
            i += 3
        elif text.startswith("${", i):
            end = _find_expression_end(text, i + 2)
            if literal:
                segments.append((False, "".join(literal)))
                literal = []
            segments.append((True, text[i + 2 : end]))
            i = end + 1
        else:
            literal.append(text[i])
            i += 1
    if literal:
        segments.append((False, "".join(literal)))
    return segments


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def _check_code(code: str, text: str) -> str:
    if not code.strip():
        raise ExpressionSyntaxError("Empty expression", text)
    return rewrite_sigils(code)


def _compile_lambda(body: str, text: str) -> Callable[..., Any]:
    source = f"lambda {SCOPE_NAME}, {CONTEXT_NAME}: {body}"
    try:
        code = compile(source, "<expression>", "eval")
    except SyntaxError as e:
        raise ExpressionSyntaxError("Invalid expression", text, cause=e) from e
    return eval(code, _new_globals())


def parse_expression(text: str) -> EvalContent[Any]:
    """Compile template text containing ``${}`` or ``{{}}`` code.

    Raises:
        ExpressionSyntaxError: ``text`` is plain text or the code is invalid.
    """
    match = _HANDLEBARS.match(text)
    if match is not None:
        code = _check_code(match.group(1), text)
        return EvalContent(text, _compile_lambda(f"(\n{code}\n)", text))

    if is_template_string(text):
        parts: list[str] = []
        for is_code, segment in split_template(text):
            if is_code:
                parts.append(f"_str((\n{_check_code(segment, text)}\n))")
            else:
                parts.append(repr(segment))
        return EvalContent(text, _compile_lambda(f"''.join(({', '.join(parts)},))", text))

    raise ExpressionSyntaxError(
        "Text does not contain an embedded expression",
        text,
        code=ErrorCode.PLAIN_TEXT_EXPRESSION,
    )


def _parse_block(text: str, filename: str) -> ast.Module:
    code = rewrite_sigils(textwrap.dedent(text).strip("\n"))
    try:
        return ast.parse(code or "pass", filename, "exec")
    except SyntaxError as e:
        raise ExpressionSyntaxError("Invalid script", text, cause=e, code=ErrorCode.INVALID_SCRIPT) from e


def _compile_block(tree: ast.Module, text: str, filename: str) -> Any:
    try:
        return compile(tree, filename, "exec")
    except SyntaxError as e:
        raise ExpressionSyntaxError("Invalid script", text, cause=e, code=ErrorCode.INVALID_SCRIPT) from e


def parse_script(text: str, filename: str = "<script>") -> EvalContent[Any]:
    """Compile a statement block run as a function body.

    The block may ``return`` a value; falling off the end returns None.
    """
    body = _parse_block(text, filename)
    wrapper = ast.parse(_SCRIPT_WRAPPER, filename, "exec")
    function_def = wrapper.body[0]
    assert isinstance(function_def, ast.FunctionDef)
    function_def.body = body.body or [ast.Pass()]
    ast.fix_missing_locations(wrapper)

    namespace = _new_globals()
    namespace["__name__"] = filename
    exec(_compile_block(wrapper, text, filename), namespace)
    return EvalContent(text, namespace["_script"])


def parse_component_function(text: str, filename: str = "<component>") -> EvalContent[Any]:
    """Compile a component script whose body returns the instance.

    The result may be a mapping, any object, or None for no bindings.
    """
    return parse_script(text, filename)


def parse_component_class(text: str, filename: str = "<component>") -> EvalContent[Any]:
    """Compile a component script that defines a class.

    The last top-level class in the script is instantiated once per
    invocation. Its constructor receives up to two positional arguments:
    the scope view and the ``EvalContext``.
    """
    tree = _parse_block(text, filename)
    class_names = [node.name for node in tree.body if isinstance(node, ast.ClassDef)]
    if not class_names:
        raise ExpressionSyntaxError(
            "Component script in class mode must define a class",
            text,
            code=ErrorCode.INVALID_SCRIPT,
        )
    class_name = class_names[-1]
    code = _compile_block(tree, text, filename)

    def instantiate(scope: ScopeView, context: EvalContext) -> Any:
        namespace = _new_globals()
        namespace.update({"__name__": filename, SCOPE_NAME: scope, CONTEXT_NAME: context})
        exec(code, namespace)
        return _construct(namespace[class_name], scope, context)

    return EvalContent(text, instantiate)


def _construct(cls: type, scope: ScopeView, context: EvalContext) -> Any:
    args = (scope, context)
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return cls()
    positional = [
        p
        for p in signature.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in signature.parameters.values()):
        return cls(*args)
    return cls(*args[: min(len(positional), len(args))])


def bind_object(obj: Any, scope: ScopeData) -> None:
    """Copy a component instance's public members into ``scope``.

    Mappings contribute their items; other objects their non-underscore
    attributes (methods included, bound to the instance).
    """
    if obj is None:
        return
    if isinstance(obj, Mapping):
        for key, value in obj.items():
            scope[str(key)] = value
        return
    for name in dir(obj):
        if not name.startswith("_"):
            scope[name] = getattr(obj, name)
