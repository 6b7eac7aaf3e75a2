"""Exceptions for the mooltipage compiler.

Exception Hierarchy:
MooltipageError (base)
├── TemplateSyntaxError        # Malformed template-control markup
│   └── ExpressionSyntaxError  # Embedded expression/script fails to compile
├── ResourceNotFoundError      # Fragment, component or asset path unresolvable
├── UndefinedImportError       # Lookup of an alias no <m-import> defines
└── PipelineCacheError         # Cache read for a key that was never stored

Runtime errors raised by embedded expressions or scripts are NOT wrapped:
they propagate unchanged to the ``compile_page()`` / ``compile_fragment()``
caller, so the original traceback points at user code.

Example:
    ```
    M-PAR-001: <m-if> is missing required attribute '?'
      --> pages/index.html:12
       |
     12 | <m-if>
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mooltipage.environment import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for compiler errors.

    Format: M-{CATEGORY}-{NUMBER}
    Categories: PAR (markup structure), EXP (expressions), RES (resources),
    PIP (pipeline contract)
    """

    # Markup structure errors (M-PAR-xxx)
    MISSING_ATTRIBUTE = "M-PAR-001"
    INVALID_ATTRIBUTE = "M-PAR-002"
    UNEXPECTED_CLOSING_TAG = "M-PAR-003"
    INVALID_SECTION = "M-PAR-004"

    # Expression errors (M-EXP-xxx)
    INVALID_EXPRESSION = "M-EXP-001"
    PLAIN_TEXT_EXPRESSION = "M-EXP-002"
    INVALID_SCRIPT = "M-EXP-003"

    # Resource errors (M-RES-xxx)
    RESOURCE_NOT_FOUND = "M-RES-001"

    # Pipeline contract errors (M-PIP-xxx)
    CACHE_MISS = "M-PIP-001"
    UNDEFINED_IMPORT = "M-PIP-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'markup', 'expression', 'resource')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "markup",
            "EXP": "expression",
            "RES": "resource",
            "PIP": "pipeline",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Source lines around an error, for display in diagnostics.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            parts.append(terminal.format_source_line(lineno, content, is_error=lineno == self.error_line))
        if self.column is not None:
            caret = " " * self.column + "^"
            parts.append(f"{terminal.dim_text('   |')} {terminal.error_line(caret)}")
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from source text.

    Args:
        source: Full source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for caret pointer.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


class MooltipageError(Exception):
    """Base exception for all compiler errors.

    Enables broad handling at the edge of a build:

        >>> try:
        ...     pipeline.compile_page("index.html")
        ... except MooltipageError as e:
        ...     print(e.format_compact())

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format the error as a short, traceback-free diagnostic."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = terminal.format_error_header(self.code.value, header)
        return header


class TemplateSyntaxError(MooltipageError):
    """Malformed template-control markup.

    Raised while building the node tree, for example when a conditional
    has no test expression or a closing tag has no matching opener.
    """

    code: ErrorCode | None = ErrorCode.MISSING_ATTRIBUTE

    def __init__(
        self,
        message: str,
        *,
        tag_name: str | None = None,
        res_path: str | None = None,
        lineno: int | None = None,
        source: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.tag_name = tag_name
        self.res_path = res_path
        self.lineno = lineno
        self.source = source
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    def _location(self) -> str:
        loc = self.res_path or "<template>"
        if self.lineno:
            loc += f":{self.lineno}"
        return loc

    def _format_message(self) -> str:
        header = f"Syntax Error: {self.message}"
        if self.res_path or self.lineno:
            header += f"\n  --> {self._location()}"
        if self.source and self.lineno:
            header += "\n" + build_source_snippet(self.source, self.lineno, context_lines=0).format()
        return header

    def format_compact(self) -> str:
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        if self.res_path or self.lineno:
            parts.append(f"  --> {terminal.location(self._location())}")
        if self.source and self.lineno:
            parts.append(build_source_snippet(self.source, self.lineno, context_lines=0).format())
        return "\n".join(parts)


class ExpressionSyntaxError(TemplateSyntaxError):
    """Embedded expression or script text could not be compiled.

    Attributes:
        expression: The offending template text, verbatim.
        cause: The underlying ``SyntaxError`` when Python rejected the code.
    """

    code: ErrorCode | None = ErrorCode.INVALID_EXPRESSION

    def __init__(
        self,
        message: str,
        expression: str,
        *,
        cause: SyntaxError | None = None,
        code: ErrorCode | None = None,
    ):
        self.expression = expression
        self.cause = cause
        lineno = cause.lineno if cause is not None else None
        super().__init__(message, lineno=lineno, source=expression, code=code)

    def _format_message(self) -> str:
        msg = f"Syntax Error: {self.message}\n  Expression: {self.expression}"
        if self.cause is not None:
            msg += f"\n  Cause: {self.cause.msg}"
        return msg

    def format_compact(self) -> str:
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        parts.append(f"  Expression: {self.expression}")
        if self.cause is not None:
            parts.append(f"  {terminal.hint('Cause:')} {self.cause.msg}")
        return "\n".join(parts)


class ResourceNotFoundError(MooltipageError):
    """A fragment, component or asset path could not be read.

    Example:
            >>> pipeline.compile_page("missing.html")
        ResourceNotFoundError: Resource 'missing.html' not found in: src/

    """

    code: ErrorCode | None = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, message: str, res_path: str | None = None):
        self.res_path = res_path
        super().__init__(message)


class PipelineCacheError(MooltipageError, LookupError):
    """A cache read for a key that was never stored.

    This is a programming error in the caller: every ``get_*`` on the
    pipeline cache must be guarded by the matching ``has_*``.
    """

    code: ErrorCode | None = ErrorCode.CACHE_MISS


class UndefinedImportError(MooltipageError, LookupError):
    """Lookup of an ``<m-import>`` alias that no enclosing node defines.

    Like ``PipelineCacheError``, a caller contract violation: guard every
    ``get_import()`` with ``has_import()``.
    """

    code: ErrorCode | None = ErrorCode.UNDEFINED_IMPORT
