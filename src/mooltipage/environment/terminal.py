"""ANSI styling for compiler diagnostics.

Diagnostics are styled by role (error code, resource location, source
line...) rather than by raw color, so the palette lives in one table.
Styling is decided once at import: ``FORCE_COLOR`` turns it on,
``NO_COLOR`` turns it off, otherwise it follows whether stdout is a TTY.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

ColorName = Literal["reset", "bold", "dim", "red", "green", "yellow", "cyan", "bright_red"]

_CODES: dict[str, str] = {
    "reset": "0",
    "bold": "1",
    "dim": "2",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "cyan": "36",
    "bright_red": "91",
}

Role = Literal["code", "location", "lineno", "error_line", "hint", "gutter"]

_PALETTE: dict[Role, tuple[ColorName, ...]] = {
    "code": ("bright_red", "bold"),
    "location": ("cyan",),
    "lineno": ("yellow",),
    "error_line": ("bright_red",),
    "hint": ("green",),
    "gutter": ("dim",),
}

_SGR_SEQUENCE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    return _USE_COLORS


def _sgr(color: str) -> str:
    code = _CODES.get(color)
    return f"\033[{code}m" if code else ""


def colorize(text: str, *colors: ColorName) -> str:
    """Wrap ``text`` in the named SGR codes.

    Unknown names contribute nothing; with no usable code, or with styling
    off, the text comes back as-is.
    """
    if not _USE_COLORS:
        return text
    prefix = "".join(_sgr(color) for color in colors)
    if not prefix:
        return text
    return f"{prefix}{text}{_sgr('reset')}"


def styled(role: Role, text: str) -> str:
    """Style ``text`` for a diagnostic role."""
    return colorize(text, *_PALETTE[role])


def strip_colors(text: str) -> str:
    return _SGR_SEQUENCE.sub("", text)


def error_code(text: str) -> str:
    return styled("code", text)


def location(text: str) -> str:
    return styled("location", text)


def error_line(text: str) -> str:
    return styled("error_line", text)


def hint(text: str) -> str:
    return styled("hint", text)


def dim_text(text: str) -> str:
    return styled("gutter", text)


def format_error_header(code: str | None, message: str) -> str:
    """``M-RES-001: message``, or just the message when there is no code."""
    return f"{error_code(code)}: {message}" if code else message


def format_source_line(lineno: int, content: str, is_error: bool = False) -> str:
    """One numbered line of a source snippet; the failing line gets a ``>``."""
    gutter = styled("lineno", f"{'>' if is_error else ' '}{lineno:>3}")
    body = error_line(content) if is_error else dim_text(content)
    return f"{gutter} | {body}"
