"""Shared enumerations for mooltipage."""

from __future__ import annotations

from enum import Enum


class MimeType(Enum):
    """Resource kinds exchanged with the pipeline interface."""

    HTML = "text/html"
    CSS = "text/css"
    JAVASCRIPT = "text/javascript"
    JSON = "application/json"
    TEXT = "text/plain"

    @classmethod
    def from_value(cls, value: str) -> MimeType:
        """Look up a MimeType by its MIME string (case-insensitive)."""
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown MIME type: '{value}'")


_EXTENSIONS = {
    MimeType.HTML: "html",
    MimeType.CSS: "css",
    MimeType.JAVASCRIPT: "js",
    MimeType.JSON: "json",
    MimeType.TEXT: "txt",
}


def get_resource_type_extension(mime_type: MimeType) -> str:
    """File extension (without the dot) for a resource kind; ``dat`` if unknown."""
    return _EXTENSIONS.get(mime_type, "dat")


class StyleBind(Enum):
    """Where a compiled stylesheet ends up in the page."""

    HEAD = "head"
    LINK = "link"


class ScriptMode(Enum):
    """How a component's backing script produces its instance."""

    CLASS = "class"
    FUNCTION = "function"


class AnchorResolve(Enum):
    """How a compiled anchor's href is rewritten."""

    NONE = "none"
    LOCAL = "local"
    ROOT = "root"
    BASE = "base"


class WhitespaceMode(Enum):
    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


class ImportKind(Enum):
    FRAGMENT = "fragment"
    COMPONENT = "component"
