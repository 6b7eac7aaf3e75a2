"""Name-case conversion between attribute and scope conventions."""

from __future__ import annotations

import re

_DASH_LETTER = re.compile(r"-([a-zA-Z0-9])")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")


def snake_to_camel(name: str) -> str:
    """Convert a dashed attribute name to a camelCase scope name.

    Example:
        >>> snake_to_camel("my-long-name")
        'myLongName'
    """
    if not name:
        raise ValueError("Invalid attribute name: must be at least one character long")
    return _DASH_LETTER.sub(lambda m: m.group(1).upper(), name)


def camel_to_snake(name: str) -> str:
    """Convert a camelCase scope name back to a dashed attribute name.

    Example:
        >>> camel_to_snake("myLongName")
        'my-long-name'
    """
    return _LOWER_UPPER.sub(r"\1-\2", name).lower()
