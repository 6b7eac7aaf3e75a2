"""Content addressing for generated resources."""

from __future__ import annotations

import base64
import hashlib
import posixpath

from mooltipage._types import MimeType, get_resource_type_extension

RESOURCE_DIRECTORY = "resources"


def hash_content(content: str) -> str:
    """URL- and filename-safe MD5 digest of ``content``.

    Example:
        >>> hash_content("")
        '1B2M2Y8AsgTpgAmY7PhCfg'
    """
    digest = hashlib.md5(content.encode("utf-8"), usedforsecurity=False).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def create_res_path(mime_type: MimeType, content: str) -> str:
    """Output path for a generated resource: ``resources/<hash>.<ext>``."""
    return posixpath.join(RESOURCE_DIRECTORY, f"{hash_content(content)}.{get_resource_type_extension(mime_type)}")
