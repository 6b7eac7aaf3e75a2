"""Resource path helpers.

Resource paths are pipeline-relative and always use ``/`` as separator,
regardless of host platform; backslashes are accepted on input and
converted. ``@/`` anchors a path at the project root.
"""

from __future__ import annotations

import posixpath

ROOT_PREFIX = "@/"


def fix_path_separators(path: str) -> str:
    """Convert any backslash separators to forward slashes."""
    return path.replace("\\", "/")


def dirname(path: str) -> str:
    """Directory part of a resource path; ``.`` when there is none."""
    return posixpath.dirname(fix_path_separators(path)) or "."


def resolve_res_path(target_path: str, source_path: str | None = None) -> str:
    """Resolve ``target_path`` relative to ``source_path``.

    - ``@/x`` resolves from the project root even when a source is given.
    - Absolute targets are only normalized.
    - A source ending in ``/`` is a directory and used as-is; otherwise its
      directory is used.

    Example:
        >>> resolve_res_path("child.html", "pages/index.html")
        'pages/child.html'
        >>> resolve_res_path("@/child.html", "pages/index.html")
        'child.html'
    """
    target_path = fix_path_separators(target_path)

    if target_path.startswith(ROOT_PREFIX):
        target_path = target_path[len(ROOT_PREFIX):]
        source_path = None

    if not posixpath.isabs(target_path) and source_path is not None:
        source_path = fix_path_separators(source_path)
        if source_path.endswith("/"):
            source_dir = source_path[:-1]
        else:
            source_dir = posixpath.dirname(source_path)
        target_path = posixpath.join(source_dir, target_path)

    return posixpath.normpath(target_path)


def compute_relative_res_path(source_res_path: str, target_res_path: str) -> str:
    """Relative path from ``source_res_path`` to ``target_res_path``.

    If the source names a directory it MUST end with ``/``; otherwise it is
    treated as a file and its directory is used.

    Example:
        >>> compute_relative_res_path("pages/index.html", "resources/a.css")
        '../resources/a.css'
    """
    source_res_path = fix_path_separators(source_res_path)
    target_res_path = posixpath.normpath(fix_path_separators(target_res_path))

    if source_res_path.endswith("/"):
        source_dir = posixpath.normpath(source_res_path)
    else:
        source_dir = posixpath.dirname(posixpath.normpath(source_res_path)) or "."

    return posixpath.relpath(target_res_path, source_dir)
