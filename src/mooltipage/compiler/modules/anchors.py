"""Rewrite ``<a compiled href="..." resolve="...">`` hrefs.

Resolve modes:

``none``
    Leave the href as written.
``local``
    Relative to the directory of the template containing the anchor.
``root``
    Relative to the directory of the page being built.
``base``
    Relative to the project root, expressed as a path from the page
    being built (``../../`` per directory level).

Example:
    A page at ``blog/2020/post.html`` including a fragment with
    ``<a compiled href="index.html" resolve="base">`` gets
    ``href="../../index.html"``.
"""

from __future__ import annotations

import posixpath
import re
from typing import TYPE_CHECKING

from mooltipage._types import AnchorResolve
from mooltipage.nodes import CompiledAnchorNode
from mooltipage.utils.paths import dirname

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext
    from mooltipage.pipeline.context import FragmentContext

_SEGMENT = re.compile(r"[^/]+")


class AnchorModule:
    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        if not isinstance(node, CompiledAnchorNode):
            return

        node.href = resolve_anchor_href(node.href, node.resolve, context.pipeline_context.fragment_context)
        anchor = node.to_uncompiled()
        anchor.markers.update(node.markers)
        node.replace_self([anchor])
        context.set_deleted()


def resolve_anchor_href(href: str, resolve: AnchorResolve, fragment_context: FragmentContext) -> str:
    if resolve is AnchorResolve.LOCAL:
        return f"{dirname(fragment_context.fragment_res_path)}/{href}"
    if resolve is AnchorResolve.ROOT:
        return f"{dirname(fragment_context.root_res_path)}/{href}"
    if resolve is AnchorResolve.BASE:
        return _resolve_base(href, fragment_context.root_res_path)
    return href


def _resolve_base(href: str, root_res_path: str) -> str:
    root_dir = posixpath.normpath(dirname(root_res_path))
    if root_dir == "." or root_dir.startswith("./"):
        root_dir = root_dir[2:]
    if not root_dir:
        return href

    inverted = _SEGMENT.sub("..", root_dir).rstrip("/")
    return f"{inverted}/{href}"
