"""Drop repeated ``<style>`` payloads and ``<link>`` hrefs.

Style payloads are compared with whitespace collapsed, so the same rules
written with different indentation count as duplicates. Empty styles are
dropped outright.

Each compilation unit records which node first claimed a key. Content
spliced in from a nested fragment is walked again by the enclosing unit,
so a node that already holds its claim is kept while a second node with
the same key is removed. This extends deduplication across component
boundaries: two uses of one component leave a single copy of its style.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mooltipage.nodes import StyleNode, TagNode

if TYPE_CHECKING:
    from mooltipage.compiler.context import HtmlCompilerContext

_WHITESPACE = re.compile(r"\s+")


def normalize_style(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class DeduplicateModule:
    __slots__ = ()

    def enter_node(self, context: HtmlCompilerContext) -> None:
        node = context.node
        shared = context.shared_context

        if isinstance(node, StyleNode):
            key = normalize_style(node.text_content)
            if not key:
                _drop(node, context)
            else:
                _claim(shared.unique_styles, key, node, context)

        elif isinstance(node, TagNode) and node.tag_name == "link":
            href = node.get_attribute("href")
            # Links that go nowhere are left alone.
            if href:
                _claim(shared.unique_links, href, node, context)


def _claim(seen: dict[str, TagNode], key: str, node: TagNode, context: HtmlCompilerContext) -> None:
    owner = seen.get(key)
    if owner is None:
        seen[key] = node
    elif owner is not node:
        _drop(node, context)


def _drop(node: TagNode, context: HtmlCompilerContext) -> None:
    node.remove_self()
    context.set_deleted()
