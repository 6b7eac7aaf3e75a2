"""Build a mooltipage node tree from HTML text.

Uses the standard library tokenizer (``html.parser.HTMLParser``) and
assembles its start/end/data events into ``Node`` objects. Template-control
tags are mapped onto their specialized node classes as they are opened.

Tokenizer behavior worth knowing:
    - Tag and attribute names arrive lower-cased.
    - Bare attributes (``<m-import component>``) arrive with value ``None``.
    - ``<script>`` and ``<style>`` bodies are delivered raw, unescaped.
    - Character references elsewhere are decoded; the serializer re-escapes.

Example:
    >>> dom = DomParser().parse_dom("<div class='a'>Hi</div>")
    >>> dom.first_child.tag_name
    'div'

"""

from __future__ import annotations

import logging
from html.parser import HTMLParser

from mooltipage.environment.exceptions import ErrorCode, TemplateSyntaxError
from mooltipage.nodes import (
    CDATANode,
    CommentNode,
    DocumentNode,
    NodeWithChildren,
    ProcessingInstructionNode,
    TagNode,
    TextNode,
    create_tag,
)

logger = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


class DomParser(HTMLParser):
    """Event-driven HTML parser producing a ``DocumentNode``.

    A parser instance is single-use per ``parse_dom`` call; it resets
    itself first so it may be reused sequentially.

    Args:
        res_path: Resource path used in error locations.
    """

    def __init__(self, res_path: str | None = None):
        super().__init__(convert_charrefs=True)
        self.res_path = res_path
        self._source = ""
        self._dom = DocumentNode()
        self._stack: list[NodeWithChildren] = [self._dom]

    def parse_dom(self, html: str) -> DocumentNode:
        """Parse ``html`` into a new DocumentNode.

        Raises:
            TemplateSyntaxError: On an unmatched closing tag or a malformed
                template-control tag.
        """
        self.reset()
        self._source = html
        self._dom = DocumentNode()
        self._stack = [self._dom]
        self.feed(html)
        self.close()
        return self._dom

    @property
    def _current(self) -> NodeWithChildren:
        return self._stack[-1]

    def _create(self, tag: str, attrs: list[tuple[str, str | None]]) -> TagNode:
        try:
            return create_tag(tag, dict(attrs))
        except TemplateSyntaxError as e:
            if e.lineno is not None:
                raise
            raise TemplateSyntaxError(
                e.message,
                tag_name=e.tag_name,
                res_path=self.res_path,
                lineno=self.getpos()[0],
                source=self._source,
                code=e.code,
            ) from e

    # -- tokenizer events --------------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        node = self._create(tag, attrs)
        self._current.append_child(node)
        if node.tag_name not in VOID_ELEMENTS:
            self._stack.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._current.append_child(self._create(tag, attrs))

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        if tag in VOID_ELEMENTS:
            return

        for depth in range(len(self._stack) - 1, 0, -1):
            node = self._stack[depth]
            if isinstance(node, TagNode) and node.tag_name == tag:
                # Implicitly close anything left open inside it.
                del self._stack[depth:]
                return

        lineno = self.getpos()[0]
        raise TemplateSyntaxError(
            f"Unexpected closing tag </{tag}>",
            tag_name=tag,
            res_path=self.res_path,
            lineno=lineno,
            source=self._source,
            code=ErrorCode.UNEXPECTED_CLOSING_TAG,
        )

    def handle_data(self, data: str) -> None:
        last = self._current.last_child
        if isinstance(last, TextNode):
            last.text += data
        else:
            self._current.append_child(TextNode(data))

    def handle_comment(self, data: str) -> None:
        # Newer tokenizers report CDATA outside foreign content as a bogus comment.
        if data.startswith("[CDATA[") and data.endswith("]]"):
            self._append_cdata(data[len("[CDATA["):-2])
        else:
            self._current.append_child(CommentNode(data))

    def handle_decl(self, decl: str) -> None:
        name = decl.split(None, 1)[0] if decl.strip() else ""
        self._current.append_child(ProcessingInstructionNode(f"!{name.lower()}", f"!{decl}"))

    def handle_pi(self, data: str) -> None:
        name = data.split(None, 1)[0] if data.strip() else ""
        self._current.append_child(ProcessingInstructionNode(f"?{name.lower()}", f"?{data}"))

    def unknown_decl(self, data: str) -> None:
        if data.upper().startswith("CDATA["):
            self._append_cdata(data[len("CDATA["):])
        else:
            logger.debug("Ignoring unknown declaration <![%s]>", data)

    def _append_cdata(self, text: str) -> None:
        cdata = CDATANode()
        if text:
            cdata.append_child(TextNode(text, is_whitespace_sensitive=True))
        self._current.append_child(cdata)


def parse_dom(html: str, res_path: str | None = None) -> DocumentNode:
    """Convenience wrapper around ``DomParser.parse_dom``."""
    return DomParser(res_path).parse_dom(html)
