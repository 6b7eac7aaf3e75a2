"""HTML front end: text to node tree."""

from mooltipage.parser.html import VOID_ELEMENTS, DomParser, parse_dom

__all__ = ["VOID_ELEMENTS", "DomParser", "parse_dom"]
