"""Document tree primitives: nodes, HTML I/O, styles and selection ranges."""

from texthighlighter.dom.html_io import (
    element_from_html,
    empty_outer_html,
    inner_html,
    parse_document,
    parse_fragment,
    to_html,
)
from texthighlighter.dom.nodes import Element, Node, NodeType, Text
from texthighlighter.dom.selection import HostWindow, Range

__all__ = [
    "Element",
    "HostWindow",
    "Node",
    "NodeType",
    "Range",
    "Text",
    "element_from_html",
    "empty_outer_html",
    "inner_html",
    "parse_document",
    "parse_fragment",
    "to_html",
]
