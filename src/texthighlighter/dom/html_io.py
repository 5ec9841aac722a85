"""HTML parsing into the document tree, and serialisation back out.

Parsing goes through selectolax's Lexbor backend, which builds a
standards-compliant HTML5 tree.  That tree is converted node-for-node into
``nodes.Element`` / ``nodes.Text`` because the highlighter needs to split
and re-parent text nodes, which selectolax does not expose.

Serialisation is hand-written so that attribute order survives a round trip:
the wrapper template stored in a serialized descriptor is compared and
rebuilt as a string.
"""

# Pattern: Functional Core (pure conversion functions, no global state)

from __future__ import annotations

import html as html_module
import logging
from typing import Any

from selectolax.lexbor import LexborHTMLParser

from texthighlighter.dom.nodes import Element, Node, Text

logger = logging.getLogger(__name__)

# Elements serialised without a closing tag
VOID_ELEMENTS = frozenset(
    (
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
    )
)

# Elements whose text children are written verbatim
_RAW_TEXT_ELEMENTS = frozenset(("script", "style"))

# Lexbor's pseudo-tag for text nodes
_TEXT_TAG = "-text"


def _convert(node: Any) -> Node | None:
    """Convert one selectolax node (and its subtree) into our tree.

    Comments, doctype and other non-element, non-text nodes are dropped.
    """
    tag = node.tag
    if tag == _TEXT_TAG:
        return Text(node.text_content or "")
    if not tag or tag.startswith(("-", "_", "!")):
        return None

    attributes = {
        name: value if value is not None else ""
        for name, value in node.attributes.items()
    }
    element = Element(tag, attributes)

    child = node.child
    while child is not None:
        converted = _convert(child)
        if converted is not None:
            element.append_child(converted)
        child = child.next
    return element


def parse_document(markup: str) -> Element:
    """Parse a full HTML document and return its ``<html>`` element.

    Fragments are accepted too; the parser supplies the missing
    ``<html>``/``<head>``/``<body>`` scaffolding.
    """
    tree = LexborHTMLParser(markup)
    root = tree.root
    if root is None:
        logger.debug("Parser returned no root; building an empty document")
        return Element("html", children=[Element("head"), Element("body")])
    converted = _convert(root)
    if not isinstance(converted, Element):
        msg = "Parsed document has no root element"
        raise ValueError(msg)
    return converted


def parse_fragment(markup: str) -> Element:
    """Parse an HTML fragment and return the ``<body>`` that contains it."""
    document = parse_document(markup)
    body = document.find_first("body")
    if body is None:
        body = Element("body")
        document.append_child(body)
    body.remove()
    return body


def element_from_html(markup: str) -> Element:
    """Build a single element from its HTML (e.g. a stored wrapper template).

    Raises:
        ValueError: If *markup* contains no element.
    """
    body = parse_fragment(markup.strip())
    for child in body.children:
        if isinstance(child, Element):
            child.remove()
            return child
    msg = f"No element found in markup {markup[:80]!r}"
    raise ValueError(msg)


def _serialize_attributes(element: Element) -> str:
    parts = [
        f' {name}="{html_module.escape(value, quote=True)}"'
        for name, value in element.attributes.items()
    ]
    return "".join(parts)


def _write(node: Node, out: list[str]) -> None:
    if isinstance(node, Text):
        parent = node.parent
        if parent is not None and parent.tag in _RAW_TEXT_ELEMENTS:
            out.append(node.data)
        else:
            out.append(html_module.escape(node.data, quote=False))
        return

    if not isinstance(node, Element):
        return

    out.append(f"<{node.tag}{_serialize_attributes(node)}>")
    if node.tag in VOID_ELEMENTS:
        return
    for child in node.children:
        _write(child, out)
    out.append(f"</{node.tag}>")


def to_html(node: Node) -> str:
    """Serialise *node* including its own tag (``outerHTML``)."""
    out: list[str] = []
    _write(node, out)
    return "".join(out)


def inner_html(element: Element) -> str:
    """Serialise the children of *element* (``innerHTML``)."""
    out: list[str] = []
    for child in element.children:
        _write(child, out)
    return "".join(out)


def empty_outer_html(element: Element) -> str:
    """Serialise *element* with its attributes but without any content."""
    return to_html(element.clone(deep=False))
