"""Plain-text search over the document tree, producing selection ranges.

Builds the character stream of the tree's text nodes (skipping subtrees a
browser would not search, such as ``<script>``), locates a needle in it,
then maps the match back to text-node boundary points.  Highlighting never
adds or removes characters, so stream offsets stay valid across the
repeated search-and-highlight steps of ``TextHighlighter.find``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from texthighlighter.dom.nodes import Element, Text
from texthighlighter.dom.selection import Range
from texthighlighter.engine.constants import IGNORE_TAGS

if TYPE_CHECKING:
    from texthighlighter.dom.nodes import Node

logger = logging.getLogger(__name__)


@dataclass
class TextNodeSpan:
    """Where one text node's characters fall in the stream."""

    node: Text
    char_start: int  # inclusive
    char_end: int  # exclusive


@dataclass
class FindResult:
    """A match: its selection range and its end offset in the stream."""

    range: Range
    char_start: int
    char_end: int


def map_text_nodes(root: Node) -> tuple[str, list[TextNodeSpan]]:
    """Concatenate searchable text under *root* and record node spans."""
    parts: list[str] = []
    spans: list[TextNodeSpan] = []
    position = 0

    def _walk(node: Node) -> None:
        nonlocal position
        if isinstance(node, Text):
            if node.data:
                parts.append(node.data)
                spans.append(TextNodeSpan(node, position, position + len(node)))
                position += len(node)
            return
        if isinstance(node, Element):
            if node.tag in IGNORE_TAGS:
                return
            for child in node.children:
                _walk(child)

    _walk(root)
    return "".join(parts), spans


def _boundary(
    spans: list[TextNodeSpan], char_idx: int, *, is_end: bool
) -> tuple[Text, int]:
    """Map a stream offset to a ``(text node, offset)`` boundary point.

    Starts resolve to the node where the character begins; ends resolve to
    the node where the preceding character lives, so a match never spills
    into an untouched neighbour.
    """
    for span in spans:
        if is_end and span.char_start < char_idx <= span.char_end:
            return span.node, char_idx - span.char_start
        if not is_end and span.char_start <= char_idx < span.char_end:
            return span.node, char_idx - span.char_start
    msg = f"Offset {char_idx} is outside the text stream"
    raise ValueError(msg)


class TextFinder:
    """Find successive occurrences of a string in a tree."""

    def find_next(
        self,
        root: Node,
        text: str,
        start: int = 0,
        case_sensitive: bool = True,
    ) -> FindResult | None:
        """Return the first occurrence of *text* at or after offset *start*."""
        if not text:
            return None

        stream, spans = map_text_nodes(root)
        flags = 0 if case_sensitive else re.IGNORECASE
        match = re.compile(re.escape(text), flags).search(stream, start)
        if match is None:
            return None

        start_node, start_offset = _boundary(spans, match.start(), is_end=False)
        end_node, end_offset = _boundary(spans, match.end(), is_end=True)
        logger.debug("Found %r at %d-%d", text, match.start(), match.end())
        return FindResult(
            range=Range(start_node, start_offset, end_node, end_offset),
            char_start=match.start(),
            char_end=match.end(),
        )
