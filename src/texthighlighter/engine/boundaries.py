"""Selection boundary refinement.

Turns a raw selection range into the concrete start and end nodes of the
highlighting walk, splitting text nodes where the selection starts or ends
in the middle of one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from texthighlighter.dom.nodes import Element, Text

if TYPE_CHECKING:
    from texthighlighter.dom.nodes import Node
    from texthighlighter.dom.selection import Range

logger = logging.getLogger(__name__)


@dataclass
class RefinedBoundaries:
    """Initial state of the highlighting walk.

    Attributes:
        start_container: First node to visit.  None when the selection
            starts past the end of the document.
        end_container: Last node to visit.  None when nothing before the
            selection end can be reached.
        go_deeper: Whether the walk may descend into (or wrap) the start
            node.  False when the selection starts at the very end of a
            text node, so nothing of that node is selected.
    """

    start_container: Node | None
    end_container: Node | None
    go_deeper: bool = True


def _refine_end(range_: Range) -> Node | None:
    end = range_.end_container
    offset = range_.end_offset

    if offset == 0:
        # Nothing of the end container is selected: end just before it.
        ancestor = range_.common_ancestor
        node: Node | None = end
        while (
            node is not None
            and node.previous_sibling is None
            and node.parent is not ancestor
            and node.parent is not None
        ):
            node = node.parent
        return node.previous_sibling if node is not None else None

    if isinstance(end, Text):
        if offset < len(end):
            end.split(offset)
        return end

    if isinstance(end, Element):
        if offset - 1 < len(end.children):
            return end.children[offset - 1]
        return end.last_child

    return end


def refine_range_boundaries(range_: Range) -> RefinedBoundaries:
    """Compute start/end nodes for the walk, splitting text at the edges.

    Splits happen immediately and are not undone; they never lose
    characters, they only introduce extra text-node boundaries.
    """
    end = _refine_end(range_)
    start: Node | None = range_.start_container
    offset = range_.start_offset
    go_deeper = True

    if isinstance(start, Text):
        if offset == len(start):
            go_deeper = False
        elif offset > 0:
            original = start
            start = start.split(offset)
            if end is original:
                end = start
    elif isinstance(start, Element):
        if offset < len(start.children):
            start = start.children[offset]
        else:
            start = start.next_sibling

    logger.debug(
        "Refined range: start=%r end=%r go_deeper=%s", start, end, go_deeper
    )
    return RefinedBoundaries(
        start_container=start, end_container=end, go_deeper=go_deeper
    )
