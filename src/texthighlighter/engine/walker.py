"""Span walker: wraps every selected text run in a marker element.

The walk is an explicit pre-order state machine rather than recursion: the
tree is mutated while it is walked (text nodes get wrapped), and the walk
has to stop at an arbitrary node, skip ignored subtrees, and climb back out
of the wrappers it just created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from texthighlighter.dom.nodes import Element, Text
from texthighlighter.engine.boundaries import refine_range_boundaries
from texthighlighter.engine.constants import DATA_ATTR, IGNORE_TAGS

if TYPE_CHECKING:
    from texthighlighter.dom.nodes import Node
    from texthighlighter.dom.selection import Range

logger = logging.getLogger(__name__)


@dataclass
class WalkState:
    """Cursor of the span walk."""

    node: Node | None
    go_deeper: bool
    done: bool = False


def _is_ignored(node: Node | None) -> bool:
    return isinstance(node, Element) and node.tag.lower() in IGNORE_TAGS


def _should_wrap(text: Text, anchor: Element) -> bool:
    parent = text.parent
    if parent is None or _is_ignored(parent) or not text.data.strip():
        return False
    # Selection may leak outside the annotated region
    return anchor.contains(parent)


def step(state: WalkState, end: Node) -> None:
    """Advance *state* by one node (the stop checks happen here too)."""
    node = state.node
    if node is None:
        state.done = True
        return

    if node is end and not (
        isinstance(end, Element) and end.has_child_nodes() and state.go_deeper
    ):
        state.done = True

    if _is_ignored(node):
        if end.parent is node:
            state.done = True
        state.go_deeper = False

    if state.go_deeper and isinstance(node, Element) and node.has_child_nodes():
        state.node = node.first_child
    elif node.next_sibling is not None:
        state.node = node.next_sibling
        state.go_deeper = True
    else:
        state.node = node.parent
        state.go_deeper = False


def wrap_range(range_: Range, wrapper: Element, anchor: Element) -> list[Element]:
    """Wrap the text of *range_* in clones of *wrapper*.

    Args:
        range_: The selection to highlight.  Text nodes at its edges are
            split in place.
        wrapper: Template marker; each created marker is a deep clone with
            the marker attribute set.
        anchor: Only text whose parent is *anchor* or inside it is wrapped.

    Returns:
        Created markers in visitation order.  Empty for a collapsed or
        malformed range.
    """
    if range_.collapsed:
        return []
    if not range_.is_well_formed:
        # Checked before refinement, which splits text nodes in place
        logger.debug("Ignoring malformed range %r", range_)
        return []

    refined = refine_range_boundaries(range_)
    end = refined.end_container
    if refined.start_container is None or end is None:
        logger.debug("Range has no reachable start or end; nothing to wrap")
        return []

    state = WalkState(node=refined.start_container, go_deeper=refined.go_deeper)
    highlights: list[Element] = []

    while not state.done:
        node = state.node
        if state.go_deeper and isinstance(node, Text):
            if _should_wrap(node, anchor):
                marker = wrapper.clone(deep=True)
                marker.set(DATA_ATTR, "true")
                highlights.append(node.wrap(marker))
            state.go_deeper = False
        step(state, end)

    logger.debug("Wrapped %d text run(s)", len(highlights))
    return highlights
