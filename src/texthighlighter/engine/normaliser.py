"""Marker normalisation: flatten nested markers, merge adjacent ones.

After a highlighting walk the new markers may sit inside older markers, or
right next to markers of the same colour.  Normalisation rewrites that
structure into the smallest equivalent set of marker elements.

Both passes mutate the tree and the marker list passed in; entries may be
replaced (a dissolved child is replaced by its surviving parent) or end up
detached (absorbed by a merge).  ``normalize_highlights`` cleans the list up
afterwards.
"""

from __future__ import annotations

import logging

from texthighlighter.dom.nodes import Element
from texthighlighter.dom.styles import same_color
from texthighlighter.engine.registry import is_marker, sort_by_depth, unique

logger = logging.getLogger(__name__)


def _flatten_once(highlights: list[Element]) -> bool:
    changed = False

    for i, highlight in enumerate(highlights):
        parent = highlight.parent
        if parent is None or not is_marker(parent):
            continue

        if not same_color(parent, highlight):
            # Lift an edge child out beside its parent.
            if highlight.next_sibling is None:
                highlight.move_after(parent)
                changed = True
            if highlight.previous_sibling is None:
                highlight.move_before(parent)
                changed = True
            if not parent.has_child_nodes():
                parent.remove()
        else:
            highlight.unwrap()
            highlights[i] = parent
            changed = True

    return changed


def flatten_nested_highlights(highlights: list[Element]) -> None:
    """Remove marker-in-marker nesting, deepest markers first.

    A child marker with a different colour from its parent is moved out
    beside the parent when it touches the parent's start or end; a child
    with the same colour is dissolved into the parent.  Repeats until a
    pass changes nothing, since lifting a marker out can put it inside the
    next marker up.
    """
    sort_by_depth(highlights, descending=True)
    passes = 0
    while _flatten_once(highlights):
        passes += 1
    logger.debug("Flatten settled after %d pass(es)", passes + 1)


def _should_merge(current: Element, node: object) -> bool:
    return isinstance(node, Element) and is_marker(node) and same_color(current, node)


def merge_sibling_highlights(highlights: list[Element]) -> None:
    """Absorb same-colour marker siblings, then coalesce text children."""
    for highlight in highlights:
        if highlight.parent is None:
            continue

        prev = highlight.previous_sibling
        if isinstance(prev, Element) and _should_merge(highlight, prev):
            highlight.prepend(prev.children)
            prev.remove()

        nxt = highlight.next_sibling
        if isinstance(nxt, Element) and _should_merge(highlight, nxt):
            highlight.append(nxt.children)
            nxt.remove()

        highlight.normalize_text_nodes()


def normalize_highlights(highlights: list[Element]) -> list[Element]:
    """Flatten and merge *highlights*; return the surviving markers.

    The result holds each attached marker once, in document order.  Its
    length and order may differ from the input.
    """
    flatten_nested_highlights(highlights)
    merge_sibling_highlights(highlights)

    normalized = unique(hl for hl in highlights if hl.parent is not None)
    normalized.sort(key=lambda hl: hl.tree_position())

    logger.debug(
        "Normalised %d marker(s) into %d", len(highlights), len(normalized)
    )
    return normalized
