"""Queries over markers present in the tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, overload

from texthighlighter.dom.nodes import Element
from texthighlighter.engine.constants import DATA_ATTR, TIMESTAMP_ATTR

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Literal

    from texthighlighter.dom.nodes import Node


def is_marker(node: Node | None) -> bool:
    """True iff *node* is an element carrying the marker attribute."""
    return isinstance(node, Element) and node.has_attribute(DATA_ATTR)


@dataclass
class HighlightGroup:
    """Markers created by one highlighting operation.

    ``str(group)`` is the concatenated text of its markers.
    """

    timestamp: str | None
    chunks: list[Element] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(chunk.text_content for chunk in self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)


def group_highlights(highlights: Iterable[Element]) -> list[HighlightGroup]:
    """Bucket markers by timestamp, groups in first-seen order."""
    groups: dict[str | None, HighlightGroup] = {}
    for highlight in highlights:
        timestamp = highlight.get(TIMESTAMP_ATTR)
        if timestamp not in groups:
            groups[timestamp] = HighlightGroup(timestamp=timestamp)
        groups[timestamp].chunks.append(highlight)
    return list(groups.values())


@overload
def collect(
    container: Element,
    and_self: bool = ...,
    grouped: Literal[False] = ...,
) -> list[Element]: ...


@overload
def collect(
    container: Element,
    and_self: bool = ...,
    *,
    grouped: Literal[True],
) -> list[HighlightGroup]: ...


def collect(
    container: Element,
    and_self: bool = True,
    grouped: bool = False,
) -> list[Element] | list[HighlightGroup]:
    """Return markers under *container* in document order.

    Args:
        container: Element to search.
        and_self: Also return *container* (last) if it is a marker itself.
        grouped: Return ``HighlightGroup`` buckets instead of markers.
    """
    highlights = [el for el in container.iter_elements() if is_marker(el)]
    if and_self and is_marker(container):
        highlights.append(container)
    if grouped:
        return group_highlights(highlights)
    return highlights


def sort_by_depth(nodes: list[Element], descending: bool) -> None:
    """Sort *nodes* in place by tree depth; stable within equal depth."""
    nodes.sort(key=lambda node: node.depth, reverse=descending)


def unique(nodes: Iterable[Element]) -> list[Element]:
    """Drop repeated references, keeping first occurrences."""
    seen: set[int] = set()
    result: list[Element] = []
    for node in nodes:
        if id(node) not in seen:
            seen.add(id(node))
            result.append(node)
    return result
