"""Selection ranges and the host-window interface.

A ``Range`` is the DOM notion: a start and an end boundary, each a container
node plus an offset.  For text containers the offset counts characters, for
element containers it counts children.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from texthighlighter.dom.nodes import Element, Node, Text

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class Range:
    """A selection between two boundary points."""

    start_container: Node
    start_offset: int
    end_container: Node
    end_offset: int

    @property
    def collapsed(self) -> bool:
        return (
            self.start_container is self.end_container
            and self.start_offset == self.end_offset
        )

    @property
    def common_ancestor(self) -> Node:
        """Deepest node containing both boundary containers."""
        node: Node | None = self.start_container
        while node is not None:
            if node.contains(self.end_container):
                return node
            node = node.parent
        msg = "Range boundaries are not in the same tree"
        raise ValueError(msg)

    @property
    def is_well_formed(self) -> bool:
        """Whether start and end are valid points of one tree, in order."""
        if self.start_container.root() is not self.end_container.root():
            return False
        if not (
            _offset_in_range(self.start_container, self.start_offset)
            and _offset_in_range(self.end_container, self.end_offset)
        ):
            return False
        start = _boundary_key(self.start_container, self.start_offset)
        end = _boundary_key(self.end_container, self.end_offset)
        return start <= end


def _offset_in_range(container: Node, offset: int) -> bool:
    if isinstance(container, Text):
        return 0 <= offset <= len(container)
    if isinstance(container, Element):
        return 0 <= offset <= len(container.children)
    return False


def _boundary_key(container: Node, offset: int) -> tuple[int, ...]:
    # Element offsets extend the child-index path; text offsets sit below
    # the text node, so both kinds sort together in document order.
    return (*container.tree_position(), offset)


class HostWindow(Protocol):
    """What the highlighter needs from the embedding platform.

    ``DocumentWindow`` is the in-memory implementation; a GUI host would
    back these methods with its own selection, scrolling and events.
    """

    def get_range(self) -> Range | None:
        """Return the current selection, or None when nothing is selected."""
        ...

    def set_range(self, range_: Range | None) -> None:
        """Replace the current selection."""
        ...

    def remove_all_ranges(self) -> None:
        """Clear the selection (and reset any find cursor)."""
        ...

    def find(self, text: str, case_sensitive: bool = True) -> bool:
        """Select the next occurrence of *text*; False when none is left."""
        ...

    @property
    def scroll_position(self) -> tuple[int, int]:
        """Current ``(x, y)`` scroll offsets."""
        ...

    def scroll_to(self, x: int, y: int) -> None:
        """Scroll to ``(x, y)``."""
        ...

    def add_event_listener(
        self,
        target: Element,
        event_type: str,
        handler: Callable[[Node, str], None],
    ) -> None:
        """Register *handler* for *event_type* events reaching *target*."""
        ...

    def remove_event_listener(
        self,
        target: Element,
        event_type: str,
        handler: Callable[[Node, str], None],
    ) -> None:
        """Unregister a handler previously added for *target*."""
        ...
