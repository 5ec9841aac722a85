"""In-memory host window: selection, scrolling, events and find.

``DocumentWindow`` satisfies ``HostWindow`` for hosts that have no GUI of
their own (the CLI, tests, batch processing).  It keeps a single selection
range, a scroll offset that nothing renders, a listener table, and a find
cursor so repeated ``find`` calls walk through successive matches.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from texthighlighter.finder import TextFinder

if TYPE_CHECKING:
    from collections.abc import Callable

    from texthighlighter.dom.nodes import Element, Node
    from texthighlighter.dom.selection import Range

    Handler = Callable[[Node, str], None]

logger = logging.getLogger(__name__)


class DocumentWindow:
    """A headless window over one document tree."""

    def __init__(self, document: Node, finder: TextFinder | None = None) -> None:
        self.document = document
        self.finder = finder or TextFinder()
        self._range: Range | None = None
        self._scroll: tuple[int, int] = (0, 0)
        self._find_cursor = 0
        self._listeners: dict[tuple[int, str], list[Handler]] = defaultdict(list)

    # -- selection ---------------------------------------------------------

    def get_range(self) -> Range | None:
        return self._range

    def set_range(self, range_: Range | None) -> None:
        self._range = range_

    def remove_all_ranges(self) -> None:
        self._range = None
        self._find_cursor = 0

    def find(self, text: str, case_sensitive: bool = True) -> bool:
        """Select the next occurrence of *text* after the previous match."""
        result = self.finder.find_next(
            self.document, text, start=self._find_cursor, case_sensitive=case_sensitive
        )
        if result is None:
            return False
        self._range = result.range
        self._find_cursor = result.char_end
        return True

    # -- scrolling ---------------------------------------------------------

    @property
    def scroll_position(self) -> tuple[int, int]:
        return self._scroll

    def scroll_to(self, x: int, y: int) -> None:
        self._scroll = (x, y)

    # -- events ------------------------------------------------------------

    def add_event_listener(
        self, target: Element, event_type: str, handler: Handler
    ) -> None:
        handlers = self._listeners[(id(target), event_type)]
        if handler not in handlers:
            handlers.append(handler)

    def remove_event_listener(
        self, target: Element, event_type: str, handler: Handler
    ) -> None:
        handlers = self._listeners.get((id(target), event_type), [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, target: Element, event_type: str) -> int:
        return len(self._listeners.get((id(target), event_type), []))

    def dispatch_event(self, target: Node, event_type: str) -> int:
        """Fire *event_type* at *target*, bubbling up to the root.

        Returns:
            Number of handlers called.
        """
        called = 0
        node: Node | None = target
        while node is not None:
            for handler in list(self._listeners.get((id(node), event_type), [])):
                handler(target, event_type)
                called += 1
            node = node.parent
        logger.debug("Dispatched %s to %d handler(s)", event_type, called)
        return called
