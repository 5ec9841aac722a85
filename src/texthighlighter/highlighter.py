"""TextHighlighter: the host-facing highlighting API.

Binds to an anchor element and turns selections inside it into marker
elements (``<span data-highlighted="true">``), keeping the marker structure
minimal, and serializes markers so they can be restored onto a reloaded
copy of the same document.

Typical use::

    document = parse_document(markup)
    anchor = document.find_by_id("article")
    highlighter = TextHighlighter(anchor)
    highlighter.find("brown")
    saved = highlighter.serialize_highlights()
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Literal, overload

from texthighlighter.config import get_settings
from texthighlighter.dom.nodes import Element, Text
from texthighlighter.dom.styles import add_class, remove_class, set_background_color
from texthighlighter.engine import codec
from texthighlighter.engine.constants import TIMESTAMP_ATTR
from texthighlighter.engine.normaliser import (
    flatten_nested_highlights,
    merge_sibling_highlights,
    normalize_highlights,
)
from texthighlighter.engine.registry import (
    HighlightGroup,
    collect,
    is_marker,
    sort_by_depth,
)
from texthighlighter.engine.walker import wrap_range
from texthighlighter.errors import MissingAnchorError
from texthighlighter.policy import CallbackPolicy
from texthighlighter.window import DocumentWindow

if TYPE_CHECKING:
    from texthighlighter.dom.nodes import Node
    from texthighlighter.dom.selection import HostWindow, Range
    from texthighlighter.policy import (
        AfterHighlight,
        BeforeHighlight,
        HighlightPolicy,
        RemoveHighlight,
    )

logger = logging.getLogger(__name__)

# Events that finish a selection gesture
HIGHLIGHT_EVENTS = ("mouseup", "touchend")


class TextHighlighter:
    """Highlights text inside one anchor element.

    Args:
        element: Anchor element; only text inside it is highlighted.
        window: Host window supplying selection, scrolling, events and
            find.  Defaults to a ``DocumentWindow`` over the anchor's tree.
        color: Highlight colour.
        highlighted_class: Class put on every marker.
        context_class: Class put on the anchor while the highlighter is
            active.
        policy: Veto/notification hooks.  When omitted, the three
            ``on_*`` callables build a ``CallbackPolicy``.
        on_before_highlight: ``(range) -> bool``; False aborts.
        on_after_highlight: ``(range, markers, timestamp) -> None``.
        on_remove_highlight: ``(marker) -> bool``; False keeps the marker.

    Raises:
        MissingAnchorError: If *element* is missing or not an element.
    """

    def __init__(
        self,
        element: Element | None,
        *,
        window: HostWindow | None = None,
        color: str | None = None,
        highlighted_class: str | None = None,
        context_class: str | None = None,
        policy: HighlightPolicy | None = None,
        on_before_highlight: BeforeHighlight | None = None,
        on_after_highlight: AfterHighlight | None = None,
        on_remove_highlight: RemoveHighlight | None = None,
    ) -> None:
        if element is None or not isinstance(element, Element):
            msg = "Missing anchor element"
            raise MissingAnchorError(msg)

        defaults = get_settings().highlight
        self.el = element
        self.color = color or defaults.color
        self.highlighted_class = highlighted_class or defaults.highlighted_class
        self.context_class = context_class or defaults.context_class
        self.policy: HighlightPolicy = policy or CallbackPolicy(
            on_before_highlight, on_after_highlight, on_remove_highlight
        )
        self.window: HostWindow = window or DocumentWindow(element.root())
        self._last_timestamp = 0

        add_class(self.el, self.context_class)
        self._bind_events()

    # -- lifecycle ---------------------------------------------------------

    def _bind_events(self) -> None:
        for event_type in HIGHLIGHT_EVENTS:
            self.window.add_event_listener(self.el, event_type, self.highlight_handler)

    def _unbind_events(self) -> None:
        for event_type in HIGHLIGHT_EVENTS:
            self.window.remove_event_listener(
                self.el, event_type, self.highlight_handler
            )

    def destroy(self) -> None:
        """Stop reacting to selections; existing markers stay in place."""
        self._unbind_events()
        remove_class(self.el, self.context_class)

    # -- creation ----------------------------------------------------------

    def create_wrapper(self) -> Element:
        """Template element cloned for every marker."""
        span = Element("span")
        set_background_color(span, self.color)
        span.set("class", self.highlighted_class)
        return span

    def _next_timestamp(self) -> int:
        # Milliseconds, strictly increasing so rapid operations stay distinct
        now = time.time_ns() // 1_000_000
        self._last_timestamp = max(now, self._last_timestamp + 1)
        return self._last_timestamp

    def highlight_handler(
        self, target: Node | None = None, event_type: str = ""
    ) -> None:
        """Event callback: highlight whatever is selected."""
        self.do_highlight()

    def do_highlight(self, keep_range: bool = False) -> list[Element]:
        """Highlight the window's current selection.

        Args:
            keep_range: Leave the selection in place afterwards.

        Returns:
            The normalised markers, or an empty list if nothing was selected
            or the policy vetoed the highlight.
        """
        range_ = self.window.get_range()
        if range_ is None or range_.collapsed:
            return []

        normalized: list[Element] = []
        if self.policy.before_highlight(range_):
            timestamp = self._next_timestamp()
            wrapper = self.create_wrapper()
            wrapper.set(TIMESTAMP_ATTR, str(timestamp))

            created = self.highlight_range(range_, wrapper)
            normalized = self.normalize_highlights(created)
            logger.debug(
                "Highlight %d: %d created, %d after normalisation",
                timestamp,
                len(created),
                len(normalized),
            )
            self.policy.after_highlight(range_, normalized, timestamp)
        else:
            logger.debug("Highlight vetoed by policy")

        if not keep_range:
            self.window.remove_all_ranges()
        return normalized

    def highlight_range(self, range_: Range | None, wrapper: Element) -> list[Element]:
        """Wrap the text of *range_* in clones of *wrapper*."""
        if range_ is None or range_.collapsed:
            return []
        return wrap_range(range_, wrapper, self.el)

    # -- normalisation -----------------------------------------------------

    def normalize_highlights(self, highlights: list[Element]) -> list[Element]:
        """Flatten and merge *highlights*; see ``engine.normaliser``."""
        return normalize_highlights(highlights)

    def flatten_nested_highlights(self, highlights: list[Element]) -> None:
        flatten_nested_highlights(highlights)

    def merge_sibling_highlights(self, highlights: list[Element]) -> None:
        merge_sibling_highlights(highlights)

    # -- colour ------------------------------------------------------------

    def set_color(self, color: str) -> None:
        """Colour used for highlights created from now on."""
        self.color = color

    def get_color(self) -> str:
        return self.color

    # -- queries -----------------------------------------------------------

    @overload
    def get_highlights(
        self,
        container: Element | None = ...,
        and_self: bool = ...,
        grouped: Literal[False] = ...,
    ) -> list[Element]: ...

    @overload
    def get_highlights(
        self,
        container: Element | None = ...,
        and_self: bool = ...,
        *,
        grouped: Literal[True],
    ) -> list[HighlightGroup]: ...

    def get_highlights(
        self,
        container: Element | None = None,
        and_self: bool = True,
        grouped: bool = False,
    ) -> list[Element] | list[HighlightGroup]:
        """Markers under *container* (default: the anchor) in document order.

        Args:
            container: Element to search.
            and_self: Include *container* if it is a marker itself.
            grouped: Bucket markers by the operation that created them.
        """
        target = container if container is not None else self.el
        if grouped:
            return collect(target, and_self=and_self, grouped=True)
        return collect(target, and_self=and_self)

    def is_highlight(self, node: Node | None) -> bool:
        return is_marker(node)

    # -- removal -----------------------------------------------------------

    def remove_highlights(self, element: Element | None = None) -> int:
        """Unwrap markers under *element* (default: the anchor).

        *element* itself is unwrapped too if it is a marker.  Each marker is
        offered to the policy first; vetoed markers stay.

        Returns:
            Number of markers removed.
        """
        container = element if element is not None else self.el
        highlights = self.get_highlights(container=container)
        sort_by_depth(highlights, descending=True)

        removed = 0
        for highlight in highlights:
            if not self.policy.on_remove(highlight):
                continue
            for child in highlight.unwrap():
                if isinstance(child, Text):
                    _join_adjacent_text(child)
            removed += 1

        logger.debug("Removed %d of %d highlight(s)", removed, len(highlights))
        return removed

    # -- persistence -------------------------------------------------------

    def serialize_highlights(self) -> str:
        """JSON string describing every marker under the anchor."""
        return codec.serialize_highlights(self.el)

    def deserialize_highlights(self, json_str: str) -> list[Element]:
        """Restore markers from ``serialize_highlights`` output.

        Raises:
            DescriptorParseError: If *json_str* is not a JSON array.
        """
        return codec.deserialize_highlights(json_str, self.el)

    # -- search ------------------------------------------------------------

    def find(self, text: str, case_sensitive: bool = True) -> int:
        """Highlight every occurrence of *text*.

        The selection is cleared and the scroll position restored afterwards.

        Returns:
            Number of occurrences highlighted.
        """
        scroll_x, scroll_y = self.window.scroll_position
        self.window.remove_all_ranges()

        found = 0
        while self.window.find(text, case_sensitive):
            if self.do_highlight(keep_range=True):
                found += 1

        self.window.remove_all_ranges()
        self.window.scroll_to(scroll_x, scroll_y)
        logger.debug("find(%r) highlighted %d occurrence(s)", text, found)
        return found


def _join_adjacent_text(node: Text) -> None:
    """Fold neighbouring text siblings into *node*."""
    prev = node.previous_sibling
    if isinstance(prev, Text):
        node.data = prev.data + node.data
        prev.remove()
    nxt = node.next_sibling
    if isinstance(nxt, Text):
        node.data = node.data + nxt.data
        nxt.remove()
