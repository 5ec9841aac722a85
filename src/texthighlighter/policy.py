"""Host hooks around highlight creation and removal.

``HighlightPolicy`` is the interface; ``PermissivePolicy`` allows everything
and ignores notifications.  Hosts that only want to pass plain functions use
``CallbackPolicy``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from texthighlighter.dom.nodes import Element
    from texthighlighter.dom.selection import Range

    BeforeHighlight = Callable[[Range], bool]
    AfterHighlight = Callable[[Range, list[Element], int], None]
    RemoveHighlight = Callable[[Element], bool]


class HighlightPolicy(Protocol):
    """Veto and notification hooks called by ``TextHighlighter``."""

    def before_highlight(self, range_: Range) -> bool:
        """Return False to abort highlighting *range_* before any mutation."""
        ...

    def after_highlight(
        self, range_: Range, highlights: list[Element], timestamp: int
    ) -> None:
        """Called with the normalised markers once a highlight is created."""
        ...

    def on_remove(self, highlight: Element) -> bool:
        """Return False to keep *highlight* during removal."""
        ...


class PermissivePolicy:
    """Allow every highlight and every removal."""

    def before_highlight(self, range_: Range) -> bool:
        return True

    def after_highlight(
        self, range_: Range, highlights: list[Element], timestamp: int
    ) -> None:
        return None

    def on_remove(self, highlight: Element) -> bool:
        return True


class CallbackPolicy(PermissivePolicy):
    """Policy built from optional plain callables.

    Any hook left as None falls back to the permissive behaviour.
    """

    def __init__(
        self,
        on_before_highlight: BeforeHighlight | None = None,
        on_after_highlight: AfterHighlight | None = None,
        on_remove_highlight: RemoveHighlight | None = None,
    ) -> None:
        self._before = on_before_highlight
        self._after = on_after_highlight
        self._remove = on_remove_highlight

    def before_highlight(self, range_: Range) -> bool:
        if self._before is None:
            return True
        return bool(self._before(range_))

    def after_highlight(
        self, range_: Range, highlights: list[Element], timestamp: int
    ) -> None:
        if self._after is not None:
            self._after(range_, highlights, timestamp)

    def on_remove(self, highlight: Element) -> bool:
        if self._remove is None:
            return True
        return bool(self._remove(highlight))
