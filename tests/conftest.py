"""Shared pytest fixtures for texthighlighter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from texthighlighter.config import get_settings
from texthighlighter.dom import Element, Range, Text, parse_fragment
from texthighlighter.highlighter import TextHighlighter

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Each test sees default settings, unaffected by the caller's env."""
    for name in (
        "HIGHLIGHT__COLOR",
        "HIGHLIGHT__HIGHLIGHTED_CLASS",
        "HIGHLIGHT__CONTEXT_CLASS",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_anchor() -> Callable[[str], Element]:
    """Parse a fragment and return its first element, attached to a body."""

    def _make(markup: str) -> Element:
        body = parse_fragment(markup)
        for child in body.children:
            if isinstance(child, Element):
                return child
        msg = f"No element in {markup!r}"
        raise AssertionError(msg)

    return _make


@pytest.fixture
def select() -> Callable[[TextHighlighter, Text, int, int], None]:
    """Select characters ``start:end`` of a text node in a highlighter's window."""

    def _select(
        highlighter: TextHighlighter, node: Text, start: int, end: int
    ) -> None:
        highlighter.window.set_range(Range(node, start, node, end))

    return _select


@pytest.fixture
def brown_fox(make_anchor: Callable[[str], Element]) -> Element:
    return make_anchor("<p>The quick brown fox</p>")
