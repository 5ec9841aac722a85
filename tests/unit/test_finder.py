"""Tests for text search and the headless window."""

from __future__ import annotations

from typing import TYPE_CHECKING

from texthighlighter.dom import Element, Text
from texthighlighter.finder import TextFinder, map_text_nodes
from texthighlighter.window import DocumentWindow

if TYPE_CHECKING:
    from collections.abc import Callable


class TestMapTextNodes:
    def test_script_and_buttons_are_skipped(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """Text in script and button elements is left out of the stream."""
        div = make_anchor(
            "<div><p>one</p><script>var x;</script><button>no</button>"
            "<p>two</p></div>"
        )
        stream, spans = map_text_nodes(div)
        assert stream == "onetwo"
        assert [(s.char_start, s.char_end) for s in spans] == [(0, 3), (3, 6)]


class TestTextFinder:
    """Mapping matches back to text-node boundaries."""

    def test_match_inside_one_node(self, brown_fox: Element) -> None:
        """A match inside one text node maps to offsets in that node."""
        result = TextFinder().find_next(brown_fox, "brown")

        assert result is not None
        text = brown_fox.children[0]
        assert result.range.start_container is text
        assert result.range.start_offset == 10
        assert result.range.end_container is text
        assert result.range.end_offset == 15
        assert (result.char_start, result.char_end) == (10, 15)

    def test_match_spanning_nodes(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """A match across elements maps to two text nodes."""
        p = make_anchor("<p>brown <b>fox</b> jumps</p>")
        bold = p.children[1]
        assert isinstance(bold, Element)

        result = TextFinder().find_next(p, "brown fox")

        assert result is not None
        assert result.range.start_container is p.children[0]
        assert result.range.start_offset == 0
        assert result.range.end_container is bold.children[0]
        assert result.range.end_offset == 3

    def test_match_ending_at_node_edge_stays_in_node(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """A match ending at a node edge ends in that node."""
        p = make_anchor("<p>ab<b>cd</b></p>")

        result = TextFinder().find_next(p, "ab")

        assert result is not None
        assert result.range.end_container is p.children[0]
        assert result.range.end_offset == 2

    def test_start_offset_skips_earlier_matches(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """Matches before the start offset are skipped."""
        p = make_anchor("<p>cat cat</p>")

        result = TextFinder().find_next(p, "cat", start=1)

        assert result is not None
        assert result.char_start == 4

    def test_case_insensitive(self, make_anchor: Callable[[str], Element]) -> None:
        """Case-insensitive search matches other cases."""
        p = make_anchor("<p>The CAT</p>")
        finder = TextFinder()

        assert finder.find_next(p, "cat") is None
        assert finder.find_next(p, "cat", case_sensitive=False) is not None

    def test_regex_characters_are_literal(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """Regex metacharacters in the needle match literally."""
        p = make_anchor("<p>a.b axb</p>")
        result = TextFinder().find_next(p, "a.b")
        assert result is not None
        assert result.char_start == 0
        assert TextFinder().find_next(p, "x.b") is None

    def test_empty_needle(self, brown_fox: Element) -> None:
        """An empty needle matches nothing."""
        assert TextFinder().find_next(brown_fox, "") is None


class TestDocumentWindow:
    """Selection, find cursor, scrolling and events."""

    def test_find_walks_successive_matches(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """Repeated find moves to the next match until none remain."""
        p = make_anchor("<p>cat cat</p>")
        window = DocumentWindow(p)

        assert window.find("cat")
        first = window.get_range()
        assert window.find("cat")
        second = window.get_range()
        assert not window.find("cat")

        assert first is not None
        assert second is not None
        assert (first.start_offset, second.start_offset) == (0, 4)

    def test_remove_all_ranges_resets_cursor(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """Clearing the selection restarts find from the top."""
        p = make_anchor("<p>cat</p>")
        window = DocumentWindow(p)
        assert window.find("cat")
        window.remove_all_ranges()

        assert window.get_range() is None
        assert window.find("cat")

    def test_scroll(self) -> None:
        """scroll_to updates the scroll position."""
        window = DocumentWindow(Element("body"))
        assert window.scroll_position == (0, 0)
        window.scroll_to(3, 4)
        assert window.scroll_position == (3, 4)

    def test_events_bubble_to_ancestors(self) -> None:
        """Events reach listeners on ancestors, each listener once."""
        text = Text("x")
        p = Element("p", children=[text])
        body = Element("body", children=[p])
        window = DocumentWindow(body)
        calls: list[tuple[str, str]] = []

        def on_p(target: object, event_type: str) -> None:
            calls.append(("p", event_type))

        def on_body(target: object, event_type: str) -> None:
            calls.append(("body", event_type))

        window.add_event_listener(p, "mouseup", on_p)
        window.add_event_listener(p, "mouseup", on_p)
        window.add_event_listener(body, "mouseup", on_body)

        assert window.dispatch_event(text, "mouseup") == 2
        assert calls == [("p", "mouseup"), ("body", "mouseup")]

        window.remove_event_listener(p, "mouseup", on_p)
        assert window.listener_count(p, "mouseup") == 0
        assert window.dispatch_event(text, "touchend") == 0
