"""Tests for selection boundary refinement."""

from __future__ import annotations

from typing import TYPE_CHECKING

from texthighlighter.dom import Element, Range, Text
from texthighlighter.engine.boundaries import refine_range_boundaries

if TYPE_CHECKING:
    from collections.abc import Callable


def _texts(element: Element) -> list[str]:
    return [child.text_content for child in element.children]


class TestTextBoundaries:
    """Selections starting and ending inside text nodes."""

    def test_splits_both_edges_in_one_node(self, brown_fox: Element) -> None:
        """A selection inside one node splits off its own text node."""
        text = brown_fox.children[0]
        assert isinstance(text, Text)

        refined = refine_range_boundaries(Range(text, 4, text, 9))

        assert _texts(brown_fox) == ["The ", "quick", " brown fox"]
        assert refined.start_container is brown_fox.children[1]
        assert refined.end_container is brown_fox.children[1]
        assert refined.go_deeper is True

    def test_start_at_end_of_text_does_not_descend(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """A start at the end of a text node is not descended into."""
        p = make_anchor("<p>ab<b>cd</b></p>")
        first = p.children[0]
        bold = p.children[1]
        assert isinstance(first, Text)
        assert isinstance(bold, Element)
        second = bold.children[0]
        assert isinstance(second, Text)

        refined = refine_range_boundaries(Range(first, 2, second, 1))

        assert refined.start_container is first
        assert refined.go_deeper is False
        assert refined.end_container is second
        assert _texts(bold) == ["c", "d"]

    def test_end_offset_zero_ends_before_container(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """An end at offset 0 falls back to the preceding node."""
        p = make_anchor("<p>ab<b>cd</b></p>")
        first = p.children[0]
        bold = p.children[1]
        assert isinstance(bold, Element)

        refined = refine_range_boundaries(Range(first, 0, bold.children[0], 0))

        assert refined.start_container is first
        assert refined.end_container is first

    def test_full_text_node_needs_no_split(self, brown_fox: Element) -> None:
        """Selecting a whole text node leaves it unsplit."""
        text = brown_fox.children[0]
        assert isinstance(text, Text)

        refined = refine_range_boundaries(Range(text, 0, text, len(text)))

        assert len(brown_fox.children) == 1
        assert refined.start_container is text
        assert refined.end_container is text


class TestElementBoundaries:
    """Selections whose boundary containers are elements."""

    def test_offsets_index_children(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """Element offsets select the child at that index."""
        p = make_anchor("<p>a<b>b</b>c</p>")
        bold = p.children[1]

        refined = refine_range_boundaries(Range(p, 1, p, 2))

        assert refined.start_container is bold
        assert refined.end_container is bold

    def test_start_past_last_child_moves_to_next_sibling(
        self, make_anchor: Callable[[str], Element]
    ) -> None:
        """A start past the last child continues at the next sibling."""
        div = make_anchor("<div><p>one</p><p>two</p></div>")
        first, second = div.children
        assert isinstance(first, Element)
        assert isinstance(second, Element)

        refined = refine_range_boundaries(
            Range(first, len(first.children), second, 1)
        )

        assert refined.start_container is second
        assert refined.end_container is second.children[0]
