"""Tests for marker queries."""

from __future__ import annotations

from texthighlighter.dom import Element, Text
from texthighlighter.engine.constants import DATA_ATTR, TIMESTAMP_ATTR
from texthighlighter.engine.registry import (
    collect,
    group_highlights,
    is_marker,
    sort_by_depth,
    unique,
)


def _marker(text: str, timestamp: str) -> Element:
    return Element(
        "span", {DATA_ATTR: "true", TIMESTAMP_ATTR: timestamp}, children=[Text(text)]
    )


class TestIsMarker:
    def test_marker_attribute_decides(self) -> None:
        """Only the data attribute makes an element a marker."""
        assert is_marker(Element("span", {DATA_ATTR: "true"}))
        assert not is_marker(Element("span", {"class": "highlighted"}))
        assert not is_marker(Text("x"))
        assert not is_marker(None)


class TestCollect:
    """Finding markers in a subtree."""

    def test_document_order(self) -> None:
        """Markers are collected in document order."""
        a = _marker("a", "1")
        b = _marker("b", "2")
        div = Element("div", children=[Element("p", children=[a]), b])

        assert collect(div) == [a, b]

    def test_container_itself_is_included_last(self) -> None:
        """A marker container follows its descendants unless excluded."""
        inner = _marker("x", "2")
        outer = Element(
            "span", {DATA_ATTR: "true", TIMESTAMP_ATTR: "1"}, children=[inner]
        )

        assert collect(outer) == [inner, outer]
        assert collect(outer, and_self=False) == [inner]

    def test_grouped_by_timestamp(self) -> None:
        """Grouping joins chunks that share a timestamp."""
        first = _marker("one ", "10")
        other = _marker("x", "20")
        second = _marker("two", "10")
        div = Element("div", children=[first, other, Text(" "), second])

        groups = collect(div, grouped=True)

        assert [g.timestamp for g in groups] == ["10", "20"]
        assert groups[0].chunks == [first, second]
        assert str(groups[0]) == "one two"
        assert len(groups[0]) == 2


class TestHelpers:
    def test_sort_by_depth_is_stable(self) -> None:
        """Markers at equal depth keep their relative order."""
        shallow_a = _marker("a", "1")
        deep = _marker("d", "1")
        shallow_b = _marker("b", "1")
        Element("div", children=[shallow_a, Element("p", children=[deep]), shallow_b])
        nodes = [shallow_a, deep, shallow_b]

        sort_by_depth(nodes, descending=True)
        assert nodes == [deep, shallow_a, shallow_b]

        sort_by_depth(nodes, descending=False)
        assert nodes == [shallow_a, shallow_b, deep]

    def test_unique_keeps_first_occurrence(self) -> None:
        """Duplicates are dropped after their first occurrence."""
        a = _marker("a", "1")
        b = _marker("b", "1")
        assert unique([a, b, a]) == [a, b]

    def test_group_without_timestamp(self) -> None:
        """Markers without a timestamp group under None."""
        bare = Element("span", {DATA_ATTR: "true"}, children=[Text("x")])
        groups = group_highlights([bare])
        assert groups[0].timestamp is None
