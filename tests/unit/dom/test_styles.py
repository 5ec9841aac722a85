"""Tests for class and inline-style helpers."""

from __future__ import annotations

import pytest

from texthighlighter.dom import Element
from texthighlighter.dom.styles import (
    add_class,
    background_color,
    has_class,
    normalize_color,
    remove_class,
    same_color,
    set_background_color,
)


class TestClasses:
    def test_add_is_idempotent(self) -> None:
        """Adding a class twice keeps one copy."""
        el = Element("div", {"class": "a"})
        add_class(el, "b")
        add_class(el, "b")
        assert el.get("class") == "a b"
        assert has_class(el, "b")

    def test_remove_last_class_drops_attribute(self) -> None:
        """Removing the last class drops the class attribute."""
        el = Element("div", {"class": "a"})
        remove_class(el, "a")
        assert not el.has_attribute("class")

    def test_remove_missing_class_is_noop(self) -> None:
        """Removing an absent class changes nothing."""
        el = Element("div", {"class": "a b"})
        remove_class(el, "c")
        assert el.get("class") == "a b"


class TestColours:
    """Colours compare the way computed styles would."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("#ff0", "rgb(255, 255, 0)"),
            ("#FFFF00", "rgb(255, 255, 0)"),
            ("rgb(255,255,0)", "rgb(255, 255, 0)"),
            ("rgba(255, 255, 0, 1)", "rgb(255, 255, 0)"),
            ("rgba(255, 255, 0, 0.5)", "rgba(255, 255, 0, 0.5)"),
            ("Red", "red"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize_color(self, value: str | None, expected: str) -> None:
        """Colours normalise to computed-style notation."""
        assert normalize_color(value) == expected

    def test_set_background_keeps_other_declarations(self) -> None:
        """Setting the background keeps other style declarations."""
        el = Element("span", {"style": "font-weight: bold;"})
        set_background_color(el, "#ffff7b")
        style = el.get("style") or ""
        assert "font-weight: bold;" in style
        assert "background-color: #ffff7b;" in style
        assert background_color(el) == "rgb(255, 255, 123)"

    def test_background_shorthand_is_read(self) -> None:
        """The background shorthand is read as the colour."""
        el = Element("span", {"style": "background: red"})
        assert background_color(el) == "red"

    def test_same_color_across_notations(self) -> None:
        """Hex and rgb notations of one colour compare equal."""
        a = Element("span", {"style": "background-color: #ff0"})
        b = Element("span", {"style": "background-color: rgb(255, 255, 0)"})
        c = Element("span", {"style": "background-color: blue"})
        assert same_color(a, b)
        assert not same_color(a, c)
