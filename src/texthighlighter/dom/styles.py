"""Class-list and inline-style helpers for elements.

Colour comparison works on a normalised form so that ``#ff0``,
``#ffff00``, ``rgb(255,255,0)`` and ``rgba(255, 255, 0, 1)`` compare equal,
which is what a browser's computed style would report.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from texthighlighter.dom.nodes import Element

_HEX_COLOUR = re.compile(r"#([0-9a-f]{3}|[0-9a-f]{6})")
_RGB_COLOUR = re.compile(
    r"rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([\d.]+)\s*)?\)"
)

# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------


def class_list(element: Element) -> list[str]:
    return (element.get("class") or "").split()


def has_class(element: Element, name: str) -> bool:
    return name in class_list(element)


def add_class(element: Element, name: str) -> None:
    classes = class_list(element)
    if name and name not in classes:
        classes.append(name)
        element.set("class", " ".join(classes))


def remove_class(element: Element, name: str) -> None:
    classes = class_list(element)
    if name not in classes:
        return
    remaining = [c for c in classes if c != name]
    if remaining:
        element.set("class", " ".join(remaining))
    else:
        element.remove_attribute("class")


# ---------------------------------------------------------------------------
# Inline style
# ---------------------------------------------------------------------------


def _parse_style(style: str) -> dict[str, str]:
    declarations: dict[str, str] = {}
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip():
            declarations[name.strip().lower()] = value.strip()
    return declarations


def get_style_property(element: Element, prop: str) -> str | None:
    return _parse_style(element.get("style") or "").get(prop.lower())


def set_style_property(element: Element, prop: str, value: str) -> None:
    declarations = _parse_style(element.get("style") or "")
    declarations[prop.lower()] = value
    element.set("style", " ".join(f"{k}: {v};" for k, v in declarations.items()))


# ---------------------------------------------------------------------------
# Colour
# ---------------------------------------------------------------------------


def normalize_color(value: str | None) -> str:
    """Return a canonical colour string; empty string for no colour."""
    if not value:
        return ""
    colour = value.strip().lower()

    hex_match = _HEX_COLOUR.fullmatch(colour)
    if hex_match:
        digits = hex_match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        return f"rgb({r}, {g}, {b})"

    rgb_match = _RGB_COLOUR.fullmatch(colour)
    if rgb_match:
        r, g, b, alpha = rgb_match.groups()
        if alpha is None or float(alpha) == 1:
            return f"rgb({int(r)}, {int(g)}, {int(b)})"
        return f"rgba({int(r)}, {int(g)}, {int(b)}, {float(alpha):g})"

    return colour


def background_color(element: Element) -> str:
    """The element's normalised inline background colour."""
    colour = get_style_property(element, "background-color")
    if colour is None:
        colour = get_style_property(element, "background")
    return normalize_color(colour)


def set_background_color(element: Element, colour: str) -> None:
    set_style_property(element, "background-color", colour)


def same_color(a: Element, b: Element) -> bool:
    return background_color(a) == background_color(b)
