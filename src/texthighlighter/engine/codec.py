"""Serialization of markers into positional descriptors, and back.

Wire format (a compatibility contract: never reorder or extend it)::

    [[wrapper_outer_html, text, "i:j:k", offset, length], ...]

``wrapper_outer_html``
    The marker element with its attributes and no content.
``text``
    The marker's text at serialization time.
``path``
    Child indices from the anchor element down to the marker.
``offset``
    Length of the text node immediately before the marker (0 if none), i.e.
    where the marker's text starts inside the text node it was cut from.
``length``
    Length of the marker's text.

Paths are positional, so they only resolve against a tree in the same
structural state.  Decoding isolates failures per descriptor.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from texthighlighter.dom.html_io import element_from_html, empty_outer_html
from texthighlighter.dom.nodes import Element, Text
from texthighlighter.engine.constants import PATH_SEPARATOR
from texthighlighter.engine.registry import collect, sort_by_depth
from texthighlighter.errors import DescriptorError, DescriptorParseError

if TYPE_CHECKING:
    from texthighlighter.dom.nodes import Node

logger = logging.getLogger(__name__)

DESCRIPTOR_FIELDS = ("wrapper", "text", "path", "offset", "length")


class HighlightDescriptor(BaseModel):
    """One serialized marker."""

    model_config = ConfigDict(strict=True, frozen=True)

    wrapper: str
    text: str
    path: str = Field(pattern=r"^\d+(:\d+)*$")
    offset: int = Field(ge=0)
    length: int = Field(ge=0)

    @classmethod
    def from_item(cls, item: Any) -> HighlightDescriptor:
        """Validate one decoded JSON array entry.

        Raises:
            DescriptorError: If *item* is not a well-formed 5-element array.
        """
        if not isinstance(item, list) or len(item) != len(DESCRIPTOR_FIELDS):
            msg = f"Descriptor must be a {len(DESCRIPTOR_FIELDS)}-element array"
            raise DescriptorError(msg, descriptor=item)
        try:
            return cls(**dict(zip(DESCRIPTOR_FIELDS, item, strict=True)))
        except ValidationError as exc:
            msg = f"Invalid descriptor: {exc.error_count()} validation error(s)"
            raise DescriptorError(msg, descriptor=item) from exc

    def to_item(self) -> list[str | int]:
        return [self.wrapper, self.text, self.path, self.offset, self.length]

    @property
    def indices(self) -> list[int]:
        return [int(part) for part in self.path.split(PATH_SEPARATOR)]


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def element_path(node: Node, anchor: Element) -> list[int]:
    """Child indices leading from *anchor* down to *node*."""
    path: list[int] = []
    current: Node = node
    while current is not anchor:
        if current.parent is None:
            msg = "Node is not inside the anchor element"
            raise ValueError(msg)
        path.append(current.index)
        current = current.parent
    path.reverse()
    return path


def describe(highlight: Element, anchor: Element) -> HighlightDescriptor:
    """Build the descriptor for one marker."""
    text = highlight.text_content
    prev = highlight.previous_sibling
    offset = len(prev) if isinstance(prev, Text) else 0
    return HighlightDescriptor(
        wrapper=empty_outer_html(highlight),
        text=text,
        path=PATH_SEPARATOR.join(str(i) for i in element_path(highlight, anchor)),
        offset=offset,
        length=len(text),
    )


def serialize_highlights(anchor: Element) -> str:
    """Serialize every marker under *anchor* into a JSON string.

    Markers are described shallowest first so that the paths of ancestors
    are recorded before anything beneath them.  The anchor itself is never
    described, since a path cannot point at it.
    """
    highlights = collect(anchor, and_self=False)
    sort_by_depth(highlights, descending=False)
    descriptors = [describe(hl, anchor).to_item() for hl in highlights]
    logger.debug("Serialized %d highlight(s)", len(descriptors))
    return json.dumps(descriptors, ensure_ascii=False, separators=(",", ":"))


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def _child_at(element: Node, index: int, descriptor: HighlightDescriptor) -> Node:
    if not isinstance(element, Element) or not 0 <= index < len(element.children):
        msg = f"Path {descriptor.path!r} does not resolve: no child at {index}"
        raise DescriptorError(msg, descriptor=descriptor)
    return element.children[index]


def restore(descriptor: HighlightDescriptor, anchor: Element) -> Element:
    """Recreate one marker from *descriptor* on the current tree.

    Raises:
        DescriptorError: If the path, target node or offsets do not fit.
    """
    *parents, index = descriptor.indices
    node: Node = anchor
    for i in parents:
        node = _child_at(node, i, descriptor)

    # The marker's text was cut out of the preceding text node; in a fresh
    # tree that node holds it again.
    if isinstance(node, Element) and 0 < index <= len(node.children):
        if isinstance(node.children[index - 1], Text):
            index -= 1

    target = _child_at(node, index, descriptor)
    if not isinstance(target, Text):
        msg = f"Path {descriptor.path!r} points at {target!r}, not a text node"
        raise DescriptorError(msg, descriptor=descriptor)

    # Everything that can fail is checked before the tree is touched
    if descriptor.offset + descriptor.length > len(target):
        msg = (
            f"Offset {descriptor.offset} + length {descriptor.length} exceeds "
            f"text of length {len(target)}"
        )
        raise DescriptorError(msg, descriptor=descriptor)
    try:
        wrapper = element_from_html(descriptor.wrapper)
    except ValueError as exc:
        raise DescriptorError(str(exc), descriptor=descriptor) from exc

    carved = target.split(descriptor.offset)
    carved.split(descriptor.length)

    for remnant in (carved.next_sibling, carved.previous_sibling):
        if isinstance(remnant, Text) and not remnant.data:
            remnant.remove()

    if carved.data != descriptor.text:
        logger.debug(
            "Restored text %r differs from serialized text %r",
            carved.data,
            descriptor.text,
        )

    return carved.wrap(wrapper)


def parse_descriptors(payload: str) -> list[Any]:
    """Decode the JSON envelope.

    Raises:
        DescriptorParseError: If *payload* is not JSON or not a JSON array.
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        msg = f"Can't parse JSON: {exc}"
        raise DescriptorParseError(msg, payload) from exc
    if not isinstance(data, list):
        msg = f"Expected a JSON array of descriptors, got {type(data).__name__}"
        raise DescriptorParseError(msg, payload)
    return data


def deserialize_highlights(payload: str, anchor: Element) -> list[Element]:
    """Restore markers described by *payload* under *anchor*.

    Descriptors are applied in order.  One that fails is logged and skipped;
    the rest are still restored.

    Raises:
        DescriptorParseError: If *payload* is not a JSON array.
    """
    if not payload:
        return []

    highlights: list[Element] = []
    for item in parse_descriptors(payload):
        try:
            descriptor = HighlightDescriptor.from_item(item)
            highlights.append(restore(descriptor, anchor))
        except DescriptorError as exc:
            logger.warning("Can't deserialize highlight descriptor. Cause: %s", exc)

    logger.debug("Deserialized %d highlight(s)", len(highlights))
    return highlights
