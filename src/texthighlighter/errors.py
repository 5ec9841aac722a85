"""Exceptions raised by the highlighter."""

from __future__ import annotations

from typing import Any


class HighlighterError(Exception):
    """Base class for highlighter errors."""


class MissingAnchorError(HighlighterError, ValueError):
    """The highlighter was constructed without an anchor element."""


class DescriptorParseError(HighlighterError, ValueError):
    """Serialized highlights are not a JSON array of descriptors."""

    def __init__(self, message: str, payload: str) -> None:
        self.payload = payload
        super().__init__(message)

    def __str__(self) -> str:
        preview = self.payload
        if len(preview) > 60:
            preview = preview[:57] + "..."
        return f"{self.args[0]}\n  Input: {preview!r}"


class DescriptorError(HighlighterError):
    """A single descriptor could not be restored onto the tree.

    Raised per descriptor during deserialization and caught by the decode
    loop, which logs it and moves on to the next descriptor.
    """

    def __init__(self, message: str, descriptor: Any = None) -> None:
        self.descriptor = descriptor
        super().__init__(message)
