"""Document loading and saving for the command line.

Input files may be full HTML documents, HTML fragments or plain text.  Plain
text is converted to ``<p>`` paragraphs so it can be highlighted like any
other document.  On output, full documents are written as documents and
fragments as fragments.
"""

# Pattern: Functional Core (pure functions for content detection and conversion)

from __future__ import annotations

import html as html_module
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from texthighlighter.dom.html_io import inner_html, parse_document, to_html
from texthighlighter.errors import HighlighterError

if TYPE_CHECKING:
    from pathlib import Path

    from texthighlighter.dom.nodes import Element

logger = logging.getLogger(__name__)

ContentType = Literal["html", "text"]


@dataclass
class LoadedDocument:
    """A parsed document and how it should be written back."""

    root: Element
    body: Element
    is_full_document: bool

    def anchor(self, element_id: str | None = None) -> Element:
        """Anchor element: the element with *element_id*, else ``<body>``.

        Raises:
            HighlighterError: If no element has the given id.
        """
        if element_id is None:
            return self.body
        element = self.root.find_by_id(element_id)
        if element is None:
            msg = f"No element with id {element_id!r}"
            raise HighlighterError(msg)
        return element

    def dumps(self) -> str:
        if self.is_full_document:
            return "<!DOCTYPE html>" + to_html(self.root)
        return inner_html(self.body)


def decode_bytes(content: bytes) -> str:
    """Decode bytes as UTF-8, falling back to latin-1."""
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        # Latin-1 accepts all byte values
        return content.decode("latin-1")


def detect_content_type(content: str) -> ContentType:
    """Decide whether *content* is HTML or plain text."""
    stripped = content.lstrip()
    lower = stripped.lower()
    if lower.startswith("<!doctype") or lower.startswith("<html"):
        return "html"
    if re.search(
        r"<(div|p|span|h[1-6]|ul|ol|li|table|body|article|section)\b",
        stripped,
        re.IGNORECASE,
    ):
        return "html"
    return "text"


def _is_full_document(content: str) -> bool:
    lower = content.lstrip().lower()
    return lower.startswith("<!doctype") or lower.startswith("<html")


def text_to_html(text: str) -> str:
    """Convert plain text to HTML paragraphs.

    Blank lines separate paragraphs; single newlines become ``<br>``.
    """
    escaped = html_module.escape(text)
    html_parts = []
    for para in escaped.split("\n\n"):
        if para.strip():
            html_parts.append(f"<p>{para.replace(chr(10), '<br>')}</p>")
    return "\n".join(html_parts) if html_parts else "<p></p>"


def load_markup(content: str | bytes) -> LoadedDocument:
    """Parse raw file content into a ``LoadedDocument``."""
    if isinstance(content, bytes):
        content = decode_bytes(content)

    source_type = detect_content_type(content)
    markup = content if source_type == "html" else text_to_html(content)
    root = parse_document(markup)
    body = root.find_first("body")
    if body is None:
        msg = "Parsed document has no <body>"
        raise HighlighterError(msg)

    logger.debug("Loaded %s content (%d chars)", source_type, len(content))
    return LoadedDocument(
        root=root,
        body=body,
        is_full_document=_is_full_document(content),
    )


def load_document(path: Path) -> LoadedDocument:
    return load_markup(path.read_bytes())


def save_document(document: LoadedDocument, path: Path) -> None:
    path.write_text(document.dumps(), encoding="utf-8")
    logger.info("Wrote %s", path)
