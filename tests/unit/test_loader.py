"""Tests for document loading and saving."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from texthighlighter.errors import HighlighterError
from texthighlighter.loader import (
    decode_bytes,
    detect_content_type,
    load_document,
    load_markup,
    save_document,
    text_to_html,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestDetection:
    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("<!DOCTYPE html><html></html>", "html"),
            ("  <html><body></body></html>", "html"),
            ("<p>Hello</p>", "html"),
            ("<DIV>x</DIV>", "html"),
            ("Just some text", "text"),
            ("a < b and b > c", "text"),
        ],
    )
    def test_detect_content_type(self, content: str, expected: str) -> None:
        """Markup is told apart from plain text by its leading tag."""
        assert detect_content_type(content) == expected

    def test_decode_falls_back_to_latin1(self) -> None:
        """Bytes that are not UTF-8 decode as Latin-1."""
        assert decode_bytes("café".encode()) == "café"
        assert decode_bytes(b"caf\xe9") == "café"


class TestTextToHtml:
    def test_paragraphs_and_line_breaks(self) -> None:
        """Blank lines split paragraphs and single newlines become <br>."""
        assert text_to_html("one\ntwo\n\nthree") == "<p>one<br>two</p>\n<p>three</p>"

    def test_escapes_markup(self) -> None:
        """Angle brackets in plain text are escaped."""
        assert text_to_html("a < b") == "<p>a &lt; b</p>"

    def test_empty_text(self) -> None:
        """Empty text gives one empty paragraph."""
        assert text_to_html("") == "<p></p>"


class TestLoadedDocument:
    """Parsing, anchoring and writing back."""

    def test_fragment_round_trip(self) -> None:
        """A fragment is written back without a document wrapper."""
        document = load_markup("<p>Hello <b>world</b></p>")
        assert not document.is_full_document
        assert document.dumps() == "<p>Hello <b>world</b></p>"

    def test_full_document_keeps_head(self) -> None:
        """A full document keeps its doctype and head."""
        document = load_markup(
            "<!DOCTYPE html><html><head><title>T</title></head>"
            "<body><p>x</p></body></html>"
        )
        output = document.dumps()
        assert document.is_full_document
        assert output.startswith("<!DOCTYPE html><html>")
        assert "<title>T</title>" in output

    def test_plain_text_becomes_paragraphs(self) -> None:
        """Plain text input is converted to paragraphs."""
        document = load_markup(b"first\n\nsecond")
        assert document.dumps() == "<p>first</p>\n<p>second</p>"

    def test_anchor_by_id(self) -> None:
        """An id selects the anchor and no id selects the body."""
        document = load_markup('<div id="main"><p>x</p></div>')
        anchor = document.anchor("main")
        assert anchor.tag == "div"
        assert document.anchor() is document.body

    def test_unknown_anchor_id_raises(self) -> None:
        """A missing anchor id raises HighlighterError."""
        document = load_markup("<p>x</p>")
        with pytest.raises(HighlighterError, match="No element with id"):
            document.anchor("missing")

    def test_save_and_load(self, tmp_path: Path) -> None:
        """A saved document loads back unchanged."""
        path = tmp_path / "doc.html"
        save_document(load_markup("<p>saved</p>"), path)
        assert load_document(path).dumps() == "<p>saved</p>"
