"""Command-line interface: highlight, restore, list and clear highlights.

Examples::

    texthl find article.html "brown fox" -o annotated.html --save hl.json
    texthl restore article.html hl.json -o restored.html
    texthl list annotated.html --grouped
    texthl clear annotated.html -o clean.html

Annotated documents go to ``--output`` or stdout; status messages go to
stderr so stdout can be piped.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from texthighlighter import __version__, setup_logging
from texthighlighter.dom.styles import background_color
from texthighlighter.engine.constants import TIMESTAMP_ATTR
from texthighlighter.errors import HighlighterError
from texthighlighter.highlighter import TextHighlighter
from texthighlighter.loader import LoadedDocument, load_document, save_document

if TYPE_CHECKING:
    from collections.abc import Callable

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _emit(document: LoadedDocument, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(document.dumps())
        sys.stdout.write("\n")
    else:
        save_document(document, output)
        console.print(f"[green]Wrote[/] {output}")


def _open(args: argparse.Namespace) -> tuple[LoadedDocument, TextHighlighter]:
    document = load_document(args.file)
    anchor = document.anchor(args.anchor_id)
    highlighter = TextHighlighter(anchor, color=getattr(args, "color", None))
    return document, highlighter


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_find(args: argparse.Namespace) -> int:
    document, highlighter = _open(args)
    found = highlighter.find(args.text, case_sensitive=not args.ignore_case)
    console.print(f"Highlighted [bold]{found}[/] occurrence(s) of {args.text!r}")

    if args.save is not None:
        args.save.write_text(highlighter.serialize_highlights(), encoding="utf-8")
        console.print(f"[green]Saved descriptors to[/] {args.save}")
    _emit(document, args.output)
    return 0


def _cmd_restore(args: argparse.Namespace) -> int:
    document, highlighter = _open(args)
    payload = args.descriptors.read_text(encoding="utf-8")
    restored = highlighter.deserialize_highlights(payload)
    console.print(f"Restored [bold]{len(restored)}[/] highlight(s)")
    _emit(document, args.output)
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    _document, highlighter = _open(args)

    if args.grouped:
        groups = highlighter.get_highlights(grouped=True)
        table = Table(title=f"{len(groups)} highlight group(s)")
        table.add_column("Timestamp")
        table.add_column("Markers", justify="right")
        table.add_column("Text")
        for group in groups:
            table.add_row(group.timestamp or "-", str(len(group)), str(group))
    else:
        highlights = highlighter.get_highlights()
        table = Table(title=f"{len(highlights)} highlight(s)")
        table.add_column("Timestamp")
        table.add_column("Colour")
        table.add_column("Text")
        for highlight in highlights:
            table.add_row(
                highlight.get(TIMESTAMP_ATTR) or "-",
                background_color(highlight) or "-",
                highlight.text_content,
            )

    console.print(table)
    return 0


def _cmd_clear(args: argparse.Namespace) -> int:
    document, highlighter = _open(args)
    removed = highlighter.remove_highlights()
    console.print(f"Removed [bold]{removed}[/] highlight(s)")
    _emit(document, args.output)
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build argparse parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="texthl",
        description="Create, persist and restore text highlights in HTML.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def _common(p: argparse.ArgumentParser) -> None:
        p.add_argument("file", type=Path, help="HTML or plain-text document")
        p.add_argument(
            "--anchor-id",
            default=None,
            help="id of the element to annotate (default: <body>)",
        )

    find = sub.add_parser("find", help="Highlight every occurrence of a string")
    _common(find)
    find.add_argument("text", help="Text to search for")
    find.add_argument("--ignore-case", action="store_true")
    find.add_argument("--color", default=None, help="Highlight colour")
    find.add_argument("-o", "--output", type=Path, default=None)
    find.add_argument(
        "--save", type=Path, default=None, help="Write descriptors JSON here"
    )
    find.set_defaults(handler=_cmd_find)

    restore = sub.add_parser("restore", help="Re-apply saved highlights")
    _common(restore)
    restore.add_argument("descriptors", type=Path, help="Descriptors JSON file")
    restore.add_argument("-o", "--output", type=Path, default=None)
    restore.set_defaults(handler=_cmd_restore)

    listing = sub.add_parser("list", help="Show highlights in a document")
    _common(listing)
    listing.add_argument("--grouped", action="store_true")
    listing.set_defaults(handler=_cmd_list)

    clear = sub.add_parser("clear", help="Remove all highlights")
    _common(clear)
    clear.add_argument("-o", "--output", type=Path, default=None)
    clear.set_defaults(handler=_cmd_clear)

    return parser


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the subcommand and return the exit status."""
    args = _build_parser().parse_args(argv)
    if args.verbose:
        setup_logging(verbose=True)

    handler: Callable[[argparse.Namespace], int] = args.handler
    try:
        return handler(args)
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/] {exc.filename}")
        return 1
    except HighlighterError as exc:
        console.print(f"[red]Error:[/] {exc}")
        logger.debug("Command %s failed", args.command, exc_info=True)
        return 1


def main() -> None:
    """Entry point for the ``texthl`` script."""
    sys.exit(run())


if __name__ == "__main__":
    main()
