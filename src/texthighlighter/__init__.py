"""texthighlighter - persistent text highlights for HTML document trees.

Wraps selected text in marker elements, keeps the marker structure minimal,
and serializes highlights so they can be restored onto a reloaded document.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from texthighlighter.dom import Element, Range, Text, parse_document, parse_fragment
from texthighlighter.errors import (
    DescriptorError,
    DescriptorParseError,
    HighlighterError,
    MissingAnchorError,
)
from texthighlighter.highlighter import TextHighlighter
from texthighlighter.policy import CallbackPolicy, HighlightPolicy, PermissivePolicy
from texthighlighter.window import DocumentWindow

__version__ = "0.1.0"

__all__ = [
    "CallbackPolicy",
    "DescriptorError",
    "DescriptorParseError",
    "DocumentWindow",
    "Element",
    "HighlightPolicy",
    "HighlighterError",
    "MissingAnchorError",
    "PermissivePolicy",
    "Range",
    "Text",
    "TextHighlighter",
    "parse_document",
    "parse_fragment",
    "setup_logging",
]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging to the console and, if enabled, a rotating file.

    Called by the CLI; library code never configures logging itself.
    """
    from texthighlighter.config import get_settings

    config = get_settings().logging

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else config.console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if not config.file_logging:
        return

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    config.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = config.log_dir / f"texthighlighter.{os.getpid()}.log"
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())
