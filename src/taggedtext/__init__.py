"""taggedtext - in-band tag markup for editable text.

Plain text interleaved with ``<tag>`` markers, plus the pure string
operations needed to edit it without breaking tag balance.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from taggedtext.categories import (
    KEYWORD_CATEGORIES,
    MERGEABLE,
    TagCategory,
    classify_tag,
    is_mergeable,
)
from taggedtext.editing import (
    get_tags,
    range_tags,
    substr_replace,
    tagged_substr_replace,
)
from taggedtext.errors import InvalidRange, MalformedTag, TaggedStringError
from taggedtext.escaping import ESCAPED_LT, escape, untag, untag_no_escape
from taggedtext.legacy import fix_old_tags
from taggedtext.lexer import (
    NOT_FOUND,
    TagToken,
    TokenKind,
    anti_tag,
    close_tag,
    enclosing_tag_span,
    skip_tag,
    tag_at,
    tag_type_at,
    tokenize,
    tokenize_strict,
)
from taggedtext.matching import (
    check_balanced,
    in_tag,
    last_start_tag_before,
    match_close_tag,
)
from taggedtext.simplify import (
    add_or_cancel_tag,
    simplify_tagged,
    simplify_tagged_merge,
    simplify_tagged_overlap,
)

__version__ = "0.1.0"

_logging_configured = False

__all__ = [
    "ESCAPED_LT",
    "KEYWORD_CATEGORIES",
    "MERGEABLE",
    "NOT_FOUND",
    "InvalidRange",
    "MalformedTag",
    "TagCategory",
    "TagToken",
    "TaggedStringError",
    "TokenKind",
    "add_or_cancel_tag",
    "anti_tag",
    "check_balanced",
    "classify_tag",
    "close_tag",
    "enclosing_tag_span",
    "escape",
    "fix_old_tags",
    "get_tags",
    "in_tag",
    "is_mergeable",
    "last_start_tag_before",
    "match_close_tag",
    "range_tags",
    "setup_logging",
    "simplify_tagged",
    "simplify_tagged_merge",
    "simplify_tagged_overlap",
    "skip_tag",
    "substr_replace",
    "tag_at",
    "tag_type_at",
    "tagged_substr_replace",
    "tokenize",
    "tokenize_strict",
    "untag",
    "untag_no_escape",
]


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    """Configure logging to the console and, optionally, a rotating file."""
    global _logging_configured
    if _logging_configured:
        return
    _logging_configured = True

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"taggedtext.{os.getpid()}.log"

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
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
