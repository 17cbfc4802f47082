"""Command-line front end for the tagged string engine.

Reads a tagged string from a file or stdin, applies one operation and
writes the result to stdout. Diagnostics go to stderr.

Usage:
    taggedtext untag notes.txt
    taggedtext fix-legacy < old_card.txt
    taggedtext replace 3 8 "bye" card.txt
    taggedtext check card.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape as escape_markup

from taggedtext import setup_logging
from taggedtext.config import get_settings
from taggedtext.editing import tagged_substr_replace
from taggedtext.errors import InvalidRange, MalformedTag
from taggedtext.escaping import escape, untag, untag_no_escape
from taggedtext.legacy import fix_old_tags
from taggedtext.matching import check_balanced
from taggedtext.simplify import simplify_tagged

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def _read_input(path: Path | None) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taggedtext",
        description="Transform strings with in-band <tag> markup.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    untag_cmd = sub.add_parser("untag", help="strip tags for display")
    untag_cmd.add_argument(
        "--keep-escape",
        action="store_true",
        help="leave escaped '<' characters escaped",
    )
    sub.add_parser("escape", help="escape '<' in plain text")
    sub.add_parser("fix-legacy", help="convert </> close tags to typed tags")
    sub.add_parser("simplify", help="collapse redundant tag sequences")
    sub.add_parser("check", help="validate tag balance")

    replace_cmd = sub.add_parser("replace", help="replace a range with text")
    replace_cmd.add_argument("start", type=int)
    replace_cmd.add_argument("end", type=int)
    replace_cmd.add_argument("text")
    replace_cmd.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="reject start > end instead of swapping",
    )

    for cmd in sub.choices.values():
        cmd.add_argument("file", nargs="?", type=Path, help="input (default: stdin)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one command and return the process exit status."""
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log.level, settings.log.log_dir)

    text = _read_input(args.file)
    logger.debug("Running %s on %d characters", args.command, len(text))

    if args.command == "check":
        try:
            check_balanced(text)
        except MalformedTag as exc:
            console.print(
                f"[red]Malformed:[/] {escape_markup(str(exc))}", highlight=False
            )
            return 1
        console.print("[green]Balanced.[/]")
        return 0

    if args.command == "untag":
        result = untag_no_escape(text) if args.keep_escape else untag(text)
    elif args.command == "escape":
        result = escape(text)
    elif args.command == "fix-legacy":
        result = fix_old_tags(text, keep=settings.legacy.keep_categories)
    elif args.command == "simplify":
        result = simplify_tagged(text)
    else:
        strict = settings.edit.strict_ranges if args.strict is None else args.strict
        try:
            result = tagged_substr_replace(
                text, args.start, args.end, args.text, strict=strict
            )
        except InvalidRange as exc:
            console.print(
                f"[red]Invalid range:[/] {escape_markup(str(exc))}", highlight=False
            )
            return 2

    sys.stdout.write(result)
    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())
