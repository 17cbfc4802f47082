"""Resolve nesting relationships between tags.

Matching is by tag *type* identity rather than generic bracket counting:
inside ``<b>...</b>`` only other ``<b`` / ``</b`` tokens affect the depth,
so unrelated tags (``<i>``, ``<kw-0>``) in between are ignored.
"""

from __future__ import annotations

import logging

from taggedtext.errors import MalformedTag
from taggedtext.lexer import NOT_FOUND, TokenKind, tag_type_at, tokenize_strict

logger = logging.getLogger(__name__)


def match_close_tag(tagged: str, start: int) -> int:
    """Find the close tag matching the open tag at *start*.

    Scans forward with a nesting counter seeded at 1. Every ``<`` followed
    by the start tag's type counts as a re-open, every ``<`` followed by
    ``/`` + type as a close.

    Args:
        tagged: Tagged string.
        start: Index of the ``<`` of an open tag.

    Returns:
        Index of the ``<`` of the matching close tag, or NOT_FOUND.
    """
    tag = tag_type_at(tagged, start)
    ctag = "/" + tag
    size = len(tagged)
    level = 1
    pos = start + len(tag) + 2
    while pos < size:
        if tagged[pos] == "<":
            if tagged.startswith(tag, pos + 1):
                level += 1
                pos += len(tag) + 1
            elif tagged.startswith(ctag, pos + 1):
                level -= 1
                if level == 0:
                    return pos
                pos += len(ctag) + 1
        pos += 1
    return NOT_FOUND


def last_start_tag_before(tagged: str, tag: str, start: int) -> int:
    """Return the index of the last occurrence of *tag* beginning before *start*.

    *tag* is a full token such as ``"<b>"``. Occurrences beginning exactly
    at *start* are not considered.
    """
    start = min(len(tagged), start)
    for pos in range(start - 1, -1, -1):
        if tagged.startswith(tag, pos):
            return pos
    return NOT_FOUND


def in_tag(tagged: str, tag: str, start: int, end: int) -> int:
    """Return the index of the *tag* instance enclosing ``[start, end)``.

    The nearest *tag* before *start* is taken as the candidate. If it
    closes before *end* it does not enclose the range and NOT_FOUND is
    returned. An unclosed candidate runs to the end of the string and so
    encloses any range after it.
    """
    if start > end:
        start, end = end, start
    pos = last_start_tag_before(tagged, tag, start)
    if pos == NOT_FOUND:
        return NOT_FOUND
    close_pos = match_close_tag(tagged, pos)
    if close_pos != NOT_FOUND and close_pos < end:
        return NOT_FOUND
    return pos


def check_balanced(tagged: str) -> None:
    """Validate that every tag is terminated and properly nested.

    Raises:
        MalformedTag: On an unterminated tag, a close tag that does not
            match the innermost open tag, or a tag left open at the end.
    """
    stack: list[tuple[str, int]] = []
    for token in tokenize_strict(tagged):
        if token.kind is TokenKind.OPEN:
            stack.append((token.name, token.start))
        elif token.kind is TokenKind.CLOSE:
            if not stack or stack[-1][0] != token.name[1:]:
                msg = f"unexpected close tag {token.text!r}"
                raise MalformedTag(msg, token.start)
            stack.pop()
        elif token.kind is TokenKind.LEGACY_CLOSE:
            if not stack:
                msg = "anonymous close tag with no open tag"
                raise MalformedTag(msg, token.start)
            stack.pop()
    if stack:
        name, position = stack[-1]
        msg = f"tag <{name}> is never closed"
        raise MalformedTag(msg, position)
    logger.debug("Tagged string of length %d is balanced", len(tagged))
