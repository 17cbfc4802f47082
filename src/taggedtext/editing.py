"""Range edits that keep a tagged string balanced.

Replacing ``[start, end)`` may remove close tags of tags opened before the
range and open tags of tags closed after it. Those tokens are put back at
the seam around the replacement text and the result is simplified, so the
usual outcome is that the surrounding markup is unchanged.
"""

from __future__ import annotations

import logging

from taggedtext.errors import InvalidRange
from taggedtext.escaping import escape
from taggedtext.lexer import TokenKind, anti_tag, enclosing_tag_span, tokenize
from taggedtext.simplify import simplify_tagged

logger = logging.getLogger(__name__)

_CLOSE_KINDS = frozenset((TokenKind.CLOSE, TokenKind.LEGACY_CLOSE))


def get_tags(tagged: str, start: int, end: int, close_tags: bool) -> str:
    """Return all open or all close tags beginning in ``[start, end)``.

    For example, with ``"text<tag>text</tag>text"`` over the whole string:

    - ``close_tags=False`` gives ``"<tag>"``
    - ``close_tags=True`` gives ``"</tag>"``
    """
    start = max(start, 0)
    end = min(end, len(tagged))
    found: list[str] = []
    for token in tokenize(tagged):
        if token.start >= end:
            break
        if token.start < start or not token.is_tag:
            continue
        if (token.kind in _CLOSE_KINDS) == close_tags:
            found.append(token.text)
    return "".join(found)


def substr_replace(text: str, start: int, end: int, replacement: str) -> str:
    """Replace ``text[start:end]`` with *replacement*."""
    return text[:start] + replacement + text[end:]


def range_tags(tagged: str, start: int, end: int) -> tuple[str, str]:
    """Return the unmatched ``(close_tags, open_tags)`` of ``[start, end)``.

    Like ``get_tags`` for both flags, except that a close tag whose open
    tag occurred earlier in the range cancels against it, so a span lying
    wholly inside the range is removed with it. A close tag followed by an
    open tag is kept, which leaves the replacement outside that style.
    """
    closes: list[str] = []
    opens: list[str] = []
    for token in tokenize(tagged):
        if token.start >= end:
            break
        if token.start < start or not token.is_tag:
            continue
        if token.kind is TokenKind.OPEN:
            opens.append(token.text)
        elif token.kind is TokenKind.LEGACY_CLOSE and opens:
            opens.pop()
        elif anti_tag(token.name) in opens:
            matching = anti_tag(token.name)
            # Innermost matching open in the range
            del opens[max(i for i, t in enumerate(opens) if t == matching)]
        else:
            closes.append(token.text)
    return "".join(closes), "".join(opens)


def _normalize_range(
    tagged: str, start: int, end: int, *, strict: bool
) -> tuple[int, int]:
    if start > end:
        if strict:
            raise InvalidRange(start, end)
        logger.debug("Swapping reversed edit range [%d, %d)", start, end)
        start, end = end, start

    size = len(tagged)
    start = min(max(start, 0), size)
    end = min(max(end, 0), size)

    # Never split a tag token: start moves past it, end back before it
    span = enclosing_tag_span(tagged, start)
    if span is not None:
        start = span[1]
    span = enclosing_tag_span(tagged, end)
    if span is not None:
        end = span[0]
    return start, max(start, end)


def tagged_substr_replace(
    tagged: str,
    start: int,
    end: int,
    replacement: str,
    *,
    strict: bool = False,
) -> str:
    """Replace ``[start, end)`` of a tagged string with plain text.

    The replaced range is substituted by its unmatched close tags, the
    escaped replacement and then its unmatched open tags, and the whole
    string is passed through ``simplify_tagged``. Bounds that fall inside
    a tag token are moved out of it.

    Args:
        tagged: Tagged string to edit.
        start: Start index of the range.
        end: End index of the range (exclusive).
        replacement: Plain text; any ``<`` in it is escaped.
        strict: Raise instead of swapping when ``start > end``.

    Returns:
        The edited, simplified tagged string.

    Raises:
        InvalidRange: If *strict* and ``start > end``.

    Example:
        >>> tagged_substr_replace("<b>hello</b>", 3, 8, "bye")
        '<b>bye</b>'
    """
    start, end = _normalize_range(tagged, start, end, strict=strict)
    closes, opens = range_tags(tagged, start, end)
    seam = closes + escape(replacement) + opens
    return simplify_tagged(substr_replace(tagged, start, end, seam))
