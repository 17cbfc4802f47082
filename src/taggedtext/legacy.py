"""Conversion of legacy tagged text to explicit close tags.

Old files close every tag with the anonymous ``</>`` and rely on nesting
order to say which tag is being closed. Only keyword related tags
(``kw*``, ``atom*``) were meaningful in that format; all other tag markers
are dropped on import while their content is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Collection

from taggedtext.categories import KEYWORD_CATEGORIES, TagCategory, classify_tag
from taggedtext.lexer import TagToken, TokenKind, tokenize

logger = logging.getLogger(__name__)


def _keep_decisions(
    tokens: list[TagToken], keep: Collection[TagCategory]
) -> list[bool]:
    """First pass: decide per token whether its marker survives.

    Explicit close tags never appeared in the legacy format and are
    treated like any other non-keyword tag.
    """
    decisions: list[bool] = []
    for token in tokens:
        if token.kind is TokenKind.OPEN:
            decisions.append(classify_tag(token.name) in keep)
        else:
            decisions.append(False)
    return decisions


def fix_old_tags(
    tagged: str, keep: Collection[TagCategory] = KEYWORD_CATEGORIES
) -> str:
    """Rewrite ``</>`` close tags as typed ``</name>`` tags.

    Args:
        tagged: Text in the legacy format.
        keep: Tag categories whose markers are kept. Markers of any other
            tag are removed, content is always kept.

    Returns:
        Text using explicit close tags.

    Example:
        >>> fix_old_tags("<kw-1>text</>")
        '<kw-1>text</kw-1>'
        >>> fix_old_tags("<foo>text</>")
        'text'
    """
    tokens = tokenize(tagged)
    decisions = _keep_decisions(tokens, keep)

    out: list[str] = []
    # Names of currently open tags; "" marks a dropped tag
    stack: list[str] = []
    for token, kept in zip(tokens, decisions, strict=True):
        if token.kind is TokenKind.TEXT:
            out.append(token.text)
        elif token.kind is TokenKind.LEGACY_CLOSE:
            if not stack:
                logger.debug("Ignoring unmatched </> at index %d", token.start)
                continue
            name = stack.pop()
            if name:
                out.append(f"</{name}>")
        elif kept:
            stack.append(token.name)
            out.append(token.text)
        else:
            logger.debug("Dropping non-keyword tag %s", token.text)
            stack.append("")
    return "".join(out)
