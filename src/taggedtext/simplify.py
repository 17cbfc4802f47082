"""Canonicalization of redundant tag sequences.

Edits such as ``tagged_substr_replace`` produce runs like ``</b><b>`` at
the seams of the replaced range. These passes collapse them without
changing what the text renders as.
"""

from __future__ import annotations

from taggedtext.categories import is_mergeable
from taggedtext.lexer import TokenKind, anti_tag, tokenize


def add_or_cancel_tag(name: str, buffer: list[str]) -> bool:
    """Add the tag *name* to *buffer*, or cancel it against its opposite.

    Args:
        name: Tag name without brackets (``"b"`` or ``"/b"``).
        buffer: Pending tag tokens, modified in place.

    Returns:
        True if the opposite token was pending and has been removed,
        False if ``<name>`` was appended instead.
    """
    anti = anti_tag(name)
    try:
        buffer.remove(anti)
    except ValueError:
        buffer.append(f"<{name}>")
        return False
    return True


def simplify_tagged_merge(tagged: str) -> str:
    """Cancel tags against their opposites when no content lies between.

    Tags are held back in a waiting buffer until a content character is
    reached, so ``<b></b>`` and ``</b><b>`` both vanish.

    Example:
        >>> simplify_tagged_merge("<b>x</b><b>y</b>")
        '<b>xy</b>'
    """
    out: list[str] = []
    waiting: list[str] = []
    for token in tokenize(tagged):
        if token.is_tag:
            add_or_cancel_tag(token.name, waiting)
        else:
            out.extend(waiting)
            waiting.clear()
            out.append(token.text)
    out.extend(waiting)
    return "".join(out)


def simplify_tagged_overlap(tagged: str) -> str:
    """Drop mergeable style tags that reopen or reclose an active style.

    Only bold, italic and symbol tags are considered; keyword, atom and all
    other tags are passed through unchanged.

    Example:
        >>> simplify_tagged_overlap("<b>a<b>b</b>c</b>")
        '<b>abc</b>'
    """
    out: list[str] = []
    open_tags: list[str] = []
    for token in tokenize(tagged):
        if token.kind is not TokenKind.TEXT and is_mergeable(token.name):
            if token.text in open_tags:
                # Already inside this tag, doubling it has no effect
                add_or_cancel_tag(token.name, open_tags)
                continue
            add_or_cancel_tag(token.name, open_tags)
            if anti_tag(token.name) in open_tags:
                continue
        out.append(token.text)
    return "".join(out)


def simplify_tagged(tagged: str) -> str:
    """Merge cancelling tags, then remove overlapping style tags."""
    return simplify_tagged_overlap(simplify_tagged_merge(tagged))
