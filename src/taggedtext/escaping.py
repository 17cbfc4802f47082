"""Conversion between tagged strings and plain text.

A literal ``<`` in content can never appear bare inside a tagged string;
it is stored as ``ESCAPED_LT`` and only turned back into ``<`` when the
text leaves the tagged representation.
"""

from __future__ import annotations

# Reserved scalar standing in for a content "<"
ESCAPED_LT = "\x01"


def escape(text: str) -> str:
    """Make plain text safe to embed in a tagged string."""
    return text.replace("<", ESCAPED_LT)


def _strip_tags(tagged: str, *, unescape: bool) -> str:
    out: list[str] = []
    in_tag = False
    for c in tagged:
        if c == "<":
            in_tag = True
        if not in_tag:
            out.append("<" if unescape and c == ESCAPED_LT else c)
        if c == ">":
            in_tag = False
    return "".join(out)


def untag(tagged: str) -> str:
    """Strip all tags and unescape content ``<`` for display.

    A ``>`` outside a tag is kept as content. An unterminated ``<`` hides
    the rest of the string.
    """
    return _strip_tags(tagged, unescape=True)


def untag_no_escape(tagged: str) -> str:
    """Strip all tags but keep ``ESCAPED_LT`` so the result can be re-tagged."""
    return _strip_tags(tagged, unescape=False)
