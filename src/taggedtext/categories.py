"""Closed classification of tag names.

Only pure-presentation style tags (bold, italic, symbol font) are safe to
deduplicate during simplification. Keyword and atom tags carry meaning and
are the only tags kept when importing legacy text.
"""

from __future__ import annotations

from enum import Enum


class TagCategory(Enum):
    """What a tag is used for, derived from its type prefix."""

    BOLD = "b"
    ITALIC = "i"
    SYMBOL = "sym"
    KEYWORD = "kw"
    ATOM = "atom"
    OTHER = ""


# Checked in order; semantic prefixes come first so they are never merged
_PREFIX_ORDER: tuple[TagCategory, ...] = (
    TagCategory.KEYWORD,
    TagCategory.ATOM,
    TagCategory.SYMBOL,
    TagCategory.BOLD,
    TagCategory.ITALIC,
)

MERGEABLE: frozenset[TagCategory] = frozenset(
    (TagCategory.BOLD, TagCategory.ITALIC, TagCategory.SYMBOL)
)
KEYWORD_CATEGORIES: frozenset[TagCategory] = frozenset(
    (TagCategory.KEYWORD, TagCategory.ATOM)
)


def classify_tag(name: str) -> TagCategory:
    """Classify a tag name (open or close, brackets stripped).

    Examples:
        >>> classify_tag("kw-1")
        <TagCategory.KEYWORD: 'kw'>
        >>> classify_tag("/sym")
        <TagCategory.SYMBOL: 'sym'>
        >>> classify_tag("param")
        <TagCategory.OTHER: ''>
    """
    name = name.removeprefix("/")
    for category in _PREFIX_ORDER:
        if name.startswith(category.value):
            return category
    return TagCategory.OTHER


def is_mergeable(name: str) -> bool:
    """Return True for bold, italic and symbol tags."""
    return classify_tag(name) in MERGEABLE
