"""Locating and classifying individual tags in a tagged string.

The index-based primitives (``tag_at``, ``tag_type_at``, ``skip_tag``) are
total: they return ``""`` or ``NOT_FOUND`` rather than raising. The token
stream produced by ``tokenize`` is what the higher-level passes (legacy
conversion, range extraction, strict validation) walk over.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from taggedtext.errors import MalformedTag

# Same convention as str.find
NOT_FOUND = -1

LEGACY_CLOSE_TAG = "</>"

# Lark grammars for tag tokenization
# A tag token is "<", a run without "<" or ">", then ">"
# TEXT catches everything else with negative lookahead, so a "<" that
# never reaches its ">" is content
_TAG_GRAMMAR = (
    "TAG.2: /<[^<>]*>/\n"
    r"TEXT: /(?:(?!<[^<>]*>).)+/s"
)

# Strict mode: content may not contain a bare "<" at all
_STRICT_TAG_GRAMMAR = (
    "TAG.2: /<[^<>]*>/\n"
    r"TEXT: /[^<]+/s"
)

# Compile once at module load
_tag_lexer = Lark(_TAG_GRAMMAR, parser=None, lexer="basic")
_strict_tag_lexer = Lark(_STRICT_TAG_GRAMMAR, parser=None, lexer="basic")


class TokenKind(Enum):
    """Token types for the tag lexer."""

    TEXT = "TEXT"
    OPEN = "OPEN"
    CLOSE = "CLOSE"
    LEGACY_CLOSE = "LEGACY_CLOSE"


@dataclass(frozen=True, slots=True)
class TagToken:
    """A token from the tag lexer.

    Attributes:
        kind: TEXT for content runs, otherwise the kind of tag.
        text: The raw slice of the input, brackets included for tags.
        start: Start index in the input.
        end: End index in the input (exclusive).
    """

    kind: TokenKind
    text: str
    start: int
    end: int

    @property
    def is_tag(self) -> bool:
        return self.kind is not TokenKind.TEXT

    @property
    def name(self) -> str:
        """Tag name without brackets; empty for TEXT tokens."""
        if not self.is_tag:
            return ""
        return self.text[1:-1]


# ---------------------------------------------------------------------------
# Index primitives
# ---------------------------------------------------------------------------


def tag_at(tagged: str, pos: int) -> str:
    """Return the name of the tag starting at *pos* (a ``<``).

    Returns the text between ``pos + 1`` and the next ``>``, or ``""`` when
    there is no ``>`` at or after *pos*.
    """
    end = tagged.find(">", pos)
    if end == NOT_FOUND:
        return ""
    return tagged[pos + 1 : end]


def tag_type_at(tagged: str, pos: int) -> str:
    """Return the type of the tag at *pos*, i.e. its name up to any ``-param``."""
    if pos < 0:
        return ""
    for end in range(pos, len(tagged)):
        if tagged[end] in ">-":
            return tagged[pos + 1 : end]
    return ""


def skip_tag(tagged: str, pos: int) -> int:
    """Return the index just past the next ``>`` at or after *pos*."""
    if pos < 0 or pos >= len(tagged):
        return NOT_FOUND
    end = tagged.find(">", pos)
    return NOT_FOUND if end == NOT_FOUND else end + 1


def close_tag(tag: str) -> str:
    """Return the close token for a full open token (``<b>`` -> ``</b>``).

    An empty token has no name to close, so the legacy ``</>`` is returned.
    """
    if not tag:
        return LEGACY_CLOSE_TAG
    return "</" + tag[1:]


def anti_tag(name: str) -> str:
    """Return the token that cancels the tag called *name*.

    ``anti_tag("b") == "</b>"`` and ``anti_tag("/b") == "<b>"``.
    """
    if name.startswith("/"):
        return f"<{name[1:]}>"
    return f"</{name}>"


def enclosing_tag_span(tagged: str, pos: int) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the tag token strictly containing *pos*.

    *pos* is inside a token when ``start < pos < end``; positions on a
    token boundary are not inside it.
    """
    if pos <= 0 or pos >= len(tagged):
        return None
    lt = tagged.rfind("<", 0, pos)
    if lt == NOT_FOUND or tagged.find(">", lt, pos) != NOT_FOUND:
        return None
    gt = tagged.find(">", pos)
    if gt == NOT_FOUND or tagged.find("<", pos, gt) != NOT_FOUND:
        return None
    return lt, gt + 1


# ---------------------------------------------------------------------------
# Token stream
# ---------------------------------------------------------------------------


def _tag_kind(name: str) -> TokenKind:
    if name == "/":
        return TokenKind.LEGACY_CLOSE
    if name.startswith("/"):
        return TokenKind.CLOSE
    return TokenKind.OPEN


def _lex(tagged: str, lexer: Lark) -> list[TagToken]:
    if not tagged:
        return []

    tokens: list[TagToken] = []
    for lark_token in lexer.lex(tagged):
        value = str(lark_token)
        if lark_token.type == "TEXT":
            kind = TokenKind.TEXT
        else:
            kind = _tag_kind(value[1:-1])

        # Lark lexer always provides start_pos and end_pos for tokens
        start = lark_token.start_pos if lark_token.start_pos is not None else 0
        end = lark_token.end_pos if lark_token.end_pos is not None else start

        tokens.append(TagToken(kind=kind, text=value, start=start, end=end))
    return tokens


def tokenize(tagged: str) -> list[TagToken]:
    """Split a tagged string into TEXT and tag tokens.

    Tolerant: a ``<`` that is not closed by ``>`` before the next ``<``
    is treated as content and ends up inside a TEXT token.

    Example:
        >>> [(t.kind.value, t.text) for t in tokenize("a<b>c</b>")]
        [('TEXT', 'a'), ('OPEN', '<b>'), ('TEXT', 'c'), ('CLOSE', '</b>')]
    """
    return _lex(tagged, _tag_lexer)


def tokenize_strict(tagged: str) -> list[TagToken]:
    """Like ``tokenize`` but raise ``MalformedTag`` on an unterminated tag."""
    try:
        return _lex(tagged, _strict_tag_lexer)
    except UnexpectedCharacters as exc:
        msg = "unterminated tag"
        raise MalformedTag(msg, exc.pos_in_stream) from exc
