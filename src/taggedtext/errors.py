"""Exceptions raised at the strict boundaries of the tagged string engine.

The traversal primitives never raise: they return ``NOT_FOUND``, an empty
string, or ``None`` on malformed input. These exceptions are reserved for
entry points that explicitly validate (``tokenize_strict``,
``check_balanced``, ``tagged_substr_replace(..., strict=True)``).
"""

from __future__ import annotations


class TaggedStringError(Exception):
    """Base class for all tagged string errors."""


class MalformedTag(TaggedStringError):
    """A tagged string failed strict validation at a given position."""

    def __init__(self, message: str, position: int) -> None:
        self.position = position
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.args[0]} (at index {self.position})"


class InvalidRange(TaggedStringError, ValueError):
    """An edit range was given with ``start > end`` in strict mode."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"range start {start} is after end {end}")
