"""Tests for close-tag matching, enclosing-tag queries and balance checks."""

from __future__ import annotations

import pytest

from taggedtext.errors import MalformedTag
from taggedtext.lexer import NOT_FOUND
from taggedtext.matching import (
    check_balanced,
    in_tag,
    last_start_tag_before,
    match_close_tag,
)


class TestMatchCloseTag:
    """Tests for match_close_tag()."""

    def test_nested_same_name(self) -> None:
        """The inner <b> raises the nesting level, so the outer </b> matches."""
        s = "<b>x<b>y</b>z</b>"
        assert match_close_tag(s, 0) == 13

    def test_inner_tag_matches_first_close(self) -> None:
        s = "<b>x<b>y</b>z</b>"
        assert match_close_tag(s, 4) == 8

    def test_unrelated_tags_are_ignored(self) -> None:
        s = "<b>x<i>y</i>z</b>"
        assert match_close_tag(s, 0) == 13

    def test_type_prefix_counts_as_reopen(self) -> None:
        """Any tag whose name starts with the type raises the level."""
        s = "<b>x<bold>y</b>z</b>"
        assert match_close_tag(s, 0) == 16

    def test_param_tag_nests_with_other_param(self) -> None:
        """Same type with a different -param still nests."""
        s = "<kw-1>a<kw-2>b</kw-2></kw-1>"
        assert match_close_tag(s, 0) == 21

    def test_param_tag(self) -> None:
        """Matching uses the tag type, the -param suffix is not needed."""
        assert match_close_tag("<kw-1>a</kw-1>", 0) == 7

    def test_unclosed(self) -> None:
        assert match_close_tag("<b>xyz", 0) == NOT_FOUND


class TestLastStartTagBefore:
    """Tests for last_start_tag_before()."""

    S = "<b>a</b><b>c"

    def test_finds_most_recent(self) -> None:
        assert last_start_tag_before(self.S, "<b>", len(self.S)) == 8

    def test_tag_at_start_is_excluded(self) -> None:
        """Only occurrences beginning strictly before start count."""
        assert last_start_tag_before(self.S, "<b>", 8) == 0

    def test_start_beyond_end_is_clamped(self) -> None:
        assert last_start_tag_before(self.S, "<b>", 1000) == 8

    def test_none_before(self) -> None:
        assert last_start_tag_before(self.S, "<b>", 0) == NOT_FOUND

    def test_missing_tag(self) -> None:
        assert last_start_tag_before(self.S, "<i>", len(self.S)) == NOT_FOUND


class TestInTag:
    """Tests for in_tag()."""

    S = "<b>hello</b> world"

    def test_range_inside(self) -> None:
        assert in_tag(self.S, "<b>", 4, 6) == 0

    def test_range_ending_at_close_tag(self) -> None:
        assert in_tag(self.S, "<b>", 3, 8) == 0

    def test_range_extends_past_close(self) -> None:
        """The tag closes before end, so it does not enclose the range."""
        assert in_tag(self.S, "<b>", 4, 14) == NOT_FOUND

    def test_reversed_range_is_normalized(self) -> None:
        assert in_tag(self.S, "<b>", 6, 4) == 0

    def test_other_tag(self) -> None:
        assert in_tag(self.S, "<i>", 4, 6) == NOT_FOUND

    def test_unclosed_tag_encloses_rest(self) -> None:
        assert in_tag("<b>hello", "<b>", 3, 8) == 0


class TestCheckBalanced:
    """Tests for check_balanced()."""

    @pytest.mark.parametrize(
        "tagged",
        [
            "",
            "plain",
            "<b>a<i>b</i></b>",
            "<kw-1>x</kw-1> <atom-y>z</atom-y>",
            "<kw>x</>",
            "<b></b>",
        ],
    )
    def test_balanced(self, tagged: str) -> None:
        check_balanced(tagged)

    @pytest.mark.parametrize(
        ("tagged", "position"),
        [
            ("<b><i></b></i>", 6),
            ("<b>x", 0),
            ("<b", 0),
            ("x</b>", 1),
            ("</>", 0),
            ("<b>x</b><i>", 8),
        ],
    )
    def test_malformed(self, tagged: str, position: int) -> None:
        with pytest.raises(MalformedTag) as exc_info:
            check_balanced(tagged)
        assert exc_info.value.position == position

    def test_message_names_the_tag(self) -> None:
        with pytest.raises(MalformedTag, match="never closed"):
            check_balanced("<kw-2>abc")
