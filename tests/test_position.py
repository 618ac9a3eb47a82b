"""Tests for position.py: offsets to lines and context excerpts.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fencelint.position import (
    first_line,
    line_at_offset,
    line_offset,
    position_context,
    utf16_to_index,
)
from tests.strategies import source_text


@st.composite
def source_and_position(draw: st.DrawFn) -> tuple[str, int]:
    """Generate (source, position) with 0 <= position <= len(source)."""
    source = draw(source_text)
    return source, draw(st.integers(min_value=0, max_value=len(source)))


class TestLineOffset:
    """line_offset counts newlines before a position."""

    def test_examples(self) -> None:
        source = "line1\nline2\nline3"
        assert line_offset(source, 0) == 0
        assert line_offset(source, 5) == 0
        assert line_offset(source, 6) == 1
        assert line_offset(source, len(source)) == 2

    def test_negative_position_raises(self) -> None:
        with pytest.raises(ValueError, match="Position must be >= 0"):
            line_offset("abc", -1)

    @given(source_text)
    def test_position_past_end_is_clamped(self, source: str) -> None:
        assert line_offset(source, len(source) + 50) == source.count("\n")

    @given(source_and_position())
    def test_equals_newline_count_of_prefix(self, case: tuple[str, int]) -> None:
        source, pos = case
        assert line_offset(source, pos) == source[:pos].count("\n")


class TestLineAtOffset:
    """line_at_offset walks lines until the offset is covered."""

    def test_examples(self) -> None:
        assert line_at_offset("ab\ncd", 0) == 1
        assert line_at_offset("ab\ncd", 1) == 1
        assert line_at_offset("ab\ncd", 3) == 2
        assert line_at_offset("ab\ncd", 4) == 2

    def test_newline_belongs_to_the_line_it_terminates(self) -> None:
        assert line_at_offset("ab\ncd", 2) == 1

    def test_offset_past_end(self) -> None:
        assert line_at_offset("ab\ncd", 5) == 2
        assert line_at_offset("ab\ncd", 6) == 3

    @given(source_and_position())
    @settings(max_examples=200)
    def test_agrees_with_newline_count(self, case: tuple[str, int]) -> None:
        """Both conversions place every in-range offset on the same line."""
        source, pos = case
        assert line_at_offset(source, pos) == line_offset(source, pos) + 1


class TestPositionContext:
    """position_context takes a window around a position."""

    def test_window_and_newline_collapse(self) -> None:
        assert position_context("a\nbcdef", 3, 2) == " bcd"

    def test_window_is_clamped_at_both_ends(self) -> None:
        assert position_context("abc", 0, 15) == "abc"
        assert position_context("abc", 3, 15) == "abc"

    @given(source_and_position(), st.integers(min_value=0, max_value=30))
    def test_excerpt_never_contains_newlines(self, case: tuple[str, int], radius: int) -> None:
        source, pos = case
        excerpt = position_context(source, pos, radius)
        assert "\n" not in excerpt
        assert len(excerpt) <= 2 * radius


class TestFirstLine:
    """first_line returns the stripped first line."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("  flowchart LR \nA --> B", "flowchart LR"),
            ("", ""),
            ("\nsecond", ""),
        ],
    )
    def test_first_line(self, source: str, expected: str) -> None:
        assert first_line(source) == expected


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


class TestUtf16ToIndex:
    """utf16_to_index maps JavaScript code-unit offsets onto str indexes."""

    def test_basic_plane_is_identity(self) -> None:
        assert utf16_to_index("abc", 0) == 0
        assert utf16_to_index("abc", 2) == 2
        assert utf16_to_index("abc", 3) == 3

    def test_astral_characters_take_two_units(self) -> None:
        code = "\U0001d538" * 8 + " \\foo\nx"
        assert utf16_to_index(code, 17) == 9
        assert code[9] == "\\"

    def test_offset_inside_surrogate_pair_moves_forward(self) -> None:
        assert utf16_to_index("\U0001f680x", 1) == 1

    def test_offset_past_end_keeps_distance(self) -> None:
        assert utf16_to_index("\U0001f680", 2) == 1
        assert utf16_to_index("\U0001f680", 4) == 3

    def test_negative_offset_raises(self) -> None:
        with pytest.raises(ValueError, match="Offset must be >= 0"):
            utf16_to_index("abc", -1)

    @given(st.text(max_size=40), st.data())
    def test_inverts_utf16_length_of_prefix(self, source: str, data: st.DataObject) -> None:
        index = data.draw(st.integers(min_value=0, max_value=len(source)))
        assert utf16_to_index(source, _utf16_length(source[:index])) == index
