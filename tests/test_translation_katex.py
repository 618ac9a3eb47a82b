"""Tests for the KaTeX failure translator.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fencelint.backends.base import RawFailure
from fencelint.diagnostics import DiagnosticCode
from fencelint.translation.katex import default_context, strip_katex_prefix, translate_katex
from tests.strategies import source_text


def _parse_error(message: str, position: int | None) -> RawFailure:
    return RawFailure(raw_message=f"KaTeX parse error: {message}", position=position, structured=True)


class TestStructuredFailures:
    """KaTeX ParseError with and without a position."""

    def test_undefined_control_sequence(self) -> None:
        code = "\\unknowncommand"
        d = translate_katex(_parse_error("Undefined control sequence: \\unknowncommand", 0), code)
        assert d.code == DiagnosticCode.POSITIONAL_STRUCTURED_FAILURE
        assert d.line == 1
        assert d.message == "Undefined control sequence: \\unknowncommand"
        assert d.hint is not None
        assert "typos" in d.hint
        assert d.context == code

    def test_position_on_later_line(self) -> None:
        code = "a + b\n= \\frac{1}{2\n+ c"
        position = code.index("\\frac")
        d = translate_katex(_parse_error("Expected '}', got 'EOF'", position), code)
        assert d.line == 2
        assert d.hint == "Make sure all braces {} are properly closed"

    def test_position_on_newline_belongs_to_terminated_line(self) -> None:
        code = "x^2\n\\bad"
        d = translate_katex(_parse_error("Undefined control sequence", 3), code)
        assert d.line == 1

    def test_context_window_collapses_newlines(self) -> None:
        code = "0123456789abcdef\nghijklmnopqrstuvwxyz"
        d = translate_katex(_parse_error("Expected group", 17), code)
        assert d.context == "23456789abcdef ghijklmnopqrstu"
        assert d.hint == "Add the required argument in braces: \\command{argument}"

    def test_without_position(self) -> None:
        d = translate_katex(_parse_error("Unexpected end of input", None), "\\frac{1}")
        assert d.line is None
        assert d.context is None
        assert d.hint is not None
        assert d.hint.startswith("The expression is incomplete")

    def test_unrecognized_message_has_no_hint(self) -> None:
        d = translate_katex(_parse_error("Double superscript", 3), "x^2^3")
        assert d.hint is None
        assert d.detail == "Double superscript"

    def test_position_past_end_is_clamped(self) -> None:
        d = translate_katex(_parse_error("Unexpected end of input", 99), "a\nb")
        assert d.line == 2


class TestUnstructuredFailures:
    """Failures that are not a KaTeX ParseError."""

    def test_raw_message_and_code_prefix(self) -> None:
        code = "\\begin{matrix}" + "a & b \\\\ " * 10
        d = translate_katex(RawFailure("Cannot read properties of undefined"), code)
        assert d.code == DiagnosticCode.UNKNOWN_STRUCTURED_FAILURE
        assert d.line is None
        assert d.detail == "Cannot read properties of undefined"
        assert d.context == code[:40]

    def test_empty_message(self) -> None:
        d = translate_katex(RawFailure(""), "x")
        assert d.message == "Unknown KaTeX parse error"


class TestPrefix:
    """strip_katex_prefix removes the tool prefix only at the start."""

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("KaTeX parse error: Expected group", "Expected group"),
            ("katex PARSE ERROR:   Expected group", "Expected group"),
            ("Expected group after KaTeX parse error:", "Expected group after KaTeX parse error:"),
        ],
    )
    def test_strip(self, message: str, expected: str) -> None:
        assert strip_katex_prefix(message) == expected

    def test_no_default_context(self) -> None:
        assert default_context("E = mc^2") is None


class TestLineLaw:
    """Reported line equals newlines before the position plus one."""

    @given(st.data())
    def test_line_from_position(self, data: st.DataObject) -> None:
        code = data.draw(source_text.filter(bool))
        position = data.draw(st.integers(min_value=0, max_value=len(code)))
        d = translate_katex(_parse_error("Undefined control sequence", position), code)
        assert d.line == code[:position].count("\n") + 1
        assert d.context is not None
        assert "\n" not in d.context
