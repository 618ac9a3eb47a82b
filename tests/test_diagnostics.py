"""Tests for diagnostic codes, templates and output formatting.

Python 3.13+.
"""

from __future__ import annotations

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fencelint.constants import CONTEXT_MAX_LENGTH, MERMAID_DIAGRAM_TYPES
from fencelint.diagnostics import (
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    OutputFormat,
    ParsedDiagnostic,
    ValidationError,
)
from fencelint.enums import ContentFamily
from fencelint.lint import LintError

ERROR = LintError(
    rule_names=("mermaid-syntax",),
    line_number=4,
    message="Unclosed square bracket",
    hint="Add closing ] to complete the node shape: A[text]",
    context="C --> [D",
    code=DiagnosticCode.POSITIONAL_PARSE_FAILURE,
)


class TestDiagnosticCodes:
    """Code ranges group failures by stage."""

    def test_codes_are_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "stage"),
        [
            (DiagnosticCode.EMPTY_CONTENT, 1),
            (DiagnosticCode.MISSING_ENTRY_POINT, 1),
            (DiagnosticCode.UNKNOWN_ENTRY_POINT, 2),
            (DiagnosticCode.UNKNOWN_FAILURE_FORMAT, 2),
            (DiagnosticCode.POSITIONAL_STRUCTURED_FAILURE, 3),
        ],
    )
    def test_stage_ranges(self, code: DiagnosticCode, stage: int) -> None:
        assert code.value // 1000 == stage


class TestParsedDiagnostic:
    """Translator output and its anchoring to the document."""

    def test_detail_joins_hint(self) -> None:
        d = ParsedDiagnostic(DiagnosticCode.EXPECTED_TOKEN, "Expected ID", 1, "Check it")
        assert d.detail == "Expected ID. Check it"
        assert ParsedDiagnostic(DiagnosticCode.EXPECTED_TOKEN, "Expected ID").detail == "Expected ID"

    def test_empty_message_rejected(self) -> None:
        with pytest.raises(ValueError, match="message must not be empty"):
            ParsedDiagnostic(DiagnosticCode.LEXICAL_FAILURE, "")

    def test_zero_line_rejected(self) -> None:
        with pytest.raises(ValueError, match="line must be >= 1"):
            ParsedDiagnostic(DiagnosticCode.LEXICAL_FAILURE, "m", line=0)

    @given(st.integers(min_value=1, max_value=10_000), st.integers(min_value=1, max_value=500))
    def test_absolute_line(self, start: int, line: int) -> None:
        d = ParsedDiagnostic(DiagnosticCode.LEXICAL_FAILURE, "m", line=line)
        assert d.to_validation_error(start).line_number == start + line - 1

    def test_missing_line_anchors_to_start(self) -> None:
        error = ParsedDiagnostic(DiagnosticCode.UNKNOWN_FAILURE_FORMAT, "m").to_validation_error(7)
        assert error.line_number == 7

    def test_default_context_only_when_missing(self) -> None:
        with_context = ParsedDiagnostic(DiagnosticCode.LEXICAL_FAILURE, "m", context="own")
        without = ParsedDiagnostic(DiagnosticCode.LEXICAL_FAILURE, "m")
        assert with_context.to_validation_error(1, default_context="fallback").context == "own"
        assert without.to_validation_error(1, default_context="fallback").context == "fallback"

    def test_validation_error_line_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="line_number must be >= 1"):
            ValidationError(line_number=0, message="x")

    def test_validation_error_keeps_hint_separate(self) -> None:
        d = ParsedDiagnostic(DiagnosticCode.EXPECTED_TOKEN, "Expected ID", 2, "Check it")
        error = d.to_validation_error(5)
        assert (error.message, error.hint) == ("Expected ID", "Check it")
        assert error.detail == "Expected ID. Check it"


class TestErrorTemplate:
    """Template wording."""

    @pytest.mark.parametrize("family", list(ContentFamily))
    def test_empty_content_per_family(self, family: ContentFamily) -> None:
        error = ErrorTemplate.empty_content(family, 12)
        assert error.line_number == 12
        assert error.code == DiagnosticCode.EMPTY_CONTENT
        assert error.detail.startswith("Empty")

    def test_unknown_diagram_type_lists_every_type(self) -> None:
        d = ErrorTemplate.unknown_diagram_type("flowhcart LR")
        assert d.hint == f"Valid types: {', '.join(MERMAID_DIAGRAM_TYPES)}"
        assert d.line == 1

    def test_missing_entry_point_truncates_context(self) -> None:
        error = ErrorTemplate.missing_entry_point(1, "  " + "-" * 80)
        assert error.context == "-" * CONTEXT_MAX_LENGTH

    @pytest.mark.parametrize(
        ("message", "hint_start"),
        [
            ("Undefined control sequence: \\foo", "Check for typos"),
            ("Expected '}', got 'EOF'", "Make sure all braces"),
            ("Expected group after '^'", "Add the required argument"),
            ("Unexpected end of input in a macro argument", "The expression is incomplete"),
        ],
    )
    def test_katex_hints(self, message: str, hint_start: str) -> None:
        hint = ErrorTemplate.katex_hint(message)
        assert hint is not None
        assert hint.startswith(hint_start)

    def test_katex_hint_absent(self) -> None:
        assert ErrorTemplate.katex_hint("Double subscript") is None

    def test_positional_parse_failure_defaults_message(self) -> None:
        assert ErrorTemplate.positional_parse_failure(2, "", None, None).message == "Parse error"


class TestDiagnosticFormatter:
    """rust, simple and json output."""

    def test_rust(self) -> None:
        text = DiagnosticFormatter().format("README.md", ERROR)
        assert text == (
            "error[mermaid-syntax]: Unclosed square bracket\n"
            "  --> README.md:4\n"
            "  |  C --> [D\n"
            "  = help: Add closing ] to complete the node shape: A[text]"
        )

    def test_rust_without_hint_or_context(self) -> None:
        error = LintError(("katex-syntax", "math-syntax"), 2, "Double subscript")
        text = DiagnosticFormatter().format("notes.md", error)
        assert text == "error[katex-syntax]: Double subscript\n  --> notes.md:2"

    def test_rust_message_with_sentence_break_and_no_hint(self) -> None:
        message = "KaTeX parse error: Expected 'EOF', got '}' at position 4: x^2}. More text"
        error = LintError(("katex-syntax",), 3, message)
        text = DiagnosticFormatter().format("notes.md", error)
        assert text == f"error[katex-syntax]: {message}\n  --> notes.md:3"
        assert "= help:" not in text

    def test_json_without_hint(self) -> None:
        error = LintError(("katex-syntax",), 3, "Double subscript. Use braces")
        record = json.loads(DiagnosticFormatter(output_format=OutputFormat.JSON).format("a.md", error))
        assert record["message"] == "Double subscript. Use braces"
        assert "hint" not in record

    def test_rust_color(self) -> None:
        text = DiagnosticFormatter(color=True).format("README.md", ERROR)
        assert text.startswith("\033[1;31merror\033[0m[mermaid-syntax]")

    def test_simple(self) -> None:
        text = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format("README.md", ERROR)
        assert text == f"README.md:4 mermaid-syntax {ERROR.detail} [Context: C --> [D]"

    def test_json(self) -> None:
        text = DiagnosticFormatter(output_format=OutputFormat.JSON).format("README.md", ERROR)
        assert json.loads(text) == {
            "source": "README.md",
            "line": 4,
            "rule": "mermaid-syntax",
            "rule_names": ["mermaid-syntax"],
            "detail": ERROR.detail,
            "message": "Unclosed square bracket",
            "hint": "Add closing ] to complete the node shape: A[text]",
            "code": "POSITIONAL_PARSE_FAILURE",
            "context": "C --> [D",
        }

    def test_format_all_separators(self) -> None:
        errors = [ERROR, ERROR]
        rust = DiagnosticFormatter().format_all("a.md", errors)
        simple = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format_all("a.md", errors)
        assert rust.count("\n\n") == 1
        assert simple.count("\n") == 1

    def test_sanitize_truncates_context(self) -> None:
        error = LintError(("mermaid-syntax",), 1, "m", context="x" * 30)
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        assert formatter.format("a.md", error).endswith("[Context: xxxxxxxxxx...]")
