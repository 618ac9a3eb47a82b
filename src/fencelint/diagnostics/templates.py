"""Diagnostic message templates.

Centralized message templates for testable, consistent diagnostics.
Python 3.13+. Zero external dependencies.
"""

from fencelint.constants import (
    CONTEXT_MAX_LENGTH,
    FALLBACK_MESSAGE_MAX_LENGTH,
    MERMAID_DIAGRAM_TYPES,
)
from fencelint.enums import ContentFamily

from .codes import DiagnosticCode, ParsedDiagnostic, ValidationError

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized diagnostic templates.

    All user-visible messages and hints are created here. This provides:
        - Testable messages
        - Consistent wording across rules
        - Documentation of all failure cases
    """

    # Family -> (message, hint)
    _EMPTY_CONTENT: dict[ContentFamily, tuple[str, str]] = {
        ContentFamily.MERMAID: (
            "Empty Mermaid diagram",
            "Add a diagram type (e.g., flowchart, sequenceDiagram) and content",
        ),
        ContentFamily.MATH: ("Empty math block", "Add a LaTeX expression (e.g., E = mc^2)"),
    }

    # Substring of a KaTeX message -> hint, checked in order.
    _KATEX_HINTS: tuple[tuple[str, str], ...] = (
        (
            "Undefined control sequence",
            "Check for typos in command names or use \\text{} for regular text",
        ),
        ("Expected '}'", "Make sure all braces {} are properly closed"),
        ("Expected group", "Add the required argument in braces: \\command{argument}"),
        (
            "Unexpected end of input",
            "The expression is incomplete - check for missing closing braces or arguments",
        ),
    )

    # ------------------------------------------------------------------
    # Precheck
    # ------------------------------------------------------------------

    @staticmethod
    def empty_content(family: ContentFamily, start_line: int) -> ValidationError:
        """Fragment has no content after trimming.

        Args:
            family: Content family of the fragment
            start_line: Absolute line of the fragment's carrier

        Returns:
            ValidationError for EMPTY_CONTENT
        """
        message, hint = ErrorTemplate._EMPTY_CONTENT[family]
        return ValidationError(
            line_number=start_line,
            message=message,
            hint=hint,
            code=DiagnosticCode.EMPTY_CONTENT,
        )

    @staticmethod
    def missing_entry_point(start_line: int, first_line: str) -> ValidationError:
        """First meaningful line does not start with a diagram type.

        Args:
            start_line: Absolute line of the fragment's carrier
            first_line: First line of the trimmed fragment

        Returns:
            ValidationError for MISSING_ENTRY_POINT
        """
        return ValidationError(
            line_number=start_line,
            message="Missing diagram type declaration",
            hint="Start with a diagram type like: flowchart, sequenceDiagram, classDiagram",
            context=first_line.strip()[:CONTEXT_MAX_LENGTH],
            code=DiagnosticCode.MISSING_ENTRY_POINT,
        )

    # ------------------------------------------------------------------
    # Free-text parser failures
    # ------------------------------------------------------------------

    @staticmethod
    def positional_parse_failure(
        line: int | None, message: str, hint: str | None, context: str | None
    ) -> ParsedDiagnostic:
        """Parser named the failing line."""
        return ParsedDiagnostic(
            code=DiagnosticCode.POSITIONAL_PARSE_FAILURE,
            line=line,
            message=message or "Parse error",
            hint=hint,
            context=context,
        )

    @staticmethod
    def unexpected_token(token: str) -> tuple[str, str]:
        """Message and hint for a grammar token missing from the hint table.

        Args:
            token: Grammar token name reported after "got"

        Returns:
            (message, hint) pair embedding the token
        """
        return f'Syntax error: unexpected "{token}"', "Check the syntax near this position"

    @staticmethod
    def lexical_failure(line: int | None) -> ParsedDiagnostic:
        """Lexer could not tokenize the named line."""
        return ParsedDiagnostic(
            code=DiagnosticCode.LEXICAL_FAILURE,
            line=line,
            message="Unrecognized text or keyword",
            hint="Check for typos, invalid keywords, or unsupported syntax",
        )

    @staticmethod
    def unknown_diagram_type(first_line: str) -> ParsedDiagnostic:
        """No diagram-type keyword was detected.

        Args:
            first_line: First line of the fragment, trimmed

        Returns:
            ParsedDiagnostic for UNKNOWN_ENTRY_POINT at fragment line 1
        """
        display_line = first_line or "(empty)"
        return ParsedDiagnostic(
            code=DiagnosticCode.UNKNOWN_ENTRY_POINT,
            line=1,
            message=f'Unknown diagram type: "{display_line}"',
            hint=f"Valid types: {', '.join(MERMAID_DIAGRAM_TYPES)}",
            context=first_line[:CONTEXT_MAX_LENGTH] or None,
        )

    @staticmethod
    def unexpected_character(line: int, char: str) -> ParsedDiagnostic:
        """Parser rejected a single character."""
        return ParsedDiagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            line=line,
            message=f'Unexpected character "{char}"',
            hint="Check for typos, missing quotes, or invalid characters",
        )

    @staticmethod
    def expected_token(kind: str) -> ParsedDiagnostic:
        """Parser expected a specific token kind."""
        return ParsedDiagnostic(
            code=DiagnosticCode.EXPECTED_TOKEN,
            line=1,
            message=f"Expected {kind}",
            hint="Check the diagram syntax and structure",
        )

    @staticmethod
    def enumerated_alternatives() -> ParsedDiagnostic:
        """Parser listed the continuations it would have accepted."""
        return ParsedDiagnostic(
            code=DiagnosticCode.ENUMERATED_ALTERNATIVES_FAILURE,
            line=1,
            message="Invalid syntax",
            hint="Check command syntax (e.g., branch name, checkout target)",
        )

    @staticmethod
    def unknown_failure_format(raw_message: str) -> ParsedDiagnostic:
        """No cascade rule recognized the parser message.

        Args:
            raw_message: Parser message as received

        Returns:
            ParsedDiagnostic without a line, message truncated
        """
        message = raw_message.split("\n", 1)[0][:FALLBACK_MESSAGE_MAX_LENGTH]
        return ParsedDiagnostic(
            code=DiagnosticCode.UNKNOWN_FAILURE_FORMAT,
            message=message or "Unknown parse error",
            hint="Check the diagram syntax for errors",
        )

    # ------------------------------------------------------------------
    # Structured parser failures
    # ------------------------------------------------------------------

    @staticmethod
    def katex_hint(message: str) -> str | None:
        """Select a hint for a well-known KaTeX failure phrase.

        Args:
            message: KaTeX message with the tool prefix stripped

        Returns:
            Hint text, or None for unrecognized failures
        """
        for phrase, hint in ErrorTemplate._KATEX_HINTS:
            if phrase in message:
                return hint
        return None

    @staticmethod
    def positional_structured_failure(
        line: int | None, message: str, context: str | None
    ) -> ParsedDiagnostic:
        """KaTeX raised a ParseError."""
        message = message or "KaTeX parse error"
        return ParsedDiagnostic(
            code=DiagnosticCode.POSITIONAL_STRUCTURED_FAILURE,
            line=line,
            message=message,
            hint=ErrorTemplate.katex_hint(message),
            context=context,
        )

    @staticmethod
    def unknown_structured_failure(raw_message: str, context: str | None) -> ParsedDiagnostic:
        """KaTeX failed with something other than a ParseError."""
        return ParsedDiagnostic(
            code=DiagnosticCode.UNKNOWN_STRUCTURED_FAILURE,
            message=raw_message or "Unknown KaTeX parse error",
            context=context,
        )
