"""Diagnostic codes and data structures.

Defines the failure taxonomy, the fragment-relative translator output,
and the document-absolute diagnostic handed to the host.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "DiagnosticCode",
    "ParsedDiagnostic",
    "ValidationError",
    "join_detail",
]


class DiagnosticCode(Enum):
    """Failure codes with unique identifiers.

    Organized by stage:
        1000-1099: Precheck failures (no parser involved)
        2000-2099: Free-text parser failures (Mermaid translator cascade)
        3000-3099: Structured parser failures (KaTeX position translator)
    """

    # Precheck failures (1000-1099)
    EMPTY_CONTENT = 1001
    MISSING_ENTRY_POINT = 1002

    # Free-text parser failures (2000-2099)
    POSITIONAL_PARSE_FAILURE = 2001
    LEXICAL_FAILURE = 2002
    UNKNOWN_ENTRY_POINT = 2003
    UNEXPECTED_CHARACTER = 2004
    EXPECTED_TOKEN = 2005
    ENUMERATED_ALTERNATIVES_FAILURE = 2006
    UNKNOWN_FAILURE_FORMAT = 2099

    # Structured parser failures (3000-3099)
    POSITIONAL_STRUCTURED_FAILURE = 3001
    UNKNOWN_STRUCTURED_FAILURE = 3099


def join_detail(message: str, hint: str | None) -> str:
    """Join a message and its optional hint into one sentence pair."""
    if hint:
        return f"{message}. {hint}"
    return message


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Document-absolute diagnostic reported to the host.

    Attributes:
        line_number: Absolute 1-based line in the full document
        message: Human-readable failure description
        hint: Suggestion for fixing the failure (optional)
        context: Short source excerpt (optional)
        code: Failure classification (optional for host-built errors)
    """

    line_number: int
    message: str
    hint: str | None = None
    context: str | None = None
    code: DiagnosticCode | None = None

    def __post_init__(self) -> None:
        """Validate ValidationError invariants.

        Raises:
            ValueError: If line_number is less than 1 (lines are 1-indexed)
        """
        if self.line_number < 1:
            msg = f"ValidationError.line_number must be >= 1, got {self.line_number}"
            raise ValueError(msg)

    @property
    def detail(self) -> str:
        """Message joined with the hint, as shown on one line."""
        return join_detail(self.message, self.hint)


@dataclass(frozen=True, slots=True)
class ParsedDiagnostic:
    """Fragment-relative output of a diagnostic translator.

    Attributes:
        code: Failure classification
        message: Human-readable failure description (never empty)
        line: 1-based line within the fragment (None when unknown)
        hint: Suggestion for fixing the failure
        context: Source excerpt near the failure
    """

    code: DiagnosticCode
    message: str
    line: int | None = None
    hint: str | None = None
    context: str | None = None

    def __post_init__(self) -> None:
        """Validate ParsedDiagnostic invariants.

        Raises:
            ValueError: If message is empty or line is less than 1
        """
        if not self.message:
            msg = f"ParsedDiagnostic.message must not be empty ({self.code.name})"
            raise ValueError(msg)
        if self.line is not None and self.line < 1:
            msg = f"ParsedDiagnostic.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)

    @property
    def detail(self) -> str:
        """Message joined with the hint, as shown to users."""
        return join_detail(self.message, self.hint)

    def to_validation_error(
        self,
        start_line: int,
        *,
        default_context: str | None = None,
    ) -> ValidationError:
        """Anchor this diagnostic to an absolute document line.

        Args:
            start_line: Absolute line of the fragment's carrier
            default_context: Context used when the translator found none

        Returns:
            ValidationError at start_line + line - 1 (start_line if line is None)
        """
        line_number = start_line + self.line - 1 if self.line is not None else start_line
        return ValidationError(
            line_number=line_number,
            message=self.message,
            hint=self.hint,
            context=self.context or default_context,
            code=self.code,
        )
