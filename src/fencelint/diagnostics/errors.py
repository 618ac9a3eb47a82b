"""fencelint exception hierarchy.

Exceptions never reach the lint host: parser failures are converted to
ValidationError at the adapter boundary. These types describe failures
inside that boundary and configuration mistakes.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "BackendError",
    "BackendUnavailableError",
    "ConfigError",
    "FencelintError",
    "KatexParseError",
    "MermaidParseError",
]


class FencelintError(Exception):
    """Base exception for all fencelint errors."""


class ConfigError(FencelintError, ValueError):
    """Invalid rule or backend configuration.

    Raised when a rule option has the wrong type or a backend setting
    is out of range.
    """


class BackendError(FencelintError):
    """External parser runtime failed outside of a parse failure.

    Examples:
    - The Node.js session exited unexpectedly
    - The bridge replied with malformed JSON
    - An async-only backend was called synchronously
    """


class BackendUnavailableError(BackendError):
    """External parser runtime could not be started.

    Raised when the Node.js executable is missing or the parser
    package cannot be imported by the bridge script.
    """


class MermaidParseError(FencelintError):
    """Parse failure reported by Mermaid.

    Mermaid reports failures as free text only. The message keeps the
    parser's own layout (header line, source excerpt, caret marker,
    expectation line) for the translator to classify.
    """


class KatexParseError(FencelintError):
    """Structured parse failure reported by KaTeX.

    Mirrors katex.ParseError: a message and, when KaTeX knows it,
    the character offset of the failure in the parsed expression.

    Attributes:
        position: 0-based str index into the expression (optional), already
            converted from KaTeX's UTF-16 code-unit count
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        """Initialize KatexParseError.

        Args:
            message: KaTeX error message, including its "KaTeX parse error:" prefix
            position: Character offset of the failure, when reported
        """
        super().__init__(message)
        self.message = message
        self.position = position
