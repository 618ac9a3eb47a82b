"""Diagnostic formatting service.

Centralizes lint output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fencelint.lint import LintError

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format, one error per line
    JSON = "json"  # JSON lines for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Renders LintError objects into human-readable or machine-readable
    output.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)
        sanitize: Truncate context to prevent oversized output
        max_content_length: Maximum context length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format("README.md", error))
        README.md:4 mermaid-syntax Unclosed square bracket. Add closing ] ...
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False
    sanitize: bool = False
    max_content_length: int = 100

    def format(self, source: str, error: "LintError") -> str:
        """Format a single lint error.

        Args:
            source: Name of the linted document
            error: Lint error to format

        Returns:
            Formatted error string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(source, error)
            case OutputFormat.SIMPLE:
                return self._format_simple(source, error)
            case OutputFormat.JSON:
                return self._format_json(source, error)

    def format_all(self, source: str, errors: Iterable["LintError"]) -> str:
        """Format multiple lint errors of one document.

        Args:
            source: Name of the linted document
            errors: Lint errors to format

        Returns:
            Formatted string; rust blocks are separated by blank lines
        """
        separator = "\n\n" if self.output_format is OutputFormat.RUST else "\n"
        return separator.join(self.format(source, e) for e in errors)

    def _format_rust(self, source: str, error: "LintError") -> str:
        """Format error in Rust compiler style.

        Example output:
            error[mermaid-syntax]: Unclosed square bracket
              --> README.md:4
              |  C --> [D
              = help: Add closing ] to complete the node shape: A[text]
        """
        severity = "\033[1;31merror\033[0m" if self.color else "error"
        parts = [f"{severity}[{error.rule_name}]: {error.message}"]
        parts.append(f"  --> {source}:{error.line_number}")
        if error.context:
            parts.append(f"  |  {self._maybe_sanitize(error.context)}")
        if error.hint:
            parts.append(f"  = help: {error.hint}")
        return "\n".join(parts)

    def _format_simple(self, source: str, error: "LintError") -> str:
        """Format error in single-line format."""
        line = f"{source}:{error.line_number} {error.rule_name} {error.detail}"
        if error.context:
            line += f" [Context: {self._maybe_sanitize(error.context)}]"
        return line

    def _format_json(self, source: str, error: "LintError") -> str:
        """Format error as one JSON object."""
        data: dict[str, str | int | list[str]] = {
            "source": source,
            "line": error.line_number,
            "rule": error.rule_name,
            "rule_names": list(error.rule_names),
            "detail": error.detail,
            "message": error.message,
        }
        if error.hint:
            data["hint"] = error.hint
        if error.code is not None:
            data["code"] = error.code.name
        if error.context:
            data["context"] = self._maybe_sanitize(error.context)
        return json.dumps(data, ensure_ascii=False)

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
