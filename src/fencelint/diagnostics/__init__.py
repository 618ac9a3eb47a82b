"""Diagnostic system for embedded-fragment validation.

Provides the failure taxonomy, message templates, grammar token hints,
and output formatting.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import DiagnosticCode, ParsedDiagnostic, ValidationError
from .errors import (
    BackendError,
    BackendUnavailableError,
    ConfigError,
    FencelintError,
    KatexParseError,
    MermaidParseError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .token_hints import TOKEN_HINTS, TokenHint, get_token_hint

__all__ = [
    "TOKEN_HINTS",
    "BackendError",
    "BackendUnavailableError",
    "ConfigError",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FencelintError",
    "KatexParseError",
    "MermaidParseError",
    "OutputFormat",
    "ParsedDiagnostic",
    "TokenHint",
    "ValidationError",
    "get_token_hint",
]
