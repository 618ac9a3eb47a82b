"""Enumerations for fencelint type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class TokenKind(StrEnum):
    """Kind of document token relevant to fragment extraction.

    Values match markdown-it token types: str(TokenKind.FENCE) == "fence"
    """

    FENCE = "fence"
    """Fenced code block: ```mermaid ... ```"""

    HTML_BLOCK = "html_block"
    """Raw HTML block: <pre class="mermaid">...</pre>"""

    OTHER = "other"
    """Any token that cannot carry a fragment"""


class ValidationMode(StrEnum):
    """How the orchestrator validates a set of fragments.

    StrEnum provides automatic string conversion: str(ValidationMode.BASIC) == "basic"
    """

    BASIC = "basic"
    """Structural check only; the external parser is never invoked"""

    FULL = "full"
    """Parser-backed validation with all errors collected"""


class ContentFamily(StrEnum):
    """Content type whose fragments a pipeline validates."""

    MERMAID = "mermaid"
    """Mermaid diagrams"""

    MATH = "math"
    """KaTeX/LaTeX math expressions"""


__all__ = [
    "ContentFamily",
    "TokenKind",
    "ValidationMode",
]
