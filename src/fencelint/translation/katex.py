"""Translate KaTeX failures into structured diagnostics.

KaTeX's ParseError carries a character offset, so no message parsing
is needed to locate the failure: the line is derived from the offset
and the context is the text around it.

Python 3.13+. Zero external dependencies.
"""

import re

from fencelint.backends.base import RawFailure
from fencelint.constants import CONTEXT_MAX_LENGTH, POSITION_CONTEXT_RADIUS
from fencelint.diagnostics.codes import ParsedDiagnostic
from fencelint.diagnostics.templates import ErrorTemplate
from fencelint.position import line_offset, position_context

__all__ = ["default_context", "strip_katex_prefix", "translate_katex"]

_KATEX_PREFIX = re.compile(r"^KaTeX parse error:\s*", re.IGNORECASE)


def strip_katex_prefix(message: str) -> str:
    """Remove the "KaTeX parse error:" prefix KaTeX puts on every message."""
    return _KATEX_PREFIX.sub("", message)


def default_context(code: str) -> str | None:
    """KaTeX diagnostics never borrow context from the fragment."""
    return None


def translate_katex(failure: RawFailure, code: str) -> ParsedDiagnostic:
    """Translate a KaTeX failure.

    Args:
        failure: Adapter output for the failed fragment
        code: Trimmed fragment code

    Returns:
        Fragment-relative ParsedDiagnostic

    Example:
        >>> failure = RawFailure(
        ...     "KaTeX parse error: Undefined control sequence: \\\\foo at position 5",
        ...     position=4, structured=True,
        ... )
        >>> translate_katex(failure, "a +\\n\\\\foo").line
        2
    """
    if not failure.structured:
        return ErrorTemplate.unknown_structured_failure(
            failure.raw_message, code[:CONTEXT_MAX_LENGTH] or None
        )

    message = strip_katex_prefix(failure.raw_message)
    position = failure.position
    if position is None or position < 0:
        return ErrorTemplate.positional_structured_failure(None, message, None)

    return ErrorTemplate.positional_structured_failure(
        line_offset(code, position) + 1,
        message,
        position_context(code, position, POSITION_CONTEXT_RADIUS),
    )
