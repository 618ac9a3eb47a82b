"""Translate free-text Mermaid failures into structured diagnostics.

Mermaid reports failures as prose produced by several different grammar
engines (jison-generated parsers, a Langium-based parser, the diagram
type detector). The translator is an ordered table of rules; the first
rule whose pattern matches the raw message produces the diagnostic.
Messages no rule recognizes fall through to UNKNOWN_FAILURE_FORMAT.

Python 3.13+. Zero external dependencies.
"""

import logging
import re
from collections.abc import Callable
from typing import TypeAlias
from dataclasses import dataclass

from fencelint.backends.base import RawFailure
from fencelint.constants import CONTEXT_MAX_LENGTH
from fencelint.diagnostics.codes import ParsedDiagnostic
from fencelint.diagnostics.templates import ErrorTemplate
from fencelint.diagnostics.token_hints import get_token_hint
from fencelint.position import first_line, line_at_offset, utf16_to_index

__all__ = [
    "TRANSLATION_RULES",
    "TranslationRule",
    "default_context",
    "extract_context",
    "translate_mermaid",
    "translate_mermaid_failure",
]

logger = logging.getLogger(__name__)

RuleHandler: TypeAlias = Callable[[re.Match[str], str, str], ParsedDiagnostic]

_EXPECTING_GOT = re.compile(r"Expecting .+?, got '([^']+)'")
_PARSE_ERROR_HEADER = re.compile(r"^Parse error on line \d+:\s*")
_ELLIPSIS_PREFIX = re.compile(r"^\.{3}")


@dataclass(frozen=True, slots=True)
class TranslationRule:
    """One entry of the translation cascade.

    Attributes:
        name: Rule identifier (used in debug logs)
        pattern: Compiled pattern searched anywhere in the raw message
        handler: Builds the diagnostic from (match, raw_message, code)
    """

    name: str
    pattern: re.Pattern[str]
    handler: RuleHandler


def extract_context(message_lines: list[str]) -> str | None:
    """Find the source excerpt a parser echoed above its caret marker.

    Args:
        message_lines: Raw message split into lines

    Returns:
        The line preceding the first line containing "^", without a
        leading "..." and stripped; None when there is no such line
    """
    for index, line in enumerate(message_lines):
        if "^" in line:
            if index > 0:
                return _ELLIPSIS_PREFIX.sub("", message_lines[index - 1]).strip()
            break
    return None


def default_context(code: str) -> str | None:
    """Context used when a diagnostic carries none: the first code line."""
    return code.split("\n", 1)[0][:CONTEXT_MAX_LENGTH] or None


# ----------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------


def _parse_error(match: re.Match[str], raw_message: str, code: str) -> ParsedDiagnostic:
    # Line 0 carries no usable location.
    line = int(match.group(1)) or None
    lines = raw_message.split("\n")

    expecting = _EXPECTING_GOT.search(raw_message)
    if expecting:
        token = expecting.group(1)
        token_hint = get_token_hint(token)
        if token_hint is not None:
            message, hint = token_hint.message, token_hint.hint
        else:
            message, hint = ErrorTemplate.unexpected_token(token)
    else:
        message, hint = _PARSE_ERROR_HEADER.sub("", lines[0]), None

    return ErrorTemplate.positional_parse_failure(
        line=line,
        message=message,
        hint=hint,
        context=extract_context(lines),
    )


def _lexical_error(match: re.Match[str], raw_message: str, code: str) -> ParsedDiagnostic:
    return ErrorTemplate.lexical_failure(int(match.group(1)) or None)


def _no_diagram_type(match: re.Match[str], raw_message: str, code: str) -> ParsedDiagnostic:
    return ErrorTemplate.unknown_diagram_type(first_line(code))


def _unexpected_character(
    match: re.Match[str], raw_message: str, code: str
) -> ParsedDiagnostic:
    char, offset = match.group(1), int(match.group(2))
    # Mermaid counts UTF-16 code units
    offset = utf16_to_index(code, offset)
    return ErrorTemplate.unexpected_character(line_at_offset(code, offset), char)


def _expected_token(match: re.Match[str], raw_message: str, code: str) -> ParsedDiagnostic:
    return ErrorTemplate.expected_token(match.group(1))


def _enumerated_alternatives(
    match: re.Match[str], raw_message: str, code: str
) -> ParsedDiagnostic:
    return ErrorTemplate.enumerated_alternatives()


# Order matters: first match wins.
TRANSLATION_RULES: tuple[TranslationRule, ...] = (
    TranslationRule(
        "parse-error",
        re.compile(r"Parse error on line (\d+):", re.IGNORECASE),
        _parse_error,
    ),
    TranslationRule(
        "lexical-error",
        re.compile(r"Lexical error on line (\d+)", re.IGNORECASE),
        _lexical_error,
    ),
    TranslationRule(
        "no-diagram-type",
        re.compile(re.escape("No diagram type detected")),
        _no_diagram_type,
    ),
    TranslationRule(
        "unexpected-character",
        re.compile(r"unexpected character: ->(.)<- at offset: (\d+)"),
        _unexpected_character,
    ),
    TranslationRule(
        "expected-token",
        re.compile(r"Expecting(?: token of type)? '?([^']+)'? but", re.IGNORECASE),
        _expected_token,
    ),
    TranslationRule(
        "enumerated-alternatives",
        re.compile(re.escape("Expecting: one of these possible")),
        _enumerated_alternatives,
    ),
)


def translate_mermaid(
    raw_message: str,
    code: str,
    rules: tuple[TranslationRule, ...] = TRANSLATION_RULES,
) -> ParsedDiagnostic:
    """Translate a Mermaid failure message.

    Args:
        raw_message: Failure message as Mermaid produced it
        code: Trimmed fragment code that failed to parse
        rules: Translation cascade (default: TRANSLATION_RULES)

    Returns:
        Fragment-relative ParsedDiagnostic

    Example:
        >>> diag = translate_mermaid(
        ...     "Parse error on line 2:\\n...A --> B[\\n-----------^\\n"
        ...     "Expecting 'SQE', got 'EOF'",
        ...     "flowchart LR\\nA --> B[",
        ... )
        >>> diag.line, diag.context
        (2, 'A --> B[')
    """
    for rule in rules:
        match = rule.pattern.search(raw_message)
        if match is not None:
            logger.debug("Mermaid failure matched rule %s", rule.name)
            return rule.handler(match, raw_message, code)

    logger.debug("Mermaid failure matched no rule: %.80s", raw_message)
    return ErrorTemplate.unknown_failure_format(raw_message)


def translate_mermaid_failure(failure: RawFailure, code: str) -> ParsedDiagnostic:
    """Translate adapter output; Mermaid failures carry only their message."""
    return translate_mermaid(failure.raw_message, code)
