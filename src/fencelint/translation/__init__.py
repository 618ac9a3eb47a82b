"""Diagnostic translators: parser failures to ParsedDiagnostic.

Python 3.13+. Zero external dependencies.
"""

from .katex import strip_katex_prefix, translate_katex
from .mermaid import (
    TRANSLATION_RULES,
    TranslationRule,
    extract_context,
    translate_mermaid,
    translate_mermaid_failure,
)

__all__ = [
    "TRANSLATION_RULES",
    "TranslationRule",
    "extract_context",
    "strip_katex_prefix",
    "translate_katex",
    "translate_mermaid",
    "translate_mermaid_failure",
]
