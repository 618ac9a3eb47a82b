"""Fragment extraction from Markdown block tokens.

Python 3.13+.
"""

from .entities import decode_entities
from .fragments import (
    MATH_EXTRACTOR,
    MERMAID_EXTRACTOR,
    Fragment,
    FragmentExtractor,
    HtmlCarrierPattern,
)
from .tokens import DocumentToken, create_markdown_parser, tokenize_markdown

__all__ = [
    "MATH_EXTRACTOR",
    "MERMAID_EXTRACTOR",
    "DocumentToken",
    "Fragment",
    "FragmentExtractor",
    "HtmlCarrierPattern",
    "create_markdown_parser",
    "decode_entities",
    "tokenize_markdown",
]
