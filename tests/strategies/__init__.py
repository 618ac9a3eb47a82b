"""Hypothesis strategies for fencelint property-based testing.

Usage:
    from tests.strategies import mermaid_fragments, source_text
"""

from .fragments import (
    blank_code,
    invalid_diagrams,
    mermaid_documents,
    mermaid_fragments,
    node_names,
    source_text,
    start_lines,
    valid_diagrams,
)

__all__ = [
    "blank_code",
    "invalid_diagrams",
    "mermaid_documents",
    "mermaid_fragments",
    "node_names",
    "source_text",
    "start_lines",
    "valid_diagrams",
]
