"""Shared constants for fencelint.

Centralizes the limits and keyword lists used across extraction,
translation and validation. Placing them here avoids circular imports
between the translator and the rule modules.

Constants are grouped by domain:
- Context limits: how much source text a diagnostic carries
- Content families: fence tags and HTML class keywords
- Entry points: Mermaid diagram-type keywords

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Context limits
    "CONTEXT_MAX_LENGTH",
    "FALLBACK_MESSAGE_MAX_LENGTH",
    "POSITION_CONTEXT_RADIUS",
    # Content families
    "MERMAID_FENCE_TAGS",
    "MATH_FENCE_TAGS",
    # Entry points
    "MERMAID_DIAGRAM_TYPES",
    "MERMAID_COMMENT_PREFIX",
]

# ============================================================================
# CONTEXT LIMITS
# ============================================================================

# Maximum characters of source line attached to a diagnostic as context.
CONTEXT_MAX_LENGTH: int = 40

# Maximum characters kept from an unclassified parser message.
FALLBACK_MESSAGE_MAX_LENGTH: int = 150

# Characters taken on each side of a structured failure position.
POSITION_CONTEXT_RADIUS: int = 15

# ============================================================================
# CONTENT FAMILIES
# ============================================================================

MERMAID_FENCE_TAGS: frozenset[str] = frozenset({"mermaid"})

# All aliases route to the same KaTeX pipeline.
MATH_FENCE_TAGS: frozenset[str] = frozenset({"math", "latex", "tex", "katex"})

# ============================================================================
# ENTRY POINTS
# ============================================================================

# Order is the order shown to users in "Valid types" hints.
MERMAID_DIAGRAM_TYPES: tuple[str, ...] = (
    "flowchart",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "erDiagram",
    "gantt",
    "pie",
    "mindmap",
    "timeline",
    "gitGraph",
)

MERMAID_COMMENT_PREFIX: str = "%%"
