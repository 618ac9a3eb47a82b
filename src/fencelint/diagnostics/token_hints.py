"""Grammar token hints for Mermaid parser failures.

Maps the token names that Mermaid's generated parsers report after
"got" to a user-facing message and a fix suggestion. The table is
read-only; lookups have no side effects.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from types import MappingProxyType

__all__ = [
    "TOKEN_HINTS",
    "TokenHint",
    "get_token_hint",
]


@dataclass(frozen=True, slots=True)
class TokenHint:
    """User-facing explanation of an unexpected grammar token.

    Attributes:
        message: What went wrong
        hint: How to fix it
    """

    message: str
    hint: str


_HINTS: dict[str, TokenHint] = {
    # Flowchart node shapes (unclosed brackets)
    "SQS": TokenHint(
        "Unclosed square bracket",
        "Add closing ] to complete the node shape: A[text]",
    ),
    "PS": TokenHint(
        "Unclosed parenthesis",
        "Add closing ) to complete the node shape: A(text) or A((text))",
    ),
    "DIAMOND_START": TokenHint(
        "Unclosed curly brace or diamond",
        "Add closing } to complete the shape: A{text} or A{{text}}",
    ),
    "SUBROUTINESTART": TokenHint(
        "Unclosed subroutine shape",
        "Add closing ]] to complete the subroutine: A[[text]]",
    ),
    "STADIUMSTART": TokenHint(
        "Unclosed stadium shape",
        "Add closing ]) to complete the stadium: A([text])",
    ),
    "CYLINDERSTART": TokenHint(
        "Unclosed cylinder shape",
        "Add closing ]) to complete the cylinder: A[(text)]",
    ),
    "DOUBLECIRCLESTART": TokenHint(
        "Unclosed double circle shape",
        "Add closing ))) to complete the double circle: A(((text)))",
    ),
    "TRAPSTART": TokenHint(
        "Unclosed trapezoid shape",
        "Add closing /] to complete the trapezoid: A[/text/]",
    ),
    "INVTRAPSTART": TokenHint(
        "Unclosed inverse trapezoid shape",
        "Add closing \\] to complete the inverse trapezoid: A[\\text\\]",
    ),
    "TAGEND": TokenHint(
        "Unclosed asymmetric shape",
        "Add closing ] to complete the asymmetric shape: A>text]",
    ),
    # Block structure (unclosed blocks); "1" is the jison end-of-input token
    "1": TokenHint(
        "Unclosed block",
        'Add "end" to close subgraph, loop, alt, opt, par, critical, rect, or state block',
    ),
    "EOF_IN_STRUCT": TokenHint(
        "Unclosed namespace or struct block",
        "Add closing } to complete the namespace or class definition",
    ),
    "STRUCT_START": TokenHint(
        "Invalid struct declaration",
        "Check class syntax: class ClassName { ... }",
    ),
    # General syntax
    "NODE_STRING": TokenHint(
        "Unexpected text",
        "Check for missing arrows (-->, ---) or invalid syntax",
    ),
    "NEWLINE": TokenHint(
        "Incomplete statement",
        "Add missing parts (e.g., colon for messages: Alice->>Bob: message)",
    ),
    "EOF": TokenHint(
        "Unexpected end of diagram",
        "Statement is incomplete - add missing node, message, or closing element",
    ),
    "LINK": TokenHint(
        "Missing link source",
        "Add source node before arrow: A --> B",
    ),
    # Sequence diagrams
    "ACTOR": TokenHint(
        "Invalid participant reference",
        "Check participant name in note/over statement",
    ),
    "TXT": TokenHint(
        "Missing message text",
        "Add message after colon: Alice->>Bob: Hello",
    ),
    # ER diagrams
    "IDENTIFYING": TokenHint(
        "Invalid ER relationship",
        "Use valid relationship: ||--o{, }o--||, etc.",
    ),
    "ONLY_ONE": TokenHint(
        "Invalid ER cardinality",
        "Check cardinality symbols: ||, |o, o|, }|, |{, etc.",
    ),
    "BLOCK_STOP": TokenHint(
        "Invalid ER attribute block",
        "Check attribute syntax: EntityName { type attrName }",
    ),
    # State diagrams
    "INVALID": TokenHint(
        "Invalid state transition",
        "Use --> for transitions: StateA --> StateB",
    ),
    # Gantt charts
    "taskData": TokenHint(
        "Invalid task data",
        "Check task format: taskName :status, startDate, duration",
    ),
    # Class diagrams
    "GENERICTYPE": TokenHint(
        "Invalid generic type",
        "Check generic syntax: class ClassName~Type~",
    ),
    "STYLE_SEPARATOR": TokenHint(
        "Invalid style syntax",
        "Check style definition syntax",
    ),
    # Git graphs
    "COMMIT_ID": TokenHint(
        "Invalid commit reference",
        'Use valid commit command: commit id: "message"',
    ),
    "COMMIT_TAG": TokenHint(
        "Invalid commit tag",
        'Use valid tag: commit tag: "v1.0"',
    ),
}

TOKEN_HINTS: MappingProxyType[str, TokenHint] = MappingProxyType(_HINTS)


def get_token_hint(token: str) -> TokenHint | None:
    """Look up the hint for a grammar token.

    Args:
        token: Token name exactly as the parser reported it (case-sensitive)

    Returns:
        TokenHint, or None when the token has no entry
    """
    return TOKEN_HINTS.get(token)
