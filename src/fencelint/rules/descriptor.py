"""Rule descriptor handed to the lint host.

The shape follows markdownlint custom rules: names, description, tags,
the tokenizer the rule expects, whether the rule function is a
coroutine, and the rule function itself.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeAlias
from dataclasses import dataclass, field

from fencelint.diagnostics.codes import ValidationError
from fencelint.extraction.tokens import DocumentToken

from .config import RuleConfig

__all__ = [
    "RuleDescriptor",
    "RuleFunction",
    "RuleParams",
]

RuleFunction: TypeAlias = Callable[["RuleParams", Callable[[ValidationError], None]], Awaitable[None] | None]


@dataclass(frozen=True, slots=True)
class RuleParams:
    """Input to a rule function.

    Attributes:
        tokens: Block tokens of the document, in document order
        config: Options for this rule
    """

    tokens: tuple[DocumentToken, ...]
    config: RuleConfig = field(default_factory=RuleConfig)


@dataclass(frozen=True, slots=True)
class RuleDescriptor:
    """A lint rule as seen by the host.

    Attributes:
        names: Rule name followed by its aliases
        description: One-line description
        tags: Rule tags
        asynchronous: True when function returns an awaitable
        function: Rule body; receives params and a report callback
        parser: Tokenizer the rule consumes
        close: Releases resources the rule acquired (optional)
    """

    names: tuple[str, ...]
    description: str
    tags: tuple[str, ...]
    asynchronous: bool
    function: RuleFunction
    parser: str = "markdownit"
    close: Callable[[], Awaitable[None]] | None = None

    def __post_init__(self) -> None:
        """Validate RuleDescriptor invariants.

        Raises:
            ValueError: If names is empty
        """
        if not self.names:
            msg = "RuleDescriptor.names must contain at least one name"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Primary rule name."""
        return self.names[0]
