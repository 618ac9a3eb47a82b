"""Document tokens consumed by fragment extraction.

The Markdown tokenizer is markdown-it-py; this module narrows its block
tokens to the read-only records the extractor needs.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt

from fencelint.enums import TokenKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from markdown_it.token import Token

__all__ = [
    "DocumentToken",
    "create_markdown_parser",
    "tokenize_markdown",
]

_KINDS: dict[str, TokenKind] = {
    "fence": TokenKind.FENCE,
    "html_block": TokenKind.HTML_BLOCK,
}


@dataclass(frozen=True, slots=True)
class DocumentToken:
    """Block token as produced by the Markdown tokenizer.

    Attributes:
        kind: Fence, HTML block, or any other block
        info: Fence info string (language tag); empty for other kinds
        content: Raw token content
        line_number: 1-based document line where the token starts
    """

    kind: TokenKind
    info: str
    content: str
    line_number: int

    @classmethod
    def from_markdown_it(cls, token: Token) -> DocumentToken:
        """Convert a markdown-it-py block token.

        Args:
            token: Token from MarkdownIt.parse()

        Returns:
            DocumentToken with 1-based line number (token.map is 0-based)
        """
        line_number = token.map[0] + 1 if token.map else 1
        return cls(
            kind=_KINDS.get(token.type, TokenKind.OTHER),
            info=token.info,
            content=token.content,
            line_number=line_number,
        )


def create_markdown_parser() -> MarkdownIt:
    """Create the CommonMark tokenizer used by the lint host.

    The commonmark preset keeps raw HTML blocks, which carry the
    HTML-embedded fragments.
    """
    return MarkdownIt("commonmark")


def tokenize_markdown(text: str, md: MarkdownIt | None = None) -> list[DocumentToken]:
    """Tokenize a Markdown document into block-level DocumentTokens.

    Args:
        text: Markdown source
        md: Parser to use (default: create_markdown_parser())

    Returns:
        Tokens in document order; inline children are not included
    """
    parser = md if md is not None else create_markdown_parser()
    return _convert(parser.parse(text))


def _convert(tokens: Iterable[Token]) -> list[DocumentToken]:
    return [DocumentToken.from_markdown_it(token) for token in tokens if token.block]
