"""Fragment extraction from fenced and HTML-embedded carriers.

Scans block tokens for code regions of one content family and records
each region with the absolute document line of its carrier.

Carriers:
    - Fenced code block whose info string matches a configured tag
    - HTML block element (pre, div, span, code) whose class attribute
      contains a configured keyword; other classes may coexist

Known boundary:
    The Markdown tokenizer ends an HTML block at a blank line. An HTML
    carrier containing a blank line is therefore split across tokens and
    each part is scanned on its own: parts are extracted as independent,
    incomplete fragments, or not at all when a part no longer has the
    element's closing tag.

Python 3.13+.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from fencelint.constants import MATH_FENCE_TAGS, MERMAID_FENCE_TAGS
from fencelint.enums import TokenKind

from .entities import decode_entities
from .tokens import DocumentToken

__all__ = [
    "MATH_EXTRACTOR",
    "MERMAID_EXTRACTOR",
    "Fragment",
    "FragmentExtractor",
    "HtmlCarrierPattern",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Fragment:
    """Extracted candidate code region pending validation.

    Attributes:
        code: Fragment source text
        start_line: 1-based absolute line of the carrier's first line
    """

    code: str
    start_line: int

    def __post_init__(self) -> None:
        """Validate Fragment invariants.

        Raises:
            ValueError: If start_line is less than 1 (lines are 1-indexed)
        """
        if self.start_line < 1:
            msg = f"Fragment.start_line must be >= 1, got {self.start_line}"
            raise ValueError(msg)

    def trimmed(self) -> "Fragment":
        """Return a copy with surrounding whitespace removed from code."""
        return Fragment(code=self.code.strip(), start_line=self.start_line)


@dataclass(frozen=True, slots=True)
class HtmlCarrierPattern:
    """One HTML tag shape that can carry a fragment.

    Attributes:
        element: Element name (e.g. "pre")
        class_keyword: Regex matched as a whole word inside the class
            attribute (e.g. "mermaid" or "language-(?:math|tex)")
    """

    element: str
    class_keyword: str
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Compile the tag-shape regex (case-insensitive, non-anchored)."""
        pattern = (
            rf"<{self.element}[^>]*\bclass\s*=\s*[\"'][^\"']*\b{self.class_keyword}\b"
            rf"[^\"']*[\"'][^>]*>([\s\S]*?)</{self.element}>"
        )
        object.__setattr__(self, "regex", re.compile(pattern, re.IGNORECASE))

    def scan(self, html: str, start_line: int) -> list[Fragment]:
        """Extract every carrier of this shape from one HTML token.

        Args:
            html: Raw HTML token content
            start_line: Document line of the token's first line

        Returns:
            Fragments with decoded, trimmed code
        """
        fragments: list[Fragment] = []
        for match in self.regex.finditer(html):
            line_offset = html.count("\n", 0, match.start())
            code = decode_entities(match.group(1)).strip()
            fragments.append(Fragment(code=code, start_line=start_line + line_offset))
        return fragments


@dataclass(frozen=True, slots=True)
class FragmentExtractor:
    """Collects the fragments of one content family from document tokens.

    Attributes:
        fence_tags: Lowercase fence info strings to match
        html_patterns: Tag shapes scanned in order within each HTML token
    """

    fence_tags: frozenset[str]
    html_patterns: tuple[HtmlCarrierPattern, ...] = ()

    def extract(self, tokens: Iterable[DocumentToken]) -> list[Fragment]:
        """Extract fragments in document order.

        Within one HTML token, fragments are grouped by tag shape in
        html_patterns order.

        Args:
            tokens: Block tokens in document order

        Returns:
            List of fragments (may be empty)
        """
        fragments: list[Fragment] = []
        for token in tokens:
            match token.kind:
                case TokenKind.FENCE:
                    if token.info.strip().lower() in self.fence_tags:
                        fragments.append(
                            Fragment(code=token.content, start_line=token.line_number)
                        )
                case TokenKind.HTML_BLOCK:
                    for pattern in self.html_patterns:
                        fragments.extend(pattern.scan(token.content, token.line_number))
                case _:
                    pass
        logger.debug("Extracted %d fragment(s)", len(fragments))
        return fragments


MERMAID_EXTRACTOR = FragmentExtractor(
    fence_tags=MERMAID_FENCE_TAGS,
    html_patterns=(
        HtmlCarrierPattern("pre", "mermaid"),
        HtmlCarrierPattern("div", "mermaid"),
        HtmlCarrierPattern("code", "language-mermaid"),
    ),
)

MATH_EXTRACTOR = FragmentExtractor(
    fence_tags=MATH_FENCE_TAGS,
    html_patterns=(
        HtmlCarrierPattern("span", "math"),
        HtmlCarrierPattern("div", "math"),
        HtmlCarrierPattern("code", "language-(?:math|latex|tex|katex)"),
    ),
)
