"""Tests for the extraction package: tokens, entities, and fragments.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given

from fencelint.enums import TokenKind
from fencelint.extraction import (
    MATH_EXTRACTOR,
    MERMAID_EXTRACTOR,
    DocumentToken,
    Fragment,
    HtmlCarrierPattern,
    decode_entities,
    tokenize_markdown,
)
from tests.strategies import mermaid_documents


def _mermaid(text: str) -> list[Fragment]:
    return MERMAID_EXTRACTOR.extract(tokenize_markdown(text))


def _math(text: str) -> list[Fragment]:
    return MATH_EXTRACTOR.extract(tokenize_markdown(text))


class TestDecodeEntities:
    """decode_entities replaces six named escapes in a fixed order."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("A --&gt; B", "A --> B"),
            ("a &lt; b", "a < b"),
            ("&quot;x&quot; &#39;y&#39;", "\"x\" 'y'"),
            ("a&nbsp;b", "a b"),
            ("Tom &amp; Jerry", "Tom & Jerry"),
        ],
    )
    def test_supported_entities(self, text: str, expected: str) -> None:
        assert decode_entities(text) == expected

    def test_unknown_entities_pass_through(self) -> None:
        assert decode_entities("&copy; &#x3C; &hellip;") == "&copy; &#x3C; &hellip;"

    def test_ampersand_is_decoded_after_angle_brackets(self) -> None:
        """An escaped escape decodes exactly once."""
        assert decode_entities("&amp;lt;") == "&lt;"


class TestTokenizeMarkdown:
    """tokenize_markdown yields block tokens with 1-based lines."""

    def test_fence_token(self) -> None:
        tokens = tokenize_markdown("# Title\n\n```mermaid\nflowchart LR\n```\n")
        fences = [t for t in tokens if t.kind is TokenKind.FENCE]
        assert len(fences) == 1
        assert fences[0].info.strip() == "mermaid"
        assert fences[0].content == "flowchart LR\n"
        assert fences[0].line_number == 3

    def test_html_block_token(self) -> None:
        tokens = tokenize_markdown('Text\n\n<div class="mermaid">\npie\n</div>\n')
        html = [t for t in tokens if t.kind is TokenKind.HTML_BLOCK]
        assert len(html) == 1
        assert html[0].line_number == 3

    def test_non_carrier_tokens_are_other(self) -> None:
        tokens = tokenize_markdown("Some *emphasis* here\n")
        assert all(isinstance(t, DocumentToken) for t in tokens)
        assert {t.kind for t in tokens} == {TokenKind.OTHER}


class TestFenceCarriers:
    """Fenced code blocks whose info string names the family."""

    def test_mermaid_fence(self) -> None:
        fragments = _mermaid("Intro\n\n```mermaid\nflowchart LR\n  A --> B\n```\n")
        assert fragments == [Fragment(code="flowchart LR\n  A --> B\n", start_line=3)]

    def test_info_string_is_trimmed_and_case_insensitive(self) -> None:
        fragments = _mermaid("```Mermaid\npie\n```\n")
        assert len(fragments) == 1

    def test_other_languages_are_ignored(self) -> None:
        assert _mermaid("```python\nprint(1)\n```\n") == []
        assert _mermaid("```mermaid-js\npie\n```\n") == []

    @pytest.mark.parametrize("tag", ["math", "latex", "tex", "katex"])
    def test_math_fences(self, tag: str) -> None:
        fragments = _math(f"```{tag}\nE = mc^2\n```\n")
        assert [f.code for f in fragments] == ["E = mc^2\n"]

    def test_empty_fence_is_extracted(self) -> None:
        assert _mermaid("```mermaid\n```\n") == [Fragment(code="", start_line=1)]


class TestHtmlCarriers:
    """HTML elements whose class attribute names the family."""

    def test_div_with_several_classes(self) -> None:
        text = 'Intro\n\n<div class="diagram mermaid wide">\nflowchart LR\n  A --&gt; B\n</div>\n'
        assert _mermaid(text) == [Fragment(code="flowchart LR\n  A --> B", start_line=3)]

    def test_tag_and_class_are_case_insensitive(self) -> None:
        fragments = _mermaid("<PRE CLASS='Mermaid'>\npie\n</PRE>\n")
        assert [f.code for f in fragments] == ["pie"]

    def test_class_keyword_must_be_a_whole_word(self) -> None:
        assert _mermaid('<div class="notmermaid">\npie\n</div>\n') == []

    def test_code_element_with_language_class(self) -> None:
        fragments = _mermaid('<pre><code class="language-mermaid">pie</code></pre>\n')
        assert [f.code for f in fragments] == ["pie"]

    def test_line_offset_within_token(self) -> None:
        text = (
            "<div>\n"
            '<pre class="mermaid">pie</pre>\n'
            "<p>between</p>\n"
            '<pre class="mermaid">\ngantt\n</pre>\n'
            "</div>\n"
        )
        assert _mermaid(text) == [
            Fragment(code="pie", start_line=2),
            Fragment(code="gantt", start_line=4),
        ]

    def test_fragments_grouped_by_tag_shape(self) -> None:
        """pre carriers are collected before div carriers within one token."""
        text = (
            "<section>\n"
            '<div class="mermaid">first</div>\n'
            '<pre class="mermaid">second</pre>\n'
            "</section>\n"
        )
        assert [f.code for f in _mermaid(text)] == ["second", "first"]

    def test_math_carriers(self) -> None:
        text = (
            '<div class="math">\n\\frac{1}{2}\n</div>\n\n'
            '<pre><code class="language-latex">x^2</code></pre>\n'
        )
        assert [(f.code, f.start_line) for f in _math(text)] == [
            ("\\frac{1}{2}", 1),
            ("x^2", 5),
        ]

    def test_carrier_split_by_blank_line_is_not_extracted(self) -> None:
        text = '<div class="mermaid">\nflowchart LR\n\n  A --> B\n</div>\n'
        assert _mermaid(text) == []

    def test_scan_uses_a_fresh_cursor_each_time(self) -> None:
        pattern = HtmlCarrierPattern("pre", "mermaid")
        html = '<pre class="mermaid">pie</pre>'
        assert pattern.scan(html, 1) == pattern.scan(html, 1) == [Fragment("pie", 1)]


class TestFragment:
    """Fragment invariants."""

    def test_start_line_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="start_line must be >= 1"):
            Fragment(code="pie", start_line=0)

    def test_trimmed_keeps_start_line(self) -> None:
        assert Fragment(code="\n  pie \n", start_line=7).trimmed() == Fragment("pie", 7)


class TestDocumentOrder:
    """Extraction preserves document order and carrier lines."""

    @given(mermaid_documents())
    def test_start_lines_match_carriers(self, case: tuple[str, list[int]]) -> None:
        text, starts = case
        assert [f.start_line for f in _mermaid(text)] == starts
