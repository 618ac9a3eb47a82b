"""katex-syntax rule (alias math-syntax).

Validates LaTeX in math fences and HTML math carriers with KaTeX. The
rule is synchronous and has no basic mode: the basic option is ignored.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeAlias

from fencelint.backends.base import ParserAdapter
from fencelint.backends.katex import KatexAdapter
from fencelint.enums import ContentFamily
from fencelint.extraction.fragments import MATH_EXTRACTOR
from fencelint.translation.katex import default_context, translate_katex
from fencelint.validation.orchestrator import ContentPipeline, Orchestrator, Report

from .config import RuleConfig
from .descriptor import RuleDescriptor, RuleParams

__all__ = ["KATEX_SYNTAX_RULE", "KatexSyntaxRule", "make_katex_rule"]

logger = logging.getLogger(__name__)

AdapterFactory: TypeAlias = Callable[[RuleConfig], ParserAdapter]


def _default_adapter(config: RuleConfig) -> ParserAdapter:
    return KatexAdapter(display_mode=config.display_mode, strict=config.strict)


class KatexSyntaxRule:
    """Rule body; an adapter is built per call from the rule options."""

    def __init__(self, adapter_factory: AdapterFactory | None = None) -> None:
        """Initialize rule.

        Args:
            adapter_factory: Builds the adapter for a RuleConfig
                (default: KatexAdapter with displayMode and strict)
        """
        self.adapter_factory = adapter_factory if adapter_factory is not None else _default_adapter

    def __call__(self, params: RuleParams, report: Report) -> None:
        """Validate the math fragments of one document."""
        adapter = self.adapter_factory(params.config)
        pipeline = ContentPipeline(
            family=ContentFamily.MATH,
            extractor=MATH_EXTRACTOR,
            adapter=adapter,
            translator=translate_katex,
            default_context=default_context,
        )
        fragments = pipeline.extractor.extract(params.tokens)
        if params.config.basic:
            logger.debug("katex-syntax ignores the basic option")
        Orchestrator(pipeline).run_sync(fragments, report)


def make_katex_rule(adapter_factory: AdapterFactory | None = None) -> RuleDescriptor:
    """Create a katex-syntax rule descriptor.

    Args:
        adapter_factory: Builds the adapter for a RuleConfig

    Returns:
        Synchronous RuleDescriptor
    """
    return RuleDescriptor(
        names=("katex-syntax", "math-syntax"),
        description="KaTeX/LaTeX math syntax should be valid",
        tags=("math", "katex", "latex", "code"),
        asynchronous=False,
        function=KatexSyntaxRule(adapter_factory),
    )


KATEX_SYNTAX_RULE = make_katex_rule()
