"""mermaid-syntax rule.

Validates Mermaid diagrams in fenced code blocks and HTML carriers. Full
mode parses every diagram with Mermaid; basic mode only checks that each
diagram is non-empty and starts with a diagram-type word.

Python 3.13+.
"""

from __future__ import annotations

import logging

from fencelint.backends.base import ParserAdapter
from fencelint.backends.mermaid import MermaidAdapter
from fencelint.enums import ContentFamily
from fencelint.extraction.fragments import MERMAID_EXTRACTOR
from fencelint.translation.mermaid import default_context, translate_mermaid_failure
from fencelint.validation.orchestrator import ContentPipeline, Orchestrator, Report

from .descriptor import RuleDescriptor, RuleParams

__all__ = ["MERMAID_SYNTAX_RULE", "MermaidSyntaxRule", "make_mermaid_rule"]

logger = logging.getLogger(__name__)


class MermaidSyntaxRule:
    """Rule body bound to one Mermaid adapter.

    The adapter, and with it the Node.js session, is shared by every
    document the rule checks.
    """

    def __init__(self, adapter: ParserAdapter | None = None) -> None:
        """Initialize rule.

        Args:
            adapter: Parser adapter (default: MermaidAdapter())
        """
        self.adapter = adapter if adapter is not None else MermaidAdapter()
        self.pipeline = ContentPipeline(
            family=ContentFamily.MERMAID,
            extractor=MERMAID_EXTRACTOR,
            adapter=self.adapter,
            translator=translate_mermaid_failure,
            default_context=default_context,
            supports_basic=True,
        )

    async def __call__(self, params: RuleParams, report: Report) -> None:
        """Validate the Mermaid fragments of one document."""
        fragments = self.pipeline.extractor.extract(params.tokens)
        await Orchestrator(self.pipeline).run(fragments, params.config.mode, report)

    async def aclose(self) -> None:
        """Release the adapter's backend, if it holds one."""
        if isinstance(self.adapter, MermaidAdapter):
            await self.adapter.aclose()


def make_mermaid_rule(adapter: ParserAdapter | None = None) -> RuleDescriptor:
    """Create a mermaid-syntax rule descriptor.

    Args:
        adapter: Parser adapter (default: MermaidAdapter())

    Returns:
        Asynchronous RuleDescriptor
    """
    body = MermaidSyntaxRule(adapter)
    return RuleDescriptor(
        names=("mermaid-syntax",),
        description="Mermaid diagram syntax should be valid",
        tags=("mermaid-diagram", "code"),
        asynchronous=True,
        function=body,
        close=body.aclose,
    )


MERMAID_SYNTAX_RULE = make_mermaid_rule()
