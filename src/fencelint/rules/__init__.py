"""Lint rules for Mermaid diagrams and KaTeX math.

Python 3.13+.
"""

from .config import RuleConfig
from .descriptor import RuleDescriptor, RuleFunction, RuleParams
from .katex import KATEX_SYNTAX_RULE, KatexSyntaxRule, make_katex_rule
from .mermaid import MERMAID_SYNTAX_RULE, MermaidSyntaxRule, make_mermaid_rule

__all__ = [
    "KATEX_SYNTAX_RULE",
    "MERMAID_SYNTAX_RULE",
    "KatexSyntaxRule",
    "MermaidSyntaxRule",
    "RuleConfig",
    "RuleDescriptor",
    "RuleFunction",
    "RuleParams",
    "make_katex_rule",
    "make_mermaid_rule",
]
