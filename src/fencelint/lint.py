"""Lint host: runs rules over Markdown documents.

A minimal markdownlint-style host. Each document is tokenized once and
every enabled rule receives the block tokens plus its own options.
Synchronous rules run inside the same event loop without suspending.

Example:
    >>> from fencelint import lint
    >>> results = lint({"README.md": "```mermaid\\nflowchart LR\\n  A --> [B\\n```\\n"})
    >>> [e.line_number for e in results["README.md"]]
    [2]

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from markdown_it import MarkdownIt

from fencelint.diagnostics.codes import DiagnosticCode, ValidationError, join_detail
from fencelint.diagnostics.errors import ConfigError
from fencelint.extraction.tokens import create_markdown_parser, tokenize_markdown
from fencelint.rules.config import RuleConfig
from fencelint.rules.descriptor import RuleDescriptor, RuleParams
from fencelint.rules.katex import KATEX_SYNTAX_RULE
from fencelint.rules.mermaid import MERMAID_SYNTAX_RULE

__all__ = [
    "DEFAULT_RULES",
    "LintError",
    "lint",
    "lint_async",
]

logger = logging.getLogger(__name__)

DEFAULT_RULES: tuple[RuleDescriptor, ...] = (MERMAID_SYNTAX_RULE, KATEX_SYNTAX_RULE)

RuleOptions: TypeAlias = Mapping[str, Any] | bool | None


@dataclass(frozen=True, slots=True)
class LintError:
    """A ValidationError attributed to the rule that reported it.

    Attributes:
        rule_names: Names of the reporting rule (primary name first)
        line_number: Absolute 1-based line in the document
        message: Human-readable failure description
        hint: Suggestion for fixing the failure (optional)
        context: Source excerpt (optional)
        code: Failure classification (optional)
    """

    rule_names: tuple[str, ...]
    line_number: int
    message: str
    hint: str | None = None
    context: str | None = None
    code: DiagnosticCode | None = None

    @property
    def rule_name(self) -> str:
        """Primary name of the reporting rule."""
        return self.rule_names[0]

    @property
    def detail(self) -> str:
        """Message joined with the hint."""
        return join_detail(self.message, self.hint)

    @classmethod
    def from_validation_error(cls, rule: RuleDescriptor, error: ValidationError) -> LintError:
        """Attribute a ValidationError to a rule."""
        return cls(
            rule_names=rule.names,
            line_number=error.line_number,
            message=error.message,
            hint=error.hint,
            context=error.context,
            code=error.code,
        )


def _rule_options(rule: RuleDescriptor, config: Mapping[str, RuleOptions]) -> RuleOptions:
    for name in rule.names:
        if name in config:
            return config[name]
    return None


def _resolve_rules(
    rules: Iterable[RuleDescriptor], config: Mapping[str, RuleOptions]
) -> list[tuple[RuleDescriptor, RuleConfig]]:
    """Pair each enabled rule with its parsed options.

    Raises:
        ConfigError: If a rule's options are malformed
    """
    enabled: list[tuple[RuleDescriptor, RuleConfig]] = []
    for rule in rules:
        options = _rule_options(rule, config)
        if options is False:
            logger.debug("Rule %s disabled", rule.name)
            continue
        if options is None or options is True:
            enabled.append((rule, RuleConfig()))
            continue
        if not isinstance(options, Mapping):
            msg = f"Options for rule {rule.name!r} must be a mapping or boolean, got {options!r}"
            raise ConfigError(msg)
        enabled.append((rule, RuleConfig.from_mapping(options)))
    return enabled


async def _run_rule(
    rule: RuleDescriptor, params: RuleParams, errors: list[LintError]
) -> None:
    def report(error: ValidationError) -> None:
        errors.append(LintError.from_validation_error(rule, error))

    if rule.asynchronous:
        await rule.function(params, report)  # type: ignore[misc]
    else:
        rule.function(params, report)


async def lint_async(
    strings: Mapping[str, str],
    *,
    rules: Iterable[RuleDescriptor] = DEFAULT_RULES,
    config: Mapping[str, RuleOptions] | None = None,
    md: MarkdownIt | None = None,
) -> dict[str, list[LintError]]:
    """Lint Markdown documents.

    Args:
        strings: Document name -> Markdown text
        rules: Rules to run (default: mermaid-syntax and katex-syntax)
        config: Rule name or alias -> options mapping; True enables a
            rule with default options, False disables it
        md: Markdown tokenizer (default: CommonMark parser)

    Returns:
        Document name -> errors sorted by line number

    Raises:
        ConfigError: If rule options are malformed
    """
    enabled = _resolve_rules(rules, config or {})
    parser = md if md is not None else create_markdown_parser()
    results: dict[str, list[LintError]] = {}

    try:
        for name, text in strings.items():
            tokens = tuple(tokenize_markdown(text, parser))
            errors: list[LintError] = []
            for rule, rule_config in enabled:
                logger.debug("Running %s on %s", rule.name, name)
                await _run_rule(rule, RuleParams(tokens=tokens, config=rule_config), errors)
            errors.sort(key=lambda e: e.line_number)
            results[name] = errors
    finally:
        for rule, _ in enabled:
            if rule.close is not None:
                await rule.close()

    return results


def lint(
    strings: Mapping[str, str],
    *,
    rules: Iterable[RuleDescriptor] = DEFAULT_RULES,
    config: Mapping[str, RuleOptions] | None = None,
    md: MarkdownIt | None = None,
) -> dict[str, list[LintError]]:
    """Lint Markdown documents from synchronous code.

    Runs lint_async() in a new event loop; see lint_async() for
    arguments.
    """
    return asyncio.run(lint_async(strings, rules=rules, config=config, md=md))
