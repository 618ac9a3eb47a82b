"""fencelint - Markdown lint rules for embedded Mermaid diagrams and KaTeX math.

Extracts diagram and formula fragments from fenced code blocks and HTML
carriers, validates them with the real Mermaid and KaTeX parsers, and
reports failures with document line numbers, short explanations, and
fix hints.

Public API:
    lint - Lint Markdown documents (synchronous)
    lint_async - Lint Markdown documents from a coroutine
    LintError - One reported failure
    MERMAID_SYNTAX_RULE - mermaid-syntax rule
    KATEX_SYNTAX_RULE - katex-syntax (math-syntax) rule
    RuleConfig - Rule options

Exceptions:
    FencelintError - Base exception class
    ConfigError - Invalid rule options or backend settings
    BackendError - Node.js bridge failures

Submodules:
    fencelint.extraction - Markdown tokens and fragment extraction
    fencelint.backends - Mermaid and KaTeX parser adapters
    fencelint.translation - Parser failures to diagnostics
    fencelint.validation - Precheck and validation orchestration
    fencelint.diagnostics - Codes, templates, and output formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import BackendError, ConfigError, FencelintError, ValidationError
from .lint import LintError, lint, lint_async
from .rules import KATEX_SYNTAX_RULE, MERMAID_SYNTAX_RULE, RuleConfig

# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("fencelint")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "KATEX_SYNTAX_RULE",
    "MERMAID_SYNTAX_RULE",
    "BackendError",
    "ConfigError",
    "FencelintError",
    "LintError",
    "RuleConfig",
    "ValidationError",
    "__version__",
    "lint",
    "lint_async",
]
