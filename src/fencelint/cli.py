"""Command-line interface.

Usage:
    fencelint README.md docs/*.md
    fencelint --basic --format simple README.md
    fencelint --rule math-syntax --strict notes.md

Exit Codes:
    0   No errors reported
    1   At least one error reported
    2   Usage error, unreadable file, or invalid configuration

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from fencelint.diagnostics.errors import ConfigError
from fencelint.diagnostics.formatter import DiagnosticFormatter, OutputFormat
from fencelint.lint import DEFAULT_RULES, lint

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fencelint",
        description="Validate Mermaid diagrams and KaTeX math embedded in Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Parse every diagram and formula:
  fencelint README.md docs/guide.md

  # Structural Mermaid checks only (no Node.js needed for diagrams):
  fencelint --basic README.md

  # Only math, in display mode, one error per line:
  fencelint --rule katex-syntax --display-mode --format simple notes.md
""",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        metavar="PATH",
        help="Markdown files to lint",
    )
    parser.add_argument(
        "--basic",
        action="store_true",
        help="mermaid-syntax: check structure only, without the Mermaid parser",
    )
    parser.add_argument(
        "--display-mode",
        action="store_true",
        help="katex-syntax: parse math in display mode",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="katex-syntax: reject LaTeX that KaTeX only tolerates",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Output format (default: rust)",
    )
    parser.add_argument(
        "--rule",
        action="append",
        metavar="NAME",
        help="Run only this rule (name or alias; repeatable)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress (-v) or debug detail (-vv) to stderr",
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    rules = DEFAULT_RULES
    if args.rule:
        wanted = set(args.rule)
        known = {name for rule in DEFAULT_RULES for name in rule.names}
        unknown = sorted(wanted - known)
        if unknown:
            print(f"[ERROR] Unknown rule: {', '.join(unknown)}", file=sys.stderr)
            return 2
        rules = tuple(rule for rule in DEFAULT_RULES if wanted.intersection(rule.names))

    documents: dict[str, str] = {}
    for path in args.paths:
        try:
            documents[str(path)] = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"[ERROR] Cannot read {path}: {e}", file=sys.stderr)
            return 2

    config: dict[str, Any] = {
        "mermaid-syntax": {"basic": args.basic},
        "katex-syntax": {"displayMode": args.display_mode, "strict": args.strict},
    }
    try:
        results = lint(documents, rules=rules, config=config)
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    formatter = DiagnosticFormatter(
        output_format=OutputFormat(args.format),
        color=sys.stdout.isatty(),
    )
    error_count = 0
    for source, errors in results.items():
        if not errors:
            continue
        error_count += len(errors)
        print(formatter.format_all(source, errors))

    logger.info("%d error(s) in %d file(s)", error_count, len(documents))
    return 1 if error_count else 0


if __name__ == "__main__":
    sys.exit(main())
