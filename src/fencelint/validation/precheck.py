"""Checks that run before, or instead of, an external parser.

Python 3.13+. Zero external dependencies.
"""

import re

from fencelint.constants import MERMAID_COMMENT_PREFIX
from fencelint.diagnostics.codes import ValidationError
from fencelint.diagnostics.templates import ErrorTemplate
from fencelint.enums import ContentFamily
from fencelint.extraction.fragments import Fragment

__all__ = ["check_entry_point", "check_not_empty"]

_ENTRY_POINT = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*")


def check_not_empty(
    fragment: Fragment, family: ContentFamily
) -> tuple[Fragment | None, ValidationError | None]:
    """Reject fragments that are empty after trimming.

    Args:
        fragment: Fragment as extracted
        family: Content family (selects the remediation text)

    Returns:
        (trimmed fragment, None) on success, (None, error) otherwise.
        The error is reported at the fragment's original start line.
    """
    trimmed = fragment.trimmed()
    if not trimmed.code:
        return None, ErrorTemplate.empty_content(family, fragment.start_line)
    return trimmed, None


def check_entry_point(fragment: Fragment) -> ValidationError | None:
    """Require a diagram-type-shaped word on the first meaningful line.

    Blank lines and %% comment lines are skipped. Only the shape of the
    leading word is checked, not whether Mermaid knows it.

    Args:
        fragment: Trimmed, non-empty fragment

    Returns:
        None when a leading word is found, MISSING_ENTRY_POINT otherwise
    """
    lines = fragment.code.split("\n")
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(MERMAID_COMMENT_PREFIX):
            continue
        if _ENTRY_POINT.match(stripped):
            return None
        break
    return ErrorTemplate.missing_entry_point(fragment.start_line, lines[0])
