"""Position utilities for fragment source code.

Converts character offsets reported by external parsers into line numbers
and short source excerpts for diagnostics.

A position that indexes a newline character belongs to the line that the
newline terminates. Both helpers below agree on this.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "first_line",
    "line_at_offset",
    "line_offset",
    "position_context",
    "utf16_to_index",
]


def line_offset(source: str, pos: int) -> int:
    """Get 0-based line number from character offset.

    Args:
        source: Fragment source text
        pos: Character offset in source

    Returns:
        0-based line number

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> line_offset(source, 0)   # Start of fragment
        0
        >>> line_offset(source, 5)   # The first newline
        0
        >>> line_offset(source, 6)   # Start of line2
        1

    Note:
        - Counts newline characters before position
        - Positions past the end are clamped to the source length
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))

    return source.count("\n", 0, pos)


def line_at_offset(source: str, offset: int) -> int:
    """Get 1-based line number by walking lines until offset is covered.

    Each line contributes its length plus one for the newline. A line
    covers offsets up to and including its terminating newline.

    Args:
        source: Fragment source text
        offset: Character offset reported by the parser

    Returns:
        1-based line number (last line + 1 when offset is past the end)

    Example:
        >>> line_at_offset("ab\\ncd", 1)
        1
        >>> line_at_offset("ab\\ncd", 2)   # The newline after "ab"
        1
        >>> line_at_offset("ab\\ncd", 3)
        2
    """
    line = 1
    pos = 0
    for code_line in source.split("\n"):
        if pos + len(code_line) >= offset:
            break
        pos += len(code_line) + 1
        line += 1
    return line


def position_context(source: str, pos: int, radius: int) -> str:
    """Get the characters around a position on a single line.

    Args:
        source: Fragment source text
        pos: Character offset of the failure
        radius: Characters to take on each side of pos

    Returns:
        Excerpt with newlines collapsed to spaces

    Example:
        >>> position_context("a\\nbcdef", 3, 2)
        ' bcd'
    """
    start = max(0, pos - radius)
    end = min(len(source), pos + radius)
    return source[start:end].replace("\n", " ")


def first_line(source: str) -> str:
    """Return the first line of source, stripped of surrounding whitespace."""
    return source.split("\n", 1)[0].strip()


def utf16_to_index(source: str, offset: int) -> int:
    """Convert a UTF-16 code-unit offset into a str index.

    JavaScript parsers count positions in UTF-16 code units, where a
    character outside the Basic Multilingual Plane takes two units and a
    Python str index counts it once.

    Args:
        source: Fragment source text
        offset: Code-unit offset reported by a JavaScript parser

    Returns:
        Index of the character starting at or after offset. Offsets past
        the end keep their distance from the end of source.

    Example:
        >>> utf16_to_index("\\U0001d538x", 2)
        1
        >>> utf16_to_index("abc", 2)
        2
    """
    if offset < 0:
        msg = f"Offset must be >= 0, got {offset}"
        raise ValueError(msg)
    units = 0
    for index, char in enumerate(source):
        if units >= offset:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(source) + max(0, offset - units)
