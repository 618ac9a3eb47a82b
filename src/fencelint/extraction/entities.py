"""HTML entity decoding for HTML-embedded fragments.

Only a closed set of named escapes is decoded; every other entity
(e.g. "&rarr;" inside a diagram label) is left as written.

Python 3.13+. Zero external dependencies.
"""

__all__ = ["decode_entities"]

# Applied in this order; "&amp;" is decoded after "&lt;"/"&gt;" so that
# "&amp;lt;" becomes the literal text "&lt;".
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)


def decode_entities(text: str) -> str:
    """Replace the supported named escapes with literal characters.

    Args:
        text: Inner text of an HTML carrier

    Returns:
        Decoded text; unrecognized escapes pass through unchanged

    Example:
        >>> decode_entities("A --&gt; B &copy;")
        'A --> B &copy;'
    """
    for entity, literal in _ENTITIES:
        text = text.replace(entity, literal)
    return text
