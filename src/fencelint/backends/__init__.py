"""External parser backends and their adapters.

Mermaid and KaTeX are JavaScript libraries; both are reached through a
Node.js process. Adapters normalize each parser's outcome to RawFailure.

Python 3.13+.
"""

from .base import ParserAdapter, RawFailure
from .katex import KATEX_BRIDGE_SCRIPT, KatexAdapter, KatexBackend
from .mermaid import MERMAID_BRIDGE_SCRIPT, MermaidAdapter, MermaidBackend
from .node import (
    NodeRuntime,
    NodeSession,
    NodeSettings,
    Session,
    resolve_settings,
    run_node_script,
)

__all__ = [
    "KATEX_BRIDGE_SCRIPT",
    "MERMAID_BRIDGE_SCRIPT",
    "KatexAdapter",
    "KatexBackend",
    "MermaidAdapter",
    "MermaidBackend",
    "NodeRuntime",
    "NodeSession",
    "NodeSettings",
    "ParserAdapter",
    "RawFailure",
    "Session",
    "resolve_settings",
    "run_node_script",
]
