"""Mermaid parser backend.

Mermaid needs a browser-like DOM before it can be imported. The bridge
installs JSDOM globals once, imports mermaid, initializes it without
rendering, and then answers parse requests. That start-up is the
expensive part and is shared through one NodeRuntime.

Python 3.13+.
"""

import logging
from typing import ClassVar

from fencelint.diagnostics.errors import BackendError, MermaidParseError

from .base import ParserAdapter, RawFailure
from .node import NodeRuntime, NodeSettings

__all__ = [
    "MERMAID_BRIDGE_SCRIPT",
    "MermaidAdapter",
    "MermaidBackend",
]

logger = logging.getLogger(__name__)

MERMAID_BRIDGE_SCRIPT = """
const readline = require('node:readline');

(async () => {
  if (typeof globalThis.window === 'undefined') {
    const { JSDOM } = require('jsdom');
    const dom = new JSDOM('<!DOCTYPE html><html><body></body></html>', {
      pretendToBeVisual: true,
    });
    globalThis.window = dom.window;
    globalThis.document = dom.window.document;
    globalThis.DOMParser = dom.window.DOMParser;
  }
  const mermaid = (await import('mermaid')).default;
  mermaid.initialize({ startOnLoad: false, suppressErrorRendering: true });
  send({ ready: true });

  const input = readline.createInterface({ input: process.stdin });
  for await (const line of input) {
    if (!line.trim()) continue;
    const request = JSON.parse(line);
    try {
      await mermaid.parse(request.code);
      send({ id: request.id, ok: true });
    } catch (error) {
      const message = error instanceof Error ? error.message : 'Unknown parse error';
      send({ id: request.id, ok: false, message });
    }
  }
})().catch((error) => {
  send({ ready: false, message: String((error && error.message) || error) });
  process.exit(1);
});
"""


class MermaidBackend:
    """Async Mermaid parse operation over a shared Node.js session.

    Example:
        >>> backend = MermaidBackend()
        >>> await backend.parse("flowchart LR\\n  A --> B")   # no error
        >>> await backend.parse("flowchart LR\\n  A --> [B")
        Traceback (most recent call last):
        MermaidParseError: Parse error on line 2: ...
    """

    def __init__(self, runtime: NodeRuntime | None = None) -> None:
        """Initialize backend.

        Args:
            runtime: Session owner (default: a new NodeRuntime running
                the Mermaid bridge with settings from the environment)
        """
        self.runtime = runtime if runtime is not None else NodeRuntime(MERMAID_BRIDGE_SCRIPT)

    @classmethod
    def with_settings(cls, settings: NodeSettings) -> "MermaidBackend":
        """Create a backend with explicit Node.js settings."""
        return cls(NodeRuntime(MERMAID_BRIDGE_SCRIPT, settings))

    async def parse(self, code: str) -> None:
        """Parse a diagram.

        Raises:
            MermaidParseError: Mermaid rejected the diagram
            BackendError: The bridge could not be started or failed
        """
        session = await self.runtime.session()
        reply = await session.request({"code": code})
        if reply.get("ok"):
            return
        raise MermaidParseError(str(reply.get("message") or "Unknown parse error"))

    async def aclose(self) -> None:
        """Shut down the bridge session."""
        await self.runtime.aclose()


class MermaidAdapter(ParserAdapter):
    """Adapter for the asynchronous Mermaid backend.

    Mermaid failures carry free text only: RawFailure.position is None.
    Infrastructure failures are logged and reported through the same
    RawFailure path so the fragment is never dropped.
    """

    asynchronous: ClassVar[bool] = True
    name: ClassVar[str] = "mermaid"

    def __init__(self, backend: MermaidBackend | None = None) -> None:
        """Initialize adapter.

        Args:
            backend: Mermaid backend (default: MermaidBackend())
        """
        self.backend = backend if backend is not None else MermaidBackend()

    def check(self, code: str) -> RawFailure | None:
        """Not supported: Mermaid parsing requires an event loop.

        Raises:
            BackendError: Always
        """
        msg = "Mermaid backend is asynchronous; use acheck()"
        raise BackendError(msg)

    async def acheck(self, code: str) -> RawFailure | None:
        """Parse code with Mermaid.

        Returns:
            None on success, RawFailure with Mermaid's message otherwise
        """
        try:
            await self.backend.parse(code)
        except MermaidParseError as e:
            return RawFailure(raw_message=str(e))
        except BackendError as e:
            logger.error("Mermaid backend failure: %s", e)
            return RawFailure(raw_message=f"Mermaid parser unavailable: {e}")
        return None

    async def aclose(self) -> None:
        """Shut down the backend session."""
        await self.backend.aclose()
