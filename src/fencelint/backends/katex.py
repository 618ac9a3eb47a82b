"""KaTeX parser backend.

KaTeX parses synchronously and reports failures as katex.ParseError,
which carries a character position. The bridge runs katex.__parse (parse
only, no rendering) and serializes that exception.

Python 3.13+.
"""

import logging
from typing import Any, ClassVar

from fencelint.diagnostics.errors import BackendError, KatexParseError
from fencelint.position import utf16_to_index

from .base import ParserAdapter, RawFailure
from .node import NodeSettings, resolve_settings, run_node_script

__all__ = [
    "KATEX_BRIDGE_SCRIPT",
    "KatexAdapter",
    "KatexBackend",
]

logger = logging.getLogger(__name__)

KATEX_BRIDGE_SCRIPT = """
const katex = require('katex');

let input = '';
process.stdin.setEncoding('utf8');
process.stdin.on('data', (chunk) => { input += chunk; });
process.stdin.on('end', () => {
  const request = JSON.parse(input);
  try {
    katex.__parse(request.code, request.options);
    send({ ok: true });
  } catch (error) {
    if (error instanceof katex.ParseError) {
      const position = typeof error.position === 'number' ? error.position : null;
      send({ ok: false, name: 'ParseError', message: error.message, position });
    } else {
      const message = error instanceof Error ? error.message : 'Unknown KaTeX parse error';
      send({ ok: false, name: (error && error.name) || 'Error', message });
    }
  }
});
"""


class KatexBackend:
    """Synchronous KaTeX parse operation.

    Each call runs one short-lived Node.js process.
    """

    def __init__(self, settings: NodeSettings | None = None) -> None:
        """Initialize backend.

        Args:
            settings: Launch settings (default: read from the environment per call)
        """
        self.settings = settings

    def parse(self, code: str, *, display_mode: bool = False, strict: bool = False) -> None:
        """Parse a LaTeX expression.

        Args:
            code: Expression source
            display_mode: KaTeX displayMode option
            strict: KaTeX strict option

        Raises:
            KatexParseError: KaTeX raised ParseError
            BackendError: KaTeX failed in another way, or Node.js failed
        """
        settings = resolve_settings(self.settings)
        payload: dict[str, Any] = {
            "code": code,
            "options": {"displayMode": display_mode, "strict": strict},
        }
        reply = run_node_script(KATEX_BRIDGE_SCRIPT, payload, settings)
        if reply.get("ok"):
            return
        message = str(reply.get("message") or "Unknown KaTeX parse error")
        if reply.get("name") == "ParseError":
            position = reply.get("position")
            if not isinstance(position, int):
                raise KatexParseError(message)
            # KaTeX counts UTF-16 code units
            raise KatexParseError(message, utf16_to_index(code, position))
        raise BackendError(message)


class KatexAdapter(ParserAdapter):
    """Adapter for the synchronous KaTeX backend.

    ParseError failures become structured RawFailures carrying KaTeX's
    position; any other failure becomes an unstructured RawFailure.

    Attributes:
        display_mode: Forwarded to KaTeX as displayMode
        strict: Forwarded to KaTeX as strict
    """

    asynchronous: ClassVar[bool] = False
    name: ClassVar[str] = "katex"

    def __init__(
        self,
        backend: KatexBackend | None = None,
        *,
        display_mode: bool = False,
        strict: bool = False,
    ) -> None:
        """Initialize adapter.

        Args:
            backend: KaTeX backend (default: KatexBackend())
            display_mode: KaTeX displayMode option
            strict: KaTeX strict option
        """
        self.backend = backend if backend is not None else KatexBackend()
        self.display_mode = display_mode
        self.strict = strict

    def check(self, code: str) -> RawFailure | None:
        """Parse code with KaTeX.

        Returns:
            None on success, RawFailure otherwise
        """
        try:
            self.backend.parse(code, display_mode=self.display_mode, strict=self.strict)
        except KatexParseError as e:
            return RawFailure(raw_message=e.message, position=e.position, structured=True)
        except BackendError as e:
            logger.debug("KaTeX failed without ParseError: %s", e)
            return RawFailure(raw_message=str(e))
        return None
