"""Parser adapter interface.

Every external parser is wrapped by a ParserAdapter that turns the
parser's outcome into None (success) or a RawFailure. Backend-specific
detail (a numeric offset, whether the failure was the parser's own
structured exception) travels as optional fields on RawFailure.

Python 3.13+. Zero external dependencies.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

__all__ = [
    "ParserAdapter",
    "RawFailure",
]


@dataclass(frozen=True, slots=True)
class RawFailure:
    """Adapter-normalized view of a parser failure.

    Attributes:
        raw_message: Failure message as the parser produced it
        position: 0-based character offset into the fragment code
            (only parsers with structured exceptions report one)
        structured: True when the parser raised its own structured
            parse exception rather than an arbitrary error
    """

    raw_message: str
    position: int | None = None
    structured: bool = False


class ParserAdapter(ABC):
    """Uniform entry point to one external grammar parser.

    Subclasses implement check() for parsers that never suspend, or
    override acheck() for parsers that need an event loop. Both return
    None when the code parses and a RawFailure otherwise; parser
    exceptions never escape an adapter.
    """

    asynchronous: ClassVar[bool] = False
    name: ClassVar[str] = "parser"

    @abstractmethod
    def check(self, code: str) -> RawFailure | None:
        """Parse code synchronously.

        Args:
            code: Trimmed fragment code

        Returns:
            None on success, RawFailure on parse failure
        """

    async def acheck(self, code: str) -> RawFailure | None:
        """Parse code from a coroutine.

        Default implementation calls check() without suspending.
        """
        return self.check(code)
