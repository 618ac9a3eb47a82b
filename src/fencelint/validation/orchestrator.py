"""Validation orchestrator.

Runs every fragment of one content family through the precheck, the
family's parser adapter and its translator, and reports each failure
as a document-absolute ValidationError.

Modes:
    basic: precheck plus leading-token check, synchronous, the parser
        is never invoked
    full (async adapter): all fragments are validated concurrently and
        failures are reported in fragment order once all have finished
    full (sync adapter): fragments are validated one after another and
        each failure is reported immediately

No method raises to its caller: unexpected adapter or translator
exceptions are logged and reported as ordinary failures.

Python 3.13+.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import TypeAlias
from dataclasses import dataclass

from fencelint.backends.base import ParserAdapter, RawFailure
from fencelint.diagnostics.codes import ParsedDiagnostic, ValidationError
from fencelint.diagnostics.templates import ErrorTemplate
from fencelint.enums import ContentFamily, ValidationMode
from fencelint.extraction.fragments import Fragment, FragmentExtractor

from .precheck import check_entry_point, check_not_empty

__all__ = [
    "ContentPipeline",
    "Orchestrator",
    "Report",
    "Translator",
]

logger = logging.getLogger(__name__)

Report: TypeAlias = Callable[[ValidationError], None]
Translator: TypeAlias = Callable[[RawFailure, str], ParsedDiagnostic]
ContextFallback: TypeAlias = Callable[[str], str | None]


@dataclass(frozen=True, slots=True)
class ContentPipeline:
    """Everything needed to validate one content family.

    Attributes:
        family: Content family (selects precheck texts)
        extractor: Collects the family's fragments from block tokens
        adapter: External parser
        translator: Turns adapter failures into diagnostics
        default_context: Context for diagnostics that carry none
        supports_basic: Whether basic mode applies to this family
    """

    family: ContentFamily
    extractor: FragmentExtractor
    adapter: ParserAdapter
    translator: Translator
    default_context: ContextFallback
    supports_basic: bool = False


class Orchestrator:
    """Drives the validation of extracted fragments.

    Example:
        >>> orchestrator = Orchestrator(pipeline)
        >>> errors = []
        >>> await orchestrator.run(fragments, ValidationMode.FULL, errors.append)
    """

    def __init__(self, pipeline: ContentPipeline) -> None:
        """Initialize orchestrator.

        Args:
            pipeline: Family-specific components
        """
        self.pipeline = pipeline

    async def run(
        self,
        fragments: Iterable[Fragment],
        mode: ValidationMode,
        report: Report,
    ) -> None:
        """Validate fragments in the requested mode.

        Basic mode falls back to full validation for families that do
        not support it. Full validation with a synchronous adapter never
        suspends.

        Args:
            fragments: Fragments in document order
            mode: Validation mode
            report: Receives each failure
        """
        if mode is ValidationMode.BASIC:
            if self.pipeline.supports_basic:
                self.run_basic(fragments, report)
                return
            logger.debug("Basic mode not supported for %s; validating fully", self.pipeline.family)

        if self.pipeline.adapter.asynchronous:
            await self.run_full(fragments, report)
        else:
            self.run_sync(fragments, report)

    def run_basic(self, fragments: Iterable[Fragment], report: Report) -> None:
        """Validate fragments without the parser.

        Args:
            fragments: Fragments in document order
            report: Receives each failure as soon as it is found
        """
        for fragment in fragments:
            trimmed, error = check_not_empty(fragment, self.pipeline.family)
            if trimmed is not None:
                error = check_entry_point(trimmed)
            if error is not None:
                report(error)

    async def run_full(self, fragments: Iterable[Fragment], report: Report) -> None:
        """Validate all fragments concurrently.

        Every fragment's validation is started before any result is
        used; failures are reported in fragment order after all
        validations have finished.

        Args:
            fragments: Fragments in document order
            report: Receives each failure
        """
        tasks = [self._validate_async(fragment) for fragment in fragments]
        if not tasks:
            return
        logger.debug("Validating %d %s fragment(s) concurrently", len(tasks), self.pipeline.family)
        results = await asyncio.gather(*tasks)
        for error in results:
            if error is not None:
                report(error)

    def run_sync(self, fragments: Iterable[Fragment], report: Report) -> None:
        """Validate fragments one after another with a synchronous adapter.

        Args:
            fragments: Fragments in document order
            report: Receives each failure as soon as it is found
        """
        for fragment in fragments:
            error = self._validate_sync(fragment)
            if error is not None:
                report(error)

    # ------------------------------------------------------------------
    # Per-fragment validation
    # ------------------------------------------------------------------

    async def _validate_async(self, fragment: Fragment) -> ValidationError | None:
        trimmed, error = check_not_empty(fragment, self.pipeline.family)
        if trimmed is None:
            return error
        try:
            failure = await self.pipeline.adapter.acheck(trimmed.code)
        except Exception as e:  # pylint: disable=broad-exception-caught
            failure = self._adapter_defect(e)
        return self._to_error(failure, trimmed)

    def _validate_sync(self, fragment: Fragment) -> ValidationError | None:
        trimmed, error = check_not_empty(fragment, self.pipeline.family)
        if trimmed is None:
            return error
        try:
            failure = self.pipeline.adapter.check(trimmed.code)
        except Exception as e:  # pylint: disable=broad-exception-caught
            failure = self._adapter_defect(e)
        return self._to_error(failure, trimmed)

    def _adapter_defect(self, error: Exception) -> RawFailure:
        logger.exception("Parser adapter %s raised", self.pipeline.adapter.name)
        return RawFailure(raw_message=f"{type(error).__name__}: {error}")

    def _to_error(self, failure: RawFailure | None, fragment: Fragment) -> ValidationError | None:
        if failure is None:
            return None
        try:
            diagnostic = self.pipeline.translator(failure, fragment.code)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Translating %s failure raised", self.pipeline.family)
            diagnostic = ErrorTemplate.unknown_failure_format(failure.raw_message)
        return diagnostic.to_validation_error(
            fragment.start_line,
            default_context=self.pipeline.default_context(fragment.code),
        )
