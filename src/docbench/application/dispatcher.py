"""Single-converter invocation with timing and history recording."""

from __future__ import annotations

import logging
import time

from docbench.adapters.storage import InMemoryArtifactStore
from docbench.application.history import ConversionHistory
from docbench.application.ports import ArtifactStore
from docbench.application.results import ConversionOutcome
from docbench.converters.registry import ConverterRegistry, converter_available
from docbench.documents import SourceDocument

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".pdf"


def _elapsed_millis(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class ConversionDispatcher:
    """Invoke one named converter and normalize the result.

    ``dispatch`` never raises for unknown, unavailable or failing converters;
    each case becomes a failed :class:`ConversionOutcome`. Every outcome is
    appended to ``history`` before it is returned.

    Parameters
    ----------
    registry : ConverterRegistry
        Converters to resolve names against.
    history : ConversionHistory
        Shared outcome history.
    store : ArtifactStore | None, default=None
        Destination for produced artifacts. In-memory when omitted.
    output_suffix : str, default=".pdf"
        Suffix appended to stored artifact names.
    """

    def __init__(
        self,
        registry: ConverterRegistry,
        history: ConversionHistory,
        store: ArtifactStore | None = None,
        output_suffix: str = OUTPUT_SUFFIX,
    ) -> None:
        self.registry = registry
        self.history = history
        self.store = store or InMemoryArtifactStore()
        self.output_suffix = output_suffix

    def dispatch(self, source: SourceDocument, converter_name: str) -> ConversionOutcome:
        """Run ``converter_name`` against ``source`` and record the outcome.

        Raises
        ------
        TypeError
            If ``source`` is not a :class:`SourceDocument`.
        """
        if not isinstance(source, SourceDocument):
            raise TypeError(
                f"source must be a SourceDocument, got {type(source).__name__}"
            )
        started = time.perf_counter()
        logger.info(
            "starting conversion: converter=%s file=%s", converter_name, source.filename
        )

        converter = self.registry.find(converter_name)
        if converter is None:
            message = f"Converter not found: {converter_name}"
            logger.error(message)
            return self._record(
                converter_name,
                ConversionOutcome.failed(
                    converter_name, _elapsed_millis(started), message
                ),
            )

        method = converter.name
        if not converter_available(converter):
            message = f"Converter not available: {converter_name}"
            logger.error(message)
            return self._record(
                method,
                ConversionOutcome.failed(method, _elapsed_millis(started), message),
            )

        convert_started = time.perf_counter()
        try:
            output = converter.convert(source.open())
            duration = _elapsed_millis(convert_started)
            locator = self.store.put(
                output, f"{source.stem}_{method}{self.output_suffix}"
            )
        except Exception as exc:
            duration = _elapsed_millis(convert_started)
            logger.error("conversion failed with %s converter", method, exc_info=True)
            return self._record(
                method,
                ConversionOutcome.failed(method, duration, _error_message(exc)),
            )

        logger.info(
            "conversion completed: converter=%s duration_ms=%d", method, duration
        )
        return self._record(
            method,
            ConversionOutcome.succeeded(
                method=method,
                duration_millis=duration,
                original_size=source.size,
                output_size=len(output),
                artifact_locator=locator,
            ),
        )

    def _record(self, key: str, outcome: ConversionOutcome) -> ConversionOutcome:
        self.history.append(key, outcome)
        return outcome
