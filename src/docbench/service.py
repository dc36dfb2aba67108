"""Benchmark service composing registry, history, dispatcher and validator."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from docbench.adapters.storage import InMemoryArtifactStore, LocalArtifactStore
from docbench.application.benchmark import BenchmarkAggregator
from docbench.application.dispatcher import ConversionDispatcher
from docbench.application.history import ConversionHistory
from docbench.application.options import BenchmarkOptions
from docbench.application.ports import ArtifactStore
from docbench.application.results import (
    BenchmarkReport,
    ConversionOutcome,
    FidelityReport,
)
from docbench.application.validator import FidelityValidator
from docbench.converters.registry import ConverterRegistry, create_default_registry
from docbench.documents import SourceDocument, accept_source_document
from docbench.introspection import DocumentIntrospector

logger = logging.getLogger(__name__)


class BenchmarkService:
    """Entry point for a hosting layer (CLI, HTTP API, scripts).

    One instance owns the conversion history for its lifetime; build it once
    at startup and share it.

    Parameters
    ----------
    registry : ConverterRegistry
        Registered converters.
    store : ArtifactStore | None, default=None
        Artifact destination. In-memory when omitted.
    options : BenchmarkOptions | None, default=None
        Validation thresholds and accepted source types.
    history : ConversionHistory | None, default=None
        History to record into. A fresh one when omitted.
    introspector : DocumentIntrospector | None, default=None
        Extraction backend used for validation.
    """

    def __init__(
        self,
        registry: ConverterRegistry,
        store: ArtifactStore | None = None,
        options: BenchmarkOptions | None = None,
        history: ConversionHistory | None = None,
        introspector: DocumentIntrospector | None = None,
    ) -> None:
        self.registry = registry
        self.options = options or BenchmarkOptions()
        self.history = history or ConversionHistory()
        self.store = store or InMemoryArtifactStore()
        self.validator = FidelityValidator(
            introspector=introspector
            or DocumentIntrospector(
                chars_per_unit=self.options.validation.chars_per_unit
            ),
            options=self.options.validation,
        )
        self.dispatcher = ConversionDispatcher(registry, self.history, self.store)
        self.aggregator = BenchmarkAggregator(self.dispatcher, self.validator)

    def available_converters(self) -> list[str]:
        """Names of converters ready to accept documents."""
        return self.registry.available_names()

    def dispatch(self, source: SourceDocument, converter_name: str) -> ConversionOutcome:
        """Convert ``source`` with one converter.

        Raises
        ------
        InvalidDocumentError
            If the source is empty or of an unaccepted type.
        """
        accept_source_document(source, self.options.allowed_suffixes)
        return self.dispatcher.dispatch(source, converter_name)

    def benchmark_all(
        self, source: SourceDocument, validate: bool | None = None
    ) -> BenchmarkReport:
        """Convert ``source`` with every available converter.

        Parameters
        ----------
        source : SourceDocument
            Document to convert.
        validate : bool | None, default=None
            Rank outputs by fidelity against ``source``. Defaults to
            ``options.validate_outputs``.
        """
        accept_source_document(source, self.options.allowed_suffixes)
        if validate is None:
            validate = self.options.validate_outputs
        return self.aggregator.benchmark_all(
            source, original=source if validate else None
        )

    def validate(
        self,
        source: SourceDocument,
        output: SourceDocument,
        converter_name: str,
    ) -> FidelityReport:
        """Score an existing output document against its source."""
        return self.validator.validate(source, output, converter_name)

    def get_history(self) -> dict[str, tuple[ConversionOutcome, ...]]:
        """Snapshot of every recorded outcome, keyed by converter name."""
        return self.history.snapshot()

    def clear_history(self) -> None:
        """Drop all recorded outcomes."""
        logger.info("clearing conversion history (%d outcomes)", len(self.history))
        self.history.clear()


def create_service(
    *,
    plugin_modules: Iterable[str] | None = None,
    artifact_dir: Path | None = None,
    options: BenchmarkOptions | None = None,
) -> BenchmarkService:
    """Build a service from plugin modules and an optional artifact directory.

    Parameters
    ----------
    plugin_modules : Iterable[str] | None, default=None
        Converter plugin modules (dotted paths or files).
    artifact_dir : Path | None, default=None
        Directory for converted artifacts. Artifacts stay in memory when
        omitted.
    options : BenchmarkOptions | None, default=None
        Benchmark options.
    """
    registry = create_default_registry(extra_modules=plugin_modules)
    store: ArtifactStore = (
        LocalArtifactStore(artifact_dir)
        if artifact_dir is not None
        else InMemoryArtifactStore()
    )
    return BenchmarkService(registry, store=store, options=options)
