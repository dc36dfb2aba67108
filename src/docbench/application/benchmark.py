"""Sequential multi-converter benchmark and fidelity ranking."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import PurePath

from docbench.application.dispatcher import ConversionDispatcher
from docbench.application.results import (
    BenchmarkReport,
    ConversionOutcome,
    FidelityReport,
    RankedResult,
)
from docbench.application.validator import FidelityValidator
from docbench.converters.registry import converter_available
from docbench.documents import SourceDocument

logger = logging.getLogger(__name__)


def summarize(
    outcomes: Sequence[ConversionOutcome],
    ranking: Sequence[RankedResult] = (),
) -> BenchmarkReport:
    """Compute comparative statistics over benchmark outcomes.

    Fastest/slowest/average consider successful outcomes only; ties go to
    the first outcome in ``outcomes`` order. The success rate counts every
    attempt.
    """
    successes = [outcome for outcome in outcomes if outcome.success]
    total = len(outcomes)

    fastest = slowest = None
    average = 0.0
    if successes:
        fastest = min(successes, key=lambda o: o.duration_millis).method
        slowest = max(successes, key=lambda o: o.duration_millis).method
        average = sum(o.duration_millis for o in successes) / len(successes)

    return BenchmarkReport(
        outcomes=tuple(outcomes),
        fastest_method=fastest,
        slowest_method=slowest,
        average_duration_millis=average,
        success_rate=len(successes) / total if total else 0.0,
        total_attempted=total,
        ranking=tuple(ranking),
    )


def rank_by_fidelity(results: Sequence[RankedResult]) -> list[RankedResult]:
    """Sort by overall score, best first; equal scores keep their order."""
    return sorted(results, key=lambda item: item.report.overall_score, reverse=True)


class BenchmarkAggregator:
    """Drive every available converter over the same document.

    Converters run one at a time in registration order. Some backends share
    a single external renderer process that cannot take concurrent work, and
    sequential runs keep each duration attributable to one converter.

    Parameters
    ----------
    dispatcher : ConversionDispatcher
        Dispatcher used for each converter call.
    validator : FidelityValidator | None, default=None
        Validator used when a ranking is requested.
    """

    def __init__(
        self,
        dispatcher: ConversionDispatcher,
        validator: FidelityValidator | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.validator = validator or FidelityValidator()

    def benchmark_all(
        self,
        source: SourceDocument,
        original: SourceDocument | None = None,
    ) -> BenchmarkReport:
        """Convert ``source`` with every available converter.

        Parameters
        ----------
        source : SourceDocument
            Document handed to each converter as a fresh stream.
        original : SourceDocument | None, default=None
            When given, each successful output is validated against it and
            the report carries a fidelity ranking.

        Returns
        -------
        BenchmarkReport
            Outcomes in invocation order plus comparative statistics.
        """
        registry = self.dispatcher.registry
        logger.info(
            "starting benchmark: file=%s converters=%d", source.filename, len(registry)
        )

        outcomes: list[ConversionOutcome] = []
        for converter in registry:
            if not converter_available(converter):
                logger.info("skipping unavailable converter %s", converter.name)
                continue
            outcomes.append(self.dispatcher.dispatch(source, converter.name))

        ranking: list[RankedResult] = []
        if original is not None:
            ranking = rank_by_fidelity(
                [
                    RankedResult(outcome=outcome, report=self._score(original, outcome))
                    for outcome in outcomes
                    if outcome.success
                ]
            )

        report = summarize(outcomes, ranking)
        logger.info(
            "benchmark finished: attempted=%d success_rate=%.2f fastest=%s",
            report.total_attempted,
            report.success_rate,
            report.fastest_method,
        )
        return report

    def _score(
        self, original: SourceDocument, outcome: ConversionOutcome
    ) -> FidelityReport:
        locator = outcome.artifact_locator or ""
        try:
            data = self.dispatcher.store.get(locator)
        except Exception as exc:
            logger.error("unable to load artifact for %s", outcome.method, exc_info=True)
            return FidelityReport(
                converter_name=outcome.method,
                validation_error=f"Validation failed: {exc}",
            )
        output = SourceDocument(
            filename=PurePath(locator).name or f"{outcome.method}.pdf", data=data
        )
        return self.validator.validate(original, output, outcome.method)
