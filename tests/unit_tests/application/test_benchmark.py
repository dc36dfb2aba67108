"""Unit tests for the multi-converter benchmark."""

from __future__ import annotations

from typing import BinaryIO

import pytest

from docbench.application.benchmark import (
    BenchmarkAggregator,
    rank_by_fidelity,
    summarize,
)
from docbench.application.dispatcher import ConversionDispatcher
from docbench.application.history import ConversionHistory
from docbench.application.results import (
    ConversionOutcome,
    FidelityReport,
    RankedResult,
)
from docbench.converters.registry import ConverterRegistry
from docbench.documents import SourceDocument


class _Converter:
    """Converter test double recording what it was handed."""

    def __init__(
        self,
        name: str,
        available: bool = True,
        error: Exception | None = None,
    ) -> None:
        self.name = name
        self.available = available
        self.error = error
        self.received: list[bytes] = []

    def is_available(self) -> bool:
        return self.available

    def convert(self, source: BinaryIO) -> bytes:
        self.received.append(source.read())
        if self.error is not None:
            raise self.error
        return f"output of {self.name}".encode()


class _ScoringValidator:
    """Validator test double returning a fixed score per converter."""

    def __init__(self, scores: dict[str, float]) -> None:
        self.scores = scores
        self.outputs: dict[str, bytes] = {}

    def validate(
        self, source: SourceDocument, output: SourceDocument, converter_name: str
    ) -> FidelityReport:
        del source
        self.outputs[converter_name] = output.data
        return FidelityReport(
            converter_name=converter_name,
            overall_score=self.scores[converter_name],
        )


SOURCE = SourceDocument("input.docx", b"docx-payload")


def _aggregator(
    *converters: _Converter, validator: _ScoringValidator | None = None
) -> BenchmarkAggregator:
    registry = ConverterRegistry()
    for converter in converters:
        registry.register(converter)
    dispatcher = ConversionDispatcher(registry, ConversionHistory())
    return BenchmarkAggregator(dispatcher, validator)  # type: ignore[arg-type]


def _ok(method: str, millis: int) -> ConversionOutcome:
    return ConversionOutcome.succeeded(method, millis, 1, 1, f"memory://{method}")


def _failed(method: str, millis: int) -> ConversionOutcome:
    return ConversionOutcome.failed(method, millis, "boom")


def test_summarize_statistics_over_successes() -> None:
    """Fastest, slowest and average consider successful outcomes only."""
    report = summarize([_ok("a", 30), _failed("b", 1), _ok("c", 10)])

    assert report.total_attempted == 3
    assert report.success_rate == pytest.approx(2 / 3)
    assert report.fastest_method == "c"
    assert report.slowest_method == "a"
    assert report.average_duration_millis == pytest.approx(20.0)


def test_summarize_ties_go_to_first_encountered() -> None:
    """Equal durations resolve to the earliest outcome."""
    report = summarize([_ok("first", 5), _ok("second", 5)])

    assert report.fastest_method == "first"
    assert report.slowest_method == "first"


def test_summarize_all_failed() -> None:
    """No successes leaves fastest/slowest unset."""
    report = summarize([_failed("a", 3), _failed("b", 4)])

    assert report.fastest_method is None
    assert report.slowest_method is None
    assert report.average_duration_millis == 0.0
    assert report.success_rate == 0.0
    assert report.total_attempted == 2


def test_summarize_empty() -> None:
    """An empty benchmark has zero attempts and a zero success rate."""
    report = summarize([])

    assert report.total_attempted == 0
    assert report.success_rate == 0.0
    assert report.outcomes == ()


def test_benchmark_runs_available_converters_in_order() -> None:
    """Unavailable converters are skipped and never attempted."""
    poi, libre, fop = _Converter("poi"), _Converter("libre", available=False), _Converter("fop")
    aggregator = _aggregator(poi, libre, fop)

    report = aggregator.benchmark_all(SOURCE)

    assert [o.method for o in report.outcomes] == ["poi", "fop"]
    assert report.total_attempted == 2
    assert report.success_rate == 1.0
    assert libre.received == []
    assert report.ranking == ()


def test_benchmark_counts_failures_in_success_rate() -> None:
    """Two of three successes gives a 2/3 success rate."""
    aggregator = _aggregator(
        _Converter("a"), _Converter("b", error=RuntimeError("crash")), _Converter("c")
    )

    report = aggregator.benchmark_all(SOURCE)

    assert report.total_attempted == 3
    assert report.success_rate == pytest.approx(2 / 3)
    failed = report.outcomes[1]
    assert failed.success is False
    assert failed.error_message == "crash"


def test_each_converter_reads_the_full_source() -> None:
    """Every converter gets its own stream positioned at the start."""
    first, second = _Converter("first"), _Converter("second")

    _aggregator(first, second).benchmark_all(SOURCE)

    assert first.received == [SOURCE.data]
    assert second.received == [SOURCE.data]


def test_benchmark_records_history() -> None:
    """Benchmark runs go through the dispatcher history."""
    aggregator = _aggregator(_Converter("a"), _Converter("b"))

    aggregator.benchmark_all(SOURCE)

    assert sorted(aggregator.dispatcher.history.snapshot()) == ["a", "b"]


def test_no_available_converters() -> None:
    """A registry with nothing available yields an empty report."""
    report = _aggregator(_Converter("off", available=False)).benchmark_all(SOURCE)

    assert report.total_attempted == 0
    assert report.success_rate == 0.0
    assert report.fastest_method is None


def test_validation_ranks_successful_outputs_by_score() -> None:
    """Outputs are scored against the original and sorted best first."""
    validator = _ScoringValidator({"low": 0.5, "high": 0.95, "mid": 0.8})
    aggregator = _aggregator(
        _Converter("low"),
        _Converter("broken", error=RuntimeError("no")),
        _Converter("high"),
        _Converter("mid"),
        validator=validator,
    )

    report = aggregator.benchmark_all(SOURCE, original=SOURCE)

    assert [item.report.converter_name for item in report.ranking] == [
        "high",
        "mid",
        "low",
    ]
    assert [item.outcome.method for item in report.ranking] == ["high", "mid", "low"]
    assert validator.outputs["high"] == b"output of high"
    assert "broken" not in validator.outputs


def test_rank_by_fidelity_is_stable_for_equal_scores() -> None:
    """Equal scores keep their input order."""
    items = [
        RankedResult(_ok(name, 1), FidelityReport(converter_name=name, overall_score=score))
        for name, score in [("a", 0.7), ("b", 0.9), ("c", 0.7), ("d", 0.9)]
    ]

    ranked = rank_by_fidelity(items)

    assert [item.report.converter_name for item in ranked] == ["b", "d", "a", "c"]


class _FlakyConverter(_Converter):
    """Converter whose availability check raises."""

    def is_available(self) -> bool:
        raise RuntimeError("office process died")


class _ForgetfulStore:
    """Artifact store that loses everything it is given."""

    def put(self, data: bytes, name: str) -> str:
        del data
        return f"memory://{name}"

    def get(self, locator: str) -> bytes:
        raise KeyError(locator)


def test_benchmark_survives_availability_error() -> None:
    """A raising availability check skips that converter only."""
    flaky = _FlakyConverter("flaky")
    aggregator = _aggregator(_Converter("ok"), flaky, _Converter("after"))

    report = aggregator.benchmark_all(SOURCE)

    assert [o.method for o in report.outcomes] == ["ok", "after"]
    assert report.total_attempted == 2
    assert report.success_rate == 1.0
    assert flaky.received == []


def test_ranking_survives_store_read_error() -> None:
    """An artifact that cannot be read back yields a report with an error."""
    registry = ConverterRegistry()
    registry.register(_Converter("ok"))
    dispatcher = ConversionDispatcher(registry, ConversionHistory(), _ForgetfulStore())
    aggregator = BenchmarkAggregator(dispatcher)

    report = aggregator.benchmark_all(SOURCE, original=SOURCE)

    assert report.success_rate == 1.0
    [ranked] = report.ranking
    assert ranked.report.converter_name == "ok"
    assert ranked.report.validation_error is not None
    assert ranked.report.validation_error.startswith("Validation failed:")
    assert ranked.report.overall_score == 0.0
