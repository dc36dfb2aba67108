"""Application-layer result objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter

from docbench.types import QualityTier


@dataclass(frozen=True)
class ConversionOutcome:
    """Normalized record of one converter invocation.

    ``artifact_locator`` is set iff ``success``; ``error_message`` is set iff
    not ``success``. Use :meth:`succeeded` / :meth:`failed` to build one.
    """

    success: bool
    method: str
    duration_millis: int
    original_size: int = 0
    output_size: int = 0
    artifact_locator: str | None = None
    error_message: str | None = None

    @classmethod
    def succeeded(
        cls,
        method: str,
        duration_millis: int,
        original_size: int,
        output_size: int,
        artifact_locator: str,
    ) -> ConversionOutcome:
        """Build a successful outcome."""
        return cls(
            success=True,
            method=method,
            duration_millis=max(0, duration_millis),
            original_size=original_size,
            output_size=output_size,
            artifact_locator=artifact_locator,
        )

    @classmethod
    def failed(
        cls,
        method: str,
        duration_millis: int,
        error_message: str,
    ) -> ConversionOutcome:
        """Build a failed outcome."""
        return cls(
            success=False,
            method=method,
            duration_millis=max(0, duration_millis),
            error_message=error_message,
        )


@dataclass(frozen=True)
class FidelityReport:
    """Quality assessment of one converted output against its source."""

    converter_name: str
    expected_unit_count: int = 0
    actual_unit_count: int = 0
    unit_count_accurate: bool = False
    text_similarity: float = 0.0
    text_accurate: bool = False
    original_script_char_count: int = 0
    output_script_char_count: int = 0
    script_accuracy: float = 0.0
    script_accurate: bool = False
    structure_intact: bool = False
    overall_score: float = 0.0
    quality_tier: QualityTier = QualityTier.POOR
    issues: tuple[str, ...] = ()
    validation_error: str | None = None


@dataclass(frozen=True)
class RankedResult:
    """A successful outcome paired with its fidelity report."""

    outcome: ConversionOutcome
    report: FidelityReport


@dataclass(frozen=True)
class BenchmarkReport:
    """Comparative statistics over one benchmark batch."""

    outcomes: tuple[ConversionOutcome, ...]
    fastest_method: str | None
    slowest_method: str | None
    average_duration_millis: float
    success_rate: float
    total_attempted: int
    ranking: tuple[RankedResult, ...] = ()


_ADAPTERS: dict[type, TypeAdapter[Any]] = {}


def to_jsonable(
    result: ConversionOutcome | FidelityReport | BenchmarkReport,
) -> Mapping[str, Any]:
    """Dump a result object into JSON-compatible primitives."""
    result_type = type(result)
    adapter = _ADAPTERS.get(result_type)
    if adapter is None:
        adapter = TypeAdapter(result_type)
        _ADAPTERS[result_type] = adapter
    return adapter.dump_python(result, mode="json")
