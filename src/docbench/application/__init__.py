"""Application-layer use-cases, option and result objects."""

from __future__ import annotations

from collections.abc import Iterable

from docbench.application.options import (
    BenchmarkOptions,
    ScoreWeights,
    ValidationOptions,
)
from docbench.application.results import (
    BenchmarkReport,
    ConversionOutcome,
    FidelityReport,
    RankedResult,
)


def build_validation_options(
    *,
    chars_per_unit: int = 500,
    unit_tolerance: int = 1,
    min_text_similarity: float = 0.85,
    min_script_accuracy: float = 0.95,
    script_range: tuple[int, int] = (0x4E00, 0x9FFF),
    weights: ScoreWeights | None = None,
) -> ValidationOptions:
    """Build typed validation options via lazy use-case import."""
    from docbench.application.use_cases import build_validation_options as _impl

    return _impl(
        chars_per_unit=chars_per_unit,
        unit_tolerance=unit_tolerance,
        min_text_similarity=min_text_similarity,
        min_script_accuracy=min_script_accuracy,
        script_range=script_range,
        weights=weights,
    )


def build_benchmark_options(
    *,
    validate_outputs: bool = False,
    allowed_suffixes: Iterable[str] | None = None,
    validation: ValidationOptions | None = None,
) -> BenchmarkOptions:
    """Build typed benchmark options via lazy use-case import."""
    from docbench.application.use_cases import build_benchmark_options as _impl

    return _impl(
        validate_outputs=validate_outputs,
        allowed_suffixes=allowed_suffixes,
        validation=validation,
    )


__all__ = [
    "BenchmarkOptions",
    "ScoreWeights",
    "ValidationOptions",
    "BenchmarkReport",
    "ConversionOutcome",
    "FidelityReport",
    "RankedResult",
    "build_validation_options",
    "build_benchmark_options",
]
