"""Application use-cases wiring options into validators and benchmarks."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import ValidationError

from docbench.application.options import (
    BenchmarkOptions,
    ScoreWeights,
    ValidationOptions,
)
from docbench.errors import ConfigurationError
from docbench.schemas import ValidationConfig


def build_validation_options(
    *,
    chars_per_unit: int = 500,
    unit_tolerance: int = 1,
    min_text_similarity: float = 0.85,
    min_script_accuracy: float = 0.95,
    script_range: tuple[int, int] = (0x4E00, 0x9FFF),
    weights: ScoreWeights | None = None,
) -> ValidationOptions:
    """Build typed validation options from command/API params.

    Raises
    ------
    ConfigurationError
        If a threshold is out of range or the weights do not sum to 1.0.
    """
    weights = weights or ScoreWeights()
    try:
        config = ValidationConfig(
            chars_per_unit=chars_per_unit,
            unit_tolerance=unit_tolerance,
            min_text_similarity=min_text_similarity,
            min_script_accuracy=min_script_accuracy,
            script_range=script_range,
            weights={
                "unit_count": weights.unit_count,
                "text": weights.text,
                "script": weights.script,
                "structure": weights.structure,
            },
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid validation options: {exc}") from exc

    return ValidationOptions(
        chars_per_unit=config.chars_per_unit,
        unit_tolerance=config.unit_tolerance,
        min_text_similarity=config.min_text_similarity,
        min_script_accuracy=config.min_script_accuracy,
        script_range=config.script_range,
        weights=ScoreWeights(
            unit_count=config.weights.unit_count,
            text=config.weights.text,
            script=config.weights.script,
            structure=config.weights.structure,
        ),
        excellent_score=config.excellent_score,
        good_score=config.good_score,
        fair_score=config.fair_score,
    )


def build_benchmark_options(
    *,
    validate_outputs: bool = False,
    allowed_suffixes: Iterable[str] | None = None,
    validation: ValidationOptions | None = None,
) -> BenchmarkOptions:
    """Build typed benchmark options from command/API params."""
    suffixes = frozenset(
        suffix.lower() if suffix.startswith(".") else f".{suffix.lower()}"
        for suffix in (allowed_suffixes if allowed_suffixes is not None else {".docx"})
    )
    return BenchmarkOptions(
        validation=validation or ValidationOptions(),
        validate_outputs=validate_outputs,
        allowed_suffixes=suffixes,
    )
