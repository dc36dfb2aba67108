"""Typed option objects shared across validation and benchmark use-cases."""

from __future__ import annotations

from dataclasses import dataclass, field

from docbench.types import ScriptRange

CJK_UNIFIED_IDEOGRAPHS: ScriptRange = (0x4E00, 0x9FFF)


@dataclass(frozen=True)
class ScoreWeights:
    """Weights of the composite fidelity score. Must sum to 1.0."""

    unit_count: float = 0.2
    text: float = 0.4
    script: float = 0.3
    structure: float = 0.1


@dataclass(frozen=True)
class ValidationOptions:
    """Fidelity check thresholds and scoring configuration."""

    chars_per_unit: int = 500
    unit_tolerance: int = 1
    min_text_similarity: float = 0.85
    min_script_accuracy: float = 0.95
    script_range: ScriptRange = CJK_UNIFIED_IDEOGRAPHS
    weights: ScoreWeights = ScoreWeights()
    excellent_score: float = 0.90
    good_score: float = 0.80
    fair_score: float = 0.70


@dataclass(frozen=True)
class BenchmarkOptions:
    """Options for a multi-converter benchmark run."""

    validation: ValidationOptions = ValidationOptions()
    validate_outputs: bool = False
    allowed_suffixes: frozenset[str] = field(
        default_factory=lambda: frozenset({".docx"})
    )
