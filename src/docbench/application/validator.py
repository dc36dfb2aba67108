"""Fidelity scoring of converted documents against their source."""

from __future__ import annotations

import logging
import math

from docbench.application.options import ValidationOptions
from docbench.application.results import FidelityReport
from docbench.documents import SourceDocument
from docbench.errors import ExtractionError
from docbench.introspection import DocumentIntrospector, count_script_chars
from docbench.similarity import similarity
from docbench.types import QualityTier

logger = logging.getLogger(__name__)


def quality_tier(score: float, options: ValidationOptions | None = None) -> QualityTier:
    """Map a composite score to its tier; lower bounds are inclusive."""
    options = options or ValidationOptions()
    if score >= options.excellent_score:
        return QualityTier.EXCELLENT
    if score >= options.good_score:
        return QualityTier.GOOD
    if score >= options.fair_score:
        return QualityTier.FAIR
    return QualityTier.POOR


def composite_score(
    unit_count_accurate: bool,
    text_similarity: float,
    script_accuracy: float,
    structure_intact: bool,
    options: ValidationOptions | None = None,
) -> float:
    """Weighted fidelity score.

    Unit count and structure contribute as pass/fail gates; text similarity
    and script accuracy contribute their continuous values.
    """
    weights = (options or ValidationOptions()).weights
    score = math.fsum(
        (
            weights.unit_count if unit_count_accurate else 0.0,
            weights.text * text_similarity,
            weights.script * script_accuracy,
            weights.structure if structure_intact else 0.0,
        )
    )
    return min(1.0, max(0.0, score))


class FidelityValidator:
    """Run unit-count, text, script and structure checks on an output.

    Parameters
    ----------
    introspector : DocumentIntrospector | None, default=None
        Text extraction backend. Built from ``options`` when omitted.
    options : ValidationOptions | None, default=None
        Thresholds and weights.
    """

    def __init__(
        self,
        introspector: DocumentIntrospector | None = None,
        options: ValidationOptions | None = None,
    ) -> None:
        self.options = options or ValidationOptions()
        self.introspector = introspector or DocumentIntrospector(
            chars_per_unit=self.options.chars_per_unit
        )

    def validate(
        self,
        source: SourceDocument,
        output: SourceDocument,
        converter_name: str,
    ) -> FidelityReport:
        """Score ``output`` against ``source``.

        Extraction failures do not raise; they yield a report whose
        ``validation_error`` is set and whose checks are all zero/false.
        """
        logger.info(
            "validating output: converter=%s output=%s", converter_name, output.filename
        )
        try:
            source_info = self.introspector.introspect_source(source)
            output_info = self.introspector.introspect_output(output)
        except ExtractionError as exc:
            logger.error("validation failed: converter=%s", converter_name, exc_info=True)
            return FidelityReport(
                converter_name=converter_name,
                validation_error=f"Validation failed: {exc}",
            )

        opts = self.options
        issues: list[str] = []

        expected_units = source_info.unit_count
        actual_units = output_info.unit_count
        units_ok = abs(expected_units - actual_units) <= opts.unit_tolerance
        if not units_ok:
            issues.append(
                f"Unit count mismatch: expected {expected_units}, got {actual_units}"
            )

        text_score = similarity(source_info.text, output_info.text)
        text_ok = text_score >= opts.min_text_similarity
        if not text_ok:
            issues.append(
                f"Text similarity too low: {text_score:.2%} "
                f"(minimum {opts.min_text_similarity:.2%})"
            )

        original_script = count_script_chars(source_info.text, opts.script_range)
        output_script = count_script_chars(output_info.text, opts.script_range)
        script_score = (
            output_script / max(original_script, 1) if original_script > 0 else 1.0
        )
        script_ok = script_score >= opts.min_script_accuracy
        if not script_ok:
            issues.append(
                f"Script character accuracy too low: {script_score:.2%} "
                f"(minimum {opts.min_script_accuracy:.2%})"
            )

        structure_ok = bool(output_info.text.strip())
        if not structure_ok:
            issues.append("Output document text is empty")

        score = composite_score(units_ok, text_score, script_score, structure_ok, opts)
        tier = quality_tier(score, opts)
        logger.info(
            "validation finished: converter=%s score=%.4f tier=%s",
            converter_name,
            score,
            tier,
        )
        return FidelityReport(
            converter_name=converter_name,
            expected_unit_count=expected_units,
            actual_unit_count=actual_units,
            unit_count_accurate=units_ok,
            text_similarity=text_score,
            text_accurate=text_ok,
            original_script_char_count=original_script,
            output_script_char_count=output_script,
            script_accuracy=script_score,
            script_accurate=script_ok,
            structure_intact=structure_ok,
            overall_score=score,
            quality_tier=tier,
            issues=tuple(issues),
        )
