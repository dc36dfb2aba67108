"""Pydantic schemas for runtime validation of benchmark inputs."""

from __future__ import annotations

import math
from pathlib import PurePath

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ScoreWeightsConfig(BaseModel):
    """Validated composite score weights."""

    model_config = ConfigDict(extra="forbid")

    unit_count: float = Field(default=0.2, ge=0.0, le=1.0)
    text: float = Field(default=0.4, ge=0.0, le=1.0)
    script: float = Field(default=0.3, ge=0.0, le=1.0)
    structure: float = Field(default=0.1, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate_sum(self) -> ScoreWeightsConfig:
        total = self.unit_count + self.text + self.script + self.structure
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"score weights must sum to 1.0 (got {total:.6g}).")
        return self


class ValidationConfig(BaseModel):
    """Validated fidelity thresholds."""

    model_config = ConfigDict(extra="forbid")

    chars_per_unit: int = Field(default=500, gt=0)
    unit_tolerance: int = Field(default=1, ge=0)
    min_text_similarity: float = Field(default=0.85, ge=0.0, le=1.0)
    min_script_accuracy: float = Field(default=0.95, ge=0.0)
    script_range: tuple[int, int] = (0x4E00, 0x9FFF)
    weights: ScoreWeightsConfig = Field(default_factory=ScoreWeightsConfig)
    excellent_score: float = Field(default=0.90, ge=0.0, le=1.0)
    good_score: float = Field(default=0.80, ge=0.0, le=1.0)
    fair_score: float = Field(default=0.70, ge=0.0, le=1.0)

    @field_validator("script_range")
    @classmethod
    def _validate_script_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        start, end = value
        if start < 0 or end > 0x10FFFF or start > end:
            raise ValueError("script_range must be an ordered code point range.")
        return value

    @model_validator(mode="after")
    def _validate_tiers(self) -> ValidationConfig:
        if not self.excellent_score >= self.good_score >= self.fair_score:
            raise ValueError("tier thresholds must satisfy excellent >= good >= fair.")
        return self


class SourceDocumentConfig(BaseModel):
    """Validated source document accepted for conversion."""

    model_config = ConfigDict(extra="forbid")

    filename: str = Field(min_length=1)
    size: int = Field(gt=0)
    allowed_suffixes: frozenset[str] | None = None

    @model_validator(mode="after")
    def _validate_suffix(self) -> SourceDocumentConfig:
        if self.allowed_suffixes is None:
            return self
        suffix = PurePath(self.filename).suffix.lower()
        if suffix not in self.allowed_suffixes:
            allowed = ", ".join(sorted(self.allowed_suffixes))
            raise ValueError(f"file must be one of: {allowed}")
        return self


class ConverterResolutionConfig(BaseModel):
    """Validated converter name used for registration and lookup."""

    model_config = ConfigDict(extra="forbid")

    name: str

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("converter name cannot be empty.")
        return stripped
