"""Shared type aliases and enums."""

from __future__ import annotations

from enum import StrEnum

type ArtifactLocator = str
type ScriptRange = tuple[int, int]


class QualityTier(StrEnum):
    """Discrete quality tier derived from a fidelity score."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
