"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from typing import Protocol

from docbench.types import ArtifactLocator


class DocumentTextExtractor(Protocol):
    """Extract plain text and a unit count from raw document bytes."""

    def extract_text(self, data: bytes) -> str:
        """Return the document text. Raise on unparseable input."""

    def extract_unit_count(self, data: bytes) -> int:
        """Return the native unit (page) count. Raise on unparseable input."""


class ArtifactStore(Protocol):
    """Persist converted artifacts and hand back opaque locators."""

    def put(self, data: bytes, name: str) -> ArtifactLocator:
        """Store artifact bytes and return a locator."""

    def get(self, locator: ArtifactLocator) -> bytes:
        """Load artifact bytes previously stored under ``locator``."""
