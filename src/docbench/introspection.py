"""Format-independent text and unit-count extraction."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from docbench.adapters.extractors import extractor_for_suffix
from docbench.application.ports import DocumentTextExtractor
from docbench.documents import SourceDocument
from docbench.errors import ExtractionError
from docbench.types import ScriptRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Introspection:
    """Extracted text and unit count of one document."""

    text: str
    unit_count: int


def estimate_unit_count(text: str, chars_per_unit: int = 500) -> int:
    """Estimate page-like units from text volume, rounded up, minimum 1."""
    if chars_per_unit <= 0:
        raise ValueError("chars_per_unit must be positive")
    return max(1, (len(text) + chars_per_unit - 1) // chars_per_unit)


def count_script_chars(text: str, script_range: ScriptRange) -> int:
    """Count code points of ``text`` that fall within ``script_range``."""
    start, end = script_range
    return sum(1 for char in text if start <= ord(char) <= end)


class DocumentIntrospector:
    """Extract text and unit counts from source and rendered documents.

    Parameters
    ----------
    source_extractor : DocumentTextExtractor | None, default=None
        Extractor for source documents. Chosen by filename suffix when omitted.
    output_extractor : DocumentTextExtractor | None, default=None
        Extractor for rendered outputs. Chosen by filename suffix when omitted.
    chars_per_unit : int, default=500
        Characters per estimated unit for source documents.
    """

    def __init__(
        self,
        source_extractor: DocumentTextExtractor | None = None,
        output_extractor: DocumentTextExtractor | None = None,
        chars_per_unit: int = 500,
    ) -> None:
        if chars_per_unit <= 0:
            raise ValueError("chars_per_unit must be positive")
        self._source_extractor = source_extractor
        self._output_extractor = output_extractor
        self.chars_per_unit = chars_per_unit

    def introspect_source(self, document: SourceDocument) -> Introspection:
        """Extract source text; the unit count is estimated from its length.

        Raises
        ------
        ExtractionError
            If the document cannot be parsed.
        """
        extractor = self._source_extractor or extractor_for_suffix(document.suffix)
        text = _extract(document, extractor.extract_text)
        units = estimate_unit_count(text, self.chars_per_unit)
        logger.debug(
            "source %s: chars=%d estimated_units=%d",
            document.filename,
            len(text),
            units,
        )
        return Introspection(text=text, unit_count=units)

    def introspect_output(self, document: SourceDocument) -> Introspection:
        """Extract output text and its actual unit count.

        Raises
        ------
        ExtractionError
            If the document cannot be parsed.
        """
        extractor = self._output_extractor or extractor_for_suffix(document.suffix)
        text = _extract(document, extractor.extract_text)
        units = _extract(document, extractor.extract_unit_count)
        logger.debug(
            "output %s: chars=%d units=%d", document.filename, len(text), units
        )
        return Introspection(text=text, unit_count=units)


def _extract[T](document: SourceDocument, func: Callable[[bytes], T]) -> T:
    try:
        return func(document.data)
    except ExtractionError:
        raise
    except Exception as exc:
        raise ExtractionError(
            f"Unable to read {document.filename}: {exc}"
        ) from exc
