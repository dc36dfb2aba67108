"""Text and unit-count extractors for supported document formats."""

from __future__ import annotations

from io import BytesIO
from typing import TYPE_CHECKING

from docbench.application.ports import DocumentTextExtractor
from docbench.errors import ExtractionError

if TYPE_CHECKING:
    from docx.document import Document as DocxDocument


class DocxTextExtractor:
    """Read Word ``.docx`` documents with python-docx."""

    def _load(self, data: bytes) -> DocxDocument:
        from docx import Document

        return Document(BytesIO(data))

    def extract_text(self, data: bytes) -> str:
        """Return non-blank paragraph texts, each terminated by a newline."""
        document = self._load(data)
        return "".join(
            f"{paragraph.text}\n"
            for paragraph in document.paragraphs
            if paragraph.text and paragraph.text.strip()
        )

    def extract_unit_count(self, data: bytes) -> int:
        """Count pages delimited by explicit page breaks.

        Word files carry no reliable page count without a layout pass, so
        this only sees hard breaks; it is at least 1.
        """
        document = self._load(data)
        breaks = document.element.body.xpath(".//w:br[@w:type='page']")
        return len(breaks) + 1


class PdfTextExtractor:
    """Read PDF documents with pypdf."""

    def extract_text(self, data: bytes) -> str:
        """Return the text of every page joined by newlines."""
        from pypdf import PdfReader

        reader = PdfReader(BytesIO(data))
        return "\n".join(page.extract_text() or "" for page in reader.pages)

    def extract_unit_count(self, data: bytes) -> int:
        """Return the physical page count."""
        from pypdf import PdfReader

        return len(PdfReader(BytesIO(data)).pages)


class PlainTextExtractor:
    """Read UTF-8 text; form feeds separate pages."""

    def extract_text(self, data: bytes) -> str:
        return data.decode("utf-8")

    def extract_unit_count(self, data: bytes) -> int:
        return data.decode("utf-8").count("\f") + 1


_EXTRACTORS: dict[str, type[DocumentTextExtractor]] = {
    ".docx": DocxTextExtractor,
    ".pdf": PdfTextExtractor,
    ".txt": PlainTextExtractor,
}


def extractor_for_suffix(suffix: str) -> DocumentTextExtractor:
    """Return the extractor registered for a filename suffix.

    Raises
    ------
    ExtractionError
        If no extractor handles the suffix.
    """
    try:
        return _EXTRACTORS[suffix.lower()]()
    except KeyError as exc:
        supported = ", ".join(sorted(_EXTRACTORS))
        raise ExtractionError(
            f"No extractor for '{suffix or '<none>'}' documents. Supported: {supported}"
        ) from exc
