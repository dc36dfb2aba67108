"""Fixtures building real Word and PDF documents."""

from __future__ import annotations

from collections.abc import Callable
from io import BytesIO

import pytest


def _docx_bytes(pages: list[list[str]]) -> bytes:
    from docx import Document

    document = Document()
    for index, paragraphs in enumerate(pages):
        if index:
            document.add_page_break()
        for text in paragraphs:
            document.add_paragraph(text)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _blank_pdf_bytes(page_count: int) -> bytes:
    from pypdf import PdfWriter

    writer = PdfWriter()
    for _ in range(page_count):
        writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_docx() -> Callable[[list[list[str]]], bytes]:
    """Build a .docx whose pages hold the given paragraphs."""
    return _docx_bytes


@pytest.fixture
def make_blank_pdf() -> Callable[[int], bytes]:
    """Build a text-less PDF with the given number of pages."""
    return _blank_pdf_bytes
