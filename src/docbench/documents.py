"""In-memory document payloads handed to converters and extractors."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path, PurePath

from pydantic import ValidationError

from docbench.errors import InvalidDocumentError
from docbench.schemas import SourceDocumentConfig


@dataclass(frozen=True)
class SourceDocument:
    """Immutable document bytes with the name they arrived under.

    Every call to :meth:`open` returns an independent stream, so several
    converters can each read the full payload from the start.
    """

    filename: str
    data: bytes

    @property
    def size(self) -> int:
        """Payload size in bytes."""
        return len(self.data)

    @property
    def suffix(self) -> str:
        """Lower-cased filename suffix, including the dot."""
        return PurePath(self.filename).suffix.lower()

    @property
    def stem(self) -> str:
        """Filename without directory or suffix."""
        return PurePath(self.filename).stem or "document"

    def open(self) -> BytesIO:
        """Return a fresh, re-readable stream over the payload."""
        return BytesIO(self.data)

    @classmethod
    def from_path(cls, path: Path) -> SourceDocument:
        """Read a document from disk."""
        return cls(filename=path.name, data=path.read_bytes())


def accept_source_document(
    document: SourceDocument,
    allowed_suffixes: Iterable[str] | None = None,
) -> SourceDocument:
    """Check that a document is non-empty and of an accepted type.

    Parameters
    ----------
    document : SourceDocument
        Candidate source document.
    allowed_suffixes : Iterable[str] | None, default=None
        Accepted filename suffixes (e.g. ``{".docx"}``). ``None`` accepts any.

    Returns
    -------
    SourceDocument
        The same document, for chaining.

    Raises
    ------
    InvalidDocumentError
        If the file is empty or has an unsupported suffix.
    """
    try:
        SourceDocumentConfig(
            filename=document.filename,
            size=document.size,
            allowed_suffixes=(
                frozenset(s.lower() for s in allowed_suffixes)
                if allowed_suffixes is not None
                else None
            ),
        )
    except ValidationError as exc:
        if document.size == 0:
            raise InvalidDocumentError(
                f"File is empty: {document.filename}"
            ) from exc
        raise InvalidDocumentError(
            f"Unsupported document '{document.filename}': {exc}"
        ) from exc
    return document
