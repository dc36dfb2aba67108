"""Protocol implemented by document-conversion backends."""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class Converter(Protocol):
    """A backend that turns one source document into an output document."""

    name: str

    def is_available(self) -> bool:
        """Check whether the backend is ready to accept documents.

        Returns
        -------
        bool
            ``True`` when :meth:`convert` may be called.
        """

    def convert(self, source: BinaryIO) -> bytes:
        """Convert a source document.

        Parameters
        ----------
        source : BinaryIO
            Fresh stream positioned at the start of the source bytes.

        Returns
        -------
        bytes
            The complete output artifact.

        Raises
        ------
        ConversionError
            When the document cannot be converted. Any other exception is
            recorded the same way by the dispatcher.
        """
