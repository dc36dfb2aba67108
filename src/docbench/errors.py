"""Exception hierarchy for docbench."""

from __future__ import annotations


class DocBenchError(Exception):
    """Base error for all docbench failures."""

    exit_code = 1


class ConfigurationError(DocBenchError):
    """Raised when benchmark or validation options are invalid."""

    exit_code = 2


class InvalidDocumentError(DocBenchError):
    """Raised when a source document is empty or of an unsupported type."""

    exit_code = 2


class RegistryError(DocBenchError):
    """Raised for converter registration and plugin loading failures."""


class ConverterNotFoundError(RegistryError):
    """Raised when a converter name is not registered."""


class ConversionError(DocBenchError):
    """Raised by converters when a document cannot be converted."""


class ExtractionError(DocBenchError):
    """Raised when text or unit count cannot be extracted from a document."""


class StorageError(DocBenchError):
    """Raised when an artifact cannot be stored or retrieved."""
