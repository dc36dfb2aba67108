"""Benchmark and fidelity harness for document-conversion backends."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from docbench.similarity import similarity

if TYPE_CHECKING:
    from docbench.application.options import BenchmarkOptions
    from docbench.service import BenchmarkService

__version__ = "0.1.0"


def create_service(
    *,
    plugin_modules: Iterable[str] | None = None,
    artifact_dir: Path | None = None,
    options: BenchmarkOptions | None = None,
) -> BenchmarkService:
    """Build a benchmark service.

    Parameters
    ----------
    plugin_modules : Iterable[str] | None, default=None
        Converter plugin modules (dotted paths or ``.py`` files).
    artifact_dir : Path | None, default=None
        Directory receiving converted artifacts; in memory when omitted.
    options : BenchmarkOptions | None, default=None
        Validation thresholds and accepted source types.

    Returns
    -------
    BenchmarkService
        Service owning a fresh conversion history.
    """
    from .service import create_service as _impl

    return _impl(
        plugin_modules=plugin_modules,
        artifact_dir=artifact_dir,
        options=options,
    )


__all__ = ["create_service", "similarity"]
