"""Artifact store implementations."""

from __future__ import annotations

import logging
import threading
import uuid
from pathlib import Path, PurePath

from docbench.errors import StorageError

logger = logging.getLogger(__name__)


def safe_object_name(name: str) -> str:
    """Return a filesystem-safe artifact name without directory parts."""
    raw = name.strip()
    if not raw:
        return "artifact.bin"
    # Normalize Windows-style separators before basename extraction.
    candidate = PurePath(raw.replace("\\", "/")).name
    if candidate in {"", ".", ".."}:
        return "artifact.bin"
    return candidate


def _unique_name(name: str) -> str:
    safe = PurePath(safe_object_name(name))
    return f"{safe.stem}_{uuid.uuid4().hex}{safe.suffix}"


class InMemoryArtifactStore:
    """Keep artifacts in process memory, keyed by ``memory://`` locators."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._artifacts: dict[str, bytes] = {}

    def put(self, data: bytes, name: str) -> str:
        locator = f"memory://{_unique_name(name)}"
        with self._lock:
            self._artifacts[locator] = bytes(data)
        return locator

    def get(self, locator: str) -> bytes:
        with self._lock:
            try:
                return self._artifacts[locator]
            except KeyError as exc:
                raise StorageError(f"Unknown artifact: {locator}") from exc


class LocalArtifactStore:
    """Write artifacts under a base directory; locators are absolute paths.

    Parameters
    ----------
    base_dir : Path
        Directory receiving artifacts. Created on first write.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir.expanduser().resolve()

    def put(self, data: bytes, name: str) -> str:
        target = self.base_dir / _unique_name(name)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Unable to store artifact {target}: {exc}") from exc
        logger.info("stored artifact %s (%d bytes)", target, len(data))
        return str(target)

    def get(self, locator: str) -> bytes:
        path = Path(locator).resolve()
        if not path.is_relative_to(self.base_dir):
            raise StorageError(f"Artifact outside store: {locator}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Unable to read artifact {locator}: {exc}") from exc
