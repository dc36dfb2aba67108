"""Process-wide, append-only record of conversion outcomes."""

from __future__ import annotations

import threading

from docbench.application.results import ConversionOutcome


class ConversionHistory:
    """Thread-safe mapping of converter name to its outcomes.

    One instance is created at service start and shared by reference with
    the dispatcher. Nothing is evicted; call :meth:`clear` to release it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, list[ConversionOutcome]] = {}

    def append(self, converter_name: str, outcome: ConversionOutcome) -> None:
        """Append ``outcome`` under ``converter_name``."""
        with self._lock:
            self._entries.setdefault(converter_name, []).append(outcome)

    def for_converter(self, converter_name: str) -> tuple[ConversionOutcome, ...]:
        """Return outcomes recorded for one converter, oldest first."""
        with self._lock:
            return tuple(self._entries.get(converter_name, ()))

    def snapshot(self) -> dict[str, tuple[ConversionOutcome, ...]]:
        """Return a read-only copy of the whole history."""
        with self._lock:
            return {name: tuple(items) for name, items in self._entries.items()}

    def clear(self) -> None:
        """Drop every recorded outcome."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(items) for items in self._entries.values())
