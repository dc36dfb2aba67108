"""Converter registry and plugin discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import ModuleType

from pydantic import ValidationError

from docbench.converters.base import Converter
from docbench.errors import ConverterNotFoundError, RegistryError
from docbench.schemas import ConverterResolutionConfig

logger = logging.getLogger(__name__)


def converter_available(converter: Converter) -> bool:
    """Return ``converter.is_available()``, treating an exception as unavailable."""
    try:
        return bool(converter.is_available())
    except Exception:
        logger.error(
            "availability check failed for converter %s",
            getattr(converter, "name", "<unnamed>"),
            exc_info=True,
        )
        return False


def _normalize_name(name: str) -> str:
    try:
        return ConverterResolutionConfig(name=name).name
    except ValidationError as exc:
        raise RegistryError("Converter must define a non-empty 'name'.") from exc


class ConverterRegistry:
    """Registry of conversion backends, kept in registration order.

    Names are matched case-insensitively.
    """

    def __init__(self) -> None:
        self._converters: dict[str, Converter] = {}

    def register(self, converter: Converter) -> None:
        """Register converter instance under its unique name.

        Parameters
        ----------
        converter : Converter
            Converter instance to register.

        Raises
        ------
        RegistryError
            If the converter has no usable name or the name is taken.
        """
        name = _normalize_name(getattr(converter, "name", "") or "")
        key = name.casefold()
        if key in self._converters:
            raise RegistryError(f"Converter '{name}' is already registered.")
        self._converters[key] = converter
        logger.debug("registered converter %s", name)

    def names(self) -> list[str]:
        """Return registered converter names in registration order."""
        return [converter.name for converter in self._converters.values()]

    def available_names(self) -> list[str]:
        """Return names of converters whose ``is_available()`` is true."""
        return [
            converter.name
            for converter in self._converters.values()
            if converter_available(converter)
        ]

    def find(self, name: str) -> Converter | None:
        """Look up converter by case-insensitive exact name.

        Returns
        -------
        Converter | None
            Registered converter, or ``None`` when absent.
        """
        return self._converters.get(name.strip().casefold())

    def get(self, name: str) -> Converter:
        """Get converter by name.

        Raises
        ------
        ConverterNotFoundError
            If the name is not registered.
        """
        converter = self.find(name)
        if converter is None:
            raise ConverterNotFoundError(
                f"Unknown converter '{name}'. "
                f"Available converters: {', '.join(self.names())}"
            )
        return converter

    def load_module(self, module_or_path: str) -> None:
        """Load converter providers from module name or file path.

        .. warning::
            This executes code from the given module. Only load plugins from
            trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)

    def __iter__(self) -> Iterator[Converter]:
        return iter(list(self._converters.values()))

    def __len__(self) -> int:
        return len(self._converters)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Parameters
    ----------
    module_or_path : str
        Python module path or local ``.py`` file path.

    Returns
    -------
    ModuleType
        Imported module object.

    Raises
    ------
    RegistryError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise RegistryError(f"Unable to load converter module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise RegistryError(
                f"Unable to execute converter module {candidate}: {exc}"
            ) from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise RegistryError(
            f"Unable to import converter module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: ConverterRegistry) -> None:
    """Register converters exposed by a plugin module.

    Supported contracts, in order: ``register_converters(registry)``,
    ``CONVERTERS`` iterable, single ``CONVERTER``.
    """
    if hasattr(module, "register_converters"):
        module.register_converters(registry)
        return

    converters_obj = getattr(module, "CONVERTERS", None)
    if converters_obj is not None:
        for converter in converters_obj:
            registry.register(converter)
        return

    converter_obj = getattr(module, "CONVERTER", None)
    if converter_obj is not None:
        registry.register(converter_obj)
        return

    raise RegistryError(
        "Converter module must expose register_converters(registry), "
        "CONVERTERS, or CONVERTER."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> ConverterRegistry:
    """Create a registry populated from plugin modules.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Plugin modules (dotted paths or files) to load, in order.

    Returns
    -------
    ConverterRegistry
        Registry holding every converter the modules expose.
    """
    registry = ConverterRegistry()
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
