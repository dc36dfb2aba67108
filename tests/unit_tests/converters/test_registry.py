"""Unit tests for converter registry lookup and plugin loading helpers."""

from __future__ import annotations

import types
from pathlib import Path
from typing import BinaryIO

import pytest

from docbench.converters.base import Converter
from docbench.converters.registry import (
    ConverterRegistry,
    _import_module_or_path,
    _register_from_module,
    create_default_registry,
)
from docbench.errors import ConverterNotFoundError, RegistryError


class _Converter:
    """Simple converter test double."""

    def __init__(self, name: str, available: bool = True) -> None:
        self.name = name
        self._available = available

    def is_available(self) -> bool:
        return self._available

    def convert(self, source: BinaryIO) -> bytes:
        return source.read()


def test_register_requires_non_empty_name() -> None:
    """Reject converters without a non-empty name."""
    registry = ConverterRegistry()
    with pytest.raises(RegistryError, match="non-empty 'name'"):
        registry.register(_Converter(name="  "))


def test_register_rejects_duplicates_case_insensitively() -> None:
    """Names differing only in case collide."""
    registry = ConverterRegistry()
    registry.register(_Converter("Poi"))
    with pytest.raises(RegistryError, match="already registered"):
        registry.register(_Converter("POI"))


def test_lookup_is_case_insensitive_and_trimmed() -> None:
    """find() and get() ignore case and surrounding whitespace."""
    registry = ConverterRegistry()
    converter = _Converter("Docx4j")
    registry.register(converter)

    assert registry.find("docx4j") is converter
    assert registry.find("  DOCX4J ") is converter
    assert registry.get("DocX4J") is converter
    assert registry.find("docx") is None


def test_get_unknown_converter_raises() -> None:
    """Raise clear error for unknown converter lookup."""
    registry = ConverterRegistry()
    registry.register(_Converter("poi"))
    with pytest.raises(ConverterNotFoundError, match="Unknown converter 'missing'"):
        registry.get("missing")


def test_names_keep_registration_order() -> None:
    """Iteration, names and availability follow registration order."""
    registry = ConverterRegistry()
    registry.register(_Converter("b"))
    registry.register(_Converter("a", available=False))
    registry.register(_Converter("c"))

    assert registry.names() == ["b", "a", "c"]
    assert registry.available_names() == ["b", "c"]
    assert [converter.name for converter in registry] == ["b", "a", "c"]
    assert len(registry) == 3


def test_test_double_satisfies_converter_protocol() -> None:
    """Structural typing accepts any object with the converter members."""
    assert isinstance(_Converter("x"), Converter)


def test_import_module_by_path_and_register_variants(tmp_path: Path) -> None:
    """Load converter module from file path and register via CONVERTER."""
    plugin_file = tmp_path / "plugin_mod.py"
    plugin_file.write_text(
        "class C:\n"
        "    name = 'c'\n"
        "    def is_available(self):\n"
        "        return True\n"
        "    def convert(self, source):\n"
        "        return source.read()\n"
        "CONVERTER = C()\n",
        encoding="utf-8",
    )
    module = _import_module_or_path(str(plugin_file))
    registry = ConverterRegistry()
    _register_from_module(module, registry)
    assert registry.get("c").name == "c"


def test_import_module_invalid_path_spec_raises(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Raise RegistryError when file path exists but import spec is invalid."""
    plugin_file = tmp_path / "plugin_mod.py"
    plugin_file.write_text("x = 1\n", encoding="utf-8")
    monkeypatch.setattr(
        "docbench.converters.registry.importlib.util.spec_from_file_location",
        lambda *_args, **_kwargs: None,
    )
    with pytest.raises(RegistryError, match="Unable to load converter module"):
        _import_module_or_path(str(plugin_file))


def test_import_module_execution_failure_raises(tmp_path: Path) -> None:
    """Wrap errors raised while executing a plugin file."""
    plugin_file = tmp_path / "broken_mod.py"
    plugin_file.write_text("raise RuntimeError('bad plugin')\n", encoding="utf-8")
    with pytest.raises(RegistryError, match="bad plugin"):
        _import_module_or_path(str(plugin_file))


def test_import_module_by_name_failure_raises() -> None:
    """Raise RegistryError when import path cannot be imported."""
    with pytest.raises(RegistryError, match="Unable to import converter module"):
        _import_module_or_path("module.that.does.not.exist")


def test_register_from_module_uses_register_converters() -> None:
    """Prefer register_converters(registry) hook when available."""
    registry = ConverterRegistry()
    module = types.SimpleNamespace(
        register_converters=lambda r: r.register(_Converter("hook"))
    )
    _register_from_module(module, registry)  # type: ignore[arg-type]
    assert registry.get("hook").name == "hook"


def test_register_from_module_with_converters_list() -> None:
    """Register all converters from CONVERTERS iterable contract."""
    registry = ConverterRegistry()
    module = types.SimpleNamespace(CONVERTERS=[_Converter("a"), _Converter("b")])
    _register_from_module(module, registry)  # type: ignore[arg-type]
    assert registry.names() == ["a", "b"]


def test_register_from_module_requires_contract() -> None:
    """Raise when module exposes no supported registration contract."""
    with pytest.raises(RegistryError, match="must expose"):
        _register_from_module(types.SimpleNamespace(), ConverterRegistry())  # type: ignore[arg-type]


def test_registry_load_module_calls_import_and_register(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Execute load_module wrapper path through helper functions."""
    registry = ConverterRegistry()
    module = types.SimpleNamespace(CONVERTER=_Converter("x"))
    monkeypatch.setattr(
        "docbench.converters.registry._import_module_or_path", lambda _path: module
    )
    registry.load_module("pkg.mod")
    assert "x" in registry.names()


def test_create_default_registry_loads_extra_modules(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Load plugin modules passed into create_default_registry, in order."""
    loaded: list[str] = []

    def fake_load_module(self: ConverterRegistry, module: str) -> None:
        del self
        loaded.append(module)

    monkeypatch.setattr(ConverterRegistry, "load_module", fake_load_module)
    registry = create_default_registry(extra_modules=["a.b", "c.d"])
    assert registry.names() == []
    assert loaded == ["a.b", "c.d"]


def test_available_names_skip_raising_availability_checks() -> None:
    """A converter whose availability check raises counts as unavailable."""

    class _Flaky(_Converter):
        def is_available(self) -> bool:
            raise RuntimeError("office process died")

    registry = ConverterRegistry()
    registry.register(_Converter("ok"))
    registry.register(_Flaky("flaky"))

    assert registry.available_names() == ["ok"]
