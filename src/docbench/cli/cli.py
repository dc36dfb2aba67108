#!/usr/bin/env python3
"""
docbench.cli.cli

Typer-based CLI for benchmarking document-conversion backends.

Converters are supplied by plugin modules that expose
``register_converters(registry)``, ``CONVERTERS`` or ``CONVERTER``.

Examples
--------
List converters from a plugin file:

    docbench converters --plugin-module ./my_converters.py

Benchmark every available converter and rank outputs by fidelity:

    docbench benchmark report.docx --plugin-module ./my_converters.py --validate
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer

from docbench.errors import DocBenchError

if TYPE_CHECKING:
    from docbench.application.results import ConversionOutcome, FidelityReport
    from docbench.service import BenchmarkService

app = typer.Typer(
    name="docbench",
    help="Benchmark and score document-conversion backends.",
    no_args_is_help=True,
)

PLUGIN_MODULE_HELP = "Converter plugin import path or file path (repeatable)."
ARTIFACT_DIR_HELP = "Directory for converted artifacts (kept in memory if unset)."
JSON_HELP = "Print the result as JSON."


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error and return the process exit code.

    Parameters
    ----------
    exc : Exception
        Exception raised by the command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _build_service(
    plugin_modules: list[str] | None,
    artifact_dir: Path | None,
    **option_kwargs: Any,
) -> BenchmarkService:
    from docbench.application.use_cases import build_benchmark_options
    from docbench.service import create_service

    return create_service(
        plugin_modules=plugin_modules,
        artifact_dir=artifact_dir,
        options=build_benchmark_options(**option_kwargs),
    )


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _echo_outcome(outcome: ConversionOutcome) -> None:
    if outcome.success:
        typer.echo(
            f"✓ {outcome.method}: {outcome.duration_millis} ms, "
            f"{outcome.original_size} -> {outcome.output_size} bytes, "
            f"{outcome.artifact_locator}"
        )
    else:
        typer.echo(
            f"✗ {outcome.method}: {outcome.error_message} "
            f"({outcome.duration_millis} ms)"
        )


def _echo_fidelity(report: FidelityReport) -> None:
    if report.validation_error:
        typer.echo(f"  {report.converter_name}: {report.validation_error}")
        return
    typer.echo(
        f"  {report.converter_name}: score={report.overall_score:.4f} "
        f"tier={report.quality_tier} "
        f"units={report.actual_unit_count}/{report.expected_unit_count} "
        f"text={report.text_similarity:.2%} script={report.script_accuracy:.2%}"
    )
    for issue in report.issues:
        typer.echo(f"    - {issue}")


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and tracebacks."),
) -> None:
    """Initialize shared CLI state and logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("converters")
def converters_cmd(
    ctx: typer.Context,
    plugin_module: list[str] | None = typer.Option(
        None, "--plugin-module", envvar="DOCBENCH_PLUGIN_MODULES", help=PLUGIN_MODULE_HELP
    ),
) -> None:
    """List registered converters and whether each is available."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from docbench.converters.registry import converter_available

        service = _build_service(plugin_module, None)
        if not len(service.registry):
            typer.echo("No converters registered.")
            return
        for converter in service.registry:
            state = "available" if converter_available(converter) else "unavailable"
            typer.echo(f"{converter.name}: {state}")
    except DocBenchError as exc:
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    source_path: Path = typer.Argument(
        ..., exists=True, readable=True, dir_okay=False, help="Source document."
    ),
    converter_name: str = typer.Argument(..., help="Converter name (case-insensitive)."),
    plugin_module: list[str] | None = typer.Option(
        None, "--plugin-module", envvar="DOCBENCH_PLUGIN_MODULES", help=PLUGIN_MODULE_HELP
    ),
    artifact_dir: Path | None = typer.Option(
        None, "--artifact-dir", envvar="DOCBENCH_ARTIFACT_DIR", help=ARTIFACT_DIR_HELP
    ),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Convert a document with one converter."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from docbench.application.results import to_jsonable
        from docbench.documents import SourceDocument

        service = _build_service(plugin_module, artifact_dir)
        outcome = service.dispatch(SourceDocument.from_path(source_path), converter_name)
    except DocBenchError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    if as_json:
        _echo_json(to_jsonable(outcome))
    else:
        _echo_outcome(outcome)
    if not outcome.success:
        raise typer.Exit(code=1)


@app.command("benchmark")
def benchmark_cmd(
    ctx: typer.Context,
    source_path: Path = typer.Argument(
        ..., exists=True, readable=True, dir_okay=False, help="Source document."
    ),
    plugin_module: list[str] | None = typer.Option(
        None, "--plugin-module", envvar="DOCBENCH_PLUGIN_MODULES", help=PLUGIN_MODULE_HELP
    ),
    artifact_dir: Path | None = typer.Option(
        None, "--artifact-dir", envvar="DOCBENCH_ARTIFACT_DIR", help=ARTIFACT_DIR_HELP
    ),
    validate: bool = typer.Option(
        False, "--validate/--no-validate", help="Rank outputs by fidelity score."
    ),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Convert a document with every available converter and compare them."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from docbench.application.results import to_jsonable
        from docbench.documents import SourceDocument

        service = _build_service(plugin_module, artifact_dir, validate_outputs=validate)
        report = service.benchmark_all(SourceDocument.from_path(source_path))
    except DocBenchError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    if as_json:
        _echo_json(to_jsonable(report))
        return

    for outcome in report.outcomes:
        _echo_outcome(outcome)
    typer.echo(
        f"attempted={report.total_attempted} "
        f"success_rate={report.success_rate:.2%} "
        f"average={report.average_duration_millis:.1f} ms "
        f"fastest={report.fastest_method or '-'} "
        f"slowest={report.slowest_method or '-'}"
    )
    if report.ranking:
        typer.echo("Fidelity ranking:")
        for item in report.ranking:
            _echo_fidelity(item.report)


@app.command("validate")
def validate_cmd(
    ctx: typer.Context,
    source_path: Path = typer.Argument(
        ..., exists=True, readable=True, dir_okay=False, help="Source document."
    ),
    output_path: Path = typer.Argument(
        ..., exists=True, readable=True, dir_okay=False, help="Converted document."
    ),
    converter_name: str = typer.Option(
        "external", "--converter-name", help="Label recorded in the report."
    ),
    chars_per_unit: int = typer.Option(
        500, "--chars-per-unit", help="Source characters per estimated page."
    ),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Score an existing converted document against its source."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from docbench.application.results import to_jsonable
        from docbench.application.use_cases import build_validation_options
        from docbench.documents import SourceDocument

        service = _build_service(
            None,
            None,
            validation=build_validation_options(chars_per_unit=chars_per_unit),
        )
        report = service.validate(
            SourceDocument.from_path(source_path),
            SourceDocument.from_path(output_path),
            converter_name,
        )
    except DocBenchError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    if as_json:
        _echo_json(to_jsonable(report))
    else:
        _echo_fidelity(report)
    if report.validation_error:
        raise typer.Exit(code=1)


@app.command("doctor")
def doctor_cmd(
    plugin_module: list[str] | None = typer.Option(
        None, "--plugin-module", envvar="DOCBENCH_PLUGIN_MODULES", help=PLUGIN_MODULE_HELP
    ),
) -> None:
    """Print installed library versions and registered converters."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ["pydantic", "typer", "pypdf", "python-docx"]:
        try:
            typer.echo(f"{module}: {metadata.version(module)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    try:
        service = _build_service(plugin_module, None)
    except DocBenchError as exc:
        typer.echo(f"converters: <unavailable: {exc}>")
        return
    typer.echo(f"converters: {', '.join(service.registry.names()) or '<none>'}")


if __name__ == "__main__":
    app()
