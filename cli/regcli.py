"""Typer-based command line interface for the registry builder."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from registry import BuildConfig, CatalogDocument, CatalogStats, RegistryBuilder, RegistryIOError  # type: ignore  # noqa: E402
from registry.report import print_report, stats_table  # type: ignore  # noqa: E402
from utils.config import load_config  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402
from utils.paths import normalise_path  # type: ignore  # noqa: E402

app = typer.Typer(add_completion=False)


def _resolve_root(path: Path) -> Path:
    if not path.is_dir():
        raise typer.BadParameter(f"Path {path} does not exist")
    return normalise_path(path)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.")) -> None:
    configure_logging("DEBUG" if verbose else "INFO")


def _run(
    project_root: Path,
    config_path: Optional[Path],
    out: Optional[Path],
    strict: Optional[bool],
    closed: Optional[bool],
    workers: Optional[int],
    write: bool,
) -> None:
    root = _resolve_root(project_root)
    app_config = load_config(config_path or root / "registry.yml")
    config = BuildConfig.from_app_config(
        app_config,
        root,
        output_path=out,
        strict=strict,
        closed_catalog=closed,
        workers=workers,
        write=write,
    )
    try:
        report = RegistryBuilder().build(config)
    except RegistryIOError as exc:
        typer.echo(f"Build failed: {exc}", err=True)
        raise typer.Exit(code=2)
    print_report(report)
    raise typer.Exit(code=report.exit_code)


@app.command()
def build(
    project_root: Path = typer.Option(Path("."), "--project-root", help="Repository root holding the manifests."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML config file (default: <root>/registry.yml)."),
    out: Optional[Path] = typer.Option(None, "--out", help="Output path of the registry document."),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Abort on missing files and duplicate names."),
    closed: Optional[bool] = typer.Option(None, "--closed/--open", help="Treat unresolved dependencies as errors."),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Number of threads validating manifests."),
) -> None:
    """Build the registry document and print a report."""

    _run(project_root, config_path, out, strict, closed, workers, write=True)


@app.command()
def check(
    project_root: Path = typer.Option(Path("."), "--project-root", help="Repository root holding the manifests."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML config file (default: <root>/registry.yml)."),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Abort on missing files and duplicate names."),
    closed: Optional[bool] = typer.Option(None, "--closed/--open", help="Treat unresolved dependencies as errors."),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Number of threads validating manifests."),
) -> None:
    """Validate the manifests without writing the registry document."""

    _run(project_root, config_path, None, strict, closed, workers, write=False)


@app.command()
def summarize(registry_path: Path = typer.Argument(..., help="Built registry.json path.")) -> None:
    if not registry_path.exists():
        raise typer.BadParameter(f"Registry {registry_path} not found")
    try:
        document = CatalogDocument.model_validate(json.loads(registry_path.read_text(encoding="utf-8")))
    except (ValueError, ValidationError) as exc:
        raise typer.BadParameter(f"Registry {registry_path} is not a valid registry document: {exc}")
    stats = CatalogStats.from_entries(document.items)
    Console().print(stats_table(stats))
    typer.echo(stats.model_dump_json(by_alias=True, indent=2))


if __name__ == "__main__":
    app()
