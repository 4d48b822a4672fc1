"""Human-readable build summaries printed with :mod:`rich`."""
from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from .builder import BuildReport, BuildState
from .errors import UnresolvedDependency
from .schema import CatalogStats

KIND_LABELS = {
    "registry:ui": "UI Components",
    "registry:block": "Blocks",
    "registry:hook": "Hooks",
    "registry:lib": "Libraries",
}


def stats_table(stats: CatalogStats) -> Table:
    table = Table(title="Statistics", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Count", justify="right")
    for kind, count in stats.by_kind.items():
        table.add_row(KIND_LABELS.get(kind, kind), str(count))
    table.add_row("Total", str(stats.total), style="bold")
    return table


def print_report(report: BuildReport, console: Optional[Console] = None) -> None:
    """Print counts, errors and warnings of ``report``."""

    console = console or Console(stderr=True)

    if report.errors:
        console.print(f"[bold red]Found {len(report.errors)} error(s):[/bold red]")
        for issue in report.errors:
            console.print(f"  - {issue.message}", markup=False, highlight=False)

    if report.state is BuildState.WRITTEN:
        console.print(f"[green]Successfully built registry with {report.stats.total} components[/green]")
        console.print(f"Output: {report.output_path}", highlight=False)
    elif report.state is BuildState.VALIDATED:
        console.print(f"[green]Registry is valid: {report.stats.total} components[/green]")
    console.print(stats_table(report.stats))

    if report.warnings:
        console.print(f"[yellow]Warning: {len(report.warnings)} issue(s):[/yellow]")
        for issue in report.warnings:
            console.print(f"  - {issue.message}", markup=False, highlight=False)
    if not any(isinstance(issue, UnresolvedDependency) for issue in report.errors + report.warnings):
        console.print("All dependencies resolved")
