"""Rich terminal formatter for Bundle Insight."""

import io
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models import BundleAnalysisResult, ReportContext, Severity
from ..optimizations import summarize_optimizations
from .base import BaseFormatter, format_bytes

_SEVERITY_STYLE = {
    Severity.HIGH: "[red bold]high[/red bold]",
    Severity.MEDIUM: "[yellow]medium[/yellow]",
    Severity.LOW: "[green]low[/green]",
}


def _pct(part: float, total: int) -> str:
    return f"{(part / total * 100) if total else 0:.1f}%"


class RichFormatter(BaseFormatter):
    """Rich terminal output: summary panel, package tables, advice."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console

    def render(self, result: BundleAnalysisResult, context: ReportContext) -> None:
        self._print_all(self._console or Console(), result, context)

    def format(self, result: BundleAnalysisResult, context: ReportContext) -> str:
        buffer = io.StringIO()
        console = Console(file=buffer, width=120, force_terminal=False, color_system=None)
        self._print_all(console, result, context)
        return buffer.getvalue()

    def _print_all(
        self, console: Console, result: BundleAnalysisResult, context: ReportContext
    ) -> None:
        self._print_summary(console, result, context)
        self._print_packages(console, result, context)
        self._print_duplicates(console, result)
        self._print_optimizations(console, result, context)
        self._print_dead_code(console, result, context)

    # -- private helpers --

    def _print_summary(
        self, console: Console, result: BundleAnalysisResult, context: ReportContext
    ) -> None:
        total = result.total_size
        lines = []
        if result.project_name:
            lines.append(f"Project: [bold]{result.project_name}[/bold]")
        if context.bundle_path:
            lines.append(f"Bundle: [cyan]{context.bundle_path}[/cyan]")
        lines.append(
            f"Total size: [bold]{format_bytes(total)}[/bold]  |  "
            f"Modules: [bold]{result.module_count}[/bold]  |  "
            f"Packages: [bold]{len(result.packages)}[/bold]"
        )
        lines.append(
            f"Your code: [green]{format_bytes(result.first_party_size)}[/green] "
            f"({_pct(result.first_party_size, total)})  |  "
            f"Dependencies: [yellow]{format_bytes(result.third_party_size)}[/yellow] "
            f"({_pct(result.third_party_size, total)})  |  "
            f"React Native: [blue]{format_bytes(result.platform_size)}[/blue] "
            f"({_pct(result.platform_size, total)})"
        )
        if not context.sourcemap_loaded:
            lines.append("[dim]No position map loaded; module paths are inferred.[/dim]")

        console.print(
            Panel("\n".join(lines), title="[bold cyan]Bundle Summary[/bold cyan]", expand=False)
        )
        console.print()

    def _print_packages(
        self, console: Console, result: BundleAnalysisResult, context: ReportContext
    ) -> None:
        if not result.packages:
            return

        shown = result.packages[: context.top_n]
        table = Table(title=f"Top {len(shown)} Packages by Size", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Package", style="yellow", ratio=3)
        table.add_column("Size", justify="right", width=12)
        table.add_column("% of bundle", justify="right", width=12)
        table.add_column("Modules", justify="right", width=8)
        table.add_column("Version", width=12)

        for i, package in enumerate(shown, 1):
            table.add_row(
                str(i),
                package.name,
                format_bytes(package.total_size_bytes),
                f"{package.percentage_of_bundle:.1f}%",
                str(len(package.member_modules)),
                package.installed_version or "-",
            )
        console.print(table)
        console.print()

    def _print_duplicates(self, console: Console, result: BundleAnalysisResult) -> None:
        if not result.duplicates:
            return

        console.print(f"[bold red]Duplicate packages ({len(result.duplicates)})[/bold red]")
        for duplicate in result.duplicates:
            console.print(
                f"  [yellow]{duplicate.name}[/yellow]  "
                f"wasting ~{format_bytes(duplicate.estimated_wasted_bytes)}"
            )
            for location in duplicate.install_locations:
                console.print(f"    [dim]-[/dim] {location}")
        console.print()

    def _print_optimizations(
        self, console: Console, result: BundleAnalysisResult, context: ReportContext
    ) -> None:
        if not result.optimizations:
            return

        summary = summarize_optimizations(result.optimizations)
        console.print(
            f"[bold]Optimization opportunities[/bold]  "
            f"potential savings [green]{format_bytes(summary.total_savings)}[/green]  "
            f"([red]{summary.high}[/red] high, [yellow]{summary.medium}[/yellow] medium, "
            f"[green]{summary.low}[/green] low)"
        )
        for suggestion in result.optimizations[: context.top_n]:
            console.print(
                f"  {_SEVERITY_STYLE[suggestion.severity]}  "
                f"[cyan]{suggestion.type.value}[/cyan]  {suggestion.package}  "
                f"[green]-{format_bytes(suggestion.potential_savings)}[/green]"
            )
            console.print(f"    [green]->[/green] {suggestion.suggestion}")
        console.print()

    def _print_dead_code(
        self, console: Console, result: BundleAnalysisResult, context: ReportContext
    ) -> None:
        dead = result.dead_code
        if dead is None or not (dead.unused_files or dead.unused_dependencies):
            return

        console.print(
            f"[bold]Dead weight[/bold]  "
            f"{len(dead.unused_files)} unused files, "
            f"{len(dead.unused_dependencies)} unused dependencies "
            f"(~{format_bytes(dead.total_savings)})"
        )
        for dep in dead.unused_dependencies[: context.top_n]:
            console.print(f"  [yellow]{dep.name}[/yellow] {dep.declared_version}")
        for unused in dead.unused_files[: context.top_n]:
            console.print(f"  [dim]{unused.path}[/dim]")
        console.print()
