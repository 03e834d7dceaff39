"""``bundle-insight unused``: list project files and dependencies left out of the bundle."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import BundleInsightError
from ..formatters import format_bytes
from ..logging_config import setup_logging
from . import app
from ._common import console, print_error, resolve_config, run_analysis


@app.command()
def unused(
    bundle: Optional[Path] = typer.Option(
        None, "--bundle", "-b", help="Bundle file (auto-detected when omitted)"
    ),
    sourcemap: Optional[Path] = typer.Option(None, "--sourcemap", "-s", help="Source map"),
    project: Path = typer.Option(
        Path("."), "--project", "-C", help="React Native project root", file_okay=False
    ),
    platform: Optional[str] = typer.Option(None, "--platform", "-p", help="ios or android"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (TOML)", exists=True, dir_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Show source files and dependencies that never reach the bundle."""
    setup_logging(verbose=verbose)

    try:
        settings = resolve_config(
            config=config, platform=platform, include_dead_code=True, verbose=verbose
        )
        result, _context = run_analysis(bundle, sourcemap, project, settings)
    except BundleInsightError as e:
        print_error(e)
        raise typer.Exit(1)

    dead = result.dead_code
    if dead is None or not (dead.unused_files or dead.unused_dependencies):
        console.print("[green]No unused files or dependencies found.[/green]")
        return

    if dead.unused_dependencies:
        table = Table(title="Unused Dependencies", expand=True)
        table.add_column("Package", style="yellow")
        table.add_column("Declared", width=14)
        table.add_column("On disk", justify="right", width=12)
        for dep in dead.unused_dependencies:
            table.add_row(dep.name, dep.declared_version, format_bytes(dep.estimated_size))
        console.print(table)

    if dead.unused_files:
        table = Table(title="Unused Files", expand=True)
        table.add_column("File", style="yellow")
        table.add_column("Size", justify="right", width=12)
        for unused_file in dead.unused_files:
            table.add_row(unused_file.path, format_bytes(unused_file.size))
        console.print(table)

    console.print(f"Potential savings: [bold green]{format_bytes(dead.total_savings)}[/bold green]")
