"""``bundle-insight report``: generate an interactive HTML report."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import BundleInsightError
from ..logging_config import setup_logging
from ..visualization import generate_report
from . import app
from ._common import console, print_error, resolve_config, run_analysis


@app.command()
def report(
    bundle: Optional[Path] = typer.Option(
        None, "--bundle", "-b", help="Bundle file (auto-detected when omitted)"
    ),
    sourcemap: Optional[Path] = typer.Option(None, "--sourcemap", "-s", help="Source map"),
    project: Path = typer.Option(
        Path("."), "--project", "-C", help="React Native project root", file_okay=False
    ),
    platform: Optional[str] = typer.Option(None, "--platform", "-p", help="ios or android"),
    output: Path = typer.Option(
        Path("bundle-report.html"), "--output", "-o", help="Output HTML file path"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (TOML)", exists=True, dir_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Generate a self-contained HTML report with a treemap of the bundle.

    [bold cyan]Examples:[/bold cyan]

      bundle-insight report -b main.jsbundle

      bundle-insight report --output size.html
    """
    setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config=config, platform=platform, verbose=verbose)
        result, _context = run_analysis(bundle, sourcemap, project, settings)
        report_path = generate_report(result, output_path=str(output))
    except BundleInsightError as e:
        print_error(e)
        raise typer.Exit(1)

    console.print(f"\nReport saved to: [bold green]{report_path}[/bold green]")
