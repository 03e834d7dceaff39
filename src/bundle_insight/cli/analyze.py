"""``bundle-insight analyze``: attribute bundle size and save the analysis."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import BundleInsightError
from ..file_ops import write_text_file
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import (
    ANALYSIS_FILENAME,
    console,
    print_error,
    resolve_config,
    run_analysis,
)


@app.command()
def analyze(
    bundle: Optional[Path] = typer.Option(
        None, "--bundle", "-b", help="Bundle file (auto-detected when omitted)"
    ),
    sourcemap: Optional[Path] = typer.Option(
        None, "--sourcemap", "-s", help="Source map (auto-detected next to the bundle)"
    ),
    project: Path = typer.Option(
        Path("."), "--project", "-C", help="React Native project root", file_okay=False
    ),
    platform: Optional[str] = typer.Option(
        None, "--platform", "-p", help="Platform used for bundle discovery: ios or android"
    ),
    dev: bool = typer.Option(False, "--dev", help="Prefer development bundle locations"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Directory for bundle-analysis.json"
    ),
    output_format: str = typer.Option(
        "rich", "--format", "-f", help="Output format: rich, json, csv, markdown, quiet"
    ),
    top: Optional[int] = typer.Option(None, "--top", help="Rows shown per table", min=1),
    no_dead_code: bool = typer.Option(
        False, "--no-dead-code", help="Skip the unused files/dependencies scan"
    ),
    open_browser: bool = typer.Option(
        False, "--open", help="Start the visualization server and open a browser"
    ),
    port: Optional[int] = typer.Option(None, "--port", help="Visualization server port"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Analyze a bundle: size by module, package and category.

    [bold cyan]Examples:[/bold cyan]

      bundle-insight analyze

      bundle-insight analyze -b index.android.bundle -s index.android.bundle.map

      bundle-insight analyze --platform android --format json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        formatter = get_formatter(output_format)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        settings = resolve_config(
            config=config,
            platform=platform,
            dev=True if dev else None,
            output_dir=output,
            top_n=top,
            include_dead_code=False if no_dead_code else None,
            port=port,
            open_browser=True if open_browser else None,
            verbose=verbose,
            quiet=quiet,
        )
        result, context = run_analysis(bundle, sourcemap, project, settings)

        data_path = Path(settings.output_dir) / ANALYSIS_FILENAME
        write_text_file(data_path, json.dumps(result.to_dict(), indent=2))
        logger.info(f"Analysis saved to {data_path}")
    except BundleInsightError as e:
        print_error(e)
        raise typer.Exit(1)

    if result.module_count == 0:
        console.print(
            "[yellow]Warning:[/yellow] no modules found. "
            "Is this a Metro bundle built with __d() module registration?"
        )

    formatter.render(result, context)

    if output_format == "rich":
        console.print(f"Analysis saved to: [bold green]{data_path}[/bold green]")

    if settings.open_browser:
        from .serve import start_server

        start_server(data_path, settings.host, settings.port, open_browser=True)
