"""``bundle-insight serve``: browse a saved analysis in the browser."""

import threading
import webbrowser
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import BundleInsightError
from ..logging_config import setup_logging
from . import app
from ._common import ANALYSIS_FILENAME, console, print_error, resolve_config


def start_server(data_path: Path, host: str, port: int, open_browser: bool = False) -> None:
    """Run the visualization server until interrupted."""
    try:
        from ..server import _check_deps

        _check_deps()
    except ImportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    import uvicorn

    from ..server.app import create_app

    url = f"http://{host}:{port}"
    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()

    console.print(f"[bold]Visualization[/bold] at [link={url}]{url}[/link]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    try:
        uvicorn.run(create_app(data_path), host=host, port=port, log_level="warning")
    except KeyboardInterrupt:
        pass
    finally:
        console.print("\n[dim]Stopped.[/dim]")


@app.command()
def serve(
    data: Optional[Path] = typer.Option(
        None, "--data", "-d", help="Saved analysis JSON (defaults to the output directory)"
    ),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on"),
    host: Optional[str] = typer.Option(None, "--host", help="Host to bind to"),
    open_browser: bool = typer.Option(False, "--open", help="Open a browser"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (TOML)", exists=True, dir_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Serve the interactive treemap for a saved analysis."""
    setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config=config, port=port, host=host, verbose=verbose)
    except BundleInsightError as e:
        print_error(e)
        raise typer.Exit(1)

    data_path = data or Path(settings.output_dir) / ANALYSIS_FILENAME
    if not data_path.is_file():
        console.print(
            f"[yellow]Warning:[/yellow] {data_path} does not exist yet. "
            "Run [bold]bundle-insight analyze[/bold] first."
        )

    start_server(
        data_path, settings.host, settings.port, open_browser=open_browser or settings.open_browser
    )
