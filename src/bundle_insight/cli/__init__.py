"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="bundle-insight",
    help="Bundle Insight - size attribution for Metro bundles",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"bundle-insight {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Analyze React Native bundle size by module, package and category."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .report import report as _report  # noqa: F401, E402
from .serve import serve as _serve  # noqa: F401, E402
from .unused import unused as _unused  # noqa: F401, E402
