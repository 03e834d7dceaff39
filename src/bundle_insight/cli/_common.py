"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console
from rich.markup import escape

from ..api import analyze_bundle
from ..config import AnalysisConfig, load_config
from ..exceptions import BundleInsightError, BundleNotFoundError, InvalidPathError
from ..file_ops import find_bundle_file, find_sourcemap
from ..models import BundleAnalysisResult, ReportContext

console = Console()

ANALYSIS_FILENAME = "bundle-analysis.json"


def print_error(error: BundleInsightError) -> None:
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    if error.hint:
        console.print(f"[dim]{escape(error.hint)}[/dim]")


def resolve_config(config: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Build configuration from CLI options; unset options are ``None``."""
    return load_config(config_file=config, **overrides)


def resolve_bundle(
    bundle: Optional[Path], project: Path, settings: AnalysisConfig
) -> Path:
    """Explicit bundle path, or the first conventional build output found."""
    if bundle is not None:
        return bundle
    if not project.is_dir():
        raise InvalidPathError(project, "project root is not a directory")
    found = find_bundle_file(project, platform=settings.platform, dev=settings.dev)
    if found is None:
        raise BundleNotFoundError(project / f"index.{settings.platform}.bundle")
    return found


def run_analysis(
    bundle: Optional[Path],
    sourcemap: Optional[Path],
    project: Path,
    settings: AnalysisConfig,
) -> Tuple[BundleAnalysisResult, ReportContext]:
    """Locate inputs, analyze, and build the formatter context."""
    bundle_path = resolve_bundle(bundle, project, settings)
    sourcemap = sourcemap or find_sourcemap(bundle_path)

    with console.status(f"[cyan]Analyzing {bundle_path.name}..."):
        result = analyze_bundle(
            bundle_path,
            sourcemap_path=sourcemap,
            project_root=project,
            config=settings,
        )

    context = ReportContext(
        bundle_path=str(bundle_path),
        sourcemap_loaded=sourcemap is not None,
        top_n=settings.top_n,
    )
    return result, context
