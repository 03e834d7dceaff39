"""Public API for Bundle Insight.

Two entry points are provided:

``analyze`` is the pure core. It takes bundle text and optional position-map
text and returns a BundleAnalysisResult without touching the filesystem.

``analyze_bundle`` wraps it for real projects: it reads files, discovers the
position map, and attaches installed versions, optimization advice and the
dead weight report.

Example:
    >>> from bundle_insight import analyze
    >>> result = analyze('__d(function(g,r,i,a,m,e,d){},0,[],"src/App.js");')
    >>> result.module_count
    1
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

from .aggregation import aggregate
from .config import AnalysisConfig
from .deadcode import find_dead_code
from .file_ops import find_sourcemap, read_bundle, read_position_map
from .logging_config import get_logger
from .manifest import project_name, resolve_installed_versions
from .models import BundleAnalysisResult
from .optimizations import generate_optimizations
from .parsing import load_position_map, parse_modules

logger = get_logger(__name__)


def analyze(bundle_text: str, position_map_text: Optional[str] = None) -> BundleAnalysisResult:
    """Segment, attribute and aggregate one bundle.

    Args:
        bundle_text: Full bundle source.
        position_map_text: Optional source-map-like JSON; ignored when it
            cannot be parsed.

    Returns:
        BundleAnalysisResult with modules in emission order. Never raises
        for string input; text without module markers yields an empty result.
    """
    position_map = load_position_map(position_map_text)
    modules = parse_modules(bundle_text, position_map)
    return aggregate(modules)


def analyze_bundle(
    bundle_path: Path,
    sourcemap_path: Optional[Path] = None,
    project_root: Optional[Path] = None,
    config: Optional[AnalysisConfig] = None,
) -> BundleAnalysisResult:
    """Analyze a bundle file and enrich the result with project context.

    Args:
        bundle_path: Path to the built bundle.
        sourcemap_path: Position map; auto-detected next to the bundle when None.
        project_root: React Native project root used for installed versions,
            the project name and the dead weight scan.
        config: Analysis settings (defaults when None).

    Raises:
        BundleNotFoundError: If the bundle does not exist
        FileAccessError: If the bundle cannot be read
    """
    config = config or AnalysisConfig()
    bundle_path = Path(bundle_path)

    logger.info(f"Reading bundle {bundle_path}")
    bundle_text = read_bundle(bundle_path)

    if sourcemap_path is None:
        sourcemap_path = find_sourcemap(bundle_path)
    map_text = read_position_map(sourcemap_path) if sourcemap_path else None
    if map_text is None:
        logger.info("No position map available; module paths will be inferred")
    else:
        logger.info(f"Using position map {sourcemap_path}")

    result = analyze(bundle_text, map_text)
    logger.info(
        f"Parsed {result.module_count} modules, {len(result.packages)} packages, "
        f"{len(result.duplicates)} duplicates"
    )

    if project_root is not None:
        project_root = Path(project_root)
        result = resolve_installed_versions(result, project_root)
        result = replace(result, project_name=project_name(project_root))

    suggestions = generate_optimizations(result, config.thresholds)
    logger.debug(f"Generated {len(suggestions)} optimization suggestions")
    result = replace(result, optimizations=tuple(suggestions))

    if config.include_dead_code and project_root is not None:
        dead_code = find_dead_code(project_root, [m.path for m in result.modules], config)
        result = replace(result, dead_code=dead_code)

    return result
