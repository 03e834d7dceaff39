"""Dead weight scan: project files and dependencies that never reach the bundle.

Bundled paths are compared loosely (substring containment in either
direction, case-insensitive, ``/`` separators) since recovered paths are
often relative fragments of the on-disk location.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .config import AnalysisConfig
from .manifest import declared_dependencies
from .models import DeadCodeReport, UnusedDependency, UnusedFile

logger = logging.getLogger(__name__)

UNUSED_FILE_REASON = "Not imported anywhere or not reachable from entry point"
UNUSED_DEPENDENCY_REASON = "Installed but never imported in bundled code"


def _normalize(path: str) -> str:
    return path.replace("\\", "/").lower()


def _bundled_set(module_paths: Iterable[str]) -> Set[str]:
    return {_normalize(p) for p in module_paths}


def _iter_source_files(directory: Path, config: AnalysisConfig) -> Iterable[Path]:
    extensions = tuple(config.source_extensions)
    ignored = set(config.ignored_dirs)
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        for filename in sorted(filenames):
            if filename.endswith(extensions):
                yield Path(dirpath) / filename


def _directory_size(directory: Path) -> int:
    total = 0
    for dirpath, _dirnames, filenames in os.walk(directory):
        for filename in filenames:
            try:
                total += (Path(dirpath) / filename).stat().st_size
            except OSError:
                continue
    return total


def find_unused_files(
    project_root: Path,
    module_paths: Iterable[str],
    config: Optional[AnalysisConfig] = None,
) -> List[UnusedFile]:
    """Source files under ``<root>/src`` that no bundled path refers to."""
    config = config or AnalysisConfig()
    project_root = Path(project_root)
    src_dir = project_root / "src"
    if not src_dir.is_dir():
        return []

    bundled = _bundled_set(module_paths)
    unused = []
    for file_path in _iter_source_files(src_dir, config):
        relative = file_path.relative_to(project_root).as_posix()
        normalized = _normalize(relative)
        if any(normalized in b or b in normalized for b in bundled):
            continue
        try:
            size = file_path.stat().st_size
        except OSError as e:
            logger.debug(f"Skipping {file_path}: {e}")
            continue
        unused.append(UnusedFile(path=relative, size=size, reason=UNUSED_FILE_REASON))
    return unused


def find_unused_dependencies(
    project_root: Path,
    module_paths: Iterable[str],
    config: Optional[AnalysisConfig] = None,
) -> List[UnusedDependency]:
    """Declared dependencies whose ``node_modules/<name>`` is never bundled."""
    config = config or AnalysisConfig()
    project_root = Path(project_root)
    bundled = _bundled_set(module_paths)

    unused = []
    for name, version in declared_dependencies(project_root).items():
        if any(skip in name for skip in config.dependency_skip_list):
            continue
        needle = _normalize(f"node_modules/{name}")
        if any(needle in b for b in bundled):
            continue
        unused.append(
            UnusedDependency(
                name=name,
                declared_version=version,
                estimated_size=_directory_size(project_root / "node_modules" / name),
                reason=UNUSED_DEPENDENCY_REASON,
            )
        )
    return unused


def find_dead_code(
    project_root: Path,
    module_paths: Iterable[str],
    config: Optional[AnalysisConfig] = None,
) -> DeadCodeReport:
    module_paths = list(module_paths)
    report = DeadCodeReport(
        unused_files=tuple(find_unused_files(project_root, module_paths, config)),
        unused_dependencies=tuple(find_unused_dependencies(project_root, module_paths, config)),
    )
    logger.debug(
        f"Dead weight scan: {len(report.unused_files)} files, "
        f"{len(report.unused_dependencies)} dependencies"
    )
    return report
