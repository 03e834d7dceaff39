"""Dependency manifest reader (``package.json`` and installed packages)."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Optional

from .models import BundleAnalysisResult

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


def _read_json(path: Path) -> Optional[dict]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None
    return data if isinstance(data, dict) else None


def read_package_json(project_root: Path) -> dict:
    """Parsed ``package.json`` at the project root, or an empty dict."""
    return _read_json(Path(project_root) / MANIFEST_FILENAME) or {}


def project_name(project_root: Path) -> Optional[str]:
    name = read_package_json(project_root).get("name")
    return name if isinstance(name, str) and name else None


def declared_dependencies(project_root: Path, include_dev: bool = True) -> Dict[str, str]:
    """Declared dependency name -> version range.

    ``devDependencies`` are merged over ``dependencies`` when ``include_dev``.
    """
    manifest = read_package_json(project_root)
    sections = ["dependencies", "devDependencies"] if include_dev else ["dependencies"]

    declared: Dict[str, str] = {}
    for section in sections:
        entries = manifest.get(section)
        if isinstance(entries, dict):
            declared.update({str(k): str(v) for k, v in entries.items()})
    return declared


def installed_version(project_root: Path, name: str) -> Optional[str]:
    """Version from ``node_modules/<name>/package.json``, if installed."""
    data = _read_json(Path(project_root) / "node_modules" / name / MANIFEST_FILENAME)
    if data is None:
        return None
    version = data.get("version")
    return version if isinstance(version, str) else None


def resolve_installed_versions(
    result: BundleAnalysisResult, project_root: Path
) -> BundleAnalysisResult:
    """Return a copy of ``result`` with installed versions filled in."""
    packages = tuple(
        replace(p, installed_version=installed_version(project_root, p.name))
        for p in result.packages
    )
    return replace(result, packages=packages)
