"""Fold the flat module list into package, duplicate and category rollups."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from .models import (
    BundleAnalysisResult,
    DuplicatePackageFinding,
    ModuleCategory,
    ModuleRecord,
    PackageAggregate,
)
from .parsing.classifier import categorize, extract_package_name

_NODE_MODULES = "node_modules/"


def install_location(path: str, package: str) -> Optional[str]:
    """Physical install prefix of ``package`` within ``path``.

    Everything up to and including the last ``node_modules/`` segment,
    followed by the package name, e.g. ``node_modules/a/node_modules/b``.
    """
    index = path.rfind(_NODE_MODULES)
    if index == -1:
        return None
    return path[: index + len(_NODE_MODULES)] + package


def _category_totals(modules: Iterable[ModuleRecord]) -> Dict[ModuleCategory, int]:
    totals = {category: 0 for category in ModuleCategory}
    for module in modules:
        totals[categorize(module.path)] += module.size_bytes
    return totals


def _group_by_package(modules: Iterable[ModuleRecord]) -> Dict[str, List[ModuleRecord]]:
    groups: Dict[str, List[ModuleRecord]] = defaultdict(list)
    for module in modules:
        name = extract_package_name(module.path)
        if name is not None:
            groups[name].append(module)
    return groups


def _package_aggregates(
    groups: Dict[str, List[ModuleRecord]], total_size: int
) -> List[PackageAggregate]:
    packages = []
    for name, members in groups.items():
        size = sum(m.size_bytes for m in members)
        percentage = (size / total_size) * 100 if total_size else 0.0
        packages.append(
            PackageAggregate(
                name=name,
                total_size_bytes=size,
                percentage_of_bundle=percentage,
                member_modules=tuple(members),
            )
        )
    # Stable sort keeps first-seen order among equal sizes.
    packages.sort(key=lambda p: p.total_size_bytes, reverse=True)
    return packages


def _duplicates(groups: Dict[str, List[ModuleRecord]]) -> List[DuplicatePackageFinding]:
    findings = []
    for name, members in groups.items():
        locations: List[str] = []
        for module in members:
            location = install_location(module.path, name)
            if location and location not in locations:
                locations.append(location)

        if len(locations) < 2:
            continue

        total = sum(m.size_bytes for m in members)
        count = len(locations)
        findings.append(
            DuplicatePackageFinding(
                name=name,
                install_locations=tuple(locations),
                estimated_wasted_bytes=total * (count - 1) / count,
            )
        )
    findings.sort(key=lambda d: d.estimated_wasted_bytes, reverse=True)
    return findings


def aggregate(modules: Iterable[ModuleRecord]) -> BundleAnalysisResult:
    """Build the analysis result for an ordered module list.

    An empty list yields an all-zero result.
    """
    modules = tuple(modules)
    totals = _category_totals(modules)
    total_size = sum(totals.values())
    groups = _group_by_package(modules)

    return BundleAnalysisResult(
        total_size=total_size,
        first_party_size=totals[ModuleCategory.FIRST_PARTY],
        third_party_size=totals[ModuleCategory.THIRD_PARTY],
        platform_size=totals[ModuleCategory.PLATFORM_RUNTIME],
        packages=tuple(_package_aggregates(groups, total_size)),
        duplicates=tuple(_duplicates(groups)),
        modules=modules,
    )
