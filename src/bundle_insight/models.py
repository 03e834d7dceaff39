"""Data models for Bundle Insight.

Every entity here is produced once per analysis run and treated as an
immutable snapshot. ``to_dict`` methods return plain JSON-serialisable data.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

ModuleId = Union[int, str]


class ModuleCategory(str, Enum):
    """Coarse provenance of a module."""

    FIRST_PARTY = "first-party"
    THIRD_PARTY = "third-party"
    PLATFORM_RUNTIME = "platform-runtime"


class SuggestionType(str, Enum):
    REPLACE = "replace"
    REMOVE = "remove"
    DEDUPE = "dedupe"
    DYNAMIC_IMPORT = "dynamic-import"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ModuleRecord:
    """One emitted module unit recovered from the bundle."""

    id: ModuleId
    path: str
    size_bytes: int
    package: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "size_bytes": self.size_bytes,
            "package": self.package,
        }


@dataclass(frozen=True)
class PackageAggregate:
    """Size rollup for one distinct package name."""

    name: str
    total_size_bytes: int
    percentage_of_bundle: float
    member_modules: Tuple[ModuleRecord, ...] = ()
    installed_version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "total_size_bytes": self.total_size_bytes,
            "percentage_of_bundle": self.percentage_of_bundle,
            "member_modules": [m.id for m in self.member_modules],
            "installed_version": self.installed_version,
        }


@dataclass(frozen=True)
class DuplicatePackageFinding:
    """A package name installed at more than one filesystem prefix."""

    name: str
    install_locations: Tuple[str, ...]
    estimated_wasted_bytes: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "install_locations": list(self.install_locations),
            "estimated_wasted_bytes": self.estimated_wasted_bytes,
        }


@dataclass(frozen=True)
class OptimizationSuggestion:
    """A prioritized piece of advice emitted by the rule engine."""

    type: SuggestionType
    severity: Severity
    package: str
    current_size: float
    potential_savings: int
    suggestion: str
    alternative: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "package": self.package,
            "current_size": self.current_size,
            "potential_savings": self.potential_savings,
            "suggestion": self.suggestion,
            "alternative": self.alternative,
        }


@dataclass(frozen=True)
class OptimizationSummary:
    total_savings: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


@dataclass(frozen=True)
class UnusedFile:
    path: str
    size: int
    reason: str


@dataclass(frozen=True)
class UnusedDependency:
    name: str
    declared_version: str
    estimated_size: int
    reason: str


@dataclass(frozen=True)
class DeadCodeReport:
    """Source files and declared dependencies that never reach the bundle."""

    unused_files: Tuple[UnusedFile, ...] = ()
    unused_dependencies: Tuple[UnusedDependency, ...] = ()

    @property
    def total_savings(self) -> int:
        return sum(f.size for f in self.unused_files) + sum(
            d.estimated_size for d in self.unused_dependencies
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unused_files": [
                {"path": f.path, "size": f.size, "reason": f.reason} for f in self.unused_files
            ],
            "unused_dependencies": [
                {
                    "name": d.name,
                    "declared_version": d.declared_version,
                    "estimated_size": d.estimated_size,
                    "reason": d.reason,
                }
                for d in self.unused_dependencies
            ],
            "total_savings": self.total_savings,
        }


@dataclass(frozen=True)
class BundleAnalysisResult:
    """Top-level output of a bundle analysis run.

    ``packages`` is sorted descending by size and ``duplicates`` descending
    by estimated waste. ``modules`` keeps emission order.
    """

    total_size: int = 0
    first_party_size: int = 0
    third_party_size: int = 0
    platform_size: int = 0
    packages: Tuple[PackageAggregate, ...] = ()
    duplicates: Tuple[DuplicatePackageFinding, ...] = ()
    modules: Tuple[ModuleRecord, ...] = ()
    optimizations: Tuple[OptimizationSuggestion, ...] = ()
    dead_code: Optional[DeadCodeReport] = None
    project_name: Optional[str] = None

    @property
    def module_count(self) -> int:
        return len(self.modules)

    @property
    def category_totals(self) -> Dict[str, int]:
        return {
            ModuleCategory.FIRST_PARTY.value: self.first_party_size,
            ModuleCategory.THIRD_PARTY.value: self.third_party_size,
            ModuleCategory.PLATFORM_RUNTIME.value: self.platform_size,
        }

    @property
    def module_map(self) -> Dict[str, ModuleRecord]:
        """Path-keyed lookup; a later module with the same path wins."""
        return {m.path: m for m in self.modules}

    def package(self, name: str) -> Optional[PackageAggregate]:
        return next((p for p in self.packages if p.name == name), None)

    def to_dict(self) -> Dict[str, Any]:
        module_pairs: List[List[Any]] = [
            [record.path, record.to_dict()] for record in self.modules
        ]
        return {
            "project_name": self.project_name,
            "total_size": self.total_size,
            "first_party_size": self.first_party_size,
            "third_party_size": self.third_party_size,
            "platform_size": self.platform_size,
            "module_count": self.module_count,
            "packages": [p.to_dict() for p in self.packages],
            "duplicates": [d.to_dict() for d in self.duplicates],
            "optimizations": [o.to_dict() for o in self.optimizations],
            "dead_code": self.dead_code.to_dict() if self.dead_code else None,
            "modules": [m.to_dict() for m in self.modules],
            "module_map": module_pairs,
        }


@dataclass
class ReportContext:
    """Context passed to formatters alongside the analysis result."""

    bundle_path: Optional[str] = None
    sourcemap_loaded: bool = False
    top_n: int = 10
