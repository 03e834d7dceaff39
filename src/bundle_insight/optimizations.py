"""Optimization Rule Engine.

Turns an analysis result into prioritized advice. Four kinds of suggestion
are produced:

    replace         a lighter alternative exists for a known heavy package
    dynamic-import  a large, non-essential package could be loaded lazily
    dedupe          the same package is installed at several locations
    remove          an icon library is probably bundled in full

Severity and savings are driven by ``OptimizationThresholds``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_THRESHOLDS, OptimizationThresholds
from .models import (
    BundleAnalysisResult,
    OptimizationSuggestion,
    OptimizationSummary,
    PackageAggregate,
    Severity,
    SuggestionType,
)


@dataclass(frozen=True)
class OptimizationRule:
    package: str
    alternative: str
    reason: str
    savings_pct: int


OPTIMIZATION_RULES: Tuple[OptimizationRule, ...] = (
    OptimizationRule("lodash", "lodash-es", "Use tree-shakeable ES module version", 70),
    OptimizationRule("moment", "date-fns or dayjs", "Much smaller date library alternatives", 85),
    OptimizationRule("axios", "fetch API or ky", "Native fetch is built-in, ky is smaller", 50),
    OptimizationRule("uuid", "nanoid", "Smaller and faster ID generator", 60),
    OptimizationRule("react-native-uuid", "nanoid", "Smaller and faster ID generator", 60),
    OptimizationRule("lodash.throttle", "lodash-es/throttle", "Import from lodash-es", 70),
    OptimizationRule("lodash.debounce", "lodash-es/debounce", "Import from lodash-es", 70),
    OptimizationRule("lodash.get", "optional chaining (?.)", "Use native optional chaining", 70),
    OptimizationRule("ramda", "rambda", "Faster and smaller functional library", 75),
    OptimizationRule("classnames", "clsx", "Smaller alternative with the same API", 40),
    OptimizationRule(
        "react-native-vector-icons",
        "react-native-vector-icons (selective imports)",
        "Import only the icon sets you use",
        80,
    ),
    OptimizationRule(
        "@expo/vector-icons",
        "@expo/vector-icons (selective imports)",
        "Import only the icon sets you use",
        80,
    ),
    OptimizationRule("validator", "yup or zod", "Schema validation with better tree-shaking", 50),
    OptimizationRule("query-string", "URLSearchParams", "Native browser API", 100),
    OptimizationRule("qs", "URLSearchParams", "Native browser API for simple cases", 60),
)

# Core runtime and navigation packages that must load eagerly.
ESSENTIAL_PACKAGES = frozenset(
    {
        "react",
        "react-native",
        "@react-native",
        "@sentry/core",
        "@sentry/react-native",
        "react-native-safe-area-context",
        "react-native-screens",
        "@react-navigation/native",
        "@react-navigation/stack",
        "@react-navigation/bottom-tabs",
    }
)

_ICON_MARKERS = ("icons", "fontawesome", "@expo/vector-icons")


def find_rule(package_name: str) -> Optional[OptimizationRule]:
    """First rule whose package is a case-insensitive substring of the name."""
    lowered = package_name.lower()
    return next((r for r in OPTIMIZATION_RULES if r.package.lower() in lowered), None)


def _severity(savings: float, threshold: int) -> Severity:
    return Severity.HIGH if savings > threshold else Severity.MEDIUM


def _replace_suggestion(
    package: PackageAggregate, thresholds: OptimizationThresholds
) -> Optional[OptimizationSuggestion]:
    rule = find_rule(package.name)
    if rule is None:
        return None
    savings = math.floor(package.total_size_bytes * rule.savings_pct / 100)
    return OptimizationSuggestion(
        type=SuggestionType.REPLACE,
        severity=_severity(savings, thresholds.high_severity_bytes),
        package=package.name,
        current_size=package.total_size_bytes,
        potential_savings=savings,
        suggestion=f"Replace {package.name} with {rule.alternative}. {rule.reason}",
        alternative=rule.alternative,
    )


def _lazy_load_suggestion(
    package: PackageAggregate, thresholds: OptimizationThresholds
) -> Optional[OptimizationSuggestion]:
    if package.name in ESSENTIAL_PACKAGES:
        return None
    if package.total_size_bytes <= thresholds.lazy_load_bytes:
        return None
    return OptimizationSuggestion(
        type=SuggestionType.DYNAMIC_IMPORT,
        severity=_severity(package.total_size_bytes, thresholds.lazy_load_high_bytes),
        package=package.name,
        current_size=package.total_size_bytes,
        potential_savings=package.total_size_bytes,
        suggestion=f"Consider lazy loading {package.name} with a dynamic import()",
    )


def _icon_suggestion(
    package: PackageAggregate, thresholds: OptimizationThresholds
) -> Optional[OptimizationSuggestion]:
    if not any(marker in package.name for marker in _ICON_MARKERS):
        return None
    if package.total_size_bytes <= thresholds.icon_library_bytes:
        return None
    return OptimizationSuggestion(
        type=SuggestionType.REMOVE,
        severity=Severity.MEDIUM,
        package=package.name,
        current_size=package.total_size_bytes,
        potential_savings=math.floor(package.total_size_bytes * 0.7),
        suggestion=(
            f"Icon library {package.name} is large. Import individual icons "
            "instead of entire icon sets."
        ),
    )


def generate_optimizations(
    result: BundleAnalysisResult,
    thresholds: OptimizationThresholds = DEFAULT_THRESHOLDS,
) -> List[OptimizationSuggestion]:
    """Produce suggestions for ``result``, largest potential savings first."""
    suggestions: List[OptimizationSuggestion] = []

    for package in result.packages:
        for rule in (_replace_suggestion, _lazy_load_suggestion):
            suggestion = rule(package, thresholds)
            if suggestion is not None:
                suggestions.append(suggestion)

    for duplicate in result.duplicates:
        if duplicate.estimated_wasted_bytes <= thresholds.duplicate_bytes:
            continue
        savings = math.floor(duplicate.estimated_wasted_bytes * 0.5)
        suggestions.append(
            OptimizationSuggestion(
                type=SuggestionType.DEDUPE,
                severity=_severity(savings, thresholds.high_severity_bytes),
                package=duplicate.name,
                current_size=duplicate.estimated_wasted_bytes,
                potential_savings=savings,
                suggestion=(
                    f"{duplicate.name} is installed {len(duplicate.install_locations)} times. "
                    "Deduplicate with a resolutions/overrides entry."
                ),
            )
        )

    for package in result.packages:
        suggestion = _icon_suggestion(package, thresholds)
        if suggestion is not None:
            suggestions.append(suggestion)

    suggestions.sort(key=lambda s: s.potential_savings, reverse=True)
    return suggestions


def summarize_optimizations(suggestions: Iterable[OptimizationSuggestion]) -> OptimizationSummary:
    suggestions = list(suggestions)
    return OptimizationSummary(
        total_savings=sum(s.potential_savings for s in suggestions),
        high=sum(1 for s in suggestions if s.severity is Severity.HIGH),
        medium=sum(1 for s in suggestions if s.severity is Severity.MEDIUM),
        low=sum(1 for s in suggestions if s.severity is Severity.LOW),
    )
