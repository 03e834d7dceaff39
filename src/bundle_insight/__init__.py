"""
Bundle Insight - size attribution for Metro JavaScript bundles

Splits a production bundle into its registered modules, works out where each
one came from, and rolls the sizes up by package, category and duplicate
install location.
"""

__version__ = "0.3.0"

from .api import analyze, analyze_bundle
from .models import (
    BundleAnalysisResult,
    DuplicatePackageFinding,
    ModuleCategory,
    ModuleRecord,
    PackageAggregate,
)

__all__ = [
    "analyze",  # Pure core
    "analyze_bundle",  # Files + project context
    "BundleAnalysisResult",
    "DuplicatePackageFinding",
    "ModuleCategory",
    "ModuleRecord",
    "PackageAggregate",
]
