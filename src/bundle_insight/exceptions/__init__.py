"""Exception hierarchy for Bundle Insight."""

from .analysis import (
    AnalysisError,
    BundleNotFoundError,
    FileAccessError,
    PositionMapError,
)
from .base import BundleInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "BundleInsightError",
    "AnalysisError",
    "FileAccessError",
    "BundleNotFoundError",
    "PositionMapError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
