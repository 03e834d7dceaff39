"""Analysis-related exceptions: bundle access, position maps."""

from pathlib import Path

from .base import BundleInsightError


class AnalysisError(BundleInsightError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class BundleNotFoundError(AnalysisError):
    """Raised when no bundle file exists at the given location."""

    hint = "Build one with `react-native bundle` or point at it with --bundle."

    def __init__(self, filepath: Path):
        super().__init__(
            f"Bundle file not found: {filepath}",
            details={"filepath": str(filepath)},
        )
        self.filepath = filepath


class PositionMapError(AnalysisError):
    """Raised when position map text is not a usable source map."""

    def __init__(self, reason: str):
        super().__init__("Invalid position map", details={"reason": reason})
        self.reason = reason
