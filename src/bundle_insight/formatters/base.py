"""Base formatter interface for Bundle Insight output rendering."""

from abc import ABC, abstractmethod

from ..models import BundleAnalysisResult, ReportContext

_UNITS = ("Bytes", "KB", "MB", "GB")


def format_bytes(num_bytes: float, decimals: int = 2) -> str:
    """Human-readable size in base-1024 units, trailing zeros dropped.

    >>> format_bytes(1536)
    '1.5 KB'
    """
    if num_bytes == 0:
        return "0 Bytes"

    decimals = max(decimals, 0)
    index = 0
    value = float(num_bytes)
    while abs(value) >= 1024 and index < len(_UNITS) - 1:
        value /= 1024
        index += 1

    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_UNITS[index]}"


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: BundleAnalysisResult, context: ReportContext) -> None:
        """Write the formatted result to the terminal."""

    @abstractmethod
    def format(self, result: BundleAnalysisResult, context: ReportContext) -> str:
        """Return formatted string representation of the result."""
