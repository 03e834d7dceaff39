"""Quiet formatter: package names only."""

from ..models import BundleAnalysisResult, ReportContext
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """Render package names, largest first, one per line."""

    def render(self, result: BundleAnalysisResult, context: ReportContext) -> None:
        print(self.format(result, context))

    def format(self, result: BundleAnalysisResult, context: ReportContext) -> str:
        return "\n".join(p.name for p in result.packages)
