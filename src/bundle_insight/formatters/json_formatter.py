"""JSON formatter for Bundle Insight."""

import json

from ..models import BundleAnalysisResult, ReportContext
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the full analysis as JSON."""

    def render(self, result: BundleAnalysisResult, context: ReportContext) -> None:
        print(self.format(result, context))

    def format(self, result: BundleAnalysisResult, context: ReportContext) -> str:
        return json.dumps(result.to_dict(), indent=2)
