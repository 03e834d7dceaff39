"""CSV formatter for Bundle Insight."""

import csv
import io

from ..models import BundleAnalysisResult, ReportContext
from .base import BaseFormatter


class CsvFormatter(BaseFormatter):
    """Render one row per package."""

    def render(self, result: BundleAnalysisResult, context: ReportContext) -> None:
        print(self.format(result, context), end="")

    def format(self, result: BundleAnalysisResult, context: ReportContext) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(
            ["package", "size_bytes", "percentage", "module_count", "installed_version"]
        )
        for p in result.packages:
            writer.writerow(
                [
                    p.name,
                    p.total_size_bytes,
                    f"{p.percentage_of_bundle:.2f}",
                    len(p.member_modules),
                    p.installed_version or "",
                ]
            )
        return output.getvalue()
