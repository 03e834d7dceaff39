"""Markdown formatter for Bundle Insight."""

from typing import List

from ..models import BundleAnalysisResult, ReportContext
from .base import BaseFormatter, format_bytes


class MarkdownFormatter(BaseFormatter):
    """Render a Markdown report suitable for pull request comments."""

    def render(self, result: BundleAnalysisResult, context: ReportContext) -> None:
        print(self.format(result, context))

    def format(self, result: BundleAnalysisResult, context: ReportContext) -> str:
        title = result.project_name or "Bundle"
        lines: List[str] = [f"# {title} bundle analysis", ""]

        if context.bundle_path:
            lines += [f"Bundle: `{context.bundle_path}`", ""]

        lines += [
            "| Category | Size |",
            "|---|---:|",
            f"| Total | {format_bytes(result.total_size)} |",
            f"| Your code | {format_bytes(result.first_party_size)} |",
            f"| Dependencies | {format_bytes(result.third_party_size)} |",
            f"| React Native | {format_bytes(result.platform_size)} |",
            "",
        ]

        if result.packages:
            lines += [
                "## Largest packages",
                "",
                "| Package | Size | % |",
                "|---|---:|---:|",
            ]
            for p in result.packages[: context.top_n]:
                lines.append(
                    f"| {p.name} | {format_bytes(p.total_size_bytes)} "
                    f"| {p.percentage_of_bundle:.1f}% |"
                )
            lines.append("")

        if result.duplicates:
            lines += ["## Duplicate packages", ""]
            for d in result.duplicates:
                locations = ", ".join(f"`{loc}`" for loc in d.install_locations)
                lines.append(
                    f"- **{d.name}** (~{format_bytes(d.estimated_wasted_bytes)} wasted): "
                    f"{locations}"
                )
            lines.append("")

        if result.optimizations:
            lines += ["## Optimization opportunities", ""]
            for s in result.optimizations[: context.top_n]:
                lines.append(
                    f"- [{s.severity.value}] {s.suggestion} "
                    f"(saves ~{format_bytes(s.potential_savings)})"
                )
            lines.append("")

        return "\n".join(lines)
