"""Visualization layer: HTML report generation with interactive treemap."""

from .report import build_html, build_report_data, generate_report
from .treemap import build_treemap_data

__all__ = [
    "build_html",
    "build_report_data",
    "generate_report",
    "build_treemap_data",
]
