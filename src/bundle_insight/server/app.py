"""Starlette ASGI application serving a saved analysis."""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response
from starlette.routing import Route

from ..visualization import build_html, build_report_data

logger = logging.getLogger(__name__)


class AnalysisUnavailable(Exception):
    def __init__(self, status_code: int, error: str):
        super().__init__(error)
        self.status_code = status_code
        self.error = error


def _load_analysis(data_path: Path) -> dict[str, Any]:
    """Read the saved analysis JSON written by ``bundle-insight analyze``."""
    if not data_path.is_file():
        raise AnalysisUnavailable(404, "Analysis data not found")
    try:
        data = json.loads(data_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load {data_path}: {e}")
        raise AnalysisUnavailable(500, "Failed to load analysis data")
    if not isinstance(data, dict):
        raise AnalysisUnavailable(500, "Failed to load analysis data")
    return data


def _module_map_as_object(analysis: dict[str, Any]) -> dict[str, Any]:
    """Turn the ``[path, module]`` pair list into a path-keyed object."""
    pairs = analysis.get("module_map")
    if isinstance(pairs, list):
        analysis = dict(analysis)
        analysis["module_map"] = {
            pair[0]: pair[1] for pair in pairs if isinstance(pair, list) and len(pair) == 2
        }
    return analysis


def create_app(data_path: Path) -> Starlette:
    """Build the Starlette application for the analysis stored at *data_path*.

    The file is re-read on every request, so re-running ``analyze`` is
    picked up without restarting the server.
    """
    data_path = Path(data_path)

    async def homepage(request: Request) -> HTMLResponse:
        try:
            analysis = _load_analysis(data_path)
        except AnalysisUnavailable as exc:
            return HTMLResponse(
                f"<h1>{exc.error}</h1><p>Run <code>bundle-insight analyze</code> first.</p>",
                status_code=exc.status_code,
            )
        return HTMLResponse(build_html(json.dumps(build_report_data(analysis))))

    async def api_analysis(request: Request) -> JSONResponse:
        try:
            analysis = _load_analysis(data_path)
        except AnalysisUnavailable as exc:
            return JSONResponse({"error": exc.error}, status_code=exc.status_code)
        return JSONResponse(_module_map_as_object(analysis))

    async def api_export_csv(request: Request) -> Response:
        """Download the package table as CSV."""
        try:
            analysis = _load_analysis(data_path)
        except AnalysisUnavailable as exc:
            return JSONResponse({"error": exc.error}, status_code=exc.status_code)

        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(["package", "size_bytes", "percentage", "module_count", "installed_version"])
        for p in analysis.get("packages", []):
            writer.writerow(
                [
                    p.get("name", ""),
                    p.get("total_size_bytes", 0),
                    f"{p.get('percentage_of_bundle', 0.0):.2f}",
                    len(p.get("member_modules", [])),
                    p.get("installed_version") or "",
                ]
            )
        return Response(
            content=buf.getvalue(),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="bundle-packages.csv"'},
        )

    routes = [
        Route("/", homepage),
        Route("/api/analysis", api_analysis),
        Route("/api/export/csv", api_export_csv),
    ]
    return Starlette(routes=routes)
