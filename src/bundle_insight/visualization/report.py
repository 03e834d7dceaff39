"""Single-file HTML report for a bundle analysis.

The page carries its data inline and draws the treemap as SVG in the
browser, so the file works offline and from ``file://``.
"""

import json
from pathlib import Path
from typing import Any, Dict

from ..file_ops import write_text_file
from ..models import BundleAnalysisResult, ModuleRecord
from .treemap import build_treemap_data

MAX_TABLE_ROWS = 50

_DATA_PLACEHOLDER = "__REPORT_DATA__"


def build_report_data(analysis: Dict[str, Any]) -> Dict[str, Any]:
    """Shape a serialised analysis (``BundleAnalysisResult.to_dict``) for the page."""
    modules = [ModuleRecord(**m) for m in analysis.get("modules", [])]
    return {
        "treemap": build_treemap_data(modules),
        "summary": {
            "project_name": analysis.get("project_name"),
            "total_size": analysis.get("total_size", 0),
            "first_party_size": analysis.get("first_party_size", 0),
            "third_party_size": analysis.get("third_party_size", 0),
            "platform_size": analysis.get("platform_size", 0),
            "module_count": analysis.get("module_count", len(modules)),
            "package_count": len(analysis.get("packages", [])),
        },
        "packages": analysis.get("packages", [])[:MAX_TABLE_ROWS],
        "duplicates": analysis.get("duplicates", []),
        "optimizations": analysis.get("optimizations", [])[:MAX_TABLE_ROWS],
    }


def generate_report(
    result: BundleAnalysisResult,
    output_path: str = "bundle-report.html",
) -> str:
    """Write the HTML report for ``result`` and return its absolute path.

    Raises:
        FileAccessError: If the file cannot be written
    """
    out = Path(output_path).resolve()
    data_json = json.dumps(build_report_data(result.to_dict()))
    write_text_file(out, build_html(data_json))
    return str(out)


def build_html(data_json: str) -> str:
    """Embed ``data_json`` (``build_report_data`` output as JSON) in the page."""
    # Module paths come from bundle text; keep them from closing the script tag.
    safe = data_json.replace("</", "<\\/")
    return _PAGE.replace(_DATA_PLACEHOLDER, safe)


_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Bundle Insight Report</title>
<style>
:root {
  --bg: #fafbfc; --panel: #ffffff; --line: #e1e4e8; --ink: #24292e; --muted: #6a737d;
  --first-party: #2ea44f; --third-party: #e36209; --platform-runtime: #0366d6;
}
body { margin: 0; font: 14px/1.5 system-ui, -apple-system, "Segoe UI", Helvetica, Arial, sans-serif; background: var(--bg); color: var(--ink); }
main { max-width: 1200px; margin: 0 auto; padding: 20px 24px 40px; }
h1 { font-size: 22px; margin: 0 0 12px; }
h2 { font-size: 16px; margin: 28px 0 10px; }
.cards { display: grid; grid-template-columns: repeat(auto-fit, minmax(150px, 1fr)); gap: 10px; }
.card { background: var(--panel); border: 1px solid var(--line); border-radius: 6px; padding: 10px 14px; }
.card b { display: block; font-size: 18px; }
.card span { color: var(--muted); font-size: 12px; }
.key { margin: 14px 0 8px; color: var(--muted); font-size: 13px; }
.key i { display: inline-block; width: 10px; height: 10px; margin: 0 4px 0 12px; border-radius: 2px; }
#map { height: 480px; background: var(--panel); border: 1px solid var(--line); border-radius: 6px; }
#map rect { stroke: var(--panel); stroke-width: 1; }
#map text { fill: #fff; font-size: 11px; pointer-events: none; }
table { width: 100%; border-collapse: collapse; background: var(--panel); border: 1px solid var(--line); }
th, td { padding: 5px 10px; border-bottom: 1px solid var(--line); text-align: left; vertical-align: top; }
th { color: var(--muted); font-weight: 600; font-size: 12px; }
td.n { text-align: right; white-space: nowrap; }
.high { color: #cb2431; font-weight: 600; }
.medium { color: #b08800; }
.low { color: var(--muted); }
.none { color: var(--muted); font-style: italic; }
</style>
</head>
<body>
<main>
<h1 id="title">Bundle Insight Report</h1>
<div class="cards" id="cards"></div>
<div class="key">
  <i style="background:var(--first-party)"></i>Your code
  <i style="background:var(--third-party)"></i>Dependencies
  <i style="background:var(--platform-runtime)"></i>React Native
</div>
<div id="map"></div>
<h2>Largest packages</h2><div id="packages"></div>
<h2>Duplicate packages</h2><div id="duplicates"></div>
<h2>Optimization opportunities</h2><div id="optimizations"></div>
</main>
<script>
var REPORT = __REPORT_DATA__;
var SVG_NS = "http://www.w3.org/2000/svg";
var FILL = {
  "first-party": "var(--first-party)",
  "third-party": "var(--third-party)",
  "platform-runtime": "var(--platform-runtime)"
};

function size(bytes) {
  if (!bytes) return "0 Bytes";
  var unit = ["Bytes", "KB", "MB", "GB"], k = 0;
  while (Math.abs(bytes) >= 1024 && k < unit.length - 1) { bytes /= 1024; k += 1; }
  return Number(bytes.toFixed(2)) + " " + unit[k];
}

function node(tag, attrs, text) {
  var el = document.createElement(tag);
  Object.keys(attrs || {}).forEach(function (name) { el.setAttribute(name, attrs[name]); });
  if (text !== undefined) el.textContent = text;
  return el;
}

function cards() {
  var s = REPORT.summary;
  if (s.project_name) document.getElementById("title").textContent = s.project_name + " bundle";
  var box = document.getElementById("cards");
  [
    [size(s.total_size), "total"],
    [size(s.first_party_size), "your code"],
    [size(s.third_party_size), "dependencies"],
    [size(s.platform_size), "react native"],
    [s.module_count, "modules"],
    [s.package_count, "packages"]
  ].forEach(function (item) {
    var card = node("div", {"class": "card"});
    card.appendChild(node("b", {}, String(item[0])));
    card.appendChild(node("span", {}, item[1]));
    box.appendChild(card);
  });
}

function modulesByCategory() {
  var found = [];
  (function walk(n) {
    if (n.children) n.children.forEach(walk);
    else if (n.value > 0) found.push(n);
  })(REPORT.treemap);
  var rank = {"first-party": 0, "third-party": 1, "platform-runtime": 2};
  return found.sort(function (a, b) {
    return (rank[a.category] - rank[b.category]) || (b.value - a.value);
  });
}

// Squarified treemap: rows are laid along the shorter side and closed as
// soon as adding the next area would worsen the row's worst aspect ratio.
function layout(areas, box) {
  var out = [], start = 0;
  function ratio(sum, lo, hi, side) {
    var s2 = side * side;
    return Math.max(s2 * hi / (sum * sum), (sum * sum) / (s2 * lo));
  }
  while (start < areas.length && box.w > 0 && box.h > 0) {
    var side = Math.min(box.w, box.h);
    var end = start + 1, sum = areas[start], lo = sum, hi = sum;
    while (end < areas.length) {
      var a = areas[end];
      var next = ratio(sum + a, Math.min(lo, a), Math.max(hi, a), side);
      if (next > ratio(sum, lo, hi, side)) break;
      sum += a; lo = Math.min(lo, a); hi = Math.max(hi, a); end += 1;
    }
    var depth = sum / side, pos = 0, vertical = box.w >= box.h;
    for (var k = start; k < end; k++) {
      var len = areas[k] / depth;
      out.push(vertical
        ? {x: box.x, y: box.y + pos, w: depth, h: len}
        : {x: box.x + pos, y: box.y, w: len, h: depth});
      pos += len;
    }
    if (vertical) { box.x += depth; box.w -= depth; } else { box.y += depth; box.h -= depth; }
    start = end;
  }
  return out;
}

function treemap() {
  var host = document.getElementById("map");
  host.textContent = "";
  var items = modulesByCategory();
  if (!items.length) return;
  var w = host.clientWidth, h = host.clientHeight;
  var total = items.reduce(function (t, m) { return t + m.value; }, 0);
  var boxes = layout(items.map(function (m) { return m.value / total * w * h; }), {x: 0, y: 0, w: w, h: h});
  var svg = document.createElementNS(SVG_NS, "svg");
  svg.setAttribute("width", w);
  svg.setAttribute("height", h);
  boxes.forEach(function (b, k) {
    var m = items[k];
    var rect = document.createElementNS(SVG_NS, "rect");
    rect.setAttribute("x", b.x);
    rect.setAttribute("y", b.y);
    rect.setAttribute("width", Math.max(b.w, 0));
    rect.setAttribute("height", Math.max(b.h, 0));
    rect.setAttribute("style", "fill:" + (FILL[m.category] || "#959da5"));
    var tip = document.createElementNS(SVG_NS, "title");
    tip.textContent = m.path + "\\n" + size(m.value) + (m.package ? "\\n" + m.package : "");
    rect.appendChild(tip);
    svg.appendChild(rect);
    if (b.w > 60 && b.h > 16) {
      var label = document.createElementNS(SVG_NS, "text");
      label.setAttribute("x", b.x + 4);
      label.setAttribute("y", b.y + 13);
      var room = Math.floor(b.w / 7);
      label.textContent = m.name.length > room ? m.name.slice(0, room - 1) + "\\u2026" : m.name;
      svg.appendChild(label);
    }
  });
  host.appendChild(svg);
}

function grid(id, columns, rows, emptyText) {
  var host = document.getElementById(id);
  if (!rows.length) { host.appendChild(node("p", {"class": "none"}, emptyText)); return; }
  var t = node("table"), head = node("tr");
  columns.forEach(function (c) { head.appendChild(node("th", {}, c)); });
  t.appendChild(head);
  rows.forEach(function (cells) {
    var tr = node("tr");
    cells.forEach(function (cell) { tr.appendChild(node("td", cell.cls ? {"class": cell.cls} : {}, cell.text)); });
    t.appendChild(tr);
  });
  host.appendChild(t);
}

cards();
grid("packages", ["Package", "Size", "Share", "Modules", "Version"],
  REPORT.packages.map(function (p) {
    return [{text: p.name}, {text: size(p.total_size_bytes), cls: "n"},
      {text: p.percentage_of_bundle.toFixed(1) + "%", cls: "n"},
      {text: String(p.member_modules.length), cls: "n"}, {text: p.installed_version || "-"}];
  }), "No third-party packages.");
grid("duplicates", ["Package", "Wasted", "Install locations"],
  REPORT.duplicates.map(function (d) {
    return [{text: d.name}, {text: size(d.estimated_wasted_bytes), cls: "n"},
      {text: d.install_locations.join(", ")}];
  }), "No duplicate packages.");
grid("optimizations", ["Priority", "Kind", "Advice", "Saves"],
  REPORT.optimizations.map(function (o) {
    return [{text: o.severity, cls: o.severity}, {text: o.type}, {text: o.suggestion},
      {text: size(o.potential_savings), cls: "n"}];
  }), "No optimization opportunities found.");
treemap();
window.addEventListener("resize", treemap);
</script>
</body>
</html>
"""
