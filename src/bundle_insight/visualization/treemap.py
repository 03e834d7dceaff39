"""Build hierarchical JSON for a d3-style treemap from the flat module list.

Leaf nodes are modules and carry ``value`` (bytes, for area sizing), the
module ``category`` (for colouring) and its ``package``. Directory nodes
carry the summed ``value`` of everything beneath them.
"""

from typing import Any, Dict, Iterable

from ..models import ModuleRecord
from ..parsing import categorize


def build_treemap_data(modules: Iterable[ModuleRecord]) -> Dict[str, Any]:
    """Convert modules into d3-treemap hierarchical JSON.

    Structure::

        {
            "name": "root",
            "value": 1200,
            "children": [
                {
                    "name": "node_modules",
                    "value": 1000,
                    "children": [ ... ]
                },
                {
                    "name": "App.js",
                    "path": "src/App.js",
                    "value": 200,
                    "category": "first-party",
                    "package": null
                }
            ]
        }

    Paths are split on ``/``; empty segments (leading ``/``, ``./``) are
    dropped. Modules keep emission order among siblings.
    """
    root: Dict[str, Any] = {"name": "root", "value": 0, "children": []}

    for module in modules:
        parts = [p for p in module.path.split("/") if p and p != "."] or [module.path]
        node = root
        node["value"] += module.size_bytes

        for part in parts[:-1]:
            existing = None
            for child in node["children"]:
                if child.get("name") == part and "children" in child:
                    existing = child
                    break
            if existing is None:
                existing = {"name": part, "value": 0, "children": []}
                node["children"].append(existing)
            node = existing
            node["value"] += module.size_bytes

        node["children"].append(
            {
                "name": parts[-1],
                "path": module.path,
                "value": module.size_bytes,
                "category": categorize(module.path).value,
                "package": module.package,
            }
        )

    return root
