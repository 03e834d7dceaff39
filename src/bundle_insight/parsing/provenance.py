"""Best-guess source path for a segmented module.

Resolution is an ordered chain: explicit data first (position map, embedded
path metadata), then lexical signals in the module body, then statistical
guesses. The first rule that produces a path wins, so rule order is part of
the behaviour.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from ..models import ModuleId
from .paths import is_absolute_path, normalize_module_path
from .position_map import PositionMap

# Bodies shorter than this are guessed to be small first-party helpers.
SMALL_MODULE_BYTES = 500

# High-traffic packages recognised in static import/require statements.
KNOWN_PACKAGE_PREFIXES: Tuple[str, ...] = (
    "@react-navigation",
    "@react-native",
    "lodash",
    "moment",
    "axios",
    "redux",
)

_TRAILER_PATH_RE = re.compile(
    r"""^(?:\s*,\s*(?:\d+|\[[^\]]*\]|null|undefined))*\s*,\s*(['"])([^'"]+)\1"""
)
_REEXPORT_RE = re.compile(r"""module\.exports\s*=\s*require\(\s*(['"])([^'"]+)\1\s*\)""")
_REQUIRE_RE = re.compile(r"""(?:require|import)\s*\(\s*(['"])([^'"]+)\1\s*\)""")
_PATH_LITERAL_RE = re.compile(r"""(['"])((?:[^'"]*/)?(?:node_modules|src|lib)/[^'"]+)\1""")
_KNOWN_PACKAGE_RES = tuple(
    re.compile(
        r"""(?:require|import)\b[^;\n]*?(['"])(""" + re.escape(prefix) + r"""[^'"]*)\1"""
    )
    for prefix in KNOWN_PACKAGE_PREFIXES
)
_DEFAULT_IMPORT_VAR_RE = re.compile(r"_([a-zA-Z0-9]+)\.default")

_CREATE_ELEMENT_MARKERS = ("React.createElement", "_react.default.createElement")
_PLATFORM_MARKERS = ("react-native", "_reactNative")
_SCREEN_MARKERS = ("StyleSheet", "Platform")

PLATFORM_INDEX_PATH = "node_modules/react-native/index.js"

_SYNTHETIC_PATH_RE = re.compile(
    r"^(?:module_\d+|src/(?:util|screen|component)_\d+\.js)$"
)


def _package_root(specifier: str) -> str:
    """Leading package segment of an import specifier (``@scope/name`` kept whole)."""
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) > 1:
        return "/".join(parts[:2])
    return parts[0]


def _from_position_map(chunk_index: int, position_map: Optional[PositionMap]) -> Optional[str]:
    if position_map is None:
        return None
    raw_path = position_map.path_at(chunk_index)
    if raw_path is None:
        return None
    return normalize_module_path(raw_path)


def _recovered(path: str) -> str:
    """Normalize absolute paths found in bundle text; keep relative ones verbatim."""
    return normalize_module_path(path) if is_absolute_path(path) else path


def placeholder_path(
    chunk_index: int, declared_id: ModuleId, position_map: Optional[PositionMap] = None
) -> str:
    """Path for a module recovered in size-only mode."""
    return _from_position_map(chunk_index, position_map) or f"module_{declared_id}"


def is_synthetic_path(path: str) -> bool:
    """True for paths invented by the resolver rather than recovered."""
    return bool(_SYNTHETIC_PATH_RE.match(path))


def resolve_module_path(
    body: str,
    chunk_index: int,
    declared_id: ModuleId,
    position_map: Optional[PositionMap] = None,
    trailer: str = "",
) -> str:
    """Return the best-guess source path for one module. Never fails.

    Args:
        body: Factory body text.
        chunk_index: Position of the module among marker occurrences.
        declared_id: Id written after the factory.
        position_map: Optional positional source list.
        trailer: Text following the factory body inside the registration call.
    """
    # 1. Position map, keyed by emission order.
    mapped = _from_position_map(chunk_index, position_map)
    if mapped:
        return mapped

    # 2. Path embedded after the factory by the bundler.
    match = _TRAILER_PATH_RE.match(trailer)
    if match:
        return _recovered(match.group(2))

    # 3. Re-export passthrough.
    match = _REEXPORT_RE.search(body)
    if match:
        return _recovered(match.group(2))

    # 4. First require()/import() reference.
    match = _REQUIRE_RE.search(body)
    if match:
        specifier = match.group(2)
        if not specifier.startswith((".", "/")):
            return f"node_modules/{specifier}"
        return _recovered(specifier)

    # 5. UI element factories.
    if any(marker in body for marker in _CREATE_ELEMENT_MARKERS):
        if any(marker in body for marker in _PLATFORM_MARKERS):
            return PLATFORM_INDEX_PATH
        return f"src/component_{declared_id}.js"

    # 6. Any path-shaped string literal.
    match = _PATH_LITERAL_RE.search(body)
    if match:
        return _recovered(match.group(2))

    # 7. Static imports of well-known packages.
    for pattern in _KNOWN_PACKAGE_RES:
        match = pattern.search(body)
        if match:
            return f"node_modules/{_package_root(match.group(2))}/index.js"

    # 8. Transpiled default import: ``_name.default``.
    match = _DEFAULT_IMPORT_VAR_RE.search(body)
    if match:
        return f"node_modules/{match.group(1)}/index.js"

    # 9. Size and content guesses.
    if len(body.encode("utf-8", errors="surrogatepass")) < SMALL_MODULE_BYTES:
        return f"src/util_{declared_id}.js"
    if any(marker in body for marker in _SCREEN_MARKERS):
        return f"src/screen_{declared_id}.js"
    return f"module_{declared_id}"
