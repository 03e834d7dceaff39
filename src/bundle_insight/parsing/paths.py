"""Normalization of absolute source paths to project-relative form."""

import re

# Directory markers that usually sit directly under a project root.
PROJECT_MARKERS = ("/app/", "/components/", "/screens/", "/utils/")

_ABSOLUTE_RE = re.compile(r"^(?:/|[A-Za-z]:[\\/])")
_SEPARATORS_RE = re.compile(r"[\\/]")


def is_absolute_path(path: str) -> bool:
    """True for POSIX-rooted and drive-prefixed (``C:/``, ``C:\\``) paths."""
    return bool(_ABSOLUTE_RE.match(path))


def normalize_module_path(module_path: str) -> str:
    """Convert an absolute or machine-specific path into a stable relative one.

    Relative paths (anything not rooted at ``/`` or a drive letter) that
    carry no ``node_modules/``, ``/src/`` or project marker are returned
    unchanged. Only unrecognised absolute paths shrink to their final
    component.

    Examples:
        >>> normalize_module_path("/Users/me/proj/node_modules/react/index.js")
        'node_modules/react/index.js'
        >>> normalize_module_path("/Users/me/proj/src/App.js")
        'src/App.js'
        >>> normalize_module_path("src/App.js")
        'src/App.js'
        >>> normalize_module_path("/opt/build/out/Entry.js")
        'Entry.js'
    """
    index = module_path.find("node_modules/")
    if index != -1:
        return module_path[index:]

    index = module_path.find("/src/")
    if index != -1:
        return module_path[index + 1:]

    for marker in PROJECT_MARKERS:
        index = module_path.find(marker)
        if index != -1:
            return module_path[index + 1:]

    if not is_absolute_path(module_path):
        return module_path

    return _SEPARATORS_RE.split(module_path.rstrip("/\\"))[-1] or module_path
