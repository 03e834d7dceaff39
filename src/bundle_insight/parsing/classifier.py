"""Package and category classification of resolved module paths."""

import re
from typing import Optional

from ..models import ModuleCategory

# Package name of the platform runtime bundled into every app.
PLATFORM_PACKAGE = "react-native"

_PACKAGE_RE = re.compile(r"node_modules/(@[^/]+/[^/]+|[^/]+)")
_PLATFORM_PREFIX = f"node_modules/{PLATFORM_PACKAGE}/"


def extract_package_name(path: str) -> Optional[str]:
    """Return the package a path belongs to, or None for non-package paths.

    The innermost ``node_modules/`` segment wins, so a dependency nested
    under another package is attributed to itself::

        >>> extract_package_name("node_modules/a/node_modules/@s/b/x.js")
        '@s/b'
    """
    matches = _PACKAGE_RE.findall(path)
    if not matches:
        return None
    return matches[-1]


def categorize(path: str) -> ModuleCategory:
    if _PLATFORM_PREFIX in path:
        return ModuleCategory.PLATFORM_RUNTIME
    if "node_modules/" in path:
        return ModuleCategory.THIRD_PARTY
    return ModuleCategory.FIRST_PARTY
