"""Browser view of a saved analysis.

Needs the optional ``[serve]`` extra::

    pip install bundle-insight[serve]
"""

from __future__ import annotations

import importlib.util

SERVE_REQUIREMENTS = ("starlette", "uvicorn")


def _check_deps() -> None:
    """Fail early, naming every missing ``[serve]`` requirement."""
    missing = [name for name in SERVE_REQUIREMENTS if importlib.util.find_spec(name) is None]
    if missing:
        raise ImportError(
            f"The serve command needs {' and '.join(missing)}. "
            "Install them with: pip install bundle-insight[serve]"
        )
