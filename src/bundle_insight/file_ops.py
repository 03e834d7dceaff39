"""
File operations for Bundle Insight.

Reading bundles and position maps, writing analysis artifacts, and locating
build outputs in a React Native project.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from .exceptions import BundleNotFoundError, FileAccessError, PositionMapError
from .parsing import PositionMap

logger = logging.getLogger(__name__)

IOS_BUNDLE_PATHS = (
    "ios/main.jsbundle",
    "ios/build/Build/Products/Debug-iphonesimulator/main.jsbundle",
    "ios/build/Build/Products/Release-iphoneos/main.jsbundle",
)

ANDROID_BUNDLE_PATHS = (
    "android/app/build/generated/assets/react/release/index.android.bundle",
    "android/app/build/generated/assets/react/debug/index.android.bundle",
)


def read_bundle(filepath: Path, encoding: str = "utf-8") -> str:
    """
    Read bundle text, replacing undecodable bytes.

    Raises:
        BundleNotFoundError: If the file does not exist
        FileAccessError: If the file exists but cannot be read
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise BundleNotFoundError(filepath)

    try:
        with open(filepath, encoding=encoding, errors="replace") as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def read_position_map(filepath: Path) -> Optional[str]:
    """
    Read position map text, or None when it cannot be used.

    The analysis proceeds without a map in that case, so problems are
    logged as warnings rather than raised.
    """
    filepath = Path(filepath)
    try:
        with open(filepath, encoding="utf-8", errors="replace") as f:
            text = f.read()
    except FileNotFoundError:
        logger.warning(f"Position map not found: {filepath}")
        return None
    except OSError as e:
        logger.warning(f"Cannot read position map {filepath}: {e}")
        return None

    try:
        PositionMap.parse(text)
    except PositionMapError as e:
        logger.warning(f"Ignoring position map {filepath}: {e}")
        return None
    return text


def write_text_file(filepath: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write ``content`` to ``filepath``, creating parent directories.

    Raises:
        FileAccessError: If the file cannot be written
    """
    filepath = Path(filepath)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding=encoding) as f:
            f.write(content)
    except OSError as e:
        raise FileAccessError(filepath, f"Write failed: {e}")


def find_bundle_file(
    project_root: Path, platform: str = "ios", dev: bool = False
) -> Optional[Path]:
    """
    Locate a built bundle inside a project.

    Conventional iOS and Android output locations are tried first (debug
    builds ahead of release builds when ``dev`` is set), then
    ``index.<platform>.bundle`` and ``main.jsbundle`` at the root.
    """
    project_root = Path(project_root)
    candidates = list(IOS_BUNDLE_PATHS) + list(ANDROID_BUNDLE_PATHS)
    if dev:
        candidates.sort(key=lambda p: "debug" not in p.lower())
    candidates += [f"index.{platform}.bundle", "main.jsbundle"]

    for relative in candidates:
        path = project_root / relative
        if path.is_file():
            logger.debug(f"Found bundle at {path}")
            return path
    return None


def _looks_like_sourcemap(path: Path) -> bool:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return False
    return isinstance(data, dict) and "version" in data and "sources" in data


def find_sourcemap(bundle_path: Path) -> Optional[Path]:
    """Find the position map written next to a bundle, if any."""
    bundle = str(bundle_path)
    candidates = [bundle + ".map"]
    if bundle.endswith(".bundle"):
        candidates.append(bundle[: -len(".bundle")] + ".bundle.map")
    if bundle.endswith(".jsbundle"):
        candidates.append(bundle[: -len(".jsbundle")] + ".jsbundle.map")

    for candidate in candidates:
        path = Path(candidate)
        if path.is_file() and _looks_like_sourcemap(path):
            logger.debug(f"Found position map at {path}")
            return path
    return None
