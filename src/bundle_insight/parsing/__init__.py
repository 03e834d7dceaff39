"""Bundle parsing: segmentation, provenance and classification."""

from .classifier import PLATFORM_PACKAGE, categorize, extract_package_name
from .parser import parse_modules
from .paths import normalize_module_path
from .position_map import PositionMap, load_position_map
from .provenance import is_synthetic_path, placeholder_path, resolve_module_path
from .segmenter import (
    MAX_MODULE_SPAN,
    MODULE_MARKER,
    ModuleChunk,
    find_unbalanced_close,
    segment_bundle,
    segment_size_only,
)

__all__ = [
    "MAX_MODULE_SPAN",
    "MODULE_MARKER",
    "PLATFORM_PACKAGE",
    "ModuleChunk",
    "PositionMap",
    "categorize",
    "extract_package_name",
    "find_unbalanced_close",
    "is_synthetic_path",
    "load_position_map",
    "normalize_module_path",
    "parse_modules",
    "placeholder_path",
    "resolve_module_path",
    "segment_bundle",
    "segment_size_only",
]
