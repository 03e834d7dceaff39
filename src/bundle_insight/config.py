"""Configuration loading and management for Bundle Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.bundle-insight.toml)
    3. Project config (./bundle-insight.toml)
    4. Explicit config file
    5. Environment variables (BUNDLE_INSIGHT_* prefix)
    6. CLI overrides (passed as kwargs)

The parsing core takes no configuration; these settings drive the
collaborators around it (discovery, dead-code scan, rule engine, output).

Example:
    >>> config = load_config(top_n=20)
    >>> config.top_n
    20
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import BundleInsightError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
Platform = Literal["ios", "android"]

ENV_PREFIX = "BUNDLE_INSIGHT_"
CONFIG_FILENAME = "bundle-insight.toml"

KIB = 1024


@dataclass(frozen=True)
class OptimizationThresholds:
    """Byte thresholds used by the optimization rule engine.

    Attributes:
        large_package_bytes: Packages above this are considered large.
        lazy_load_bytes: Large non-essential packages above this get
            dynamic-import advice.
        lazy_load_high_bytes: Dynamic-import advice above this is high priority.
        high_severity_bytes: Replace/dedupe savings above this are high priority.
        duplicate_bytes: Duplicates wasting less than this are not reported.
        icon_library_bytes: Icon libraries above this get partial-import advice.
    """

    large_package_bytes: int = 100 * KIB
    lazy_load_bytes: int = 200 * KIB
    lazy_load_high_bytes: int = 500 * KIB
    high_severity_bytes: int = 200 * KIB
    duplicate_bytes: int = 50 * KIB
    icon_library_bytes: int = 100 * KIB

    def __post_init__(self) -> None:
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if value < 0:
                raise InvalidConfigError(name, value, "must be non-negative")
        if self.lazy_load_bytes < self.large_package_bytes:
            raise InvalidConfigError(
                "lazy_load_bytes", self.lazy_load_bytes, "must be >= large_package_bytes"
            )
        if self.lazy_load_high_bytes < self.lazy_load_bytes:
            raise InvalidConfigError(
                "lazy_load_high_bytes", self.lazy_load_high_bytes, "must be >= lazy_load_bytes"
            )


DEFAULT_THRESHOLDS = OptimizationThresholds()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for an analysis run.

    Attributes:
        Bundle discovery:
            platform: Target platform used to locate a bundle
            dev: Look for development bundle locations

        Output control:
            output_dir: Directory for JSON/HTML artifacts
            top_n: Rows shown in package tables
            verbosity: Logging verbosity level

        Dead weight scan:
            include_dead_code: Scan the project for unused files/dependencies
            source_extensions: File suffixes treated as source files
            ignored_dirs: Directory names skipped while walking src/
            dependency_skip_list: Substrings of tooling dependencies never
                reported as unused

        Visualization server:
            host, port, open_browser
    """

    platform: Platform = "ios"
    dev: bool = False

    output_dir: str = ".bundle-insight"
    top_n: int = 10
    verbosity: Verbosity = "normal"

    include_dead_code: bool = True
    source_extensions: list[str] = field(default_factory=lambda: [".ts", ".tsx", ".js", ".jsx"])
    ignored_dirs: list[str] = field(
        default_factory=lambda: ["node_modules", ".git", "dist", "build", "__tests__"]
    )
    dependency_skip_list: list[str] = field(
        default_factory=lambda: [
            "@types/",
            "typescript",
            "eslint",
            "prettier",
            "jest",
            "@testing-library",
            "metro",
            "@react-native-community/cli",
            "react-native-codegen",
        ]
    )

    host: str = "127.0.0.1"
    port: int = 8888
    open_browser: bool = False

    thresholds: OptimizationThresholds = field(default_factory=OptimizationThresholds)

    def __post_init__(self) -> None:
        if self.platform not in ("ios", "android"):
            raise InvalidConfigError("platform", self.platform, "must be 'ios' or 'android'")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be quiet, normal or verbose"
            )
        if self.top_n < 1:
            raise InvalidConfigError("top_n", self.top_n, "must be at least 1")
        if not 0 < self.port < 65536:
            raise InvalidConfigError("port", self.port, "must be between 1 and 65535")


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset CLI options keep file settings.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        BundleInsightError: If a config file is invalid or missing
    """
    if config_file is not None and not config_file.is_file():
        raise BundleInsightError(f"Config file not found: {config_file}")

    merged: dict = {}
    for path in _config_files(config_file):
        merged.update(_load_toml_file(path))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds = merged.pop("thresholds", None)
    if isinstance(thresholds, dict):
        try:
            merged["thresholds"] = OptimizationThresholds(**thresholds)
        except TypeError as e:
            raise BundleInsightError(f"Invalid [thresholds] config: {e}")
    elif isinstance(thresholds, OptimizationThresholds):
        merged["thresholds"] = thresholds

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise BundleInsightError(f"Invalid configuration: {e}")


def _config_files(explicit: Optional[Path]) -> list[Path]:
    """Existing config files, lowest priority first."""
    candidates = [Path.home() / f".{CONFIG_FILENAME}", Path.cwd() / CONFIG_FILENAME]
    found = [path for path in candidates if path.is_file()]
    if explicit is not None:
        found.append(explicit)
    return found


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from BUNDLE_INSIGHT_* environment variables.

    List fields are not configurable from the environment.
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints.get(field_name))
        except ValueError as e:
            raise BundleInsightError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise BundleInsightError(f"Invalid config file '{path}': {e}")
