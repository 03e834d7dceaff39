"""Errors in user-supplied settings and paths."""

from pathlib import Path
from typing import Any

from .base import BundleInsightError


class ConfigurationError(BundleInsightError):
    """Settings or paths that cannot be used."""

    hint = "Check bundle-insight.toml, BUNDLE_INSIGHT_* variables and command line flags."


class InvalidPathError(ConfigurationError):
    """A path option points somewhere unusable."""

    hint = "Pass the React Native project root with --project."

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A setting has a value outside its allowed range."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value!r}", details={"reason": reason}
        )
        self.key = key
        self.value = value
        self.reason = reason
