"""Tests for config.py - layered configuration loading."""

import pytest

from bundle_insight.config import (
    DEFAULT_THRESHOLDS,
    AnalysisConfig,
    OptimizationThresholds,
    load_config,
)
from bundle_insight.exceptions import BundleInsightError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run each test with an empty home and working directory."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for name in AnalysisConfig.__dataclass_fields__:
        monkeypatch.delenv(f"BUNDLE_INSIGHT_{name.upper()}", raising=False)
    return home, work


class TestDefaults:
    def test_defaults(self):
        config = load_config()
        assert config.platform == "ios"
        assert config.top_n == 10
        assert config.verbosity == "normal"
        assert config.port == 8888
        assert config.thresholds == DEFAULT_THRESHOLDS
        assert "__tests__" in config.ignored_dirs

    def test_frozen(self):
        config = AnalysisConfig()
        with pytest.raises(Exception):
            config.top_n = 3


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"platform": "windows"},
            {"verbosity": "loud"},
            {"top_n": 0},
            {"port": 0},
            {"port": 70000},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(**kwargs)

    def test_threshold_ordering(self):
        with pytest.raises(InvalidConfigError):
            OptimizationThresholds(large_package_bytes=300, lazy_load_bytes=200)
        with pytest.raises(InvalidConfigError):
            OptimizationThresholds(lazy_load_high_bytes=1)

    def test_negative_threshold(self):
        with pytest.raises(InvalidConfigError):
            OptimizationThresholds(duplicate_bytes=-1)

    def test_unknown_key(self):
        with pytest.raises(BundleInsightError, match="Invalid configuration"):
            load_config(colour="blue")


class TestFiles:
    def test_project_file(self, isolated):
        _, work = isolated
        (work / "bundle-insight.toml").write_text('platform = "android"\ntop_n = 25\n')
        config = load_config()
        assert config.platform == "android"
        assert config.top_n == 25

    def test_project_overrides_global(self, isolated):
        home, work = isolated
        (home / ".bundle-insight.toml").write_text("top_n = 5\nport = 9000\n")
        (work / "bundle-insight.toml").write_text("top_n = 7\n")
        config = load_config()
        assert config.top_n == 7
        assert config.port == 9000

    def test_thresholds_table(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[thresholds]\nduplicate_bytes = 1024\n")
        config = load_config(path)
        assert config.thresholds.duplicate_bytes == 1024
        assert config.thresholds.lazy_load_bytes == DEFAULT_THRESHOLDS.lazy_load_bytes

    def test_unknown_threshold(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[thresholds]\nhuge = 1\n")
        with pytest.raises(BundleInsightError, match="thresholds"):
            load_config(path)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(BundleInsightError, match="not found"):
            load_config(tmp_path / "nope.toml")

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("top_n = = 3")
        with pytest.raises(BundleInsightError, match="Invalid config file"):
            load_config(path)


class TestEnvAndOverrides:
    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("BUNDLE_INSIGHT_TOP_N", "3")
        monkeypatch.setenv("BUNDLE_INSIGHT_DEV", "yes")
        monkeypatch.setenv("BUNDLE_INSIGHT_PLATFORM", "android")
        monkeypatch.setenv("BUNDLE_INSIGHT_IGNORED_DIRS", "ignored")
        config = load_config()
        assert config.top_n == 3
        assert config.dev is True
        assert config.platform == "android"
        assert "node_modules" in config.ignored_dirs

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("BUNDLE_INSIGHT_DEV", "maybe")
        with pytest.raises(BundleInsightError, match="BUNDLE_INSIGHT_DEV"):
            load_config()

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("BUNDLE_INSIGHT_TOP_N", "3")
        assert load_config(top_n=4).top_n == 4

    def test_none_overrides_ignored(self, isolated):
        _, work = isolated
        (work / "bundle-insight.toml").write_text("top_n = 12\n")
        assert load_config(top_n=None).top_n == 12

    def test_verbose_and_quiet_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"
