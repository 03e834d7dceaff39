"""Tests for manifest.py - package.json and installed package lookups."""

import json
import logging

from bundle_insight.aggregation import aggregate
from bundle_insight.manifest import (
    declared_dependencies,
    installed_version,
    project_name,
    read_package_json,
    resolve_installed_versions,
)
from bundle_insight.models import ModuleRecord


class TestReadPackageJson:
    def test_missing(self, tmp_path):
        assert read_package_json(tmp_path) == {}
        assert project_name(tmp_path) is None

    def test_malformed(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger="bundle_insight")
        (tmp_path / "package.json").write_text("{not json")
        assert read_package_json(tmp_path) == {}
        assert "Could not read" in caplog.text

    def test_non_object(self, tmp_path):
        (tmp_path / "package.json").write_text("[1]")
        assert read_package_json(tmp_path) == {}


class TestDependencies:
    def test_declared(self, rn_project):
        deps = declared_dependencies(rn_project)
        assert deps["lodash"] == "^4.17.21"
        assert deps["typescript"] == "^5.0.0"
        assert "typescript" not in declared_dependencies(rn_project, include_dev=False)

    def test_project_name(self, rn_project):
        assert project_name(rn_project) == "MyApp"

    def test_installed_version(self, rn_project):
        assert installed_version(rn_project, "moment") == "2.29.4"
        assert installed_version(rn_project, "not-installed") is None

    def test_scoped_installed_version(self, tmp_path):
        pkg = tmp_path / "node_modules" / "@scope" / "lib"
        pkg.mkdir(parents=True)
        (pkg / "package.json").write_text(json.dumps({"version": "1.2.3"}))
        assert installed_version(tmp_path, "@scope/lib") == "1.2.3"


class TestResolveInstalledVersions:
    def test_fills_versions_without_mutating(self, rn_project):
        result = aggregate(
            [
                ModuleRecord(0, "node_modules/lodash/index.js", 10),
                ModuleRecord(1, "node_modules/ghost/index.js", 5),
            ]
        )
        resolved = resolve_installed_versions(result, rn_project)
        assert resolved.package("lodash").installed_version == "4.17.21"
        assert resolved.package("ghost").installed_version is None
        assert result.package("lodash").installed_version is None
