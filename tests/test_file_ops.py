"""Tests for file_ops.py - reading inputs and locating build outputs."""

import json
import logging

import pytest

from bundle_insight.exceptions import BundleNotFoundError, FileAccessError
from bundle_insight.file_ops import (
    find_bundle_file,
    find_sourcemap,
    read_bundle,
    read_position_map,
    write_text_file,
)


class TestReadBundle:
    def test_reads_text(self, tmp_path):
        path = tmp_path / "main.jsbundle"
        path.write_text("__d(x)", encoding="utf-8")
        assert read_bundle(path) == "__d(x)"

    def test_undecodable_bytes_replaced(self, tmp_path):
        path = tmp_path / "main.jsbundle"
        path.write_bytes(b"__d(\xff\xfe)")
        assert read_bundle(path) == "__d(��)"

    def test_missing(self, tmp_path):
        with pytest.raises(BundleNotFoundError) as exc:
            read_bundle(tmp_path / "missing.bundle")
        assert "missing.bundle" in str(exc.value)

    def test_directory_is_not_a_bundle(self, tmp_path):
        with pytest.raises(BundleNotFoundError):
            read_bundle(tmp_path)


class TestReadPositionMap:
    @pytest.fixture(autouse=True)
    def _warnings(self, caplog):
        caplog.set_level(logging.WARNING, logger="bundle_insight")

    def test_valid(self, tmp_path):
        path = tmp_path / "x.map"
        path.write_text(json.dumps({"version": 3, "sources": ["a.js"]}))
        assert json.loads(read_position_map(path))["sources"] == ["a.js"]

    def test_missing_warns(self, tmp_path, caplog):
        assert read_position_map(tmp_path / "nope.map") is None
        assert "not found" in caplog.text

    def test_invalid_warns(self, tmp_path, caplog):
        path = tmp_path / "x.map"
        path.write_text('{"version": 3}')
        assert read_position_map(path) is None
        assert "Ignoring position map" in caplog.text


class TestWriteTextFile:
    def test_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "out.json"
        write_text_file(target, "{}")
        assert target.read_text() == "{}"

    def test_unwritable(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(FileAccessError):
            write_text_file(blocker / "child.json", "{}")


class TestFindBundleFile:
    def test_none_found(self, tmp_path):
        assert find_bundle_file(tmp_path) is None

    def test_ios_location(self, rn_project):
        assert find_bundle_file(rn_project) == rn_project / "ios" / "main.jsbundle"

    def test_platform_root_bundle(self, tmp_path):
        (tmp_path / "index.android.bundle").write_text("")
        assert find_bundle_file(tmp_path, platform="android") == (
            tmp_path / "index.android.bundle"
        )
        assert find_bundle_file(tmp_path, platform="ios") is None

    def test_dev_prefers_debug_build(self, tmp_path):
        release = tmp_path / "android/app/build/generated/assets/react/release"
        debug = tmp_path / "android/app/build/generated/assets/react/debug"
        for directory in (release, debug):
            directory.mkdir(parents=True)
            (directory / "index.android.bundle").write_text("")
        assert find_bundle_file(tmp_path).parent == release
        assert find_bundle_file(tmp_path, dev=True).parent == debug


class TestFindSourcemap:
    def test_adjacent_map(self, rn_project):
        bundle = rn_project / "ios" / "main.jsbundle"
        assert find_sourcemap(bundle) == rn_project / "ios" / "main.jsbundle.map"

    def test_map_without_sources_rejected(self, tmp_path):
        bundle = tmp_path / "index.ios.bundle"
        bundle.write_text("")
        (tmp_path / "index.ios.bundle.map").write_text('{"version": 3}')
        assert find_sourcemap(bundle) is None

    def test_no_map(self, tmp_path):
        assert find_sourcemap(tmp_path / "index.ios.bundle") is None
