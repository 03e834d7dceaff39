"""Tests for aggregation.py - package rollups, duplicates, category totals."""

import pytest

from bundle_insight.aggregation import aggregate, install_location
from bundle_insight.models import ModuleRecord


def rec(module_id, path, size):
    return ModuleRecord(id=module_id, path=path, size_bytes=size)


class TestInstallLocation:
    def test_top_level(self):
        assert install_location("node_modules/lodash/index.js", "lodash") == "node_modules/lodash"

    def test_nested(self):
        path = "node_modules/foo/node_modules/lodash/fp.js"
        assert install_location(path, "lodash") == "node_modules/foo/node_modules/lodash"

    def test_scoped(self):
        path = "node_modules/@babel/runtime/helpers/x.js"
        assert install_location(path, "@babel/runtime") == "node_modules/@babel/runtime"

    def test_not_a_package(self):
        assert install_location("src/App.js", "x") is None


class TestAggregate:
    def test_empty(self):
        result = aggregate([])
        assert result.total_size == 0
        assert result.first_party_size == 0
        assert result.third_party_size == 0
        assert result.platform_size == 0
        assert result.packages == ()
        assert result.duplicates == ()
        assert result.module_map == {}

    def test_category_totals(self):
        result = aggregate(
            [
                rec(0, "src/App.js", 100),
                rec(1, "node_modules/lodash/index.js", 300),
                rec(2, "node_modules/react-native/index.js", 600),
                rec(3, "module_3", 50),
            ]
        )
        assert result.first_party_size == 150
        assert result.third_party_size == 300
        assert result.platform_size == 600
        assert result.total_size == 1050
        assert result.category_totals == {
            "first-party": 150,
            "third-party": 300,
            "platform-runtime": 600,
        }

    def test_packages_sorted_with_percentages(self):
        result = aggregate(
            [
                rec(0, "src/App.js", 200),
                rec(1, "node_modules/a/index.js", 100),
                rec(2, "node_modules/b/index.js", 500),
                rec(3, "node_modules/a/util.js", 200),
            ]
        )
        assert [p.name for p in result.packages] == ["b", "a"]
        b, a = result.packages
        assert b.total_size_bytes == 500
        assert a.total_size_bytes == 300
        assert a.percentage_of_bundle == pytest.approx(30.0)
        assert [m.id for m in a.member_modules] == [1, 3]

    def test_equal_sizes_keep_first_seen_order(self):
        result = aggregate(
            [rec(0, "node_modules/z/i.js", 10), rec(1, "node_modules/y/i.js", 10)]
        )
        assert [p.name for p in result.packages] == ["z", "y"]

    def test_duplicate_across_install_locations(self):
        result = aggregate(
            [
                rec(0, "node_modules/lodash/index.js", 400),
                rec(1, "node_modules/foo/node_modules/lodash/index.js", 600),
            ]
        )
        (dup,) = result.duplicates
        assert dup.name == "lodash"
        assert dup.install_locations == (
            "node_modules/lodash",
            "node_modules/foo/node_modules/lodash",
        )
        assert dup.estimated_wasted_bytes == pytest.approx(500.0)

    def test_three_locations(self):
        result = aggregate(
            [
                rec(0, "node_modules/x/a.js", 300),
                rec(1, "node_modules/p/node_modules/x/a.js", 300),
                rec(2, "node_modules/q/node_modules/x/a.js", 300),
                rec(3, "node_modules/q/node_modules/x/b.js", 300),
            ]
        )
        (dup,) = result.duplicates
        assert len(dup.install_locations) == 3
        assert dup.estimated_wasted_bytes == pytest.approx(1200 * 2 / 3)

    def test_single_location_is_not_duplicate(self):
        result = aggregate(
            [rec(0, "node_modules/a/x.js", 1), rec(1, "node_modules/a/y.js", 1)]
        )
        assert result.duplicates == ()

    def test_duplicates_sorted_by_waste(self):
        result = aggregate(
            [
                rec(0, "node_modules/small/i.js", 10),
                rec(1, "node_modules/o/node_modules/small/i.js", 10),
                rec(2, "node_modules/big/i.js", 1000),
                rec(3, "node_modules/o/node_modules/big/i.js", 1000),
            ]
        )
        assert [d.name for d in result.duplicates] == ["big", "small"]

    def test_module_map_last_wins(self):
        result = aggregate([rec(0, "module_x", 5), rec(1, "module_x", 7)])
        assert result.module_map["module_x"].id == 1
        assert result.module_count == 2

    def test_serialized_module_map_keeps_colliding_paths(self):
        result = aggregate([rec(0, "module_x", 5), rec(1, "module_x", 7), rec(2, "src/a.js", 1)])
        pairs = result.to_dict()["module_map"]
        assert [(path, m["id"]) for path, m in pairs] == [
            ("module_x", 0),
            ("module_x", 1),
            ("src/a.js", 2),
        ]
