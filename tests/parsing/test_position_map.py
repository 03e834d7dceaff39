"""Tests for parsing/position_map.py."""

import json

import pytest

from bundle_insight.exceptions import PositionMapError
from bundle_insight.parsing.position_map import PositionMap, load_position_map


class TestPositionMapParse:
    def test_parses_sources(self):
        pm = PositionMap.parse(json.dumps({"version": 3, "sources": ["a.js", "b.js"]}))
        assert len(pm) == 2
        assert pm.path_at(0) == "a.js"
        assert pm.path_at(1) == "b.js"

    @pytest.mark.parametrize(
        "text",
        ["not json", "[1, 2]", '"sources"', "{}", '{"sources": "a.js"}', '{"sources": null}'],
    )
    def test_invalid_documents_raise(self, text):
        with pytest.raises(PositionMapError):
            PositionMap.parse(text)

    def test_other_fields_ignored(self):
        pm = PositionMap.parse('{"sources": [], "mappings": 5, "names": {}}')
        assert len(pm) == 0


class TestPathAt:
    """Lookups are positional and never raise."""

    def test_out_of_range(self):
        pm = PositionMap(sources=("a.js",))
        assert pm.path_at(1) is None
        assert pm.path_at(-1) is None

    def test_unusable_entries(self):
        pm = PositionMap(sources=("", 3, None, {"p": 1}))
        assert [pm.path_at(i) for i in range(4)] == [None, None, None, None]


class TestLoadPositionMap:
    def test_none_text(self):
        assert load_position_map(None) is None

    def test_malformed_degrades_silently(self):
        assert load_position_map("{broken") is None
        assert load_position_map('{"version": 3}') is None

    def test_valid(self):
        pm = load_position_map('{"sources": ["src/App.js"]}')
        assert pm is not None
        assert pm.path_at(0) == "src/App.js"
