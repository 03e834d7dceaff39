"""Tests for parsing/segmenter.py - module boundary recovery."""

from bundle_insight.parsing.segmenter import (
    MAX_MODULE_SPAN,
    find_unbalanced_close,
    segment_bundle,
    segment_size_only,
)


class TestFindUnbalancedClose:
    """The delimiter/string state machine."""

    def test_simple_brace(self):
        assert find_unbalanced_close("abc}def") == 3

    def test_nested_delimiters_share_depth(self):
        text = "f(a[1], {b: 2})}"
        assert find_unbalanced_close(text) == len(text) - 1

    def test_mismatched_kinds_still_balance(self):
        """Depth is one counter, so ( closed by ] still nets to zero."""
        assert find_unbalanced_close("(]}") == 2

    def test_delimiters_in_strings_ignored(self):
        for quote in ("'", '"', "`"):
            text = f"x={quote}{{)]{quote};}}"
            assert find_unbalanced_close(text) == len(text) - 1

    def test_escaped_quote_does_not_end_string(self):
        text = r'x="a\"}";}'
        assert find_unbalanced_close(text) == len(text) - 1

    def test_escaped_backslash_before_quote(self):
        text = r'x="a\\";}'
        assert find_unbalanced_close(text) == len(text) - 1

    def test_other_quote_inside_string(self):
        text = "x=\"it's }\";}"
        assert find_unbalanced_close(text) == len(text) - 1

    def test_not_found(self):
        assert find_unbalanced_close("{{}") == -1
        assert find_unbalanced_close("") == -1

    def test_start_offset(self):
        assert find_unbalanced_close("}}", start=1) == 1


class TestSegmentBundle:
    """Structured segmentation of registration calls."""

    def test_preamble_ignored(self, make_bundle, make_module):
        chunks = segment_bundle(make_bundle(make_module(5, "var a=1;")))
        assert len(chunks) == 1
        assert chunks[0].declared_id == 5
        assert chunks[0].structured

    def test_body_and_code_span(self):
        text = "__d(function(g,r,i,a,m,e,d){var x=1;},42,[]);"
        (chunk,) = segment_bundle(text)
        assert chunk.body == "var x=1;"
        assert chunk.code == text[:-1]
        assert chunk.size_bytes == len(text) - 1

    def test_trailer_holds_embedded_path(self, make_module):
        (chunk,) = segment_bundle(make_module(1, "", "src/App.js"))
        assert chunk.trailer == ',1,[],"src/App.js")'

    def test_chunk_indices_are_sequential(self, make_bundle, make_module):
        text = make_bundle(make_module(10, "a"), make_module(3, "b"), make_module(99, "c"))
        chunks = segment_bundle(text)
        assert [c.chunk_index for c in chunks] == [0, 1, 2]
        assert [c.declared_id for c in chunks] == [10, 3, 99]

    def test_brace_in_string_literal(self):
        """A quoted '{' must not end the body early."""
        text = '__d(function(g,r,i,a,m,e,d){var s="{";var t=\'}\';f(s,t);},7,[]);'
        (chunk,) = segment_bundle(text)
        assert chunk.body == 'var s="{";var t=\'}\';f(s,t);'
        assert chunk.declared_id == 7

    def test_size_counts_utf8_bytes(self):
        text = '__d(function(g,r,i,a,m,e,d){var s="héllo→";},1,[]);'
        (chunk,) = segment_bundle(text)
        assert chunk.size_bytes == len(chunk.code.encode("utf-8"))
        assert chunk.size_bytes > len(chunk.code)

    def test_nonconforming_head_falls_back_per_occurrence(self, make_module):
        text = make_module(0, "a") + "__d(0,[],function(){});" + make_module(2, "c")
        chunks = segment_bundle(text)
        assert [c.structured for c in chunks] == [True, False, True]
        assert chunks[1].declared_id == 1
        assert chunks[1].body == ""

    def test_unterminated_body_is_size_only_and_capped(self):
        text = "__d(function(g,r,i,a,m,e,d){" + "{" * (MAX_MODULE_SPAN * 2)
        (chunk,) = segment_bundle(text)
        assert not chunk.structured
        assert len(chunk.code) == len("__d(") + MAX_MODULE_SPAN

    def test_span_cap_counts_utf8_bytes(self):
        text = "__d(function(g,r,i,a,m,e,d){" + "\u00e9" * MAX_MODULE_SPAN
        (chunk,) = segment_bundle(text)
        capped = chunk.size_bytes - len("__d(")
        assert MAX_MODULE_SPAN - 1 <= capped <= MAX_MODULE_SPAN
        assert len(chunk.code) < len("__d(") + MAX_MODULE_SPAN

    def test_missing_call_close_caps_span(self):
        text = "__d(function(g,r,i,a,m,e,d){x},4,[" + "1," * 10
        (chunk,) = segment_bundle(text)
        assert chunk.structured
        assert chunk.declared_id == 4
        assert chunk.code == text

    def test_no_marker(self):
        assert segment_bundle("console.log('hello')") == []
        assert segment_bundle("") == []


class TestSegmentSizeOnly:
    """Degraded segmentation used when heads cannot be matched."""

    def test_loose_id_extraction(self, make_module):
        (chunk,) = segment_size_only(make_module(17, "var a={};"))
        assert chunk.declared_id == 17
        assert not chunk.structured

    def test_position_used_without_id(self):
        chunks = segment_size_only("__d(a)__d(b)")
        assert [c.declared_id for c in chunks] == [0, 1]
        assert [c.code for c in chunks] == ["__d(a)", "__d(b)"]

    def test_every_marker_yields_a_chunk(self, make_bundle, make_module):
        text = make_bundle(make_module(0, "a"), make_module(1, "b"))
        assert len(segment_size_only(text)) == 2
