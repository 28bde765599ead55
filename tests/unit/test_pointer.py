"""Tests for JSON Pointer rendering and resolution."""

import pytest

from j_visit import resolve, to_pointer, walk
from j_visit.pointer import decode_token, encode_token


class TestToPointer:

    def test_root_is_empty(self):
        assert to_pointer(()) == ""

    def test_pointers_for_every_node_resolve_back(self, sample_data):
        pairs = []

        walk(sample_data, lambda node, chain: pairs.append((to_pointer(chain), node)))

        for ptr, node in pairs:
            assert resolve(sample_data, ptr) is node

    def test_escaping(self):
        data = {"a/b": {"c~d": 1}}
        seen = []

        walk(data, lambda node, chain: seen.append(to_pointer(chain)))

        assert seen == ["", "/a~1b", "/a~1b/c~0d"]

    def test_non_string_mapping_keys_are_rendered_with_str(self):
        data = {1: {None: "x"}, (2, 3): True}
        seen = []

        walk(data, lambda node, chain: seen.append((to_pointer(chain), chain[-1].key if chain else None)))

        assert seen == [("", None), ("/1", 1), ("/1/None", None), ("/(2, 3)", (2, 3))]


class TestTokens:

    @pytest.mark.parametrize("raw, encoded", [
        ("plain", "plain"),
        ("a/b", "a~1b"),
        ("~", "~0"),
        ("~1", "~01"),
        (3, "3"),
    ])
    def test_encode(self, raw, encoded):
        assert encode_token(raw) == encoded

    def test_decode_order(self):
        """``~01`` decodes to ``~1``, not ``/``."""
        assert decode_token("~01") == "~1"
        assert decode_token("a~1b") == "a/b"


class TestResolve:

    def test_nested(self):
        assert resolve({"a": [{"b": 2}]}, "/a/0/b") == 2

    def test_root(self):
        doc = {"a": 1}
        assert resolve(doc, "") is doc

    def test_empty_key(self):
        assert resolve({"": 5}, "/") == 5

    def test_missing_key(self):
        with pytest.raises(KeyError):
            resolve({"a": 1}, "/b")

    def test_index_out_of_range(self):
        with pytest.raises(IndexError):
            resolve([1], "/3")

    def test_non_numeric_index(self):
        with pytest.raises(IndexError, match="not a list index"):
            resolve([1], "/x")

    def test_scalar_segment(self):
        with pytest.raises(TypeError, match="cannot descend"):
            resolve({"a": "text"}, "/a/0")

    def test_relative_pointer_rejected(self):
        with pytest.raises(ValueError):
            resolve({"a": 1}, "a")
