"""Tests for the shared NodeMatcher implementations."""

import pytest

from j_visit import (
    AlwaysMatcher,
    EqualsMatcher,
    JmesMatcher,
    KindMatcher,
    NodeKind,
    PointerMatcher,
    RegexMatcher,
    walk,
)


def _chains(data):
    """Return ``[(node, chain), …]`` for every node of *data*."""
    out = []
    walk(data, lambda node, chain: out.append((node, chain)))
    return out


def test_always_matcher():
    m = AlwaysMatcher()
    assert m.matches({}, ())
    assert m.matches(None, ())


class TestKindMatcher:

    def test_matches_listed_kinds(self):
        m = KindMatcher(NodeKind.SEQUENCE, NodeKind.MAPPING)
        assert m.matches([], ())
        assert m.matches({}, ())
        assert not m.matches("x", ())

    def test_requires_a_kind(self):
        with pytest.raises(ValueError):
            KindMatcher()


class TestEqualsMatcher:

    def test_equal_values(self):
        assert EqualsMatcher(2).matches(2, ())
        assert EqualsMatcher({"a": 1}).matches({"a": 1}, ())
        assert not EqualsMatcher(2).matches(3, ())

    def test_bool_never_equals_int(self):
        assert not EqualsMatcher(1).matches(True, ())
        assert not EqualsMatcher(False).matches(0, ())
        assert EqualsMatcher(True).matches(True, ())

    def test_none(self):
        assert EqualsMatcher(None).matches(None, ())
        assert not EqualsMatcher(None).matches(0, ())


class TestPointerMatcher:

    def test_full_match_against_chain_pointer(self):
        data = {"users": [{"password": "a"}, {"password": "b"}], "password": "root"}
        m = PointerMatcher(r"/users/\d+/password")

        matched = [node for node, chain in _chains(data) if m.matches(node, chain)]

        assert matched == ["a", "b"]

    def test_empty_pattern_matches_root_only(self):
        m = PointerMatcher("")

        matched = [chain for node, chain in _chains({"a": 1}) if m.matches(node, chain)]

        assert matched == [()]

    def test_flags(self):
        import regex

        m = PointerMatcher(r"/NAME", flags=regex.IGNORECASE)
        ((_, _), (node, chain)) = _chains({"name": 1})

        assert m.matches(node, chain)


class TestRegexMatcher:

    def test_search_semantics(self):
        m = RegexMatcher(r"\d{3}")
        assert m.matches("call 555-1234", ())
        assert not m.matches("no digits", ())

    def test_non_strings_never_match(self):
        m = RegexMatcher(r".*")
        assert not m.matches(123, ())
        assert not m.matches(["abc"], ())

    def test_unicode_classes(self):
        """``regex`` syntax (e.g. script properties) is available."""
        m = RegexMatcher(r"\p{Cyrillic}+")
        assert m.matches("привет", ())
        assert not m.matches("hello", ())


class TestJmesMatcher:

    def test_expression_against_node(self):
        m = JmesMatcher("status == 'draft'")
        assert m.matches({"status": "draft"}, ())
        assert not m.matches({"status": "live"}, ())

    def test_custom_kind_function(self):
        m = JmesMatcher("kind(@) == 'sequence'")
        assert m.matches([1], ())
        assert not m.matches({"a": 1}, ())

    def test_custom_is_scalar_function(self):
        m = JmesMatcher("is_scalar(@) && @ > `100`")
        assert m.matches(101, ())
        assert not m.matches(99, ())
        assert not m.matches({"a": 500}, ())

    def test_jmespath_truthiness(self):
        """Zero is truthy in JMESPath; empty containers are not."""
        assert JmesMatcher("@").matches(0, ())
        assert not JmesMatcher("@").matches([], ())
        assert not JmesMatcher("@").matches("", ())
        assert not JmesMatcher("missing").matches({"a": 1}, ())

    def test_invalid_expression_fails_early(self):
        import jmespath.exceptions

        with pytest.raises(jmespath.exceptions.ParseError):
            JmesMatcher("a[")
