"""Shared NodeMatcher implementations.

Exports
-------
AlwaysMatcher
    Unconditional match, the catch-all / fallback sentinel.

KindMatcher
    Match by ``classify(node)``.

EqualsMatcher
    Match nodes equal to a given value (``True`` never equals ``1``).

PointerMatcher
    Match the JSON Pointer of the ancestor chain against a regular expression.

RegexMatcher
    Match string scalars against a regular expression.

JmesMatcher
    Match when a JMESPath expression evaluated against the node is truthy.

The two regex matchers use the ``regex`` library so every match runs under a
timeout (patterns may come from untrusted configuration).
"""

from __future__ import annotations

from typing import Any

import jmespath
import regex

from .core import AncestorChain, NodeKind, NodeMatcher, classify
from .jmes_ext import JP_OPTIONS
from .pointer import to_pointer


class AlwaysMatcher(NodeMatcher):
    """Unconditional match.

    ::

        AlwaysMatcher().matches(anything, chain)   # True
    """

    def matches(self, node: Any, chain: AncestorChain) -> bool:
        return True


class KindMatcher(NodeMatcher):
    """Match nodes whose kind is one of *kinds*.

    ::

        KindMatcher(NodeKind.SEQUENCE, NodeKind.MAPPING)   # any container
    """

    def __init__(self, *kinds: NodeKind) -> None:
        if not kinds:
            raise ValueError("KindMatcher needs at least one NodeKind")
        self._kinds = frozenset(kinds)

    def matches(self, node: Any, chain: AncestorChain) -> bool:
        return classify(node) in self._kinds


class EqualsMatcher(NodeMatcher):
    """Match nodes equal to *value*; booleans only ever equal booleans."""

    def __init__(self, value: Any) -> None:
        self._value = value

    def matches(self, node: Any, chain: AncestorChain) -> bool:
        if isinstance(node, bool) is not isinstance(self._value, bool):
            return False
        return node == self._value


class PointerMatcher(NodeMatcher):
    """Match when ``to_pointer(chain)`` fully matches *pattern*.

    ::

        PointerMatcher(r"/users/\\d+/password")   # every user's password
        PointerMatcher(r"")                      # only the root

    Args:
        pattern: Regular expression (``regex`` syntax).
        flags:   ``regex`` flags.
        timeout: Seconds allowed per match before ``TimeoutError``.
    """

    def __init__(self, pattern: str, flags: int = 0, timeout: float = 2.0) -> None:
        self._pattern = pattern
        self._flags = flags
        self._timeout = timeout

    def matches(self, node: Any, chain: AncestorChain) -> bool:
        try:
            return bool(regex.fullmatch(self._pattern, to_pointer(chain), self._flags, timeout=self._timeout))
        except TimeoutError:
            raise TimeoutError(f"pointer pattern {self._pattern!r} exceeded timeout of {self._timeout}s")


class RegexMatcher(NodeMatcher):
    """Match string scalars that *pattern* finds a match in (``search`` semantics).

    Non-string nodes never match.
    """

    def __init__(self, pattern: str, flags: int = 0, timeout: float = 2.0) -> None:
        self._pattern = pattern
        self._flags = flags
        self._timeout = timeout

    def matches(self, node: Any, chain: AncestorChain) -> bool:
        if not isinstance(node, str):
            return False
        try:
            return bool(regex.search(self._pattern, node, self._flags, timeout=self._timeout))
        except TimeoutError:
            raise TimeoutError(f"pattern {self._pattern!r} exceeded timeout of {self._timeout}s")


class JmesMatcher(NodeMatcher):
    """Match when *expression*, evaluated against the node, is truthy.

    The expression is compiled once.  Besides the JMESPath builtins it can
    call ``kind(@)`` and ``is_scalar(@)``::

        JmesMatcher("kind(@) == 'mapping' && status == 'draft'")
        JmesMatcher("is_scalar(@) && @ > `100`")

    Args:
        expression: JMESPath expression.
        options:    ``jmespath.Options``; defaults to the ones carrying the
                    custom functions above.
    """

    def __init__(self, expression: str, options: jmespath.Options | None = None) -> None:
        self._expression = jmespath.compile(expression)
        self._options = options or JP_OPTIONS

    def matches(self, node: Any, chain: AncestorChain) -> bool:
        return _jmes_truthy(self._expression.search(node, options=self._options))


def _jmes_truthy(value: Any) -> bool:
    """JMESPath truthiness: null, false and empty strings, lists and objects are false; 0 is true."""
    if value is None or value is False:
        return False
    if isinstance(value, (str, list, dict)):
        return len(value) > 0
    return True
