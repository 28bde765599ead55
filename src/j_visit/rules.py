"""Declarative decision functions built from prioritised rules.

A ``RuleRegistry`` *is* a decision function: pass it straight to ``walk``.
For every visited node it walks its rules by descending priority and asks
the first matching one for a decision.  When nothing matches it returns
``None`` (``CONTINUE``).

::

    rules = RuleRegistry()
    rules.register(RuleNode("drop-nulls", 20, EqualsMatcher(None), DELETE))
    rules.register(RuleNode("mask", 10, PointerMatcher(r"/users/\\d+/password"),
                            lambda node, chain: REPLACE("***", STEP_OVER)))
    walk(doc, rules)

A rule's ``decide`` is either a callable ``(node, chain) -> decision`` or a
ready-made decision returned as-is.  Callables may be coroutine functions,
in which case the registry must be driven by ``walk_async``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union

from .core import AncestorChain, NodeMatcher

RuleDecide = Union[Callable[[Any, AncestorChain], Any], Any]


@dataclass
class RuleNode:
    """Node in the rule tree.

    Field combinations::

        decide, no children   → leaf rule
        no decide, children   → group (no fallback)
        decide + children     → group with fallback decision

    The *fallback* rule: ``decide`` is only used when ``children.resolve()``
    finds nothing.  A matching node that yields nothing (empty group) does not
    stop the search; lower-priority siblings are still tried.
    """

    name: str
    priority: int
    matcher: NodeMatcher
    decide: Optional[RuleDecide] = None
    children: Optional['RuleRegistry'] = None


class RuleRegistry:
    """Hierarchical, first-match registry of rules.

    Each instance is one level of the tree and may be nested as the
    ``children`` of a ``RuleNode``.
    """

    def __init__(self) -> None:
        self._nodes: List[RuleNode] = []

    # -- registration -------------------------------------------------------

    def register(self, node: RuleNode) -> None:
        """Add a node to this registry level."""
        self._nodes.append(node)

    def register_group(
            self,
            name: str,
            registry: 'RuleRegistry',
            *,
            matcher: NodeMatcher,
            priority: int = 0,
            decide: Optional[RuleDecide] = None,
    ) -> None:
        """Mount a sub-registry as a group node.

        Sugar for ``register(RuleNode(…, children=registry))``.
        """
        self.register(RuleNode(
            name=name, priority=priority,
            matcher=matcher, decide=decide,
            children=registry,
        ))

    # -- dispatch -----------------------------------------------------------

    def resolve(self, node: Any, chain: AncestorChain) -> Optional[RuleNode]:
        """Return the rule that decides for *node*, or ``None``.

        Algorithm::

            for rule by priority desc:
                if matcher matches:
                    if children and children.resolve() → return that
                    if decide → return rule       # fallback
        """
        for rule in self.nodes():
            if not rule.matcher.matches(node, chain):
                continue
            if rule.children is not None:
                sub = rule.children.resolve(node, chain)
                if sub is not None:
                    return sub
            if rule.decide is not None:
                return rule
        return None

    def __call__(self, node: Any, chain: AncestorChain) -> Any:
        rule = self.resolve(node, chain)
        if rule is None:
            return None
        if callable(rule.decide):
            return rule.decide(node, chain)
        return rule.decide

    # -- introspection ------------------------------------------------------

    def nodes(self) -> List[RuleNode]:
        """Return nodes sorted by descending priority."""
        return sorted(self._nodes, key=lambda n: n.priority, reverse=True)
