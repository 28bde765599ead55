"""Core abstractions: node classification, ancestor tracking, middleware.

Nothing here knows how a traversal proceeds; that lives in ``walker``.
This module owns the shapes every other piece agrees on.

Traversal state for a single ``walk`` call::

    AncestorTracker
      ├── frames: [AncestorFrame(root, k0), AncestorFrame(root[k0], k1), …]
      └── snapshot() → tuple handed to the decision function

    decide(node, chain) → decision
      │
      ▼
    middlewares (by priority desc) → decision
      │
      ▼
    walker applies decision
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Iterator, List, Optional, Tuple

from .signals import MaxDepthExceeded

# ─────────────────────────────────────────────────────────────────────────────
# Node classification
# ─────────────────────────────────────────────────────────────────────────────


class NodeKind(Enum):
    """Closed classification of a node at visit time."""

    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"


def classify(node: Any) -> NodeKind:
    """Classify *node*.

    * Any ``MutableMapping``  → ``MAPPING``
    * Any ``list``            → ``SEQUENCE``
    * Everything else         → ``SCALAR`` (strings, bytes and tuples included:
                                they cannot be mutated in place)
    """
    if isinstance(node, MutableMapping):
        return NodeKind.MAPPING
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


# int index for sequences; any hashable mapping key (pointers render it with str()).
Key = Hashable


# ─────────────────────────────────────────────────────────────────────────────
# Ancestor chain
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, eq=False)
class AncestorFrame:
    """Records that the visited node is reachable via ``container[key]``.

    The frame references *container*, it never owns or copies it.

    Attributes:
        container: The immediate parent container.
        key:       Index (``kind is SEQUENCE``) or mapping key (``kind is MAPPING``).
        kind:      Tag telling how *key* addresses *container*.
    """

    container: Any
    key: Key
    kind: NodeKind

    @property
    def value(self) -> Any:
        """Current value at ``container[key]`` (read live, not captured)."""
        return self.container[self.key]

    def __repr__(self) -> str:
        return f"AncestorFrame(key={self.key!r}, kind={self.kind.value})"


AncestorChain = Tuple[AncestorFrame, ...]


class AncestorTracker:
    """Ordered stack of frames from the root's child down to the current node.

    The only way to push is :meth:`enter`, a context manager whose exit pops
    the frame. The frame is therefore gone before the next sibling is visited no
    matter how the child's visit ended (descent, step-over, delete, break,
    exit, or an exception).

    ::

        tracker = AncestorTracker(max_depth=100)
        with tracker.enter(container, key, kind) as chain:
            decide(container[key], chain)
    """

    def __init__(self, *, max_depth: Optional[int] = None) -> None:
        self._frames: List[AncestorFrame] = []
        self._max_depth = max_depth

    def __len__(self) -> int:
        return len(self._frames)

    # -- push / pop ---------------------------------------------------------

    @contextmanager
    def enter(self, container: Any, key: Key, kind: NodeKind) -> Iterator[AncestorChain]:
        """Push a frame for ``container[key]`` and yield the resulting chain."""
        depth = len(self._frames) + 1
        if self._max_depth is not None and depth > self._max_depth:
            raise MaxDepthExceeded(depth, self._max_depth)
        self._frames.append(AncestorFrame(container, key, kind))
        try:
            yield self.snapshot()
        finally:
            self._frames.pop()

    # -- introspection ------------------------------------------------------

    def snapshot(self) -> AncestorChain:
        """Return the chain as an immutable tuple."""
        return tuple(self._frames)

    def is_ancestor(self, container: Any) -> bool:
        """True if *container* (by identity) holds any frame on the stack."""
        return any(frame.container is container for frame in self._frames)


# ─────────────────────────────────────────────────────────────────────────────
# Middleware: per-visit cross-cutting concerns
# ─────────────────────────────────────────────────────────────────────────────


class VisitMiddleware(ABC):
    """Per-visit hook that runs *after* the decision function returned and
    *before* the decision is applied.

    Intended for logging, auditing, policy overrides.  Receives the
    normalised decision (``None`` already mapped to ``CONTINUE``) and
    returns the decision to apply, usually the same object.

    Class attributes (set in subclass)::

        name:     str   – unique key
        priority: int   – higher = earlier; baseline = 0
    """

    name: str
    priority: int = 0

    @abstractmethod
    def process(self, node: Any, chain: AncestorChain, decision: Any) -> Any:
        """Return the decision to apply for *node*."""


class AsyncVisitMiddleware(ABC):
    """Async version of VisitMiddleware; only honoured by ``walk_async``."""

    name: str
    priority: int = 0

    @abstractmethod
    async def process(self, node: Any, chain: AncestorChain, decision: Any) -> Any:
        """Return the decision to apply for *node* asynchronously."""


# ─────────────────────────────────────────────────────────────────────────────
# Matching: predicates for declarative decision functions
# ─────────────────────────────────────────────────────────────────────────────


class NodeMatcher(ABC):
    """Predicate: does the visited node belong to a given rule?

    Examples::

        KindMatcher(NodeKind.SCALAR)   → classify(node) is SCALAR
        PointerMatcher(r"/items/\\d+")  → to_pointer(chain) fully matches
    """

    @abstractmethod
    def matches(self, node: Any, chain: AncestorChain) -> bool: ...
