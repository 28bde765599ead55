"""Depth-first, pre-order walker with in-place mutation.

Execution flow (``Walker.walk`` entry point)::

    decide(root, ())                      ← root: CONTINUE / STEP_OVER / BREAK / EXIT only
      │
      ▼ CONTINUE
    _walk_children(root)
      for key in _LevelCursor(container):  ← live: re-reads len() / rescans keys when exhausted
          with tracker.enter(container, key):
              decision = decide(child, chain) → middlewares
              flow, target = _apply(decision)  ← REPLACE writes, DELETE removes
              CONTINUE → _walk_children(target)
          BREAK → return to the parent level
          EXIT  → raise ExitSignal, caught by walk()

``walk_async`` is the same algorithm with the decision function (and async
middlewares) awaited.  It suspends once per visited node and never visits
another node while a decision is pending, so visit order and final structure
are identical to ``walk``.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set, Tuple, Union

from .core import (
    AncestorChain,
    AncestorTracker,
    AsyncVisitMiddleware,
    Key,
    NodeKind,
    VisitMiddleware,
    classify,
)
from .flow import Delete, Flow, Replace, check_then, normalize
from .pointer import to_pointer
from .signals import CycleDetected, ExitSignal, InvalidRootMutation, UnknownDecision

logger = logging.getLogger(__name__)

DecideFn = Callable[[Any, AncestorChain], Any]
AsyncDecideFn = Callable[[Any, AncestorChain], Union[Any, Awaitable[Any]]]


# ─────────────────────────────────────────────────────────────────────────────
# Private helpers (shared by the sync and async walkers)
# ─────────────────────────────────────────────────────────────────────────────


class _LevelCursor:
    """Live key enumeration over one container.

    * Sequence – ascending index; ``len`` is re-read before every step.  After
      :meth:`deleted` the index is not advanced, so the element that shifted
      into the freed slot comes next.
    * Mapping  – walks a snapshot of the keys not yet yielded at this level,
      skipping any removed before being reached.  Once the snapshot runs out
      the mapping is rescanned for keys added mid-level, which are visited.
      Each level costs one pass per rescan, not one per key.
    """

    def __init__(self, container: Any, kind: NodeKind) -> None:
        self._container = container
        self._kind = kind
        self._deleted = False

    def deleted(self) -> None:
        self._deleted = True

    def __iter__(self):
        if self._kind is NodeKind.SEQUENCE:
            return self._indices()
        return self._keys()

    def _indices(self):
        index = 0
        while index < len(self._container):
            self._deleted = False
            yield index
            if not self._deleted:
                index += 1

    def _keys(self):
        seen: Set[Any] = set()
        pending: List[Any] = list(self._container)
        pos = 0
        while True:
            if pos == len(pending):
                # keys inserted mid-level land at the end of iteration order
                pending = [k for k in self._container if k not in seen]
                pos = 0
                if not pending:
                    return
            key = pending[pos]
            pos += 1
            if key in seen or key not in self._container:
                continue
            seen.add(key)
            yield key


def _root_flow(decision: Any) -> Flow:
    """Validate the root decision; only plain flows are legal there."""
    if isinstance(decision, Flow):
        return decision
    if isinstance(decision, Replace):
        raise InvalidRootMutation("replaced")
    if isinstance(decision, Delete):
        raise InvalidRootMutation("deleted")
    raise UnknownDecision(decision)


def _apply(container: Any, key: Key, child: Any, decision: Any,
           cursor: _LevelCursor) -> Tuple[Flow, Any]:
    """Commit *decision* for ``container[key]``.

    Returns ``(flow, target)`` where *target* is what a ``CONTINUE`` descends
    into: the replacement value after ``Replace``, the visited child otherwise.
    A deleted slot has nothing to descend into, so ``CONTINUE`` is reported as
    ``STEP_OVER``.
    """
    if isinstance(decision, Flow):
        return decision, child

    if isinstance(decision, Replace):
        then = check_then(decision)
        container[key] = decision.value
        return then, decision.value

    if isinstance(decision, Delete):
        then = check_then(decision)
        del container[key]
        cursor.deleted()
        if then is Flow.CONTINUE:
            then = Flow.STEP_OVER
        return then, None

    raise UnknownDecision(decision)


# ─────────────────────────────────────────────────────────────────────────────
# Walker
# ─────────────────────────────────────────────────────────────────────────────


class Walker:
    """Single-pass traversal-and-mutation engine.

    A walker holds configuration only; every ``walk`` call builds its own
    ancestor tracker, so one instance can serve any number of traversals.

    Args:
        max_depth:     Deepest level a child may be visited at (root = 0).
                       ``None`` means unlimited.
        detect_cycles: Raise ``CycleDetected`` instead of recursing into a
                       container that is already an ancestor of itself.
        middlewares:   Per-visit hooks, run by descending priority.
    """

    def __init__(
            self,
            *,
            max_depth: Optional[int] = None,
            detect_cycles: bool = False,
            middlewares: Optional[List[Union[VisitMiddleware, AsyncVisitMiddleware]]] = None,
    ) -> None:
        self.max_depth = max_depth
        self.detect_cycles = detect_cycles
        self._middlewares = list(middlewares) if middlewares else []

    # -- registration -------------------------------------------------------

    def register_middleware(self, middleware: Union[VisitMiddleware, AsyncVisitMiddleware]) -> None:
        """Add a per-visit middleware."""
        self._middlewares.append(middleware)

    def middlewares(self) -> List[Union[VisitMiddleware, AsyncVisitMiddleware]]:
        """Return middlewares sorted by descending priority."""
        return sorted(self._middlewares, key=lambda m: m.priority, reverse=True)

    # -- public API ---------------------------------------------------------

    def walk(self, root: Any, decide: DecideFn) -> None:
        """Visit *root* and everything below it, mutating in place.

        *decide* is called as ``decide(node, chain)`` for every visited node
        and returns a decision (or ``None`` for ``CONTINUE``).
        """
        tracker = AncestorTracker(max_depth=self.max_depth)
        flow = _root_flow(self._decide(decide, root, tracker.snapshot()))
        if flow is not Flow.CONTINUE:
            return
        try:
            self._walk_children(root, decide, tracker)
        except ExitSignal:
            logger.debug("traversal stopped by EXIT")

    async def walk_async(self, root: Any, decide: AsyncDecideFn) -> None:
        """Async version of walk().

        *decide* may return its decision directly or an awaitable resolving
        to it.  An exception raised by *decide* propagates immediately;
        mutations already committed stay in place.
        """
        tracker = AncestorTracker(max_depth=self.max_depth)
        flow = _root_flow(await self._decide_async(decide, root, tracker.snapshot()))
        if flow is not Flow.CONTINUE:
            return
        try:
            await self._walk_children_async(root, decide, tracker)
        except ExitSignal:
            logger.debug("traversal stopped by EXIT")

    # -- sync internals -----------------------------------------------------

    def _decide(self, decide: DecideFn, node: Any, chain: AncestorChain) -> Any:
        decision = decide(node, chain)
        if inspect.isawaitable(decision):
            if inspect.iscoroutine(decision):
                decision.close()
            raise UnknownDecision(decision, hint="decision function returned an awaitable; use walk_async")
        decision = normalize(decision)
        for mw in self.middlewares():
            if isinstance(mw, AsyncVisitMiddleware):
                raise TypeError(f"async middleware {mw.name!r} requires walk_async")
            decision = normalize(mw.process(node, chain, decision))
        return decision

    def _walk_children(self, node: Any, decide: DecideFn, tracker: AncestorTracker) -> None:
        kind = classify(node)
        if kind is NodeKind.SCALAR:
            return
        cursor = _LevelCursor(node, kind)
        for key in cursor:
            with tracker.enter(node, key, kind) as chain:
                child = node[key]
                flow, target = _apply(node, key, child, self._decide(decide, child, chain), cursor)
                if flow is Flow.CONTINUE:
                    self._check_cycle(target, tracker, chain)
                    self._walk_children(target, decide, tracker)
            if flow is Flow.BREAK:
                return
            if flow is Flow.EXIT:
                raise ExitSignal()

    # -- async internals ----------------------------------------------------

    async def _decide_async(self, decide: AsyncDecideFn, node: Any, chain: AncestorChain) -> Any:
        decision = decide(node, chain)
        if inspect.isawaitable(decision):
            decision = await decision
        decision = normalize(decision)
        for mw in self.middlewares():
            if isinstance(mw, AsyncVisitMiddleware):
                decision = await mw.process(node, chain, decision)
            else:
                decision = mw.process(node, chain, decision)
            decision = normalize(decision)
        return decision

    async def _walk_children_async(self, node: Any, decide: AsyncDecideFn, tracker: AncestorTracker) -> None:
        kind = classify(node)
        if kind is NodeKind.SCALAR:
            return
        cursor = _LevelCursor(node, kind)
        for key in cursor:
            with tracker.enter(node, key, kind) as chain:
                child = node[key]
                decision = await self._decide_async(decide, child, chain)
                flow, target = _apply(node, key, child, decision, cursor)
                if flow is Flow.CONTINUE:
                    self._check_cycle(target, tracker, chain)
                    await self._walk_children_async(target, decide, tracker)
            if flow is Flow.BREAK:
                return
            if flow is Flow.EXIT:
                raise ExitSignal()

    # -- guards -------------------------------------------------------------

    def _check_cycle(self, target: Any, tracker: AncestorTracker, chain: AncestorChain) -> None:
        if not self.detect_cycles or classify(target) is NodeKind.SCALAR:
            return
        if tracker.is_ancestor(target):
            raise CycleDetected(to_pointer(chain))
