"""Flow-control vocabulary returned by decision functions.

A decision function returns one of:

* ``Flow.CONTINUE``  – descend into the node's children (the default; a
  ``None`` return means the same thing).
* ``Flow.STEP_OVER`` – do not descend; move on to the next sibling.
* ``Flow.BREAK``     – skip the remaining siblings; resume at the parent level.
* ``Flow.EXIT``      – abort the whole traversal.
* ``Replace(value, then)`` – write *value* into the node's slot, then apply
  *then*.  ``then=CONTINUE`` descends into *value*, never into the node it
  replaced.
* ``Delete(then)`` – remove the node's slot, then apply *then*.  The node is
  gone, so ``then=CONTINUE`` and ``then=STEP_OVER`` behave the same.

Example: drop every ``None`` and upper-case every string::

    def decide(node, chain):
        if node is None:
            return DELETE
        if isinstance(node, str):
            return REPLACE(node.upper(), STEP_OVER)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .signals import UnknownDecision


class Flow(Enum):
    """Plain decisions, also the only legal values for a nested ``then``."""

    CONTINUE = "continue"
    STEP_OVER = "step_over"
    BREAK = "break"
    EXIT = "exit"


@dataclass(frozen=True)
class Replace:
    """Overwrite the visited slot with *value*, then apply *then*."""

    value: Any
    then: Flow = Flow.CONTINUE


@dataclass(frozen=True)
class Delete:
    """Remove the visited slot from its container, then apply *then*."""

    then: Flow = Flow.CONTINUE


Decision = Union[Flow, Replace, Delete]

# ─────────────────────────────────────────────────────────────────────────────
# Ready-made decisions
# ─────────────────────────────────────────────────────────────────────────────

CONTINUE = Flow.CONTINUE
STEP_OVER = Flow.STEP_OVER
BREAK = Flow.BREAK
EXIT = Flow.EXIT

DELETE = Delete(Flow.CONTINUE)
DELETE_BREAK = Delete(Flow.BREAK)
DELETE_EXIT = Delete(Flow.EXIT)


def REPLACE(value: Any, then: Flow = Flow.CONTINUE) -> Replace:
    """Build a ``Replace`` decision.

    ::

        REPLACE({"type": "new", "children": []})            # and descend into it
        REPLACE({"type": "new", "children": []}, STEP_OVER)  # and skip it
    """
    return Replace(value, then)


def normalize(decision: Any) -> Any:
    """Map a missing decision (``None``) to ``CONTINUE``; pass anything else through.

    Validation is left to the point where the decision is applied.
    """
    return Flow.CONTINUE if decision is None else decision


def check_then(decision: Replace | Delete) -> Flow:
    """Return the nested ``then`` of a mutating decision, or raise ``UnknownDecision``."""
    then = decision.then
    if not isinstance(then, Flow):
        raise UnknownDecision(then, hint=f"invalid 'then' of {type(decision).__name__}")
    return then
