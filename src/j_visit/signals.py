"""Errors and internal control-flow signals.

Every error raised by the walker derives from :class:`VisitError` and aborts
the whole traversal.  Mutations committed before the error are kept; there is
no rollback.

``ExitSignal`` is *not* an error. It is the signal used to
unwind every pending recursive call when a decision says ``EXIT``.  The
walker catches it at the top of ``walk`` / ``walk_async``; it never reaches
the caller.
"""

from __future__ import annotations

from typing import Any


class VisitError(Exception):
    """Base class for every error raised by the walker."""


class InvalidRootMutation(VisitError, ValueError):
    """Raised when the decision for the root node is ``Replace`` or ``Delete``.

    The root is never addressed by a ``(container, key)`` pair, so there is
    no slot to write to or remove.
    """

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"root node cannot be {action}")


class UnknownDecision(VisitError, TypeError):
    """Raised when a decision (or a nested ``then``) is not a recognised variant.

    Attributes:
        decision: The offending value.
    """

    def __init__(self, decision: Any, hint: str = "") -> None:
        self.decision = decision
        message = f"unknown flow control: {decision!r}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class MaxDepthExceeded(VisitError, RecursionError):
    """Raised before visiting a node deeper than the walker's ``max_depth``."""

    def __init__(self, depth: int, max_depth: int) -> None:
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"traversal depth ({depth}) exceeded maximum ({max_depth})")


class CycleDetected(VisitError):
    """Raised when descending into a container that is already an ancestor.

    Only raised by walkers built with ``detect_cycles=True``.
    """

    def __init__(self, pointer: str) -> None:
        self.pointer = pointer
        super().__init__(f"cycle detected at {pointer!r}: container is its own ancestor")


class ExitSignal(Exception):
    """Raised by the walker on ``EXIT`` to unwind all pending levels at once."""

    def __init__(self) -> None:
        super().__init__("EXIT used outside of a traversal")
