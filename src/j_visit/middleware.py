"""Built-in middlewares."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .core import AncestorChain, VisitMiddleware, classify
from .flow import Delete, Flow, Replace
from .pointer import to_pointer


def describe(decision: Any) -> str:
    """Short, log-friendly rendering of a decision (``REPLACE→STEP_OVER`` …)."""
    if isinstance(decision, Flow):
        return decision.name
    if isinstance(decision, (Replace, Delete)):
        then = getattr(decision.then, "name", repr(decision.then))
        return f"{type(decision).__name__.upper()}→{then}"
    return repr(decision)


class LoggingMiddleware(VisitMiddleware):
    """Log one record per visited node: pointer, node kind and decision.

    Mounted at a low priority so it records the decision that will actually
    be applied, after any overriding middleware ran.  Never changes the
    decision.

    ::

        walker = build_default_walker(log_level=logging.INFO)
        # INFO j_visit.visits: visit /a/1 (scalar) → REPLACE→CONTINUE
    """

    name = "logging"
    priority = -100

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG) -> None:
        self._logger = logger or logging.getLogger("j_visit.visits")
        self._level = level

    def process(self, node: Any, chain: AncestorChain, decision: Any) -> Any:
        if self._logger.isEnabledFor(self._level):
            self._logger.log(
                self._level, "visit %s (%s) → %s",
                to_pointer(chain) or "<root>", classify(node).value, describe(decision),
            )
        return decision
