"""Walker factory and the module-level entry points.

``build_default_walker`` is the recommended way to get a configured
``Walker``; ``walk`` / ``walk_async`` use a shared, unconfigured one.

Customisation points:

* **max_depth**     – deepest level a child may be visited at (default unlimited).
* **detect_cycles** – raise ``CycleDetected`` on self-referencing containers.
* **log_level**     – install a ``LoggingMiddleware`` at this level.
* **middlewares**   – extra per-visit hooks.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from .core import AsyncVisitMiddleware, VisitMiddleware
from .middleware import LoggingMiddleware
from .walker import AsyncDecideFn, DecideFn, Walker


def build_default_walker(
        *,
        max_depth: Optional[int] = None,
        detect_cycles: bool = False,
        log_level: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
        middlewares: Optional[List[Union[VisitMiddleware, AsyncVisitMiddleware]]] = None,
) -> Walker:
    """Assemble a Walker.

    What gets wired
    ---------------
    middlewares
        * everything passed in *middlewares*, in their own priority order
        * ``LoggingMiddleware(logger, log_level)`` (priority -100) when
          *log_level* is given

    Limits
        *max_depth* and *detect_cycles* are passed through unchanged.
    """
    if max_depth is not None and max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    mws = list(middlewares or [])
    if log_level is not None:
        mws.append(LoggingMiddleware(logger=logger, level=log_level))

    return Walker(max_depth=max_depth, detect_cycles=detect_cycles, middlewares=mws)


_default_walker = Walker()


def walk(root: Any, decide: DecideFn) -> None:
    """Traverse *root* depth-first, applying *decide* at every node.

    See ``Walker.walk``.
    """
    _default_walker.walk(root, decide)


async def walk_async(root: Any, decide: AsyncDecideFn) -> None:
    """Async version of walk(); *decide* may be a coroutine function."""
    await _default_walker.walk_async(root, decide)
