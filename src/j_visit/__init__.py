from .core import (
    AncestorChain,
    AncestorFrame,
    AncestorTracker,
    AsyncVisitMiddleware,
    Key,
    NodeKind,
    NodeMatcher,
    VisitMiddleware,
    classify,
)
from .factory import build_default_walker, walk, walk_async
from .flow import (
    BREAK,
    CONTINUE,
    DELETE,
    DELETE_BREAK,
    DELETE_EXIT,
    EXIT,
    REPLACE,
    STEP_OVER,
    Decision,
    Delete,
    Flow,
    Replace,
)
from .matchers import (
    AlwaysMatcher,
    EqualsMatcher,
    JmesMatcher,
    KindMatcher,
    PointerMatcher,
    RegexMatcher,
)
from .middleware import LoggingMiddleware
from .pointer import resolve, to_pointer
from .rules import RuleNode, RuleRegistry
from .signals import (
    CycleDetected,
    InvalidRootMutation,
    MaxDepthExceeded,
    UnknownDecision,
    VisitError,
)
from .walker import Walker

__all__ = [
    # core
    "AncestorChain",
    "AncestorFrame",
    "AncestorTracker",
    "AsyncVisitMiddleware",
    "Key",
    "NodeKind",
    "NodeMatcher",
    "VisitMiddleware",
    "classify",
    # flow
    "Flow",
    "Replace",
    "Delete",
    "Decision",
    "CONTINUE",
    "STEP_OVER",
    "BREAK",
    "EXIT",
    "REPLACE",
    "DELETE",
    "DELETE_BREAK",
    "DELETE_EXIT",
    # walker
    "Walker",
    "build_default_walker",
    "walk",
    "walk_async",
    # matchers / rules
    "AlwaysMatcher",
    "KindMatcher",
    "EqualsMatcher",
    "PointerMatcher",
    "RegexMatcher",
    "JmesMatcher",
    "RuleNode",
    "RuleRegistry",
    # middleware
    "LoggingMiddleware",
    # pointer
    "to_pointer",
    "resolve",
    # errors
    "VisitError",
    "InvalidRootMutation",
    "UnknownDecision",
    "MaxDepthExceeded",
    "CycleDetected",
]
