from __future__ import annotations

import jmespath
from jmespath import functions as _jp_funcs

from .core import NodeKind, classify


class _VisitFunctions(_jp_funcs.Functions):
    """Container for custom JMESPath functions used by ``JmesMatcher``."""

    @_jp_funcs.signature({'types': []})
    def _func_kind(self, value) -> str:
        """JMESPath function returning the node kind: sequence, mapping or scalar."""
        return classify(value).value

    @_jp_funcs.signature({'types': []})
    def _func_is_scalar(self, value) -> bool:
        """JMESPath function that is true for leaves the walker never descends into."""
        return classify(value) is NodeKind.SCALAR


USER_FUNCTIONS = _VisitFunctions()
JP_OPTIONS = jmespath.Options(custom_functions=USER_FUNCTIONS)
