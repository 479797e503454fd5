"""
Input Descriptor Resolution.

Determines which symbol-graph inputs the caller must supply at inference
time: every input whose name is not covered by a parameter of the same name,
in the graph's declared order.

``describe_input`` is the pure set-difference; ``InputResolver`` wraps it
with a per-model cache that the parameter store invalidates on mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import Enum, auto

from ..core.paths import LOGGER_NAME
from ..ndarray import DataDesc
from .parameters import ParameterStore
from .symbol import SymbolGraph

logger = logging.getLogger(LOGGER_NAME)


def describe_input(
    symbol_inputs: Sequence[str], param_names: Iterable[str]
) -> tuple[DataDesc, ...]:
    """
    Symbol inputs not explained by a parameter, as unresolved descriptors.

    Args:
        symbol_inputs: All graph input names, in declared order.
        param_names: Names currently held by the parameter store.

    Returns:
        One ``DataDesc(name)`` per uncovered input; shape and type unset.

    Example:
        >>> [d.name for d in describe_input(["a", "b", "c"], {"b"})]
        ['a', 'c']
    """
    covered = frozenset(param_names)
    return tuple(DataDesc(name) for name in symbol_inputs if name not in covered)


def describe_output(symbol: SymbolGraph) -> tuple[DataDesc, ...]:
    """One unresolved descriptor per symbol head."""
    return tuple(DataDesc(name) for name in symbol.list_outputs())


class _CacheState(Enum):
    ABSENT = auto()
    PRESENT = auto()


class InputResolver:
    """
    Cached input description for one symbol graph.

    The owning model binds :meth:`invalidate` as the parameter store's
    observer; the cache is rebuilt on the first ``resolve`` after a mutation.
    """

    def __init__(self, symbol: SymbolGraph) -> None:
        self._symbol = symbol
        self._state = _CacheState.ABSENT
        self._descs: tuple[DataDesc, ...] = ()

    @property
    def is_cached(self) -> bool:
        return self._state is _CacheState.PRESENT

    def invalidate(self) -> None:
        if self._state is _CacheState.PRESENT:
            logger.debug("Input descriptor cache invalidated")
        self._state = _CacheState.ABSENT
        self._descs = ()

    def resolve(self, store: ParameterStore) -> tuple[DataDesc, ...]:
        """Return the cached descriptors, computing them against ``store`` if absent."""
        if self._state is _CacheState.ABSENT:
            self._descs = describe_input(self._symbol.list_inputs(), store.names())
            self._state = _CacheState.PRESENT
        return self._descs
