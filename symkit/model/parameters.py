"""
Ordered Parameter Storage.

``ParameterStore`` is the in-memory parameter set of a model: an ordered list
of ``(name, tensor)`` pairs. Order is insertion order and index 0 is the
first declared parameter. Names are not enforced unique and tensors may be
``None`` (placeholder entries).

Every mutation (``add``, ``remove``, ``release``) calls the store's observer
hook so dependents (the model's input-descriptor cache) can invalidate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Optional

import torch

from ..core.paths import LOGGER_NAME
from ..exceptions import ParameterIndexError
from ..ndarray import DataType, NDArrayEngine

logger = logging.getLogger(LOGGER_NAME)

Parameter = tuple[str, Optional[torch.Tensor]]


class ParameterStore:
    """
    Ordered ``name -> tensor`` list with mutation notification.

    Args:
        entries: Initial ``(name, tensor)`` pairs, kept in the given order.
        observer: Zero-argument callback invoked after every mutation.

    Example:
        >>> store = ParameterStore([("w", torch.ones(2))])
        >>> store.add("b", torch.zeros(1))
        >>> store.keys()
        ['w', 'b']
    """

    def __init__(
        self,
        entries: Iterable[Parameter] = (),
        observer: Callable[[], None] | None = None,
    ) -> None:
        self._entries: list[Parameter] = [(str(name), tensor) for name, tensor in entries]
        self._observer = observer

    # ── Observation ─────────────────────────────────────────────────────────

    def bind(self, observer: Callable[[], None] | None) -> None:
        """Register (or clear with ``None``) the mutation callback."""
        self._observer = observer

    def _touch(self) -> None:
        if self._observer is not None:
            self._observer()

    # ── Read access ─────────────────────────────────────────────────────────

    def get(self, index: int) -> Parameter:
        """
        Positional access.

        Raises:
            ParameterIndexError: If ``index`` is negative or ``>= len(self)``.
        """
        if not 0 <= index < len(self._entries):
            raise ParameterIndexError(
                f"Parameter index {index} out of range for store of size {len(self._entries)}"
            )
        return self._entries[index]

    __getitem__ = get

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(list(self._entries))

    def __contains__(self, name: object) -> bool:
        return any(n == name for n, _ in self._entries)

    def keys(self) -> list[str]:
        return [name for name, _ in self._entries]

    def values(self) -> list[torch.Tensor | None]:
        return [tensor for _, tensor in self._entries]

    def items(self) -> list[Parameter]:
        return list(self._entries)

    def names(self) -> frozenset[str]:
        """Set of parameter names, used for input reconciliation."""
        return frozenset(self.keys())

    # ── Mutation ────────────────────────────────────────────────────────────

    def add(self, name: str, tensor: torch.Tensor | None) -> None:
        """Append an entry at the end, even when ``name`` already exists."""
        self._entries.append((name, tensor))
        self._touch()

    def remove(self, name: str) -> bool:
        """
        Remove the first entry called ``name``.

        Returns:
            True if an entry was removed.
        """
        for idx, (entry_name, _) in enumerate(self._entries):
            if entry_name == name:
                del self._entries[idx]
                self._touch()
                return True
        return False

    def release(self, engine: NDArrayEngine) -> None:
        """Free every tensor through ``engine`` and empty the store."""
        for _, tensor in self._entries:
            if tensor is not None:
                engine.release(tensor)
        self._entries.clear()
        self._touch()

    # ── Conversion ──────────────────────────────────────────────────────────

    def cast_all(self, data_type: DataType, engine: NDArrayEngine) -> "ParameterStore":
        """
        Build a new store with every tensor converted to ``data_type``.

        All conversions are staged before the new store is assembled, so a
        failure leaves nothing half-built; this store is never modified.

        Raises:
            UnsupportedDataTypeError: If any tensor cannot be represented.
        """
        staged = [
            (name, None if tensor is None else engine.convert(tensor, data_type))
            for name, tensor in self._entries
        ]
        logger.debug(f"Cast {len(staged)} parameter(s) to {DataType.from_name(data_type).value}")
        return ParameterStore(staged)

    # ── Comparison ──────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterStore):
            return NotImplemented
        if self.keys() != other.keys():
            return False
        return all(_same_tensor(a, b) for a, b in zip(self.values(), other.values()))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ParameterStore({self.keys()!r})"


def _same_tensor(a: torch.Tensor | None, b: torch.Tensor | None) -> bool:
    if a is None or b is None:
        return a is b
    return a.dtype == b.dtype and a.shape == b.shape and bool(torch.equal(a, b))
