"""
Tensor Engine Capability.

The model layer never manipulates tensors directly: it goes through an
``NDArrayEngine`` for element-type inspection, conversion and release.
``TorchEngine`` is the default implementation backed by PyTorch.

Conversion is checked: a value that the target element type cannot hold
(NaN/Inf into an integer type, magnitudes beyond the integer range) raises
``UnsupportedDataTypeError`` instead of silently wrapping or truncating.
"""

from __future__ import annotations

from typing import Final, Protocol, runtime_checkable

import torch

from ..exceptions import UnsupportedDataTypeError
from .types import DataType

# DTYPE MAPPING
_TO_TORCH: Final[dict[DataType, torch.dtype]] = {
    DataType.FLOAT16: torch.float16,
    DataType.FLOAT32: torch.float32,
    DataType.FLOAT64: torch.float64,
    DataType.UINT8: torch.uint8,
    DataType.INT8: torch.int8,
    DataType.INT32: torch.int32,
    DataType.INT64: torch.int64,
}
_FROM_TORCH: Final[dict[torch.dtype, DataType]] = {v: k for k, v in _TO_TORCH.items()}


# PROTOCOL
@runtime_checkable
class NDArrayEngine(Protocol):
    """Capability consumed by the parameter store and model façade."""

    def convert(self, tensor: torch.Tensor, data_type: DataType) -> torch.Tensor:
        """Return a new tensor holding ``tensor`` converted to ``data_type``."""
        ...  # pragma: no cover

    def data_type(self, tensor: torch.Tensor) -> DataType:
        """Report the element type of ``tensor``."""
        ...  # pragma: no cover

    def release(self, tensor: torch.Tensor) -> None:
        """Free the resources held by ``tensor``."""
        ...  # pragma: no cover


# TORCH IMPLEMENTATION
class TorchEngine:
    """
    ``NDArrayEngine`` implementation over ``torch.Tensor``.

    Example:
        >>> engine = TorchEngine()
        >>> t = engine.convert(torch.ones(2), DataType.FLOAT64)
        >>> engine.data_type(t)
        <DataType.FLOAT64: 'float64'>
    """

    @staticmethod
    def to_torch_dtype(data_type: DataType | str) -> torch.dtype:
        """
        Map a ``DataType`` (or its name) onto the torch dtype.

        Raises:
            UnsupportedDataTypeError: If the type has no torch counterpart.
        """
        try:
            return _TO_TORCH[DataType.from_name(data_type)]
        except (KeyError, ValueError) as e:
            raise UnsupportedDataTypeError(f"No tensor element type for '{data_type}'") from e

    def data_type(self, tensor: torch.Tensor) -> DataType:
        try:
            return _FROM_TORCH[tensor.dtype]
        except KeyError:
            raise UnsupportedDataTypeError(
                f"Tensor element type {tensor.dtype} is not supported"
            ) from None

    def convert(self, tensor: torch.Tensor, data_type: DataType) -> torch.Tensor:
        """
        Convert ``tensor`` to ``data_type``, always returning a new tensor.

        Args:
            tensor: Source tensor (left untouched).
            data_type: Target element type.

        Returns:
            Independent tensor with the target element type.

        Raises:
            UnsupportedDataTypeError: If the target type is unknown or cannot
                represent the tensor's values.
        """
        target = self.to_torch_dtype(data_type)
        if tensor.is_complex():
            raise UnsupportedDataTypeError(
                f"Complex tensor ({tensor.dtype}) cannot be cast to {target}"
            )

        if tensor.numel() > 0:
            if target.is_floating_point:
                self._check_float_range(tensor, target)
            else:
                self._check_integer_range(tensor, target)

        # clone() guarantees a new tensor even when the dtype already matches
        return tensor.detach().to(dtype=target).clone()

    def release(self, tensor: torch.Tensor) -> None:
        # Detach the buffer; memory returns to the allocator once no view holds it
        if tensor.numel() > 0:
            tensor.data = torch.empty(0, dtype=tensor.dtype, device=tensor.device)

    @staticmethod
    def _check_integer_range(tensor: torch.Tensor, target: torch.dtype) -> None:
        """Reject values an integer ``target`` cannot hold."""
        if tensor.is_floating_point() and not bool(torch.isfinite(tensor).all()):
            raise UnsupportedDataTypeError(
                f"Non-finite values cannot be represented as {target}"
            )

        info = torch.iinfo(target)
        if tensor.dtype == torch.bool:
            return
        lo = tensor.min().item()
        hi = tensor.max().item()
        if lo < info.min or hi > info.max:
            raise UnsupportedDataTypeError(
                f"Values in [{lo}, {hi}] exceed the range of {target} [{info.min}, {info.max}]"
            )

    @staticmethod
    def _check_float_range(tensor: torch.Tensor, target: torch.dtype) -> None:
        """Reject finite values whose magnitude overflows a floating ``target``."""
        if tensor.dtype == torch.bool:
            return
        values = tensor.detach().to(torch.float64)
        finite = values[torch.isfinite(values)]
        if finite.numel() == 0:
            return
        peak = finite.abs().max().item()
        info = torch.finfo(target)
        if peak > info.max:
            raise UnsupportedDataTypeError(
                f"Magnitude {peak} exceeds the range of {target} (max {info.max})"
            )
