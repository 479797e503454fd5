"""
Test Suite for TorchEngine.

Tests dtype mapping, checked conversion (range and finiteness guards),
copy semantics and tensor release.
"""

from __future__ import annotations

import pytest
import torch

from symkit.exceptions import UnsupportedDataTypeError
from symkit.ndarray import DataType, NDArrayEngine, TorchEngine


# ENGINE: PROTOCOL
@pytest.mark.unit
def test_torch_engine_satisfies_protocol():
    """Test TorchEngine is recognized as an NDArrayEngine."""
    assert isinstance(TorchEngine(), NDArrayEngine)


# ENGINE: DTYPE MAPPING
@pytest.mark.unit
@pytest.mark.parametrize(
    "data_type,expected",
    [
        (DataType.FLOAT16, torch.float16),
        (DataType.FLOAT32, torch.float32),
        (DataType.FLOAT64, torch.float64),
        (DataType.UINT8, torch.uint8),
        (DataType.INT8, torch.int8),
        (DataType.INT32, torch.int32),
        (DataType.INT64, torch.int64),
    ],
)
def test_to_torch_dtype(data_type, expected):
    """Test every DataType maps to its torch dtype."""
    assert TorchEngine.to_torch_dtype(data_type) == expected


@pytest.mark.unit
def test_to_torch_dtype_accepts_names():
    """Test dtype names are resolved case-insensitively."""
    assert TorchEngine.to_torch_dtype("FLOAT64") == torch.float64


@pytest.mark.unit
def test_to_torch_dtype_unknown_name():
    """Test unknown dtype names raise UnsupportedDataTypeError."""
    with pytest.raises(UnsupportedDataTypeError):
        TorchEngine.to_torch_dtype("bfloat99")


@pytest.mark.unit
def test_data_type_reports_element_type():
    """Test data_type inspects the tensor's element type."""
    engine = TorchEngine()

    assert engine.data_type(torch.ones(2)) == DataType.FLOAT32
    assert engine.data_type(torch.ones(2, dtype=torch.int64)) == DataType.INT64


@pytest.mark.unit
def test_data_type_unsupported_tensor():
    """Test tensors without a DataType counterpart are rejected."""
    with pytest.raises(UnsupportedDataTypeError):
        TorchEngine().data_type(torch.ones(2, dtype=torch.bool))


# ENGINE: CONVERSION
@pytest.mark.unit
def test_convert_changes_dtype_and_keeps_source():
    """Test convert returns a new tensor and leaves the source untouched."""
    engine = TorchEngine()
    source = torch.tensor([1.5, 2.5], dtype=torch.float32)

    result = engine.convert(source, DataType.FLOAT64)

    assert result.dtype == torch.float64
    assert source.dtype == torch.float32
    assert torch.allclose(result, source.double())


@pytest.mark.unit
def test_convert_same_dtype_returns_copy():
    """Test converting to the current dtype still yields an independent tensor."""
    engine = TorchEngine()
    source = torch.ones(3)

    result = engine.convert(source, DataType.FLOAT32)
    result.add_(1)

    assert result is not source
    assert torch.equal(source, torch.ones(3))


@pytest.mark.unit
def test_convert_float_to_int_in_range():
    """Test in-range floats convert to integer types."""
    result = TorchEngine().convert(torch.tensor([0.0, 100.0]), DataType.UINT8)

    assert result.dtype == torch.uint8
    assert result.tolist() == [0, 100]


@pytest.mark.unit
def test_convert_rejects_out_of_range_values():
    """Test values beyond the integer range raise UnsupportedDataTypeError."""
    with pytest.raises(UnsupportedDataTypeError, match="exceed the range"):
        TorchEngine().convert(torch.tensor([-1.0, 3.0]), DataType.UINT8)

    with pytest.raises(UnsupportedDataTypeError):
        TorchEngine().convert(torch.tensor([1000], dtype=torch.int32), DataType.INT8)


@pytest.mark.unit
@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_convert_rejects_non_finite_to_int(bad):
    """Test NaN/Inf cannot be cast to integer types."""
    with pytest.raises(UnsupportedDataTypeError, match="Non-finite"):
        TorchEngine().convert(torch.tensor([1.0, bad]), DataType.INT32)


@pytest.mark.unit
def test_convert_non_finite_to_float_allowed():
    """Test NaN survives float-to-float casts."""
    result = TorchEngine().convert(torch.tensor([float("nan")]), DataType.FLOAT64)

    assert torch.isnan(result).all()


@pytest.mark.unit
@pytest.mark.parametrize(
    "source",
    [
        torch.tensor([1e10], dtype=torch.float64),
        torch.tensor([-1e5], dtype=torch.float32),
        torch.tensor([70000], dtype=torch.int32),
    ],
)
def test_convert_rejects_float_overflow(source):
    """Test finite values beyond a narrower float type's range are rejected."""
    with pytest.raises(UnsupportedDataTypeError, match="exceeds the range"):
        TorchEngine().convert(source, DataType.FLOAT16)


@pytest.mark.unit
def test_convert_narrowing_float_within_range():
    """Test narrowing float casts pass when magnitudes fit, keeping source infinities."""
    source = torch.tensor([65000.0, float("-inf"), 1.5], dtype=torch.float64)

    result = TorchEngine().convert(source, DataType.FLOAT16)

    assert result.dtype == torch.float16
    assert torch.isinf(result[1])
    assert torch.isfinite(result[0])


@pytest.mark.unit
def test_convert_rejects_complex():
    """Test complex tensors are not representable in real types."""
    with pytest.raises(UnsupportedDataTypeError, match="Complex"):
        TorchEngine().convert(torch.ones(2, dtype=torch.complex64), DataType.FLOAT32)


@pytest.mark.unit
def test_convert_empty_tensor_to_int():
    """Test empty tensors skip range checks."""
    result = TorchEngine().convert(torch.empty(0), DataType.INT8)

    assert result.dtype == torch.int8
    assert result.numel() == 0


# ENGINE: RELEASE
@pytest.mark.unit
def test_release_drops_storage():
    """Test release leaves an empty tensor of the same dtype."""
    tensor = torch.ones(4, 4, dtype=torch.float64)

    TorchEngine().release(tensor)

    assert tensor.numel() == 0
    assert tensor.dtype == torch.float64
