"""
Tensor Element Types & Input Descriptors.

Framework-neutral vocabulary shared by the model layer and the tensor
engine. ``DataType`` names the numeric element types a parameter set can be
cast to; ``DataDesc`` describes a named model input whose shape and element
type may still be unresolved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ELEMENT TYPES
class DataType(str, Enum):
    """Numeric element types understood by symkit."""

    FLOAT16 = "float16"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    UINT8 = "uint8"
    INT8 = "int8"
    INT32 = "int32"
    INT64 = "int64"

    @property
    def is_floating(self) -> bool:
        return self in (DataType.FLOAT16, DataType.FLOAT32, DataType.FLOAT64)

    @classmethod
    def from_name(cls, name: str | DataType) -> DataType:
        """
        Resolve a case-insensitive type name (``"FLOAT32"``, ``"float32"``).

        Raises:
            ValueError: If the name does not match any member.
        """
        if isinstance(name, DataType):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown data type '{name}'. Expected one of: {valid}") from None


# INPUT DESCRIPTORS
@dataclass(frozen=True, slots=True)
class DataDesc:
    """
    Descriptor of a named tensor input.

    Attributes:
        name (str): Input name as declared by the symbol graph.
        shape (tuple[int, ...] | None): Expected shape, ``None`` while unresolved.
        data_type (DataType | None): Expected element type, ``None`` while unresolved.
    """

    name: str
    shape: tuple[int, ...] | None = None
    data_type: DataType | None = None

    @property
    def is_resolved(self) -> bool:
        return self.shape is not None and self.data_type is not None
