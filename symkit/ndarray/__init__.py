"""
Tensor vocabulary and engine capability.

- DataType / DataDesc: element types and input descriptors.
- NDArrayEngine: protocol the model layer consumes.
- TorchEngine: default PyTorch-backed engine.
"""

from .engine import NDArrayEngine, TorchEngine
from .types import DataDesc, DataType

__all__ = [
    "DataType",
    "DataDesc",
    "NDArrayEngine",
    "TorchEngine",
]
