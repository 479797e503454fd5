"""
symkit: checkpoint-backed model instances.

Top-level convenience API re-exporting the most commonly used components,
so users and the ``symkit`` CLI can write:

    from symkit import load_model, DataType
"""

from importlib.metadata import version as _pkg_version

__version__ = _pkg_version("symkit")

from .core import LoaderConfig, Logger
from .exceptions import (
    ArtifactIOError,
    ArtifactNotFoundError,
    InvalidArgumentError,
    MalformedModelError,
    ModelClosedError,
    ModelNotFoundError,
    ParameterIndexError,
    SymkitError,
    UnsupportedDataTypeError,
)
from .model import ArtifactManager, Model, ModelState, ParameterStore, SymbolGraph, load_model
from .ndarray import DataDesc, DataType, NDArrayEngine, TorchEngine

__all__ = [
    "__version__",
    # Model
    "Model",
    "ModelState",
    "load_model",
    "ParameterStore",
    "SymbolGraph",
    "ArtifactManager",
    # Tensors
    "DataType",
    "DataDesc",
    "NDArrayEngine",
    "TorchEngine",
    # Core
    "LoaderConfig",
    "Logger",
    # Errors
    "SymkitError",
    "ModelNotFoundError",
    "ArtifactNotFoundError",
    "InvalidArgumentError",
    "MalformedModelError",
    "UnsupportedDataTypeError",
    "ModelClosedError",
    "ArtifactIOError",
    "ParameterIndexError",
]
