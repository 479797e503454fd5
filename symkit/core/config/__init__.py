"""
Configuration Package Initialization.

Flat public API for configuration schemas and semantic types.

Example:
    >>> from symkit.core.config import LoaderConfig
    >>> cfg = LoaderConfig.from_yaml(Path("recipes/resnet.yaml"))
"""

from .loader_config import LoaderConfig
from .types import Epoch, LogLevel, MapLocation, NonEmptyStr, ValidatedPath

__all__ = [
    "LoaderConfig",
    "Epoch",
    "LogLevel",
    "MapLocation",
    "NonEmptyStr",
    "ValidatedPath",
]
