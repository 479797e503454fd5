"""
Filesystem Naming Authority.

Centralizes the checkpoint naming convention using a dual-layer approach:

1. **Static Layer** (constants module):
   - LOGGER_NAME: Unified logging identity
   - PARAMS_SUFFIX / SYMBOL_SUFFIX / EPOCH_DIGITS: checkpoint filename rules

2. **Dynamic Layer** (ModelPaths class):
   - Resolution of ``(prefix, epoch)`` into parameter, symbol and artifact paths
"""

from .constants import (
    EPOCH_DIGITS,
    LOGGER_NAME,
    MAX_EPOCH,
    PARAMS_SUFFIX,
    SYMBOL_SUFFIX,
    params_file_name,
    symbol_file_name,
)
from .model_paths import ModelPaths

__all__ = [
    "LOGGER_NAME",
    "PARAMS_SUFFIX",
    "SYMBOL_SUFFIX",
    "EPOCH_DIGITS",
    "MAX_EPOCH",
    "params_file_name",
    "symbol_file_name",
    "ModelPaths",
]
