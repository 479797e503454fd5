"""
Core Utilities Package

Exposes the shared infrastructure for the model layer and the CLI:
configuration schemas, checkpoint/YAML I/O, logging and naming constants.
"""

# Configuration
from .config import LoaderConfig

# Input/Output Utilities
from .io import (
    load_config_from_yaml,
    load_parameters,
    save_config_as_yaml,
    save_parameters,
)

# Logging
from .logger import Logger, LogStyle

# Paths & Constants
from .paths import LOGGER_NAME, ModelPaths, params_file_name, symbol_file_name

__all__ = [
    # Configuration
    "LoaderConfig",
    # I/O
    "load_parameters",
    "save_parameters",
    "load_config_from_yaml",
    "save_config_as_yaml",
    # Logging
    "Logger",
    "LogStyle",
    # Paths
    "LOGGER_NAME",
    "ModelPaths",
    "params_file_name",
    "symbol_file_name",
]
