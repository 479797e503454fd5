"""
Input/Output & Persistence Utilities.

Manages the filesystem side of checkpoints: parameter files (torch
serialized) and YAML configuration recipes.
"""

#                                Exposed Interface                            #
# 1. Parameter Checkpoints (from .checkpoints)
from .checkpoints import load_parameters, save_parameters

# 2. Configuration & Serialization (from .serialization)
from .serialization import load_config_from_yaml, save_config_as_yaml

#                                     Exports                                 #
__all__ = [
    # Checkpoints
    "load_parameters",
    "save_parameters",
    # Serialization
    "save_config_as_yaml",
    "load_config_from_yaml",
]
