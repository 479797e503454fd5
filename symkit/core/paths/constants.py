"""
Project-wide Naming Constants.

Single source of truth for the on-disk checkpoint layout and the shared
logger identity.

Module Attributes:
    LOGGER_NAME: Global logger identity used by all modules for log synchronization.
    PARAMS_SUFFIX: File extension of serialized parameter checkpoints.
    SYMBOL_SUFFIX: Filename tail of the symbol-graph definition.
    EPOCH_DIGITS: Zero-padded width of the epoch key in parameter filenames.
    MAX_EPOCH: Largest epoch expressible with EPOCH_DIGITS digits.
"""

from typing import Final

# GLOBAL CONSTANTS
# Global logger identity used by all modules to ensure log synchronization
LOGGER_NAME: Final[str] = "symkit"

# CHECKPOINT LAYOUT
# <prefix>-<epoch:04d>.params
PARAMS_SUFFIX: Final[str] = ".params"

# <prefix>-symbol.json
SYMBOL_SUFFIX: Final[str] = "-symbol.json"

EPOCH_DIGITS: Final[int] = 4
MAX_EPOCH: Final[int] = 10**EPOCH_DIGITS - 1


def params_file_name(basename: str, epoch: int) -> str:
    """
    Build the versioned parameter filename.

    Example:
        >>> params_file_name("A", 122)
        'A-0122.params'
    """
    return f"{basename}-{epoch:0{EPOCH_DIGITS}d}{PARAMS_SUFFIX}"


def symbol_file_name(basename: str) -> str:
    """
    Build the symbol definition filename.

    Example:
        >>> symbol_file_name("A")
        'A-symbol.json'
    """
    return f"{basename}{SYMBOL_SUFFIX}"
