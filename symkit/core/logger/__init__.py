"""
Logging Package.

- Logger: Static utility for stream and file logging initialization.
- LogStyle: Unified logging style constants.
"""

from .logger import ColorFormatter, Logger
from .styles import LogStyle

__all__ = [
    "Logger",
    "LogStyle",
    "ColorFormatter",
]
