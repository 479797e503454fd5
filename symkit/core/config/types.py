"""
Semantic type Definitions & Validation Primitives.

Annotated pydantic types enforcing checkpoint-level constraints (epoch range,
non-empty prefixes, log levels, path sanitization) at schema construction,
before anything touches the filesystem.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import AfterValidator, Field, PlainSerializer

from ..paths import MAX_EPOCH


# VALIDATORS
def _sanitize_path(v: str | Path) -> Path:
    """
    Resolve path to absolute form without disk side-effects.

    Expands user home directory (~) and converts to absolute path.
    """
    return Path(v).expanduser().resolve()


# GENERIC PRIMITIVES
NonEmptyStr = Annotated[str, Field(min_length=1)]

# FILESYSTEM
ValidatedPath = Annotated[
    Path,
    AfterValidator(_sanitize_path),
    PlainSerializer(lambda v: str(v), when_used="json", return_type=str),
]

# CHECKPOINT
Epoch = Annotated[int, Field(ge=0, le=MAX_EPOCH)]
MapLocation = Annotated[str, Field(pattern=r"^(cpu|cuda(:\d+)?|mps|meta)$")]

# LOGGING
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
