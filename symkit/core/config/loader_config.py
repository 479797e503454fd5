"""
Model Loading Configuration Schema.

Pydantic v2 schema describing which checkpoint to load, where to map its
tensors and whether to cast the parameter set right after loading. Recipes
can be written as YAML and loaded through ``LoaderConfig.from_yaml``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...ndarray.types import DataType
from ..io import load_config_from_yaml
from .types import Epoch, LogLevel, MapLocation, NonEmptyStr, ValidatedPath


# LOADER CONFIGURATION
class LoaderConfig(BaseModel):
    """
    Checkpoint loading configuration.

    Attributes:
        prefix: Checkpoint prefix, optionally with directories (``"models/A"``).
        epoch: Epoch encoded in the parameter filename (0..9999).
        dtype: Optional element type to cast every parameter to after loading.
        map_location: Device the checkpoint tensors are mapped to.
        log_level: Logging verbosity for the session.
        log_dir: Directory for rotating log files (console-only when unset).

    Example:
        >>> cfg = LoaderConfig(prefix="models/A", epoch=122, dtype="float64")
        >>> cfg.dtype
        <DataType.FLOAT64: 'float64'>
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # ==================== Checkpoint ====================
    prefix: NonEmptyStr = Field(description="Checkpoint prefix, e.g. 'models/resnet'")

    epoch: Epoch = Field(default=0, description="Epoch key of the parameter file")

    # ==================== Tensors ====================
    dtype: DataType | None = Field(
        default=None, description="Cast all parameters to this element type after loading"
    )

    map_location: MapLocation = Field(
        default="cpu", description="Device that checkpoint tensors are mapped to"
    )

    # ==================== Telemetry ====================
    log_level: LogLevel = Field(default="INFO", description="Logging verbosity")

    log_dir: ValidatedPath | None = Field(
        default=None, description="Directory for log files (console-only if unset)"
    )

    @field_validator("dtype", mode="before")
    @classmethod
    def _parse_dtype(cls, v: object) -> object:
        """Accept case-insensitive type names (``FLOAT32``) from recipes."""
        if isinstance(v, str):
            return DataType.from_name(v)
        return v

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "LoaderConfig":
        """
        Build a config from a YAML recipe.

        The recipe may hold the fields at top level or under a ``model`` key.
        """
        raw = load_config_from_yaml(yaml_path) or {}
        section = raw.get("model", raw) if isinstance(raw, dict) else raw
        return cls.model_validate(section)
