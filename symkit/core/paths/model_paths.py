"""
Checkpoint Path Resolution.

Provides the ModelPaths class, which turns a ``(prefix, epoch)`` pair into
the concrete parameter file, symbol file and artifact root of a checkpoint.
The prefix may carry directories (``"build/models/resnet"``); its last
segment is the checkpoint basename.

Example:
    >>> from symkit.core.paths import ModelPaths
    >>> paths = ModelPaths.create("build/models/A", 122)
    >>> paths.params_file.name
    'A-0122.params'
    >>> paths.symbol_file.name
    'A-symbol.json'
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ...exceptions import InvalidArgumentError, ModelNotFoundError
from .constants import (
    EPOCH_DIGITS,
    MAX_EPOCH,
    PARAMS_SUFFIX,
    params_file_name,
    symbol_file_name,
)


# CHECKPOINT PATHS
class ModelPaths(BaseModel):
    """
    Immutable container for the files that make up one checkpoint.

    Attributes:
        basename: Last segment of the prefix (``"A"`` for ``"dir/A"``).
        epoch: Checkpoint epoch, ``0..9999``.
        root: Directory holding both files; also the artifact root.
        params_file: ``<root>/<basename>-<epoch:04d>.params``.
        symbol_file: ``<root>/<basename>-symbol.json``.
    """

    model_config = ConfigDict(frozen=True)

    basename: str
    epoch: int
    root: Path
    params_file: Path
    symbol_file: Path

    @classmethod
    def create(cls, prefix: str | Path, epoch: int) -> "ModelPaths":
        """
        Resolve checkpoint paths from a prefix and epoch without touching disk.

        Args:
            prefix: Path prefix of the checkpoint, optionally with directories.
            epoch: Epoch number encoded in the parameter filename.

        Returns:
            ModelPaths with absolute paths.

        Raises:
            InvalidArgumentError: If prefix is empty/None or epoch is outside
                ``0..9999``.
        """
        if prefix is None or not str(prefix).strip():
            raise InvalidArgumentError("Model prefix must be a non-empty string")
        if isinstance(epoch, bool) or not isinstance(epoch, int):
            raise InvalidArgumentError(f"Expected integer epoch but got {type(epoch).__name__}")
        if not 0 <= epoch <= MAX_EPOCH:
            raise InvalidArgumentError(f"Epoch {epoch} outside supported range 0..{MAX_EPOCH}")

        prefix_path = Path(prefix).expanduser()
        basename = prefix_path.name
        if not basename:
            raise InvalidArgumentError(f"Model prefix '{prefix}' has no basename")

        root = prefix_path.parent.resolve()
        return cls(
            basename=basename,
            epoch=epoch,
            root=root,
            params_file=root / params_file_name(basename, epoch),
            symbol_file=root / symbol_file_name(basename),
        )

    def ensure_exist(self) -> None:
        """
        Verify both checkpoint files are present.

        Raises:
            ModelNotFoundError: Naming the first missing file.
        """
        for path in (self.params_file, self.symbol_file):
            if not path.is_file():
                raise ModelNotFoundError(f"Model file not found at: {path}")

    def is_own_file(self, name: str) -> bool:
        """
        True for root-relative names belonging to this checkpoint family.

        Covers the symbol file and the parameter file of every epoch saved
        under the same basename (``A-0001.params``, ``A-0122.params``, ...).
        """
        if name == self.symbol_file.name:
            return True
        pattern = rf"{re.escape(self.basename)}-\d{{{EPOCH_DIGITS}}}{re.escape(PARAMS_SUFFIX)}"
        return re.fullmatch(pattern, name) is not None
