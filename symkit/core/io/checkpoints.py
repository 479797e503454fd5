"""
Parameter Checkpoint Reading & Writing.

A ``.params`` checkpoint is a torch-serialized payload holding either an
ordered ``name -> tensor`` mapping or a plain sequence of tensors. Loading
uses ``weights_only=True`` so a malicious checkpoint cannot execute code.

Entry naming rules applied on load:
    * ``arg:`` / ``aux:`` type prefixes are stripped (``arg:fc_weight`` → ``fc_weight``)
    * unnamed entries (empty key, or sequence payloads) take the checkpoint's
      filename, e.g. ``A-0122.params``
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Final

import torch

from ...exceptions import MalformedModelError, ModelNotFoundError
from ..paths import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

_TYPE_PREFIXES: Final[tuple[str, ...]] = ("arg:", "aux:")


# LOADING
def load_parameters(
    path: Path, map_location: str | torch.device = "cpu"
) -> list[tuple[str, torch.Tensor]]:
    """
    Read a parameter checkpoint into an ordered list of named tensors.

    Args:
        path: Filesystem path to the ``.params`` file.
        map_location: Device the tensors are mapped to.

    Returns:
        ``(name, tensor)`` pairs in checkpoint order.

    Raises:
        ModelNotFoundError: If the file does not exist.
        MalformedModelError: If the file cannot be deserialized or holds
            anything other than tensors.
    """
    if not path.is_file():
        raise ModelNotFoundError(f"Parameter checkpoint not found at: {path}")

    try:
        payload = torch.load(path, map_location=map_location, weights_only=True)
    except Exception as e:
        logger.error(f"Failed to deserialize parameters from {path.name}: {e}")
        raise MalformedModelError(f"Parameter file '{path.name}' is not a valid checkpoint") from e

    if isinstance(payload, Mapping):
        raw_entries = list(payload.items())
    elif isinstance(payload, (list, tuple)):
        raw_entries = [("", value) for value in payload]
    else:
        raise MalformedModelError(
            f"Parameter file '{path.name}' holds {type(payload).__name__}, "
            "expected a mapping or sequence of tensors"
        )

    entries: list[tuple[str, torch.Tensor]] = []
    for key, value in raw_entries:
        if not isinstance(value, torch.Tensor):
            raise MalformedModelError(
                f"Entry '{key}' in '{path.name}' is {type(value).__name__}, not a tensor"
            )
        entries.append((_entry_name(key, path.name), value))

    logger.debug(f"Loaded {len(entries)} parameter(s) from {path.name}")
    return entries


def _entry_name(key: object, file_name: str) -> str:
    """Normalize a checkpoint key into a parameter name."""
    name = "" if key is None else str(key)
    for type_prefix in _TYPE_PREFIXES:
        if name.startswith(type_prefix):
            name = name[len(type_prefix) :]
            break
    return name or file_name


# SAVING
def save_parameters(
    path: Path,
    entries: Mapping[str, torch.Tensor] | Iterable[tuple[str | None, torch.Tensor]],
) -> Path:
    """
    Persist named tensors as a ``.params`` checkpoint.

    ``None`` or empty names are stored unnamed and therefore resolve to the
    file's own name when loaded back.

    Returns:
        Path: The written checkpoint path.
    """
    items = entries.items() if isinstance(entries, Mapping) else entries
    payload: dict[str, torch.Tensor] = {}
    for name, tensor in items:
        key = name or ""
        if key in payload:
            raise ValueError(f"Duplicate parameter name '{key or '<unnamed>'}' cannot be saved")
        payload[key] = tensor

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        torch.save(payload, f)
        f.flush()
        os.fsync(f.fileno())

    logger.debug(f"Saved {len(payload)} parameter(s) → {path.name}")
    return path
