"""
Shared fixtures for the symkit test suite.

Checkpoints are written for real (torch-serialized parameters, JSON symbol)
under ``tmp_path`` so every test exercises the actual loading path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest
import torch

from symkit.core import LOGGER_NAME, Logger
from symkit.core.io import save_parameters
from symkit.core.paths import params_file_name, symbol_file_name
from symkit.model import SymbolGraph

# Symbol inputs a..e; the checkpoint provides an unnamed leading entry plus b and c.
SYMBOL_INPUTS = ("a", "b", "c", "d", "e")


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: tests touching several components")


@pytest.fixture(autouse=True)
def _reset_symkit_logger():
    """Drop handlers bound to a test's (possibly closed) stdout after each test."""
    yield
    log = logging.getLogger(LOGGER_NAME)
    for handler in log.handlers[:]:
        handler.close()
        log.removeHandler(handler)
    Logger._configured_names.clear()


def default_entries() -> list[tuple[str | None, torch.Tensor]]:
    return [
        (None, torch.arange(6, dtype=torch.float32).reshape(2, 3)),
        ("arg:b", torch.ones(3, dtype=torch.float32)),
        ("arg:c", torch.zeros(3, dtype=torch.float32)),
    ]


@pytest.fixture
def write_checkpoint(tmp_path) -> Callable[..., Path]:
    """
    Factory writing ``<dir>/<basename>-<epoch>.params`` and ``-symbol.json``.

    Returns the prefix path (``<dir>/<basename>``) to pass to ``load_model``.
    """

    def _write(
        basename: str = "A",
        epoch: int = 122,
        entries=None,
        inputs=SYMBOL_INPUTS,
        directory: Path | None = None,
    ) -> Path:
        root = directory or tmp_path / "model"
        root.mkdir(parents=True, exist_ok=True)
        save_parameters(
            root / params_file_name(basename, epoch),
            default_entries() if entries is None else entries,
        )
        SymbolGraph.from_names(inputs).save(root / symbol_file_name(basename))
        return root / basename

    return _write


@pytest.fixture
def prefix(write_checkpoint) -> Path:
    """Prefix of the default ``A``/122 checkpoint."""
    return write_checkpoint()
