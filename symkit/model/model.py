"""
Model Instance Façade.

``Model`` ties one checkpoint together: its parameter store, its symbol
graph and its artifact directory. It is created from a ``(prefix, epoch)``
pair following the naming convention::

    <prefix>-<epoch:04d>.params     parameters
    <prefix>-symbol.json            symbol graph

State machine: ``OPEN → CLOSED`` (terminal). Tensor-bearing operations
(parameters, describe_input, cast) require ``OPEN``. Artifact access works
in both states because it only touches the filesystem.

Example:
    >>> with load_model("models/A", 122) as model:
    ...     [d.name for d in model.describe_input()]
    ...     model.list_artifacts()
    ['data']
    ('synset.txt',)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import BinaryIO, TypeVar, overload

from ..core.config import LoaderConfig
from ..core.io import load_parameters
from ..core.logger import LogStyle
from ..core.paths import LOGGER_NAME, ModelPaths
from ..exceptions import ModelClosedError, UnsupportedDataTypeError
from ..ndarray import DataDesc, DataType, NDArrayEngine, TorchEngine
from .artifacts import ArtifactManager
from .parameters import ParameterStore
from .resolver import InputResolver, describe_output
from .symbol import SymbolGraph

logger = logging.getLogger(LOGGER_NAME)

T = TypeVar("T")


class ModelState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class Model:
    """
    Loaded checkpoint: parameters, symbol graph and artifacts.

    Prefer :meth:`load` / :func:`load_model` over direct construction.

    Args:
        paths: Resolved checkpoint file locations.
        symbol: Parsed symbol graph (shared, read-only).
        parameters: Parameter store owned by this model.
        engine: Tensor engine for casting and release (TorchEngine by default).
    """

    def __init__(
        self,
        paths: ModelPaths,
        symbol: SymbolGraph,
        parameters: ParameterStore,
        engine: NDArrayEngine | None = None,
    ) -> None:
        self._paths = paths
        self._symbol = symbol
        self._engine = engine or TorchEngine()
        self._parameters = parameters
        self._resolver = InputResolver(symbol)
        self._parameters.bind(self._touch)
        self._artifacts = ArtifactManager(paths.root, paths.is_own_file)
        self._state = ModelState.OPEN

    # ── Construction ────────────────────────────────────────────────────────

    @classmethod
    def load(
        cls,
        prefix: str | Path,
        epoch: int,
        *,
        engine: NDArrayEngine | None = None,
        map_location: str = "cpu",
    ) -> "Model":
        """
        Load the checkpoint ``<prefix>-<epoch:04d>.params`` + ``<prefix>-symbol.json``.

        Args:
            prefix: Checkpoint prefix, optionally with directories.
            epoch: Epoch key of the parameter file (0..9999).
            engine: Tensor engine override.
            map_location: Device the parameter tensors are mapped to.

        Returns:
            Open model.

        Raises:
            InvalidArgumentError: Empty prefix or out-of-range epoch.
            ModelNotFoundError: Parameter or symbol file missing.
            MalformedModelError: Parameter or symbol file unparsable.
        """
        paths = ModelPaths.create(prefix, epoch)
        paths.ensure_exist()

        symbol = SymbolGraph.load(paths.symbol_file)
        entries = load_parameters(paths.params_file, map_location=map_location)

        model = cls(paths, symbol, ParameterStore(entries), engine)
        logger.info(
            f"{LogStyle.SUCCESS} Loaded model '{paths.basename}' (epoch {epoch}): "
            f"{len(entries)} parameter(s), {len(symbol.list_inputs())} symbol input(s)"
        )
        return model

    @classmethod
    def from_config(cls, cfg: LoaderConfig, engine: NDArrayEngine | None = None) -> "Model":
        """Load from a validated config, casting when ``cfg.dtype`` is set."""
        LogStyle.log_header(logger, f"MODEL {Path(cfg.prefix).name} @ {cfg.epoch}", LogStyle.LIGHT)
        model = cls.load(cfg.prefix, cfg.epoch, engine=engine, map_location=cfg.map_location)
        if cfg.dtype is None:
            return model
        try:
            return model.cast(cfg.dtype)
        finally:
            model.close()

    def _spawn(self, parameters: ParameterStore) -> "Model":
        """Same-class sibling sharing paths, symbol and engine."""
        return type(self)(self._paths, self._symbol, parameters, self._engine)

    # ── State ───────────────────────────────────────────────────────────────

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._state is ModelState.CLOSED

    def _require_open(self, operation: str) -> None:
        if self._state is ModelState.CLOSED:
            raise ModelClosedError(f"Cannot {operation}: model '{self.name}' is closed")

    def _touch(self) -> None:
        """Parameter store observer hook."""
        self._resolver.invalidate()

    # ── Identity ────────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._paths.basename

    @property
    def epoch(self) -> int:
        return self._paths.epoch

    @property
    def paths(self) -> ModelPaths:
        return self._paths

    @property
    def engine(self) -> NDArrayEngine:
        return self._engine

    # ── Parameters & Symbol ─────────────────────────────────────────────────

    @property
    def parameters(self) -> ParameterStore:
        """Live parameter store; mutating it invalidates the input descriptors."""
        self._require_open("access parameters")
        return self._parameters

    def get_parameters(self) -> ParameterStore:
        return self.parameters

    @property
    def symbol(self) -> SymbolGraph:
        return self._symbol

    def get_symbol(self) -> SymbolGraph:
        return self._symbol

    def describe_input(self) -> tuple[DataDesc, ...]:
        """
        Inputs the caller must feed: symbol inputs without a same-named parameter.

        Cached until the parameter store is mutated.
        """
        self._require_open("describe inputs")
        return self._resolver.resolve(self._parameters)

    def describe_output(self) -> tuple[DataDesc, ...]:
        return describe_output(self._symbol)

    def cast(self, data_type: DataType | str) -> "Model":
        """
        New independent model with every parameter converted to ``data_type``.

        The symbol graph is shared; the artifact catalogue is rebuilt lazily
        by the new instance. This model is left untouched.

        Raises:
            ModelClosedError: If this model is closed.
            UnsupportedDataTypeError: If the type is unknown or any parameter
                cannot be represented in it.
        """
        self._require_open("cast")
        try:
            target = DataType.from_name(data_type)
        except ValueError as e:
            raise UnsupportedDataTypeError(str(e)) from e

        casted = self._spawn(self._parameters.cast_all(target, self._engine))
        logger.info(f"Cast model '{self.name}' {LogStyle.ARROW} {target.value}")
        return casted

    # ── Artifacts ───────────────────────────────────────────────────────────

    @property
    def artifact_root(self) -> Path:
        return self._artifacts.root

    def list_artifacts(self) -> tuple[str, ...]:
        return self._artifacts.list_artifacts()

    def get_artifact_names(self) -> tuple[str, ...]:
        return self.list_artifacts()

    def artifact_path(self, name: str) -> Path:
        return self._artifacts.artifact_path(name)

    def get_artifact_as_stream(self, name: str) -> BinaryIO:
        return self._artifacts.get_artifact_as_stream(name)

    @overload
    def get_artifact(self, name: str) -> BinaryIO | None: ...

    @overload
    def get_artifact(self, name: str, transform: Callable[[BinaryIO], T]) -> T: ...

    def get_artifact(self, name, transform=None):
        """See :meth:`ArtifactManager.get_artifact`."""
        if transform is None:
            return self._artifacts.get_artifact(name)
        return self._artifacts.get_artifact(name, transform)

    # ── Lifecycle ───────────────────────────────────────────────────────────

    def close(self) -> None:
        """Release every parameter tensor; idempotent."""
        if self._state is ModelState.CLOSED:
            return
        count = len(self._parameters)
        self._parameters.release(self._engine)
        self._parameters.bind(None)
        self._state = ModelState.CLOSED
        logger.debug(f"Closed model '{self.name}', released {count} parameter(s)")

    def __enter__(self) -> "Model":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, epoch={self.epoch}, state={self._state.value})"


def load_model(
    prefix: str | Path,
    epoch: int,
    *,
    engine: NDArrayEngine | None = None,
    map_location: str = "cpu",
) -> Model:
    """Module-level shorthand for :meth:`Model.load`."""
    return Model.load(prefix, epoch, engine=engine, map_location=map_location)
