"""
Model Artifact Discovery & Access.

Artifacts are the auxiliary files stored next to a checkpoint: label maps,
vocabularies, preprocessing recipes. Every regular file below the checkpoint
directory (recursively) is an artifact, except the checkpoint's own
parameter files (any epoch) and symbol file. Artifacts are addressed by their
root-relative path with ``/`` separators on every platform.

The catalogue is scanned once, on first access, and kept for the lifetime
of the manager: files created afterwards only show up for a new manager.

Key Features:
    * Lazy, memoized recursive scan with sorted results
    * Strict (``get_artifact_as_stream``) and soft (``get_artifact``) lookups
    * Transform access with guaranteed stream release on every exit path
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from enum import Enum, auto
from pathlib import Path
from typing import BinaryIO, TypeVar, overload

from ..core.paths import LOGGER_NAME
from ..exceptions import ArtifactIOError, ArtifactNotFoundError, InvalidArgumentError

logger = logging.getLogger(LOGGER_NAME)

T = TypeVar("T")


class _CatalogueState(Enum):
    ABSENT = auto()
    PRESENT = auto()


class ArtifactManager:
    """
    Catalogue and accessors for the artifacts of one checkpoint directory.

    Args:
        root: Checkpoint directory (artifact root).
        excluded: Root-relative paths never reported as artifacts, or a
            predicate over root-relative paths.

    Example:
        >>> manager = ArtifactManager(Path("models"), {"A-0122.params", "A-symbol.json"})
        >>> manager.list_artifacts()
        ('inner/innerFiles', 'synset.txt')
        >>> labels = manager.get_artifact("synset.txt", lambda s: s.read().decode().splitlines())
    """

    def __init__(
        self, root: Path, excluded: Iterable[str] | Callable[[str], bool] = ()
    ) -> None:
        self._root = Path(root)
        if callable(excluded):
            self._is_excluded = excluded
        else:
            self._is_excluded = frozenset(excluded).__contains__
        self._state = _CatalogueState.ABSENT
        self._names: tuple[str, ...] = ()

    @property
    def root(self) -> Path:
        return self._root

    # ── Catalogue ───────────────────────────────────────────────────────────

    def list_artifacts(self) -> tuple[str, ...]:
        """
        Sorted root-relative artifact paths, scanned on first call only.

        Raises:
            ArtifactIOError: If the artifact root cannot be read.
        """
        if self._state is _CatalogueState.ABSENT:
            self._names = self._scan()
            self._state = _CatalogueState.PRESENT
        return self._names

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self.list_artifacts()

    def _scan(self) -> tuple[str, ...]:
        """Walk the root recursively and collect artifact paths."""
        if not self._root.is_dir():
            raise ArtifactIOError(f"Artifact directory not readable: {self._root}")

        def _raise(err: OSError) -> None:
            logger.error(f"Artifact scan failed under {self._root}: {err}")
            raise ArtifactIOError(f"Cannot read artifact directory: {err.filename}") from err

        found = []
        for dirpath, _, filenames in os.walk(self._root, onerror=_raise):
            for filename in filenames:
                full = Path(dirpath) / filename
                if not full.is_file():
                    continue
                rel = full.relative_to(self._root).as_posix()
                if not self._is_excluded(rel):
                    found.append(rel)

        names = tuple(sorted(found))
        logger.debug(f"Discovered {len(names)} artifact(s) under {self._root}")
        return names

    # ── Access ──────────────────────────────────────────────────────────────

    def artifact_path(self, name: str) -> Path:
        """
        Filesystem path of a catalogued artifact.

        Raises:
            InvalidArgumentError: If ``name`` is None or empty.
            ArtifactNotFoundError: If ``name`` is not in the catalogue.
        """
        _check_name(name)
        if name not in self.list_artifacts():
            raise ArtifactNotFoundError(f"Artifact '{name}' not found under {self._root}")
        return self._root.joinpath(*name.split("/"))

    def get_artifact_as_stream(self, name: str) -> BinaryIO:
        """
        Open an artifact as an unbuffered binary stream.

        The caller owns the stream and must close it (``with`` block).

        Raises:
            InvalidArgumentError: If ``name`` is None or empty.
            ArtifactNotFoundError: If ``name`` is not in the catalogue.
        """
        path = self.artifact_path(name)
        try:
            return self._open(path)
        except FileNotFoundError as e:
            raise ArtifactNotFoundError(f"Artifact '{name}' disappeared from disk") from e

    @overload
    def get_artifact(self, name: str) -> BinaryIO | None: ...

    @overload
    def get_artifact(self, name: str, transform: Callable[[BinaryIO], T]) -> T: ...

    def get_artifact(self, name, transform=None):
        """
        Soft artifact lookup, or scoped transform access.

        Without ``transform``: returns an open stream, or ``None`` when the
        artifact is not catalogued or has since been removed from disk.

        With ``transform``: opens the stream, returns ``transform(stream)``
        and closes the stream on every exit path. Exceptions raised by
        ``transform`` propagate unchanged.

        Raises:
            InvalidArgumentError: If ``name`` is None or empty.
            ArtifactNotFoundError: Transform form only, when ``name`` is not
                in the catalogue.
        """
        if transform is None:
            _check_name(name)
            if name not in self.list_artifacts():
                return None
            try:
                return self.get_artifact_as_stream(name)
            except ArtifactNotFoundError:
                return None

        with self.get_artifact_as_stream(name) as stream:
            return transform(stream)

    def _open(self, path: Path) -> BinaryIO:
        # buffering=0: raw FileIO, nothing is read until the caller reads
        return open(path, "rb", buffering=0)


def _check_name(name: object) -> None:
    if name is None or not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError(f"Artifact name must be a non-empty string, got {name!r}")
