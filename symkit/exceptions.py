"""
symkit Exception Hierarchy.

SymkitError (base, Exception)
├── ModelNotFoundError(SymkitError, FileNotFoundError)    ← missing .params / symbol file
├── ArtifactNotFoundError(SymkitError, KeyError)           ← strict artifact lookup miss
├── InvalidArgumentError(SymkitError, ValueError)          ← null/empty identifiers
├── MalformedModelError(SymkitError, ValueError)           ← unparsable checkpoint/symbol
├── UnsupportedDataTypeError(SymkitError, TypeError)       ← cast target not representable
├── ModelClosedError(SymkitError, RuntimeError)            ← tensor access after close()
├── ArtifactIOError(SymkitError, OSError)                  ← unreadable artifact directory
└── ParameterIndexError(SymkitError, IndexError)           ← positional access out of range

Every class multi-inherits from the closest builtin so existing
``except ValueError`` / ``except FileNotFoundError`` blocks keep working.
"""


class SymkitError(Exception):
    """Base exception for all symkit errors."""


class ModelNotFoundError(SymkitError, FileNotFoundError):
    """A required parameter or symbol file does not exist."""


class ArtifactNotFoundError(SymkitError, KeyError):
    """Requested artifact is not part of the model's artifact catalogue."""

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""


class InvalidArgumentError(SymkitError, ValueError):
    """Identifier argument is None, empty or otherwise unusable."""


class MalformedModelError(SymkitError, ValueError):
    """Parameter or symbol file exists but cannot be parsed."""


class UnsupportedDataTypeError(SymkitError, TypeError):
    """Tensor cannot be represented in the requested element type."""


class ModelClosedError(SymkitError, RuntimeError):
    """Tensor-bearing operation invoked on a closed model."""


class ArtifactIOError(SymkitError, OSError):
    """Artifact base directory cannot be read."""


class ParameterIndexError(SymkitError, IndexError):
    """Positional parameter access beyond the end of the store."""
