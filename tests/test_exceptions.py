"""
Test Suite for the symkit Exception Hierarchy.

Tests that every error is a SymkitError and stays catchable through its
closest builtin.
"""

import pytest

from symkit.exceptions import (
    ArtifactIOError,
    ArtifactNotFoundError,
    InvalidArgumentError,
    MalformedModelError,
    ModelClosedError,
    ModelNotFoundError,
    ParameterIndexError,
    SymkitError,
    UnsupportedDataTypeError,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "exc_type,builtin",
    [
        (ModelNotFoundError, FileNotFoundError),
        (ArtifactNotFoundError, KeyError),
        (InvalidArgumentError, ValueError),
        (MalformedModelError, ValueError),
        (UnsupportedDataTypeError, TypeError),
        (ModelClosedError, RuntimeError),
        (ArtifactIOError, OSError),
        (ParameterIndexError, IndexError),
    ],
)
def test_hierarchy(exc_type, builtin):
    """Test each error derives from SymkitError and its builtin counterpart."""
    assert issubclass(exc_type, SymkitError)
    assert issubclass(exc_type, builtin)

    with pytest.raises(builtin):
        raise exc_type("boom")


@pytest.mark.unit
def test_artifact_not_found_message_is_plain():
    """Test the KeyError subclass renders its message without quotes."""
    assert str(ArtifactNotFoundError("Artifact 'x' not found")) == "Artifact 'x' not found"
    assert str(ArtifactNotFoundError()) == ""
