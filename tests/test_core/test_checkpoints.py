"""
Test Suite for Parameter Checkpoint IO.

Tests entry naming on load (type prefixes, unnamed entries), payload
validation and the save side of the format.
"""

from __future__ import annotations

from collections import OrderedDict

import pytest
import torch

from symkit.core.io import load_parameters, save_parameters
from symkit.exceptions import MalformedModelError, ModelNotFoundError


# LOADING: NAMING
@pytest.mark.unit
def test_load_strips_type_prefixes(tmp_path):
    """Test arg:/aux: prefixes are removed and order is kept."""
    path = tmp_path / "net-0001.params"
    torch.save(
        OrderedDict(
            [("arg:fc_weight", torch.ones(2)), ("aux:bn_mean", torch.zeros(2)), ("plain", torch.ones(1))]
        ),
        path,
    )

    entries = load_parameters(path)

    assert [name for name, _ in entries] == ["fc_weight", "bn_mean", "plain"]


@pytest.mark.unit
def test_load_unnamed_mapping_entry_uses_file_name(tmp_path):
    """Test an empty key is replaced by the checkpoint's filename."""
    path = tmp_path / "A-0122.params"
    torch.save({"": torch.ones(1), "b": torch.ones(1)}, path)

    assert [name for name, _ in load_parameters(path)] == ["A-0122.params", "b"]


@pytest.mark.unit
def test_load_sequence_payload_entries_use_file_name(tmp_path):
    """Test plain tensor lists load as unnamed entries."""
    path = tmp_path / "A-0003.params"
    torch.save([torch.ones(1), torch.zeros(1)], path)

    entries = load_parameters(path)

    assert [name for name, _ in entries] == ["A-0003.params", "A-0003.params"]
    assert torch.equal(entries[1][1], torch.zeros(1))


@pytest.mark.unit
def test_load_bare_prefix_name_becomes_file_name(tmp_path):
    """Test a key that is only a type prefix counts as unnamed."""
    path = tmp_path / "A-0000.params"
    torch.save({"arg:": torch.ones(1)}, path)

    assert load_parameters(path)[0][0] == "A-0000.params"


# LOADING: ERRORS
@pytest.mark.unit
def test_load_missing_file(tmp_path):
    """Test a missing checkpoint raises ModelNotFoundError."""
    with pytest.raises(ModelNotFoundError):
        load_parameters(tmp_path / "absent.params")


@pytest.mark.unit
@pytest.mark.parametrize("content", [b"", b"not a torch archive"])
def test_load_garbage_is_malformed(tmp_path, content):
    """Test unreadable bytes raise MalformedModelError."""
    path = tmp_path / "bad.params"
    path.write_bytes(content)

    with pytest.raises(MalformedModelError, match="bad.params"):
        load_parameters(path)


@pytest.mark.unit
def test_load_non_tensor_value_is_malformed(tmp_path):
    """Test mapping values other than tensors are rejected."""
    path = tmp_path / "bad.params"
    torch.save({"w": 3}, path)

    with pytest.raises(MalformedModelError, match="not a tensor"):
        load_parameters(path)


@pytest.mark.unit
def test_load_scalar_payload_is_malformed(tmp_path):
    """Test a payload that is neither mapping nor sequence is rejected."""
    path = tmp_path / "bad.params"
    torch.save(torch.ones(1), path)

    with pytest.raises(MalformedModelError, match="expected a mapping"):
        load_parameters(path)


# SAVING
@pytest.mark.unit
def test_save_then_load_keeps_order_and_values(tmp_path):
    """Test saved pairs load back in order with equal values."""
    path = tmp_path / "deep" / "A-0122.params"
    pairs = [(None, torch.arange(3.0)), ("arg:b", torch.ones(2))]

    assert save_parameters(path, pairs) == path

    entries = load_parameters(path)
    assert [name for name, _ in entries] == ["A-0122.params", "b"]
    assert torch.equal(entries[0][1], torch.arange(3.0))


@pytest.mark.unit
def test_save_accepts_mapping(tmp_path):
    """Test a name->tensor mapping can be saved directly."""
    path = save_parameters(tmp_path / "m.params", {"w": torch.ones(1)})

    assert load_parameters(path)[0][0] == "w"


@pytest.mark.unit
def test_save_rejects_duplicates(tmp_path):
    """Test duplicate names (including two unnamed entries) cannot be saved."""
    with pytest.raises(ValueError, match="<unnamed>"):
        save_parameters(tmp_path / "d.params", [(None, torch.ones(1)), ("", torch.ones(1))])
