"""
Model Instance Package.

Components, leaves first:

- ParameterStore: ordered parameter list with mutation notification.
- SymbolGraph: parsed symbol JSON exposing input/output names.
- InputResolver / describe_input: inputs not covered by parameters.
- ArtifactManager: lazy catalogue and stream access to auxiliary files.
- Model / load_model: façade composing the above.
"""

from .artifacts import ArtifactManager
from .model import Model, ModelState, load_model
from .parameters import Parameter, ParameterStore
from .resolver import InputResolver, describe_input, describe_output
from .symbol import SymbolGraph, SymbolNode

__all__ = [
    "Model",
    "ModelState",
    "load_model",
    "ParameterStore",
    "Parameter",
    "SymbolGraph",
    "SymbolNode",
    "InputResolver",
    "describe_input",
    "describe_output",
    "ArtifactManager",
]
