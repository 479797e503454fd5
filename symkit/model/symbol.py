"""
Symbol Graph Definition.

Parses the ``<prefix>-symbol.json`` computation-graph file. Only the parts
needed to enumerate inputs and outputs are modeled; operator attributes and
any other keys are carried through untouched.

Layout (MXNet JSON)::

    {
      "nodes": [{"op": "null", "name": "data", "inputs": []}, ...],
      "arg_nodes": [0, 1, 2],
      "heads": [[3, 0, 0]]
    }

Variable nodes (``op == "null"``) are graph inputs: data placeholders and
parameter slots alike. Which of them the caller must feed is decided by the
input resolver, not here.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Final, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..core.paths import LOGGER_NAME
from ..exceptions import MalformedModelError, ModelNotFoundError

logger = logging.getLogger(LOGGER_NAME)

VARIABLE_OP: Final[str] = "null"


# NODES
class SymbolNode(BaseModel):
    """One graph node; ``inputs`` entries are ``[node_id, output_index, version]``."""

    model_config = ConfigDict(frozen=True, extra="allow")

    op: str
    name: str
    inputs: tuple[tuple[int, ...], ...] = ()

    @property
    def is_variable(self) -> bool:
        return self.op == VARIABLE_OP


# GRAPH
class SymbolGraph(BaseModel):
    """
    Immutable parsed symbol graph.

    Attributes:
        nodes: Graph nodes in topological order.
        arg_nodes: Indices of the argument (input) nodes; ``None`` when the
            file omits them, in which case every variable node is an input.
        heads: Output entries ``[node_id, output_index, version]``.

    Example:
        >>> graph = SymbolGraph.load(Path("models/A-symbol.json"))
        >>> graph.list_inputs()
        ('data', 'fc_weight', 'fc_bias')
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    nodes: tuple[SymbolNode, ...] = Field(min_length=1)
    arg_nodes: tuple[int, ...] | None = None
    heads: tuple[tuple[int, ...], ...] = ()

    @model_validator(mode="after")
    def _check_references(self) -> "SymbolGraph":
        """Every node id referenced by ``arg_nodes``/``heads``/``inputs`` must exist."""
        n = len(self.nodes)
        if any(not head for head in self.heads):
            raise ValueError("heads contain an empty entry")
        empty = [node.name for node in self.nodes if any(not entry for entry in node.inputs)]
        if empty:
            raise ValueError(f"nodes {empty} have an empty input entry")

        refs = list(self.arg_nodes or ())
        refs += [head[0] for head in self.heads]
        refs += [entry[0] for node in self.nodes for entry in node.inputs]
        bad = sorted({r for r in refs if not 0 <= r < n})
        if bad:
            raise ValueError(f"node ids {bad} out of range for graph with {n} nodes")
        if self.arg_nodes is not None:
            non_vars = [self.nodes[i].name for i in self.arg_nodes if not self.nodes[i].is_variable]
            if non_vars:
                raise ValueError(f"arg_nodes reference operator nodes: {non_vars}")
        return self

    # ── Queries ─────────────────────────────────────────────────────────────

    def list_inputs(self) -> tuple[str, ...]:
        """Ordered names of every graph input (data and parameter slots)."""
        if self.arg_nodes is not None:
            return tuple(self.nodes[i].name for i in self.arg_nodes)
        return tuple(node.name for node in self.nodes if node.is_variable)

    def list_outputs(self) -> tuple[str, ...]:
        """Ordered output names; operator outputs carry an ``_output`` suffix."""
        names = []
        for head in self.heads:
            node = self.nodes[head[0]]
            index = head[1] if len(head) > 1 else 0
            if node.is_variable:
                names.append(node.name)
            elif index == 0:
                names.append(f"{node.name}_output")
            else:
                names.append(f"{node.name}_output{index}")
        return tuple(names)

    # ── Construction ────────────────────────────────────────────────────────

    @classmethod
    def from_names(
        cls,
        inputs: Sequence[str],
        op: str = "FullyConnected",
        output: str = "out",
    ) -> "SymbolGraph":
        """
        Build a single-operator graph consuming ``inputs``.

        Handy for tooling and fixtures that only care about input names.
        """
        nodes: list[dict[str, Any]] = [
            {"op": VARIABLE_OP, "name": name, "inputs": []} for name in inputs
        ]
        nodes.append({"op": op, "name": output, "inputs": [[i, 0, 0] for i in range(len(inputs))]})
        return cls.model_validate(
            {
                "nodes": nodes,
                "arg_nodes": list(range(len(inputs))),
                "heads": [[len(inputs), 0, 0]],
            }
        )

    @classmethod
    def load(cls, path: Path) -> "SymbolGraph":
        """
        Parse a symbol JSON file.

        Raises:
            ModelNotFoundError: If the file does not exist.
            MalformedModelError: If the file is not valid JSON or does not
                describe a graph.
        """
        if not path.is_file():
            raise ModelNotFoundError(f"Symbol file not found at: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            graph = cls.model_validate(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse symbol file {path.name}: {e}")
            raise MalformedModelError(f"Symbol file '{path.name}' is malformed: {e}") from e

        logger.debug(
            f"Parsed {path.name}: {len(graph.nodes)} node(s), {len(graph.list_inputs())} input(s)"
        )
        return graph

    def save(self, path: Path) -> Path:
        """Write the graph as JSON (fsync'ed) and return the path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json", exclude_none=True), f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        return path
