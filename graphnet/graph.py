"""Directed weighted graph of activation nodes."""

from __future__ import annotations

import copy
from dataclasses import dataclass

from graphnet.activation import (
    ActivationFunction,
    get_activation_derivative,
    get_activation_function,
    get_activation_identifier,
    identity,
)


def _fmt(value: float) -> str:
    return f"{value:g}"


class NodeInfo:
    """A node's activation, its current values, its bias and accumulated bias gradient."""

    def __init__(self, activation: str | None = None, value: float = 0.0, bias: float = 0.0) -> None:
        if activation is None:
            self.activation_function: ActivationFunction = identity
            self.activation_derivative: ActivationFunction = identity
        else:
            self.activation_function = get_activation_function(activation)
            self.activation_derivative = get_activation_derivative(activation)
        self.pre_activation_value = value
        self.post_activation_value = 0.0
        self.activate()
        self.bias = bias
        self.delta = 0.0

    def activate(self) -> float:
        """Apply the activation to the pre-activation value and store the result."""
        self.post_activation_value = self.activation_function(self.pre_activation_value)
        return self.post_activation_value

    def derive(self) -> float:
        """Evaluate the activation's derivative at the pre-activation value."""
        return self.activation_derivative(self.pre_activation_value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeInfo):
            return NotImplemented
        return (
            self.pre_activation_value == other.pre_activation_value
            and self.post_activation_value == other.post_activation_value
            and self.activation_function is other.activation_function
            and self.bias == other.bias
            and self.activation_derivative is other.activation_derivative
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"NodeInfo(activation={get_activation_identifier(self.activation_function)!r}, "
            f"pre={self.pre_activation_value!r}, post={self.post_activation_value!r}, "
            f"bias={self.bias!r}, delta={self.delta!r})"
        )

    def __str__(self) -> str:
        return (
            f"bias: {_fmt(self.bias)}"
            f" preActivationValue: {_fmt(self.pre_activation_value)}"
            f" postActivationValue: {_fmt(self.post_activation_value)}"
            f" activationFunction: {get_activation_identifier(self.activation_function)}"
            f" activationDerivative: {get_activation_identifier(self.activation_derivative)}"
        )


@dataclass(eq=False)
class Connection:
    """A weighted directed edge with its accumulated weight gradient."""

    source: int = -1
    dest: int = -1
    weight: float = 0.0
    delta: float = 0.0

    def __lt__(self, other: Connection) -> bool:
        return self.dest < other.dest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Connection):
            return NotImplemented
        return self.dest == other.dest and self.source == other.source and self.weight == other.weight

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"source: {self.source} dest: {self.dest} weight: {_fmt(self.weight)}"


class Graph:
    """Nodes indexed by id, with an adjacency list of outgoing connections per node."""

    def __init__(self, size: int = 0) -> None:
        self.size = 0
        self.nodes: list[NodeInfo | None] = []
        self.adjacency_list: list[dict[int, Connection]] = []
        if size:
            self.resize(size)

    def _contains(self, node_id: int) -> bool:
        return 0 <= node_id < len(self.nodes)

    def update_node(self, node_id: int, node: NodeInfo) -> None:
        """Store a copy of ``node`` under ``node_id``."""
        if not self._contains(node_id):
            raise IndexError(f"Attempting to update node with id: {node_id} but node does not exist")
        self.nodes[node_id] = copy.copy(node)

    def get_node(self, node_id: int) -> NodeInfo | None:
        """The node with this id, or None when the id is out of range or unset."""
        if not self._contains(node_id):
            return None
        return self.nodes[node_id]

    def update_connection(self, v: int, u: int, w: float) -> None:
        """Set the edge from ``v`` to ``u`` to weight ``w``, resetting its gradient."""
        for end in (v, u):
            if not self._contains(end):
                raise IndexError(
                    f"Attempting to update connection between {v} and {u} with weight {_fmt(w)}"
                    f" but {end} does not exist"
                )
        self.adjacency_list[v][u] = Connection(v, u, w)

    def clear(self) -> None:
        """Remove every node and connection."""
        self.nodes.clear()
        self.adjacency_list.clear()

    def resize(self, size: int) -> None:
        """Make room for ``size`` nodes: the adjacency list is fitted, ``size`` empty slots are appended."""
        self.size = size
        del self.adjacency_list[size:]
        self.adjacency_list.extend({} for _ in range(size - len(self.adjacency_list)))
        self.nodes.extend(None for _ in range(size))

    def __str__(self) -> str:
        lines = ["digraph G {"]
        for source, edges in enumerate(self.adjacency_list):
            lines.extend(
                f'\t{source} -> {conn.dest}[label="{_fmt(conn.weight)}"]' for conn in edges.values()
            )
        lines.append("}")
        node_lines = [
            f"node {index}: (z={_fmt(node.pre_activation_value)}\t"
            f", a={_fmt(node.post_activation_value)}\t"
            f", bias={_fmt(node.bias)}\t"
            f", activation={get_activation_identifier(node.activation_function)})"
            for index, node in enumerate(self.nodes)
            if node is not None
        ]
        return "\n".join(lines) + "\n" + "\n".join(node_lines)