"""Feed-forward neural network built on the directed graph, trained by gradient descent."""

from __future__ import annotations

import math
from collections import Counter, deque
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import IO, Any

from graphnet.activation import get_activation_identifier, sample
from graphnet.graph import Connection, Graph, NodeInfo

DEFAULT_LEARNING_RATE = 0.1


def _fmt(value: float) -> str:
    return f"{value:g}"


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class DataInstance:
    """One sample: a feature vector ``x`` and its integer label ``y``."""

    x: list[float] = field(default_factory=list)
    y: int = 0


def _records(stream: IO[str]) -> Iterator[list[str]]:
    for line in stream:
        tokens = line.split()
        if tokens:
            yield tokens


def _fields(records: Iterator[list[str]], *types: type) -> tuple[Any, ...]:
    row = next(records, None)
    if row is None or len(row) < len(types):
        raise ValueError("malformed network description")
    try:
        return tuple(kind(token) for kind, token in zip(types, row))
    except ValueError as exc:
        raise ValueError(f"malformed network description: {' '.join(row)}") from exc


class NeuralNetwork(Graph):
    """A graph whose nodes are neurons and whose edges carry trainable weights."""

    def __init__(self, size: int = 0) -> None:
        super().__init__(size)
        self.learning_rate = DEFAULT_LEARNING_RATE
        self.evaluating = False
        self.layers: list[list[int]] = []
        self.input_node_ids: list[int] = []
        self.output_node_ids: list[int] = []
        self._contributions: dict[int, float] = {}

    @classmethod
    def from_stream(cls, stream: IO[str]) -> NeuralNetwork:
        """Build a network from a text description of its layers, weights and biases."""
        network = cls()
        network._load_network(stream)
        return network

    @classmethod
    def from_file(cls, filename: str) -> NeuralNetwork:
        """Build a network from a description stored in ``filename``."""
        with open(filename, encoding="utf-8") as stream:
            return cls.from_stream(stream)

    def _load_network(self, stream: IO[str]) -> None:
        records = _records(stream)
        num_layers, total_nodes = _fields(records, int, int)
        if num_layers <= 1:
            raise ValueError(f"Neural Network must have at least 2 layers, but got {num_layers} layers")

        self.resize(total_nodes)
        next_id = 0
        previous: list[int] = []
        for index in range(num_layers):
            num_nodes, activation = _fields(records, int, str)
            current: list[int] = []
            for _ in range(num_nodes):
                self.update_node(next_id, NodeInfo(activation, 0, 0))
                current.append(next_id)
                next_id += 1
            if index:
                for source in previous:
                    for dest in current:
                        self.update_connection(source, dest, sample())
            previous = current
            self.layers.append(current)

        (weight_count,) = _fields(records, int)
        for _ in range(weight_count):
            v, u, w = _fields(records, int, int, float)
            self.update_connection(v, u, w)

        (bias_count,) = _fields(records, int)
        for _ in range(bias_count):
            v, b = _fields(records, int, float)
            self._require(v).bias = b

        self.input_node_ids = list(self.layers[0])
        self.output_node_ids = list(self.layers[-1])

    def _require(self, node_id: int) -> NodeInfo:
        node = self.get_node(node_id)
        if node is None:
            raise LookupError(f"node {node_id} does not exist")
        return node

    def eval(self) -> None:
        """Switch to evaluation mode: predictions accumulate no gradients."""
        self.evaluating = True

    def train(self) -> None:
        """Switch to training mode: each prediction accumulates gradients."""
        self.evaluating = False

    def predict(self, instance: DataInstance | Sequence[float]) -> list[float]:
        """Propagate an instance through the network and return the output activations."""
        if not isinstance(instance, DataInstance):
            instance = DataInstance(list(instance))
        values = instance.x
        if len(values) != len(self.input_node_ids):
            raise ValueError(
                f"input size mismatch: expected {len(self.input_node_ids)}, got {len(values)}"
            )

        in_degree = Counter(dest for edges in self.adjacency_list for dest in edges)
        visited: set[int] = set()
        queue: deque[int] = deque()
        for node_id, value in zip(self.input_node_ids, values):
            self._require(node_id).pre_activation_value = value
            visited.add(node_id)
            queue.append(node_id)

        while queue:
            node_id = queue.popleft()
            self._visit_predict_node(node_id)
            for dest, connection in self.adjacency_list[node_id].items():
                self._visit_predict_neighbor(connection)
                in_degree[dest] -= 1
                if in_degree[dest] == 0 and dest not in visited:
                    visited.add(dest)
                    queue.append(dest)

        output = [self._require(node_id).post_activation_value for node_id in self.output_node_ids]

        if self.evaluating:
            self._flush()
        else:
            self._contribute(instance.y, output[0])
        return output

    def _contribute(self, y: float, p: float) -> None:
        for node_id in self.input_node_ids:
            for dest, connection in self.adjacency_list[node_id].items():
                incoming = self._contribute_from(dest, y, p)
                self._visit_contribute_neighbor(connection, incoming)
        self._flush()

    def _contribute_from(self, node_id: int, y: float, p: float) -> float:
        if node_id in self._contributions:
            return self._contributions[node_id]

        edges = self.adjacency_list[node_id]
        if not edges:
            outgoing = -1.0 * ((y - p) / (p * (1 - p)))
        else:
            outgoing = 0.0
            for dest, connection in edges.items():
                incoming = self._contribute_from(dest, y, p)
                outgoing += self._visit_contribute_neighbor(connection, incoming)

        outgoing = self._visit_contribute_node(node_id, outgoing)
        self._contributions[node_id] = outgoing
        return outgoing

    def _visit_predict_node(self, node_id: int) -> None:
        node = self._require(node_id)
        node.pre_activation_value += node.bias
        node.activate()

    def _visit_predict_neighbor(self, connection: Connection) -> None:
        source = self._require(connection.source)
        dest = self._require(connection.dest)
        dest.pre_activation_value += source.post_activation_value * connection.weight

    def _visit_contribute_node(self, node_id: int, outgoing: float) -> float:
        node = self._require(node_id)
        outgoing *= node.derive()
        node.delta += outgoing
        return outgoing

    def _visit_contribute_neighbor(self, connection: Connection, incoming: float) -> float:
        """Accumulate the weight gradient; return this edge's share of the source's contribution."""
        source = self._require(connection.source)
        connection.delta += incoming * source.post_activation_value
        return connection.weight * incoming

    def _flush(self) -> None:
        for node in self.nodes:
            if node is not None:
                node.post_activation_value = 0.0
                node.pre_activation_value = 0.0
        self._contributions.clear()

    def update(self) -> None:
        """Apply accumulated gradients to every bias and weight, then reset them."""
        rate = self.learning_rate
        for node in self.nodes:
            if node is not None:
                node.bias -= rate * node.delta
                node.delta = 0.0
        for edges in self.adjacency_list:
            for connection in edges.values():
                connection.weight -= rate * connection.delta
                connection.delta = 0.0

    def assess(self, instances: Iterable[DataInstance]) -> float:
        """Fraction of instances whose rounded first output equals the label."""
        dataset = list(instances)
        if not dataset:
            raise ValueError("Cannot assess accuracy on an empty dataset")
        previous = self.evaluating
        self.evaluating = True
        try:
            correct = sum(
                1 for instance in dataset if _round_half_away(self.predict(instance)[0]) == instance.y
            )
        finally:
            self.evaluating = previous
        return correct / len(dataset)

    def save_model(self, filename: str) -> None:
        """Write the layer structure, weights and biases in the loadable text format."""
        lines = [f"{len(self.layers)} {len(self.nodes)}"]
        for layer in self.layers:
            activation = get_activation_identifier(self._require(layer[0]).activation_function)
            lines.append(f"{len(layer)} {activation}")

        weights: list[str] = []
        biases: list[str] = []
        for index, node in enumerate(self.nodes):
            bias = 0.0 if node is None else node.bias
            biases.append(f"{index} {_fmt(bias)}")
            weights.extend(
                f"{conn.source} {conn.dest} {_fmt(conn.weight)}"
                for conn in self.adjacency_list[index].values()
            )

        lines.append(str(len(weights)))
        lines.extend(weights)
        lines.append(str(len(biases)))
        lines.extend(biases)
        with open(filename, "w", encoding="utf-8") as stream:
            stream.write("\n".join(lines) + "\n")

    def __str__(self) -> str:
        layer_text = "".join(
            f"layer {index}: " + "".join(f"{node_id} " for node_id in layer) + "\n"
            for index, layer in enumerate(self.layers)
        )
        return layer_text + super().__str__() + "\n"