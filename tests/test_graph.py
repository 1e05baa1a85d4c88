import copy

import pytest

from graphnet.activation import identity, identity_prime, relu, sigmoid, sigmoid_prime, step
from graphnet.graph import Connection, Graph, NodeInfo


def test_default_node():
    node = NodeInfo()
    assert node.activation_function is identity
    assert node.activation_derivative is identity
    assert node.pre_activation_value == 0
    assert node.post_activation_value == 0
    assert node.bias == 0
    assert node.delta == 0


def test_named_node_activates_on_creation():
    node = NodeInfo("ReLU", -1.5, 0.3)
    assert node.activation_function is relu
    assert node.activation_derivative is step
    assert node.post_activation_value == 0.0
    assert node.bias == 0.3


def test_node_activate_and_derive():
    node = NodeInfo("sigmoid", 0.0, 0.0)
    node.pre_activation_value = 1.2
    assert node.activate() == sigmoid(1.2)
    assert node.post_activation_value == sigmoid(1.2)
    assert node.derive() == sigmoid_prime(1.2)


def test_identity_node_derivative():
    node = NodeInfo("identity", 4.0, 0.0)
    assert node.activation_derivative is identity_prime
    assert node.derive() == 1.0


def test_node_equality_ignores_delta():
    a = NodeInfo("ReLU", 2.0, 0.1)
    b = NodeInfo("ReLU", 2.0, 0.1)
    b.delta = 9.0
    assert a == b
    b.bias = 0.2
    assert not a == b


def test_node_equality_checks_activation():
    assert not NodeInfo("ReLU", 1.0, 0.0) == NodeInfo("identity", 1.0, 0.0)


def test_node_str():
    text = str(NodeInfo("ReLU", 2.0, 0.5))
    assert text == (
        "bias: 0.5 preActivationValue: 2 postActivationValue: 2"
        " activationFunction: ReLU activationDerivative: step"
    )


def test_connection_defaults_and_ordering():
    empty = Connection()
    assert (empty.source, empty.dest, empty.weight, empty.delta) == (-1, -1, 0.0, 0.0)
    conns = [Connection(0, 5, 1.0), Connection(0, 2, 1.0), Connection(0, 3, 1.0)]
    assert [c.dest for c in sorted(conns)] == [2, 3, 5]


def test_connection_equality_ignores_delta():
    a = Connection(1, 2, 0.5)
    b = Connection(1, 2, 0.5, delta=3.0)
    assert a == b
    assert not a == Connection(1, 2, 0.6)


def test_connection_str():
    assert str(Connection(1, 2, 0.25)) == "source: 1 dest: 2 weight: 0.25"


def test_graph_sized_construction():
    graph = Graph(3)
    assert graph.size == 3
    assert graph.nodes == [None, None, None]
    assert graph.adjacency_list == [{}, {}, {}]


def test_resize_from_empty():
    graph = Graph()
    assert graph.size == 0
    graph.resize(4)
    assert graph.size == 4
    assert len(graph.nodes) == 4
    assert len(graph.adjacency_list) == 4


def test_update_and_get_node_stores_copy():
    graph = Graph(2)
    node = NodeInfo("sigmoid", 0.0, 0.7)
    graph.update_node(1, node)
    stored = graph.get_node(1)
    assert stored == node
    node.bias = 5.0
    assert graph.get_node(1).bias == 0.7


def test_get_node_out_of_range_is_none():
    graph = Graph(2)
    assert graph.get_node(-1) is None
    assert graph.get_node(2) is None
    assert graph.get_node(0) is None


@pytest.mark.parametrize("node_id", [-1, 3])
def test_update_node_out_of_range(node_id):
    graph = Graph(3)
    with pytest.raises(IndexError):
        graph.update_node(node_id, NodeInfo())


def test_update_connection():
    graph = Graph(3)
    graph.update_connection(0, 2, 0.4)
    assert graph.adjacency_list[0][2] == Connection(0, 2, 0.4)
    graph.adjacency_list[0][2].delta = 1.0
    graph.update_connection(0, 2, 0.9)
    assert graph.adjacency_list[0][2].weight == 0.9
    assert graph.adjacency_list[0][2].delta == 0.0


@pytest.mark.parametrize("v, u", [(-1, 0), (0, 3), (5, 1)])
def test_update_connection_out_of_range(v, u):
    graph = Graph(3)
    with pytest.raises(IndexError):
        graph.update_connection(v, u, 1.0)


def test_clear():
    graph = Graph(2)
    graph.update_node(0, NodeInfo())
    graph.update_connection(0, 1, 1.0)
    graph.clear()
    assert graph.nodes == []
    assert graph.adjacency_list == []
    assert graph.get_node(0) is None


def test_deepcopy_is_independent():
    graph = Graph(2)
    graph.update_node(0, NodeInfo("ReLU", 0.0, 0.1))
    graph.update_node(1, NodeInfo())
    graph.update_connection(0, 1, 0.3)
    clone = copy.deepcopy(graph)
    clone.get_node(0).bias = 2.0
    clone.update_connection(0, 1, 0.8)
    assert graph.get_node(0).bias == 0.1
    assert graph.adjacency_list[0][1].weight == 0.3
    assert clone.get_node(0).activation_function is relu


def test_graph_str_dot_format():
    graph = Graph(2)
    graph.update_node(0, NodeInfo("ReLU", 0.0, 0.5))
    graph.update_node(1, NodeInfo())
    graph.update_connection(0, 1, 0.25)
    assert str(graph) == (
        "digraph G {\n"
        '\t0 -> 1[label="0.25"]\n'
        "}\n"
        "node 0: (z=0\t, a=0\t, bias=0.5\t, activation=ReLU)\n"
        "node 1: (z=0\t, a=0\t, bias=0\t, activation=identity)"
    )


def test_empty_graph_str():
    assert str(Graph()) == "digraph G {\n}\n"