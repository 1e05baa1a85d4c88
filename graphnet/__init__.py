"""A feed-forward neural network built on a directed graph, with activations, graph and network modules."""

__version__ = "0.1.0"

__all__ = ["activation", "graph", "network"]