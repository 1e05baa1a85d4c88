# graphnet

A small feed-forward neural network whose structure is an ordinary
directed graph. Every neuron is a `NodeInfo` (activation function, bias,
pre- and post-activation values, accumulated bias gradient), every weight
is a `Connection` (source, destination, weight, accumulated weight
gradient), and the network is a `Graph` that evaluates itself with a
breadth-first traversal and learns by backpropagating a binary
cross-entropy loss on its first output.

It has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Model files

A network can be loaded from a plain-text description such as:

```
3 5
2 identity
2 ReLU
1 sigmoid
2
0 2 0.5
1 3 -0.25
1
4 0.1
```

Line by line:

- the number of layers (at least 2) and the total number of nodes;
- for each layer, its number of nodes and their activation;
- the number of weight overrides, then one `source dest weight` line each;
- the number of bias overrides, then one `node bias` line each.

Blank lines are skipped, and tokens after the ones a line needs are
ignored. A file with fewer than two layers or with malformed lines raises
`ValueError`; a weight override naming a node that does not exist raises
`IndexError`.

Nodes are numbered layer by layer starting from 0. Every node in one layer
is connected to every node in the next. Weights not listed in the file are
drawn from `graphnet.activation.sample()`, a standard normal generator
seeded with 1 once per process: the first network loaded in a process is
always initialised the same way, and later loads continue the same
sequence. Biases not listed start at 0. The first layer becomes the input
nodes and the last layer the output nodes. Known activations are
`identity`, `ReLU` and `sigmoid`; any other name falls back to `identity`.

`save_model(filename)` writes a network back out in the same format.
Numbers are written with six significant digits, so a save and reload is
close to, not exactly, the original.

## Using a network

```python
from graphnet.network import DataInstance, NeuralNetwork

nn = NeuralNetwork.from_file("model.init")

# Inference only: no gradients are accumulated.
nn.eval()
print(nn.predict(DataInstance([0.3, -0.2], 0)))
print(nn.predict([0.3, -0.2]))  # a plain sequence is taken as features with label 0

# Training: each prediction accumulates gradients, update() applies them.
training_data = [DataInstance([0.3, -0.2], 0), DataInstance([0.9, 0.4], 1)]
nn.learning_rate = 0.01
nn.train()
for epoch in range(3):
    for instance in training_data:
        nn.predict(instance)
    nn.update()

# Fraction of instances whose rounded first output equals the label.
print(nn.assess(training_data))

nn.save_model("trained.init")
```

`NeuralNetwork.from_stream` accepts any open text stream holding a model
description instead of a file name.

Details worth knowing:

- `predict` returns the post-activation values of the output nodes, in the
  order of `output_node_ids`. It raises `ValueError` if the number of
  features differs from the number of input nodes. Node values are reset
  after every prediction, in either mode.
- In training mode the gradient uses the instance's label `y` and the first
  output `p` as a probability, so the output node should use `sigmoid`; an
  output of exactly 0 or 1 cannot be differentiated.
- `update()` subtracts `learning_rate` times the accumulated gradient from
  every bias and weight and resets the gradients. The default learning
  rate is 0.1.
- `assess(instances)` runs in evaluation mode, restores the previous mode
  afterwards, and raises `ValueError` for an empty dataset.
- `input_node_ids`, `output_node_ids`, `layers`, `learning_rate` and
  `evaluating` are plain attributes. A network built with
  `NeuralNetwork(size)` and wired by hand needs its input and output ids
  set directly.
- `str(nn)` lists the layers followed by the graph's description.

## Building a graph by hand

`graphnet.graph.Graph(size)` holds `size` node slots. `update_node(id,
node)` stores a copy of a `NodeInfo` at an id and raises `IndexError` for
an id out of range; `get_node(id)` returns the node, or `None` for an id
out of range or not yet set; `update_connection(v, u, w)` adds or replaces
the edge from `v` to `u` with a fresh gradient and raises `IndexError` if
either end does not exist; `clear()` removes every node and connection;
`resize(size)` fits the adjacency list to `size` and appends `size` empty
node slots.

`NodeInfo(activation, value, bias)` takes an activation name;
`activate()` stores and returns the activation of the pre-activation
value, and `derive()` returns its derivative there.

`str(graph)` gives the edges in Graphviz `digraph` form, followed by one
line per node with its values, bias and activation.

The activation functions and their derivatives live in
`graphnet.activation`: `identity`, `relu`, `sigmoid`, `step`,
`sigmoid_prime` and `identity_prime`, together with
`get_activation_function`, `get_activation_derivative` and
`get_activation_identifier` for converting between names and functions,
and `sample()` for standard normal draws.

## What it does not do

There is no command-line program and no dataset reader: the package does
not load or normalise CSV files. Training and assessment data are passed
in as `DataInstance` objects built by the caller.