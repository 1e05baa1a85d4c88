"""Activation functions, their derivatives and the weight initialiser."""

from __future__ import annotations

import math
import random
from typing import Callable

ActivationFunction = Callable[[float], float]


def identity(x: float) -> float:
    """Return ``x`` as a float, with no activation applied."""
    return float(x)


def relu(x: float) -> float:
    """Return ``x`` when it is non-negative, otherwise 0."""
    if x >= 0:
        return x
    return 0.0


def sigmoid(x: float) -> float:
    """Logistic function ``1 / (1 + e^-x)``."""
    try:
        return 1.0 / (1.0 + math.exp(-x))
    except OverflowError:
        return 0.0


def step(x: float) -> float:
    """Derivative of ReLU: 1 for positive input, 0 otherwise."""
    return float(float(x) > 0.0)


def sigmoid_prime(x: float) -> float:
    """Derivative of the sigmoid function."""
    s = sigmoid(x)
    return s * (1 - s)


def identity_prime(x: float) -> float:
    """Derivative of the identity function: 1 for every numeric input."""
    float(x)  # rejects non-numeric input the same way identity does
    return 1.0


_FUNCTIONS: dict[str, ActivationFunction] = {
    "ReLU": relu,
    "sigmoid": sigmoid,
}

_DERIVATIVES: dict[str, ActivationFunction] = {
    "ReLU": step,
    "sigmoid": sigmoid_prime,
}

_IDENTIFIERS: dict[ActivationFunction, str] = {
    relu: "ReLU",
    sigmoid: "sigmoid",
    identity: "identity",
    step: "step",
    sigmoid_prime: "sigmoid_prime",
}


def get_activation_function(identifier: str) -> ActivationFunction:
    """Look up an activation by name; unknown names give ``identity``."""
    return _FUNCTIONS.get(identifier, identity)


def get_activation_derivative(identifier: str) -> ActivationFunction:
    """Look up the derivative of a named activation; unknown names give ``identity_prime``."""
    return _DERIVATIVES.get(identifier, identity_prime)


def get_activation_identifier(func: ActivationFunction) -> str:
    """Name of a known activation function, or ``"null"``."""
    try:
        return _IDENTIFIERS.get(func, "null")
    except TypeError:
        return "null"


def _seeded_mt19937(seed: int) -> random.Random:
    """A Mersenne Twister whose state matches the reference ``init_genrand`` seeding."""
    state = [seed & 0xFFFFFFFF]
    for i in range(1, 624):
        previous = state[-1]
        state.append((1812433253 * (previous ^ (previous >> 30)) + i) & 0xFFFFFFFF)
    engine = random.Random()
    engine.setstate((3, tuple(state) + (624,), None))
    return engine


class _GaussianSource:
    """Standard normal samples drawn with the Marsaglia polar method."""

    def __init__(self, seed: int = 1) -> None:
        self._engine = _seeded_mt19937(seed)
        self._saved: float | None = None

    def _canonical(self) -> float:
        low = self._engine.getrandbits(32)
        high = self._engine.getrandbits(32)
        value = (float(low) + float(high) * 4294967296.0) / 18446744073709551616.0
        if value >= 1.0:
            value = math.nextafter(1.0, 0.0)
        return value

    def __call__(self) -> float:
        if self._saved is not None:
            value, self._saved = self._saved, None
            return value
        while True:
            x = 2.0 * self._canonical() - 1.0
            y = 2.0 * self._canonical() - 1.0
            r2 = x * x + y * y
            if 0.0 < r2 <= 1.0:
                break
        mult = math.sqrt(-2.0 * math.log(r2) / r2)
        self._saved = x * mult
        return y * mult


_SAMPLER = _GaussianSource(1)


def sample() -> float:
    """Draw the next value from a standard normal distribution seeded with 1."""
    return _SAMPLER()