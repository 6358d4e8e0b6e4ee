"""
NetCore - 2 inputs → 2 hidden → 1 output, sigmoid everywhere, no biases.

Owns the two weight matrices and the price scaler. Weights start from a
fixed sin-based sequence so every fresh network is identical:

    seed = 1337 + i + j * rows
    w[i][j] = frac(sin(seed) * 10000)
"""

import logging
import math
import numbers
from dataclasses import dataclass, field

import numpy as np

from . import backprop
from .config import HIDDEN_SIZE, INPUT_SIZE, OUTPUT_SIZE, SEED, BackpropMode, PredictorConfig
from .errors import InvalidInputShapeError, InvalidStateError
from .scaler import Scaler

logger = logging.getLogger(__name__)

W1_SHAPE = (HIDDEN_SIZE, INPUT_SIZE)
W2_SHAPE = (OUTPUT_SIZE, HIDDEN_SIZE)


def seeded_random(seed):
    """Fractional part of sin(seed) * 10000, always in [0, 1)."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def seeded_matrix(rows, cols, seed=SEED):
    matrix = np.zeros((rows, cols))
    for i in range(rows):
        for j in range(cols):
            matrix[i, j] = seeded_random(seed + i + j * rows)
    return matrix


def sigmoid(x):
    return 1 / (1 + np.exp(-np.clip(x, -500, 500)))


def mse_loss(predicted, actual):
    return (predicted - actual) ** 2


@dataclass
class NetworkState:
    """Snapshot of both weight matrices and the scale bound."""

    weights1: list = field(default_factory=list)
    weights2: list = field(default_factory=list)
    max_scale: float = 0.0


def as_matrix(value, shape, name):
    if value is None:
        raise InvalidStateError(f"Invalid network state: {name} is missing")
    try:
        matrix = np.array(value, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidStateError(f"Invalid network state: {name} is malformed ({e})") from e
    if matrix.shape != shape:
        raise InvalidStateError(
            f"Invalid network state: {name} has shape {matrix.shape}, expected {shape}"
        )
    return matrix


class NetCore:
    def __init__(self, config=None):
        self.config = config if config is not None else PredictorConfig()
        self.scaler = Scaler()
        self.weights1 = seeded_matrix(*W1_SHAPE)
        self.weights2 = seeded_matrix(*W2_SHAPE)

    def forward(self, features):
        """
        Feed forward one sample.

        Returns (output, hidden) where output is in (0, 1) and hidden holds
        the two hidden activations.
        """
        try:
            n = len(features)
        except TypeError:
            raise InvalidInputShapeError("Input must be a sequence of 2 features") from None
        if n != INPUT_SIZE:
            raise InvalidInputShapeError(f"Input must have exactly 2 features, got {n}")

        try:
            x = np.asarray(features, dtype=float)
        except (TypeError, ValueError):
            raise InvalidInputShapeError("Input must be a flat vector of 2 numbers") from None
        if x.shape != (INPUT_SIZE,):
            raise InvalidInputShapeError(f"Input must be a flat vector of 2 numbers, got shape {x.shape}")

        hidden = sigmoid(self.weights1 @ x)
        output = sigmoid(self.weights2 @ hidden)[0]
        return float(output), hidden

    def predict(self, features):
        output, _ = self.forward(features)
        return output

    # === Backpropagation ===

    def update(self, features, label, predicted, hidden, mode=None, learning_rate=None):
        mode = self.config.backprop_mode if mode is None else mode
        learning_rate = self.config.learning_rate if learning_rate is None else learning_rate
        self.weights1, self.weights2 = backprop.apply(
            mode,
            features,
            label,
            predicted,
            hidden,
            (self.weights1, self.weights2),
            learning_rate,
        )

    def update_simple(self, features, label, predicted, hidden):
        self.update(features, label, predicted, hidden, BackpropMode.SIMPLE)

    def update_verbose(self, features, label, predicted, hidden):
        self.update(features, label, predicted, hidden, BackpropMode.VERBOSE)

    # === State export / import ===

    def export_state(self):
        return NetworkState(
            weights1=self.weights1.tolist(),
            weights2=self.weights2.tolist(),
            max_scale=self.scaler.bound,
        )

    def import_state(self, state):
        if state is None:
            raise InvalidStateError("Invalid network state: state is missing")

        weights1 = as_matrix(getattr(state, "weights1", None), W1_SHAPE, "weights1")
        weights2 = as_matrix(getattr(state, "weights2", None), W2_SHAPE, "weights2")

        max_scale = getattr(state, "max_scale", None)
        if isinstance(max_scale, bool) or not isinstance(max_scale, numbers.Real):
            raise InvalidStateError(f"Invalid network state: max_scale {max_scale!r} is not a number")
        if not max_scale >= 0:
            raise InvalidStateError(f"Invalid network state: max_scale {max_scale!r} is negative")

        self.weights1 = weights1
        self.weights2 = weights2
        self.scaler = Scaler(max_scale)
        logger.debug("Imported network state (max_scale=%s)", max_scale)
