"""
Backpropagation update rules for the 2→2→1 sigmoid network.

Both rules share one signature:

    rule(features, label, predicted, hidden, weights, learning_rate) -> (W1, W2)

and never mutate the arrays they are given. The rule is picked by
BackpropMode, not by subclassing.

SIMPLE treats the output layer as linear (no sigmoid slope) and scales the
hidden-layer step by the output weight *after* it has been updated.
VERBOSE is the exact chain-rule gradient, using the output weight *before*
the update.
"""

import numpy as np

from .config import BackpropMode


def update_simple(features, label, predicted, hidden, weights, learning_rate):
    W1, W2 = weights
    x = np.asarray(features, dtype=float)
    h = np.asarray(hidden, dtype=float)
    d_out = 2 * (predicted - label)

    # Output layer first
    W2 = W2 - learning_rate * d_out * h[np.newaxis, :]

    # Hidden layer reads the already-updated output weights
    W1 = W1 - learning_rate * d_out * np.outer(W2[0], x)
    return W1, W2


def update_verbose(features, label, predicted, hidden, weights, learning_rate):
    W1, W2 = weights
    x = np.asarray(features, dtype=float)
    h = np.asarray(hidden, dtype=float)
    d_out = 2 * (predicted - label)

    # dL/dW1[i][j] = dL/dy * W2[0][i] * h_i(1 - h_i) * x_j, with pre-update W2
    d_hidden = W2[0] * h * (1 - h)
    W1 = W1 - learning_rate * d_out * np.outer(d_hidden, x)

    W2 = W2 - learning_rate * d_out * h[np.newaxis, :]
    return W1, W2


BACKPROP_RULES = {
    BackpropMode.SIMPLE: update_simple,
    BackpropMode.VERBOSE: update_verbose,
}


def apply(mode, features, label, predicted, hidden, weights, learning_rate):
    """Run the update rule tagged by `mode` and return the new (W1, W2)."""
    rule = BACKPROP_RULES[BackpropMode.parse(mode)]
    return rule(features, label, predicted, hidden, weights, learning_rate)
