"""
Training controller: fixed-epoch SGD on one sample, no early stopping.
"""

import logging
from typing import NamedTuple

from .network import mse_loss

logger = logging.getLogger(__name__)


class LossPoint(NamedTuple):
    epoch: int
    loss: float


class TrainingController:
    def __init__(self, network):
        self.network = network

    def run(self, features, label, config=None):
        """Train for exactly `config.epochs` epochs and return the loss curve."""
        config = self.network.config if config is None else config
        loss_curve = []

        for epoch in range(1, config.epochs + 1):
            predicted, hidden = self.network.forward(features)
            loss = mse_loss(predicted, label)
            logger.debug("Epoch %d: loss=%.10f", epoch, loss)
            loss_curve.append(LossPoint(epoch, loss))
            self.network.update(
                features, label, predicted, hidden, config.backprop_mode, config.learning_rate
            )

        return loss_curve
