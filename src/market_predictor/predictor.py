"""
Market predictor - online training and next-close prediction

Owns the price history and one NetCore (which in turn owns the scaler).
Every public operation runs under a single per-instance lock. train,
predict, confidence and set_state return a Result: Success(None) means
"not enough data yet", Failure carries a PredictorError tagged with its
ErrorKind.
"""

import logging
import threading
from dataclasses import dataclass

import numpy as np

from .errors import InvalidStateError, PredictorError
from .market_data import Candle
from .network import NetCore, NetworkState
from .persistence import state_from_dict
from .result import Failure, Result, Success
from .training import TrainingController

logger = logging.getLogger(__name__)

MIN_TRAIN_POINTS = 3
MIN_PREDICT_POINTS = 2
CONFIDENCE_WINDOW = 5
NEUTRAL_CONFIDENCE = 0.5


@dataclass(frozen=True)
class PredictionResult:
    predicted: float
    actual: float
    loss: float
    confidence: float


@dataclass(frozen=True)
class MarketStats:
    count: int = 0
    max_price: float = 0.0
    min_price: float = 0.0
    mean_price: float = 0.0


class MarketPredictor:
    def __init__(self, config=None):
        self.network = NetCore(config)
        self.trainer = TrainingController(self.network)
        self._history = []
        self._lock = threading.Lock()

    @property
    def config(self):
        return self.network.config

    @property
    def scaler(self):
        return self.network.scaler

    @property
    def history(self):
        with self._lock:
            return tuple(self._history)

    def __len__(self):
        with self._lock:
            return len(self._history)

    # === Data ===

    def add_data_point(self, record):
        if isinstance(record, dict):
            record = Candle.from_dict(record)
        with self._lock:
            self._history.append(record)
            self.network.scaler.update_bound(record.high)

    def add_data_points(self, records):
        count = 0
        for record in records:
            self.add_data_point(record)
            count += 1
        return count

    def clear(self):
        """Drop the history; weights and scale bound are kept."""
        with self._lock:
            self._history = []

    # === Training / prediction ===

    def _features(self, newer, older):
        normalize = self.network.scaler.normalize
        return [normalize(newer.close), normalize(older.close)]

    def _training_sample(self):
        current, prev1, prev2 = self._history[-1], self._history[-2], self._history[-3]
        features = self._features(prev1, prev2)
        label = self.network.scaler.normalize(current.close)
        return features, label

    def train(self) -> Result:
        """Run one training session on the three latest closes."""
        with self._lock:
            if len(self._history) < MIN_TRAIN_POINTS:
                logger.info("Not enough data for training (%d points)", len(self._history))
                return Success(None)
            try:
                features, label = self._training_sample()
                logger.info(
                    "Training on input [%s], actual output %.4f",
                    ", ".join(f"{x:.4f}" for x in features),
                    label,
                )
                loss_curve = self.trainer.run(features, label, self.config)
            except PredictorError as e:
                logger.warning("Training failed: %s", e)
                return Failure(e)

        logger.info("Training finished after %d epochs, final loss %.6f", len(loss_curve), loss_curve[-1].loss)
        return Success(loss_curve)

    def _predict_price(self, newer, older):
        normalized = self.network.predict(self._features(newer, older))
        return self.network.scaler.denormalize(normalized)

    def predict(self) -> Result:
        """Predict the next close from the two latest closes."""
        with self._lock:
            if len(self._history) < MIN_PREDICT_POINTS:
                logger.info("Not enough data for prediction (%d points)", len(self._history))
                return Success(None)
            try:
                latest, previous = self._history[-1], self._history[-2]
                predicted = self._predict_price(latest, previous)
                confidence = self._confidence()
            except PredictorError as e:
                logger.warning("Prediction failed: %s", e)
                return Failure(e)

        result = PredictionResult(
            predicted=predicted,
            actual=latest.close,
            loss=abs(predicted - latest.close),
            confidence=confidence,
        )
        logger.info("Predicted %.2f (actual %.2f, confidence %.3f)", predicted, latest.close, confidence)
        return Success(result)

    def _confidence(self):
        if len(self._history) < CONFIDENCE_WINDOW:
            return NEUTRAL_CONFIDENCE

        recent = self._history[-CONFIDENCE_WINDOW:]
        total_error = 0.0
        for i in range(2, len(recent)):
            predicted = self._predict_price(recent[i - 1], recent[i - 2])
            actual = recent[i].close
            if actual == 0:
                total_error = float("inf")
                break
            total_error += abs(predicted - actual) / actual

        avg_error = total_error / (len(recent) - 2)
        return float(min(1.0, max(0.0, 1 - avg_error)))

    def confidence(self) -> Result:
        """Backtest score over the last 5 points, 0.5 below that."""
        with self._lock:
            try:
                return Success(self._confidence())
            except PredictorError as e:
                return Failure(e)

    def stats(self):
        with self._lock:
            if not self._history:
                return MarketStats()
            closes = np.array([r.close for r in self._history], dtype=float)
        return MarketStats(
            count=len(closes),
            max_price=float(np.max(closes)),
            min_price=float(np.min(closes)),
            mean_price=float(np.mean(closes)),
        )

    # === State ===

    def get_state(self) -> NetworkState:
        with self._lock:
            return self.network.export_state()

    def set_state(self, state) -> Result:
        """Load a NetworkState (or its dict form); malformed input is rejected."""
        with self._lock:
            try:
                if isinstance(state, dict):
                    state = state_from_dict(state)
                elif not isinstance(state, NetworkState):
                    raise InvalidStateError(
                        f"Invalid network state: {type(state).__name__} is not a NetworkState"
                    )
                self.network.import_state(state)
            except PredictorError as e:
                logger.warning("Rejected network state: %s", e)
                return Failure(e)
        return Success(None)

