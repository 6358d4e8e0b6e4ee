"""
Predictor configuration

Defaults: 60 epochs, learning rate 0.1, verbose (exact gradient) backprop.
"""

import numbers
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidConfigError

# Training parameters
LEARNING_RATE = 0.1
EPOCHS = 60
MAX_EPOCHS = 10000

# Network architecture (fixed)
INPUT_SIZE = 2
HIDDEN_SIZE = 2
OUTPUT_SIZE = 1

# Weight initialization seed
SEED = 1337


class BackpropMode(Enum):
    SIMPLE = "simple"
    VERBOSE = "verbose"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidConfigError(
                f"Invalid backprop mode {value!r}: must be 'simple' or 'verbose'"
            ) from None


@dataclass(frozen=True)
class PredictorConfig:
    learning_rate: float = LEARNING_RATE
    epochs: int = EPOCHS
    backprop_mode: BackpropMode = BackpropMode.VERBOSE

    def __post_init__(self):
        # Accept plain strings for the mode
        object.__setattr__(self, "backprop_mode", BackpropMode.parse(self.backprop_mode))

    @classmethod
    def from_dict(cls, data):
        """Build a config from snake_case or camelCase keys."""
        learning_rate = data.get("learning_rate", data.get("learningRate", LEARNING_RATE))
        epochs = data.get("epochs", EPOCHS)

        if "backprop_mode" in data or "backpropMode" in data:
            mode = data.get("backprop_mode", data.get("backpropMode"))
        elif "useSimpleBackprop" in data:
            mode = BackpropMode.SIMPLE if data["useSimpleBackprop"] else BackpropMode.VERBOSE
        else:
            mode = BackpropMode.VERBOSE

        return cls(learning_rate=learning_rate, epochs=epochs, backprop_mode=mode)

    def to_dict(self):
        return {
            "learningRate": self.learning_rate,
            "epochs": self.epochs,
            "backpropMode": self.backprop_mode.value,
        }


def validate_config(config):
    """Range check done by the embedding caller; the engine does not re-check."""
    lr = config.learning_rate
    if isinstance(lr, bool) or not isinstance(lr, numbers.Real) or not 0 < lr <= 1:
        raise InvalidConfigError(f"Invalid learning rate {lr!r}: must be in (0, 1]")

    epochs = config.epochs
    if isinstance(epochs, bool) or not isinstance(epochs, numbers.Integral) or not 1 <= epochs <= MAX_EPOCHS:
        raise InvalidConfigError(f"Invalid epochs {epochs!r}: must be between 1 and {MAX_EPOCHS}")

    return config
