"""
Market Predictor - 2→2→1 sigmoid network retrained on every new candle
"""

from .config import BackpropMode, PredictorConfig, validate_config
from .errors import (
    DataFetchError,
    DivisionByZeroError,
    ErrorKind,
    InvalidConfigError,
    InvalidInputShapeError,
    InvalidStateError,
    PredictorError,
)
from .market_data import Candle
from .network import NetCore, NetworkState
from .predictor import MarketPredictor, MarketStats, PredictionResult
from .result import Failure, Result, Success
from .scaler import Scaler
from .training import LossPoint, TrainingController

__version__ = "1.0.0"

__all__ = [
    "BackpropMode",
    "Candle",
    "DataFetchError",
    "DivisionByZeroError",
    "ErrorKind",
    "Failure",
    "InvalidConfigError",
    "InvalidInputShapeError",
    "InvalidStateError",
    "LossPoint",
    "MarketPredictor",
    "MarketStats",
    "NetCore",
    "NetworkState",
    "PredictionResult",
    "PredictorConfig",
    "PredictorError",
    "Result",
    "Scaler",
    "Success",
    "TrainingController",
    "validate_config",
]
