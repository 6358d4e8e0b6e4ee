"""
Error kinds raised by the predictor core.

Every error carries an ErrorKind tag so the predictor boundary can hand it
back inside a Failure result instead of unwinding the stack.
"""

from enum import Enum


class ErrorKind(Enum):
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_INPUT_SHAPE = "invalid_input_shape"
    INVALID_STATE = "invalid_state"
    INVALID_CONFIG = "invalid_config"
    DATA_FETCH = "data_fetch"


class PredictorError(Exception):
    """Base class for all predictor failures."""

    kind = None

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __repr__(self):
        return f"{type(self).__name__}(kind={self.kind.value}, message={self.message!r})"


class DivisionByZeroError(PredictorError):
    """Normalization attempted before any scale bound was observed."""

    kind = ErrorKind.DIVISION_BY_ZERO


class InvalidInputShapeError(PredictorError):
    """Feature vector is not of length 2."""

    kind = ErrorKind.INVALID_INPUT_SHAPE


class InvalidStateError(PredictorError):
    """Persisted network state is missing fields or has the wrong shape."""

    kind = ErrorKind.INVALID_STATE


class InvalidConfigError(PredictorError):
    """Learning rate, epoch count or backprop mode out of range."""

    kind = ErrorKind.INVALID_CONFIG


class DataFetchError(PredictorError):
    """Exchange request failed or returned something unusable."""

    kind = ErrorKind.DATA_FETCH
