"""
Minimal Result type for returning predictor errors as values.

Success wraps a value (None means "not enough data yet"), Failure wraps a
PredictorError carrying its ErrorKind.
"""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Result(Generic[T]):
    """Base class for Success and Failure."""

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    @property
    def value(self) -> T:
        """Success value - only valid for Success instances."""
        if isinstance(self, Success):
            return self._value
        raise ValueError("Cannot get success value from Failure")

    @property
    def error(self):
        """Carried error - only valid for Failure instances."""
        if isinstance(self, Failure):
            return self._error
        raise ValueError("Cannot get error from Success")

    @property
    def kind(self):
        """ErrorKind of a Failure, None for a Success."""
        if isinstance(self, Failure):
            return self._error.kind
        return None

    def unwrap(self) -> T:
        """Return the value or re-raise the carried error."""
        if isinstance(self, Failure):
            raise self._error
        return self._value

    def map(self, func: Callable[[T], U]) -> "Result[U]":
        if isinstance(self, Success):
            return Success(func(self._value))
        return self


class Success(Result[T]):
    def __init__(self, value: T) -> None:
        self._value = value

    def __eq__(self, other):
        return isinstance(other, Success) and self._value == other._value

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


class Failure(Result[T]):
    def __init__(self, error) -> None:
        self._error = error

    def __eq__(self, other):
        return isinstance(other, Failure) and self._error is other._error

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"


__all__ = ["Failure", "Result", "Success"]
