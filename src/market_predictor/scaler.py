"""
Price scaler: divides by the largest high seen so far.
"""

from .errors import DivisionByZeroError


class Scaler:
    def __init__(self, bound=0.0):
        self.bound = float(bound)

    def update_bound(self, high):
        """Raise the bound to `high` if it is larger; never lowers it."""
        if high > self.bound:
            self.bound = float(high)

    def normalize(self, price):
        if self.bound == 0:
            raise DivisionByZeroError("Cannot normalize: scale bound is 0")
        return price / self.bound

    def denormalize(self, value):
        return value * self.bound

    def __repr__(self):
        return f"Scaler(bound={self.bound})"
