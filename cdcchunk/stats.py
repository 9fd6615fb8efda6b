"""One-pass weighted mean and standard deviation."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass
class StdDevTracker:
    """Running weighted mean and sample standard deviation.

    ``w`` is the sum of weights, ``a`` the weighted mean and ``q`` the
    quadratic term of the variance.
    """

    w: float = 0.0
    a: float = 0.0
    q: float = 0.0

    def add_obs(self, x: float, weight: float) -> None:
        """Add observation ``x`` with the given weight."""
        self.w += weight
        a0 = self.a
        self.a = a0 + weight * (x - a0) / self.w
        self.q += weight * (x - a0) * (x - self.a)

    def mean(self) -> float:
        """Return the weighted mean."""
        return self.a

    def sample_stddev(self) -> float:
        """Return the weighted sample standard deviation (NaN when undefined)."""
        denom = self.w - 1
        if denom == 0:
            return math.nan if self.q == 0 else math.inf
        variance = self.q / denom
        return math.sqrt(variance) if variance >= 0 else math.nan


def mean_sd(x: Iterable[float]) -> tuple[float, float]:
    """Return ``(mean, sample_stddev)`` of ``x`` from a single pass."""
    tracker = StdDevTracker()
    for value in x:
        tracker.add_obs(value, 1)
    return tracker.mean(), tracker.sample_stddev()