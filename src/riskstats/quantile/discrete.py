"""
Discrete quantile methods.

The quantile is a single order statistic of the sample; no interpolation
takes place between adjacent observations.

Provides:
- IndexAboveQuantileMethod: rank = ceil(level * size), the empirical
  inverse distribution function
- NearestIndexQuantileMethod: rank = level * size rounded half up

The expected shortfall integrates the resulting step function: each order
statistic carries the probability mass of the levels that select it, and
the boundary order statistic only the part of its mass below the level.
"""

from abc import abstractmethod
import math

import numpy as np

from .base import QuantileCalculationMethod
from .result import QuantileResult


class DiscreteQuantileMethod(QuantileCalculationMethod):
    """
    Base class for methods returning a single order statistic.

    Subclasses define the rounding rule in index(). STEP_OFFSET describes
    the same rule as a step function: rank k is selected for fractional
    indices in [k - 1 + STEP_OFFSET, k + STEP_OFFSET).
    """

    STEP_OFFSET = 0.0

    @abstractmethod
    def index(self, fractional_index: float) -> int:
        """
        Round the fractional index level * size to a rank.

        Args:
            fractional_index: level * size

        Returns:
            1-based rank, before the bounds check
        """
        pass

    def _quantile(self, level: float, sample: np.ndarray, is_extrapolated: bool) -> QuantileResult:
        size = len(sample)
        rank = int(self._check_index(self.index(level * size), size, is_extrapolated))
        s, order = self._sort_with_order(sample)
        return QuantileResult.of_order_statistic(s[rank - 1], order[rank - 1])

    def _expected_shortfall(self, level: float, sample: np.ndarray) -> QuantileResult:
        size = len(sample)
        s, order = self._sort_with_order(sample)
        fractional_index = level * size
        rank = int(self._check_index(self.index(fractional_index), size, True))

        # Mass of each order statistic in units of 1/size, truncated at the level
        starts = np.arange(rank, dtype=np.float64) + self.STEP_OFFSET
        starts[0] = 0.0
        ends = np.arange(1, rank + 1, dtype=np.float64) + self.STEP_OFFSET
        ends[-1] = fractional_index
        weights = np.clip(ends - starts, 0.0, None) / fractional_index

        value = float(np.dot(weights, s[:rank]))
        return QuantileResult(
            value=value,
            lower_index=int(order[rank - 1]),
            upper_index=int(order[rank - 1]),
            weight=0.0,
            indices=tuple(int(i) for i in order[:rank]),
            weights=tuple(float(w) for w in weights),
        )


class IndexAboveQuantileMethod(DiscreteQuantileMethod):
    """
    Quantile at the first order statistic whose rank is at or above
    level * size.

    This is the inverse of the empirical distribution function. Every
    order statistic carries mass 1/size, so the expected shortfall at a
    level close to 1 is the sample mean.
    """

    name = "index_above"
    STEP_OFFSET = 0.0

    def index(self, fractional_index: float) -> int:
        return int(math.ceil(fractional_index))


class NearestIndexQuantileMethod(DiscreteQuantileMethod):
    """
    Quantile at the order statistic nearest to level * size.

    Ties are rounded up. Levels below 0.5 / size map to rank 0, which is
    rejected by the strict entry point.
    """

    name = "nearest_index"
    STEP_OFFSET = 0.5

    def index(self, fractional_index: float) -> int:
        return int(math.floor(fractional_index + 0.5))


__all__ = [
    "DiscreteQuantileMethod",
    "IndexAboveQuantileMethod",
    "NearestIndexQuantileMethod",
]
