"""
Interpolation quantile methods.

The rank implied by a level is

    rank = level * sample_correction(size) + index_correction()

and the quantile interpolates linearly between the two order statistics
bracketing the rank. The methods only differ in the two corrections:

- SampleInterpolationQuantileMethod: level * n
- MidwayInterpolationQuantileMethod: level * n + 1/2
- WeibullInterpolationQuantileMethod: level * (n + 1)
- ExcelInterpolationQuantileMethod: level * (n - 1) + 1
- MedianUnbiasedInterpolationQuantileMethod: level * (n + 1/3) + 1/3
- NormalUnbiasedInterpolationQuantileMethod: level * (n + 1/4) + 3/8

The expected shortfall is the exact average of the piecewise linear
quantile function over (0, level], with flat extrapolation outside the
sample range.
"""

from abc import abstractmethod
import math

import numpy as np

from .base import QuantileCalculationMethod
from .result import QuantileResult


class InterpolationQuantileMethod(QuantileCalculationMethod):
    """Base class for methods interpolating linearly between order statistics."""

    @abstractmethod
    def sample_correction(self, size: int) -> float:
        """Multiplier applied to the level to obtain the rank."""
        pass

    @abstractmethod
    def index_correction(self) -> float:
        """Constant added to level * sample_correction(size)."""
        pass

    def rank(self, level: float, size: int) -> float:
        """
        Rank implied by a level, before the bounds check.

        Args:
            level: Quantile level in (0, 1)
            size: Sample size

        Returns:
            1-based fractional rank
        """
        return level * self.sample_correction(size) + self.index_correction()

    def _quantile(self, level: float, sample: np.ndarray, is_extrapolated: bool) -> QuantileResult:
        size = len(sample)
        adjusted = self._check_index(self.rank(level, size), size, is_extrapolated)
        s, order = self._sort_with_order(sample)

        lower = int(math.floor(adjusted))
        upper = int(math.ceil(adjusted))
        if lower == upper:
            return QuantileResult.of_order_statistic(s[lower - 1], order[lower - 1])

        weight = adjusted - lower
        value = (1.0 - weight) * s[lower - 1] + weight * s[upper - 1]
        return QuantileResult(
            value=float(value),
            lower_index=int(order[lower - 1]),
            upper_index=int(order[upper - 1]),
            weight=weight,
            indices=(int(order[lower - 1]), int(order[upper - 1])),
            weights=(1.0 - weight, weight),
        )

    def _expected_shortfall(self, level: float, sample: np.ndarray) -> QuantileResult:
        size = len(sample)
        s, order = self._sort_with_order(sample)
        if size == 1:
            return QuantileResult.of_order_statistic(s[0], order[0])

        # Integrate the quantile function in rank space over [start, end]
        start = self.index_correction()
        end = self.rank(level, size)
        boundary = self._check_index(end, size, True)
        lower = int(math.floor(boundary))
        upper = int(math.ceil(boundary))

        weights = np.zeros(upper, dtype=np.float64)
        if start < 1.0:
            weights[0] += min(end, 1.0) - start

        first = max(start, 1.0)
        last = min(end, float(size))
        for k in range(int(math.floor(first)), int(math.ceil(last))):
            u = max(first, k) - k
            v = min(last, k + 1.0) - k
            if v <= u:
                continue
            upper_part = 0.5 * (v * v - u * u)
            weights[k] += upper_part
            weights[k - 1] += (v - u) - upper_part

        if end > size:
            weights[size - 1] += end - max(start, float(size))
        weights /= end - start

        value = float(np.dot(weights, s[:upper]))
        return QuantileResult(
            value=value,
            lower_index=int(order[lower - 1]),
            upper_index=int(order[upper - 1]),
            weight=boundary - lower,
            indices=tuple(int(i) for i in order[:upper]),
            weights=tuple(float(w) for w in weights),
        )


class SampleInterpolationQuantileMethod(InterpolationQuantileMethod):
    """
    Linear interpolation with rank = level * n.

    The k-th order statistic is the quantile at level k / n (Hyndman-Fan
    type 4).
    """

    name = "sample_interpolation"

    def sample_correction(self, size: int) -> float:
        return float(size)

    def index_correction(self) -> float:
        return 0.0


class MidwayInterpolationQuantileMethod(InterpolationQuantileMethod):
    """
    Linear interpolation with rank = level * n + 1/2.

    The k-th order statistic is the quantile at level (k - 1/2) / n, the
    midpoint of its step in the empirical distribution (Hazen, type 5).
    Each order statistic carries mass 1/n in the expected shortfall.
    """

    name = "midway_interpolation"

    def sample_correction(self, size: int) -> float:
        return float(size)

    def index_correction(self) -> float:
        return 0.5


class WeibullInterpolationQuantileMethod(InterpolationQuantileMethod):
    """Linear interpolation with rank = level * (n + 1) (Weibull, type 6)."""

    name = "weibull_interpolation"

    def sample_correction(self, size: int) -> float:
        return float(size + 1)

    def index_correction(self) -> float:
        return 0.0


class ExcelInterpolationQuantileMethod(InterpolationQuantileMethod):
    """
    Linear interpolation with rank = level * (n - 1) + 1.

    Matches spreadsheet PERCENTILE.INC and numpy's default (type 7). Every
    level in (0, 1) maps inside [1, n], so the strict entry point never
    raises.
    """

    name = "excel_interpolation"

    def sample_correction(self, size: int) -> float:
        return float(size - 1)

    def index_correction(self) -> float:
        return 1.0


class MedianUnbiasedInterpolationQuantileMethod(InterpolationQuantileMethod):
    """Linear interpolation with rank = level * (n + 1/3) + 1/3 (type 8)."""

    name = "median_unbiased_interpolation"

    def sample_correction(self, size: int) -> float:
        return size + 1.0 / 3.0

    def index_correction(self) -> float:
        return 1.0 / 3.0


class NormalUnbiasedInterpolationQuantileMethod(InterpolationQuantileMethod):
    """Linear interpolation with rank = level * (n + 1/4) + 3/8 (type 9)."""

    name = "normal_unbiased_interpolation"

    def sample_correction(self, size: int) -> float:
        return size + 0.25

    def index_correction(self) -> float:
        return 0.375


__all__ = [
    "InterpolationQuantileMethod",
    "SampleInterpolationQuantileMethod",
    "MidwayInterpolationQuantileMethod",
    "WeibullInterpolationQuantileMethod",
    "ExcelInterpolationQuantileMethod",
    "MedianUnbiasedInterpolationQuantileMethod",
    "NormalUnbiasedInterpolationQuantileMethod",
]
