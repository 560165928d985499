"""
Abstract quantile calculation method and the shared index bounds policy.

Every concrete method maps a probability level to a (possibly fractional)
rank in the sorted sample. The rank is then passed through check_index,
which either clamps it into [1, size] (flat extrapolation) or rejects it.

Conventions:
- The level is in decimal, i.e. 99% = 0.99, and 0 < level < 1
- The level is measured from the bottom: the 99% quantile has 99% of the
  observations below it and 1% above
- Samples are treated as unsorted; result indices refer to the original
  sample and start from 0
"""

from abc import ABC, abstractmethod
import logging
from typing import Sequence, Tuple, Union

import numpy as np

from ..errors import (
    EmptySampleError,
    InvalidLevelError,
    InvalidSampleError,
    OutOfRangeError,
)
from .result import QuantileResult

logger = logging.getLogger(__name__)

SampleLike = Union[Sequence[float], np.ndarray]


def check_index(index: float, size: int, is_extrapolated: bool) -> float:
    """
    Check a rank lies within the sample data range.

    Args:
        index: Rank implied by the level (1-based, possibly fractional)
        size: Sample size
        is_extrapolated: Clamp to the nearest data point if True,
            raise if False

    Returns:
        The rank, clamped into [1, size] when extrapolating

    Raises:
        OutOfRangeError: If not extrapolating and the rank is outside [1, size]
    """
    if is_extrapolated:
        return min(max(index, 1.0), float(size))
    if index < 1:
        raise OutOfRangeError(OutOfRangeError.BELOW, index=index, size=size)
    if index > size:
        raise OutOfRangeError(OutOfRangeError.ABOVE, index=index, size=size)
    return index


def validate_level(level: float) -> float:
    """Return the level as a float, raising InvalidLevelError unless 0 < level < 1."""
    try:
        value = float(level)
    except (TypeError, ValueError):
        raise InvalidLevelError(level) from None
    if not (0.0 < value < 1.0):
        raise InvalidLevelError(level)
    return value


def as_sample_array(sample: SampleLike) -> np.ndarray:
    """
    Convert a sample to a 1-D float array without modifying the input.

    Raises:
        EmptySampleError: If the sample has no observations
        InvalidSampleError: If the sample is not 1-D or holds non-finite values
    """
    try:
        arr = np.asarray(sample, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidSampleError(f"Sample must be a sequence of numbers: {e}") from e
    if arr.ndim != 1:
        raise InvalidSampleError(f"Sample must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise EmptySampleError()
    if not np.all(np.isfinite(arr)):
        raise InvalidSampleError("Sample contains NaN or infinite values")
    return arr


class QuantileCalculationMethod(ABC):
    """
    Abstract method to estimate quantiles and expected shortfalls from
    sample observations.

    Subclasses supply the _quantile and _expected_shortfall hooks; the
    public entry points validate inputs and pick the extrapolation policy.
    Instances hold no state and can be shared between threads.
    """

    name: str = ""

    def quantile_from_unsorted(self, level: float, sample: SampleLike) -> QuantileResult:
        """
        Compute the quantile estimation.

        If the rank computed from the level is outside the sample data
        range, OutOfRangeError is raised.

        Args:
            level: Quantile level in (0, 1)
            sample: Sample observations, unsorted

        Returns:
            QuantileResult
        """
        level = validate_level(level)
        return self._quantile(level, as_sample_array(sample), False)

    def quantile_with_extrapolation_from_unsorted(
        self,
        level: float,
        sample: SampleLike
    ) -> QuantileResult:
        """
        Compute the quantile estimation with flat extrapolation.

        If the rank computed from the level is outside the sample data
        range, the nearest data point is used.

        Args:
            level: Quantile level in (0, 1)
            sample: Sample observations, unsorted

        Returns:
            QuantileResult
        """
        level = validate_level(level)
        return self._quantile(level, as_sample_array(sample), True)

    def expected_shortfall_from_unsorted(self, level: float, sample: SampleLike) -> QuantileResult:
        """
        Compute the expected shortfall.

        The expected shortfall at level 99% is the average of the smallest
        99% of the observations, i.e. the mean of this method's quantile
        over (0, level]. Flat extrapolation is always used, so this is
        coherent with quantile_with_extrapolation_from_unsorted.

        Args:
            level: Shortfall level in (0, 1)
            sample: Sample observations, unsorted

        Returns:
            QuantileResult whose weights sum to 1
        """
        level = validate_level(level)
        return self._expected_shortfall(level, as_sample_array(sample))

    def __call__(self, level: float, sample: SampleLike) -> float:
        """Convenience method returning the extrapolated quantile value."""
        return self.quantile_with_extrapolation_from_unsorted(level, sample).value

    @abstractmethod
    def _quantile(self, level: float, sample: np.ndarray, is_extrapolated: bool) -> QuantileResult:
        """Compute the quantile of a validated sample."""
        pass

    @abstractmethod
    def _expected_shortfall(self, level: float, sample: np.ndarray) -> QuantileResult:
        """Compute the expected shortfall of a validated sample, coherent with _quantile."""
        pass

    def _check_index(self, index: float, size: int, is_extrapolated: bool) -> float:
        checked = check_index(index, size, is_extrapolated)
        if checked != index:
            logger.debug(
                "%s: rank %.6f clamped to %.6f (sample size %d)",
                type(self).__name__, index, checked, size
            )
        return checked

    @staticmethod
    def _sort_with_order(sample: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Stable sort of the sample.

        Returns:
            Tuple of (sorted values, original index of each sorted value)
        """
        order = np.argsort(sample, kind="stable")
        return sample[order], order

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = [
    "QuantileCalculationMethod",
    "check_index",
    "validate_level",
    "as_sample_array",
]
