"""
Result container shared by every quantile estimation method.

A QuantileResult carries the estimate together with the order statistics
that produced it. Indices always refer to positions in the caller's
original, unsorted sample and start from 0, so downstream consumers can
attribute the estimate back to individual observations (scenario dates,
simulation paths) without recomputing anything.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


@dataclass(frozen=True)
class QuantileResult:
    """
    Quantile or expected shortfall estimate.

    Attributes:
        value: The estimated quantile or expected shortfall
        lower_index: Original index of the lower bracketing order statistic
        upper_index: Original index of the upper bracketing order statistic
        weight: Fractional part of the bracketing rank, i.e. the weight on
            the upper order statistic (0.0 for an exact order statistic)
        indices: Original indices of all contributing order statistics,
            in ascending order of the sorted sample
        weights: Contribution weights matching ``indices``
    """
    value: float
    lower_index: int
    upper_index: int
    weight: float = 0.0
    indices: Tuple[int, ...] = ()
    weights: Tuple[float, ...] = ()

    def __post_init__(self):
        if len(self.indices) != len(self.weights):
            raise ValueError("indices and weights must have the same length")

    @classmethod
    def of_order_statistic(cls, value: float, index: int) -> "QuantileResult":
        """Result made of a single order statistic with full weight."""
        return cls(
            value=float(value),
            lower_index=int(index),
            upper_index=int(index),
            weight=0.0,
            indices=(int(index),),
            weights=(1.0,),
        )

    @property
    def is_interpolated(self) -> bool:
        """True if the estimate lies strictly between two order statistics."""
        return self.lower_index != self.upper_index and self.weight > 0.0

    def weights_array(self) -> np.ndarray:
        return np.array(self.weights, dtype=np.float64)

    def to_dict(self) -> Dict:
        """Convert to dictionary for reporting."""
        return {
            "value": self.value,
            "lower_index": self.lower_index,
            "upper_index": self.upper_index,
            "weight": self.weight,
            "indices": list(self.indices),
            "weights": list(self.weights),
        }


__all__ = ["QuantileResult"]
