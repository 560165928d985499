"""
Quantile package - quantile and expected shortfall estimation.

Provides:
- QuantileCalculationMethod: Abstract estimator with strict, extrapolated
  and expected shortfall entry points
- Discrete methods: IndexAbove, NearestIndex
- Interpolation methods: Sample, Midway, Weibull, Excel, MedianUnbiased,
  NormalUnbiased
- QuantileResult: Estimate plus contributing order statistics
- QuantileMethod: Registry of the methods by name
"""

from .result import QuantileResult
from .base import (
    QuantileCalculationMethod,
    check_index,
    validate_level,
    as_sample_array,
)
from .discrete import (
    DiscreteQuantileMethod,
    IndexAboveQuantileMethod,
    NearestIndexQuantileMethod,
)
from .interpolation import (
    InterpolationQuantileMethod,
    SampleInterpolationQuantileMethod,
    MidwayInterpolationQuantileMethod,
    WeibullInterpolationQuantileMethod,
    ExcelInterpolationQuantileMethod,
    MedianUnbiasedInterpolationQuantileMethod,
    NormalUnbiasedInterpolationQuantileMethod,
)
from .methods import QuantileMethod, get_quantile_method

__all__ = [
    "QuantileResult",
    "QuantileCalculationMethod",
    "check_index",
    "validate_level",
    "as_sample_array",
    "DiscreteQuantileMethod",
    "IndexAboveQuantileMethod",
    "NearestIndexQuantileMethod",
    "InterpolationQuantileMethod",
    "SampleInterpolationQuantileMethod",
    "MidwayInterpolationQuantileMethod",
    "WeibullInterpolationQuantileMethod",
    "ExcelInterpolationQuantileMethod",
    "MedianUnbiasedInterpolationQuantileMethod",
    "NormalUnbiasedInterpolationQuantileMethod",
    "QuantileMethod",
    "get_quantile_method",
]
