"""
RiskStats: Quantile and Expected Shortfall Estimation Library

A modular library for:
- Estimating sample quantiles (VaR-style statistics) under a family of
  interchangeable rank/interpolation rules
- Estimating expected shortfall consistently with the chosen quantile rule
- Strict or flat-extrapolated evaluation at the edges of the sample
- Historical and parametric VaR/ES over P&L distributions

Scope: univariate samples only.
"""

import logging

__version__ = "0.1.0"

# Errors
from .errors import (
    QuantileError,
    InvalidLevelError,
    EmptySampleError,
    InvalidSampleError,
    OutOfRangeError,
)

# Quantile methods
from .quantile import (
    QuantileResult,
    QuantileCalculationMethod,
    check_index,
    DiscreteQuantileMethod,
    IndexAboveQuantileMethod,
    NearestIndexQuantileMethod,
    InterpolationQuantileMethod,
    SampleInterpolationQuantileMethod,
    MidwayInterpolationQuantileMethod,
    WeibullInterpolationQuantileMethod,
    ExcelInterpolationQuantileMethod,
    MedianUnbiasedInterpolationQuantileMethod,
    NormalUnbiasedInterpolationQuantileMethod,
    QuantileMethod,
    get_quantile_method,
)

# Conventions
from .conventions import EstimationConventions

# VaR
from .var import (
    HistoricalVaR,
    HistoricalVaRResult,
    compute_historical_var,
    compute_historical_es,
    ParametricVaRResult,
    parametric_var,
    parametric_es,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Errors
    "QuantileError",
    "InvalidLevelError",
    "EmptySampleError",
    "InvalidSampleError",
    "OutOfRangeError",
    # Quantile methods
    "QuantileResult",
    "QuantileCalculationMethod",
    "check_index",
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
    # Conventions
    "EstimationConventions",
    # VaR
    "HistoricalVaR",
    "HistoricalVaRResult",
    "compute_historical_var",
    "compute_historical_es",
    "ParametricVaRResult",
    "parametric_var",
    "parametric_es",
]
