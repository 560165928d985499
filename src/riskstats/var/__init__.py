"""
VaR package - Value at Risk and Expected Shortfall from P&L samples.

Provides:
- Historical VaR/ES with a configurable quantile method
- Parametric (Gaussian) VaR/ES benchmark
"""

from .historical import (
    HistoricalVaR,
    HistoricalVaRResult,
    compute_historical_var,
    compute_historical_es,
    load_pnl_from_csv,
)
from .parametric import (
    ParametricVaRResult,
    parametric_var,
    parametric_es,
    run_parametric_var,
)

__all__ = [
    "HistoricalVaR",
    "HistoricalVaRResult",
    "compute_historical_var",
    "compute_historical_es",
    "load_pnl_from_csv",
    "ParametricVaRResult",
    "parametric_var",
    "parametric_es",
    "run_parametric_var",
]
