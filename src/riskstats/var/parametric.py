"""
Parametric (Gaussian) VaR and Expected Shortfall.

Fits a normal distribution to the P&L sample and reads VaR/ES off the
fitted distribution:

    VaR = -(mu + sigma * z)
    ES  = -(mu - sigma * phi(z) / alpha)

where alpha = 1 - confidence and z = Phi^-1(alpha). Used as a benchmark
for the historical estimates; fat-tailed samples show historical ES well
above the Gaussian number.
"""

from dataclasses import dataclass
import logging
from typing import Dict

import numpy as np
from scipy.stats import norm

from ..quantile.base import SampleLike, as_sample_array, validate_level

logger = logging.getLogger(__name__)


@dataclass
class ParametricVaRResult:
    """
    Result from parametric VaR.

    Attributes:
        confidence: Confidence level
        mean_pnl: Fitted mean
        std_pnl: Fitted standard deviation
        var: VaR (positive = loss)
        es: Expected Shortfall
    """
    confidence: float
    mean_pnl: float
    std_pnl: float
    var: float
    es: float

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "confidence": self.confidence,
            "mean_pnl": self.mean_pnl,
            "std_pnl": self.std_pnl,
            "var": self.var,
            "es": self.es,
        }


def _fit(pnl: SampleLike):
    arr = as_sample_array(pnl)
    mu = float(np.mean(arr))
    sigma = float(np.std(arr, ddof=1)) if len(arr) > 1 else 0.0
    return mu, sigma


def parametric_var(pnl: SampleLike, confidence: float = 0.99) -> float:
    """
    Gaussian VaR.

    Args:
        pnl: P&L distribution
        confidence: Confidence level

    Returns:
        VaR as positive number
    """
    alpha = 1.0 - validate_level(confidence)
    mu, sigma = _fit(pnl)
    return -(mu + sigma * norm.ppf(alpha))


def parametric_es(pnl: SampleLike, confidence: float = 0.99) -> float:
    """
    Gaussian Expected Shortfall.

    Args:
        pnl: P&L distribution
        confidence: Confidence level

    Returns:
        ES as positive number
    """
    alpha = 1.0 - validate_level(confidence)
    mu, sigma = _fit(pnl)
    z = norm.ppf(alpha)
    return -(mu - sigma * norm.pdf(z) / alpha)


def run_parametric_var(pnl: SampleLike, confidence: float = 0.99) -> ParametricVaRResult:
    """Fit once and return VaR and ES together."""
    alpha = 1.0 - validate_level(confidence)
    mu, sigma = _fit(pnl)
    z = norm.ppf(alpha)
    result = ParametricVaRResult(
        confidence=confidence,
        mean_pnl=mu,
        std_pnl=sigma,
        var=-(mu + sigma * z),
        es=-(mu - sigma * norm.pdf(z) / alpha),
    )
    logger.debug("Parametric VaR at %.4f: %s", confidence, result)
    return result


__all__ = [
    "ParametricVaRResult",
    "parametric_var",
    "parametric_es",
    "run_parametric_var",
]
