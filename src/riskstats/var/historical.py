"""
Historical VaR and Expected Shortfall from a P&L sample.

Given a P&L distribution (one value per historical scenario):
1. VaR at confidence c is the loss at the (1 - c) quantile of P&L
2. ES at confidence c is the average loss over the worst (1 - c) fraction
3. Both are reported as positive numbers (losses)
4. The ES attribution maps back to the scenarios (e.g. dates) behind it

The quantile method and the extrapolation policy come from
EstimationConventions, so the same P&L can be evaluated under different
estimators.
"""

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..conventions import EstimationConventions
from ..quantile.base import as_sample_array, validate_level
from ..quantile.result import QuantileResult

logger = logging.getLogger(__name__)

PnLLike = Union[pd.Series, np.ndarray, Sequence[float]]


@dataclass
class HistoricalVaRResult:
    """
    Result from historical VaR.

    Attributes:
        var: VaR by confidence level (positive = loss)
        es: Expected Shortfall by confidence level
        num_scenarios: Number of scenarios in the P&L sample
        worst_loss: Maximum loss
        best_gain: Maximum gain
        mean_pnl: Average P&L
        method: Name of the quantile method used
        pnl_distribution: Full P&L distribution
    """
    var: Dict[float, float]
    es: Dict[float, float]
    num_scenarios: int
    worst_loss: float
    best_gain: float
    mean_pnl: float
    method: str
    pnl_distribution: np.ndarray = field(repr=False)
    scenario_labels: Optional[List] = field(default=None, repr=False)

    @property
    def var_95(self) -> Optional[float]:
        return self.var.get(0.95)

    @property
    def var_99(self) -> Optional[float]:
        return self.var.get(0.99)

    @property
    def es_95(self) -> Optional[float]:
        return self.es.get(0.95)

    @property
    def es_99(self) -> Optional[float]:
        return self.es.get(0.99)

    def to_dict(self) -> Dict:
        """Convert to dictionary for reporting."""
        out = {
            "method": self.method,
            "num_scenarios": self.num_scenarios,
            "worst_loss": self.worst_loss,
            "best_gain": self.best_gain,
            "mean_pnl": self.mean_pnl,
        }
        for conf in sorted(self.var):
            tag = _confidence_tag(conf)
            out[f"var_{tag}"] = self.var[conf]
            out[f"es_{tag}"] = self.es[conf]
        return out

    def to_frame(self) -> pd.DataFrame:
        """VaR and ES as a DataFrame indexed by confidence level."""
        confs = sorted(self.var)
        return pd.DataFrame(
            {
                "var": [self.var[c] for c in confs],
                "es": [self.es[c] for c in confs],
            },
            index=pd.Index(confs, name="confidence"),
        )


def _confidence_tag(confidence: float) -> str:
    """0.95 -> '95', 0.975 -> '97.5'."""
    return f"{confidence * 100:g}"


class HistoricalVaR:
    """
    Historical VaR engine over a P&L sample.

    Example:
        >>> hv = HistoricalVaR(pnl_series)
        >>> hv.var(0.99), hv.es(0.99)
    """

    def __init__(
        self,
        pnl: PnLLike,
        conventions: Optional[EstimationConventions] = None,
        labels: Optional[Sequence] = None
    ):
        """
        Initialize historical VaR.

        Args:
            pnl: P&L per scenario (positive = gain). A pandas Series
                provides scenario labels through its index.
            conventions: Estimation conventions (default: EstimationConventions.default())
            labels: Scenario labels, overriding the Series index
        """
        if isinstance(pnl, pd.Series):
            if labels is None:
                labels = pnl.index
            pnl = pnl.to_numpy(dtype=np.float64)
        self.pnl = as_sample_array(pnl).copy()
        if labels is None:
            self.labels = pd.RangeIndex(len(self.pnl))
        else:
            self.labels = pd.Index(labels)
            if len(self.labels) != len(self.pnl):
                raise ValueError(
                    f"Got {len(self.labels)} labels for {len(self.pnl)} P&L values"
                )
        self.conventions = conventions or EstimationConventions.default()

    @staticmethod
    def tail_level(confidence: float) -> float:
        """Bottom-measured level for a confidence level, e.g. 0.99 -> 0.01."""
        return 1.0 - validate_level(confidence)

    def var_result(self, confidence: float) -> QuantileResult:
        """P&L quantile at the tail level (negative of VaR)."""
        return self.conventions.quantile(self.tail_level(confidence), self.pnl)

    def es_result(self, confidence: float) -> QuantileResult:
        """P&L expected shortfall at the tail level (negative of ES)."""
        return self.conventions.expected_shortfall(self.tail_level(confidence), self.pnl)

    def var(self, confidence: float = 0.99) -> float:
        """VaR as a positive number representing potential loss."""
        return -self.var_result(confidence).value

    def es(self, confidence: float = 0.99) -> float:
        """Expected Shortfall as a positive number."""
        return -self.es_result(confidence).value

    def contributing_scenarios(self, confidence: float = 0.99) -> pd.Series:
        """
        Scenarios behind the Expected Shortfall and their weights.

        Returns:
            Series of weights indexed by scenario label, worst scenario first
        """
        result = self.es_result(confidence)
        return pd.Series(
            result.weights,
            index=self.labels[list(result.indices)],
            name="weight",
        )

    def run(self) -> HistoricalVaRResult:
        """
        Compute VaR and ES at every configured confidence level.

        Returns:
            HistoricalVaRResult
        """
        var = {}
        es = {}
        for conf in self.conventions.confidence_levels:
            var[conf] = self.var(conf)
            es[conf] = self.es(conf)

        logger.debug(
            "Historical VaR over %d scenarios with %s: %s",
            len(self.pnl), self.conventions.method.value, var
        )
        return HistoricalVaRResult(
            var=var,
            es=es,
            num_scenarios=len(self.pnl),
            worst_loss=float(-np.min(self.pnl)),
            best_gain=float(np.max(self.pnl)),
            mean_pnl=float(np.mean(self.pnl)),
            method=self.conventions.method.value,
            pnl_distribution=self.pnl,
            scenario_labels=list(self.labels),
        )


def compute_historical_var(
    pnl: PnLLike,
    confidence: float = 0.95,
    conventions: Optional[EstimationConventions] = None
) -> float:
    """
    Convenience function to compute historical VaR.

    Args:
        pnl: P&L distribution
        confidence: Confidence level (default 95%)
        conventions: Estimation conventions

    Returns:
        VaR (as positive number representing potential loss)
    """
    return HistoricalVaR(pnl, conventions).var(confidence)


def compute_historical_es(
    pnl: PnLLike,
    confidence: float = 0.95,
    conventions: Optional[EstimationConventions] = None
) -> float:
    """
    Convenience function to compute historical Expected Shortfall.

    Args:
        pnl: P&L distribution
        confidence: Confidence level
        conventions: Estimation conventions

    Returns:
        ES (as positive number)
    """
    return HistoricalVaR(pnl, conventions).es(confidence)


def load_pnl_from_csv(
    filepath: str,
    pnl_column: str = "pnl",
    date_column: Optional[str] = "date"
) -> pd.Series:
    """
    Load a P&L distribution from a CSV file.

    Expected format:
        date, pnl
        2022-01-03, -12500.0
        2022-01-04, 8300.0
        ...

    Args:
        filepath: Path to CSV file
        pnl_column: Name of P&L column
        date_column: Name of date column, or None if there is none

    Returns:
        P&L Series indexed by date (or by row number)
    """
    df = pd.read_csv(filepath)
    if pnl_column not in df.columns:
        raise ValueError(f"Column '{pnl_column}' not found in {filepath}")
    if date_column and date_column in df.columns:
        df[date_column] = pd.to_datetime(df[date_column])
        df = df.set_index(date_column)
    return df[pnl_column].astype(float).dropna()


__all__ = [
    "HistoricalVaR",
    "HistoricalVaRResult",
    "compute_historical_var",
    "compute_historical_es",
    "load_pnl_from_csv",
]
