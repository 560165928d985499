"""
Estimation conventions for quantile and expected shortfall calculations.

A convention fixes:
- Method: which quantile calculation method turns a level into a rank
- Extrapolation: flat extrapolation at the sample edges, or strict
  evaluation that raises when the rank leaves the sample range
- Confidence levels: the levels reported by the VaR engines

Presets:
- default: Midway interpolation, extrapolated, 95% / 99%
- regulatory: Empirical quantile (index above), strict, 97.5% / 99%
- spreadsheet: Excel interpolation, strict, 95% / 99%
"""

from dataclasses import dataclass
from typing import Tuple, Union

from .quantile.base import SampleLike, validate_level
from .quantile.methods import QuantileMethod
from .quantile.result import QuantileResult


@dataclass(frozen=True)
class EstimationConventions:
    """
    Container for estimation conventions.

    Attributes:
        method: Quantile calculation method
        extrapolate: Use flat extrapolation for quantiles outside the sample range
        confidence_levels: Confidence levels reported by VaR engines
    """
    method: QuantileMethod = QuantileMethod.MIDWAY_INTERPOLATION
    extrapolate: bool = True
    confidence_levels: Tuple[float, ...] = (0.95, 0.99)

    def __post_init__(self):
        if isinstance(self.method, str):
            object.__setattr__(self, "method", QuantileMethod.from_string(self.method))
        levels = tuple(validate_level(c) for c in self.confidence_levels)
        if not levels:
            raise ValueError("At least one confidence level is required")
        object.__setattr__(self, "confidence_levels", levels)

    @classmethod
    def default(cls) -> "EstimationConventions":
        """Midway interpolation with flat extrapolation."""
        return cls()

    @classmethod
    def regulatory(cls) -> "EstimationConventions":
        """Empirical quantile, strict, at the FRTB 97.5% and Basel 99% levels."""
        return cls(
            method=QuantileMethod.INDEX_ABOVE,
            extrapolate=False,
            confidence_levels=(0.975, 0.99)
        )

    @classmethod
    def spreadsheet(cls) -> "EstimationConventions":
        """Same numbers as PERCENTILE.INC in a spreadsheet."""
        return cls(
            method=QuantileMethod.EXCEL_INTERPOLATION,
            extrapolate=False,
            confidence_levels=(0.95, 0.99)
        )

    @classmethod
    def from_method(
        cls,
        method: Union[str, QuantileMethod],
        extrapolate: bool = True
    ) -> "EstimationConventions":
        """Conventions for a method given by name or enum member."""
        if isinstance(method, str):
            method = QuantileMethod.from_string(method)
        return cls(method=method, extrapolate=extrapolate)

    def quantile(self, level: float, sample: SampleLike) -> QuantileResult:
        """Quantile using the configured method and extrapolation policy."""
        calc = self.method.calculator()
        if self.extrapolate:
            return calc.quantile_with_extrapolation_from_unsorted(level, sample)
        return calc.quantile_from_unsorted(level, sample)

    def expected_shortfall(self, level: float, sample: SampleLike) -> QuantileResult:
        """Expected shortfall using the configured method."""
        return self.method.calculator().expected_shortfall_from_unsorted(level, sample)


__all__ = ["EstimationConventions"]
