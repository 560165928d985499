"""
Registry of the available quantile calculation methods.

The set of methods is closed; QuantileMethod enumerates them so a method
can be selected by name from configuration or the command line.
"""

from enum import Enum
from typing import Dict, Union

from .base import QuantileCalculationMethod
from .discrete import IndexAboveQuantileMethod, NearestIndexQuantileMethod
from .interpolation import (
    ExcelInterpolationQuantileMethod,
    MedianUnbiasedInterpolationQuantileMethod,
    MidwayInterpolationQuantileMethod,
    NormalUnbiasedInterpolationQuantileMethod,
    SampleInterpolationQuantileMethod,
    WeibullInterpolationQuantileMethod,
)


# Methods hold no state, one shared instance each
_CALCULATORS: Dict[str, QuantileCalculationMethod] = {
    calc.name: calc
    for calc in (
        IndexAboveQuantileMethod(),
        NearestIndexQuantileMethod(),
        SampleInterpolationQuantileMethod(),
        MidwayInterpolationQuantileMethod(),
        WeibullInterpolationQuantileMethod(),
        ExcelInterpolationQuantileMethod(),
        MedianUnbiasedInterpolationQuantileMethod(),
        NormalUnbiasedInterpolationQuantileMethod(),
    )
}


class QuantileMethod(Enum):
    """Quantile calculation method enumeration."""
    INDEX_ABOVE = "index_above"
    NEAREST_INDEX = "nearest_index"
    SAMPLE_INTERPOLATION = "sample_interpolation"
    MIDWAY_INTERPOLATION = "midway_interpolation"
    WEIBULL_INTERPOLATION = "weibull_interpolation"
    EXCEL_INTERPOLATION = "excel_interpolation"
    MEDIAN_UNBIASED_INTERPOLATION = "median_unbiased_interpolation"
    NORMAL_UNBIASED_INTERPOLATION = "normal_unbiased_interpolation"

    @classmethod
    def from_string(cls, s: str) -> "QuantileMethod":
        """
        Parse a method from its name.

        Case, dashes and spaces are ignored, so "Midway-Interpolation"
        and "MIDWAY INTERPOLATION" both resolve. A few common aliases
        are accepted as well.
        """
        aliases = {
            "midway": cls.MIDWAY_INTERPOLATION,
            "hazen": cls.MIDWAY_INTERPOLATION,
            "excel": cls.EXCEL_INTERPOLATION,
            "linear": cls.EXCEL_INTERPOLATION,
            "weibull": cls.WEIBULL_INTERPOLATION,
            "inverted_cdf": cls.INDEX_ABOVE,
            "nearest": cls.NEAREST_INDEX,
        }
        key = s.strip().lower().replace("-", "_").replace(" ", "_")
        for member in cls:
            if member.value == key:
                return member
        if key in aliases:
            return aliases[key]
        raise ValueError(f"Unknown quantile method: {s}")

    def calculator(self) -> QuantileCalculationMethod:
        """Shared calculator instance for this method."""
        return _CALCULATORS[self.value]


def get_quantile_method(
    method: Union[str, QuantileMethod, QuantileCalculationMethod]
) -> QuantileCalculationMethod:
    """
    Resolve a method name, enum member or calculator to a calculator.

    Args:
        method: Registry name, QuantileMethod member or calculator instance

    Returns:
        QuantileCalculationMethod
    """
    if isinstance(method, QuantileCalculationMethod):
        return method
    if isinstance(method, QuantileMethod):
        return method.calculator()
    if isinstance(method, str):
        return QuantileMethod.from_string(method).calculator()
    raise TypeError(f"Cannot resolve quantile method from {type(method).__name__}")


__all__ = ["QuantileMethod", "get_quantile_method"]
