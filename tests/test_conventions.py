"""
Unit tests for the method registry and estimation conventions.
"""

import pytest

from riskstats.conventions import EstimationConventions
from riskstats.errors import InvalidLevelError, OutOfRangeError
from riskstats.quantile import (
    ExcelInterpolationQuantileMethod,
    IndexAboveQuantileMethod,
    MidwayInterpolationQuantileMethod,
    QuantileMethod,
    get_quantile_method,
)


class TestQuantileMethod:
    """Tests for the method registry."""

    def test_from_string(self):
        """Test parsing method names."""
        assert QuantileMethod.from_string("midway_interpolation") == QuantileMethod.MIDWAY_INTERPOLATION
        assert QuantileMethod.from_string("Midway-Interpolation") == QuantileMethod.MIDWAY_INTERPOLATION
        assert QuantileMethod.from_string("INDEX ABOVE") == QuantileMethod.INDEX_ABOVE
        assert QuantileMethod.from_string("  excel_interpolation ") == QuantileMethod.EXCEL_INTERPOLATION

    def test_aliases(self):
        """Test common aliases."""
        assert QuantileMethod.from_string("hazen") == QuantileMethod.MIDWAY_INTERPOLATION
        assert QuantileMethod.from_string("linear") == QuantileMethod.EXCEL_INTERPOLATION
        assert QuantileMethod.from_string("inverted_cdf") == QuantileMethod.INDEX_ABOVE

    def test_unknown_method(self):
        """Test unknown names raise."""
        with pytest.raises(ValueError):
            QuantileMethod.from_string("cubic")

    def test_calculator_matches_member(self):
        """Test every member resolves to a calculator of the same name."""
        for member in QuantileMethod:
            calc = member.calculator()
            assert calc.name == member.value
            assert calc is member.calculator()

    def test_calculator_types(self):
        """Test a few members map to the expected classes."""
        assert isinstance(QuantileMethod.INDEX_ABOVE.calculator(), IndexAboveQuantileMethod)
        assert isinstance(QuantileMethod.EXCEL_INTERPOLATION.calculator(), ExcelInterpolationQuantileMethod)

    def test_get_quantile_method(self):
        """Test resolving names, members and instances."""
        calc = MidwayInterpolationQuantileMethod()

        assert get_quantile_method(calc) is calc
        assert isinstance(get_quantile_method("midway"), MidwayInterpolationQuantileMethod)
        assert get_quantile_method(QuantileMethod.INDEX_ABOVE) is QuantileMethod.INDEX_ABOVE.calculator()
        with pytest.raises(TypeError):
            get_quantile_method(5)


class TestEstimationConventions:
    """Tests for estimation conventions."""

    def test_default(self):
        """Test default conventions."""
        conv = EstimationConventions.default()

        assert conv.method == QuantileMethod.MIDWAY_INTERPOLATION
        assert conv.extrapolate
        assert conv.confidence_levels == (0.95, 0.99)

    def test_regulatory(self):
        """Test regulatory preset."""
        conv = EstimationConventions.regulatory()

        assert conv.method == QuantileMethod.INDEX_ABOVE
        assert not conv.extrapolate
        assert 0.975 in conv.confidence_levels

    def test_spreadsheet(self):
        """Test spreadsheet preset matches PERCENTILE.INC."""
        conv = EstimationConventions.spreadsheet()
        assert conv.quantile(0.25, [1.0, 2.0, 3.0, 4.0, 5.0]).value == 2.0

    def test_method_from_string(self):
        """Test method names are parsed on construction."""
        conv = EstimationConventions(method="weibull")
        assert conv.method == QuantileMethod.WEIBULL_INTERPOLATION

        conv = EstimationConventions.from_method("sample_interpolation", extrapolate=False)
        assert conv.method == QuantileMethod.SAMPLE_INTERPOLATION
        assert not conv.extrapolate

    def test_invalid_confidence(self):
        """Test confidence levels are validated."""
        with pytest.raises(InvalidLevelError):
            EstimationConventions(confidence_levels=(0.95, 1.0))
        with pytest.raises(ValueError):
            EstimationConventions(confidence_levels=())

    def test_strict_vs_extrapolated(self):
        """Test the extrapolation flag selects the entry point."""
        sample = [10.0, 20.0, 30.0]
        strict = EstimationConventions(method=QuantileMethod.WEIBULL_INTERPOLATION, extrapolate=False)
        flat = EstimationConventions(method=QuantileMethod.WEIBULL_INTERPOLATION, extrapolate=True)

        with pytest.raises(OutOfRangeError):
            strict.quantile(0.99, sample)
        assert flat.quantile(0.99, sample).value == 30.0

    def test_expected_shortfall(self):
        """Test shortfall dispatch."""
        conv = EstimationConventions.default()
        result = conv.expected_shortfall(0.5, [5.0, 1.0, 3.0, 2.0, 4.0])
        assert abs(result.value - 1.8) < 1e-12
