"""
Unit tests for expected shortfall estimation.
"""

import numpy as np
import pytest

from riskstats.quantile import (
    ExcelInterpolationQuantileMethod,
    IndexAboveQuantileMethod,
    MidwayInterpolationQuantileMethod,
    NearestIndexQuantileMethod,
    QuantileMethod,
    SampleInterpolationQuantileMethod,
    WeibullInterpolationQuantileMethod,
)

ALL_METHODS = [m.calculator() for m in QuantileMethod]


@pytest.fixture
def small_sample():
    """Five observations in scrambled order."""
    return [5.0, 1.0, 3.0, 2.0, 4.0]


@pytest.fixture
def pnl_sample():
    """Fat-tailed P&L sample."""
    rng = np.random.default_rng(2024)
    return rng.standard_t(4, 250) * 1_000.0


class TestShortfallValues:
    """Tests for hand-computed shortfalls."""

    def test_index_above(self, small_sample):
        """Test the step function average: (1 + 2 + 0.5 * 3) / 2.5."""
        result = IndexAboveQuantileMethod().expected_shortfall_from_unsorted(0.5, small_sample)

        assert abs(result.value - 1.8) < 1e-12
        assert result.indices == (1, 3, 2)
        assert np.allclose(result.weights, [0.4, 0.4, 0.2])
        assert result.lower_index == result.upper_index == 2

    def test_midway(self, small_sample):
        """Test midway interpolation gives each order statistic mass 1/n."""
        result = MidwayInterpolationQuantileMethod().expected_shortfall_from_unsorted(0.5, small_sample)

        assert abs(result.value - 1.8) < 1e-12
        assert np.allclose(result.weights, [0.4, 0.4, 0.2])

    def test_sample_interpolation(self, small_sample):
        """Test exact integral of the piecewise linear quantile function."""
        result = SampleInterpolationQuantileMethod().expected_shortfall_from_unsorted(0.5, small_sample)

        # flat 1.0 over rank [0, 1], then linear from 1.0 to 2.5 over rank [1, 2.5]
        assert abs(result.value - 3.625 / 2.5) < 1e-12
        assert result.indices == (1, 3, 2)
        assert np.allclose(result.weights, [1.5 / 2.5, 0.875 / 2.5, 0.125 / 2.5])
        assert result.lower_index == 3
        assert result.upper_index == 2
        assert abs(result.weight - 0.5) < 1e-12

    def test_excel_two_points(self):
        """Test Excel shortfall averages the linear quantile 10 * level."""
        result = ExcelInterpolationQuantileMethod().expected_shortfall_from_unsorted(0.5, [10.0, 0.0])

        assert abs(result.value - 2.5) < 1e-12
        assert result.indices == (1, 0)

    def test_flat_extrapolation_above(self):
        """Test ranks beyond the sample use the maximum."""
        result = WeibullInterpolationQuantileMethod().expected_shortfall_from_unsorted(
            0.99, [10.0, 20.0, 30.0]
        )

        # rank runs 0 -> 3.96: 1.5 * 10 + 1.0 * 20 + 1.46 * 30
        assert abs(result.value - 78.8 / 3.96) < 1e-12
        assert result.upper_index == 2

    def test_single_observation(self):
        """Test shortfall of a one-point sample is that point."""
        for calc in ALL_METHODS:
            result = calc.expected_shortfall_from_unsorted(0.7, [3.3])
            assert result.value == 3.3
            assert result.indices == (0,)


class TestShortfallProperties:
    """Properties shared by every method."""

    LEVELS = [0.001, 0.01, 0.025, 0.1, 0.37, 0.5, 0.8, 0.99]

    @pytest.mark.parametrize("calc", ALL_METHODS, ids=lambda c: c.name)
    def test_weights_reproduce_value(self, calc, pnl_sample):
        """Test weights sum to one and reproduce the value."""
        for level in self.LEVELS:
            result = calc.expected_shortfall_from_unsorted(level, pnl_sample)
            weights = result.weights_array()

            assert abs(weights.sum() - 1.0) < 1e-12
            assert np.all(weights >= 0.0)
            recomputed = np.dot(weights, pnl_sample[list(result.indices)])
            assert recomputed == pytest.approx(result.value, rel=1e-12, abs=1e-9)

    @pytest.mark.parametrize("calc", ALL_METHODS, ids=lambda c: c.name)
    def test_below_quantile(self, calc, pnl_sample):
        """Test the tail average never exceeds the quantile at the same level."""
        for level in self.LEVELS:
            es = calc.expected_shortfall_from_unsorted(level, pnl_sample).value
            q = calc.quantile_with_extrapolation_from_unsorted(level, pnl_sample).value
            assert es <= q + 1e-9

    @pytest.mark.parametrize("calc", ALL_METHODS, ids=lambda c: c.name)
    def test_monotone_in_level(self, calc, pnl_sample):
        """Test a larger tail fraction never lowers the shortfall."""
        values = [calc.expected_shortfall_from_unsorted(level, pnl_sample).value for level in self.LEVELS]
        assert all(a <= b + 1e-9 for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("calc", ALL_METHODS, ids=lambda c: c.name)
    def test_small_level_gives_minimum(self, calc, pnl_sample):
        """Test level -> 0 converges to the sample minimum."""
        result = calc.expected_shortfall_from_unsorted(1e-12, pnl_sample)
        assert result.value == pytest.approx(np.min(pnl_sample), rel=1e-9)

    @pytest.mark.parametrize(
        "calc",
        [IndexAboveQuantileMethod(), MidwayInterpolationQuantileMethod()],
        ids=lambda c: c.name,
    )
    def test_large_level_gives_mean(self, calc, pnl_sample):
        """Test level -> 1 converges to the sample mean for equal-mass methods."""
        result = calc.expected_shortfall_from_unsorted(1.0 - 1e-12, pnl_sample)
        assert result.value == pytest.approx(np.mean(pnl_sample), rel=1e-8, abs=1e-6)
        assert len(result.indices) == len(pnl_sample)

    def test_large_level_sample_interpolation(self):
        """Test level -> 1 gives the trapezoid mean for sample interpolation."""
        result = SampleInterpolationQuantileMethod().expected_shortfall_from_unsorted(
            1.0 - 1e-12, [3.0, 1.0, 2.0]
        )
        # (1 + (1 + 2) / 2 + (2 + 3) / 2) / 3
        assert result.value == pytest.approx(5.0 / 3.0, rel=1e-9)

    def test_nearest_index_boundary_mass(self):
        """Test nearest index gives the minimum mass 1.5 / n."""
        result = NearestIndexQuantileMethod().expected_shortfall_from_unsorted(
            0.5, [5.0, 1.0, 3.0, 2.0, 4.0]
        )
        # rank 3 selected from 2.5; masses 1.5, 1.0 and none yet for the 3rd
        assert np.allclose(result.weights, [0.6, 0.4, 0.0])
        assert abs(result.value - (1.5 * 1.0 + 1.0 * 2.0) / 2.5) < 1e-12

    @pytest.mark.parametrize("calc", ALL_METHODS, ids=lambda c: c.name)
    def test_permutation_invariant(self, calc, pnl_sample):
        """Test the shortfall does not depend on the sample order."""
        permuted = pnl_sample[::-1]
        a = calc.expected_shortfall_from_unsorted(0.05, pnl_sample)
        b = calc.expected_shortfall_from_unsorted(0.05, permuted)

        assert a.value == pytest.approx(b.value, rel=1e-14)
        assert [pnl_sample[i] for i in a.indices] == [permuted[i] for i in b.indices]
