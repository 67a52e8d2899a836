"""
Unit Tests for Distribution Diagnostics
"""

import itertools

import numpy as np
import pytest

from oob_toolkit.core.models.ranges import RangeTable
from oob_toolkit.engine.diagnostics import (
    chi_squared_test,
    check_roll_uniformity,
    critical_value,
    exact_distribution,
    expected_counts,
    simulate_distribution,
)


class CyclingSource:
    """Deterministic source cycling through every face in order."""

    def __init__(self):
        self._faces = itertools.cycle(range(1, 11))

    def randint(self, a, b):
        return next(self._faces)


@pytest.fixture
def table() -> RangeTable:
    return RangeTable.from_mapping({"1-4": "A", "5-7": "B", "8-10": "C"}, label="Tiers")


class TestDistributions:
    """Tests for exact / simulated row counts."""

    def test_exact_distribution_when_partition_then_equals_widths(self, table):
        assert exact_distribution(table).tolist() == [4, 3, 3]

    def test_expected_counts_when_scaled_then_proportional(self, table):
        assert np.allclose(expected_counts(table, 1000), [400, 300, 300])

    def test_simulate_distribution_when_cycling_source_then_exact(self, table):
        observed = simulate_distribution(table, 100, CyclingSource())
        assert observed.tolist() == [40, 30, 30]


class TestChiSquared:
    """Tests for chi_squared_test()."""

    def test_chi_squared_when_perfect_fit_then_passes(self):
        result = chi_squared_test([400, 300, 300], [400, 300, 300])
        assert result.statistic == 0.0
        assert result.degrees_of_freedom == 2
        assert result.passed

    def test_chi_squared_when_skewed_then_fails(self):
        result = chi_squared_test([700, 150, 150], [400, 300, 300])
        assert not result.passed
        assert result.statistic > result.critical_value

    def test_chi_squared_when_single_category_then_trivially_passes(self):
        assert chi_squared_test([10], [10]).passed

    def test_chi_squared_when_length_mismatch_then_raises_error(self):
        with pytest.raises(ValueError, match="mismatch"):
            chi_squared_test([1, 2], [1, 2, 3])

    @pytest.mark.parametrize(
        "df,alpha,expected",
        [(1, 0.01, 6.635), (9, 0.01, 21.666), (13, 0.01, 27.688), (13, 0.05, 22.362), (15, 0.01, 30.578)],
    )
    def test_critical_value_when_df_given_then_exact_quantile(self, df, alpha, expected):
        assert critical_value(df, alpha) == pytest.approx(expected, abs=1e-3)

    def test_chi_squared_when_fourteen_buckets_over_threshold_then_fails(self):
        """df=13 rejects a statistic between the df=13 and df=15 thresholds."""
        expected = [100.0] * 14
        observed = [100.0] * 14
        observed[0] += 27.0
        observed[1] -= 27.0
        # 2 * 27^2 / 100 = 14.58 per pair; add a second skewed pair for 29.16
        observed[2] += 27.0
        observed[3] -= 27.0

        result = chi_squared_test(observed, expected, alpha=0.01)
        assert result.degrees_of_freedom == 13
        assert result.statistic == pytest.approx(29.16)
        assert result.critical_value == pytest.approx(27.688, abs=1e-3)
        assert not result.passed

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1, 1.5])
    def test_critical_value_when_alpha_out_of_range_then_raises_error(self, alpha):
        with pytest.raises(ValueError, match="alpha"):
            critical_value(3, alpha)

    def test_critical_value_when_df_zero_then_raises_error(self):
        with pytest.raises(ValueError, match="degrees_of_freedom"):
            critical_value(0)

    def test_roll_uniformity_when_cycling_source_then_passes(self):
        result = check_roll_uniformity(CyclingSource(), iterations=1000)
        assert result.statistic == 0.0
        assert result.passed
