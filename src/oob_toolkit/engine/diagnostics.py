"""
Module: engine.diagnostics

Purpose:
    Distribution checks for range tables and random sources. A table of
    widths w1..wk drawn N times should land wi/sides * N times in each row;
    a chi-squared goodness-of-fit test decides whether observed counts
    are consistent with that.

Key Functions:
    - exact_distribution(): Row counts over every face of the die once
    - simulate_distribution(): Row counts over N seeded draws
    - chi_squared_test(): Goodness of fit against the chi-squared quantile
    - check_table_fairness(): Simulate + test one RangeTable
    - check_roll_uniformity(): Test a raw random source over [1, sides]

Dependencies:
    - numpy: Count vectors and the statistic
    - scipy.stats: Chi-squared critical values for any df
    - engine.dice: RandomDraw

Used By:
    - tests/engine/test_diagnostics.py
    - tests/integration/test_table_fairness.py
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from scipy.stats import chi2

from oob_toolkit.core.models.ranges import RangeTable

from .dice import RandomDraw, RandomSource

logger = logging.getLogger(__name__)


DEFAULT_ITERATIONS = 100_000
DEFAULT_ALPHA = 0.01


@dataclass(frozen=True)
class ChiSquaredResult:
    """
    Outcome of one goodness-of-fit test.

    Attributes:
        statistic: Sum of (observed - expected)^2 / expected
        degrees_of_freedom: Categories minus one
        critical_value: Rejection threshold at alpha
        alpha: Significance level
        passed: statistic <= critical_value
    """

    statistic: float
    degrees_of_freedom: int
    critical_value: float
    alpha: float
    passed: bool


def critical_value(degrees_of_freedom: int, alpha: float = DEFAULT_ALPHA) -> float:
    """
    Upper-tail chi-squared quantile at significance ``alpha``.

    Example:
        >>> round(critical_value(9, 0.01), 3)
        21.666

    Raises:
        ValueError: df below 1, or alpha outside (0, 1)
    """
    if degrees_of_freedom < 1:
        raise ValueError(f"degrees_of_freedom must be positive: {degrees_of_freedom}")
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be in (0, 1): {alpha}")
    return float(chi2.ppf(1 - alpha, degrees_of_freedom))


def expected_counts(table: RangeTable, iterations: int) -> np.ndarray:
    widths = np.array([r.width for r in table.ranges], dtype=float)
    return widths / table.sides * iterations


def exact_distribution(table: RangeTable) -> np.ndarray:
    """Row hit counts when every face 1..sides is rolled exactly once."""
    indices = [table.row_index(roll) for roll in range(1, table.sides + 1)]
    return np.bincount(indices, minlength=len(table))


def simulate_distribution(
    table: RangeTable,
    iterations: int = DEFAULT_ITERATIONS,
    source: Optional[RandomSource] = None,
) -> np.ndarray:
    """
    Row hit counts over ``iterations`` draws through RandomDraw.

    Args:
        table: Table under test
        iterations: Number of draws
        source: Random source (seed it for reproducible runs)
    """
    draw = RandomDraw(source if source is not None else random.Random())
    indices = [table.row_index(draw.roll(table.label, table.sides)) for _ in range(iterations)]
    return np.bincount(indices, minlength=len(table))


def chi_squared_test(
    observed: Sequence[float],
    expected: Sequence[float],
    alpha: float = DEFAULT_ALPHA,
) -> ChiSquaredResult:
    """
    Raises:
        ValueError: Mismatched lengths or a non-positive expected count
    """
    obs = np.asarray(observed, dtype=float)
    exp = np.asarray(expected, dtype=float)
    if obs.shape != exp.shape:
        raise ValueError(f"observed/expected length mismatch: {obs.shape} vs {exp.shape}")
    if np.any(exp <= 0):
        raise ValueError("expected counts must be positive")

    df = obs.size - 1
    if df < 1:
        return ChiSquaredResult(0.0, 0, 0.0, alpha, True)

    statistic = float(np.sum((obs - exp) ** 2 / exp))
    threshold = critical_value(df, alpha)
    return ChiSquaredResult(statistic, df, threshold, alpha, statistic <= threshold)


def check_table_fairness(
    table: RangeTable,
    iterations: int = DEFAULT_ITERATIONS,
    alpha: float = DEFAULT_ALPHA,
    seed: Optional[int] = None,
) -> ChiSquaredResult:
    observed = simulate_distribution(table, iterations, random.Random(seed))
    result = chi_squared_test(observed, expected_counts(table, iterations), alpha)
    logger.info(
        f"{table.label or 'table'}: chi2={result.statistic:.3f} df={result.degrees_of_freedom} "
        f"critical={result.critical_value:.3f} passed={result.passed}"
    )
    return result


def check_roll_uniformity(
    source: Optional[RandomSource] = None,
    sides: int = 10,
    iterations: int = DEFAULT_ITERATIONS,
    alpha: float = DEFAULT_ALPHA,
) -> ChiSquaredResult:
    """Test that a random source is uniform over every face of the die."""
    draw = RandomDraw(source if source is not None else random.Random())
    faces = [draw.roll("uniformity", sides) - 1 for _ in range(iterations)]
    observed = np.bincount(faces, minlength=sides)
    expected = np.full(sides, iterations / sides)
    return chi_squared_test(observed, expected, alpha)
