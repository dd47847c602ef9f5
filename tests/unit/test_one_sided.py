"""Unit tests for the one-sided upper tail P[D_n+ >= x]."""

import math

import pytest
from scipy.special import smirnov

from ksdist.core.one_sided import one_sided_upper_tail, one_sided_upper_tail_asymptotic


@pytest.mark.parametrize("n", [2, 5, 20, 100, 1000, 5000])
@pytest.mark.parametrize("x", [0.05, 0.1, 0.3, 0.5, 0.7, 0.9])
def test_matches_smirnov(n, x):
    """Stable sum agrees with scipy's exact one-sided distribution."""
    expected = smirnov(n, x)
    actual = one_sided_upper_tail(n, x)
    assert actual == pytest.approx(expected, rel=1e-8, abs=1e-300), f"n={n}, x={x}"


def test_single_observation():
    """For n = 1, P[D_1+ >= x] = 1 - x."""
    for x in [0.1, 0.4, 0.8]:
        assert one_sided_upper_tail(1, x) == pytest.approx(1.0 - x)


def test_decreasing_in_x():
    values = [one_sided_upper_tail(50, j / 50) for j in range(1, 50)]
    for a, b in zip(values, values[1:]):
        assert a >= b


def test_large_n_uses_asymptotic_formula():
    n, x = 300000, 0.002
    assert one_sided_upper_tail(n, x) == one_sided_upper_tail_asymptotic(n, x)


def test_asymptotic_close_to_exponential_limit():
    """For large n the tail approaches exp(-2n·x²)."""
    n, x = 300000, 0.002
    value = one_sided_upper_tail_asymptotic(n, x)
    assert 0.0 < value < 1.0
    assert abs(value - math.exp(-2.0 * n * x * x)) < 2e-3


def test_asymptotic_vanishes_when_correction_negative():
    """The bracketed correction is clipped to 0 rather than going negative."""
    assert one_sided_upper_tail_asymptotic(1, 2.0) == 0.0
