"""Unit tests for the Pelz-Good asymptotic series."""

import math

import pytest
from scipy.special import kolmogorov
from scipy.stats import kstwo

from ksdist.core.pelz import pelz


@pytest.mark.parametrize("n", [1000, 5000, 100000])
@pytest.mark.parametrize("z", [0.5, 0.8, 1.0, 1.36, 1.8])
def test_matches_reference_distribution(n, z):
    """Five-digit agreement with scipy's two-sided distribution for n > 140."""
    x = z / math.sqrt(n)
    assert abs(pelz(n, x) - kstwo.cdf(x, n)) < 1e-5, f"n={n}, z={z}"


@pytest.mark.parametrize("z", [0.6, 1.0, 1.5])
def test_approaches_kolmogorov_limit(z):
    """As n grows, P[√n·D_n <= z] tends to Kolmogorov's distribution."""
    n = 10**8
    x = z / math.sqrt(n)
    assert abs(pelz(n, x) - (1.0 - kolmogorov(z))) < 1e-3


def test_increasing_in_x():
    n = 2000
    values = [pelz(n, j / 4000) for j in range(45, 200)]
    for a, b in zip(values, values[1:]):
        assert a <= b + 1e-12
