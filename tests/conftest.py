"""
Pytest configuration and shared fixtures.
"""

import pytest


@pytest.fixture
def small_n():
    """Sample sizes handled entirely by the exact algorithms."""
    return [2, 3, 5, 10, 25, 60, 100, 140]


@pytest.fixture
def large_n():
    """Sample sizes routed to Durbin near 0 and to the asymptotic series elsewhere."""
    return [141, 500, 1000, 10000]


@pytest.fixture
def interior_grid():
    """Statistics strictly inside (0, 1)."""
    return [j / 200 for j in range(1, 200)]


@pytest.fixture
def mtw_reference():
    """
    Reference point from Marsaglia, Tsang & Wang (2003):
    K(10, 0.274) = P[D_10 < 0.274] = 0.6284796154565043
    """
    return {"n": 10, "x": 0.274, "cdf": 0.6284796154565043}
