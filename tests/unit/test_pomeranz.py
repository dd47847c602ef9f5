"""Unit tests for the Pomeranz recursion."""

import math

import pytest
from scipy.stats import kstwo

from ksdist.core.durbin import durbin_matrix
from ksdist.core.pomeranz import floor_ceil_bounds, pomeranz
from ksdist.utils.types import KSConvergenceError


# ===========================
# Summation Bounds Tests
# ===========================


def test_bounds_shape_and_breakpoints():
    """Breakpoints step by one from the fractional offset and end at n."""
    n, t = 10, 2.74
    A, floors, ceilings = floor_ceil_bounds(n, t)

    assert len(A) == len(floors) == len(ceilings) == 2 * n + 3
    assert A[2] == pytest.approx(0.26)
    assert A[3] == pytest.approx(0.74)
    assert A[4] == pytest.approx(1.26)
    assert A[5] == pytest.approx(1.74)
    assert A[2 * n + 2] == n


@pytest.mark.parametrize("t", [2.74, 2.3, 3.0])
def test_bounds_window_width(t):
    """Each row sums over a window of about 2t indices."""
    n = 10
    _, floors, ceilings = floor_ceil_bounds(n, t)
    for i in range(2, 2 * n + 3):
        width = ceilings[i] - floors[i]
        assert 2 * t - 2 <= width <= 2 * t + 2, f"i={i}"


# ===========================
# Accuracy Tests
# ===========================


@pytest.mark.parametrize("n", [5, 20, 60, 100, 140])
@pytest.mark.parametrize("w", [0.8, 1.5, 2.5, 3.9])
def test_agrees_with_durbin(n, w):
    """Both exact algorithms agree to near machine precision."""
    x = math.sqrt(w / n)
    if x >= 1.0 - 1.0 / n:
        pytest.skip("closed form region")
    assert abs(pomeranz(n, x) - durbin_matrix(n, x)) < 1e-10


@pytest.mark.parametrize("n,x", [(10, 0.3), (60, 0.15), (60, 0.25), (140, 0.1), (140, 0.16)])
def test_matches_reference_distribution(n, x):
    assert abs(pomeranz(n, x) - kstwo.cdf(x, n)) < 1e-10


def test_renormalization_keeps_large_n_finite():
    """n = 140 needs several 2^350 rescalings of the working row."""
    p = pomeranz(140, math.sqrt(0.8 / 140))
    assert 0.0 < p < 1.0


def test_unmatched_kernel_raises(monkeypatch):
    monkeypatch.setattr("ksdist.core.pomeranz.POMERANZ_CASE_EPSILON", -1.0)
    with pytest.raises(KSConvergenceError):
        pomeranz(20, 0.25)
