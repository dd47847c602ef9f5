"""Unit tests for consistency diagnostics."""

import math

import pytest

from ksdist.diagnostics.consistency import (
    check_bounds,
    check_complement,
    check_monotonicity,
    check_regime_continuity,
)
from ksdist.utils.constants import DURBIN_POMERANZ_SWITCH, POMERANZ_TAIL_SWITCH


def test_bounds_valid():
    """Computed probabilities lie in [0, 1]."""
    result = check_bounds(10, 0.274)
    assert result.is_valid
    assert result.details["cdf_in_bounds"]
    assert result.details["complementary_cdf_in_bounds"]


def test_bounds_flags_nan(monkeypatch):
    monkeypatch.setattr("ksdist.diagnostics.consistency.cdf", lambda n, x: math.nan)
    result = check_bounds(10, 0.274)
    assert not result.is_valid
    assert len(result.violations) == 1
    assert "cdf(n=10, x=0.274)" in result.violations[0]


@pytest.mark.parametrize("n,x", [(10, 0.274), (60, 0.3), (100, 0.25), (1000, 0.02)])
def test_complement_valid(n, x):
    result = check_complement(n, x)
    assert result.is_valid, result.violations
    assert result.details["difference"] < 1e-6


def test_complement_violation(monkeypatch):
    monkeypatch.setattr("ksdist.diagnostics.consistency.complementary_cdf", lambda n, x: 0.5)
    result = check_complement(10, 0.1)
    assert not result.is_valid
    assert "Complement violated" in result.violations[0]


def test_monotonicity_valid():
    """CDF is nondecreasing over a grid, in any input order."""
    xs = [j / 50 for j in range(50, 0, -1)]
    result = check_monotonicity(25, xs)
    assert result.is_valid
    assert result.details["points"] == 50.0


def test_monotonicity_violation(monkeypatch):
    monkeypatch.setattr("ksdist.diagnostics.consistency.cdf", lambda n, x: 1.0 - x)
    result = check_monotonicity(25, [0.1, 0.2, 0.3])
    assert not result.is_valid
    assert len(result.violations) == 2
    assert not result.details["monotonic"]


@pytest.mark.parametrize("n", [10, 60, 140])
@pytest.mark.parametrize("boundary_w", [DURBIN_POMERANZ_SWITCH, POMERANZ_TAIL_SWITCH])
def test_regime_continuity_valid(n, boundary_w):
    result = check_regime_continuity(n, boundary_w)
    assert result.is_valid, result.violations
    assert result.details["regime_changes"]


def test_regime_continuity_detects_jump(monkeypatch):
    monkeypatch.setattr(
        "ksdist.diagnostics.consistency.cdf", lambda n, x: 0.0 if n * x * x < 2.0 else 0.1
    )
    result = check_regime_continuity(10, 2.0)
    assert not result.is_valid
    assert result.details["jump"] == pytest.approx(0.1)
    assert "CDF jumps" in result.violations[0]


@pytest.mark.parametrize("boundary_w", [0.0, -1.0])
def test_regime_continuity_invalid_boundary(boundary_w):
    with pytest.raises(ValueError):
        check_regime_continuity(10, boundary_w)
