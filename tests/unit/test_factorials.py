"""Unit tests for the factorial tables and the Stirling fallback."""

import math

import pytest
from ksdist.core.factorials import FACTORIALS, LOG_FACTORIALS, factorial, log_factorial


def test_factorial_table_is_exact():
    """Every tabulated factorial equals the integer factorial."""
    for n, value in enumerate(FACTORIALS):
        assert value == float(math.factorial(n)), f"n={n}"


def test_factorial_outside_table_raises():
    with pytest.raises(ValueError):
        factorial(21)
    with pytest.raises(ValueError):
        factorial(-1)


@pytest.mark.parametrize("n", range(0, 31))
def test_log_factorial_table(n):
    """Tabulated ln(n!) matches lgamma(n + 1)."""
    assert math.isclose(log_factorial(n), math.lgamma(n + 1), rel_tol=1e-13, abs_tol=1e-14)


@pytest.mark.parametrize("n", [31, 32, 50, 100, 1000, 100000, 10**7])
def test_log_factorial_stirling(n):
    """Beyond the table the Stirling series keeps double precision."""
    assert math.isclose(log_factorial(n), math.lgamma(n + 1), rel_tol=1e-12)


def test_log_factorial_seamless_at_table_edge():
    """ln(31!) - ln(30!) = ln(31) across the table/series switch."""
    assert abs(log_factorial(31) - log_factorial(30) - math.log(31)) < 1e-10


def test_tables_are_immutable():
    assert isinstance(FACTORIALS, tuple)
    assert isinstance(LOG_FACTORIALS, tuple)
    assert len(FACTORIALS) == 21
    assert len(LOG_FACTORIALS) == 31
