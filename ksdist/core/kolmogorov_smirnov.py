"""
Distribution of the two-sided one-sample Kolmogorov-Smirnov statistic.

This module computes both the cumulative probability P[D_n <= x] and the
complementary probability P[D_n >= x] of

    D_n = sup_t |F_n(t) - F(t)|

where F_n is the empirical distribution function of n observations and F is
a completely specified continuous distribution. No single method is both
fast and accurate over all (n, x), so each query is routed to one of:

    - exact boundary formulas (x near 0 or 1, or negligible tails)
    - the Durbin matrix algorithm (small n·x²)
    - the Pomeranz recursion (moderate n·x², n <= 140)
    - twice Smirnov's one-sided tail (large n·x²)
    - the Pelz-Good asymptotic series (n > 140)

Accuracy: at least 13 decimal digits for n <= 140, at least 5 for
140 < n <= 100000, and a few for larger n.

References:
    Simard, R., & L'Ecuyer, P. (2011). Computing the Two-Sided
    Kolmogorov-Smirnov Distribution. Journal of Statistical Software,
    39(11), 1-18.
"""

import logging
import math
import numbers

from ksdist.core.durbin import durbin_matrix
from ksdist.core.one_sided import one_sided_upper_tail
from ksdist.core.pelz import pelz
from ksdist.core.pomeranz import pomeranz
from ksdist.core.special import cdf_special, fbar_special
from ksdist.utils.constants import (
    DURBIN_LARGE_N_LIMIT,
    DURBIN_POMERANZ_SWITCH,
    NEXACT,
    NKOLMO,
    POMERANZ_TAIL_SWITCH,
    TAIL_SWITCH_LARGE_N,
)
from ksdist.utils.types import KSConvergenceError, KSEvaluation, Regime

logger = logging.getLogger(__name__)


def _validate_inputs(n: int, x: float) -> None:
    """
    Validate distribution inputs.

    Args:
        n: Sample size
        x: Value of the statistic

    Raises:
        ValueError: If n is not a positive integer or x is not finite
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise ValueError(f"Sample size must be an integer, got n={n!r}")
    if n < 1:
        raise ValueError(f"Sample size must be at least 1, got n={n}")
    if not math.isfinite(x):
        raise ValueError(f"Statistic must be finite, got x={x}")


def _clamp(p: float) -> float:
    if math.isnan(p):
        return p
    return min(max(p, 0.0), 1.0)


def select_regime(n: int, x: float, complementary: bool = False) -> Regime:
    """
    Choose the general algorithm for (n, x).

    Callers must rule out the exact boundary cases first (see
    ksdist.core.special); every other input maps to exactly one regime.

    Args:
        n: Sample size
        x: Value of the statistic
        complementary: Select for P[D_n >= x] instead of P[D_n <= x]

    Returns:
        "durbin", "pomeranz", "pelz" or "one-sided-tail"

    Decision table (w = n·x²):
        CDF,  n <= 140:  w < 0.754693 → durbin; w < 4 → pomeranz;
                         else → one-sided-tail
        CDF,  n > 140:   n²x³ <= 2 and n <= 100000 → durbin; else → pelz
        CCDF, n <= 140:  w >= 4 → one-sided-tail; else as CDF
        CCDF, n > 140:   w >= 2.2 → one-sided-tail; else as CDF
    """
    w = n * x * x
    if complementary:
        tail_switch = POMERANZ_TAIL_SWITCH if n <= NEXACT else TAIL_SWITCH_LARGE_N
        if w >= tail_switch:
            return "one-sided-tail"

    if n <= NEXACT:
        if w < DURBIN_POMERANZ_SWITCH:
            return "durbin"
        if w < POMERANZ_TAIL_SWITCH:
            return "pomeranz"
        return "one-sided-tail"

    # n*x*sqrt(x) <= 1.4, squared
    if w * x * n <= DURBIN_LARGE_N_LIMIT and n <= NKOLMO:
        return "durbin"
    return "pelz"


def regime(n: int, x: float, complementary: bool = False) -> Regime:
    """
    Regime that answers a query, including the exact boundary cases.

    Args:
        n: Sample size
        x: Value of the statistic
        complementary: Report for P[D_n >= x] instead of P[D_n <= x]

    Returns:
        "special" when a closed form applies, else select_regime(n, x, complementary)
    """
    _validate_inputs(n, x)
    special = fbar_special(n, x) if complementary else cdf_special(n, x)
    if special is not None:
        return "special"
    return select_regime(n, x, complementary)


def _general_cdf(selected: Regime, n: int, x: float) -> float:
    if selected == "durbin":
        return durbin_matrix(n, x)
    if selected == "pomeranz":
        return pomeranz(n, x)
    if selected == "pelz":
        return pelz(n, x)
    return 1.0 - 2.0 * one_sided_upper_tail(n, x)


def cdf(n: int, x: float) -> float:
    """
    Cumulative probability P[D_n <= x].

    Args:
        n: Sample size, n >= 1
        x: Value of the Kolmogorov-Smirnov statistic

    Returns:
        Probability in [0, 1], or nan if an exact algorithm failed

    Raises:
        ValueError: If n is not a positive integer or x is not finite

    Notes:
        For n > 140 the hand-over from the Durbin matrix to the Pelz series
        at n²x³ = 2 carries the series error, so the CDF can step down by a
        few 1e-6 there. Monotonicity in x is exact only up to that accuracy.

    Examples:
        >>> cdf(1, 0.75)
        0.5
        >>> cdf(10, 0.0)
        0.0
        >>> abs(cdf(10, 0.274) - 0.6284796154565043) < 1e-12
        True
    """
    _validate_inputs(n, x)

    special = cdf_special(n, x)
    if special is not None:
        return special

    selected = select_regime(n, x)
    logger.debug("cdf(n=%d, x=%g) using %s", n, x, selected)
    try:
        p = _general_cdf(selected, n, x)
    except KSConvergenceError as e:
        logger.warning("cdf(n=%d, x=%g) did not converge in %s: %s", n, x, selected, e)
        return math.nan
    return _clamp(p)


def complementary_cdf(n: int, x: float) -> float:
    """
    Complementary cumulative probability P[D_n >= x].

    This is the p-value of an observed statistic x.

    Args:
        n: Sample size, n >= 1
        x: Value of the Kolmogorov-Smirnov statistic

    Returns:
        Probability in [0, 1], or nan if an exact algorithm failed

    Raises:
        ValueError: If n is not a positive integer or x is not finite

    Notes:
        In the upper tail the probability is computed directly from the
        one-sided distribution rather than as 1 - cdf, which keeps its
        relative accuracy where the CDF rounds to 1.
    """
    _validate_inputs(n, x)

    special = fbar_special(n, x)
    if special is not None:
        return special

    selected = select_regime(n, x, complementary=True)
    logger.debug("complementary_cdf(n=%d, x=%g) using %s", n, x, selected)
    if selected == "one-sided-tail":
        return _clamp(2.0 * one_sided_upper_tail(n, x))

    p = cdf(n, x)
    if math.isnan(p):
        return p
    return _clamp(1.0 - p)


def evaluate(n: int, x: float) -> KSEvaluation:
    """
    Evaluate both tails and report the regime of the CDF.

    Args:
        n: Sample size
        x: Value of the statistic

    Returns:
        KSEvaluation with cdf, complementary_cdf and regime
    """
    return KSEvaluation(
        n=n,
        x=x,
        cdf=cdf(n, x),
        complementary_cdf=complementary_cdf(n, x),
        regime=regime(n, x),
    )
