"""
Upper tail of the one-sided Kolmogorov-Smirnov statistic D_n+.

The two-sided complementary CDF in the far tail is assembled as twice the
one-sided tail: P[D_n >= x] = 2·P[D_n+ >= x] - P[D_n+ >= x and D_n- >= x],
and the intersection term is negligible once n·x² is moderately large.

References:
    Smirnov, N. V. (1944). Approximate laws of distribution of random
    variables from empirical data. Uspekhi Mat. Nauk, 10, 179-206.
    Miller, L. H. (1956). Table of percentage points of Kolmogorov
    statistics. JASA, 51(273), 111-121.
"""

import math

from ksdist.core.factorials import log_factorial
from ksdist.utils.constants import ONE_SIDED_ASYMPTOTIC_N, ONE_SIDED_EPSILON, ONE_SIDED_SPLIT_N


def one_sided_upper_tail_asymptotic(n: int, x: float) -> float:
    """
    Single-term asymptotic approximation of P[D_n+ >= x].

    Formula:
        t = 6nx + 1,  z = t²/(18n)
        P ≈ [1 - (2z² - 4z - 1)/(18n)] · e^(-z)
    """
    t = 6.0 * n * x + 1.0
    z = t * t / (18.0 * n)
    v = 1.0 - (2.0 * z * z - 4.0 * z - 1.0) / (18.0 * n)
    if v <= 0.0:
        return 0.0
    v *= math.exp(-z)
    return min(v, 1.0)


def _term(log_com: float, n: int, j: int, x: float) -> float:
    """C(n,j) (x + j/n)^(j-1) (1 - x - j/n)^(n-j), with log C(n,j) given."""
    q = j / n + x
    # q rounds to 1 at j = jmax when n(1 - x) is an integer
    if q >= 1.0:
        return 0.0
    return math.exp(log_com + (j - 1) * math.log(q) + (n - j) * math.log1p(-q))


def one_sided_upper_tail(n: int, x: float) -> float:
    """
    P[D_n+ >= x] by Smirnov's stable formula.

    Args:
        n: Sample size
        x: Value of the statistic, 0 < x < 1

    Returns:
        Upper-tail probability of the one-sided statistic

    Formula:
        P = x · Σ_{j=1}^{jmax} C(n,j) (x + j/n)^(j-1) (1 - x - j/n)^(n-j) + (1 - x)^n

    Notes:
        Terms are formed in log space and summed outward from a point near
        the largest term, first upward to jmax and then downward to 1. Each
        direction stops as soon as a term no longer changes the sum at
        relative precision 1e-12. For n > 200000 the asymptotic formula is
        used instead.
    """
    if n > ONE_SIDED_ASYMPTOTIC_N:
        return one_sided_upper_tail_asymptotic(n, x)

    jmax = int(n * (1.0 - x))
    # Avoid log(0) for j = jmax and q ~ 1.0
    if 1.0 - x - jmax / n <= 0.0:
        jmax -= 1

    jdiv = 2 if n > ONE_SIDED_SPLIT_N else 3
    j = jmax // jdiv + 1
    log_com = log_factorial(n) - log_factorial(j) - log_factorial(n - j)
    log_com_start = log_com

    total = 0.0
    while j <= jmax:
        term = _term(log_com, n, j, x)
        total += term
        log_com += math.log((n - j) / (j + 1))
        if term <= total * ONE_SIDED_EPSILON:
            break
        j += 1

    j = jmax // jdiv
    log_com = log_com_start + math.log((j + 1) / (n - j))
    while j > 0:
        term = _term(log_com, n, j, x)
        total += term
        log_com += math.log(j / (n - j + 1))
        if term <= total * ONE_SIDED_EPSILON:
            break
        j -= 1

    total *= x
    # j = 0 term
    total += math.exp(n * math.log1p(-x))
    return total
