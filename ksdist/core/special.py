"""
Exact boundary formulas for the Kolmogorov-Smirnov distribution.

For x close to 0 or 1, and for n*x^2 so large that the tail is below double
precision, the distribution of D_n is known in closed form (Ruben & Gambino,
1982). Both evaluators return None when (n, x) is not one of these cases,
so the caller falls through to a general algorithm.

References:
    Ruben, H., & Gambino, J. (1982). The exact distribution of Kolmogorov's
    statistic D_n for n <= 10. Annals of the Institute of Statistical
    Mathematics, 34, 167-173.
"""

import math
from typing import Optional

from ksdist.core.factorials import factorial, log_factorial
from ksdist.utils.constants import CDF_UPPER_W, FBAR_ONE_W, FBAR_ZERO_W, NFACT


def _lower_boundary_cdf(n: int, x: float) -> float:
    """
    P[D_n <= x] for 1/(2n) < x <= 1/n.

    Formula:
        n! · (2x - 1/n)^n

    Notes:
        Beyond the factorial table the product is formed in log space so that
        n! does not overflow before being multiplied by the tiny power.
    """
    t = 2.0 * x - 1.0 / n
    if n <= NFACT:
        return factorial(n) * t ** n
    return math.exp(log_factorial(n) + n * math.log(t))


def cdf_special(n: int, x: float) -> Optional[float]:
    """
    Closed-form P[D_n <= x] where one exists.

    Args:
        n: Sample size
        x: Value of the statistic

    Returns:
        The probability, or None if no closed form applies

    Edge Cases:
        - x <= 1/(2n), including x < 0: returns 0
        - n·x² >= 18 or x >= 1: returns 1 (complementary mass below 5e-16)
        - n = 1: returns 2x - 1
        - x <= 1/n: returns n!·(2x - 1/n)^n
        - x >= 1 - 1/n: returns 1 - 2(1 - x)^n
    """
    if x <= 0.5 / n:
        return 0.0
    if n * x * x >= CDF_UPPER_W or x >= 1.0:
        return 1.0
    if n == 1:
        return 2.0 * x - 1.0
    if x <= 1.0 / n:
        return _lower_boundary_cdf(n, x)
    if x >= 1.0 - 1.0 / n:
        return 1.0 - 2.0 * (1.0 - x) ** n
    return None


def fbar_special(n: int, x: float) -> Optional[float]:
    """
    Closed-form P[D_n >= x] where one exists.

    Args:
        n: Sample size
        x: Value of the statistic

    Returns:
        The probability, or None if no closed form applies

    Edge Cases:
        - n·x² <= 0.0274 or x <= 1/(2n): returns 1
        - n·x² >= 370 or x >= 1: returns 0 (below the smallest double)
        - n = 1: returns 2 - 2x
        - x <= 1/n: returns 1 - n!·(2x - 1/n)^n
        - x >= 1 - 1/n: returns 2(1 - x)^n
    """
    w = n * x * x
    if w <= FBAR_ONE_W or x <= 0.5 / n:
        return 1.0
    if w >= FBAR_ZERO_W or x >= 1.0:
        return 0.0
    if n == 1:
        return 2.0 - 2.0 * x
    if x <= 1.0 / n:
        return 1.0 - _lower_boundary_cdf(n, x)
    if x >= 1.0 - 1.0 / n:
        return 2.0 * (1.0 - x) ** n
    return None
