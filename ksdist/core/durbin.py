"""
Durbin matrix algorithm for the exact Kolmogorov-Smirnov CDF.

Write x = (k - h)/n with k a positive integer and 0 <= h < 1. Durbin showed
that P[D_n < x] = (n!/n^n) · (H^n)[k, k] for an m x m matrix H, m = 2k - 1,
whose entries are polynomials in h. Marsaglia, Tsang & Wang made this
practical by raising H to the n-th power with repeated squaring and carrying
a separate base-10 exponent, so the entries never overflow.

The cost is O(m³ log n) with m ≈ 2nx, which is why the dispatcher only
routes small n·x here.

References:
    Durbin, J. (1968). The Probability that the Sample Distribution Function
    Lies Between Two Parallel Straight Lines. Annals of Mathematical
    Statistics, 39, 398-411.
    Marsaglia, G., Tsang, W. W., & Wang, J. (2003). Evaluating Kolmogorov's
    Distribution. Journal of Statistical Software, 8(18), 1-4.
"""

import math

import numpy as np
from scipy.special import factorial

from ksdist.utils.constants import DURBIN_INORM, DURBIN_LOG_NORM, DURBIN_NORM
from ksdist.utils.types import KSConvergenceError


def durbin_matrix_h(n: int, x: float) -> tuple[np.ndarray, int, float]:
    """
    Build Durbin's transition matrix for (n, x).

    Args:
        n: Sample size
        x: Value of the statistic

    Returns:
        (H, k, h) where H is the m x m matrix, m = 2k - 1,
        k = floor(n·x) + 1 and h = k - n·x

    Formula:
        H[i, j] = 1 / (i - j + 1)!   for i - j + 1 >= 0, else 0
        with the first column reduced by h^(i+1) / (i+1)!, the last row
        reduced by h^(m-j) / (m-j)!, and the bottom-left corner increased
        by (2h - 1)^m / m! when h > 1/2.
    """
    k = int(n * x) + 1
    m = 2 * k - 1
    h = k - n * x

    H = np.tril(np.ones((m, m)), 1)
    powers = h ** np.arange(1, m + 1)
    H[:, 0] -= powers
    H[m - 1, :] -= powers[::-1]
    if 2.0 * h - 1.0 > 0.0:
        H[m - 1, 0] += (2.0 * h - 1.0) ** m

    order = np.subtract.outer(np.arange(m), np.arange(m)) + 1
    H /= factorial(np.maximum(order, 0))
    return H, k, h


def _renormalize(V: np.ndarray, exponent: int) -> tuple[np.ndarray, int]:
    m = V.shape[0]
    if V[m // 2, m // 2] > DURBIN_NORM:
        return V * DURBIN_INORM, exponent + DURBIN_LOG_NORM
    return V, exponent


def matrix_power(A: np.ndarray, n: int) -> tuple[np.ndarray, int]:
    """
    Compute A^n as a (mantissa, base-10 exponent) pair.

    Args:
        A: Square matrix with non-negative central entry
        n: Positive power

    Returns:
        (V, e) with A^n = V · 10^e

    Notes:
        Recursive halving of the exponent. After each product the matrix is
        rescaled by 1e-140 if its central entry exceeds 1e140.
    """
    if n == 1:
        return A.copy(), 0

    V, exponent = matrix_power(A, n // 2)
    B, b_exponent = _renormalize(V @ V, 2 * exponent)
    if n % 2 == 0:
        V, exponent = B, b_exponent
    else:
        V, exponent = A @ B, b_exponent
    return _renormalize(V, exponent)


def durbin_matrix(n: int, x: float) -> float:
    """
    Exact P[D_n < x] by the Durbin matrix algorithm.

    Args:
        n: Sample size
        x: Value of the statistic, x > 0

    Returns:
        Cumulative probability (not clamped)

    Raises:
        KSConvergenceError: If the rescaled result is not finite

    Notes:
        The (k, k) entry of H^n still lacks the factor n!/n^n, which is
        folded in one i/n at a time so the running value can be rescaled on
        the way instead of forming n! directly.
    """
    H, k, _ = durbin_matrix_h(n, x)
    Q, exponent = matrix_power(H, n)

    s = Q[k - 1, k - 1]
    for i in range(1, n + 1):
        s = s * i / n
        if s < DURBIN_INORM:
            s *= DURBIN_NORM
            exponent -= DURBIN_LOG_NORM

    try:
        s *= 10.0 ** exponent
    except OverflowError as e:
        raise KSConvergenceError(f"Durbin matrix exponent {exponent} overflows (n={n}, x={x})") from e
    if not math.isfinite(s):
        raise KSConvergenceError(f"Durbin matrix result is not finite (n={n}, x={x})")
    return float(s)
