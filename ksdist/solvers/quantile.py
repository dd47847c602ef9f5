"""
Brent's method for the Kolmogorov-Smirnov quantile function.

This module inverts the CDF of D_n with Brent's method (a hybrid
bisection/inverse quadratic interpolation algorithm). The CDF is 0 at
x = 1/(2n) and 1 at x = 1, so the root is always bracketed and Brent's
method is guaranteed to converge.
"""

import math

from scipy.optimize import brentq

from ksdist.core.kolmogorov_smirnov import cdf
from ksdist.utils.constants import QUANTILE_MAX_ITERATIONS, QUANTILE_TOLERANCE
from ksdist.utils.types import QuantileResult


def quantile(
    n: int,
    p: float,
    tolerance: float = QUANTILE_TOLERANCE,
    max_iterations: int = QUANTILE_MAX_ITERATIONS,
) -> QuantileResult:
    """
    Solve cdf(n, x) = p for the statistic x.

    Args:
        n: Sample size
        p: Target cumulative probability
        tolerance: Absolute tolerance on x
        max_iterations: Maximum Brent iterations

    Returns:
        QuantileResult with statistic, iterations, method, success flag

    Raises:
        ValueError: If p is not finite

    Edge Cases:
        - p <= 0: returns x = 0 (the CDF is 0 up to 1/(2n))
        - p >= 1: returns x = 1

    Examples:
        >>> result = quantile(10, 0.5)
        >>> abs(cdf(10, result.statistic) - 0.5) < 1e-9
        True
    """
    if not math.isfinite(p):
        raise ValueError(f"Probability must be finite, got p={p}")

    if p <= 0.0:
        return QuantileResult(
            statistic=0.0,
            probability=p,
            iterations=0,
            method="boundary",
            success=True,
            message="Probability at or below 0",
        )
    if p >= 1.0:
        return QuantileResult(
            statistic=1.0,
            probability=p,
            iterations=0,
            method="boundary",
            success=True,
            message="Probability at or above 1",
        )

    def objective(x: float) -> float:
        """
        Objective function: cdf(n, x) - p.
        We seek x such that this equals zero.
        """
        return cdf(n, x) - p

    lower = 0.5 / n
    upper = 1.0

    try:
        statistic, info = brentq(
            objective,
            lower,
            upper,
            xtol=tolerance,
            rtol=1e-12,
            maxiter=max_iterations,
            full_output=True,
        )
    except (ValueError, RuntimeError) as e:
        return QuantileResult(
            statistic=math.nan,
            probability=p,
            iterations=0,
            method="brent",
            success=False,
            message=(
                f"Brent method failed on [{lower:.6g}, {upper:.6g}] for n={n}, p={p}: {e}"
            ),
        )

    residual = abs(objective(statistic))
    return QuantileResult(
        statistic=statistic,
        probability=p,
        iterations=info.iterations,
        method="brent",
        success=bool(info.converged) and math.isfinite(residual),
        message=f"Converged with probability error {residual:.2e}",
    )
