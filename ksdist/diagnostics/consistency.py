"""
Consistency diagnostics for the Kolmogorov-Smirnov evaluator.

This module checks the properties any correct evaluation must satisfy:
- Probability bounds
- Complementarity of the two tails
- Monotonicity in the statistic
- Continuity across regime switches
"""

import math
from typing import Iterable

from ksdist.core.kolmogorov_smirnov import cdf, complementary_cdf, regime
from ksdist.utils.constants import (
    COMPLEMENT_TOLERANCE,
    CONTINUITY_EPSILON,
    CONTINUITY_TOLERANCE,
    MONOTONICITY_TOLERANCE,
)
from ksdist.utils.types import ConsistencyCheck


def check_bounds(n: int, x: float) -> ConsistencyCheck:
    """
    Validate that both probabilities are numbers in [0, 1].

    Args:
        n: Sample size
        x: Value of the statistic

    Returns:
        ConsistencyCheck with validation results
    """
    violations = []
    details = {}

    for name, p in (("cdf", cdf(n, x)), ("complementary_cdf", complementary_cdf(n, x))):
        ok = not math.isnan(p) and 0.0 <= p <= 1.0
        details[f"{name}_in_bounds"] = ok
        if not ok:
            violations.append(f"{name}(n={n}, x={x}) = {p} outside [0, 1]")

    is_valid = len(violations) == 0
    return ConsistencyCheck(is_valid=is_valid, violations=violations, details=details)


def check_complement(
    n: int, x: float, tolerance: float = COMPLEMENT_TOLERANCE
) -> ConsistencyCheck:
    """
    Validate that the two tails add up to one.

    Condition:
        |P[D_n <= x] + P[D_n >= x] - 1| < tolerance

    The two tails are computed by different code paths in the upper tail,
    so this also cross-checks the one-sided evaluator against the CDF.

    Args:
        n: Sample size
        x: Value of the statistic
        tolerance: Tolerance for the sum

    Returns:
        ConsistencyCheck with validation results
    """
    lower = cdf(n, x)
    upper = complementary_cdf(n, x)

    diff = abs(lower + upper - 1.0)
    is_valid = diff < tolerance

    violations = []
    if not is_valid:
        violations.append(
            f"Complement violated at n={n}, x={x}: cdf = {lower:.15g}, "
            f"complementary_cdf = {upper:.15g}, |sum - 1| = {diff:.3e}"
        )

    details = {"cdf": lower, "complementary_cdf": upper, "difference": diff}

    return ConsistencyCheck(is_valid=is_valid, violations=violations, details=details)


def check_monotonicity(
    n: int, xs: Iterable[float], tolerance: float = MONOTONICITY_TOLERANCE
) -> ConsistencyCheck:
    """
    Check that the CDF does not decrease in x.

    Condition: cdf(n, x1) <= cdf(n, x2) if x1 < x2

    Args:
        n: Sample size
        xs: Points at which to evaluate (sorted internally)
        tolerance: Allowed decrease between consecutive points

    Returns:
        ConsistencyCheck with validation results
    """
    points = sorted(xs)
    values = [cdf(n, x) for x in points]

    violations = []
    for i in range(len(points) - 1):
        if values[i] > values[i + 1] + tolerance:
            violations.append(
                f"Monotonicity violated: cdf(n={n}, x={points[i]}) = {values[i]:.15g} "
                f"> cdf(n={n}, x={points[i + 1]}) = {values[i + 1]:.15g}"
            )

    details = {"points": float(len(points)), "monotonic": len(violations) == 0}

    is_valid = len(violations) == 0
    return ConsistencyCheck(is_valid=is_valid, violations=violations, details=details)


def check_regime_continuity(
    n: int,
    boundary_w: float,
    epsilon: float = CONTINUITY_EPSILON,
    tolerance: float = CONTINUITY_TOLERANCE,
) -> ConsistencyCheck:
    """
    Check that the CDF does not jump where the algorithm changes.

    The CDF is evaluated at n·x² = boundary_w·(1 ∓ epsilon), i.e. just
    below and just above the switch.

    Args:
        n: Sample size
        boundary_w: Value of n·x² at the regime switch (e.g. 0.754693, 4.0)
        epsilon: Relative offset either side of the switch
        tolerance: Largest acceptable jump

    Returns:
        ConsistencyCheck with validation results
    """
    if boundary_w <= 0:
        raise ValueError(f"Regime boundary must be positive, got boundary_w={boundary_w}")

    x_below = math.sqrt(boundary_w * (1.0 - epsilon) / n)
    x_above = math.sqrt(boundary_w * (1.0 + epsilon) / n)
    below = cdf(n, x_below)
    above = cdf(n, x_above)

    jump = abs(above - below)
    is_valid = jump < tolerance

    violations = []
    if not is_valid:
        violations.append(
            f"CDF jumps by {jump:.3e} at n={n}, n·x² = {boundary_w}: "
            f"{regime(n, x_below)} gives {below:.15g}, {regime(n, x_above)} gives {above:.15g}"
        )

    details = {
        "below": below,
        "above": above,
        "jump": jump,
        "regime_changes": regime(n, x_below) != regime(n, x_above),
    }

    return ConsistencyCheck(is_valid=is_valid, violations=violations, details=details)
