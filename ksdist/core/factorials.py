"""
Factorials and log-factorials for the Kolmogorov-Smirnov evaluators.

Small arguments are served from read-only tables; beyond the table range the
log-factorial falls back to a Stirling series with a rational correction,
which is accurate to double precision for n > 30.
"""

import math

from ksdist.utils.constants import MFACT, NFACT

# n! for 0 <= n <= NFACT
FACTORIALS = (
    1.0,
    1.0,
    2.0,
    6.0,
    24.0,
    120.0,
    720.0,
    5040.0,
    40320.0,
    362880.0,
    3628800.0,
    39916800.0,
    479001600.0,
    6227020800.0,
    87178291200.0,
    1307674368000.0,
    20922789888000.0,
    355687428096000.0,
    6402373705728000.0,
    1.21645100408832e+17,
    2.43290200817664e+18,
)

# ln(n!) for 0 <= n <= MFACT
LOG_FACTORIALS = (
    0.0,
    0.0,
    0.6931471805599453,
    1.791759469228055,
    3.178053830347946,
    4.787491742782046,
    6.579251212010101,
    8.525161361065415,
    10.60460290274525,
    12.80182748008147,
    15.10441257307552,
    17.50230784587389,
    19.98721449566188,
    22.55216385312342,
    25.19122118273868,
    27.89927138384088,
    30.67186010608066,
    33.50507345013688,
    36.39544520803305,
    39.33988418719949,
    42.33561646075348,
    45.3801388984769,
    48.47118135183522,
    51.60667556776437,
    54.7847293981123,
    58.00360522298051,
    61.26170176100199,
    64.55753862700632,
    67.88974313718154,
    71.257038967168,
    74.65823634883016,
)


def factorial(n: int) -> float:
    """
    Exact n! from the table.

    Args:
        n: Integer in [0, NFACT]

    Returns:
        n! as a float

    Raises:
        ValueError: If n is outside the table
    """
    if n < 0 or n > NFACT:
        raise ValueError(f"factorial table covers 0 <= n <= {NFACT}, got n={n}")
    return FACTORIALS[n]


def log_factorial(n: int) -> float:
    """
    Natural logarithm of n!.

    Args:
        n: Non-negative integer

    Returns:
        ln(n!)

    Formula:
        For n > 30, with x = n + 1:
            ln Γ(x) ≈ (x - 1/2)·ln(x) - x + ln(√(2π)) + z(1/x²)/x
        where z is the truncated Stirling correction polynomial.
    """
    if n <= MFACT:
        return LOG_FACTORIALS[n]

    x = float(n + 1)
    y = 1.0 / (x * x)
    z = ((-(5.95238095238e-4 * y) + 7.936500793651e-4) * y - 2.7777777777778e-3) * y + 8.3333333333333e-2
    return (x - 0.5) * math.log(x) - x + 9.1893853320467e-1 + z / x
