"""
Numerical constants and thresholds for the Kolmogorov-Smirnov distribution.

This module defines the regime boundaries, iteration caps, tolerances and
renormalization constants used by the evaluators. The regime boundaries are
the empirically tuned values published by Simard & L'Ecuyer (2011); they
are part of the accuracy contract and must not be altered.
"""

import math

# Regime selection
NEXACT = 140  # Largest n handled by the exact algorithms
NKOLMO = 100000  # Largest n for which Durbin is still used near x = 0
DURBIN_POMERANZ_SWITCH = 0.754693  # n*x^2 below this: Durbin matrix (n <= NEXACT)
POMERANZ_TAIL_SWITCH = 4.0  # n*x^2 below this: Pomeranz (n <= NEXACT)
DURBIN_LARGE_N_LIMIT = 2.0  # n^2*x^3 at most this: Durbin (n > NEXACT), i.e. n*x*sqrt(x) <= 1.4
TAIL_SWITCH_LARGE_N = 2.2  # n*x^2 at least this: 2 * one-sided tail (complementary, n > NEXACT)

# Special-case boundaries
CDF_UPPER_W = 18.0  # n*x^2 at least this: complementary mass below 5e-16
FBAR_ZERO_W = 370.0  # n*x^2 at least this: complementary CDF underflows to 0
FBAR_ONE_W = 0.0274  # n*x^2 at most this: complementary CDF is 1 to double precision

# Factorial tables
NFACT = 20  # Largest n with an exact factorial entry
MFACT = 30  # Largest n with a tabulated log-factorial entry

# Smirnov one-sided tail
ONE_SIDED_ASYMPTOTIC_N = 200000  # Above this, single-term asymptotic formula
ONE_SIDED_SPLIT_N = 3000  # Above this, start summing from jmax/2 instead of jmax/3
ONE_SIDED_EPSILON = 1.0e-12  # Stop a direction once term <= sum * epsilon

# Pelz-Good asymptotic series
PELZ_MAX_TERMS = 20  # Inner sums run j = 0..PELZ_MAX_TERMS at most
PELZ_EPSILON = 1.0e-10  # Relative tolerance for each inner sum

# Pomeranz recursion
POMERANZ_CASE_EPSILON = 1.0e-15  # Tolerance when matching a row to a basis polynomial
POMERANZ_RENORM_EXPONENT = 350  # Renormalize by 2^350
POMERANZ_RENORM = math.ldexp(1.0, POMERANZ_RENORM_EXPONENT)
POMERANZ_UNDERFLOW = 1.0e-280  # Row minimum below this triggers renormalization

# Durbin matrix power
DURBIN_NORM = 1.0e140  # Central entry above this triggers rescaling
DURBIN_INORM = 1.0e-140
DURBIN_LOG_NORM = 140  # Base-10 exponent carried per rescaling

LN2 = 0.69314718055994530941
PI2 = math.pi * math.pi
PI4 = PI2 * PI2
SQRT_2PI = 2.506628274631001  # sqrt(2*pi)
SQRT_HALF_PI = 1.2533141373155001  # sqrt(pi/2)

# Consistency diagnostics tolerances
COMPLEMENT_TOLERANCE = 1e-6  # |cdf + ccdf - 1| allowed
CONTINUITY_TOLERANCE = 1e-6  # Largest jump allowed across a regime switch
CONTINUITY_EPSILON = 1e-9  # Relative offset in n*x^2 either side of a switch
MONOTONICITY_TOLERANCE = 1e-12  # Allowed decrease between consecutive points

# Quantile solver parameters
QUANTILE_TOLERANCE = 1e-12  # Absolute tolerance on the statistic
QUANTILE_MAX_ITERATIONS = 200  # Brent iteration cap
