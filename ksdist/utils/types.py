"""
Data types and structures for the Kolmogorov-Smirnov distribution.

This module defines the regime label, the result dataclasses shared by the
evaluator, solver and diagnostics, and the exception raised when an exact
algorithm cannot complete.
"""

from dataclasses import dataclass
from typing import Literal, Union

Regime = Literal["special", "durbin", "pomeranz", "pelz", "one-sided-tail"]


class KSConvergenceError(ArithmeticError):
    """Raised by an exact algorithm that cannot produce a finite probability."""


@dataclass(frozen=True)
class KSEvaluation:
    """
    Immutable container for one evaluation of the distribution.

    Attributes:
        n: Sample size
        x: Value of the statistic D_n
        cdf: P[D_n <= x]
        complementary_cdf: P[D_n >= x]
        regime: Algorithm that produced the CDF
    """
    n: int
    x: float
    cdf: float
    complementary_cdf: float
    regime: Regime


@dataclass
class QuantileResult:
    """
    Result from the inverse-CDF solver.

    Attributes:
        statistic: Solved value x with cdf(n, x) = probability
        probability: Target probability
        iterations: Number of iterations used by the root finder
        method: Method used ('brent' or 'boundary')
        success: Whether the solver converged successfully
        message: Additional information about convergence
    """
    statistic: float
    probability: float
    iterations: int
    method: Literal["brent", "boundary"]
    success: bool
    message: str = ""


@dataclass
class ConsistencyCheck:
    """
    Result from a consistency diagnostic.

    Attributes:
        is_valid: Whether the evaluator satisfied the property
        violations: List of specific violations detected
        details: Dictionary with detailed check results
    """
    is_valid: bool
    violations: list[str]
    details: dict[str, Union[bool, float]]
