"""
Command-line interface for the Kolmogorov-Smirnov distribution toolkit.

This CLI provides access to:
- Cumulative and complementary probabilities of D_n
- Tabulation over a grid of statistics
- Quantiles (inverse CDF)
- Consistency diagnostics
"""

import logging

import click

from ksdist.core.kolmogorov_smirnov import cdf, complementary_cdf, evaluate
from ksdist.diagnostics.consistency import (
    check_complement,
    check_monotonicity,
    check_regime_continuity,
)
from ksdist.solvers.quantile import quantile
from ksdist.utils.constants import DURBIN_POMERANZ_SWITCH, POMERANZ_TAIL_SWITCH


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Log regime selection and diagnostics")
def cli(verbose):
    """Kolmogorov-Smirnov Distribution Toolkit - exact and asymptotic D_n probabilities."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="cdf")
@click.option("--n", "-n", "n", type=click.IntRange(min=1), required=True, help="Sample size")
@click.option("--x", "-x", "x", type=float, required=True, help="Value of the statistic D_n")
def cdf_command(n, x):
    """Calculate P[D_n <= x]."""
    click.echo(f"\nP[D_{n} <= {x}] = {cdf(n, x):.15g}")


@cli.command(name="sf")
@click.option("--n", "-n", "n", type=click.IntRange(min=1), required=True, help="Sample size")
@click.option("--x", "-x", "x", type=float, required=True, help="Value of the statistic D_n")
def sf_command(n, x):
    """Calculate P[D_n >= x] (the p-value of x)."""
    click.echo(f"\nP[D_{n} >= {x}] = {complementary_cdf(n, x):.15g}")


@cli.command(name="evaluate")
@click.option("--n", "-n", "n", type=click.IntRange(min=1), required=True, help="Sample size")
@click.option("--x", "-x", "x", type=float, required=True, help="Value of the statistic D_n")
def evaluate_command(n, x):
    """Calculate both tails and report the algorithm used."""
    result = evaluate(n, x)

    click.echo(f"\nKolmogorov-Smirnov D_{n} at x = {x}:")
    click.echo(f"  CDF:              {result.cdf:>22.15g}")
    click.echo(f"  Complementary:    {result.complementary_cdf:>22.15g}")
    click.echo(f"  Regime:           {result.regime:>22}")


@cli.command()
@click.option("--n", "-n", "n", type=click.IntRange(min=1), default=60, help="Sample size")
@click.option("--steps", "-k", type=click.IntRange(min=1), default=100, help="Grid points x = j/steps")
def table(n, steps):
    """Tabulate cdf and complementary cdf for x = 0, 1/steps, ..., 1."""
    click.echo(f"n = {n}\n")
    click.echo("     x                    cdf                        fbar")
    for j in range(steps + 1):
        x = j / steps
        y = cdf(n, x)
        z = complementary_cdf(n, x)
        click.echo(f"{x:8.3f}     {y:22.15g}      {z:22.15g}")


@cli.command(name="quantile")
@click.option("--n", "-n", "n", type=click.IntRange(min=1), required=True, help="Sample size")
@click.option("--p", "-p", "p", type=float, required=True, help="Cumulative probability")
def quantile_command(n, p):
    """Solve P[D_n <= x] = p for x."""
    try:
        result = quantile(n, p)

        if result.success:
            click.echo(f"\nQuantile: x = {result.statistic:.12f}")
            click.echo(f"Method: {result.method}")
            click.echo(f"Iterations: {result.iterations}")
        else:
            click.echo(f"\nSolver failed: {result.message}", err=True)
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)


@cli.command()
@click.option("--n", "-n", "n", type=click.IntRange(min=1), required=True, help="Sample size")
@click.option("--steps", "-k", type=click.IntRange(min=2), default=200, help="Grid points in (0, 1)")
@click.pass_context
def check(ctx, n, steps):
    """Run consistency diagnostics for one sample size."""
    xs = [j / steps for j in range(1, steps)]

    complement_violations = [v for x in xs for v in check_complement(n, x).violations]
    continuity_low = check_regime_continuity(n, DURBIN_POMERANZ_SWITCH)
    continuity_high = check_regime_continuity(n, POMERANZ_TAIL_SWITCH)
    monotonicity = check_monotonicity(n, xs)

    results = [
        ("monotonicity", monotonicity.violations),
        ("complement", complement_violations),
        (f"continuity w={DURBIN_POMERANZ_SWITCH}", continuity_low.violations),
        (f"continuity w={POMERANZ_TAIL_SWITCH}", continuity_high.violations),
    ]

    click.echo(f"\nConsistency checks for n = {n}:")
    for name, violations in results:
        click.echo(f"  {name:<24} {'FAILED' if violations else 'ok'}")
        for message in violations:
            click.echo(f"    {message}")

    if any(violations for _, violations in results):
        ctx.exit(1)


if __name__ == "__main__":
    cli()
