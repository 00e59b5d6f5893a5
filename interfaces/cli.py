"""
Command-line interface for the discrete probability toolkit.

This CLI provides access to:
- Point and cumulative probabilities for five distributions
- Expected value and variance
- Support tables
- Consistency diagnostics against scipy.stats
"""

import click

from src.core.distributions import (
    Binomial,
    Geometric,
    Hypergeometric,
    NegativeBinomial,
    Poisson,
)
from src.cumulative.operations import CumulativeOperation
from src.diagnostics.reference import run_all_checks
from src.diagnostics.tables import support_table
from src.utils.logging_utils import configure_logging

OPERATION_CHOICES = [op.name.lower() for op in CumulativeOperation]
DISTRIBUTION_CHOICES = ["binomial", "geometric", "hypergeometric", "negative-binomial", "poisson"]


def _report(distribution, y: int) -> None:
    """Print the configured probability plus moments for a distribution."""
    result = distribution.get_result(y)
    click.echo(f"\nP(Y {distribution.operation.value} {y}) = {result:.10g}")
    click.echo(f"Expected value: {distribution.expected_value():.6g}")
    click.echo(f"Variance:       {distribution.variance():.6g}")


def _run(build, y: int) -> None:
    """Construct a distribution and report it, turning validation errors into exit code 1."""
    try:
        distribution = build()
    except (TypeError, ValueError) as e:
        click.echo(f"\nError: {e}", err=True)
        raise SystemExit(1)
    _report(distribution, y)


operation_option = click.option(
    "--op", "-o", type=click.Choice(OPERATION_CHOICES), default="equal", help="Cumulative operation"
)
y_option = click.option("--y", "-y", type=int, required=True, help="Random variable")


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Discrete Probability Toolkit - overflow-safe PMFs and cumulative probabilities."""
    configure_logging(verbose)


@cli.command()
@click.option("--trials", "-n", type=int, required=True, help="Number of trials")
@click.option("--p", "-p", "chance", type=float, required=True, help="Chance of success")
@y_option
@operation_option
def binomial(trials, chance, y, op):
    """Binomial: successes in a fixed number of trials."""
    _run(lambda: Binomial(trials, chance, operation=op), y)


@cli.command()
@click.option("--p", "-p", "chance", type=float, required=True, help="Chance of success")
@y_option
@operation_option
def geometric(chance, y, op):
    """Geometric: trial on which the first success happens."""
    _run(lambda: Geometric(chance, operation=op), y)


@cli.command()
@click.option("--population", "-N", type=int, required=True, help="Population size")
@click.option("--sample", "-n", type=int, required=True, help="Sample size")
@click.option("--successes", "-r", type=int, required=True, help="Success states in population")
@y_option
@operation_option
def hypergeometric(population, sample, successes, y, op):
    """Hypergeometric: successes drawn without replacement."""
    _run(lambda: Hypergeometric(population, sample, successes, operation=op), y)


@cli.command("negative-binomial")
@click.option("--k", "-k", "successes", type=int, required=True, help="Successful trials")
@click.option("--p", "-p", "chance", type=float, required=True, help="Chance of success")
@y_option
@operation_option
def negative_binomial(successes, chance, y, op):
    """Negative binomial: trial on which the kth success happens."""
    _run(lambda: NegativeBinomial(successes, chance, operation=op), y)


@cli.command()
@click.option("--rate", "-l", type=float, required=True, help="Average rate (lambda)")
@y_option
@operation_option
def poisson(rate, y, op):
    """Poisson: events in an interval given an average rate."""
    _run(lambda: Poisson(rate, operation=op), y)


def _build_distribution(kind, trials, chance, population, sample, successes, k, rate):
    """Construct the distribution named by --dist from the shared parameter options."""
    if kind == "binomial":
        return Binomial(trials, chance)
    if kind == "geometric":
        return Geometric(chance)
    if kind == "hypergeometric":
        return Hypergeometric(population, sample, successes)
    if kind == "negative-binomial":
        return NegativeBinomial(k, chance)
    return Poisson(rate)


def distribution_options(command):
    """Attach --dist plus every distribution parameter to a command."""
    options = [
        click.option(
            "--dist",
            "-d",
            "kind",
            type=click.Choice(DISTRIBUTION_CHOICES),
            required=True,
            help="Distribution",
        ),
        click.option("--trials", "-n", type=int, default=0, help="Binomial trials"),
        click.option("--p", "-p", "chance", type=float, default=0.5, help="Chance of success"),
        click.option("--population", "-N", type=int, default=1, help="Hypergeometric population size"),
        click.option("--sample", "-s", type=int, default=0, help="Hypergeometric sample size"),
        click.option("--successes", "-r", type=int, default=0, help="Hypergeometric success states"),
        click.option("--k", "-k", type=int, default=1, help="Negative binomial successful trials"),
        click.option("--rate", "-l", type=float, default=1.0, help="Poisson rate"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


@cli.command()
@distribution_options
@click.option("--upper", "-u", type=int, default=None, help="Last random variable to tabulate")
def table(kind, trials, chance, population, sample, successes, k, rate, upper):
    """Print a PMF/CDF table over the support of a distribution."""
    try:
        distribution = _build_distribution(
            kind, trials, chance, population, sample, successes, k, rate
        )
        frame = support_table(distribution, upper)
    except (TypeError, ValueError) as e:
        click.echo(f"\nError: {e}", err=True)
        raise SystemExit(1)

    click.echo(frame.to_string(index=False, float_format=lambda v: f"{v:.8g}"))


@cli.command()
@distribution_options
@click.option("--y", "-y", type=int, default=0, help="Random variable for complement checks")
def check(kind, trials, chance, population, sample, successes, k, rate, y):
    """Run consistency diagnostics against scipy.stats."""
    try:
        distribution = _build_distribution(
            kind, trials, chance, population, sample, successes, k, rate
        )
    except (TypeError, ValueError) as e:
        click.echo(f"\nError: {e}", err=True)
        raise SystemExit(1)

    results = run_all_checks(distribution, y)
    failed = False
    for name, result in results.items():
        status = "ok" if result.is_valid else "FAILED"
        click.echo(f"  {name:<14} {status}")
        for violation in result.violations[:5]:
            click.echo(f"    - {violation}")
        failed = failed or not result.is_valid

    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
