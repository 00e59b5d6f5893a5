"""
Diagnostics for discrete distribution implementations.

This module implements consistency checks on a distribution object:
- Normalization of the PMF over its support
- Complement laws between cumulative operations
- Bounds of individual PMF values
- Agreement with the scipy.stats reference implementations
"""

import logging
import math
from typing import Iterable, Optional

from scipy import stats

from src.core.distributions import (
    Binomial,
    Geometric,
    Hypergeometric,
    NegativeBinomial,
    Poisson,
)
from src.cumulative.operations import CumulativeOperation
from src.utils.constants import (
    MAX_TABLE_ROWS,
    PROBABILITY_TOLERANCE,
    REFERENCE_ABSOLUTE_TOLERANCE,
    REFERENCE_RELATIVE_TOLERANCE,
    TABLE_TAIL_MASS,
)
from src.utils.types import DiagnosticCheck, DiscreteDistribution

logger = logging.getLogger(__name__)


def reference_distribution(distribution: DiscreteDistribution):
    """
    Map a distribution object to its scipy.stats counterpart.

    scipy counts negative binomial failures rather than trials, so the
    returned offset must be subtracted from the random variable before
    evaluating the reference.

    Returns:
        (frozen scipy distribution, offset) tuple

    Raises:
        TypeError: If the distribution type has no scipy counterpart
    """
    if isinstance(distribution, Binomial):
        return stats.binom(distribution.trials, distribution.chance_of_success), 0
    if isinstance(distribution, Geometric):
        return stats.geom(distribution.chance_of_success), 0
    if isinstance(distribution, Hypergeometric):
        reference = stats.hypergeom(
            M=distribution.population_size,
            n=distribution.success_states,
            N=distribution.sample_size,
        )
        return reference, 0
    if isinstance(distribution, NegativeBinomial):
        reference = stats.nbinom(distribution.successful_trials, distribution.chance_of_success)
        return reference, distribution.successful_trials
    if isinstance(distribution, Poisson):
        return stats.poisson(distribution.rate), 0
    raise TypeError(f"No scipy reference for {type(distribution).__name__}")


def support_upper_bound(distribution: DiscreteDistribution) -> int:
    """
    Largest random variable worth enumerating for a distribution.

    Bounded supports return their true maximum. Unbounded supports
    (Geometric, Negative Binomial, Poisson) return the point beyond which
    the tail mass falls below TABLE_TAIL_MASS, capped at MAX_TABLE_ROWS.
    """
    if isinstance(distribution, Binomial):
        return distribution.trials
    if isinstance(distribution, Hypergeometric):
        return min(distribution.sample_size, distribution.success_states)

    reference, offset = reference_distribution(distribution)
    bound = reference.isf(TABLE_TAIL_MASS)
    if not math.isfinite(bound):
        return MAX_TABLE_ROWS - 1
    return min(int(bound) + offset + 1, MAX_TABLE_ROWS - 1)


def check_normalization(
    distribution: DiscreteDistribution,
    upper: Optional[int] = None,
    tolerance: float = PROBABILITY_TOLERANCE,
) -> DiagnosticCheck:
    """
    Validate that the PMF sums to one over its support.

    Args:
        distribution: Distribution to check
        upper: Last random variable to include, default support_upper_bound
        tolerance: Allowed deviation of the total from 1.0

    Returns:
        DiagnosticCheck with the total and its deviation from 1.0
    """
    if upper is None:
        upper = support_upper_bound(distribution)

    total = math.fsum(distribution.compute_result(y) for y in range(upper + 1))
    deviation = abs(total - 1.0)

    violations = []
    if deviation > tolerance:
        violations.append(
            f"PMF sums to {total:.12f} over [0, {upper}], deviation {deviation:.2e}"
        )
        logger.warning("Normalization failed for %r: %s", distribution, violations[-1])

    details = {"total": total, "deviation": deviation, "upper": float(upper)}
    return DiagnosticCheck(is_valid=not violations, violations=violations, details=details)


def check_complements(
    distribution: DiscreteDistribution,
    random_variable: int,
    tolerance: float = PROBABILITY_TOLERANCE,
) -> DiagnosticCheck:
    """
    Validate complement laws at a random variable.

    Checks:
    1. P(Y > y) + P(Y <= y) = 1
    2. P(Y >= y) + P(Y < y) = 1
    3. P(Y != y) + P(Y = y) = 1

    Args:
        distribution: Distribution to check
        random_variable: The y at which to evaluate
        tolerance: Tolerance for each identity

    Returns:
        DiagnosticCheck with each pair's sum
    """
    pmf = distribution.memoized()
    pairs = {
        "gt_plus_le": (CumulativeOperation.GREATER_THAN, CumulativeOperation.LESS_THAN_OR_EQUAL),
        "ge_plus_lt": (CumulativeOperation.GREATER_THAN_OR_EQUAL, CumulativeOperation.LESS_THAN),
        "ne_plus_eq": (CumulativeOperation.NOT_EQUAL, CumulativeOperation.EQUAL),
    }

    violations = []
    details = {}
    for label, (upper_op, lower_op) in pairs.items():
        total = upper_op.apply(random_variable, pmf) + lower_op.apply(random_variable, pmf)
        details[label] = total
        if abs(total - 1.0) > tolerance:
            violations.append(
                f"P(Y {upper_op.value} {random_variable}) + P(Y {lower_op.value} {random_variable}) "
                f"= {total:.12f}, expected 1"
            )
            logger.warning("Complement law failed for %r: %s", distribution, violations[-1])

    return DiagnosticCheck(is_valid=not violations, violations=violations, details=details)


def check_bounds(
    distribution: DiscreteDistribution, values: Optional[Iterable[int]] = None
) -> DiagnosticCheck:
    """
    Validate that every PMF value is finite and within [0, 1].

    Args:
        distribution: Distribution to check
        values: Random variables to evaluate, default the enumerable support

    Returns:
        DiagnosticCheck with the smallest and largest values observed
    """
    if values is None:
        values = range(support_upper_bound(distribution) + 1)

    violations = []
    smallest, largest = math.inf, -math.inf
    for y in values:
        probability = distribution.compute_result(y)
        if not math.isfinite(probability) or not 0.0 <= probability <= 1.0:
            violations.append(f"P(Y = {y}) = {probability!r} outside [0, 1]")
            continue
        smallest = min(smallest, probability)
        largest = max(largest, probability)

    if violations:
        logger.warning("Bounds failed for %r: %d values outside [0, 1]", distribution, len(violations))

    details = {"min": smallest, "max": largest}
    return DiagnosticCheck(is_valid=not violations, violations=violations, details=details)


def check_against_reference(
    distribution: DiscreteDistribution,
    values: Optional[Iterable[int]] = None,
    rel_tol: float = REFERENCE_RELATIVE_TOLERANCE,
    abs_tol: float = REFERENCE_ABSOLUTE_TOLERANCE,
) -> DiagnosticCheck:
    """
    Compare PMF values against scipy.stats.

    Args:
        distribution: Distribution to check
        values: Random variables to compare, default the enumerable support
        rel_tol: Relative tolerance passed to math.isclose
        abs_tol: Absolute tolerance passed to math.isclose

    Returns:
        DiagnosticCheck with the largest absolute difference observed
    """
    reference, offset = reference_distribution(distribution)
    if values is None:
        values = range(support_upper_bound(distribution) + 1)

    violations = []
    max_difference = 0.0
    for y in values:
        actual = distribution.compute_result(y)
        expected = float(reference.pmf(y - offset))
        difference = abs(actual - expected)
        max_difference = max(max_difference, difference)
        if not math.isclose(actual, expected, rel_tol=rel_tol, abs_tol=abs_tol):
            violations.append(f"P(Y = {y}) = {actual!r}, scipy.stats gives {expected!r}")

    if violations:
        logger.warning(
            "Reference mismatch for %r: %d of the compared values differ", distribution, len(violations)
        )

    details = {"max_difference": max_difference}
    return DiagnosticCheck(is_valid=not violations, violations=violations, details=details)


def run_all_checks(
    distribution: DiscreteDistribution, random_variable: int = 0
) -> dict[str, DiagnosticCheck]:
    """Run every diagnostic and return the results keyed by check name."""
    return {
        "normalization": check_normalization(distribution),
        "complements": check_complements(distribution, random_variable),
        "bounds": check_bounds(distribution),
        "reference": check_against_reference(distribution),
    }
