"""
Cumulative operations over a probability mass function.

A cumulative operation turns a single-point PMF into a range query. Only
two operations sum the PMF (from zero up to the random variable, with or
without it). The other four are derived from one minus one of the
primitives, so the upper tail never needs to be enumerated.
"""

import logging
import math
from enum import Enum

from src.utils.types import PMF

logger = logging.getLogger(__name__)


class CumulativeOperation(Enum):
    """The closed set of comparisons P(Y ? y) supported for a random variable."""

    EQUAL = "="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="

    def apply(self, random_variable: int, pmf: PMF) -> float:
        """Apply this operation to pmf at random_variable."""
        return cumulative_probability(self, random_variable, pmf)

    @classmethod
    def from_name(cls, name: str) -> "CumulativeOperation":
        """
        Look up an operation by enum name, camelCase/snake_case name or symbol.

        Examples:
            >>> CumulativeOperation.from_name("lessThanOrEqual")
            <CumulativeOperation.LESS_THAN_OR_EQUAL: '<='>
            >>> CumulativeOperation.from_name(">=")
            <CumulativeOperation.GREATER_THAN_OR_EQUAL: '>='>

        Raises:
            ValueError: If name matches no operation
        """
        cleaned = name.strip()
        for operation in cls:
            if cleaned == operation.value:
                return operation

        normalized = "".join(ch for ch in cleaned if ch.isalnum()).upper()
        for operation in cls:
            if normalized == operation.name.replace("_", ""):
                return operation

        choices = ", ".join(op.name.lower() for op in cls)
        raise ValueError(f"Unknown cumulative operation '{name}', expected one of: {choices}")


def _sum_below(random_variable: int, pmf: PMF) -> float:
    """Sum pmf(y) for y in [0, random_variable). Empty for random_variable <= 0."""
    if random_variable <= 0:
        return 0.0
    logger.debug("Summing PMF over [0, %d)", random_variable)
    return math.fsum(pmf(y) for y in range(random_variable))


def cumulative_probability(
    operation: CumulativeOperation, random_variable: int, pmf: PMF
) -> float:
    """
    Evaluate a cumulative probability.

    Args:
        operation: Which comparison against the random variable to compute
        random_variable: The y in P(Y ? y)
        pmf: Probability mass function mapping an integer to [0, 1]

    Returns:
        Cumulative probability in [0, 1], up to floating point rounding

    Formulas:
        P(Y = y)  = pmf(y)
        P(Y < y)  = Σ pmf(i), i = 0 .. y-1
        P(Y <= y) = Σ pmf(i), i = 0 .. y
        P(Y != y) = 1 - P(Y = y)
        P(Y > y)  = 1 - P(Y <= y)
        P(Y >= y) = 1 - P(Y < y)

    Examples:
        >>> from src.core.kernels import binomial_probability
        >>> pmf = lambda y: binomial_probability(2, 0.5, y)
        >>> cumulative_probability(CumulativeOperation.LESS_THAN_OR_EQUAL, 1, pmf)
        0.75
    """
    if operation is CumulativeOperation.EQUAL:
        return pmf(random_variable)
    if operation is CumulativeOperation.LESS_THAN:
        return _sum_below(random_variable, pmf)
    if operation is CumulativeOperation.LESS_THAN_OR_EQUAL:
        return _sum_below(random_variable + 1, pmf)
    if operation is CumulativeOperation.NOT_EQUAL:
        return 1.0 - cumulative_probability(CumulativeOperation.EQUAL, random_variable, pmf)
    if operation is CumulativeOperation.GREATER_THAN:
        return 1.0 - cumulative_probability(
            CumulativeOperation.LESS_THAN_OR_EQUAL, random_variable, pmf
        )
    if operation is CumulativeOperation.GREATER_THAN_OR_EQUAL:
        return 1.0 - cumulative_probability(CumulativeOperation.LESS_THAN, random_variable, pmf)
    raise ValueError(f"operation must be a CumulativeOperation, got {operation!r}")
