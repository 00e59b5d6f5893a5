"""
Distribution objects binding validated parameters to a cumulative operation.

Each class validates its parameters eagerly on construction, forwards
single-point evaluation to the matching kernel, and applies its configured
CumulativeOperation in get_result. The classes share only a small mixin
for get_result and memoized; they satisfy the DiscreteDistribution
protocol structurally.

Examples:
    >>> # Roll 5 dice: probability 3 or more show the same chosen face
    >>> dice = Binomial(5, 1.0 / 6, operation="greaterThanOrEqual")
    >>> round(dice.get_result(3), 5)
    0.03549
"""

from dataclasses import dataclass
from typing import Union

from src.core import kernels
from src.cumulative.memoizer import Memoizer
from src.cumulative.operations import CumulativeOperation, cumulative_probability
from src.utils.constants import DEFAULT_OPERATION_NAME
from src.utils.types import (
    BinomialParams,
    GeometricParams,
    HypergeometricParams,
    NegativeBinomialParams,
    PoissonParams,
)

OperationLike = Union[CumulativeOperation, str]


def _resolve_operation(operation: OperationLike) -> CumulativeOperation:
    """Accept an operation member or any name understood by CumulativeOperation.from_name."""
    if isinstance(operation, CumulativeOperation):
        return operation
    if isinstance(operation, str):
        return CumulativeOperation.from_name(operation)
    raise TypeError(f"operation must be a CumulativeOperation or name, got {operation!r}")


class _CumulativeMixin:
    """get_result and memoized shared by every distribution object."""

    operation: CumulativeOperation

    def get_result(self, random_variable: int) -> float:
        """Apply the configured cumulative operation at random_variable."""
        return cumulative_probability(self.operation, random_variable, self.compute_result)

    def memoized(self) -> Memoizer:
        """Return a fresh Memoizer over compute_result."""
        return Memoizer(self.compute_result)


@dataclass(frozen=True)
class Binomial(_CumulativeMixin):
    """Binomial distribution: successes in a fixed number of trials."""

    trials: int
    chance_of_success: float
    operation: OperationLike = DEFAULT_OPERATION_NAME

    def __post_init__(self) -> None:
        BinomialParams(self.trials, self.chance_of_success)
        object.__setattr__(self, "operation", _resolve_operation(self.operation))

    def compute_result(self, random_variable: int) -> float:
        return kernels.binomial_probability(self.trials, self.chance_of_success, random_variable)

    def expected_value(self) -> float:
        return kernels.binomial_expected_value(self.trials, self.chance_of_success)

    def variance(self) -> float:
        return kernels.binomial_variance(self.trials, self.chance_of_success)


@dataclass(frozen=True)
class Geometric(_CumulativeMixin):
    """Geometric distribution: trial on which the first success happens."""

    chance_of_success: float
    operation: OperationLike = DEFAULT_OPERATION_NAME

    def __post_init__(self) -> None:
        GeometricParams(self.chance_of_success)
        object.__setattr__(self, "operation", _resolve_operation(self.operation))

    def compute_result(self, random_variable: int) -> float:
        return kernels.geometric_probability(self.chance_of_success, random_variable)

    def expected_value(self) -> float:
        return kernels.geometric_expected_value(self.chance_of_success)

    def variance(self) -> float:
        return kernels.geometric_variance(self.chance_of_success)


@dataclass(frozen=True)
class Hypergeometric(_CumulativeMixin):
    """Hypergeometric distribution: successes drawn without replacement."""

    population_size: int
    sample_size: int
    success_states: int
    operation: OperationLike = DEFAULT_OPERATION_NAME

    def __post_init__(self) -> None:
        HypergeometricParams(self.population_size, self.sample_size, self.success_states)
        object.__setattr__(self, "operation", _resolve_operation(self.operation))

    def compute_result(self, random_variable: int) -> float:
        return kernels.hypergeometric_probability(
            self.population_size, self.sample_size, self.success_states, random_variable
        )

    def expected_value(self) -> float:
        return kernels.hypergeometric_expected_value(
            self.population_size, self.sample_size, self.success_states
        )

    def variance(self) -> float:
        return kernels.hypergeometric_variance(
            self.population_size, self.sample_size, self.success_states
        )


@dataclass(frozen=True)
class NegativeBinomial(_CumulativeMixin):
    """Negative binomial distribution: trial on which the kth success happens."""

    successful_trials: int
    chance_of_success: float
    operation: OperationLike = DEFAULT_OPERATION_NAME

    def __post_init__(self) -> None:
        NegativeBinomialParams(self.successful_trials, self.chance_of_success)
        object.__setattr__(self, "operation", _resolve_operation(self.operation))

    def compute_result(self, random_variable: int) -> float:
        return kernels.negative_binomial_probability(
            self.successful_trials, self.chance_of_success, random_variable
        )

    def expected_value(self) -> float:
        return kernels.negative_binomial_expected_value(
            self.successful_trials, self.chance_of_success
        )

    def variance(self) -> float:
        return kernels.negative_binomial_variance(self.successful_trials, self.chance_of_success)


@dataclass(frozen=True)
class Poisson(_CumulativeMixin):
    """Poisson distribution: events in an interval given an average rate."""

    rate: float
    operation: OperationLike = DEFAULT_OPERATION_NAME

    def __post_init__(self) -> None:
        PoissonParams(self.rate)
        object.__setattr__(self, "operation", _resolve_operation(self.operation))

    def compute_result(self, random_variable: int) -> float:
        return kernels.poisson_probability(self.rate, random_variable)

    def expected_value(self) -> float:
        return kernels.poisson_expected_value(self.rate)

    def variance(self) -> float:
        return kernels.poisson_variance(self.rate)
