"""
Data types and structures for discrete probability distributions.

This module defines the immutable parameter containers for each
distribution, the capability protocol shared by distribution objects,
and the result type returned by diagnostics.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Protocol, runtime_checkable

PMF = Callable[[int], float]


def _require_count(name: str, value: int) -> None:
    """
    Validate a count parameter.

    Raises:
        TypeError: If value is not an integer
        ValueError: If value is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {name}={value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {name}={value}")


def _require_probability(name: str, value: float) -> None:
    """
    Validate a probability parameter lies in [0, 1].

    Raises:
        ValueError: If value is NaN or outside [0, 1]
    """
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1 inclusive, got {name}={value}")


@dataclass(frozen=True)
class BinomialParams:
    """
    Immutable container for binomial parameters.

    Attributes:
        trials: Number of independent trials (n)
        chance_of_success: Probability each trial succeeds (p)
    """
    trials: int
    chance_of_success: float

    def __post_init__(self) -> None:
        _require_count("trials", self.trials)
        _require_probability("chance_of_success", self.chance_of_success)


@dataclass(frozen=True)
class GeometricParams:
    """
    Immutable container for geometric parameters.

    Attributes:
        chance_of_success: Probability each trial succeeds (p)
    """
    chance_of_success: float

    def __post_init__(self) -> None:
        _require_probability("chance_of_success", self.chance_of_success)


@dataclass(frozen=True)
class HypergeometricParams:
    """
    Immutable container for hypergeometric parameters.

    Attributes:
        population_size: Total number of items in the population (N)
        sample_size: Number of items drawn without replacement (n)
        success_states: Number of success items in the population (r)
    """
    population_size: int
    sample_size: int
    success_states: int

    def __post_init__(self) -> None:
        _require_count("population_size", self.population_size)
        _require_count("sample_size", self.sample_size)
        _require_count("success_states", self.success_states)
        if self.population_size == 0:
            raise ValueError(
                f"population_size must be positive, got population_size={self.population_size}"
            )
        if self.success_states > self.population_size:
            raise ValueError(
                f"success_states must not exceed population_size, "
                f"got success_states={self.success_states}, population_size={self.population_size}"
            )
        if self.sample_size > self.population_size:
            raise ValueError(
                f"sample_size must not exceed population_size, "
                f"got sample_size={self.sample_size}, population_size={self.population_size}"
            )


@dataclass(frozen=True)
class NegativeBinomialParams:
    """
    Immutable container for negative binomial parameters.

    Attributes:
        successful_trials: Number of successes to wait for (k)
        chance_of_success: Probability each trial succeeds (p)
    """
    successful_trials: int
    chance_of_success: float

    def __post_init__(self) -> None:
        _require_count("successful_trials", self.successful_trials)
        _require_probability("chance_of_success", self.chance_of_success)


@dataclass(frozen=True)
class PoissonParams:
    """
    Immutable container for Poisson parameters.

    Attributes:
        rate: Average number of events per interval (lambda)
    """
    rate: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.rate) or self.rate < 0:
            raise ValueError(f"rate must be finite and non-negative, got rate={self.rate}")


@runtime_checkable
class DiscreteDistribution(Protocol):
    """Capabilities shared by every distribution object."""

    def compute_result(self, random_variable: int) -> float: ...

    def get_result(self, random_variable: int) -> float: ...

    def expected_value(self) -> float: ...

    def variance(self) -> float: ...


@dataclass
class DiagnosticCheck:
    """
    Result from a distribution diagnostic.

    Attributes:
        is_valid: Whether the distribution passed the check
        violations: List of specific violations detected
        details: Dictionary with detailed check results
    """
    is_valid: bool
    violations: list[str]
    details: dict[str, float] = field(default_factory=dict)
