"""
Probability mass function kernels for five discrete distributions.

Each kernel reduces its closed-form probability formula to a factor set
consumed by the interleaved evaluator, after handling out-of-support
values and boundary shortcuts explicitly. Kernels are pure functions of
their arguments and perform no parameter validation; validated entry
points live in src.core.distributions.

Distributions:
    - Binomial: successes in n independent trials
    - Geometric: trial on which the first success happens
    - Hypergeometric: successes drawn without replacement
    - Negative Binomial: trial on which the kth success happens
    - Poisson: events in a fixed interval given an average rate

References:
    Wackerly, D., Mendenhall, W., & Scheaffer, R. (2008).
    Mathematical Statistics with Applications (7th ed.), Chapter 3.
"""

import math

from src.core.evaluator import FactorSet, combination_factors

# e^-1, applied once per integral unit of a Poisson rate
_INVERSE_E = math.exp(-1.0)


# ===========================
# Binomial
# ===========================


def binomial_probability(trials: int, chance_of_success: float, random_variable: int) -> float:
    """
    Binomial probability P(Y = random_variable).

    "If each trial succeeds with chance p, what is the probability of
    exactly y successes in n trials?" For example, the chance of rolling
    exactly three ones in five rolls of a die.

    Args:
        trials: Number of trials (n)
        chance_of_success: Chance each trial succeeds (p)
        random_variable: Number of successes (y)

    Returns:
        Probability between 0.0 and 1.0 inclusive

    Formula:
        P(Y) = n! / ((n-y)! · y!) · p^y · q^(n-y),   q = 1 - p

    Examples:
        >>> abs(binomial_probability(5, 1.0 / 6, 3) - 0.03215) < 1e-5
        True

    Edge Cases:
        - y < 0 or y > n: 0.0
        - y = 0: q^n (factorials and p cancel)
        - y = n: p^n (factorials and q cancel)
    """
    if random_variable < 0 or random_variable > trials:
        return 0.0

    chance_of_failure = 1.0 - chance_of_success

    if random_variable == 0:
        return math.pow(chance_of_failure, trials)
    if random_variable == trials:
        return math.pow(chance_of_success, trials)

    factors = combination_factors(trials, random_variable).with_powers(
        (chance_of_failure, trials - random_variable),
        (chance_of_success, random_variable),
    )
    return factors.evaluate()


def binomial_expected_value(trials: int, chance_of_success: float) -> float:
    """E(Y) = n · p"""
    return trials * chance_of_success


def binomial_variance(trials: int, chance_of_success: float) -> float:
    """V(Y) = n · p · (1 - p)"""
    return trials * chance_of_success * (1.0 - chance_of_success)


# ===========================
# Geometric
# ===========================


def geometric_probability(chance_of_success: float, on_trial: int) -> float:
    """
    Geometric probability that the first success happens on trial y.

    This is the "number of trials" form of the distribution, so the support
    starts at 1. If a revolver holds one bullet in six chambers, the chance
    the bullet fires on the third pull is 5/6 · 5/6 · 1/6.

    Args:
        chance_of_success: Chance each trial succeeds (p)
        on_trial: Trial on which the first success happens (y)

    Returns:
        Probability between 0.0 and 1.0 inclusive

    Formula:
        P(Y) = q^(y-1) · p
    """
    if on_trial <= 0:
        return 0.0
    return math.pow(1.0 - chance_of_success, on_trial - 1) * chance_of_success


def geometric_expected_value(chance_of_success: float) -> float:
    """E(Y) = 1 / p, infinite when p = 0."""
    if chance_of_success == 0.0:
        return math.inf
    return 1.0 / chance_of_success


def geometric_variance(chance_of_success: float) -> float:
    """V(Y) = (1 - p) / p², infinite when p = 0."""
    if chance_of_success == 0.0:
        return math.inf
    return (1.0 - chance_of_success) / (chance_of_success * chance_of_success)


# ===========================
# Hypergeometric
# ===========================


def hypergeometric_probability(
    population_size: int, sample_size: int, success_states: int, random_variable: int
) -> float:
    """
    Hypergeometric probability of drawing y successes without replacement.

    A bag holds 5 red and 4 black chips. Drawing 3 chips without looking,
    the chance of exactly two black chips uses N = 9, n = 3, r = 4, y = 2.
    Lottery odds are the other classic use: N = 50 numbers, n = 6 drawn,
    r = 6 numbers on the ticket, y matches.

    Args:
        population_size: Population size (N)
        sample_size: Number of items drawn (n)
        success_states: Number of success items in the population (r)
        random_variable: Number of successes drawn (y)

    Returns:
        Probability between 0.0 and 1.0 inclusive

    Formula:
                (r C y) · ((N-r) C (n-y))
        P(Y) = ---------------------------
                        (N C n)

    Notes:
        All three coefficients are reduced and combined into one factor set.
        N C n divides the expression, so its numerator factors become
        denominators and vice versa.
    """
    failures_drawn = sample_size - random_variable
    failure_states = population_size - success_states

    if random_variable < 0 or random_variable > success_states:
        return 0.0
    if failures_drawn < 0 or failures_drawn > failure_states:
        return 0.0

    factors = FactorSet.combine(
        combination_factors(success_states, random_variable),
        combination_factors(failure_states, failures_drawn),
        combination_factors(population_size, sample_size).inverted(),
    )
    return factors.evaluate()


def hypergeometric_expected_value(
    population_size: int, sample_size: int, success_states: int
) -> float:
    """E(Y) = n · r / N"""
    return sample_size * success_states / population_size


def hypergeometric_variance(population_size: int, sample_size: int, success_states: int) -> float:
    """
    V(Y) = n · (r/N) · ((N-r)/N) · ((N-n)/(N-1))

    A population of one has no spread, and the finite population correction
    would divide by zero, so N = 1 returns 0.0.
    """
    if population_size == 1:
        return 0.0
    N, n, r = population_size, sample_size, success_states
    return n * (r / N) * ((N - r) / N) * ((N - n) / (N - 1))


# ===========================
# Negative Binomial
# ===========================


def negative_binomial_probability(
    successful_trials: int, chance_of_success: float, random_variable: int
) -> float:
    """
    Negative binomial probability that the kth success happens on trial y.

    Rolling a die, the chance that the third one shows up exactly on the
    sixth roll uses k = 3, y = 6, p = 1/6.

    Args:
        successful_trials: Number of successes waited for (k)
        chance_of_success: Chance each trial succeeds (p)
        random_variable: Trial on which the kth success happens (y)

    Returns:
        Probability between 0.0 and 1.0 inclusive

    Formula:
        P(Y) = (y-1) C (k-1) · p^k · q^(y-k)

    Edge Cases:
        - k > y, y <= 0 or k = 0: 0.0
        - k = y: p^k (every trial succeeded)
        - k = 1: q^(y-1) · p (reduces to the geometric distribution)
    """
    k, y = successful_trials, random_variable
    if k > y or y <= 0 or k == 0:
        return 0.0

    chance_of_failure = 1.0 - chance_of_success

    if k == y:
        return math.pow(chance_of_success, k)
    if k == 1:
        return math.pow(chance_of_failure, y - 1) * chance_of_success

    factors = combination_factors(y - 1, k - 1).with_powers(
        (chance_of_failure, y - k),
        (chance_of_success, k),
    )
    return factors.evaluate()


def negative_binomial_expected_value(successful_trials: int, chance_of_success: float) -> float:
    """E(Y) = k / p, infinite when p = 0."""
    if chance_of_success == 0.0:
        return math.inf
    return successful_trials / chance_of_success


def negative_binomial_variance(successful_trials: int, chance_of_success: float) -> float:
    """V(Y) = k · (1 - p) / p², infinite when p = 0."""
    if chance_of_success == 0.0:
        return math.inf
    return successful_trials * (1.0 - chance_of_success) / (chance_of_success * chance_of_success)


# ===========================
# Poisson
# ===========================


def poisson_probability(rate: float, random_variable: int) -> float:
    """
    Poisson probability of exactly y events given an average rate.

    A street corner averages 7 accidents a month. The chance of 14
    accidents next month is poisson_probability(7, 14), under 1%.

    Args:
        rate: Average number of events per interval (lambda)
        random_variable: Number of events (y)

    Returns:
        Probability between 0.0 and 1.0 inclusive

    Formula:
        P(Y) = lambda^y · e^(-lambda) / y!

    Notes:
        e^(-lambda) is split into e^(-frac(lambda)), which seeds the running
        result, and floor(lambda) factors of e^-1 that are interleaved with
        the lambda numerators and the 1..y denominators. Evaluating
        e^(-lambda) in one piece would underflow for large rates even when
        the probability itself is representable.
    """
    if random_variable < 0:
        return 0.0

    integral = int(rate)
    fractional = rate - integral

    factors = FactorSet(
        numerators=[[rate] * random_variable],
        denominators=[range(random_variable, 1, -1)],
        powers=[(_INVERSE_E, integral)],
    )
    return factors.evaluate(initial=math.exp(-fractional))


def poisson_expected_value(rate: float) -> float:
    """E(Y) = lambda"""
    return rate


def poisson_variance(rate: float) -> float:
    """V(Y) = lambda"""
    return rate
