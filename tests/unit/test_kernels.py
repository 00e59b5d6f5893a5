"""
Unit tests for the distribution kernels.

This module validates:
1. Known analytical values
2. Agreement with exact integer formulas on small supports
3. Normalization over the support
4. Zero probability outside the support
5. Stability for inputs whose factorials overflow
6. Expected value and variance formulas
"""

import math

import pytest
from scipy import stats

from src.core.kernels import (
    binomial_expected_value,
    binomial_probability,
    binomial_variance,
    geometric_expected_value,
    geometric_probability,
    geometric_variance,
    hypergeometric_expected_value,
    hypergeometric_probability,
    hypergeometric_variance,
    negative_binomial_expected_value,
    negative_binomial_probability,
    negative_binomial_variance,
    poisson_expected_value,
    poisson_probability,
    poisson_variance,
)


# ===========================
# Known Values Tests
# ===========================


def test_binomial_dice_known_value():
    """Exactly three ones in five rolls: 5C3 · (1/6)³ · (5/6)² = 250/7776."""
    assert binomial_probability(5, 1.0 / 6, 3) == pytest.approx(250 / 7776, rel=1e-12)
    assert abs(binomial_probability(5, 1.0 / 6, 3) - 0.03215) < 1e-5


def test_poisson_accidents_known_value():
    """Fourteen accidents when seven are expected: 7¹⁴ · e⁻⁷ / 14!, under 1%."""
    expected = 7**14 * math.exp(-7) / math.factorial(14)
    result = poisson_probability(7, 14)
    assert result == pytest.approx(expected, rel=1e-12)
    assert result < 0.01


def test_geometric_revolver_exact():
    """Third pull of a six-chamber revolver: (5/6)² · 1/6 exactly."""
    p = 1.0 / 6
    assert geometric_probability(p, 3) == (1.0 - p) ** 2 * p
    assert abs(geometric_probability(p, 3) - 0.11574) < 1e-5


def test_hypergeometric_chips_known_value():
    """Two black chips out of three drawn from 4 black and 5 red: 4C2 · 5C1 / 9C3."""
    assert hypergeometric_probability(9, 3, 4, 2) == pytest.approx(30 / 84, rel=1e-12)


def test_negative_binomial_third_one_on_sixth_roll():
    """Third one on the sixth roll: 5C2 · (1/6)³ · (5/6)³."""
    expected = 10 * (1 / 6) ** 3 * (5 / 6) ** 3
    assert negative_binomial_probability(3, 1.0 / 6, 6) == pytest.approx(expected, rel=1e-12)


# ===========================
# Exact Formula Agreement
# ===========================


@pytest.mark.parametrize("trials,p", [(1, 0.5), (12, 0.25), (30, 0.37), (60, 0.9)])
def test_binomial_matches_exact_formula(trials, p):
    for y in range(trials + 1):
        expected = math.comb(trials, y) * p**y * (1 - p) ** (trials - y)
        assert binomial_probability(trials, p, y) == pytest.approx(expected, rel=1e-11)


@pytest.mark.parametrize("N,n,r", [(9, 3, 4), (50, 6, 6), (30, 12, 9), (40, 40, 15), (25, 0, 10)])
def test_hypergeometric_matches_exact_formula(N, n, r):
    for y in range(0, min(n, r) + 1):
        if n - y > N - r:
            continue
        expected = math.comb(r, y) * math.comb(N - r, n - y) / math.comb(N, n)
        assert hypergeometric_probability(N, n, r, y) == pytest.approx(expected, rel=1e-11)


@pytest.mark.parametrize("k,p", [(2, 0.3), (3, 1.0 / 6), (5, 0.5)])
def test_negative_binomial_matches_exact_formula(k, p):
    for y in range(k, k + 40):
        expected = math.comb(y - 1, k - 1) * p**k * (1 - p) ** (y - k)
        assert negative_binomial_probability(k, p, y) == pytest.approx(expected, rel=1e-11)


@pytest.mark.parametrize("rate", [0.5, 1.0, 3.7, 7.0, 12.25])
def test_poisson_matches_exact_formula(rate):
    for y in range(40):
        expected = rate**y * math.exp(-rate) / math.factorial(y)
        assert poisson_probability(rate, y) == pytest.approx(expected, rel=1e-11)


# ===========================
# Normalization Tests
# ===========================


def test_binomial_normalization():
    total = math.fsum(binomial_probability(20, 0.3, y) for y in range(21))
    assert abs(total - 1.0) < 1e-9


def test_hypergeometric_normalization(lottery_params):
    N, n, r = (
        lottery_params["population_size"],
        lottery_params["sample_size"],
        lottery_params["success_states"],
    )
    total = math.fsum(hypergeometric_probability(N, n, r, y) for y in range(n + 1))
    assert abs(total - 1.0) < 1e-9


def test_negative_binomial_normalization():
    total = math.fsum(negative_binomial_probability(3, 0.2, y) for y in range(400))
    assert abs(total - 1.0) < 1e-9


def test_geometric_normalization():
    total = math.fsum(geometric_probability(0.25, y) for y in range(200))
    assert abs(total - 1.0) < 1e-9


def test_poisson_normalization():
    total = math.fsum(poisson_probability(7.0, y) for y in range(80))
    assert abs(total - 1.0) < 1e-9


# ===========================
# Boundary Tests
# ===========================


@pytest.mark.parametrize("y", [-5, -1, 21, 100])
def test_binomial_outside_support(y):
    assert binomial_probability(20, 0.3, y) == 0.0


def test_binomial_shortcuts():
    assert binomial_probability(10, 0.3, 0) == pytest.approx(0.7**10, rel=1e-15)
    assert binomial_probability(10, 0.3, 10) == pytest.approx(0.3**10, rel=1e-15)


def test_binomial_zero_trials():
    """With no trials, zero successes is certain."""
    assert binomial_probability(0, 0.4, 0) == 1.0
    assert binomial_probability(0, 0.4, 1) == 0.0


def test_binomial_degenerate_chances():
    assert binomial_probability(10, 0.0, 0) == 1.0
    assert binomial_probability(10, 0.0, 3) == 0.0
    assert binomial_probability(10, 1.0, 10) == 1.0
    assert binomial_probability(10, 1.0, 7) == 0.0


@pytest.mark.parametrize("y", [-1, 0])
def test_geometric_outside_support(y):
    assert geometric_probability(0.5, y) == 0.0


def test_hypergeometric_outside_support():
    # more successes than success states
    assert hypergeometric_probability(20, 10, 4, 5) == 0.0
    # more successes than draws
    assert hypergeometric_probability(20, 3, 10, 4) == 0.0
    # more failures drawn than failure states
    assert hypergeometric_probability(20, 10, 15, 4) == 0.0
    assert hypergeometric_probability(20, 10, 4, -1) == 0.0


def test_hypergeometric_whole_population_drawn():
    """Drawing everything yields every success state with certainty."""
    assert hypergeometric_probability(12, 12, 5, 5) == pytest.approx(1.0, rel=1e-15)


def test_negative_binomial_outside_support():
    assert negative_binomial_probability(3, 0.5, 2) == 0.0
    assert negative_binomial_probability(3, 0.5, 0) == 0.0
    assert negative_binomial_probability(3, 0.5, -4) == 0.0
    assert negative_binomial_probability(0, 0.5, 4) == 0.0


def test_negative_binomial_shortcuts():
    assert negative_binomial_probability(4, 0.3, 4) == pytest.approx(0.3**4, rel=1e-15)


def test_negative_binomial_single_success_is_geometric():
    for y in range(1, 20):
        assert negative_binomial_probability(1, 0.2, y) == geometric_probability(0.2, y)


def test_poisson_outside_support():
    assert poisson_probability(3.0, -1) == 0.0


def test_poisson_zero_rate():
    assert poisson_probability(0.0, 0) == 1.0
    assert poisson_probability(0.0, 3) == 0.0


# ===========================
# Large Input Stability Tests
# ===========================


def test_binomial_large_trials():
    """100000C50000 overflows a double but P(Y = 50000) ≈ 0.0025."""
    result = binomial_probability(100000, 0.5, 50000)
    assert result == pytest.approx(stats.binom.pmf(50000, 100000, 0.5), rel=1e-8)


def test_poisson_rate_beyond_exp_underflow():
    """e^-800 underflows to zero but P(Y = 800) for rate 800 is about 0.014."""
    assert math.exp(-800) == 0.0
    result = poisson_probability(800.0, 800)
    assert result == pytest.approx(stats.poisson.pmf(800, 800.0), rel=1e-9)


def test_hypergeometric_large_population_stable(large_hypergeometric_params):
    """Sampled points across the support stay finite and within [0, 1]."""
    N = large_hypergeometric_params["population_size"]
    n = large_hypergeometric_params["sample_size"]
    r = large_hypergeometric_params["success_states"]

    for y in list(range(0, r + 1, 1000)) + [4990, 5000, 5010, r - 1]:
        result = hypergeometric_probability(N, n, r, y)
        assert math.isfinite(result)
        assert 0.0 <= result <= 1.0


def test_hypergeometric_large_population_peak(large_hypergeometric_params):
    N = large_hypergeometric_params["population_size"]
    n = large_hypergeometric_params["sample_size"]
    r = large_hypergeometric_params["success_states"]

    result = hypergeometric_probability(N, n, r, 5000)
    assert result == pytest.approx(stats.hypergeom.pmf(5000, N, r, n), rel=1e-6)


# ===========================
# Moments Tests
# ===========================


def test_binomial_moments():
    assert binomial_expected_value(20, 0.3) == pytest.approx(6.0)
    assert binomial_variance(20, 0.3) == pytest.approx(4.2)


def test_geometric_moments():
    assert geometric_expected_value(0.25) == pytest.approx(4.0)
    assert geometric_variance(0.25) == pytest.approx(12.0)
    assert geometric_expected_value(0.0) == math.inf
    assert geometric_variance(0.0) == math.inf


def test_hypergeometric_moments():
    assert hypergeometric_expected_value(50, 6, 6) == pytest.approx(0.72)
    expected_variance = 6 * (6 / 50) * (44 / 50) * (44 / 49)
    assert hypergeometric_variance(50, 6, 6) == pytest.approx(expected_variance)


def test_hypergeometric_single_item_population_variance():
    assert hypergeometric_variance(1, 1, 1) == 0.0


def test_negative_binomial_moments():
    assert negative_binomial_expected_value(3, 0.2) == pytest.approx(15.0)
    assert negative_binomial_variance(3, 0.2) == pytest.approx(60.0)
    assert negative_binomial_expected_value(3, 0.0) == math.inf


def test_poisson_moments():
    assert poisson_expected_value(7.0) == 7.0
    assert poisson_variance(7.0) == 7.0
