"""Unit tests for the memoizing cache."""

from concurrent.futures import ThreadPoolExecutor

from src.core.kernels import hypergeometric_probability, poisson_probability
from src.cumulative.memoizer import Memoizer, memoize
from src.cumulative.operations import CumulativeOperation


def lottery_pmf(y):
    return hypergeometric_probability(50, 6, 6, y)


def test_memoized_values_bit_identical():
    memoized = memoize(lottery_pmf)
    for y in range(-2, 9):
        assert memoized(y) == lottery_pmf(y)
        # second lookup served from the cache
        assert memoized(y) == lottery_pmf(y)


def test_second_lookup_does_not_recompute(counting_pmf):
    pmf = counting_pmf(lottery_pmf)
    memoized = Memoizer(pmf)

    first = memoized(3)
    second = memoized(3)

    assert first == second
    assert pmf.calls == [3]
    assert memoized.cache_info() == {"hits": 1, "misses": 1, "size": 1}


def test_repeated_cumulative_summation_reuses_cache(counting_pmf):
    pmf = counting_pmf(lambda y: poisson_probability(7.0, y))
    memoized = Memoizer(pmf)

    first = CumulativeOperation.LESS_THAN_OR_EQUAL.apply(30, memoized)
    second = CumulativeOperation.GREATER_THAN.apply(30, memoized)

    assert abs(first + second - 1.0) < 1e-12
    assert len(pmf.calls) == 31
    assert len(memoized) == 31
    assert memoized.hits == 31


def test_contains_reports_cached_keys():
    memoized = Memoizer(lottery_pmf)
    assert 2 not in memoized
    memoized(2)
    assert 2 in memoized


def test_separate_memoizers_do_not_share_cache(counting_pmf):
    pmf = counting_pmf(lottery_pmf)
    Memoizer(pmf)(1)
    Memoizer(pmf)(1)
    assert pmf.calls == [1, 1]


def test_concurrent_lookups_are_consistent():
    memoized = Memoizer(lottery_pmf)
    keys = [y % 7 for y in range(500)]

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(memoized, keys))

    for key, result in zip(keys, results):
        assert result == lottery_pmf(key)
    assert len(memoized) == 7
