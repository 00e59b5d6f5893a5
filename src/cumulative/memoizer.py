"""
Memoizing cache for probability mass functions.

Cumulative sums evaluate the same PMF points over and over when several
queries share a distribution. Wrapping the PMF in a Memoizer stores each
result the first time it is computed. The cache is keyed by the integer
random variable and never evicts, which suits the bounded range of a
cumulative summation rather than long-lived service use.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class Memoizer:
    """
    Cache wrapper for an integer-to-float function.

    Concurrent lookups are safe. Two threads missing on the same key may
    both compute it, but dict.setdefault stores only the first value, so
    every caller observes the same result for a key once it is stored.

    Examples:
        >>> from src.core.kernels import hypergeometric_probability
        >>> pmf = Memoizer(lambda y: hypergeometric_probability(50, 6, 6, y))
        >>> pmf(2) == pmf(2)
        True
        >>> pmf.cache_info()
        {'hits': 1, 'misses': 1, 'size': 1}
    """

    def __init__(self, function: Callable[[int], float]):
        self._function = function
        self._cache: dict[int, float] = {}
        self.hits = 0
        self.misses = 0

    def __call__(self, key: int) -> float:
        try:
            value = self._cache[key]
        except KeyError:
            self.misses += 1
            logger.debug("Memoizer miss for key %d", key)
            return self._cache.setdefault(key, self._function(key))
        self.hits += 1
        return value

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def cache_info(self) -> dict[str, int]:
        """Return hit, miss and size counters."""
        return {"hits": self.hits, "misses": self.misses, "size": len(self._cache)}


def memoize(function: Callable[[int], float]) -> Memoizer:
    """Create a memoized version of a probability mass function, or any int-to-float function."""
    return Memoizer(function)
