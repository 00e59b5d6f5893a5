"""
Overflow-safe evaluation of factorial ratios.

Textbook formulas for discrete distributions contain factorials and
binomial coefficients that overflow a double long before the probability
itself becomes unrepresentable. This module evaluates such ratios by
interleaving multiplications and divisions so the running result stays
near 1.0, which avoids both overflow and premature underflow of
intermediate values.

Mathematical Background:
    A coefficient of the form a! / (b! · c!) with b + c = a cancels the
    larger of b! and c! against the prefix of a!, leaving

        (a - m + 1) · ... · a
        ---------------------     where m = min(b, c)
             1 · 2 · ... · m

    Several coefficients appearing in one formula are concatenated into a
    single numerator sequence and a single denominator sequence so that one
    evaluator pass keeps the whole expression bounded.
"""

import itertools
import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from src.utils.constants import INTERLEAVE_PIVOT

PowerTerm = tuple[float, int]


def interleaved_ratio(
    numerators: Iterable[float],
    denominators: Iterable[float],
    powers: Sequence[PowerTerm] = (),
    initial: float = 1.0,
) -> float:
    """
    Compute initial · product(numerators) · product(base**exp) / product(denominators).

    At every step the evaluator looks at the running result. At or above
    1.0 it applies a lowering factor (the next denominator, or failing that
    one unit of the next power term). Below 1.0 it applies the next
    numerator. Once the numerators are exhausted the remaining denominators
    are divided out and each remaining power term is folded in with a single
    exponentiation.

    Args:
        numerators: Factors that raise the result (typically integers >= 1)
        denominators: Divisors that lower the result (typically integers >= 1)
        powers: (base, exponent) pairs with base in [0, 1], applied as
            lowering factors after the denominators, in the given order
        initial: Starting value of the running result

    Returns:
        The ratio as a float. Empty inputs return initial.

    Examples:
        >>> interleaved_ratio([5, 4], [2])  # 5 choose 2
        10.0
        >>> interleaved_ratio([], [])
        1.0
        >>> interleaved_ratio([3], [], powers=[(0.5, 2)])
        0.75

    Notes:
        The relative error matches that of performing the same number of
        elementary operations in any order. The benefit over naive
        evaluation is purely the bounded magnitude of intermediate values.
    """
    raising = iter(numerators)
    lowering = iter(denominators)
    pending = [[base, exponent] for base, exponent in powers if exponent > 0]

    result = initial
    factor = next(raising, None)
    lowering_left = True

    while factor is not None:
        if result >= INTERLEAVE_PIVOT and lowering_left:
            divisor = next(lowering, None)
            if divisor is not None:
                result /= divisor
                continue
            if pending:
                term = pending[0]
                result *= term[0]
                term[1] -= 1
                if term[1] == 0:
                    pending.pop(0)
                continue
            lowering_left = False

        result *= factor
        factor = next(raising, None)

    # Tail: numerators exhausted, only lowering factors remain
    for divisor in lowering:
        result /= divisor
    for base, exponent in pending:
        result *= math.pow(base, exponent)

    return result


@dataclass
class FactorSet:
    """
    Numerator and denominator factors of one probability expression.

    Attributes:
        numerators: Factors multiplied into the result
        denominators: Factors divided out of the result
        powers: (base, exponent) power terms applied as lowering factors
    """
    numerators: list[Iterable[float]] = field(default_factory=list)
    denominators: list[Iterable[float]] = field(default_factory=list)
    powers: list[PowerTerm] = field(default_factory=list)

    def inverted(self) -> "FactorSet":
        """Swap numerators and denominators, for a coefficient that divides the expression."""
        if self.powers:
            raise ValueError("Cannot invert a factor set that carries power terms")
        return FactorSet(numerators=list(self.denominators), denominators=list(self.numerators))

    def with_powers(self, *powers: PowerTerm) -> "FactorSet":
        """Return a copy of this factor set with additional power terms appended."""
        return FactorSet(
            numerators=list(self.numerators),
            denominators=list(self.denominators),
            powers=list(self.powers) + list(powers),
        )

    @classmethod
    def combine(cls, *factor_sets: "FactorSet") -> "FactorSet":
        """Concatenate several factor sets so they are evaluated in a single pass."""
        combined = cls()
        for factor_set in factor_sets:
            combined.numerators.extend(factor_set.numerators)
            combined.denominators.extend(factor_set.denominators)
            combined.powers.extend(factor_set.powers)
        return combined

    def evaluate(self, initial: float = 1.0) -> float:
        """Evaluate the ratio with the interleaved evaluator."""
        return interleaved_ratio(
            itertools.chain.from_iterable(self.numerators),
            itertools.chain.from_iterable(self.denominators),
            self.powers,
            initial,
        )


def combination_factors(total: int, chosen: int) -> FactorSet:
    """
    Reduce the binomial coefficient `total choose chosen` to a factor set.

    The larger of the two denominator factorials cancels against the top of
    total!, leaving min(chosen, total - chosen) factors on each side. The
    trailing division by 1 is elided.

    Args:
        total: Size of the set being chosen from
        chosen: Number of items chosen, 0 <= chosen <= total

    Returns:
        FactorSet whose ratio equals total! / (chosen! · (total - chosen)!)

    Examples:
        >>> combination_factors(10, 3).evaluate()
        120.0
        >>> combination_factors(10, 10).evaluate()
        1.0
    """
    span = min(chosen, total - chosen)
    return FactorSet(
        numerators=[range(total, total - span, -1)],
        denominators=[range(span, 1, -1)],
    )
