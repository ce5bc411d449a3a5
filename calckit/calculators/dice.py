"""Dice-sum combinatorics.

Counts the ways ``n`` fair six-sided dice can land on a given total using a
dynamic-programming table over (dice, sum).  All arithmetic is on Python
integers, so counts are exact; the probability is only turned into a float at
the very end.

``ways[1][s] = 1`` for ``1 <= s <= 6`` and, for more dice,
``ways[d][s] = sum(ways[d-1][s-f] for f in 1..6 if f < s)``.

Example
-------

>>> count_dice_sum_ways(2, 7)
6
>>> round(dice_sum_probability(2, 7).percent, 3)
16.667
>>> count_dice_sum_ways(1, 7)
0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, List

from ..errors import DomainViolation

logger = logging.getLogger(__name__)

FACES = 6
MIN_DICE = 1
MAX_DICE = 10


@dataclass(frozen=True)
class DiceSumResult:
    dice_count: int
    target_sum: int
    ways: int
    total_outcomes: int
    probability: float

    @property
    def percent(self) -> float:
        return self.probability * 100.0


def _check_dice_count(dice_count) -> int:
    if isinstance(dice_count, bool) or not isinstance(dice_count, Integral):
        raise DomainViolation(f"dice_count must be an integer, got {dice_count!r}")
    if not MIN_DICE <= dice_count <= MAX_DICE:
        raise DomainViolation(f"dice_count must be between {MIN_DICE} and {MAX_DICE}, got {dice_count}")
    return int(dice_count)


def _ways_table(dice_count: int) -> List[List[int]]:
    """Return ``ways[d][s]`` for ``0 <= d <= dice_count`` and ``0 <= s <= 6 * dice_count``."""
    max_sum = FACES * dice_count
    ways = [[0] * (max_sum + 1) for _ in range(dice_count + 1)]
    for s in range(1, FACES + 1):
        ways[1][s] = 1
    for d in range(2, dice_count + 1):
        for s in range(d, FACES * d + 1):
            ways[d][s] = sum(ways[d - 1][s - f] for f in range(1, FACES + 1) if f < s)
    return ways


def count_dice_sum_ways(dice_count: int, target_sum: int) -> int:
    """Number of ordered outcomes of ``dice_count`` dice summing to ``target_sum``.

    A ``target_sum`` outside ``[dice_count, 6 * dice_count]`` is unreachable and
    gives zero rather than an error.
    """
    n = _check_dice_count(dice_count)
    if isinstance(target_sum, bool) or not isinstance(target_sum, Integral):
        raise DomainViolation(f"target_sum must be an integer, got {target_sum!r}")
    if target_sum < n or target_sum > FACES * n:
        return 0
    return _ways_table(n)[n][int(target_sum)]


def dice_sum_probability(dice_count: int, target_sum: int) -> DiceSumResult:
    """Exact count plus probability (``ways / 6 ** dice_count``)."""
    ways = count_dice_sum_ways(dice_count, target_sum)
    total = FACES ** int(dice_count)
    logger.debug("dice n=%s sum=%s ways=%s of %s", dice_count, target_sum, ways, total)
    return DiceSumResult(
        dice_count=int(dice_count),
        target_sum=int(target_sum),
        ways=ways,
        total_outcomes=total,
        probability=ways / total,
    )


def dice_sum_distribution(dice_count: int) -> Dict[int, int]:
    """Mapping of every reachable sum to its number of ways."""
    n = _check_dice_count(dice_count)
    row = _ways_table(n)[n]
    return {s: row[s] for s in range(n, FACES * n + 1)}


__all__ = [
    "DiceSumResult",
    "count_dice_sum_ways",
    "dice_sum_probability",
    "dice_sum_distribution",
    "MIN_DICE",
    "MAX_DICE",
]
