"""Name-compatibility score.

Entertainment only.  A deterministic letter-pattern score is combined with a
random bonus of up to 35 points, then rounded and clamped to 5–95 %.  The
random term comes from ``numpy.random.default_rng(seed)``; passing the same
``seed`` reproduces the same percentage, while ``seed=None`` draws fresh
entropy on every call.

Deterministic components:

* base of 30
* name-length harmony (+15 / +10 / +5 / +2 for a difference of 0 / ≤2 / ≤4 / ≤6)
* vowel harmony (+12 / +8 / +4) and consonant harmony (+10 / +6 / +3)
* +3 for every distinct letter of the first name found in the second
* bonuses for the letters l, o, v, e, h, a, r, t anywhere in either name
* matching two-letter endings (+12, or +8 / +4 for a partial match)
* +8 if both names contain a doubled letter
* +10 / +8 if either name contains one of the "romantic" / "strong" names
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .. import tables as table_config
from ..errors import DomainViolation

logger = logging.getLogger(__name__)

RANDOM_SPAN = 35.0
MIN_PERCENT = 5
MAX_PERCENT = 95

_LETTER_BONUS = {"l": 8, "o": 6, "v": 7, "e": 6, "h": 4, "a": 4, "r": 4, "t": 4}
_ROMANTIC_NAMES = ("rose", "lily", "jade", "ruby", "pearl", "diamond", "crystal", "amber", "sapphire", "emerald")
_STRONG_NAMES = ("alex", "max", "leo", "ace", "rex", "zeus", "thor", "odin", "titan", "atlas")
_VOWELS = re.compile(r"[aeiou]")
_CONSONANTS = re.compile(r"[bcdfghjklmnpqrstvwxyz]")
_DOUBLED = re.compile(r"(.)\1")


@dataclass(frozen=True)
class CompatibilityScore:
    percent: int
    label: str
    guidance: str
    pattern_score: int
    random_bonus: float


def _normalise(name: str) -> str:
    return re.sub(r"\s", "", name.lower())


def _graded(diff: int, grades) -> int:
    for limit, points in grades:
        if diff <= limit:
            return points
    return 0


def _ending_points(a: str, b: str) -> int:
    end_a, end_b = a[-2:], b[-2:]
    if end_a == end_b:
        return 12
    second_a = end_a[1] if len(end_a) > 1 else None
    second_b = end_b[1] if len(end_b) > 1 else None
    if second_a == second_b:
        return 8
    if end_a[0] == end_b[0]:
        return 4
    return 0


def pattern_score(name_a: str, name_b: str) -> int:
    """Deterministic part of the score, before the random bonus."""
    a, b = _normalise(name_a), _normalise(name_b)
    if not a or not b:
        raise DomainViolation("both names must contain at least one non-space character")
    combined = a + b

    score = 30
    score += _graded(abs(len(a) - len(b)), ((0, 15), (2, 10), (4, 5), (6, 2)))
    score += _graded(abs(len(_VOWELS.findall(a)) - len(_VOWELS.findall(b))), ((0, 12), (1, 8), (2, 4)))
    score += _graded(abs(len(_CONSONANTS.findall(a)) - len(_CONSONANTS.findall(b))), ((0, 10), (1, 6), (2, 3)))
    score += 3 * len({ch for ch in a if ch in b})
    score += sum(points for letter, points in _LETTER_BONUS.items() if letter in combined)
    score += _ending_points(a, b)
    if _DOUBLED.search(a) and _DOUBLED.search(b):
        score += 8
    if any(n in a or n in b for n in _ROMANTIC_NAMES):
        score += 10
    if any(n in a or n in b for n in _STRONG_NAMES):
        score += 8
    return score


def name_compatibility(
    name_a: str,
    name_b: str,
    seed: Optional[int] = None,
    tables: Optional[Dict[str, Dict]] = None,
) -> CompatibilityScore:
    """Compatibility percentage for two names.

    Parameters
    ----------
    name_a, name_b : str
        Names to compare; case and whitespace are ignored.
    seed : int, optional
        Seed for the random bonus.  Identical names and seed give identical
        results.

    Returns
    -------
    CompatibilityScore
        ``percent`` in 5–95 with its label from the 10-band table.
    """
    base = pattern_score(name_a, name_b)
    rng = np.random.default_rng(seed)
    bonus = float(rng.random()) * RANDOM_SPAN
    # half-up rounding
    percent = int(math.floor(base + bonus + 0.5))
    percent = max(MIN_PERCENT, min(MAX_PERCENT, percent))
    band = table_config.threshold_table("compatibility", tables).classify(percent)
    logger.debug("compatibility base=%d bonus=%.3f percent=%d", base, bonus, percent)
    return CompatibilityScore(
        percent=percent,
        label=band.label,
        guidance=band.guidance,
        pattern_score=base,
        random_bonus=bonus,
    )


__all__ = ["CompatibilityScore", "pattern_score", "name_compatibility"]
