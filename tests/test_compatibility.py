"""Tests for the name-compatibility score."""

import pytest

from calckit import tables
from calckit.calculators import compatibility as comp
from calckit.errors import DomainViolation


def test_pattern_score_known_pair():
    # base 30, equal length 15, vowels 12, consonants 10, two shared letters 6,
    # letter "a" 4, identical ending 12
    assert comp.pattern_score("ab", "ab") == 89


def test_single_letter_endings_compare_as_missing():
    # 30 + 15 length + 8 vowels + 6 consonants + 4 letter "a" + 8 ending
    assert comp.pattern_score("a", "b") == 71


def test_pattern_score_ignores_case_and_spaces():
    assert comp.pattern_score("Ro se", "LILY") == comp.pattern_score("rose", "lily")


def test_same_seed_same_result():
    first = comp.name_compatibility("Alice", "Bob", seed=42)
    second = comp.name_compatibility("Alice", "Bob", seed=42)
    assert first == second


@pytest.mark.parametrize("seed", range(20))
def test_percent_is_clamped_and_labelled(seed):
    res = comp.name_compatibility("Jordan", "Sam", seed=seed)
    assert comp.MIN_PERCENT <= res.percent <= comp.MAX_PERCENT
    assert 0.0 <= res.random_bonus < comp.RANDOM_SPAN
    assert res.label == tables.threshold_table("compatibility").classify(res.percent).label


def test_high_pattern_saturates_at_maximum():
    res = comp.name_compatibility("rosella", "rosella", seed=1)
    assert res.pattern_score > comp.MAX_PERCENT
    assert res.percent == comp.MAX_PERCENT
    assert res.label == "Soulmate Alert!"


@pytest.mark.parametrize("a,b", [("", "Bob"), ("Alice", "   ")])
def test_empty_names_rejected(a, b):
    with pytest.raises(DomainViolation):
        comp.name_compatibility(a, b, seed=0)
