"""Tests for the credit-card payoff and balance-transfer kernels."""

import math

import pytest

from calckit.calculators import amortization as am
from calckit.errors import DegenerateComputation, DomainViolation


def test_reference_payoff():
    """5000 at 20% APR with 200/month clears in 33 payments."""
    r = am.monthly_rate_from_apr(20)
    sched = am.months_to_payoff(5000, r, 200)
    assert sched.months == 33
    assert 32 < sched.exact_months < 33
    assert math.isclose(sched.total_paid, 6600.0)
    assert math.isclose(sched.total_interest, 1600.0)


def test_payoff_month_is_the_first_non_positive_balance():
    r = am.monthly_rate_from_apr(20)
    sched = am.months_to_payoff(5000, r, 200)
    assert am.remaining_balance(5000, r, 200, sched.months) <= 0
    assert am.remaining_balance(5000, r, 200, sched.months - 1) > 0


@pytest.mark.parametrize("balance,apr,payment", [(1200, 18, 100), (25000, 24.99, 900), (300, 5, 17)])
def test_closed_form_matches_recurrence(balance, apr, payment):
    r = am.monthly_rate_from_apr(apr)
    sched = am.months_to_payoff(balance, r, payment)
    assert am.remaining_balance(balance, r, payment, sched.months) <= 1e-6
    assert am.remaining_balance(balance, r, payment, sched.months - 1) > 0


def test_zero_rate_is_simple_division():
    sched = am.months_to_payoff(1000, 0.0, 300)
    assert sched.exact_months == pytest.approx(1000 / 300)
    assert sched.months == 4
    assert sched.total_interest == pytest.approx(200.0)


def test_whole_month_is_not_rounded_up():
    sched = am.months_to_payoff(1000, 0.0, 250)
    assert sched.months == 4


@pytest.mark.parametrize("payment", [50, 83.33])
def test_payment_not_covering_interest(payment):
    """First-month interest on 5000 at 20% APR is 83.33; anything at or below it never amortises."""
    r = am.monthly_rate_from_apr(20)
    with pytest.raises(DegenerateComputation):
        am.months_to_payoff(5000, r, payment)


@pytest.mark.parametrize("args", [(0, 0.01, 100), (1000, 0.01, 0), (1000, -0.01, 100)])
def test_payoff_domain(args):
    with pytest.raises(DomainViolation):
        am.months_to_payoff(*args)


def test_negative_apr_rejected():
    with pytest.raises(DomainViolation):
        am.monthly_rate_from_apr(-1)


def test_balance_transfer_saves_interest():
    cmp = am.compare_balance_transfer(5000, 20, 3, 0, 200, 12)
    assert cmp.transfer_fee == pytest.approx(150.0)
    assert cmp.current_card.converged and cmp.transfer_card.converged
    assert cmp.transfer_card.total_interest == 0.0
    assert cmp.current_card.months == 33
    assert cmp.transfer_card.months == 26
    assert cmp.savings == pytest.approx(cmp.current_card.total_interest - 150.0)
    assert 0 < cmp.break_even_months < cmp.current_card.months
    assert "Break-even" in cmp.interpretation


def test_balance_transfer_no_savings_has_zero_break_even():
    cmp = am.compare_balance_transfer(5000, 10, 5, 25, 300, 0)
    assert cmp.savings < 0
    assert cmp.break_even_months == 0


def test_balance_transfer_hits_ceiling():
    """A payment below the monthly interest stops at the 120-month ceiling."""
    cmp = am.compare_balance_transfer(5000, 20, 3, 0, 50, 12)
    assert not cmp.current_card.converged
    assert cmp.current_card.months == am.TRANSFER_MAX_MONTHS
    assert cmp.current_card.final_balance > 0
    assert cmp.transfer_card.converged
    assert cmp.transfer_card.months == 103


@pytest.mark.parametrize(
    "args",
    [
        (-1, 20, 3, 0, 200, 12),
        (5000, 120, 3, 0, 200, 12),
        (5000, 20, -3, 0, 200, 12),
        (5000, 20, 3, 0, 0, 12),
        (5000, 20, 3, 0, 200, 61),
    ],
)
def test_balance_transfer_domain(args):
    with pytest.raises(DomainViolation):
        am.compare_balance_transfer(*args)


@pytest.mark.parametrize(
    "args",
    [
        (float("nan"), 0.01, 100),
        (1000, float("nan"), 100),
        (1000, 0.01, float("nan")),
        (float("inf"), 0.0, 100),
        (1000, 0.0, float("inf")),
    ],
)
def test_payoff_rejects_non_finite(args):
    with pytest.raises(DomainViolation):
        am.months_to_payoff(*args)


def test_payoff_totals_are_floats_for_integer_inputs():
    sched = am.months_to_payoff(5000, am.monthly_rate_from_apr(20), 200)
    assert isinstance(sched.total_paid, float)
    assert isinstance(sched.total_interest, float)


@pytest.mark.parametrize(
    "args",
    [
        (float("nan"), 20, 3, 0, 200, 12),
        (5000, float("nan"), 3, 0, 200, 12),
        (5000, 20, 3, float("inf"), 200, 12),
        (5000, 20, 3, 0, float("nan"), 12),
    ],
)
def test_balance_transfer_rejects_non_finite(args):
    with pytest.raises(DomainViolation):
        am.compare_balance_transfer(*args)
