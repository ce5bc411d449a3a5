"""Credit-card payoff horizon and balance-transfer comparison.

With a fixed monthly payment ``M`` on a balance ``B`` at monthly rate ``r`` the
number of payments solves the annuity equation in closed form:

    n = -ln(1 - r * B / M) / ln(1 + r)

The logarithm only exists while ``M > r * B``; a payment at or below the first
month's interest never amortises the balance and is rejected up front instead
of looping forever.  ``n`` is rounded up to a whole month and the totals are
derived from that count (the final partial payment is not prorated).

The balance-transfer comparison has no closed form (promotional period, fee)
and is simulated month by month with a 120-month ceiling per card.

Example
-------

>>> sched = months_to_payoff(5000, monthly_rate_from_apr(20), 200)
>>> sched.months
33
>>> round(sched.total_interest, 2)
1600.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..errors import DegenerateComputation, DomainViolation

logger = logging.getLogger(__name__)

PAID_OFF_TOLERANCE = 0.01
TRANSFER_MAX_MONTHS = 120


@dataclass(frozen=True)
class PayoffSchedule:
    balance: float
    monthly_rate: float
    monthly_payment: float
    exact_months: float
    months: int
    total_paid: float
    total_interest: float


@dataclass(frozen=True)
class CardPayoff:
    months: int
    total_interest: float
    final_balance: float
    converged: bool


@dataclass(frozen=True)
class BalanceTransferComparison:
    current_card: CardPayoff
    transfer_card: CardPayoff
    transfer_fee: float
    savings: float
    break_even_months: int
    interpretation: str


def monthly_rate_from_apr(apr_percent: float) -> float:
    """Convert an annual percentage rate (e.g. ``20`` for 20 %) to a monthly fraction."""
    if apr_percent < 0:
        raise DomainViolation(f"APR must not be negative, got {apr_percent}")
    return apr_percent / 12.0 / 100.0


def months_to_payoff(balance: float, monthly_rate: float, monthly_payment: float) -> PayoffSchedule:
    """Months needed to clear ``balance`` with a fixed ``monthly_payment``.

    Parameters
    ----------
    balance : float
        Outstanding balance (> 0).
    monthly_rate : float
        Monthly interest rate as a fraction (APR / 12 / 100).
    monthly_payment : float
        Fixed payment per month (> 0).

    Raises
    ------
    DomainViolation
        Non-finite inputs, non-positive balance or payment, negative rate.
    DegenerateComputation
        ``monthly_payment <= monthly_rate * balance``; the balance never falls.
    """
    for name, value in (("balance", balance), ("monthly_rate", monthly_rate), ("monthly_payment", monthly_payment)):
        if not math.isfinite(value):
            raise DomainViolation(f"{name} must be finite, got {value!r}")
    if balance <= 0:
        raise DomainViolation(f"balance must be positive, got {balance}")
    if monthly_payment <= 0:
        raise DomainViolation(f"monthly_payment must be positive, got {monthly_payment}")
    if monthly_rate < 0:
        raise DomainViolation(f"monthly_rate must not be negative, got {monthly_rate}")

    if monthly_rate == 0:
        exact = balance / monthly_payment
    else:
        first_interest = monthly_rate * balance
        if monthly_payment <= first_interest:
            raise DegenerateComputation(
                f"payment {monthly_payment:.2f} does not cover monthly interest {first_interest:.2f}; "
                "balance never amortises"
            )
        exact = -math.log(1.0 - first_interest / monthly_payment) / math.log(1.0 + monthly_rate)

    # absorb floating-point noise when n lands on a whole month
    months = math.ceil(round(exact, 9))
    total_paid = float(monthly_payment) * months
    logger.debug("payoff B=%s r=%s M=%s -> n=%.6f (%d months)",
                 balance, monthly_rate, monthly_payment, exact, months)
    return PayoffSchedule(
        balance=balance,
        monthly_rate=monthly_rate,
        monthly_payment=monthly_payment,
        exact_months=exact,
        months=months,
        total_paid=total_paid,
        total_interest=total_paid - balance,
    )


def remaining_balance(balance: float, monthly_rate: float, monthly_payment: float, months: int) -> float:
    """Balance after ``months`` payments under ``b <- b * (1 + r) - M``.

    The result goes negative once the balance has been overpaid.
    """
    b = balance
    for _ in range(months):
        b = b * (1.0 + monthly_rate) - monthly_payment
    return b


def _simulate_card(
    balance: float,
    apr_percent: float,
    monthly_payment: float,
    promotional_months: int = 0,
    max_months: int = TRANSFER_MAX_MONTHS,
) -> CardPayoff:
    rate = apr_percent / 100.0 / 12.0
    bal = balance
    months = 0
    interest_total = 0.0
    while bal > PAID_OFF_TOLERANCE and months < max_months:
        month_rate = 0.0 if months < promotional_months else rate
        interest = bal * month_rate
        pay = min(bal + interest, monthly_payment)
        interest_total += interest
        bal = max(0.0, bal + interest - pay)
        months += 1
    return CardPayoff(
        months=months,
        total_interest=interest_total,
        final_balance=bal,
        converged=bal <= PAID_OFF_TOLERANCE,
    )


def compare_balance_transfer(
    balance: float,
    current_apr: float,
    transfer_fee_percent: float,
    new_apr: float,
    monthly_payment: float,
    promotional_months: int,
) -> BalanceTransferComparison:
    """Compare paying down a card in place with moving it to a promotional card.

    Rates and the fee are annual percentages (``18`` for 18 %).  The transfer
    fee is added to the new card's starting balance and no interest accrues
    during ``promotional_months``.  Each card is simulated for at most
    ``TRANSFER_MAX_MONTHS`` months; a card still carrying a balance at that
    point reports ``converged=False``.

    ``break_even_months`` scales the current card's payoff time by the ratio of
    the fee to the interest saved, and is zero when the transfer saves nothing.
    """
    for name, value in (
        ("balance", balance),
        ("current_apr", current_apr),
        ("transfer_fee_percent", transfer_fee_percent),
        ("new_apr", new_apr),
        ("monthly_payment", monthly_payment),
        ("promotional_months", promotional_months),
    ):
        if not math.isfinite(value):
            raise DomainViolation(f"{name} must be finite, got {value!r}")
    if balance < 0:
        raise DomainViolation(f"balance must not be negative, got {balance}")
    if monthly_payment <= 0:
        raise DomainViolation("monthly_payment must be positive")
    for name, pct in (("current_apr", current_apr), ("new_apr", new_apr),
                      ("transfer_fee_percent", transfer_fee_percent)):
        if not 0 <= pct <= 100:
            raise DomainViolation(f"{name} must be within 0-100, got {pct}")
    if not 0 <= promotional_months <= 60:
        raise DomainViolation(f"promotional_months must be within 0-60, got {promotional_months}")

    fee = balance * (transfer_fee_percent / 100.0)
    current = _simulate_card(balance, current_apr, monthly_payment)
    transfer = _simulate_card(balance + fee, new_apr, monthly_payment, promotional_months)

    savings = current.total_interest - transfer.total_interest - fee
    if savings > 0:
        break_even = math.ceil(fee / (current.total_interest - transfer.total_interest) * current.months)
    else:
        break_even = 0

    interpretation = (
        f"Savings: {savings:.2f}. Break-even: {break_even} months. "
        f"Old interest: {current.total_interest:.2f}, New: {transfer.total_interest:.2f}."
    )
    if not (current.converged and transfer.converged):
        logger.debug("balance transfer comparison hit the %d-month ceiling", TRANSFER_MAX_MONTHS)
    return BalanceTransferComparison(
        current_card=current,
        transfer_card=transfer,
        transfer_fee=fee,
        savings=savings,
        break_even_months=break_even,
        interpretation=interpretation,
    )


__all__ = [
    "PayoffSchedule",
    "CardPayoff",
    "BalanceTransferComparison",
    "monthly_rate_from_apr",
    "months_to_payoff",
    "remaining_balance",
    "compare_balance_transfer",
    "TRANSFER_MAX_MONTHS",
]
