"""Down-payment savings timeline.

Savings grow by a monthly return and a fixed contribution:

    pv <- pv * (1 + r) + contribution

where ``r`` is the annual return percentage divided by 100 and by 12.  The
recurrence runs until the balance reaches the down-payment target or the
month ceiling (600 months, 50 years, by default) is hit.  Hitting the ceiling
is reported through ``reached=False`` rather than raised.

Example
-------

>>> proj = down_payment_timeline(300000, 20, 10000, 1000, 0)
>>> proj.target, proj.months, proj.reached
(60000.0, 50, True)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..errors import DomainViolation

logger = logging.getLogger(__name__)

DEFAULT_MAX_MONTHS = 600


@dataclass(frozen=True)
class SavingsProjection:
    target: float
    remaining: float
    months: int
    final_balance: float
    reached: bool
    interpretation: str

    @property
    def years(self) -> int:
        return self.months // 12

    @property
    def remainder_months(self) -> int:
        return self.months % 12


def down_payment_timeline(
    home_price: float,
    down_payment_percent: float,
    current_savings: float,
    monthly_contribution: float,
    annual_return_percent: float,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> SavingsProjection:
    """Months of saving needed to cover the down payment on ``home_price``.

    Parameters
    ----------
    home_price : float
        Purchase price (>= 0).
    down_payment_percent : float
        Down payment as a percentage of the price, 0–100.
    current_savings : float
        Amount already saved (>= 0).
    monthly_contribution : float
        Amount added at the end of every month (>= 0).
    annual_return_percent : float
        Expected annual return in percent, -100 to 100.
    max_months : int, optional
        Iteration ceiling (default 600).

    Returns
    -------
    SavingsProjection
        ``months`` is the ceiling value when the goal is not reached.
    """
    for name, value in (
        ("home_price", home_price),
        ("down_payment_percent", down_payment_percent),
        ("current_savings", current_savings),
        ("monthly_contribution", monthly_contribution),
        ("annual_return_percent", annual_return_percent),
    ):
        if not math.isfinite(value):
            raise DomainViolation(f"{name} must be finite, got {value!r}")
    if home_price < 0 or current_savings < 0 or monthly_contribution < 0:
        raise DomainViolation("price, savings and contribution must not be negative")
    if not 0 <= down_payment_percent <= 100:
        raise DomainViolation(f"down_payment_percent must be within 0-100, got {down_payment_percent}")
    if not -100 <= annual_return_percent <= 100:
        raise DomainViolation(f"annual_return_percent must be within -100-100, got {annual_return_percent}")
    if max_months <= 0:
        raise DomainViolation("max_months must be positive")

    target = float(home_price) * (down_payment_percent / 100.0)
    remaining = max(0.0, target - current_savings)
    r = annual_return_percent / 100.0 / 12.0

    pv = float(current_savings)
    months = 0
    while pv < target and months < max_months:
        pv = pv * (1.0 + r) + monthly_contribution
        months += 1
    reached = pv >= target

    if reached:
        interpretation = (
            f"Down payment needed: {target:.2f}. Remaining: {remaining:.2f}. "
            f"Time to save: {months // 12} years {months % 12} months."
        )
    else:
        interpretation = (
            f"Down payment needed: {target:.2f}. Remaining: {remaining:.2f}. "
            f"Goal not reached within horizon of {max_months // 12} years."
        )
        logger.debug("savings goal %.2f not reached in %d months (balance %.2f)", target, max_months, pv)

    return SavingsProjection(
        target=target,
        remaining=remaining,
        months=months,
        final_balance=pv,
        reached=reached,
        interpretation=interpretation,
    )


__all__ = ["SavingsProjection", "down_payment_timeline", "DEFAULT_MAX_MONTHS"]
