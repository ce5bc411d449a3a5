"""Probability of default under the Merton structural model.

The firm defaults when the value of its assets falls below the face value of
its debt at the horizon.  With log-normal assets the *distance to default* is

    d = ln(V / D) / (sigma * sqrt(T))

and the probability of default is ``PD = N(-d)``.  Drift is ignored, matching
the simplified estimator the calculator exposes.

The standard normal CDF is built on the Abramowitz & Stegun 7.1.26 rational
approximation of ``erf``.  Its absolute error is at most 1.5e-7, which is fine
for display-grade estimates but not for risk-system precision.

Example
-------

>>> res = merton_default_probability(120.0, 100.0, 0.25, 1.0)
>>> round(res.distance_to_default, 4)
0.7293
>>> round(res.percent, 2)
23.29
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from ..errors import DegenerateComputation, DomainViolation

logger = logging.getLogger(__name__)

# Abramowitz & Stegun 7.1.26
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911

ERF_MAX_ABS_ERROR = 1.5e-7

MODEL_NOTES: Tuple[str, ...] = (
    "This uses Merton structural model; assumes log-normal assets.",
    "Use market-based asset values and volatility for accuracy.",
    "Compare to rating agency PDs or CDS-implied probabilities.",
    "Update PD as asset values and leverage change over time.",
)


@dataclass(frozen=True)
class DefaultProbability:
    distance_to_default: float
    probability: float
    horizon_years: float
    interpretation: str
    notes: Tuple[str, ...] = MODEL_NOTES

    @property
    def percent(self) -> float:
        return self.probability * 100.0


def erf(x: float) -> float:
    """Approximate the error function.

    Uses the five-coefficient rational expansion
    ``1 - (a1 t + a2 t^2 + ... + a5 t^5) exp(-x^2)`` with ``t = 1 / (1 + p|x|)``
    and restores the sign for negative arguments.  Absolute error is bounded by
    ``ERF_MAX_ABS_ERROR`` (1.5e-7); do not treat the result as exact.
    """
    sign = -1.0 if x < 0 else 1.0
    x = abs(x)
    t = 1.0 / (1.0 + _P * x)
    y = 1.0 - (((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1) * t * math.exp(-x * x)
    return sign * y


def normal_cdf(x: float) -> float:
    """Standard normal CDF, ``0.5 * (1 + erf(x / sqrt(2)))``."""
    return 0.5 * (1.0 + erf(x / math.sqrt(2.0)))


def merton_default_probability(
    asset_value: float,
    debt_value: float,
    asset_volatility: float,
    horizon_years: float,
) -> DefaultProbability:
    """Estimate the probability of default over ``horizon_years``.

    Parameters
    ----------
    asset_value : float
        Current market value of the firm's assets (> 0).
    debt_value : float
        Face value of debt due at the horizon (> 0), same currency.
    asset_volatility : float
        Annualised asset volatility as a fraction, e.g. ``0.25`` for 25 %.
    horizon_years : float
        Horizon in years.

    Returns
    -------
    DefaultProbability
        Distance to default and PD as a fraction (``percent`` for display).

    Raises
    ------
    DomainViolation
        Non-finite inputs, non-positive asset or debt values, negative
        volatility or horizon.
    DegenerateComputation
        Zero volatility or zero horizon, where the distance to default is
        undefined.
    """
    for name, value in (
        ("asset_value", asset_value),
        ("debt_value", debt_value),
        ("asset_volatility", asset_volatility),
        ("horizon_years", horizon_years),
    ):
        if not math.isfinite(value):
            raise DomainViolation(f"{name} must be finite, got {value!r}")
    if asset_value <= 0:
        raise DomainViolation(f"asset_value must be positive, got {asset_value}")
    if debt_value <= 0:
        raise DomainViolation(f"debt_value must be positive, got {debt_value}")
    if asset_volatility < 0 or horizon_years < 0:
        raise DomainViolation("asset_volatility and horizon_years must not be negative")
    if asset_volatility == 0 or horizon_years == 0:
        raise DegenerateComputation("invalid inputs: volatility and horizon must be non-zero")

    d = math.log(asset_value / debt_value) / (asset_volatility * math.sqrt(horizon_years))
    pd = normal_cdf(-d)
    interpretation = (
        f"Estimated PD: {pd * 100:.2f}% over {horizon_years:g} years. "
        f"Distance to default: {d:.3f}."
    )
    logger.debug("merton V=%s D=%s sigma=%s T=%s -> d=%.6f pd=%.8f",
                 asset_value, debt_value, asset_volatility, horizon_years, d, pd)
    return DefaultProbability(
        distance_to_default=d,
        probability=pd,
        horizon_years=horizon_years,
        interpretation=interpretation,
    )


__all__ = [
    "DefaultProbability",
    "ERF_MAX_ABS_ERROR",
    "erf",
    "normal_cdf",
    "merton_default_probability",
]
