"""Calculation kernels.

The ``calculators`` package contains small, focused modules that each
implement one family of calculations:

* ``dice`` – exact dice-sum counts and probabilities.
* ``correlation`` – Pearson correlation matrix, average linkage and CSV intake.
* ``credit_risk`` – Merton distance to default and probability of default.
* ``amortization`` – credit-card payoff horizon and balance-transfer comparison.
* ``savings`` – down-payment savings timeline.
* ``health_risk`` – weighted NAFLD, fracture, type-2 diabetes and sleep-apnoea scores.
* ``body_composition`` – fat-mass index and body-fat estimate.
* ``compatibility`` – seeded name-compatibility score.

Each module exposes a few public functions with clear parameters and returns.
See individual docstrings for units and error behaviour.
"""

from . import (  # noqa: F401
    dice,
    correlation,
    credit_risk,
    amortization,
    savings,
    health_risk,
    body_composition,
    compatibility,
)

__all__ = [
    "dice",
    "correlation",
    "credit_risk",
    "amortization",
    "savings",
    "health_risk",
    "body_composition",
    "compatibility",
]
