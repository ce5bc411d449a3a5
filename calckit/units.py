"""Caller-side unit conversions.

Kernels never convert units on their own; each documents the unit it expects.
A caller collecting imperial or percentage input converts it here first.

Example
-------

>>> round(pounds_to_kg(150), 3)
68.039
>>> percent_to_fraction(25)
0.25
"""

from __future__ import annotations

from .errors import DomainViolation

KG_PER_POUND = 0.453592
METRES_PER_INCH = 0.0254
CM_PER_INCH = 2.54
IMPERIAL_BMI_FACTOR = 703


def percent_to_fraction(percent: float) -> float:
    return percent / 100.0


def pounds_to_kg(pounds: float) -> float:
    return pounds * KG_PER_POUND


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def cm_to_inches(cm: float) -> float:
    return cm / CM_PER_INCH


def bmi_from_metric(weight_kg: float, height_cm: float) -> float:
    """Body-mass index from kilograms and centimetres."""
    if weight_kg <= 0 or height_cm <= 0:
        raise DomainViolation("weight and height must be positive")
    return weight_kg / ((height_cm / 100.0) ** 2)


def bmi_from_imperial(weight_lb: float, height_in: float) -> float:
    """Body-mass index from pounds and inches using the 703 factor."""
    if weight_lb <= 0 or height_in <= 0:
        raise DomainViolation("weight and height must be positive")
    return weight_lb / (height_in ** 2) * IMPERIAL_BMI_FACTOR


__all__ = [
    "KG_PER_POUND",
    "METRES_PER_INCH",
    "CM_PER_INCH",
    "IMPERIAL_BMI_FACTOR",
    "percent_to_fraction",
    "pounds_to_kg",
    "inches_to_cm",
    "cm_to_inches",
    "bmi_from_metric",
    "bmi_from_imperial",
]
