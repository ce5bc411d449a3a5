"""Tests for caller-side unit conversions."""

import math

import pytest

from calckit import units
from calckit.errors import DomainViolation


def test_conversions():
    assert math.isclose(units.pounds_to_kg(100), 45.3592)
    assert math.isclose(units.inches_to_cm(10), 25.4)
    assert math.isclose(units.cm_to_inches(254), 100.0)
    assert units.percent_to_fraction(20) == 0.2


def test_bmi_metric_and_imperial_agree():
    metric = units.bmi_from_metric(units.pounds_to_kg(150), units.inches_to_cm(65))
    imperial = units.bmi_from_imperial(150, 65)
    assert metric == pytest.approx(imperial, rel=1e-3)


@pytest.mark.parametrize("weight,height", [(0, 170), (70, 0), (-1, 170)])
def test_bmi_domain(weight, height):
    with pytest.raises(DomainViolation):
        units.bmi_from_metric(weight, height)
    with pytest.raises(DomainViolation):
        units.bmi_from_imperial(weight, height)
