"""Tests for the fat-mass index kernel."""

import pytest
from pydantic import ValidationError

from calckit.calculators import body_composition as bc
from calckit.calculators.health_risk import Sex


def test_value_on_cut_point_goes_to_higher_band():
    """A 25-year-old man with FMI exactly 4.0 is Moderate, not Normal."""
    res = bc.fat_mass_index(
        bc.FatMassInputs(age=25, sex="male", weight_kg=80, height_cm=200, body_fat_percent=20)
    )
    assert res.fmi == 4.0
    assert res.fat_mass_kg == pytest.approx(16.0)
    assert res.status == "Moderate Fat Mass"
    assert res.risk == "Moderate"


def test_just_below_cut_point():
    res = bc.fat_mass_index(
        bc.FatMassInputs(age=25, sex="male", weight_kg=80, height_cm=200, body_fat_percent=19.9)
    )
    assert res.status == "Normal Fat Mass"


@pytest.mark.parametrize(
    "sex,age,expected",
    [
        (Sex.MALE, 29, (2.0, 4.0, 6.0)),
        (Sex.MALE, 30, (2.5, 4.5, 6.5)),
        (Sex.FEMALE, 49, (3.5, 5.5, 7.5)),
        (Sex.FEMALE, 50, (4.0, 6.0, 8.0)),
    ],
)
def test_cut_points_by_sex_and_age(sex, age, expected):
    assert bc.fmi_cut_points(sex, age) == expected


def test_low_fat_mass_recommendations():
    res = bc.fat_mass_index(
        bc.FatMassInputs(age=40, sex="female", weight_kg=50, height_cm=170, body_fat_percent=10)
    )
    assert res.status == "Low Fat Mass"
    assert "Focus on balanced nutrition rather than further fat loss." in res.recommendations
    assert not any("calorie deficit" in r for r in res.recommendations)


def test_high_fat_mass():
    res = bc.fat_mass_index(
        bc.FatMassInputs(age=60, sex="female", weight_kg=95, height_cm=160, body_fat_percent=45)
    )
    assert res.fmi > 8.0
    assert res.status == "High Fat Mass"
    assert res.bmi == pytest.approx(95 / 1.6 ** 2)


def test_estimate_is_clamped():
    assert bc.estimate_body_fat_percentage("male", 18, 45, 180) == 5.0
    assert bc.estimate_body_fat_percentage("female", 80, 150, 160) == 40.0
    mid = bc.estimate_body_fat_percentage("male", 40, 80, 180)
    assert 5.0 < mid < 35.0


def test_invalid_inputs():
    with pytest.raises(ValidationError):
        bc.FatMassInputs(age=25, sex="other", weight_kg=80, height_cm=180, body_fat_percent=20)
    with pytest.raises(ValidationError):
        bc.FatMassInputs(age=25, sex="male", weight_kg=80, height_cm=180, body_fat_percent=120)
