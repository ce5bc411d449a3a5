"""Weighted risk scores.

Each calculator adds integer points for demographic, clinical and lifestyle
factors and maps the total through an ordered threshold table.  The weights,
brackets and cut points below reproduce the calculator widgets exactly.  They
resemble, but are not, the published clinical instruments (real FRAX, for
instance, is a country-calibrated survival model); treat every score as
educational.

Shared rules:

* Scores are clamped at zero (protective factors can subtract points).
* Optional inputs that are missing contribute nothing.
* Categorical inputs are enums; an unknown category is rejected when the
  factor model is built.
* Band labels, advisory text and recommendations come from
  ``data/threshold_tables.json``.

Example
-------

>>> f = NafldFactors(age=50, sex="male", bmi=31, diabetes=True)
>>> res = nafld_risk(f)
>>> res.score, res.label
(9, 'High Risk')
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

from .. import tables as table_config
from ..units import bmi_from_metric

logger = logging.getLogger(__name__)


# =============================================================================
# Enums
# =============================================================================


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class LengthUnit(str, Enum):
    CM = "cm"
    INCH = "in"


class NafldAlcohol(str, Enum):
    NONE = "none"
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VIGOROUS = "vigorous"


class FraxAlcohol(str, Enum):
    NONE = "none"
    MODERATE = "moderate"
    HIGH = "high"


class ExerciseLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class BloodPressure(str, Enum):
    NORMAL = "normal"
    ELEVATED = "elevated"
    HIGH = "high"


class Frequency(str, Enum):
    NEVER = "never"
    OCCASIONAL = "occasional"
    FREQUENT = "frequent"


# =============================================================================
# Result
# =============================================================================


@dataclass(frozen=True)
class RiskScore:
    """Score, its band and the band's advisory text."""

    score: int
    label: str
    guidance: str
    extra: Mapping[str, str] = field(default_factory=dict, hash=False)
    recommendations: Tuple[str, ...] = ()
    details: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))


def _bracket(value: float, brackets: Tuple[Tuple[float, int], ...]) -> int:
    """Points for the first ``(minimum, points)`` bracket with ``value >= minimum``."""
    for minimum, points in brackets:
        if value >= minimum:
            return points
    return 0


def _result(
    table_name: str,
    score: int,
    tables: Optional[Dict[str, Dict]],
    recommendations: Optional[Tuple[str, ...]] = None,
    details: Optional[Dict[str, float]] = None,
) -> RiskScore:
    score = max(0, score)
    band = table_config.threshold_table(table_name, tables).classify(score)
    if recommendations is None:
        recommendations = table_config.recommendations(table_name, band.label, tables)
    logger.debug("%s score=%d band=%s", table_name, score, band.label)
    return RiskScore(
        score=score,
        label=band.label,
        guidance=band.guidance,
        extra=dict(band.extra),
        recommendations=tuple(recommendations),
        details=dict(details or {}),
    )


# =============================================================================
# NAFLD (fatty liver)
# =============================================================================

_NAFLD_AGE = ((60, 3), (45, 2), (30, 1))
_NAFLD_BMI = ((35, 4), (30, 3), (25, 2))
_NAFLD_WAIST = {
    (Sex.MALE, LengthUnit.CM): 102.0,
    (Sex.MALE, LengthUnit.INCH): 40.0,
    (Sex.FEMALE, LengthUnit.CM): 88.0,
    (Sex.FEMALE, LengthUnit.INCH): 35.0,
}
_NAFLD_ALCOHOL = {
    NafldAlcohol.NONE: 0,
    NafldAlcohol.LIGHT: 0,
    NafldAlcohol.MODERATE: 1,
    NafldAlcohol.HEAVY: 2,
}
_NAFLD_ACTIVITY = {
    ActivityLevel.SEDENTARY: 2,
    ActivityLevel.LIGHT: 1,
    ActivityLevel.MODERATE: 0,
    ActivityLevel.VIGOROUS: 0,
}


class NafldFactors(BaseModel):
    """Inputs to the fatty-liver (NAFLD) risk score."""

    age: float = Field(..., ge=18, le=120, description="Age in years")
    sex: Sex
    bmi: Optional[float] = Field(None, gt=0, description="Body-mass index, kg/m²")
    waist_circumference: Optional[float] = Field(None, gt=0)
    waist_unit: LengthUnit = LengthUnit.CM
    diabetes: bool = False
    hypertension: bool = False
    metabolic_syndrome: bool = False
    alcohol_intake: Optional[NafldAlcohol] = None
    physical_activity: Optional[ActivityLevel] = None
    family_history: bool = False
    statins: bool = False
    metformin: bool = False
    insulin: bool = False

    model_config = {"frozen": True, "extra": "forbid"}


def nafld_score(f: NafldFactors) -> int:
    score = _bracket(f.age, _NAFLD_AGE)
    if f.sex is Sex.MALE:
        score += 1
    if f.bmi is not None:
        score += _bracket(f.bmi, _NAFLD_BMI)
    if f.waist_circumference is not None:
        if f.waist_circumference >= _NAFLD_WAIST[(f.sex, f.waist_unit)]:
            score += 2

    score += 3 * f.diabetes + 2 * f.hypertension + 3 * f.metabolic_syndrome
    if f.alcohol_intake is not None:
        score += _NAFLD_ALCOHOL[f.alcohol_intake]
    if f.physical_activity is not None:
        score += _NAFLD_ACTIVITY[f.physical_activity]
    score += 1 * f.family_history

    # protective; insulin carries no weight
    score -= 1 * f.statins + 1 * f.metformin
    return max(0, int(score))


def nafld_risk(factors: NafldFactors, tables: Optional[Dict[str, Dict]] = None) -> RiskScore:
    """NAFLD score (0+) banded Low / Moderate / High / Very High at 4, 7, 10."""
    return _result("nafld", nafld_score(factors), tables)


# =============================================================================
# Fracture risk (FRAX-like)
# =============================================================================

_FRAX_AGE = ((80, 8), (70, 6), (60, 4), (50, 2))
_FRAX_ALCOHOL = {FraxAlcohol.NONE: 0, FraxAlcohol.MODERATE: 1, FraxAlcohol.HIGH: 2}
# (inclusive upper T-score, points), most severe first
_FRAX_BMD = ((-2.5, 4), (-2.0, 3), (-1.5, 2), (-1.0, 1))


class FraxFactors(BaseModel):
    """Inputs to the fracture-risk score.  Weight in kg, height in cm."""

    age: float = Field(..., ge=40, le=90)
    sex: Sex
    weight_kg: float = Field(..., gt=0)
    height_cm: float = Field(..., gt=0)
    previous_fracture: bool = False
    parent_hip_fracture: bool = False
    current_smoking: bool = False
    glucocorticoids: bool = False
    rheumatoid_arthritis: bool = False
    secondary_osteoporosis: bool = False
    alcohol_intake: Optional[FraxAlcohol] = None
    bone_mineral_density: Optional[float] = Field(None, description="BMD T-score")

    model_config = {"frozen": True, "extra": "forbid"}


def _frax_bmi_points(bmi: float) -> int:
    if bmi < 19:
        return 3
    if bmi < 22:
        return 2
    if bmi < 25:
        return 1
    return 0


def fracture_score(f: FraxFactors) -> Tuple[int, float]:
    """Return ``(score, bmi)``."""
    bmi = bmi_from_metric(f.weight_kg, f.height_cm)
    score = _bracket(f.age, _FRAX_AGE)
    if f.sex is Sex.FEMALE:
        score += 2
    score += _frax_bmi_points(bmi)
    score += (
        4 * f.previous_fracture
        + 2 * f.parent_hip_fracture
        + 1 * f.current_smoking
        + 2 * f.glucocorticoids
        + 1 * f.rheumatoid_arthritis
        + 2 * f.secondary_osteoporosis
    )
    if f.alcohol_intake is not None:
        score += _FRAX_ALCOHOL[f.alcohol_intake]
    if f.bone_mineral_density is not None:
        for upper, points in _FRAX_BMD:
            if f.bone_mineral_density <= upper:
                score += points
                break
    return max(0, int(score)), bmi


def fracture_risk(factors: FraxFactors, tables: Optional[Dict[str, Dict]] = None) -> RiskScore:
    """Fracture score with sex-specific bands.

    Women: Moderate from 4, High from 7, Very High from 11.
    Men: Moderate from 3, High from 5, Very High from 9.
    """
    score, bmi = fracture_score(factors)
    name = "frax_female" if factors.sex is Sex.FEMALE else "frax_male"
    return _result(name, score, tables, details={"bmi": bmi})


# =============================================================================
# Type 2 diabetes
# =============================================================================

_DIABETES_AGE = ((65, 3), (55, 2), (45, 1))
_DIABETES_BMI = ((35, 3), (30, 2), (25, 1))
_DIABETES_ACTIVITY = {ExerciseLevel.LOW: 2, ExerciseLevel.MODERATE: 1, ExerciseLevel.HIGH: 0}
_DIABETES_BP = {BloodPressure.NORMAL: 0, BloodPressure.ELEVATED: 1, BloodPressure.HIGH: 2}
_DIABETES_WAIST_IN = {Sex.MALE: 40.0, Sex.FEMALE: 35.0}


class DiabetesFactors(BaseModel):
    """Inputs to the type-2 diabetes score.  Waist circumference in inches."""

    age: float = Field(..., gt=0)
    bmi: float = Field(..., gt=0)
    sex: Sex
    waist_circumference_in: float = Field(..., gt=0)
    family_history: bool = False
    physical_activity: Optional[ExerciseLevel] = None
    blood_pressure: Optional[BloodPressure] = None

    model_config = {"frozen": True, "extra": "forbid"}


def diabetes_score(f: DiabetesFactors) -> int:
    score = _bracket(f.age, _DIABETES_AGE) + _bracket(f.bmi, _DIABETES_BMI)
    score += 1 * f.family_history
    if f.physical_activity is not None:
        score += _DIABETES_ACTIVITY[f.physical_activity]
    if f.blood_pressure is not None:
        score += _DIABETES_BP[f.blood_pressure]
    if f.waist_circumference_in > _DIABETES_WAIST_IN[f.sex]:
        score += 1
    return max(0, int(score))


def _diabetes_recommendations(f: DiabetesFactors) -> Tuple[str, ...]:
    recs: List[str] = []
    if f.bmi >= 25:
        recs.append("Lose 5-10% of body weight to reduce diabetes risk")
    if f.physical_activity is ExerciseLevel.LOW:
        recs.append("Increase physical activity to at least 150 minutes weekly")
    if f.blood_pressure not in (None, BloodPressure.NORMAL):
        recs.append("Manage blood pressure through diet and exercise")
    if f.waist_circumference_in > _DIABETES_WAIST_IN[f.sex]:
        recs.append("Reduce waist circumference through targeted exercise")
    if not recs:
        recs.append("Maintain current healthy lifestyle")
        recs.append("Continue regular health screenings")
    return tuple(recs)


def diabetes_risk(factors: DiabetesFactors, tables: Optional[Dict[str, Dict]] = None) -> RiskScore:
    """Type-2 diabetes score banded at 3, 5, 7 and 9; recommendations follow the factors present."""
    return _result("diabetes", diabetes_score(factors), tables,
                   recommendations=_diabetes_recommendations(factors))


# =============================================================================
# Sleep apnoea
# =============================================================================

_APNEA_AGE = ((50, 2), (40, 1))
_APNEA_BMI = ((30, 3), (25, 1))
_APNEA_NECK_CM = ((43, 2), (40, 1))
_APNEA_FREQUENCY = {Frequency.NEVER: 0, Frequency.OCCASIONAL: 1, Frequency.FREQUENT: 2}


class SleepApneaFactors(BaseModel):
    """Inputs to the sleep-apnoea score.  Weight in kg, lengths in cm."""

    age: float = Field(..., ge=18, le=120)
    weight_kg: float = Field(..., gt=0)
    height_cm: float = Field(..., gt=0)
    neck_circumference_cm: float = Field(..., gt=0)
    sex: Optional[Sex] = None
    snoring: Optional[Frequency] = None
    daytime_sleepiness: Optional[Frequency] = None

    model_config = {"frozen": True, "extra": "forbid"}


def sleep_apnea_score(f: SleepApneaFactors) -> Tuple[int, float]:
    bmi = bmi_from_metric(f.weight_kg, f.height_cm)
    score = _bracket(f.age, _APNEA_AGE) + _bracket(bmi, _APNEA_BMI)
    if f.sex is Sex.MALE:
        score += 1
    score += _bracket(f.neck_circumference_cm, _APNEA_NECK_CM)
    for answer in (f.snoring, f.daytime_sleepiness):
        if answer is not None:
            score += _APNEA_FREQUENCY[answer]
    return max(0, int(score)), bmi


def sleep_apnea_risk(factors: SleepApneaFactors, tables: Optional[Dict[str, Dict]] = None) -> RiskScore:
    """Sleep-apnoea score banded Moderate / High / Very High at 3, 6, 9."""
    score, bmi = sleep_apnea_score(factors)
    return _result("sleep_apnea", score, tables, details={"bmi": bmi})


__all__ = [
    "Sex",
    "LengthUnit",
    "NafldAlcohol",
    "ActivityLevel",
    "FraxAlcohol",
    "ExerciseLevel",
    "BloodPressure",
    "Frequency",
    "RiskScore",
    "NafldFactors",
    "FraxFactors",
    "DiabetesFactors",
    "SleepApneaFactors",
    "nafld_score",
    "nafld_risk",
    "fracture_score",
    "fracture_risk",
    "diabetes_score",
    "diabetes_risk",
    "sleep_apnea_score",
    "sleep_apnea_risk",
]
