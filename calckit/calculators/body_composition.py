"""Fat-mass index.

FMI is fat mass divided by height squared (kg/m²).  Unlike the integer risk
scores it is real-valued, and its cut points depend on sex and age bracket
(under 30, under 50, 50 and over).  A value equal to a cut point falls into
the higher band, e.g. a 25-year-old man with FMI exactly 4.0 is "Moderate".

When no measured body-fat percentage is available the widget estimated one
from BMI and age (``estimate_body_fat_percentage``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

from .. import tables as table_config
from ..units import bmi_from_metric
from .health_risk import Sex

logger = logging.getLogger(__name__)


class FatMassInputs(BaseModel):
    age: float = Field(..., ge=18, le=120)
    sex: Sex
    weight_kg: float = Field(..., gt=0)
    height_cm: float = Field(..., gt=0)
    body_fat_percent: float = Field(..., ge=0, le=100)

    model_config = {"frozen": True, "extra": "forbid"}


@dataclass(frozen=True)
class FatMassIndex:
    fmi: float
    fat_mass_kg: float
    bmi: float
    status: str
    risk: str
    interpretation: str
    recommendations: Tuple[str, ...]


def _age_bracket(age: float) -> str:
    if age < 30:
        return "under_30"
    if age < 50:
        return "under_50"
    return "50_plus"


def fmi_cut_points(sex: Sex, age: float, tables: Optional[Dict[str, Dict]] = None) -> Tuple[float, float, float]:
    """``(low, moderate, high)`` cut points for the subject."""
    config = table_config.cut_point_config("fmi", tables)
    low, moderate, high = config[Sex(sex).value][_age_bracket(age)]
    return float(low), float(moderate), float(high)


def estimate_body_fat_percentage(sex: Sex, age: float, weight_kg: float, height_cm: float) -> float:
    """Body-fat estimate from BMI and age.

    Men: ``1.20 * BMI + 0.23 * age - 16.2`` clamped to 5–35 %.
    Women: ``1.20 * BMI + 0.23 * age - 5.4`` clamped to 8–40 %.
    """
    bmi = bmi_from_metric(weight_kg, height_cm)
    if Sex(sex) is Sex.MALE:
        return max(5.0, min(35.0, 1.20 * bmi + 0.23 * age - 16.2))
    return max(8.0, min(40.0, 1.20 * bmi + 0.23 * age - 5.4))


def fat_mass_index(inputs: FatMassInputs, tables: Optional[Dict[str, Dict]] = None) -> FatMassIndex:
    """Compute FMI and classify it against the sex- and age-specific bands."""
    height_m = inputs.height_cm / 100.0
    fat_mass = (inputs.body_fat_percent / 100.0) * inputs.weight_kg
    fmi = fat_mass / (height_m * height_m)
    bmi = inputs.weight_kg / (height_m * height_m)

    table = table_config.table_with_cut_points("fmi", fmi_cut_points(inputs.sex, inputs.age, tables), tables=tables)
    band = table.classify(fmi)
    logger.debug("fmi=%.3f sex=%s age=%s band=%s", fmi, inputs.sex.value, inputs.age, band.label)
    return FatMassIndex(
        fmi=fmi,
        fat_mass_kg=fat_mass,
        bmi=bmi,
        status=band.label,
        risk=band.extra.get("risk", ""),
        interpretation=band.guidance,
        recommendations=table_config.recommendations("fmi", band.label, tables),
    )


__all__ = [
    "FatMassInputs",
    "FatMassIndex",
    "fmi_cut_points",
    "estimate_body_fat_percentage",
    "fat_mass_index",
]
