"""Ordered threshold tables.

A threshold table maps a scalar onto exactly one labelled band.  Bands are
listed by increasing lower bound; the first band also catches everything below
its bound and the last band is open-ended upwards, so every real number has a
home.  A value equal to a cut point belongs to the higher band.

Example
-------

>>> table = ThresholdTable.from_records([
...     {"lower_bound": 0, "label": "Low"},
...     {"lower_bound": 4, "label": "Moderate"},
...     {"lower_bound": 7, "label": "High"},
... ])
>>> table.classify(3).label
'Low'
>>> table.classify(4).label
'Moderate'
>>> table.classify(-2).label
'Low'
"""

from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from .errors import DomainViolation


@dataclass(frozen=True)
class ThresholdBand:
    """One row of a threshold table."""

    lower_bound: float
    label: str
    guidance: str = ""
    extra: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True)
class ThresholdTable:
    """Monotonic, exhaustive list of bands."""

    bands: Tuple[ThresholdBand, ...]

    def __post_init__(self) -> None:
        if not self.bands:
            raise DomainViolation("threshold table needs at least one band")
        bounds = [b.lower_bound for b in self.bands]
        if any(math.isnan(b) for b in bounds):
            raise DomainViolation("threshold bounds must not be NaN")
        for lo, hi in zip(bounds, bounds[1:]):
            if not lo < hi:
                raise DomainViolation(f"threshold bounds must strictly increase, got {lo} then {hi}")

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> "ThresholdTable":
        """Build a table from dictionaries as stored in ``threshold_tables.json``."""
        bands = []
        for rec in records:
            bands.append(
                ThresholdBand(
                    lower_bound=float(rec["lower_bound"]),
                    label=str(rec["label"]),
                    guidance=str(rec.get("guidance", "")),
                    extra={str(k): str(v) for k, v in (rec.get("extra") or {}).items()},
                )
            )
        return cls(tuple(bands))

    @property
    def cut_points(self) -> Tuple[float, ...]:
        """Lower bounds of every band after the first."""
        return tuple(b.lower_bound for b in self.bands[1:])

    def classify(self, value: float) -> ThresholdBand:
        """Return the band with the greatest ``lower_bound <= value``."""
        if value is None or math.isnan(value):
            raise DomainViolation(f"cannot classify {value!r}")
        idx = bisect_right(self.cut_points, value)
        return self.bands[idx]

    def labels(self) -> Tuple[str, ...]:
        return tuple(b.label for b in self.bands)


__all__ = ["ThresholdBand", "ThresholdTable"]
