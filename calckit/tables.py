"""Threshold-table configuration.

Every label, cut point and advisory string used by the scoring kernels lives in
``data/threshold_tables.json`` so the domain constants sit in one reviewable
place.  Kernels take an optional ``tables`` mapping with the same schema; when
omitted the packaged file is used.

Schema (per top-level key):

* ``bands`` – list of ``{"lower_bound", "label", "guidance", "extra"}`` records.
  ``lower_bound`` may be omitted for tables whose cut points depend on the
  subject (see ``fmi``), in which case ``cut_points`` supplies them.
* ``recommendations`` – mapping of band label to a list of strings, or the name
  of another key whose recommendations are shared.
"""

from __future__ import annotations

import copy
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from .errors import DomainViolation
from .thresholds import ThresholdBand, ThresholdTable

logger = logging.getLogger(__name__)

_DEFAULT_TABLE_PATH = Path(__file__).resolve().parent / "data" / "threshold_tables.json"


def _load_threshold_tables(path: Optional[Path] = None) -> Dict[str, Dict]:
    """Load threshold tables from JSON.  If ``path`` is not provided, load the
    default file shipped with the package.

    Parameters
    ----------
    path : Path, optional
        Path to a JSON file containing the tables.

    Returns
    -------
    dict
        The parsed tables.

    Raises
    ------
    DomainViolation
        A fixed-bound table whose bounds do not strictly increase.
    """
    p = path or _DEFAULT_TABLE_PATH
    with open(p, "r", encoding="utf-8") as f:
        tables = json.load(f)
    for section in tables.values():
        bands = section.get("bands", ())
        if bands and all("lower_bound" in b for b in bands):
            ThresholdTable.from_records(bands)
    logger.debug("loaded %d threshold tables from %s", len(tables), p)
    return tables


@lru_cache(maxsize=1)
def _default_tables() -> Dict[str, Dict]:
    return _load_threshold_tables()


def _section(name: str, tables: Optional[Dict[str, Dict]]) -> Dict:
    source = tables if tables is not None else _default_tables()
    try:
        return source[name]
    except KeyError:
        raise DomainViolation(f"unknown threshold table {name!r}") from None


def threshold_table(name: str, tables: Optional[Dict[str, Dict]] = None) -> ThresholdTable:
    """Return the fixed-bound table stored under ``name``."""
    return ThresholdTable.from_records(_section(name, tables)["bands"])


def table_with_cut_points(
    name: str,
    cut_points: Sequence[float],
    floor: float = 0.0,
    tables: Optional[Dict[str, Dict]] = None,
) -> ThresholdTable:
    """Build a table from stored band labels and caller-supplied cut points.

    ``cut_points`` are the lower bounds of the second and later bands; the
    first band starts at ``floor``.
    """
    records = _section(name, tables)["bands"]
    if len(cut_points) != len(records) - 1:
        raise DomainViolation(
            f"table {name!r} has {len(records)} bands but {len(cut_points)} cut points were given"
        )
    bounds = [floor, *cut_points]
    bands = tuple(
        ThresholdBand(
            lower_bound=float(bound),
            label=str(rec["label"]),
            guidance=str(rec.get("guidance", "")),
            extra={str(k): str(v) for k, v in (rec.get("extra") or {}).items()},
        )
        for bound, rec in zip(bounds, records)
    )
    return ThresholdTable(bands)


def cut_point_config(name: str, tables: Optional[Dict[str, Dict]] = None) -> Dict:
    """Subject-dependent cut points stored under ``name``, returned as a fresh copy."""
    return copy.deepcopy(_section(name, tables)["cut_points"])


def recommendations(name: str, label: str, tables: Optional[Dict[str, Dict]] = None) -> Tuple[str, ...]:
    """Return the advisory list for ``label`` in table ``name`` (empty if none)."""
    recs = _section(name, tables).get("recommendations", {})
    if isinstance(recs, str):
        recs = _section(recs, tables).get("recommendations", {})
    return tuple(recs.get(label, ()))


__all__ = [
    "threshold_table",
    "table_with_cut_points",
    "cut_point_config",
    "recommendations",
]
