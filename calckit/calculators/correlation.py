"""Pearson correlation matrix for a table of observations.

Rows are observations and columns are variables.  The matrix is built from
Bessel-corrected (``n - 1``) covariances and standard deviations; the divisor
is floored at 1 so a degenerate table never divides by zero.  Off-diagonal
values are clamped to ``[-1, 1]`` to absorb floating-point overshoot, a pair
involving a constant column is reported as 0, and the diagonal is set to
exactly 1.

The heatmap view also ranks variables by *average linkage*, the mean absolute
correlation with every other variable; ``analyze_correlations`` reports the
most and least linked variable (ties go to the earlier column).

Example
-------

>>> m = correlation_matrix([[1, 2], [2, 4], [3, 6]])
>>> m[0][0], round(m[0][1], 12)
(1.0, 1.0)
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..errors import DomainViolation

logger = logging.getLogger(__name__)

Matrix = Tuple[Tuple[float, ...], ...]
TableLike = Union[Sequence[Sequence[float]], np.ndarray, pd.DataFrame]


@dataclass(frozen=True)
class CorrelationResult:
    labels: Tuple[str, ...]
    matrix: Matrix
    average_linkage: Tuple[float, ...]
    most_linked: str
    least_linked: str
    interpretation: str


def _as_array(rows: TableLike) -> np.ndarray:
    if isinstance(rows, pd.DataFrame):
        arr = rows.to_numpy(dtype=float)
    elif isinstance(rows, np.ndarray):
        arr = rows.astype(float)
    else:
        rows = [list(r) for r in rows]
        widths = {len(r) for r in rows}
        if len(widths) > 1:
            raise DomainViolation(f"all rows must have the same length, got lengths {sorted(widths)}")
        try:
            arr = np.asarray(rows, dtype=float)
        except (TypeError, ValueError) as exc:
            raise DomainViolation(f"table contains non-numeric values: {exc}") from exc

    if arr.ndim != 2:
        raise DomainViolation(f"expected a 2-D table, got {arr.ndim} dimension(s)")
    n_obs, n_vars = arr.shape
    if n_obs < 2 or n_vars < 2:
        raise DomainViolation(f"need at least 2 rows and 2 columns, got {n_obs}x{n_vars}")
    if not np.all(np.isfinite(arr)):
        raise DomainViolation("table contains NaN or infinite values")
    return arr


def correlation_matrix(rows: TableLike) -> Matrix:
    """Return the symmetric Pearson correlation matrix (columns x columns).

    Parameters
    ----------
    rows : sequence of sequences, ndarray or DataFrame
        Rectangular table, one observation per row.

    Returns
    -------
    tuple of tuples
        ``matrix[i][j]`` is the correlation between columns ``i`` and ``j``.
    """
    arr = _as_array(rows)
    n_obs, n_vars = arr.shape
    divisor = max(1, n_obs - 1)

    centered = arr - arr.mean(axis=0)
    stds = np.sqrt((centered ** 2).sum(axis=0) / divisor)

    corr = np.zeros((n_vars, n_vars))
    for a in range(n_vars):
        for b in range(a + 1, n_vars):
            denom = stds[a] * stds[b]
            if denom > 0:
                cov = float(np.dot(centered[:, a], centered[:, b])) / divisor
                value = min(1.0, max(-1.0, cov / denom))
            else:
                value = 0.0
            corr[a, b] = value
            corr[b, a] = value
    np.fill_diagonal(corr, 1.0)
    return tuple(tuple(float(v) for v in row) for row in corr)


def average_linkage(matrix: Sequence[Sequence[float]]) -> Tuple[float, ...]:
    """Mean absolute off-diagonal correlation of each variable."""
    n = len(matrix)
    out = []
    for i in range(n):
        others = [abs(matrix[i][j]) for j in range(n) if j != i]
        out.append(sum(others) / len(others) if others else 0.0)
    return tuple(out)


def analyze_correlations(rows: TableLike, labels: Optional[Sequence[str]] = None) -> CorrelationResult:
    """Correlation matrix plus average-linkage ranking of the variables."""
    if labels is None and isinstance(rows, pd.DataFrame):
        labels = [str(c) for c in rows.columns]
    matrix = correlation_matrix(rows)
    n = len(matrix)
    if labels is None:
        labels = [f"Variable {i + 1}" for i in range(n)]
    if len(labels) != n:
        raise DomainViolation(f"{len(labels)} labels given for {n} columns")

    linkage = average_linkage(matrix)
    # max/min return the first index on ties
    max_idx = max(range(n), key=lambda i: linkage[i])
    min_idx = min(range(n), key=lambda i: linkage[i])
    interpretation = (
        f"Highest clustering: {labels[max_idx]} shows strongest average linkage; "
        f"potential diversifier: {labels[min_idx]} shows the weakest average correlation."
    )
    logger.debug("correlation of %d variables, most linked %s", n, labels[max_idx])
    return CorrelationResult(
        labels=tuple(labels),
        matrix=matrix,
        average_linkage=linkage,
        most_linked=labels[max_idx],
        least_linked=labels[min_idx],
        interpretation=interpretation,
    )


def parse_csv_table(text: str) -> Tuple[List[str], List[List[float]]]:
    """Parse CSV text with a header row into ``(labels, rows)``.

    Every data cell must be numeric and every row must have one value per
    header, neither fewer nor more.  At least two columns are required.
    """
    if not text or not text.strip():
        raise DomainViolation("CSV text is empty")
    try:
        # header=None keeps the header width authoritative: a longer row is a
        # ParserError instead of being folded into an index column
        frame = pd.read_csv(io.StringIO(text.strip()), header=None, dtype=str, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DomainViolation(f"could not parse CSV: {exc}") from exc

    labels = [str(c).strip() for c in frame.iloc[0]]
    if len(labels) < 2:
        raise DomainViolation("CSV needs at least two columns")
    data = frame.iloc[1:]
    if data.empty:
        raise DomainViolation("CSV has a header but no data rows")
    numeric = data.apply(pd.to_numeric, errors="coerce")
    if numeric.isna().to_numpy().any():
        raise DomainViolation("CSV contains missing or non-numeric cells")
    return labels, numeric.astype(float).values.tolist()


__all__ = [
    "CorrelationResult",
    "correlation_matrix",
    "average_linkage",
    "analyze_correlations",
    "parse_csv_table",
]
