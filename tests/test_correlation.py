"""Tests for the correlation-matrix kernel."""

import numpy as np
import pandas as pd
import pytest

from calckit.calculators import correlation as corr
from calckit.errors import DomainViolation


def _random_table(seed, rows=25, cols=4):
    rng = np.random.default_rng(seed)
    return rng.normal(size=(rows, cols))


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_matrix_properties(seed):
    m = corr.correlation_matrix(_random_table(seed))
    n = len(m)
    for i in range(n):
        assert m[i][i] == 1.0
        for j in range(n):
            assert m[i][j] == m[j][i]
            assert -1.0 <= m[i][j] <= 1.0


def test_identical_and_negated_columns():
    a = [1.0, 4.0, 2.0, 8.0, 5.0]
    rows = [[x, x, -x] for x in a]
    m = corr.correlation_matrix(rows)
    assert m[0][1] == pytest.approx(1.0)
    assert m[0][2] == pytest.approx(-1.0)
    assert m[1][2] == pytest.approx(-1.0)


def test_matches_numpy_corrcoef():
    table = _random_table(7, rows=40, cols=3)
    m = np.array(corr.correlation_matrix(table))
    assert np.allclose(m, np.corrcoef(table, rowvar=False))


def test_constant_column_gives_zero():
    rows = [[1.0, 5.0], [2.0, 5.0], [3.0, 5.0]]
    m = corr.correlation_matrix(rows)
    assert m[0][1] == 0.0
    assert m[1][1] == 1.0


def test_dataframe_input_and_labels():
    df = pd.DataFrame({"SPY": [1, 2, 3, 4], "QQQ": [2, 4, 6, 9], "TLT": [4, 3, 2, 2]})
    res = corr.analyze_correlations(df)
    assert res.labels == ("SPY", "QQQ", "TLT")
    assert len(res.average_linkage) == 3
    assert res.most_linked in res.labels
    assert "strongest average linkage" in res.interpretation


def test_average_linkage_and_ties():
    matrix = [
        [1.0, 0.5, -0.5],
        [0.5, 1.0, 0.1],
        [-0.5, 0.1, 1.0],
    ]
    link = corr.average_linkage(matrix)
    assert link == pytest.approx((0.5, 0.3, 0.3))

    # columns 0 and 1 identical, column 2 independent-ish: ties go to the first label
    rows = [[1, 1, 3], [2, 2, 1], [3, 3, 2], [4, 4, 5]]
    res = corr.analyze_correlations(rows, labels=["A", "B", "C"])
    assert res.average_linkage[0] == pytest.approx(res.average_linkage[1])
    assert res.most_linked == "A"
    assert res.least_linked == "C"


def test_default_labels():
    res = corr.analyze_correlations([[1, 2], [2, 1], [3, 5]])
    assert res.labels == ("Variable 1", "Variable 2")


@pytest.mark.parametrize(
    "rows",
    [
        [[1, 2]],                   # one observation
        [[1], [2], [3]],            # one variable
        [[1, 2], [3]],              # ragged
        [[1, 2], [3, float("nan")]],
        [[1, "x"], [2, 3]],
    ],
)
def test_invalid_tables(rows):
    with pytest.raises(DomainViolation):
        corr.correlation_matrix(rows)


def test_label_count_mismatch():
    with pytest.raises(DomainViolation):
        corr.analyze_correlations([[1, 2], [2, 3], [3, 1]], labels=["only one"])


def test_parse_csv_table():
    text = "Stocks, Bonds, Gold\n0.01, 0.002, -0.004\n0.03, -0.001, 0.002\n-0.02, 0.004, 0.01\n"
    labels, rows = corr.parse_csv_table(text)
    assert labels == ["Stocks", "Bonds", "Gold"]
    assert rows[0] == pytest.approx([0.01, 0.002, -0.004])
    assert len(rows) == 3


@pytest.mark.parametrize(
    "text",
    [
        "",
        "OnlyOne\n1\n2\n",
        "A,B\n",
        "A,B\n1,2\n3\n",
        "A,B\n1,abc\n",
        "A,B\n1,2,3\n4,5,6\n",
    ],
)
def test_parse_csv_rejects_bad_input(text):
    with pytest.raises(DomainViolation):
        corr.parse_csv_table(text)
