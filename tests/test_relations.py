import pandas as pd
import pytest

from data_profiling import (
    ColumnType,
    Correlation,
    CrossTab,
    Dataset,
    GroupedMeans,
    GroupStat,
    MalformedInputError,
    RelationAnalyzer,
    analyze_relation,
    correlation,
)

NUM = ColumnType.NUMERIC
CAT = ColumnType.CATEGORICAL


def _dataset(**columns) -> Dataset:
    return Dataset.from_dataframe(pd.DataFrame(columns))


def test_exact_linear_correlation():
    ds = _dataset(x=[1, 2, 3, 4], y=[2, 4, 6, 8])
    result = analyze_relation(ds, "x", "y", NUM, NUM)
    assert isinstance(result, Correlation)
    assert result.coefficient == pytest.approx(1.0)
    assert result.n == 4


def test_correlation_symmetric_and_bounded():
    ds = _dataset(
        x=[3.1, 0.2, 7.7, 4.4, 9.0, 1.5, 6.3],
        y=[10, 2, -4, 8, 1, 5, 3],
    )
    r_xy = correlation(ds, "x", "y")
    r_yx = correlation(ds, "y", "x")
    assert r_xy == r_yx
    assert -1.0 <= r_xy <= 1.0


def test_negative_correlation():
    ds = _dataset(x=[1, 2, 3], y=[30, 20, 10])
    assert correlation(ds, "x", "y") == pytest.approx(-1.0)


def test_zero_variance_correlation_is_zero():
    ds = _dataset(x=[0.1, 0.1, 0.1, 0.1], y=[1, 2, 3, 4])
    assert correlation(ds, "x", "y") == 0.0
    assert correlation(ds, "y", "x") == 0.0


def test_no_valid_rows_correlation_is_zero():
    ds = _dataset(x=[1, None, ""], y=[None, 2, 3])
    result = analyze_relation(ds, "x", "y", NUM, NUM)
    assert result == Correlation(coefficient=0.0, n=0)


def test_only_rows_with_both_values_participate():
    ds = _dataset(x=[1, 2, 3, None, 100], y=[2, 4, 6, 50, None])
    result = analyze_relation(ds, "x", "y", NUM, NUM)
    assert result.n == 3
    assert result.coefficient == pytest.approx(1.0)
    assert result.points == [(1.0, 2.0), (2.0, 4.0), (3.0, 6.0)]


def test_grouped_means_either_order():
    ds = _dataset(
        num=[10, 30, 20, None, "x"],
        cat=["a", "a", "b", "b", "c"],
    )
    expected = {"a": GroupStat(mean=20.0, count=2), "b": GroupStat(mean=20.0, count=1)}

    forward = analyze_relation(ds, "num", "cat", NUM, CAT)
    backward = analyze_relation(ds, "cat", "num", CAT, NUM)
    for result in (forward, backward):
        assert isinstance(result, GroupedMeans)
        assert result.numeric_column == "num"
        assert result.group_column == "cat"
        # 'c' only has an unparseable value and is omitted
        assert result.groups == expected
        assert list(result.groups) == ["a", "b"]


def test_grouped_means_with_text_column():
    ds = _dataset(score=[1, 2, 3, 4], name=["p", "q", "p", "r"])
    result = analyze_relation(ds, "score", "name", NUM, ColumnType.TEXT)
    assert result.groups["p"] == GroupStat(mean=2.0, count=2)


def test_crosstab_counts():
    ds = _dataset(
        x=["a", "a", "b", "b", "b", None],
        y=["u", "v", "u", "u", "v", "u"],
    )
    result = analyze_relation(ds, "x", "y", CAT, CAT)
    assert isinstance(result, CrossTab)
    assert result.row_categories == ["a", "b"]
    assert result.col_categories == ["u", "v"]
    assert result.counts == {"a": {"u": 1, "v": 1}, "b": {"u": 2, "v": 1}}


def test_crosstab_bounded_to_first_categories():
    xs = [f"x{i}" for i in range(12)]
    ys = [f"y{11 - i}" for i in range(12)]
    ds = _dataset(x=xs + ["x0"], y=ys + ["y11"])
    result = analyze_relation(ds, "x", "y", CAT, CAT)
    assert result.row_categories == [f"x{i}" for i in range(10)]
    assert result.col_categories == [f"y{11 - i}" for i in range(10)]
    assert result.counts["x0"]["y11"] == 2
    assert sum(result.counts["x5"].values()) == 1
    assert set(result.counts) == set(result.row_categories)


def test_crosstab_limit_is_configurable():
    ds = _dataset(x=["a", "b", "c"], y=["u", "v", "w"])
    result = RelationAnalyzer({"crosstab_max_categories": 2}).analyze(ds, "x", "y", CAT, CAT)
    assert result.row_categories == ["a", "b"]
    assert result.col_categories == ["u", "v"]


def test_empty_crosstab_is_structurally_valid():
    ds = _dataset(x=[None, "a"], y=["u", None])
    result = analyze_relation(ds, "x", "y", CAT, CAT)
    assert result.row_categories == []
    assert result.counts == {}
    assert result.to_dict()["kind"] == "crosstab"


def test_unknown_column_raises():
    ds = _dataset(x=[1, 2])
    with pytest.raises(MalformedInputError):
        analyze_relation(ds, "x", "nope", NUM, NUM)
