"""Pairwise relationship analysis between two columns.

Only rows where both columns are non-missing take part. The pair of column
types picks the measure:

- numeric x numeric  -> Pearson correlation
- numeric x other    -> mean of the numeric column per category (either order)
- other x other      -> cross-tabulation bounded to the first N categories

Degenerate input never raises: no rows or no variance gives a correlation of
0.0, and grouped means / cross-tabs come back empty.
"""

import logging
import math
from typing import Dict, Any, List, Optional

import numpy as np
import pandas as pd

from .cleaning_utils import cell_label, parse_numeric_series
from .config import resolve_config
from .dataset import Dataset
from .models import (
    ColumnType,
    Correlation,
    CrossTab,
    GroupedMeans,
    GroupStat,
    RelationResult,
)

logger = logging.getLogger(__name__)


def pearson(x: np.ndarray, y: np.ndarray) -> float:
    """Sum-based Pearson coefficient; 0.0 for empty or constant input."""

    n = int(x.size)
    if n == 0 or n != y.size:
        return 0.0
    if x.min() == x.max() or y.min() == y.max():
        return 0.0

    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_x2 = float((x * x).sum())
    sum_y2 = float((y * y).sum())

    numerator = n * sum_xy - sum_x * sum_y
    spread = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if not spread > 0 or not math.isfinite(spread):
        return 0.0
    r = numerator / math.sqrt(spread)
    return max(-1.0, min(1.0, r))


def _first_seen(labels: pd.Series, limit: int) -> List[str]:
    return list(dict.fromkeys(labels))[:limit]


class RelationAnalyzer:
    """Dispatches a column pair to correlation, grouped means or cross-tabulation."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = resolve_config(config)

    def analyze(
        self,
        dataset: Dataset,
        col_x: str,
        col_y: str,
        type_x: ColumnType,
        type_y: ColumnType,
    ) -> RelationResult:
        valid = dataset.pairs(col_x, col_y)
        x_numeric = ColumnType(type_x) is ColumnType.NUMERIC
        y_numeric = ColumnType(type_y) is ColumnType.NUMERIC

        if x_numeric and y_numeric:
            branch = "correlation"
            result = self._correlation(valid)
        elif x_numeric:
            branch = "grouped_means"
            result = self._grouped_means(valid["x"], valid["y"], col_x, col_y)
        elif y_numeric:
            branch = "grouped_means"
            result = self._grouped_means(valid["y"], valid["x"], col_y, col_x)
        else:
            branch = "crosstab"
            result = self._crosstab(valid, col_x, col_y)

        logger.debug(
            "Relation %r x %r: %d valid rows -> %s", col_x, col_y, len(valid), branch
        )
        return result

    def _correlation(self, valid: pd.DataFrame) -> Correlation:
        x = parse_numeric_series(valid["x"])
        y = parse_numeric_series(valid["y"])
        # Pairs where either side failed to parse are dropped together.
        keep = x.notna() & y.notna()
        xs = x[keep].to_numpy(dtype=float)
        ys = y[keep].to_numpy(dtype=float)
        return Correlation(
            coefficient=pearson(xs, ys),
            n=int(xs.size),
            points=list(zip(xs.tolist(), ys.tolist())),
        )

    def _grouped_means(
        self,
        numeric: pd.Series,
        groups: pd.Series,
        numeric_column: str,
        group_column: str,
    ) -> GroupedMeans:
        numbers = parse_numeric_series(numeric)
        labels = groups.map(cell_label)

        stats: Dict[str, GroupStat] = {}
        frame = pd.DataFrame({"label": labels, "value": numbers}).dropna()
        if not frame.empty:
            agg = frame.groupby("label", sort=False)["value"].agg(["mean", "count"])
            for label, row in agg.iterrows():
                stats[str(label)] = GroupStat(
                    mean=float(row["mean"]), count=int(row["count"])
                )

        return GroupedMeans(
            numeric_column=numeric_column, group_column=group_column, groups=stats
        )

    def _crosstab(self, valid: pd.DataFrame, col_x: str, col_y: str) -> CrossTab:
        limit = self.config["crosstab_max_categories"]
        x_labels = valid["x"].map(cell_label)
        y_labels = valid["y"].map(cell_label)
        rows = _first_seen(x_labels, limit)
        cols = _first_seen(y_labels, limit)

        counts: Dict[str, Dict[str, int]] = {}
        if rows:
            table = pd.crosstab(x_labels, y_labels).reindex(
                index=rows, columns=cols, fill_value=0
            )
            counts = {r: {c: int(table.at[r, c]) for c in cols} for r in rows}

        return CrossTab(
            row_column=col_x,
            col_column=col_y,
            row_categories=rows,
            col_categories=cols,
            counts=counts,
        )


def analyze_relation(
    dataset: Dataset,
    col_x: str,
    col_y: str,
    type_x: ColumnType,
    type_y: ColumnType,
    config: Optional[Dict[str, Any]] = None,
) -> RelationResult:
    return RelationAnalyzer(config).analyze(dataset, col_x, col_y, type_x, type_y)


def correlation(dataset: Dataset, col_x: str, col_y: str) -> float:
    """Pearson coefficient of two columns treated as numeric."""

    result = RelationAnalyzer().analyze(
        dataset, col_x, col_y, ColumnType.NUMERIC, ColumnType.NUMERIC
    )
    return result.coefficient
