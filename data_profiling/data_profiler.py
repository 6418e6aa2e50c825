import logging
from typing import Dict, Optional

import numpy as np
import pandas as pd

from .cleaning_utils import cell_label, parse_numeric_series
from .dataset import Dataset
from .models import (
    CategoricalSummary,
    ColumnDescription,
    ColumnType,
    FrequencyTable,
    MalformedInputError,
    NumericStats,
    Overview,
)

logger = logging.getLogger(__name__)


def _percentage(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


class DataProfiler:
    """Profiling engine producing per-column descriptions and the dataset overview."""

    def describe(
        self, dataset: Dataset, column: str, column_type: ColumnType
    ) -> ColumnDescription:
        """Describe a single column according to its inferred type."""

        values = dataset.non_missing(column)
        missing = dataset.n_rows - len(values)
        missing_pct = _percentage(missing, dataset.n_rows)
        logger.debug(
            "Describing %r as %s (%d missing)",
            column,
            ColumnType(column_type).value,
            missing,
        )

        if ColumnType(column_type) is ColumnType.NUMERIC:
            return self._get_numeric_statistics(values, missing, missing_pct)
        return self._get_categorical_statistics(values, missing, missing_pct)

    def describe_all(
        self, dataset: Dataset, type_map: Dict[str, ColumnType]
    ) -> Dict[str, ColumnDescription]:
        return {
            column: self.describe(dataset, column, type_map[column])
            for column in dataset.schema
            if column in type_map
        }

    def _get_numeric_statistics(
        self, values: pd.Series, missing: int, missing_pct: float
    ) -> NumericStats:
        """Population statistics over the values that parse as numbers."""

        numbers = parse_numeric_series(values).dropna().to_numpy(dtype=float)
        n = int(numbers.size)
        if n == 0:
            return NumericStats(count=0, missing=missing, missing_percentage=missing_pct)

        ordered = np.sort(numbers)
        mid = n // 2
        if n % 2 == 0:
            median = (ordered[mid - 1] + ordered[mid]) / 2
        else:
            median = ordered[mid]

        return NumericStats(
            count=n,
            mean=float(numbers.mean()),
            std=float(numbers.std()),
            min=float(ordered[0]),
            max=float(ordered[-1]),
            median=float(median),
            q1=float(ordered[int(n * 0.25)]),
            q3=float(ordered[int(n * 0.75)]),
            missing=missing,
            missing_percentage=missing_pct,
        )

    def _get_categorical_statistics(
        self, values: pd.Series, missing: int, missing_pct: float
    ) -> CategoricalSummary:
        table = frequency_table(values)
        ranked = table.ranked()
        top_value, top_count = ranked[0] if ranked else (None, 0)

        return CategoricalSummary(
            count=int(len(values)),
            unique=len(table),
            top_value=top_value,
            top_count=top_count,
            frequencies=table,
            missing=missing,
            missing_percentage=missing_pct,
        )

    def summarize(
        self, dataset: Dataset, type_map: Dict[str, ColumnType]
    ) -> Overview:
        """Missing-cell, duplicate-row and type-distribution totals."""

        missing_by_column = dataset.missing_counts()
        total_missing = sum(missing_by_column.values())
        total_cells = dataset.n_rows * dataset.n_columns

        duplicate_rows = dataset.duplicate_count()

        type_counts = {t.value: 0 for t in ColumnType}
        for column in dataset.schema:
            if column not in type_map:
                raise MalformedInputError(f"No inferred type for column {column!r}")
            type_counts[ColumnType(type_map[column]).value] += 1

        return Overview(
            n_variables=dataset.n_columns,
            n_observations=dataset.n_rows,
            missing_by_column=missing_by_column,
            total_missing=total_missing,
            total_cells=total_cells,
            missing_percentage=_percentage(total_missing, total_cells),
            duplicate_rows=duplicate_rows,
            type_counts=type_counts,
        )


def frequency_table(values: pd.Series) -> FrequencyTable:
    """Count stringified values; keys keep the order they were first seen."""

    labels = values.map(cell_label)
    counts = labels.value_counts(sort=False).reindex(pd.unique(labels))
    return FrequencyTable(counts={str(k): int(v) for k, v in counts.items()})


def box_plot(stats: NumericStats) -> Optional[Dict[str, float]]:
    """Five-number summary for a box plot, or None when nothing parsed."""

    if stats.count == 0:
        return None
    return {
        "min": stats.min,
        "q1": stats.q1,
        "median": stats.median,
        "q3": stats.q3,
        "max": stats.max,
    }


def describe(
    dataset: Dataset, column: str, column_type: ColumnType
) -> ColumnDescription:
    return DataProfiler().describe(dataset, column, column_type)


def summarize(dataset: Dataset, type_map: Dict[str, ColumnType]) -> Overview:
    return DataProfiler().summarize(dataset, type_map)
