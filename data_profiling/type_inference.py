import logging
from typing import Dict, Any, Optional

import pandas as pd

from .cleaning_utils import parse_numeric_series
from .config import resolve_config
from .dataset import Dataset
from .models import ColumnType

logger = logging.getLogger(__name__)


class TypeInferencer:
    """Threshold-based column classifier: numeric, categorical, text or unknown.

    A column is numeric when more than ``numeric_ratio_threshold`` of its
    non-missing cells parse as finite numbers. Otherwise it is categorical when
    its distinct-value count is at most
    ``max(categorical_min_unique, categorical_unique_ratio * non_missing)``,
    and text beyond that. Columns with no non-missing cell are unknown.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = resolve_config(config)

    def infer_types(self, dataset: Dataset) -> Dict[str, ColumnType]:
        """Classify every column of the dataset, in schema order."""

        return {
            column: self.infer_column(dataset.non_missing(column))
            for column in dataset.schema
        }

    def infer_column(self, values: pd.Series) -> ColumnType:
        """Classify a series of non-missing cells."""

        total = len(values)
        if total == 0:
            return ColumnType.UNKNOWN

        numeric_ratio = parse_numeric_series(values).notna().sum() / total
        if numeric_ratio > self.config["numeric_ratio_threshold"]:
            column_type = ColumnType.NUMERIC
        else:
            unique_count = values.nunique(dropna=True)
            limit = max(
                self.config["categorical_min_unique"],
                self.config["categorical_unique_ratio"] * total,
            )
            column_type = (
                ColumnType.CATEGORICAL if unique_count <= limit else ColumnType.TEXT
            )

        logger.debug(
            "Column %r: %d values, numeric ratio %.3f -> %s",
            values.name,
            total,
            numeric_ratio,
            column_type.value,
        )
        return column_type


def infer_types(
    dataset: Dataset, config: Optional[Dict[str, Any]] = None
) -> Dict[str, ColumnType]:
    return TypeInferencer(config).infer_types(dataset)
