"""Normalized in-memory dataset consumed by every profiling component.

A Dataset is a read-only snapshot: an ordered schema of unique column names
and an ordered list of rows, each row holding exactly one cell per column.
Absent values (None, NaN, NaT, "" and configured null tokens) are normalized
to a single missing marker at construction time. To change the data, build a
new Dataset; nothing here mutates in place.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import pandas as pd

from .cleaning_utils import build_null_tokens, is_missing
from .config import resolve_config
from .models import MISSING, MalformedInputError


def _validate_schema(schema: Sequence[Any]) -> Tuple[str, ...]:
    names = tuple(schema)
    for name in names:
        if not isinstance(name, str):
            raise MalformedInputError(f"Column names must be strings, got {name!r}")
    seen = set()
    duplicates = []
    for name in names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    if duplicates:
        raise MalformedInputError(f"Duplicate column names: {duplicates}")
    return names


def _integral_to_int(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _normalize_cell(value: Any, null_tokens, row_idx: int, column: str) -> Any:
    if not pd.api.types.is_scalar(value):
        raise MalformedInputError(
            f"Row {row_idx}, column {column!r}: cell must be a scalar, got {type(value).__name__}"
        )
    return None if is_missing(value, null_tokens) else value


class Dataset:
    """Ordered rows of named scalar cells sharing one fixed schema."""

    def __init__(self, schema: Sequence[str], rows: Sequence[Sequence[Any]]):
        """Build from already-normalized row value lists (None marks a missing cell).

        Prefer ``from_records`` / ``from_dataframe``, which normalize and validate.
        """
        self._schema = _validate_schema(schema)
        width = len(self._schema)
        for idx, row in enumerate(rows):
            if len(row) != width:
                raise MalformedInputError(
                    f"Row {idx} has {len(row)} cells, schema declares {width}"
                )
        self._frame = pd.DataFrame(list(rows), columns=list(self._schema), dtype=object)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        schema: Optional[Sequence[str]] = None,
        config: Optional[Dict[str, Any]] = None,
    ) -> "Dataset":
        """Build from row mappings; every mapping must carry exactly the schema's keys.

        The schema defaults to the first record's keys, in order.
        """
        cfg = resolve_config(config)
        null_tokens = build_null_tokens(cfg["null_tokens"])
        records = list(records)
        if schema is None:
            schema = list(records[0].keys()) if records else []
        names = _validate_schema(schema)
        expected = set(names)

        rows = []
        for idx, record in enumerate(records):
            keys = set(record.keys())
            if keys != expected:
                absent = [c for c in names if c not in keys]
                extra = sorted(str(k) for k in keys - expected)
                raise MalformedInputError(
                    f"Row {idx} does not match schema (missing: {absent}, extra: {extra})"
                )
            rows.append(
                [_normalize_cell(record[c], null_tokens, idx, c) for c in names]
            )
        return cls(names, rows)

    @classmethod
    def from_dataframe(
        cls, df: pd.DataFrame, config: Optional[Dict[str, Any]] = None
    ) -> "Dataset":
        """Build from a DataFrame produced by an ingestion layer (e.g. ``pd.read_csv``)."""
        cfg = resolve_config(config)
        null_tokens = build_null_tokens(cfg["null_tokens"])
        names = _validate_schema([str(c) for c in df.columns])
        values = df.astype(object).to_numpy().tolist()
        rows = [
            [
                _normalize_cell(value, null_tokens, idx, column)
                for column, value in zip(names, row)
            ]
            for idx, row in enumerate(values)
        ]
        return cls(names, rows)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def schema(self) -> Tuple[str, ...]:
        return self._schema

    @property
    def n_rows(self) -> int:
        return int(self._frame.shape[0])

    @property
    def n_columns(self) -> int:
        return len(self._schema)

    def __len__(self) -> int:
        return self.n_rows

    def __repr__(self) -> str:
        return f"Dataset(rows={self.n_rows}, columns={list(self._schema)})"

    def require_column(self, column: str) -> None:
        if column not in self._schema:
            raise MalformedInputError(f"Unknown column: {column!r}")

    def column(self, column: str) -> pd.Series:
        """All cells of ``column`` (None for missing), as a copy."""
        self.require_column(column)
        return self._frame[column].copy()

    def non_missing(self, column: str) -> pd.Series:
        """Non-missing cells of ``column``, original row index preserved."""
        self.require_column(column)
        return self._frame[column].dropna()

    def missing_counts(self) -> Dict[str, int]:
        counts = self._frame.isna().sum()
        return {c: int(counts[c]) for c in self._schema}

    def pairs(self, col_x: str, col_y: str) -> pd.DataFrame:
        """Rows where both columns are non-missing, as a two-column frame."""
        self.require_column(col_x)
        self.require_column(col_y)
        x = self._frame[col_x]
        y = self._frame[col_y]
        mask = x.notna() & y.notna()
        return pd.DataFrame({"x": x[mask], "y": y[mask]})

    def duplicate_count(self) -> int:
        """Rows identical to an earlier row, cell for cell in schema order."""
        if self.n_rows == 0:
            return 0
        if self.n_columns == 0:
            return self.n_rows - 1
        # 3 and 3.0 compare alike so a float-promoted column still matches.
        canonical = self._frame.apply(lambda col: col.map(_integral_to_int))
        return int(canonical.duplicated().sum())

    def rows(self) -> List[Dict[str, Any]]:
        """Rows as mappings, MISSING for absent cells."""
        return self._records(self._frame, MISSING)

    def head(self, n: int) -> List[Dict[str, Any]]:
        return self._records(self._frame.head(n), None)

    def tail(self, n: int) -> List[Dict[str, Any]]:
        return self._records(self._frame.tail(n), None)

    def _records(self, frame: pd.DataFrame, missing: Any) -> List[Dict[str, Any]]:
        return [
            {c: (missing if v is None else v) for c, v in zip(self._schema, row)}
            for row in frame.to_numpy().tolist()
        ]
