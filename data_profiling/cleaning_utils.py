"""Cell-level normalization utilities shared by the profiling engine.

Only value-level helpers live here; nothing in this module knows about
columns or datasets:
  - Missing detection (is_missing)
  - Permissive numeric parsing (parse_number, parse_numeric_series)
  - Stable string labels for frequency tables (cell_label)
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, FrozenSet
import decimal
import math
import numbers
import re
import numpy as np
import pandas as pd

from .models import MISSING

# Plain decimal or scientific literal, optional sign; no thousands separators.
NUMERIC_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_SPACE_PATTERN = re.compile(r"[\u00A0\u2000-\u200B]")


def _normalize_whitespace_and_minus(text: str) -> str:
    text = text.replace("\u2212", "-")
    return _SPACE_PATTERN.sub(" ", text)


def build_null_tokens(tokens: Iterable[str]) -> FrozenSet[str]:
    return frozenset(str(t).strip().lower() for t in tokens)


def is_missing(value: Any, null_tokens: FrozenSet[str] = frozenset()) -> bool:
    """True for None, NaN/NA/NaT, the MISSING sentinel, "" and configured tokens."""

    if value is None or value is MISSING:
        return True
    if isinstance(value, str):
        if value == "":
            return True
        return bool(null_tokens) and value.strip().lower() in null_tokens
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def parse_number(value: Any) -> Optional[float]:
    """Permissively coerce a cell to a finite float, or None when it is not numeric."""

    if is_missing(value):
        return None
    if isinstance(value, (bool, np.bool_)):
        return 1.0 if value else 0.0
    if isinstance(value, decimal.Decimal):
        number = None if value.is_nan() else float(value)
    elif isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        text = _normalize_whitespace_and_minus(value).strip()
        if not NUMERIC_PATTERN.fullmatch(text):
            return None
        number = float(text)
    else:
        return None
    return number if number is not None and math.isfinite(number) else None


def parse_numeric_series(series: pd.Series) -> pd.Series:
    """Vector form of parse_number; unparseable cells become NaN."""

    if series.empty:
        return pd.Series([], index=series.index, dtype=float)
    return series.map(parse_number).astype(float)


def cell_label(value: Any) -> str:
    """Stringify a cell for frequency tables and grouping keys.

    Integral floats drop their trailing ``.0`` so that a column read as
    float because of gaps still groups ``3`` and ``3.0`` together.
    """

    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


__all__ = [
    "NUMERIC_PATTERN",
    "build_null_tokens",
    "is_missing",
    "parse_number",
    "parse_numeric_series",
    "cell_label",
]
