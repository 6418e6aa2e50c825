"""Core types and result records for the profiling engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple, Union


class _MissingType:
    """Sentinel for an absent cell (null, NaN or empty string at the source)."""

    _instance: Optional["_MissingType"] = None

    def __new__(cls) -> "_MissingType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_MissingType, ())


MISSING = _MissingType()


class ColumnType(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    TEXT = "text"
    UNKNOWN = "unknown"


class MalformedInputError(ValueError):
    """Dataset does not honour its schema (missing/extra keys, duplicate or unknown columns)."""


@dataclass(frozen=True)
class NumericStats:
    """Descriptive statistics of a numeric column.

    ``std`` is the population standard deviation. ``q1``/``q3`` are the
    sorted elements at ``floor(n * 0.25)`` and ``floor(n * 0.75)``, not
    interpolated quantiles. Every statistic is None when no value parsed.
    """

    count: int
    mean: Optional[float] = None
    std: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    median: Optional[float] = None
    q1: Optional[float] = None
    q3: Optional[float] = None
    missing: int = 0
    missing_percentage: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "numeric", **asdict(self)}


@dataclass(frozen=True)
class FrequencyTable:
    """Occurrence counts keyed by stringified value, in first-encounter order."""

    counts: Dict[str, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.counts)

    def ranked(self) -> List[Tuple[str, int]]:
        # Encounter index as secondary key keeps ties in scan order.
        order = sorted(
            enumerate(self.counts.items()), key=lambda item: (-item[1][1], item[0])
        )
        return [pair for _, pair in order]

    def top(self, k: int) -> List[Tuple[str, int]]:
        return self.ranked()[:k]

    def to_dict(self) -> Dict[str, int]:
        return dict(self.counts)


@dataclass(frozen=True)
class CategoricalSummary:
    count: int
    unique: int
    top_value: Optional[str]
    top_count: int
    frequencies: FrequencyTable
    missing: int = 0
    missing_percentage: float = 0.0

    def to_dict(self, top_k: Optional[int] = None) -> Dict[str, Any]:
        entries = (
            self.frequencies.ranked()
            if top_k is None
            else self.frequencies.top(top_k)
        )
        return {
            "kind": "categorical",
            "count": self.count,
            "unique": self.unique,
            "top_value": self.top_value,
            "top_count": self.top_count,
            "frequencies": [{"value": v, "count": c} for v, c in entries],
            "missing": self.missing,
            "missing_percentage": self.missing_percentage,
        }


ColumnDescription = Union[NumericStats, CategoricalSummary]


@dataclass(frozen=True)
class Overview:
    """Whole-dataset summary."""

    n_variables: int
    n_observations: int
    missing_by_column: Dict[str, int]
    total_missing: int
    total_cells: int
    missing_percentage: float
    duplicate_rows: int
    type_counts: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Histogram:
    bin_edges: List[float]
    counts: List[int]

    @property
    def labels(self) -> List[str]:
        """``"start-end"`` per bin; two decimals when bins are narrower than 1."""

        edges = self.bin_edges
        width = edges[1] - edges[0] if len(edges) > 1 else 0.0
        if 0 < width < 1:
            fmt = "{:.2f}".format
        else:
            fmt = _round_half_up
        return [f"{fmt(start)}-{fmt(end)}" for start, end in zip(edges, edges[1:])]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bin_edges": list(self.bin_edges),
            "counts": list(self.counts),
            "labels": self.labels,
        }


@dataclass(frozen=True)
class Correlation:
    """Pearson coefficient plus the valid pairs behind it, for a scatter plot."""

    coefficient: float
    n: int = 0
    points: List[Tuple[float, float]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "correlation", **asdict(self)}


@dataclass(frozen=True)
class GroupStat:
    mean: float
    count: int


@dataclass(frozen=True)
class GroupedMeans:
    numeric_column: str
    group_column: str
    groups: Dict[str, GroupStat] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "grouped_means", **asdict(self)}


@dataclass(frozen=True)
class CrossTab:
    """Co-occurrence counts; ``counts[row][col]`` for every retained pair."""

    row_column: str
    col_column: str
    row_categories: List[str] = field(default_factory=list)
    col_categories: List[str] = field(default_factory=list)
    counts: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "crosstab", **asdict(self)}


RelationResult = Union[Correlation, GroupedMeans, CrossTab]
