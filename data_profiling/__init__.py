"""Tabular data profiling engine: type inference, descriptive statistics, dataset overview and pairwise relations.

Public entry point:
    profile_dataset(dataset: Dataset, *, mode: str = "full", config: Optional[dict] = None)

Modes:
    full         -> overview + per-column descriptions, histograms and sample rows
    schema_only  -> only dataset shape + inferred type per column

Building blocks (all pure functions of a Dataset snapshot):
    infer_types, describe, summarize, analyze_relation, histogram
"""

from typing import Optional, Dict, Any
from .binning import histogram  # noqa: F401
from .config import DEFAULT_CONFIG, resolve_config  # noqa: F401
from .data_profiler import DataProfiler, box_plot, describe, frequency_table, summarize  # noqa: F401
from .dataset import Dataset  # noqa: F401
from .models import (  # noqa: F401
    MISSING,
    CategoricalSummary,
    ColumnType,
    Correlation,
    CrossTab,
    FrequencyTable,
    GroupedMeans,
    GroupStat,
    Histogram,
    MalformedInputError,
    NumericStats,
    Overview,
)
from .pipeline import ProfilingSession, profile_dataset, sample_rows  # noqa: F401
from .relations import RelationAnalyzer, analyze_relation, correlation  # noqa: F401
from .type_inference import TypeInferencer, infer_types  # noqa: F401

__all__ = [
    "profile_dataset",
    "ProfilingSession",
    "Dataset",
    "MISSING",
    "ColumnType",
    "MalformedInputError",
    "DEFAULT_CONFIG",
    "resolve_config",
    "infer_types",
    "TypeInferencer",
    "describe",
    "summarize",
    "DataProfiler",
    "frequency_table",
    "box_plot",
    "analyze_relation",
    "correlation",
    "RelationAnalyzer",
    "histogram",
    "sample_rows",
    "NumericStats",
    "CategoricalSummary",
    "FrequencyTable",
    "Overview",
    "Histogram",
    "Correlation",
    "GroupedMeans",
    "GroupStat",
    "CrossTab",
]
