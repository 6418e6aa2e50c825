import logging
from typing import Dict, Any, List, Optional

from .binning import histogram
from .cleaning_utils import parse_numeric_series
from .config import resolve_config
from .data_profiler import DataProfiler, box_plot
from .dataset import Dataset
from .models import (
    CategoricalSummary,
    ColumnDescription,
    ColumnType,
    Histogram,
    NumericStats,
    Overview,
    RelationResult,
)
from .relations import RelationAnalyzer
from .type_inference import TypeInferencer

logger = logging.getLogger(__name__)

_MODES = ("full", "schema_only")


def sample_rows(dataset: Dataset, n: int = 10) -> Dict[str, List[Dict[str, Any]]]:
    """First and last ``n`` rows; missing cells come back as None."""

    return {"first": dataset.head(n), "last": dataset.tail(n)}


def column_histogram(
    dataset: Dataset, column: str, max_bins: int = 20
) -> Histogram:
    numbers = parse_numeric_series(dataset.non_missing(column)).dropna()
    return histogram(numbers.tolist(), max_bins=max_bins)


class ProfilingSession:
    """Caller-owned profiling context for one dataset at a time.

    ``load`` swaps in a new snapshot and recomputes the type map and overview
    before publishing them; ``reset`` drops everything. Derived state is never
    patched in place.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = resolve_config(config)
        self._dataset: Optional[Dataset] = None
        self._type_map: Dict[str, ColumnType] = {}
        self._overview: Optional[Overview] = None

    @property
    def loaded(self) -> bool:
        return self._dataset is not None

    def load(self, dataset: Dataset) -> "ProfilingSession":
        type_map = TypeInferencer(self.config).infer_types(dataset)
        overview = DataProfiler().summarize(dataset, type_map)
        self._dataset, self._type_map, self._overview = dataset, type_map, overview
        return self

    def reset(self) -> None:
        self._dataset, self._type_map, self._overview = None, {}, None

    def _require_loaded(self) -> Dataset:
        if self._dataset is None:
            raise RuntimeError("No dataset loaded; call load() first")
        return self._dataset

    @property
    def dataset(self) -> Dataset:
        return self._require_loaded()

    @property
    def type_map(self) -> Dict[str, ColumnType]:
        self._require_loaded()
        return dict(self._type_map)

    @property
    def overview(self) -> Overview:
        self._require_loaded()
        return self._overview

    def describe(self, column: str) -> ColumnDescription:
        dataset = self._require_loaded()
        dataset.require_column(column)
        return DataProfiler().describe(dataset, column, self._type_map[column])

    def relation(self, col_x: str, col_y: str) -> RelationResult:
        dataset = self._require_loaded()
        dataset.require_column(col_x)
        dataset.require_column(col_y)
        return RelationAnalyzer(self.config).analyze(
            dataset, col_x, col_y, self._type_map[col_x], self._type_map[col_y]
        )

    def histogram(self, column: str) -> Histogram:
        return column_histogram(
            self._require_loaded(), column, max_bins=self.config["max_bins"]
        )


def _build_payload(
    dataset: Dataset,
    type_map: Dict[str, ColumnType],
    overview: Overview,
    columns: Dict[str, ColumnDescription],
    histograms: Dict[str, Histogram],
    samples: Dict[str, List[Dict[str, Any]]],
    mode: str,
    config: Dict[str, Any],
) -> Dict[str, Any]:
    dataset_block = {
        "rows": dataset.n_rows,
        "columns": dataset.n_columns,
        "column_names": list(dataset.schema),
    }

    if mode == "schema_only":
        return {
            "dataset": dataset_block,
            "columns": {c: {"type": type_map[c].value} for c in dataset.schema},
            "mode": mode,
            "version": "v1",
        }

    col_summaries: Dict[str, Any] = {}
    for column, description in columns.items():
        entry: Dict[str, Any] = {"type": type_map[column].value}
        if isinstance(description, NumericStats):
            entry["stats"] = description.to_dict()
            entry["box_plot"] = box_plot(description)
            if column in histograms:
                entry["histogram"] = histograms[column].to_dict()
        elif isinstance(description, CategoricalSummary):
            entry["stats"] = description.to_dict(top_k=config["top_k"])
        col_summaries[column] = entry

    return {
        "dataset": dataset_block,
        "overview": overview.to_dict(),
        "columns": col_summaries,
        "sample_rows": samples,
        "mode": mode,
        "version": "v1",
    }


def profile_dataset(
    dataset: Dataset, *, mode: str = "full", config: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Primary orchestrator: infer types -> summarize -> describe -> build payload.

    Parameters
    ----------
    dataset : Dataset
        Normalized snapshot produced by the ingestion layer.
    mode : str
        'full' or 'schema_only'.
    config : dict, optional
        Overrides for ``DEFAULT_CONFIG`` (thresholds, top_k, sample_size, ...).

    Returns
    -------
    dict with keys: type_map, overview, columns, histograms, samples, payload
    """
    if mode not in _MODES:
        raise ValueError("mode must be 'full' or 'schema_only'")
    cfg = resolve_config(config)

    session = ProfilingSession(cfg).load(dataset)
    type_map = session.type_map
    overview = session.overview

    columns: Dict[str, ColumnDescription] = {}
    histograms: Dict[str, Histogram] = {}
    samples: Dict[str, List[Dict[str, Any]]] = {"first": [], "last": []}
    if mode == "full":
        columns = DataProfiler().describe_all(dataset, type_map)
        histograms = {
            c: session.histogram(c)
            for c, t in type_map.items()
            if t is ColumnType.NUMERIC
        }
        samples = sample_rows(dataset, cfg["sample_size"])

    logger.info(
        "Profiled %d rows x %d columns (mode=%s, %d duplicate rows)",
        dataset.n_rows,
        dataset.n_columns,
        mode,
        overview.duplicate_rows,
    )

    payload = _build_payload(
        dataset, type_map, overview, columns, histograms, samples, mode, cfg
    )

    return {
        "type_map": type_map,
        "overview": overview,
        "columns": columns,
        "histograms": histograms,
        "samples": samples,
        "payload": payload,
    }
