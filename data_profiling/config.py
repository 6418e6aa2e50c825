"""Profiling configuration.

Configuration is a plain dict; callers pass only the keys they want to
override and ``resolve_config`` fills in the rest from ``DEFAULT_CONFIG``.
"""

from typing import Dict, Any, Optional

DEFAULT_CONFIG: Dict[str, Any] = {
    # Type inference thresholds
    "numeric_ratio_threshold": 0.8,
    "categorical_min_unique": 10,
    "categorical_unique_ratio": 0.1,
    # Output bounds
    "max_bins": 20,
    "crosstab_max_categories": 10,
    "top_k": 10,
    "sample_size": 10,
    # Extra strings treated as missing at ingestion (case-insensitive)
    "null_tokens": (),
}

_RATIO_KEYS = ("numeric_ratio_threshold", "categorical_unique_ratio")
_POSITIVE_INT_KEYS = (
    "max_bins",
    "crosstab_max_categories",
    "top_k",
    "sample_size",
)


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge ``config`` over the defaults and validate the result."""

    cfg = dict(DEFAULT_CONFIG)
    if not config:
        return cfg

    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    cfg.update(config)

    for key in _RATIO_KEYS:
        value = float(cfg[key])
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"{key} must be within [0, 1], got {value}")
        cfg[key] = value

    for key in _POSITIVE_INT_KEYS:
        if int(cfg[key]) < 1:
            raise ValueError(f"{key} must be a positive integer, got {cfg[key]}")
        cfg[key] = int(cfg[key])

    if int(cfg["categorical_min_unique"]) < 0:
        raise ValueError("categorical_min_unique must not be negative")
    cfg["categorical_min_unique"] = int(cfg["categorical_min_unique"])

    if isinstance(cfg["null_tokens"], str):
        raise ValueError("null_tokens must be a collection of strings")
    cfg["null_tokens"] = tuple(cfg["null_tokens"])

    return cfg
