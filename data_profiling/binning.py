"""Histogram bucketization for numeric distributions."""

import logging
import math
from typing import Iterable

import numpy as np

from .models import Histogram

logger = logging.getLogger(__name__)

DEFAULT_MAX_BINS = 20


def bin_count(n: int, max_bins: int = DEFAULT_MAX_BINS) -> int:
    """Square-root rule capped at ``max_bins``, never below one bin."""

    if n <= 0:
        return 1
    return max(1, min(max_bins, math.ceil(math.sqrt(n))))


def histogram(values: Iterable[float], max_bins: int = DEFAULT_MAX_BINS) -> Histogram:
    """Equal-width histogram over ``[min, max]``.

    Each value goes to ``floor((v - min) / width)``, clamped to the last bin so
    the maximum does not overflow. A zero-width range collapses to one bin
    holding every value. Non-finite values are ignored.
    """

    arr = np.asarray(list(values), dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return Histogram(bin_edges=[], counts=[])

    lo = float(arr.min())
    hi = float(arr.max())
    if hi == lo:
        logger.debug("Zero-width range at %s; using a single bin", lo)
        return Histogram(bin_edges=[lo, hi], counts=[int(arr.size)])

    bins = bin_count(int(arr.size), max_bins)
    width = (hi - lo) / bins
    idx = np.floor((arr - lo) / width).astype(int)
    idx = np.clip(idx, 0, bins - 1)
    counts = np.bincount(idx, minlength=bins)

    edges = [lo + i * width for i in range(bins)] + [hi]
    logger.debug("Histogram of %d values into %d bins", arr.size, bins)
    return Histogram(bin_edges=edges, counts=[int(c) for c in counts])
