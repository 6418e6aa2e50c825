import sys
from pathlib import Path as _P

import pandas as pd
import pytest

# Ensure project root (containing the 'data_profiling' package directory) is on sys.path
_project_root = _P(__file__).resolve().parents[1]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from data_profiling import Dataset  # noqa: E402


@pytest.fixture
def people() -> Dataset:
    """Small mixed dataset: one numeric column with a gap, one categorical, one free text."""
    df = pd.DataFrame(
        {
            "age": [25, 30, "", 40, 35],
            "city": ["NY", "LA", "NY", "NY", "SF"],
            "note": ["a", "b", "c", "d", "e"],
        }
    )
    return Dataset.from_dataframe(df)
