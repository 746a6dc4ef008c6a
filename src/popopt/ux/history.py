"""Tabular export of solver best-so-far histories."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def history_to_dataframe(history: Sequence[float]) -> Any:
    """
    Convert a best-so-far history to a pandas DataFrame.

    Rows are numbered from 1 in the ``iteration`` column; ``best`` holds the
    recorded value.

    Raises:
        ImportError: If pandas is not installed.
    """
    try:
        import pandas as pd
    except ImportError as exc:
        raise ImportError(
            "pandas is required for history_to_dataframe(). Install with: pip install popopt[analysis]"
        ) from exc

    values = [float(v) for v in history]
    return pd.DataFrame({"iteration": list(range(1, len(values) + 1)), "best": values})


__all__ = ["history_to_dataframe"]
