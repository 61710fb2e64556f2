# src/centraldeudores/transforms/totals.py
"""
Synthetic "total" series over all active entities.

For each axis period the total is the sum of the amounts of the entities
active there (situation > 0). When fewer than
config.MIN_ACTIVE_ENTITIES_FOR_TOTAL entities are active the point is a gap:
a total of a single entity repeats that entity's own line.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from centraldeudores.transforms import config
from centraldeudores.transforms.series import build_period_axis


def compute_total_series(records: pd.DataFrame, axis: Optional[np.ndarray] = None) -> pd.DataFrame:
    """
    Compute the total series of normalized records.

    Returns
    -------
    pandas.DataFrame
        Columns ['period','value','active_entities'], one row per axis period.
        value is NaN where the total is suppressed.
    """
    if axis is None:
        axis = build_period_axis(records)
    axis = np.asarray(axis, dtype="int64")

    active = records[records["situation"] > config.NO_DEBT_SITUATION]
    totals = (
        active.groupby("period", sort=True)
        .agg(value=("amount", "sum"), active_entities=("entity", "nunique"))
        .reindex(axis)
    )

    totals["active_entities"] = totals["active_entities"].fillna(0).astype("int64")
    totals["value"] = totals["value"].astype("float64").where(
        totals["active_entities"] >= config.MIN_ACTIVE_ENTITIES_FOR_TOTAL
    )

    totals.index.name = "period"
    totals = totals.reset_index()
    totals["period"] = totals["period"].astype("int64")
    return totals[["period", "value", "active_entities"]]


def has_informative_total(totals: pd.DataFrame) -> bool:
    """True if at least one total point survived suppression."""
    return bool(totals["value"].notna().any())
