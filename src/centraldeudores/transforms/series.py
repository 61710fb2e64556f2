# src/centraldeudores/transforms/series.py
"""
Period axis and per-entity series.

Input is the record frame produced by `DebtorHistory.to_dataframe()`:

    records: ['period','entity','situation','amount','under_review','in_litigation']

`normalize_records` turns it into the normalized frame every other function
here expects (int64 YYYYMM periods, malformed periods dropped, one row per
(period, entity) keeping the last one seen).

Activity rule
-------------
An entity is *active* in a period iff its record there has situation > 0.
A record with situation 0 is a gap even when it carries a stale amount.

Output of `build_entity_series` is a long frame

    ['entity','period','value','situation']

with one row per (universe entity x axis period). Gaps are NaN / <NA>:
they mean "do not plot, do not connect", never zero.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from centraldeudores.transforms import config


def parse_period(token) -> Optional[int]:
    """
    Parse a YYYYMM token into an int, or None if it is malformed.

    Integers are accepted as well as strings; month must be 01..12.
    """
    if token is None or isinstance(token, bool):
        return None
    s = str(token).strip()
    if len(s) != config.PERIOD_TOKEN_LENGTH or not s.isascii() or not s.isdigit():
        return None

    year, month = int(s[:4]), int(s[4:])
    if not (config.PERIOD_MIN_YEAR <= year <= config.PERIOD_MAX_YEAR) or not (1 <= month <= 12):
        return None
    return int(s)


def period_label(period) -> str:
    """YYYYMM -> MM/YYYY."""
    s = str(int(period))
    return f"{s[4:]}/{s[:4]}"


def _ensure_records_schema(records: pd.DataFrame) -> None:
    missing = sorted(set(config.RECORD_COLUMNS) - set(records.columns))
    if missing:
        raise ValueError(f"records missing required columns: {missing}")


def normalize_records(records: pd.DataFrame, logger=None) -> pd.DataFrame:
    """
    Validate periods, coerce dtypes and resolve duplicates.

    - rows whose period is not a plausible YYYYMM are dropped (a warning is logged)
    - period becomes int64
    - for duplicated (period, entity) pairs the last row wins

    Returns
    -------
    pandas.DataFrame
        Same columns as the input record frame, index reset, input order kept.
    """
    _ensure_records_schema(records)

    df = records[config.RECORD_COLUMNS].copy()
    parsed = df["period"].map(parse_period)
    valid = parsed.notna()

    n_bad = int((~valid).sum())
    if n_bad and logger is not None:
        logger.warning(f"Ignoring {n_bad} records with malformed periods")

    df = df.loc[valid].copy()
    df["period"] = parsed.loc[valid].astype("int64")
    df["situation"] = pd.to_numeric(df["situation"], errors="raise").astype("int64")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0).astype("float64")

    n_before = len(df)
    df = df.drop_duplicates(subset=["period", "entity"], keep="last")
    if len(df) < n_before and logger is not None:
        logger.warning(f"Dropped {n_before - len(df)} duplicated (period, entity) records")

    return df.reset_index(drop=True)


def _active(records: pd.DataFrame) -> pd.DataFrame:
    return records[records["situation"] > config.NO_DEBT_SITUATION]


def build_period_axis(records: pd.DataFrame) -> np.ndarray:
    """
    Distinct periods of the normalized records, ascending.

    Every period observed counts, including periods where no entity is active.
    """
    return np.unique(records["period"].to_numpy(dtype="int64"))


def build_entity_universe(records: pd.DataFrame) -> List[str]:
    """
    Entities with situation > 0 in at least one period.

    Ordered by first active period; ties keep input order. Entities that only
    ever report situation 0 are left out.
    """
    active = _active(records)
    return (
        active.sort_values(by="period", kind="mergesort")
        .drop_duplicates(subset=["entity"], keep="first")["entity"]
        .tolist()
    )


def build_entity_series(
    records: pd.DataFrame,
    axis: Optional[np.ndarray] = None,
    universe: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Align every universe entity to the shared period axis.

    A (entity, period) cell is a gap when the entity has no record in that
    period or its record has situation 0.

    Returns
    -------
    pandas.DataFrame
        Columns ['entity','period','value','situation']; value float64 (NaN for
        gaps), situation Int64 (<NA> for gaps). Rows ordered by universe, then axis.
    """
    if axis is None:
        axis = build_period_axis(records)
    if universe is None:
        universe = build_entity_universe(records)

    grid = pd.MultiIndex.from_product(
        [list(universe), np.asarray(axis, dtype="int64")], names=["entity", "period"]
    )

    series = (
        _active(records)
        .set_index(["entity", "period"])[["amount", "situation"]]
        .reindex(grid)
        .reset_index()
        .rename(columns={"amount": "value"})
    )

    series["period"] = series["period"].astype("int64")
    series["value"] = series["value"].astype("float64")
    series["situation"] = series["situation"].astype("Int64")
    return series[["entity", "period", "value", "situation"]]
