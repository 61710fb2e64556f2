# src/centraldeudores/transforms/detail.py
"""
Tabular detail view of a debtor history.

Unlike the chart, the detail table keeps situation-0 rows so a "no debt"
entry is still listed for the entity that reported it.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from centraldeudores.transforms import config
from centraldeudores.transforms.series import normalize_records, period_label
from centraldeudores.transforms.situations import classify_situation


DETAIL_COLUMNS = [
    "period",
    "period_label",
    "entity",
    "situation",
    "situation_label",
    "severity",
    "amount",
    "under_review",
    "in_litigation",
]


def build_detail_table(records: pd.DataFrame, logger=None) -> pd.DataFrame:
    """
    Normalized records with display labels, newest period first, then by entity.
    """
    df = normalize_records(records, logger=logger)
    df = df.sort_values(by=["period", "entity"], ascending=[False, True], kind="mergesort")

    infos = df["situation"].map(classify_situation)
    df["period_label"] = df["period"].map(period_label)
    df["situation_label"] = infos.map(lambda i: i.label)
    df["severity"] = infos.map(lambda i: i.severity.value)

    return df[DETAIL_COLUMNS].reset_index(drop=True)


def summarize_latest_period(records: pd.DataFrame, logger=None) -> Optional[dict]:
    """
    Summary of the most recent period, or None if there are no valid records.

    Keys: period, period_label, total_amount, active_entities, worst_situation,
    worst_label, under_review, in_litigation. Only active records
    (situation > 0) contribute.
    """
    df = normalize_records(records, logger=logger)
    if len(df) == 0:
        return None

    latest = int(df["period"].max())
    cur = df[df["period"] == latest]
    active = cur[cur["situation"] > config.NO_DEBT_SITUATION]

    worst = int(active["situation"].max()) if len(active) else config.NO_DEBT_SITUATION
    return {
        "period": latest,
        "period_label": period_label(latest),
        "total_amount": float(active["amount"].sum()),
        "active_entities": int(active["entity"].nunique()),
        "worst_situation": worst,
        "worst_label": classify_situation(worst).label,
        "under_review": bool(active["under_review"].any()),
        "in_litigation": bool(active["in_litigation"].any()),
    }
