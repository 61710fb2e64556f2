# src/centraldeudores/transforms/chart.py
"""
Chart-ready output for the rendering layer.

`build_chart` runs the whole transformation for one debtor history:

1) Normalize records (drop malformed periods, last duplicate wins)
2) Build the ascending period axis
3) Build the entity universe (entities ever active)
4) Align each entity to the axis, with explicit gaps
5) Compute the total series and append it, tagged, if it has any point

Every call builds fresh immutable structs from its input; nothing is cached
or merged with earlier results.

Serialized form (`ChartData.to_builtins()` / `to_json()`):

    {"identification": "...", "displayName": "...",
     "periodAxis": ["04/2025", "05/2025"],
     "series": [{"name": "...", "isTotal": false, "color": "#1f77b4",
                 "points": [{"period": "04/2025", "value": 1202.0, "situation": 1}, ...]},
                ...]}

A point with value null must not be drawn and lines must not span it.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Optional, Tuple

import msgspec
import pandas as pd

from centraldeudores.transforms import config
from centraldeudores.transforms.colors import entity_color
from centraldeudores.transforms.series import (
    build_entity_series,
    build_entity_universe,
    build_period_axis,
    normalize_records,
    period_label,
)
from centraldeudores.transforms.situations import classify_situation, situation_color
from centraldeudores.transforms.totals import compute_total_series, has_informative_total

if TYPE_CHECKING:
    from centraldeudores.extract.payload import DebtorHistory


class ChartPoint(msgspec.Struct, frozen=True):
    period: str
    value: Optional[float] = None
    situation: Optional[int] = None

    @property
    def is_gap(self) -> bool:
        return self.value is None

    @property
    def color(self) -> Optional[str]:
        """Situation color of the point; None for gaps and total points."""
        if self.situation is None:
            return None
        return situation_color(self.situation)


class ChartSeries(msgspec.Struct, frozen=True, rename="camel"):
    name: str
    is_total: bool
    color: str
    points: Tuple[ChartPoint, ...]

    # Lines must break at gaps
    span_gaps: bool = False


class ChartData(msgspec.Struct, frozen=True, rename="camel"):
    identification: str
    display_name: str
    period_axis: Tuple[str, ...]
    series: Tuple[ChartSeries, ...]

    @property
    def entity_series(self) -> List[ChartSeries]:
        return [s for s in self.series if not s.is_total]

    @property
    def total_series(self) -> Optional[ChartSeries]:
        for s in self.series:
            if s.is_total:
                return s
        return None

    @property
    def is_empty(self) -> bool:
        return len(self.series) == 0

    def to_builtins(self) -> dict:
        """JSON-shaped dict (lists, not tuples) with the camelCase field names."""
        return msgspec.json.decode(self.to_json())

    def to_json(self) -> bytes:
        return msgspec.json.encode(self)


def _none_if_nan(value) -> Optional[float]:
    if value is None or value is pd.NA:
        return None
    value = float(value)
    return None if math.isnan(value) else value


def _none_if_na(value) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    return int(value)


def build_chart_from_records(
    logger,
    records: pd.DataFrame,
    identification: str = "",
    display_name: str = "",
) -> ChartData:
    """
    Build ChartData from a raw record frame (see extract.payload.RECORD_COLUMNS).
    """
    df = normalize_records(records, logger=logger)

    axis = build_period_axis(df)
    universe = build_entity_universe(df)
    labels = tuple(period_label(p) for p in axis)
    label_of = dict(zip(axis.tolist(), labels))

    entity_df = build_entity_series(df, axis=axis, universe=universe)

    series: List[ChartSeries] = []
    for i, (name, grp) in enumerate(entity_df.groupby("entity", sort=False)):
        points = tuple(
            ChartPoint(
                period=label_of[int(p)],
                value=_none_if_nan(v),
                situation=_none_if_na(s),
            )
            for p, v, s in zip(grp["period"], grp["value"], grp["situation"])
        )
        series.append(ChartSeries(name=name, is_total=False, color=entity_color(name, i), points=points))

    totals = compute_total_series(df, axis=axis)
    if has_informative_total(totals):
        points = tuple(
            ChartPoint(period=label_of[int(p)], value=_none_if_nan(v), situation=None)
            for p, v in zip(totals["period"], totals["value"])
        )
        series.append(
            ChartSeries(
                name=config.TOTAL_SERIES_NAME,
                is_total=True,
                color=config.TOTAL_SERIES_COLOR,
                points=points,
            )
        )

    if logger is not None:
        logger.info(
            f"Built chart with {len(labels)} periods, {len(universe)} entities"
            f"{' and a total series' if len(series) > len(universe) else ''}"
        )

    return ChartData(
        identification=identification,
        display_name=display_name,
        period_axis=labels,
        series=tuple(series),
    )


def build_chart(logger, history: DebtorHistory) -> ChartData:
    """Build ChartData for a decoded debtor history."""
    return build_chart_from_records(
        logger,
        history.to_dataframe(),
        identification=history.identifier,
        display_name=history.display_name,
    )


def point_tooltip(series: ChartSeries, index: int) -> str:
    """
    Detail text for the `index`-th point of `series`.

    "<name>: <amount> (situation <n>: <label>)" for plotted entity points,
    "<name>: <amount>" for total points and "<name>: no debt" for gaps.
    """
    point = series.points[index]
    if point.is_gap:
        return f"{series.name}: no debt"

    text = f"{series.name}: {point.value:,.2f}"
    if point.situation is not None:
        info = classify_situation(point.situation)
        text += f" (situation {point.situation}: {info.label})"
    return text
