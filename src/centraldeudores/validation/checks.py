# src/centraldeudores/validation/checks.py
"""
Integrity checks ("emergency brake") for chart outputs.

These checks are strict and designed to catch silent transformation drift
before a chart reaches the rendering layer: misaligned series, gaps rendered
as zeros, totals that should have been suppressed.

Raises AssertionError on failure.
"""

from __future__ import annotations

import re

from centraldeudores.transforms import config
from centraldeudores.transforms.chart import ChartData


_LABEL_RE = re.compile(r"^(0[1-9]|1[0-2])/\d{4}$")


def _label_key(label: str) -> int:
    month, year = label.split("/")
    return int(year) * 100 + int(month)


def check_period_axis(chart: ChartData) -> None:
    axis = list(chart.period_axis)
    for label in axis:
        assert _LABEL_RE.match(label), f"Malformed period label {label!r}"

    keys = [_label_key(label) for label in axis]
    assert all(a < b for a, b in zip(keys, keys[1:])), "Period axis is not strictly ascending"


def check_series(chart: ChartData) -> None:
    axis = list(chart.period_axis)

    names = [s.name for s in chart.entity_series]
    assert len(names) == len(set(names)), "Duplicated entity series"

    totals = [i for i, s in enumerate(chart.series) if s.is_total]
    assert len(totals) <= 1, "More than one total series"
    if totals:
        assert totals[0] == len(chart.series) - 1, "Total series must come after all entity series"

    for s in chart.series:
        assert len(s.points) == len(axis), f"Series {s.name!r} is not aligned with the period axis"
        assert not s.span_gaps, f"Series {s.name!r} would connect lines across gaps"
        assert [p.period for p in s.points] == axis, f"Series {s.name!r} has points out of axis order"

        for p in s.points:
            if p.is_gap:
                assert p.situation is None, f"Gap with a situation in {s.name!r} at {p.period}"
                continue
            assert p.value >= 0, f"Negative amount in {s.name!r} at {p.period}"
            if s.is_total:
                assert p.situation is None, f"Total point with a situation at {p.period}"
            else:
                assert p.situation is not None, f"Plotted point without situation in {s.name!r}"
                assert p.situation != config.NO_DEBT_SITUATION, (
                    f"Situation 0 plotted in {s.name!r} at {p.period}"
                )

        if s.is_total:
            assert s.color == config.TOTAL_SERIES_COLOR, "Total series must use the reserved color"
            assert not all(p.is_gap for p in s.points), "Total series has no points"
        else:
            assert s.color != config.TOTAL_SERIES_COLOR, f"Series {s.name!r} uses the reserved total color"
            assert not all(p.is_gap for p in s.points), f"Series {s.name!r} is never active"


def check_chart_data(logger, chart: ChartData) -> None:
    """
    Run all chart checks. Raises AssertionError on failure.
    """
    check_period_axis(chart)
    check_series(chart)
    logger.info("Chart checks OK")
