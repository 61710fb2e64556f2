# src/centraldeudores/transforms/__init__.py
"""
Transformations for centraldeudores.

This subpackage turns the record frame of a decoded debtor history into
chart-ready series.

Design principles:
- Transformations are independent from extraction (no I/O here).
- Input and output dataframe schemas are explicit and stable.
- Every function is pure: fresh output from its inputs, no shared state.
- Functions are unit-testable with small synthetic frames.

Public API:
- build_chart: end-to-end transformation producing ChartData.
- build_detail_table: per-record detail view.
- classify_situation: situation code -> label / severity / color.
"""

from .chart import ChartData, ChartPoint, ChartSeries, build_chart, build_chart_from_records
from .detail import build_detail_table, summarize_latest_period
from .situations import classify_situation

__all__ = [
    "ChartData",
    "ChartPoint",
    "ChartSeries",
    "build_chart",
    "build_chart_from_records",
    "build_detail_table",
    "summarize_latest_period",
    "classify_situation",
]
