# src/centraldeudores/__init__.py
"""
centraldeudores

A Python package that looks up a CUIT/CUIL in the BCRA "Central de
Deudores" registry and turns its historical debt records into aligned,
chart-ready series.

Public API:
- get_logger
- validate_identifier / format_identifier / clean_identifier
- lookup_debtor_chart
- build_chart
- check_chart_data
- LookupState and the session steps
"""

from __future__ import annotations

__version__ = "0.1.0"

from .logging_utils import get_logger

from .errors import DebtorLookupError, LookupErrorKind, ValidationError, ValidationErrorKind
from .identifier import clean_identifier, format_identifier, is_valid_check_digit, validate_identifier

from .fetching import FetcherConfig, URLFetcher
from .extract.pipeline import lookup_debtor_chart

from .transforms.chart import ChartData, build_chart
from .validation.checks import check_chart_data

from .session import LookupState, begin_search, edit_input, finish_search, search

__all__ = [
    "get_logger",
    "DebtorLookupError",
    "LookupErrorKind",
    "ValidationError",
    "ValidationErrorKind",
    "clean_identifier",
    "format_identifier",
    "is_valid_check_digit",
    "validate_identifier",
    "FetcherConfig",
    "URLFetcher",
    "lookup_debtor_chart",
    "ChartData",
    "build_chart",
    "check_chart_data",
    "LookupState",
    "begin_search",
    "edit_input",
    "finish_search",
    "search",
]
