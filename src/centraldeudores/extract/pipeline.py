# src/centraldeudores/extract/pipeline.py
"""
End-to-end lookup pipeline.

High-level steps:
1) Validate the identifier locally (never send an invalid one upstream)
2) Download the debtor history (one request, no retries)
3) Decode it, failing with UNEXPECTED_SHAPE on a malformed payload
4) Build the chart and optionally run the integrity checks

A failed lookup raises before step 4, so the transforms never see it.
"""

from __future__ import annotations

from typing import Optional

from centraldeudores.extract.lookup import read_debtor_history
from centraldeudores.fetching import URLFetcher
from centraldeudores.identifier import validate_identifier
from centraldeudores.logging_utils import get_logger
from centraldeudores.transforms.chart import ChartData, build_chart
from centraldeudores.validation.checks import check_chart_data


def lookup_debtor_chart(
    logger,
    raw_identifier: str,
    fetcher: Optional[URLFetcher] = None,
    check: bool = True,
) -> ChartData:
    """
    Validate `raw_identifier`, fetch its debt history and build the chart.

    Parameters
    ----------
    logger:
        Logger instance; None uses get_logger().
    raw_identifier:
        Free-form user input; separators are ignored.
    fetcher:
        URLFetcher to use. A default one is created if None.
    check:
        Run check_chart_data on the result.

    Raises
    ------
    ValidationError
        The identifier is malformed; no request is made.
    DebtorLookupError
        The request failed or the payload had an unexpected shape.
    """
    if logger is None:
        logger = get_logger()

    identifier = validate_identifier(raw_identifier)

    if fetcher is None:
        fetcher = URLFetcher(logger)

    history = read_debtor_history(identifier, fetcher, logger)
    chart = build_chart(logger, history)

    if check:
        check_chart_data(logger, chart)

    return chart
