# src/centraldeudores/extract/lookup.py
"""
Registry lookup for a single validated identifier.
"""

from __future__ import annotations

from centraldeudores.extract.payload import DebtorHistory, decode_history
from centraldeudores.fetching import URLFetcher


def history_url(identifier: str, base_url: str) -> str:
    """URL of the historical-debts resource for `identifier`."""
    return f"{base_url.rstrip('/')}/Deudas/Historicas/{identifier}"


def read_debtor_history(identifier: str, fetcher: URLFetcher, logger) -> DebtorHistory:
    """
    Download and decode the debt history of an already validated identifier.

    Raises
    ------
    DebtorLookupError
        Any fetch failure, or UNEXPECTED_SHAPE for a malformed payload.
    """
    url = history_url(identifier, fetcher.base_url)
    logger.info(f"Requesting debt history for {identifier}")

    content = fetcher.fetch(url)
    history = decode_history(content)

    logger.info(
        f"Received {len(history.periods)} periods for {history.display_name or history.identifier}"
    )
    return history
