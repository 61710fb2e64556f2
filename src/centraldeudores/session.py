# src/centraldeudores/session.py
"""
Lookup session state.

The interactive surface (input box, search button, chart panel) owns one
LookupState record. Every step takes a state and returns a new one; nothing
here keeps ambient state between calls.

Flow for one user action:

    state = edit_input(state, text)          # on every keystroke / paste
    state, identifier = begin_search(state)  # on click / Enter
    ... one registry call for `identifier` ...
    state = finish_search(state, chart=...)  # or error=...

While `busy` is set, begin_search is a no-op, so repeated clicks or Enter
presses during a request do not start a second one.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

from centraldeudores.errors import DebtorLookupError, ValidationError
from centraldeudores.extract.pipeline import lookup_debtor_chart
from centraldeudores.fetching import URLFetcher
from centraldeudores.identifier import format_identifier, validate_identifier
from centraldeudores.logging_utils import get_logger
from centraldeudores.transforms.chart import ChartData


@dataclass(frozen=True)
class LookupState:
    input_text: str = ""
    busy: bool = False
    chart: Optional[ChartData] = None
    error: Optional[str] = None


def edit_input(state: LookupState, text: str) -> LookupState:
    """Store the display form of the new input; clears a previous error."""
    return dataclasses.replace(state, input_text=format_identifier(text), error=None)


def begin_search(state: LookupState) -> Tuple[LookupState, Optional[str]]:
    """
    Start a search for the current input.

    Returns the new state and the identifier to look up, or None when no
    request must be made (already busy, or the input failed validation).
    """
    if state.busy:
        return state, None

    try:
        identifier = validate_identifier(state.input_text)
    except ValidationError as e:
        return dataclasses.replace(state, error=e.user_message), None

    return dataclasses.replace(state, busy=True, error=None), identifier


def finish_search(
    state: LookupState,
    chart: Optional[ChartData] = None,
    error: Optional[str] = None,
) -> LookupState:
    """
    Complete the running search. The previous chart is replaced, never merged;
    on error it is cleared.
    """
    if error is not None:
        return dataclasses.replace(state, busy=False, chart=None, error=error)
    return dataclasses.replace(state, busy=False, chart=chart, error=None)


def search(logger, state: LookupState, fetcher: Optional[URLFetcher] = None) -> LookupState:
    """
    Run begin_search, the registry call and finish_search.

    Lookup failures end up in `error` as a user-facing message. With no
    logger, messages go to the "centraldeudores.session" logger.
    """
    if logger is None:
        logger = get_logger("session")

    state, identifier = begin_search(state)
    if identifier is None:
        return state

    try:
        chart = lookup_debtor_chart(logger, identifier, fetcher=fetcher)
    except DebtorLookupError as e:
        logger.warning(f"Lookup for {identifier} failed: {e.kind.value}")
        return finish_search(state, error=e.user_message)

    return finish_search(state, chart=chart)
