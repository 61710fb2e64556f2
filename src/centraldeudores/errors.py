# src/centraldeudores/errors.py
"""
Error taxonomy for centraldeudores.

Two families, raised at different points of a lookup:

- ValidationError: the identifier typed by the user is unusable. Detected
  locally, before any network call; the identifier is never sent upstream.
- DebtorLookupError: the registry call failed or returned something that is
  not a debtor history. Detected after the call.

Both carry an enum `kind` so callers can branch without parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

import msgspec


class ValidationErrorKind(Enum):
    WRONG_LENGTH = "wrong_length"
    BAD_CHECK_DIGIT = "bad_check_digit"


class LookupErrorKind(Enum):
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"
    OFFLINE = "offline"
    UNEXPECTED_SHAPE = "unexpected_shape"
    FAILED = "failed"


_VALIDATION_MESSAGES = {
    ValidationErrorKind.WRONG_LENGTH: "The identifier must have exactly 11 digits.",
    ValidationErrorKind.BAD_CHECK_DIGIT: "The identifier check digit is not valid.",
}

_LOOKUP_MESSAGES = {
    LookupErrorKind.NOT_FOUND: "No debt records were found for this identifier.",
    LookupErrorKind.BAD_REQUEST: "The registry rejected the identifier as invalid.",
    LookupErrorKind.RATE_LIMITED: "Too many requests. Please wait a moment and try again.",
    LookupErrorKind.SERVER_ERROR: "The registry service is currently unavailable.",
    LookupErrorKind.TIMEOUT: "The registry did not answer in time.",
    LookupErrorKind.OFFLINE: "No network connection could be established.",
    LookupErrorKind.UNEXPECTED_SHAPE: "The registry answered with data in an unexpected format.",
    LookupErrorKind.FAILED: "The lookup failed.",
}


class ValidationError(ValueError):
    """Raised when an identifier fails local validation."""

    def __init__(self, kind: ValidationErrorKind, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message or _VALIDATION_MESSAGES[kind])

    @property
    def user_message(self) -> str:
        return _VALIDATION_MESSAGES[self.kind]


class DebtorLookupError(Exception):
    """
    Raised when the upstream registry lookup fails.

    Attributes
    ----------
    kind:
        LookupErrorKind classifying the failure.
    status:
        HTTP status code when the failure came from an HTTP response, else None.
    upstream_messages:
        The registry's own `errorMessages`, when its error body could be decoded.
    """

    def __init__(
        self,
        kind: LookupErrorKind,
        message: Optional[str] = None,
        status: Optional[int] = None,
        upstream_messages: Optional[List[str]] = None,
    ):
        self.kind = kind
        self.status = status
        self.upstream_messages = list(upstream_messages or [])
        super().__init__(message or _LOOKUP_MESSAGES[kind])

    @property
    def user_message(self) -> str:
        return _LOOKUP_MESSAGES[self.kind]


def classify_http_status(status: int) -> LookupErrorKind:
    """Map an HTTP error status to a LookupErrorKind."""
    if status == 404:
        return LookupErrorKind.NOT_FOUND
    if status == 400:
        return LookupErrorKind.BAD_REQUEST
    if status == 429:
        return LookupErrorKind.RATE_LIMITED
    if status >= 500:
        return LookupErrorKind.SERVER_ERROR
    return LookupErrorKind.FAILED


class _ErrorBody(msgspec.Struct):
    status: Optional[int] = None
    errorMessages: List[str] = []


def decode_error_messages(content: bytes) -> List[str]:
    """
    Extract the registry's `errorMessages` from an error response body.

    Best effort: an empty or undecodable body yields an empty list.
    """
    if not content:
        return []
    try:
        return list(msgspec.json.decode(content, type=_ErrorBody).errorMessages)
    except (msgspec.DecodeError, msgspec.ValidationError):
        return []
