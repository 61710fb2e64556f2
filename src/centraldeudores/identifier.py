# src/centraldeudores/identifier.py
"""
CUIT / CUIL identifier handling.

An identifier is an 11-digit string whose last digit is a mod-11 check digit
over the first ten. Input arrives as free-form keystrokes or pasted text, so:

- clean_identifier keeps digits only and caps the result at 11 digits
  (longer input is truncated, never rejected)
- format_identifier renders the AA-BBBBBBBB-C display form
- validate_identifier is the gate in front of any registry call
"""

from __future__ import annotations

import re
from typing import Optional

from centraldeudores.errors import ValidationError, ValidationErrorKind
from centraldeudores.transforms import config


_NON_DIGITS = re.compile(r"[^0-9]")


def clean_identifier(text: Optional[str]) -> str:
    """Strip every non-digit character and truncate to 11 digits."""
    if not text:
        return ""
    return _NON_DIGITS.sub("", str(text))[: config.IDENTIFIER_LENGTH]


def format_identifier(text: Optional[str]) -> str:
    """
    Return the display form of an identifier.

    0-2 digits are returned as-is, 3-10 digits as "DD-REST" and a full
    identifier as "DD-DDDDDDDD-D". Formatting an already formatted value
    returns it unchanged.
    """
    digits = clean_identifier(text)
    head = config.IDENTIFIER_PREFIX_DIGITS
    body_end = config.IDENTIFIER_BODY_END_DIGITS

    if len(digits) <= head:
        return digits
    if len(digits) <= body_end:
        return f"{digits[:head]}-{digits[head:]}"
    return f"{digits[:head]}-{digits[head:body_end]}-{digits[body_end:]}"


def compute_check_digit(first_ten: str) -> int:
    """
    Compute the expected check digit for the first ten digits of an identifier.

    expected = 11 - (sum(d_i * w_i) mod 11), with 11 -> 0 and 10 -> 9.
    """
    if len(first_ten) != len(config.CHECK_DIGIT_WEIGHTS) or not first_ten.isdigit():
        raise ValueError(f"Expected 10 digits, got {first_ten!r}")

    total = sum(int(d) * w for d, w in zip(first_ten, config.CHECK_DIGIT_WEIGHTS))
    expected = 11 - total % 11
    if expected == 11:
        return 0
    if expected == 10:
        return 9
    return expected


def is_valid_check_digit(digits: Optional[str]) -> bool:
    """True iff `digits` is exactly 11 ASCII digits with a matching check digit."""
    if (
        not isinstance(digits, str)
        or len(digits) != config.IDENTIFIER_LENGTH
        or not digits.isascii()
        or not digits.isdigit()
    ):
        return False
    return compute_check_digit(digits[:-1]) == int(digits[-1])


def validate_identifier(raw: Optional[str]) -> str:
    """
    Validate free-form input and return the canonical 11-digit identifier.

    Raises
    ------
    ValidationError
        WRONG_LENGTH unless the cleaned input has exactly 11 digits,
        BAD_CHECK_DIGIT if the check digit does not match.
    """
    digits = clean_identifier(raw)
    if len(digits) != config.IDENTIFIER_LENGTH:
        raise ValidationError(ValidationErrorKind.WRONG_LENGTH)
    if not is_valid_check_digit(digits):
        raise ValidationError(ValidationErrorKind.BAD_CHECK_DIGIT)
    return digits
