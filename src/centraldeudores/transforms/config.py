# src/centraldeudores/transforms/config.py
"""
Global configuration for centraldeudores.

This module defines *policy-level* constants used across identifier
validation, series building and chart assembly.

These values are centralized to keep the rules explicit and auditable.

This module MUST NOT contain any computation logic.
"""

from __future__ import annotations


# =============================================================================
# Identifier (CUIT / CUIL)
# =============================================================================

IDENTIFIER_LENGTH = 11

# Weights applied left to right over the first ten digits
CHECK_DIGIT_WEIGHTS = (5, 4, 3, 2, 7, 6, 5, 4, 3, 2)

# Display separators go after these digit counts: AA-BBBBBBBB-C
IDENTIFIER_PREFIX_DIGITS = 2
IDENTIFIER_BODY_END_DIGITS = 10


# =============================================================================
# Periods
# =============================================================================

# YYYYMM token shape
PERIOD_TOKEN_LENGTH = 6
PERIOD_MIN_YEAR = 1900
PERIOD_MAX_YEAR = 2999


# =============================================================================
# Record frame schema
# =============================================================================

RECORD_COLUMNS = ["period", "entity", "situation", "amount", "under_review", "in_litigation"]


# =============================================================================
# Situations and aggregation
# =============================================================================

# Situation 0 means "no active debt" and is a gap marker
NO_DEBT_SITUATION = 0

# A total over fewer active entities than this is suppressed
MIN_ACTIVE_ENTITIES_FOR_TOTAL = 2

TOTAL_SERIES_NAME = "TOTAL"


# =============================================================================
# Colors
# =============================================================================

# Situation colors, ordered by severity 0 -> 6
SITUATION_COLORS = {
    0: "#9e9e9e",
    1: "#4caf50",
    2: "#cddc39",
    3: "#ff9800",
    4: "#f44336",
    5: "#b71c1c",
    6: "#b71c1c",
}
UNKNOWN_SITUATION_COLOR = "#757575"

# Reserved for the total series; never handed out to an entity
TOTAL_SERIES_COLOR = "#000000"

ENTITY_PALETTE = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#17becf",
    "#bcbd22",
    "#7f7f7f",
)

# Saturation / lightness used for hashed overflow colors
OVERFLOW_SATURATION = 0.65
OVERFLOW_LIGHTNESS = 0.45

