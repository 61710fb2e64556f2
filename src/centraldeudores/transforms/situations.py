# src/centraldeudores/transforms/situations.py
"""
Situation code classification.

The registry rates each (entity, period) debt with a situation code 0..6.
`classify_situation` is total: codes outside that range (or non-integers)
come back as "unknown" with a neutral color, since the upstream source does
not guarantee the bounds.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

import msgspec

from centraldeudores.transforms import config


class Severity(Enum):
    NONE = "none"
    LOW = "low"
    LOW_MEDIUM = "low-medium"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"


class SituationInfo(msgspec.Struct, frozen=True):
    code: int
    label: str
    severity: Severity
    color: str


_SITUATIONS: Dict[int, SituationInfo] = {
    code: SituationInfo(code=code, label=label, severity=severity, color=config.SITUATION_COLORS[code])
    for code, label, severity in (
        (0, "no debt", Severity.NONE),
        (1, "normal", Severity.LOW),
        (2, "under watch", Severity.LOW_MEDIUM),
        (3, "troubled", Severity.MEDIUM),
        (4, "prejudicial-unrecoverable", Severity.HIGH),
        (5, "technically unrecoverable", Severity.HIGH),
        (6, "technically unrecoverable (alt.)", Severity.HIGH),
    )
}


def _situation_key(code: Any) -> Optional[int]:
    if code is None or isinstance(code, bool):
        return None
    if isinstance(code, str):
        code = code.strip()
        return int(code) if code.isdigit() else None
    try:
        value = float(code)
    except (TypeError, ValueError):
        return None
    # NaN and 1.5 are not situation codes
    return int(value) if value.is_integer() else None


def classify_situation(code: Any) -> SituationInfo:
    """Return label, severity tier and color for a situation code."""
    key = _situation_key(code)
    info = _SITUATIONS.get(key)
    if info is not None:
        return info

    return SituationInfo(
        code=key if key is not None else -1,
        label="unknown",
        severity=Severity.UNKNOWN,
        color=config.UNKNOWN_SITUATION_COLOR,
    )


def situation_label(code: Any) -> str:
    return classify_situation(code).label


def situation_color(code: Any) -> str:
    return classify_situation(code).color
