# src/centraldeudores/extract/payload.py
"""
Registry payload decoding.

The historical-debts endpoint answers with:

    {"status": 200,
     "results": {"identificacion": 20123456786,
                 "denominacion": "...",
                 "periodos": [{"periodo": "202505",
                               "entidades": [{"entidad": "...",
                                              "situacion": 1,
                                              "monto": 866.0,
                                              "enRevision": false,
                                              "procesoJud": false}]}]}}

msgspec structs decode it straight into typed, immutable records with Python
attribute names. `DebtorHistory.to_dataframe()` flattens it into the record
frame consumed by the transforms:

Columns: ["period", "entity", "situation", "amount", "under_review", "in_litigation"]
Dtypes:
- period: object (raw YYYYMM token, validated later)
- entity: object
- situation: int64
- amount: float64
- under_review / in_litigation: bool
"""

from __future__ import annotations

from typing import Annotated, Any, List, Optional, Union

import msgspec
import numpy as np
import pandas as pd

from centraldeudores.errors import DebtorLookupError, LookupErrorKind
from centraldeudores.transforms import config


RECORD_COLUMNS = config.RECORD_COLUMNS

# Debt amounts are never negative; anything else is an unexpected payload
Amount = Annotated[float, msgspec.Meta(ge=0)]


class EntityRecord(
    msgspec.Struct,
    frozen=True,
    rename={
        "entity_name": "entidad",
        "situation": "situacion",
        "amount": "monto",
        "under_review": "enRevision",
        "in_litigation": "procesoJud",
    },
):
    entity_name: str
    situation: int
    amount: Optional[Amount] = None
    under_review: bool = False
    in_litigation: bool = False


class PeriodRecord(msgspec.Struct, frozen=True, rename={"period": "periodo", "entities": "entidades"}):
    period: Union[int, str]
    entities: List[EntityRecord] = []


class DebtorHistory(
    msgspec.Struct,
    frozen=True,
    rename={"identification": "identificacion", "display_name": "denominacion", "periods": "periodos"},
):
    identification: Union[int, str]
    periods: List[PeriodRecord]
    display_name: str = ""

    @property
    def identifier(self) -> str:
        """Identification as an 11-digit string (leading zeros restored)."""
        return str(self.identification).strip().zfill(config.IDENTIFIER_LENGTH)

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            (
                str(p.period).strip(),
                e.entity_name,
                e.situation,
                0.0 if e.amount is None else e.amount,
                e.under_review,
                e.in_litigation,
            )
            for p in self.periods
            for e in p.entities
        ]

        df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
        df["period"] = df["period"].astype(object)
        df["entity"] = df["entity"].astype(object)
        df["situation"] = df["situation"].astype(np.int64)
        df["amount"] = df["amount"].astype(np.float64)
        df["under_review"] = df["under_review"].astype(bool)
        df["in_litigation"] = df["in_litigation"].astype(bool)
        return df


class RegistryResponse(msgspec.Struct, frozen=True):
    results: DebtorHistory
    status: Optional[int] = None


_decoder = msgspec.json.Decoder(RegistryResponse)


def decode_history(content: bytes) -> DebtorHistory:
    """
    Decode a registry response body into a DebtorHistory.

    Raises
    ------
    DebtorLookupError
        UNEXPECTED_SHAPE if the body is not JSON or lacks `results` / `periodos`
        (or any field has the wrong type, or an amount is negative).
    """
    if not content:
        raise DebtorLookupError(LookupErrorKind.UNEXPECTED_SHAPE, "Empty response body")
    try:
        return _decoder.decode(content).results
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise DebtorLookupError(LookupErrorKind.UNEXPECTED_SHAPE, str(e)) from e


def history_from_builtins(obj: Any) -> DebtorHistory:
    """Same as decode_history, for an already-parsed response object (dict)."""
    try:
        return msgspec.convert(obj, RegistryResponse).results
    except msgspec.ValidationError as e:
        raise DebtorLookupError(LookupErrorKind.UNEXPECTED_SHAPE, str(e)) from e
