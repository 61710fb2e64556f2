# src/centraldeudores/sample_data.py
"""
Sample registry response for local use without network access.

Same structure as the real historical-debts payload: four monthly periods
(newest first, as the registry sends them) and three banks, some of them
reporting situation 0 ("no debt") in some periods.
"""

from __future__ import annotations

from centraldeudores.extract.payload import DebtorHistory, history_from_builtins


SAMPLE_IDENTIFIER = "20123456786"


def _entity(name: str, situation: int, amount: float) -> dict:
    return {
        "entidad": name,
        "situacion": situation,
        "monto": amount,
        "enRevision": False,
        "procesoJud": False,
    }


SAMPLE_RESPONSE = {
    "status": 200,
    "results": {
        "identificacion": int(SAMPLE_IDENTIFIER),
        "denominacion": "EMPRESA DE EJEMPLO S.A.",
        "periodos": [
            {
                "periodo": "202506",
                "entidades": [
                    _entity("BANCO SANTANDER ARGENTINA S.A.", 1, 2000.0),
                    _entity("BANCO GALICIA", 0, 0.0),
                    _entity("BBVA", 0, 0.0),
                ],
            },
            {
                "periodo": "202505",
                "entidades": [
                    _entity("BANCO SANTANDER ARGENTINA S.A.", 1, 866.0),
                    _entity("BANCO GALICIA", 1, 1500.0),
                    _entity("BBVA", 0, 0.0),
                ],
            },
            {
                "periodo": "202504",
                "entidades": [
                    _entity("BANCO SANTANDER ARGENTINA S.A.", 1, 1202.0),
                    _entity("BANCO GALICIA", 1, 1300.0),
                    _entity("BBVA", 1, 400.0),
                ],
            },
            {
                "periodo": "202503",
                "entidades": [
                    _entity("BANCO SANTANDER ARGENTINA S.A.", 1, 1567.0),
                    _entity("BANCO GALICIA", 0, 0.0),
                    _entity("BBVA", 1, 300.0),
                ],
            },
        ],
    },
}


def sample_history() -> DebtorHistory:
    """Decoded SAMPLE_RESPONSE."""
    return history_from_builtins(SAMPLE_RESPONSE)
