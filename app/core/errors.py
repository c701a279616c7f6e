# app/core/errors.py


class LedgerError(Exception):
    """Base de los errores del motor de consistencia del ledger."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(LedgerError):
    """Entrada mal formada; se rechaza antes de tocar el store."""

    status_code = 400


class ReferenceNotFound(LedgerError):
    """Un budget_id o goal_id explícito no existe para el usuario."""

    status_code = 404


class BudgetLimitExceeded(LedgerError):
    """El gasto supera lo que queda del presupuesto de la categoría."""

    status_code = 409


class StoreUnavailable(LedgerError):
    """El store no confirmó el batch atómico; nada quedó aplicado."""

    status_code = 503
