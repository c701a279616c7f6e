# app/services/net_worth.py

"""
Reconstrucción de la serie diaria de patrimonio.

Parte del patrimonio cacheado actual y camina hacia atrás desde hoy restando el
cambio neto de cada día. Solo conoce las transacciones que recibe (la ventana
de las más recientes): los días fuera de esa ventana cuentan como cambio cero,
así que más allá de la ventana la serie queda plana. Es una limitación
conocida, no un error.
"""

import datetime as dt
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from app.core.errors import ValidationError
from app.models.enums import TransactionType
from app.schemas.dashboard import NetWorthPoint

RANGE_DAYS = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "ALL": 365,
}


def daily_changes(transactions: Iterable) -> Dict[dt.date, Decimal]:
    changes: Dict[dt.date, Decimal] = defaultdict(lambda: Decimal("0"))
    for tx in transactions:
        amount = Decimal(tx.amount)
        changes[tx.date] += amount if tx.type == TransactionType.income else -amount
    return dict(changes)


def reconstruct_net_worth_series(
    current_net_worth: Decimal,
    transactions: Iterable,
    range_days: int,
    today: Optional[dt.date] = None,
) -> List[NetWorthPoint]:
    if range_days <= 0:
        raise ValidationError("El rango debe ser de al menos un día.")

    today = today or dt.date.today()
    changes = daily_changes(transactions)

    points = []
    running_balance = Decimal(current_net_worth)
    for offset in range(range_days):
        day = today - dt.timedelta(days=offset)
        # saldo al cierre del día; luego se deshace lo del día para pasar al anterior
        points.append(NetWorthPoint(date=day, value=running_balance))
        running_balance -= changes.get(day, Decimal("0"))

    points.reverse()
    return points
