from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from decimal import Decimal
import datetime as dt
from uuid import uuid4

from app.models.enums import SpendingType, TransactionType


def new_id() -> str:
    return uuid4().hex


class Transaction(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    amount: Decimal = Field(max_digits=14, decimal_places=2)  # siempre magnitud positiva
    type: TransactionType
    category: str
    date: dt.date = Field(index=True)
    description: str = ""
    is_recurring: bool = Field(default=False)
    needs_vs_wants: Optional[SpendingType] = None

    # Aportes a una meta de ahorro
    goal_id: Optional[str] = Field(default=None, index=True)
    # Presupuesto al que se cargó el gasto (se guarda el resuelto por nombre también)
    budget_id: Optional[str] = Field(default=None, index=True)

    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    @property
    def month(self) -> str:
        return self.date.strftime("%Y-%m")

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == TransactionType.income else -self.amount
