# app/models/recurring_template.py

from sqlmodel import SQLModel, Field
from typing import Optional
from decimal import Decimal
from datetime import date

from app.models.enums import Frequency, SpendingType, TransactionType
from app.models.transaction import new_id


class RecurringTemplate(SQLModel, table=True):
    __tablename__ = "recurring_template"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    amount: Decimal = Field(max_digits=14, decimal_places=2)
    category: str
    description: str = ""
    type: TransactionType
    frequency: Frequency = Field(default=Frequency.monthly)
    next_occurrence: date = Field(index=True)
    needs_vs_wants: Optional[SpendingType] = None
    active: bool = Field(default=True)
