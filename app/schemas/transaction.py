from pydantic import BaseModel, ConfigDict
from typing import Optional
from decimal import Decimal
import datetime as dt

from app.models.enums import Frequency, SpendingType, TransactionType

class TransactionCreate(BaseModel):
    amount: Decimal
    type: TransactionType
    category: str = ""
    date: Optional[dt.date] = None
    description: str = ""
    is_recurring: bool = False
    needs_vs_wants: Optional[SpendingType] = None
    goal_id: Optional[str] = None
    budget_id: Optional[str] = None
    # Solo en la API: si viene con is_recurring, también se crea la plantilla
    frequency: Optional[Frequency] = None

class TransactionRead(BaseModel):
    id: str
    amount: Decimal
    type: TransactionType
    category: str
    date: dt.date
    description: str
    is_recurring: bool
    needs_vs_wants: Optional[SpendingType] = None
    goal_id: Optional[str] = None
    budget_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class SalaryCreate(BaseModel):
    # Puede ser negativo: corrección/deducción de salario
    amount: Decimal
    date: Optional[dt.date] = None

class GoalContributionCreate(BaseModel):
    amount: Decimal
    date: Optional[dt.date] = None
    description: Optional[str] = None
