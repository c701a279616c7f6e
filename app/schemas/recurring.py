from pydantic import BaseModel, ConfigDict
from typing import Optional
from decimal import Decimal
from datetime import date

from app.models.enums import Frequency, SpendingType, TransactionType

class RecurringTemplateCreate(BaseModel):
    amount: Decimal
    category: str
    description: str = ""
    type: TransactionType
    frequency: Frequency = Frequency.monthly
    next_occurrence: date
    needs_vs_wants: Optional[SpendingType] = None

class RecurringTemplateRead(RecurringTemplateCreate):
    id: str
    active: bool

    model_config = ConfigDict(from_attributes=True)

class CatchUpResult(BaseModel):
    generated: int
