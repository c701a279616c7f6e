from pydantic import BaseModel, ConfigDict
from typing import Optional
from decimal import Decimal

from app.models.enums import SpendingType

class BudgetCategoryCreate(BaseModel):
    name: str
    type: SpendingType = SpendingType.need
    planned_amount: Decimal
    month: Optional[str] = None  # YYYY-MM, por defecto el mes actual

class BudgetCategoryRead(BaseModel):
    id: str
    name: str
    type: SpendingType
    planned_amount: Decimal
    spent_amount: Decimal
    month: str

    model_config = ConfigDict(from_attributes=True)

class AllocationRead(BaseModel):
    type: SpendingType
    share: Decimal
    target_amount: Decimal
    planned_amount: Decimal
    spent_amount: Decimal
    percent_used: float
