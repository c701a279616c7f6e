from pydantic import BaseModel, ConfigDict
from typing import Optional
from decimal import Decimal
from datetime import date

from app.models.enums import GoalType

class SavingsGoalCreate(BaseModel):
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    due_date: Optional[date] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    type: GoalType = GoalType.goal

class SavingsGoalRead(BaseModel):
    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    monthly_contribution: Decimal
    due_date: Optional[date] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    type: GoalType

    model_config = ConfigDict(from_attributes=True)
