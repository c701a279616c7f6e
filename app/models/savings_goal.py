# app/models/savings_goal.py

from sqlmodel import SQLModel, Field
from typing import Optional
from decimal import Decimal
from datetime import date

from app.models.enums import GoalType
from app.models.transaction import new_id


class SavingsGoal(SQLModel, table=True):
    __tablename__ = "savings_goal"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    name: str
    target_amount: Decimal = Field(max_digits=14, decimal_places=2)
    current_amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    # Informativo: se calcula al crear la meta y no se mantiene vivo
    monthly_contribution: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    due_date: Optional[date] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    type: GoalType = Field(default=GoalType.goal)
