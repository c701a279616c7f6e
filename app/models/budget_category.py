# app/models/budget_category.py

from sqlmodel import SQLModel, Field
from decimal import Decimal

from app.models.enums import SpendingType
from app.models.transaction import new_id


class BudgetCategory(SQLModel, table=True):
    __tablename__ = "budget_category"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    name: str
    type: SpendingType = Field(default=SpendingType.need)
    planned_amount: Decimal = Field(max_digits=14, decimal_places=2)  # límite
    spent_amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    month: str = Field(index=True)  # YYYY-MM

    @property
    def remaining(self) -> Decimal:
        return self.planned_amount - self.spent_amount
