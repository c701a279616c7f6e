from pydantic import BaseModel, ConfigDict
from decimal import Decimal

class MonthlyStatsRead(BaseModel):
    month: str
    total_income: Decimal
    total_expenses: Decimal

    model_config = ConfigDict(from_attributes=True)
