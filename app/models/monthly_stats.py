# app/models/monthly_stats.py

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field
from typing import Optional
from decimal import Decimal


class MonthlyStats(SQLModel, table=True):
    __tablename__ = "monthly_stats"
    __table_args__ = (
        UniqueConstraint("user_id", "month", name="uq_monthly_stats_user_month"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    month: str  # YYYY-MM
    total_income: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    total_expenses: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
