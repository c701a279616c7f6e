# app/models/profile.py

from sqlmodel import SQLModel, Field
from typing import Optional
from decimal import Decimal

from app.core.config import DEFAULT_CURRENCY
from app.models.enums import SalaryFrequency


class FinancialProfile(SQLModel, table=True):
    __tablename__ = "financial_profile"

    user_id: str = Field(primary_key=True)
    # Saldo vivo: solo se mueve con deltas relativos desde el ledger
    total_net_worth: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    # Foto al momento del onboarding, no se vuelve a tocar
    initial_net_worth: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    monthly_income: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    salary_date: Optional[int] = None  # día del mes (1-31)
    salary_frequency: Optional[SalaryFrequency] = None
    currency: str = Field(default=DEFAULT_CURRENCY)
    onboarding_completed: bool = Field(default=False)
