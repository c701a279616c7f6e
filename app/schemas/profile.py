from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from decimal import Decimal

from app.models.enums import SalaryFrequency

class ProfileCreate(BaseModel):
    initial_net_worth: Decimal = Decimal("0")
    monthly_income: Decimal = Decimal("0")
    salary_date: Optional[int] = Field(default=None, ge=1, le=31)
    salary_frequency: Optional[SalaryFrequency] = None
    currency: Optional[str] = None

class ProfileUpdate(BaseModel):
    # total_net_worth no se edita: solo lo mueve el ledger
    monthly_income: Optional[Decimal] = None
    salary_date: Optional[int] = Field(default=None, ge=1, le=31)
    salary_frequency: Optional[SalaryFrequency] = None
    currency: Optional[str] = None

class ProfileRead(BaseModel):
    user_id: str
    total_net_worth: Decimal
    initial_net_worth: Decimal
    monthly_income: Decimal
    salary_date: Optional[int] = None
    salary_frequency: Optional[SalaryFrequency] = None
    currency: str
    onboarding_completed: bool

    model_config = ConfigDict(from_attributes=True)
