from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal
import datetime as dt

from app.schemas.budget import AllocationRead
from app.schemas.goal import SavingsGoalRead
from app.schemas.stats import MonthlyStatsRead

class NetWorthPoint(BaseModel):
    date: dt.date
    value: Decimal

class EmergencyFundRead(BaseModel):
    goal: SavingsGoalRead
    progress: float

class DashboardRead(BaseModel):
    month: str
    stats: MonthlyStatsRead
    total_net_worth: Decimal
    monthly_income: Decimal
    allocation: List[AllocationRead]
    emergency_fund: Optional[EmergencyFundRead] = None
    recurring_generated: int = 0
