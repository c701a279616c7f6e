# app/api/dashboard.py

import datetime as dt
from typing import List, Literal

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.config import NET_WORTH_WINDOW
from app.core.security import get_current_user
from app.database import get_session
from app.schemas.dashboard import DashboardRead, EmergencyFundRead, NetWorthPoint
from app.schemas.goal import SavingsGoalRead
from app.schemas.stats import MonthlyStatsRead
from app.services import queries
from app.services.net_worth import RANGE_DAYS, reconstruct_net_worth_series
from app.services.recurring import run_recurring_catch_up
from app.utils.budget_helpers import allocation_summary, list_budgets
from app.utils.date_helpers import month_key
from app.utils.goal_helpers import find_emergency_fund, goal_progress, list_goals

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("", response_model=DashboardRead)
@router.get("/", response_model=DashboardRead)
def dashboard(
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    # Al cargar el dashboard se ponen al día las recurrentes
    generated = run_recurring_catch_up(session, user_id)

    month = month_key(dt.date.today())
    profile = queries.get_profile(session, user_id)
    monthly_income = profile.monthly_income if profile else 0

    emergency = find_emergency_fund(list_goals(session, user_id))

    return DashboardRead(
        month=month,
        stats=MonthlyStatsRead.model_validate(queries.get_month_stats(session, user_id, month)),
        total_net_worth=profile.total_net_worth if profile else 0,
        monthly_income=monthly_income,
        allocation=allocation_summary(list_budgets(session, user_id, month), monthly_income),
        emergency_fund=(
            EmergencyFundRead(goal=SavingsGoalRead.model_validate(emergency), progress=goal_progress(emergency))
            if emergency else None
        ),
        recurring_generated=generated,
    )

@router.get("/net-worth", response_model=List[NetWorthPoint])
def net_worth_history(
    range_: Literal["7d", "30d", "90d", "ALL"] = Query("30d", alias="range"),
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    profile = queries.get_profile(session, user_id)
    current = profile.total_net_worth if profile else 0
    transactions = queries.list_transactions(session, user_id, limit=NET_WORTH_WINDOW)
    return reconstruct_net_worth_series(current, transactions, RANGE_DAYS[range_])
