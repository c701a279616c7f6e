import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from app.core.security import get_current_user
from app.database import get_session
from app.models.budget_category import BudgetCategory
from app.schemas.budget import AllocationRead, BudgetCategoryCreate, BudgetCategoryRead
from app.services import queries
from app.services.snapshots import Collection, snapshot_hub
from app.utils.budget_helpers import allocation_summary, find_budget_by_name, list_budgets
from app.utils.date_helpers import month_key

router = APIRouter(prefix="/budgets", tags=["budgets"])

MONTH_PATTERN = r"^\d{4}-\d{2}$"

@router.post("", response_model=BudgetCategoryRead)
@router.post("/", response_model=BudgetCategoryRead)
def create_budget(
    budget_data: BudgetCategoryCreate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    if budget_data.planned_amount <= 0:
        raise HTTPException(status_code=400, detail="El monto planeado debe ser mayor a cero.")

    month = budget_data.month or month_key(dt.date.today())
    name = budget_data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="El presupuesto necesita un nombre.")
    if find_budget_by_name(session, user_id, name, month):
        raise HTTPException(status_code=400, detail="Ya existe un presupuesto con ese nombre en el mes.")

    budget = BudgetCategory(
        user_id=user_id,
        name=name,
        type=budget_data.type,
        planned_amount=budget_data.planned_amount,
        month=month,
    )
    session.add(budget)
    session.commit()
    session.refresh(budget)

    snapshot_hub.notify(session, user_id, [Collection.budgets])
    return budget

@router.get("", response_model=List[BudgetCategoryRead])
@router.get("/", response_model=List[BudgetCategoryRead])
def get_budgets(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return list_budgets(session, user_id, month or month_key(dt.date.today()))

@router.get("/allocation", response_model=List[AllocationRead])
def get_allocation(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    """Plan 50/30/20: lo planeado y gastado por tipo frente al ingreso mensual declarado."""
    budgets = list_budgets(session, user_id, month or month_key(dt.date.today()))
    profile = queries.get_profile(session, user_id)
    monthly_income = profile.monthly_income if profile else 0
    return allocation_summary(budgets, monthly_income)
