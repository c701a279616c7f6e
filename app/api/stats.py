from typing import List

from fastapi import APIRouter, Depends, Path
from sqlmodel import Session

from app.core.security import get_current_user
from app.database import get_session
from app.schemas.stats import MonthlyStatsRead
from app.services import queries

router = APIRouter(prefix="/stats", tags=["stats"])

@router.get("", response_model=List[MonthlyStatsRead])
@router.get("/", response_model=List[MonthlyStatsRead])
def list_stats(
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return queries.list_month_stats(session, user_id)

@router.get("/{month}", response_model=MonthlyStatsRead)
def get_stats(
    month: str = Path(..., pattern=r"^\d{4}-\d{2}$"),
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return queries.get_month_stats(session, user_id, month)
