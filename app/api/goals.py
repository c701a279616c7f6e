from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from app.core.security import get_current_user
from app.database import get_session
from app.models.savings_goal import SavingsGoal
from app.schemas.dashboard import EmergencyFundRead
from app.schemas.goal import SavingsGoalCreate, SavingsGoalRead
from app.schemas.transaction import GoalContributionCreate, TransactionRead
from app.services.aggregates import contribute_to_goal
from app.services.snapshots import Collection, snapshot_hub
from app.utils.goal_helpers import compute_monthly_contribution, find_emergency_fund, goal_progress, list_goals

router = APIRouter(prefix="/goals", tags=["goals"])

@router.post("", response_model=SavingsGoalRead)
@router.post("/", response_model=SavingsGoalRead)
def create_goal(
    goal_data: SavingsGoalCreate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    if goal_data.target_amount <= 0:
        raise HTTPException(status_code=400, detail="La meta debe ser mayor a cero.")
    if goal_data.current_amount < 0:
        raise HTTPException(status_code=400, detail="El monto actual no puede ser negativo.")

    goal = SavingsGoal(
        **goal_data.model_dump(),
        user_id=user_id,
        monthly_contribution=compute_monthly_contribution(
            goal_data.target_amount, goal_data.current_amount, goal_data.due_date
        ),
    )
    session.add(goal)
    session.commit()
    session.refresh(goal)

    snapshot_hub.notify(session, user_id, [Collection.goals])
    return goal

@router.get("", response_model=List[SavingsGoalRead])
@router.get("/", response_model=List[SavingsGoalRead])
def get_goals(
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return list_goals(session, user_id)

@router.get("/emergency-fund", response_model=Optional[EmergencyFundRead])
def get_emergency_fund(
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    goal = find_emergency_fund(list_goals(session, user_id))
    if not goal:
        return None
    return EmergencyFundRead(goal=SavingsGoalRead.model_validate(goal), progress=goal_progress(goal))

@router.post("/{goal_id}/contributions", response_model=TransactionRead)
def add_contribution(
    goal_id: str,
    data: GoalContributionCreate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return contribute_to_goal(session, user_id, goal_id, data.amount, on=data.date, description=data.description)
