import datetime as dt
from decimal import Decimal
from typing import List, Optional

from sqlmodel import Session, select

from app.core.errors import ReferenceNotFound
from app.models.enums import GoalType
from app.models.savings_goal import SavingsGoal
from app.utils.date_helpers import months_until


def get_goal(session: Session, user_id: str, goal_id: str) -> SavingsGoal:
    goal = session.exec(
        select(SavingsGoal).where(SavingsGoal.id == goal_id, SavingsGoal.user_id == user_id)
    ).first()
    if not goal:
        raise ReferenceNotFound(f"Meta {goal_id} no encontrada")
    return goal


def list_goals(session: Session, user_id: str) -> List[SavingsGoal]:
    return session.exec(
        select(SavingsGoal).where(SavingsGoal.user_id == user_id).order_by(SavingsGoal.name)
    ).all()


def compute_monthly_contribution(
    target_amount: Decimal,
    current_amount: Decimal,
    due_date: Optional[dt.date],
    today: Optional[dt.date] = None,
) -> Decimal:
    """Lo que falta repartido en los meses hasta la fecha límite; 0 si no aplica."""
    if due_date is None:
        return Decimal("0")
    months = months_until(today or dt.date.today(), due_date)
    remaining = target_amount - current_amount
    if months <= 0 or remaining <= 0:
        return Decimal("0")
    return (remaining / months).quantize(Decimal("0.01"))


def find_emergency_fund(goals: List[SavingsGoal]) -> Optional[SavingsGoal]:
    for goal in goals:
        if goal.type == GoalType.emergency:
            return goal
    # Metas viejas sin tipo: se reconocen por el nombre
    for goal in goals:
        if "emergency" in goal.name.lower():
            return goal
    return None


def goal_progress(goal: SavingsGoal) -> float:
    if goal.target_amount <= 0:
        return 0.0
    return round(float(goal.current_amount / goal.target_amount * 100), 2)
