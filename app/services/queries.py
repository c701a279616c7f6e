# app/services/queries.py

from typing import List, Optional

from sqlmodel import Session, select

from app.core.config import NET_WORTH_WINDOW
from app.models.monthly_stats import MonthlyStats
from app.models.profile import FinancialProfile
from app.models.recurring_template import RecurringTemplate
from app.models.transaction import Transaction
from app.utils.date_helpers import month_bounds


def list_transactions(
    session: Session,
    user_id: str,
    month: Optional[str] = None,
    limit: Optional[int] = NET_WORTH_WINDOW,
) -> List[Transaction]:
    """Transacciones del usuario, más recientes primero."""
    query = select(Transaction).where(Transaction.user_id == user_id)
    if month:
        first, last = month_bounds(month)
        query = query.where(Transaction.date >= first, Transaction.date <= last)
    query = query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
    if limit:
        query = query.limit(limit)
    return session.exec(query).all()


def get_month_stats(session: Session, user_id: str, month: str) -> MonthlyStats:
    """Estadísticas del mes; si el mes no tiene movimientos, un registro en cero (sin persistir)."""
    stats = session.exec(
        select(MonthlyStats).where(MonthlyStats.user_id == user_id, MonthlyStats.month == month)
    ).first()
    return stats or MonthlyStats(user_id=user_id, month=month)


def list_month_stats(session: Session, user_id: str) -> List[MonthlyStats]:
    return session.exec(
        select(MonthlyStats).where(MonthlyStats.user_id == user_id).order_by(MonthlyStats.month.desc())
    ).all()


def get_profile(session: Session, user_id: str) -> Optional[FinancialProfile]:
    return session.get(FinancialProfile, user_id)


def list_templates(session: Session, user_id: str, only_active: bool = False) -> List[RecurringTemplate]:
    query = select(RecurringTemplate).where(RecurringTemplate.user_id == user_id)
    if only_active:
        query = query.where(RecurringTemplate.active == True)  # noqa: E712
    return session.exec(query.order_by(RecurringTemplate.next_occurrence)).all()
