from decimal import Decimal
from typing import Dict, List, Optional

from sqlmodel import Session, select

from app.core.errors import ReferenceNotFound
from app.models.budget_category import BudgetCategory
from app.models.enums import SpendingType

# Reparto 50/30/20 del ingreso mensual declarado
ALLOCATION_SHARES: Dict[SpendingType, Decimal] = {
    SpendingType.need: Decimal("0.50"),
    SpendingType.want: Decimal("0.30"),
    SpendingType.savings: Decimal("0.20"),
}


def get_budget(session: Session, user_id: str, budget_id: str) -> BudgetCategory:
    budget = session.exec(
        select(BudgetCategory).where(
            BudgetCategory.id == budget_id,
            BudgetCategory.user_id == user_id,
        )
    ).first()
    if not budget:
        raise ReferenceNotFound(f"Presupuesto {budget_id} no encontrado")
    return budget


def find_budget_by_name(session: Session, user_id: str, name: str, month: str) -> Optional[BudgetCategory]:
    return session.exec(
        select(BudgetCategory).where(
            BudgetCategory.user_id == user_id,
            BudgetCategory.month == month,
            BudgetCategory.name == name,
        )
    ).first()


def resolve_budget(
    session: Session,
    user_id: str,
    *,
    month: str,
    category: str,
    budget_id: Optional[str] = None,
) -> Optional[BudgetCategory]:
    """
    Primero por id (resiste renombres); si no viene id, por nombre exacto en el mes.
    Un id explícito que no existe es error; no encontrar nombre no lo es.
    """
    if budget_id is not None:
        return get_budget(session, user_id, budget_id)
    if not category:
        return None
    return find_budget_by_name(session, user_id, category, month)


def list_budgets(session: Session, user_id: str, month: str) -> List[BudgetCategory]:
    return session.exec(
        select(BudgetCategory)
        .where(BudgetCategory.user_id == user_id, BudgetCategory.month == month)
        .order_by(BudgetCategory.name)
    ).all()


def allocation_summary(budgets: List[BudgetCategory], monthly_income: Decimal) -> List[dict]:
    summary = []
    for spending_type, share in ALLOCATION_SHARES.items():
        typed = [b for b in budgets if b.type == spending_type]
        planned = sum((b.planned_amount for b in typed), Decimal("0"))
        spent = sum((b.spent_amount for b in typed), Decimal("0"))
        percent_used = round(float(spent / planned * 100), 2) if planned > 0 else 0.0
        summary.append({
            "type": spending_type,
            "share": share,
            "target_amount": (monthly_income * share).quantize(Decimal("0.01")),
            "planned_amount": planned,
            "spent_amount": spent,
            "percent_used": percent_used,
        })
    return summary
