# app/services/aggregates.py

"""
Protocolo de escritura del ledger.

Cada operación que afecta el ledger (registrar, eliminar, generar recurrentes)
calcula los deltas de los cuatro agregados cacheados y los aplica junto con la
transacción en un solo `LedgerBatch`:

- MonthlyStats del mes (`total_income` / `total_expenses`)
- `spent_amount` del presupuesto resuelto (solo gastos)
- `current_amount` de la meta referenciada
- `total_net_worth` del perfil

O se ven los cinco efectos juntos o ninguno.
"""

import datetime as dt
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlmodel import Session, select

from app.core.errors import BudgetLimitExceeded, LedgerError, ValidationError
from app.models.budget_category import BudgetCategory
from app.models.enums import SpendingType, TransactionType
from app.models.monthly_stats import MonthlyStats
from app.models.profile import FinancialProfile
from app.models.savings_goal import SavingsGoal
from app.models.transaction import Transaction
from app.schemas.transaction import TransactionCreate
from app.services.snapshots import snapshot_hub
from app.utils.budget_helpers import resolve_budget
from app.utils.goal_helpers import get_goal
from app.utils.ledger_batch import LedgerBatch

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _validate(data: TransactionCreate) -> Decimal:
    try:
        amount = Decimal(data.amount)
        if not amount.is_finite() or amount <= 0:
            raise ValidationError("El monto debe ser mayor a cero.")
        if amount != amount.quantize(CENT):
            raise ValidationError("El monto no puede tener más de dos decimales.")
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("El monto no es un número válido.")
    if data.type not in (TransactionType.income, TransactionType.expense):
        raise ValidationError("El tipo debe ser income o expense.")
    if data.date is not None and not isinstance(data.date, dt.date):
        raise ValidationError("La fecha no es un día válido.")
    if data.type == TransactionType.expense and not data.category.strip() and not data.goal_id:
        raise ValidationError("Los gastos requieren una categoría.")
    if data.type == TransactionType.income and data.budget_id is not None:
        raise ValidationError("Un ingreso no se puede cargar a un presupuesto.")
    return amount


def stage_transaction(
    batch: LedgerBatch,
    session: Session,
    user_id: str,
    data: TransactionCreate,
    *,
    enforce_budget_limit: bool = False,
) -> Transaction:
    """
    Valida la transacción, resuelve sus referencias y deja en el batch el
    alta más los incrementos de los agregados. No escribe nada hasta `commit()`.
    """
    amount = _validate(data)
    day = data.date or dt.date.today()
    category = data.category.strip()
    if not category:
        category = "Income" if data.type == TransactionType.income else ""

    transaction = Transaction(
        user_id=user_id,
        amount=amount,
        type=data.type,
        category=category,
        date=day,
        description=data.description,
        is_recurring=data.is_recurring,
        needs_vs_wants=data.needs_vs_wants,
        goal_id=data.goal_id,
    )

    budget: Optional[BudgetCategory] = None
    if transaction.type == TransactionType.expense:
        budget = resolve_budget(
            session,
            user_id,
            month=transaction.month,
            category=category,
            budget_id=data.budget_id,
        )
        if budget is None:
            logger.debug("Gasto sin presupuesto para '%s' en %s", category, transaction.month)
        else:
            if enforce_budget_limit and amount > budget.remaining:
                raise BudgetLimitExceeded(
                    f"El monto ({amount}) supera lo que queda del presupuesto "
                    f"{budget.name} ({budget.remaining})."
                )
            transaction.budget_id = budget.id

    if transaction.goal_id is not None:
        get_goal(session, user_id, transaction.goal_id)

    batch.add(transaction)
    _stage_effects(batch, session, transaction, direction=1)
    return transaction


def _stage_effects(batch: LedgerBatch, session: Session, transaction: Transaction, *, direction: int) -> None:
    """
    direction=1 aplica la transacción, direction=-1 la revierte exactamente.
    La existencia del perfil se mira en cada llamada, no se guarda en la transacción.
    """
    user_id = transaction.user_id
    delta = transaction.amount * direction

    batch.ensure(MonthlyStats, user_id=user_id, month=transaction.month)
    if transaction.type == TransactionType.income:
        batch.increment(MonthlyStats, {"user_id": user_id, "month": transaction.month}, total_income=delta)
    else:
        batch.increment(MonthlyStats, {"user_id": user_id, "month": transaction.month}, total_expenses=delta)

    if transaction.type == TransactionType.expense and transaction.budget_id is not None:
        if direction > 0 or _exists(session, BudgetCategory, transaction.budget_id, user_id):
            batch.increment(
                BudgetCategory,
                {"id": transaction.budget_id, "user_id": user_id},
                spent_amount=delta,
            )
        else:
            logger.warning("Presupuesto %s ya no existe; se omite la reversa", transaction.budget_id)

    if transaction.goal_id is not None:
        if direction > 0 or _exists(session, SavingsGoal, transaction.goal_id, user_id):
            batch.increment(
                SavingsGoal,
                {"id": transaction.goal_id, "user_id": user_id},
                current_amount=delta,
            )
        else:
            logger.warning("Meta %s ya no existe; se omite la reversa", transaction.goal_id)

    if session.get(FinancialProfile, user_id) is not None:
        batch.increment(
            FinancialProfile,
            {"user_id": user_id},
            total_net_worth=transaction.signed_amount * direction,
        )
    else:
        logger.warning("Usuario %s sin perfil financiero; no se actualiza el patrimonio", user_id)


def _exists(session: Session, model, ident: str, user_id: str) -> bool:
    return session.exec(select(model.id).where(model.id == ident, model.user_id == user_id)).first() is not None


def record_transaction(
    session: Session,
    user_id: str,
    data: TransactionCreate,
    *,
    enforce_budget_limit: bool = False,
) -> Transaction:
    batch = LedgerBatch(session)
    try:
        transaction = stage_transaction(
            batch, session, user_id, data, enforce_budget_limit=enforce_budget_limit
        )
    except LedgerError:
        session.rollback()
        raise
    batch.commit()
    session.refresh(transaction)

    logger.info(
        "Transacción %s registrada: %s %s (%s)",
        transaction.id, transaction.type.value, transaction.amount, transaction.category,
    )
    snapshot_hub.notify(session, user_id)
    return transaction


def delete_transaction(session: Session, user_id: str, transaction_id: str) -> bool:
    """
    Elimina y revierte. Si la transacción no existe no hace nada y devuelve False.

    El patrimonio se revierte si el perfil existe al momento de eliminar, no al
    de registrar: una transacción cargada antes del onboarding descuenta su
    monto del perfil creado después.
    """
    transaction = session.exec(
        select(Transaction).where(
            Transaction.id == transaction_id,
            Transaction.user_id == user_id,
        )
    ).first()
    if not transaction:
        logger.info("Transacción %s no existe; nada que eliminar", transaction_id)
        return False

    batch = LedgerBatch(session)
    _stage_effects(batch, session, transaction, direction=-1)
    batch.delete(transaction)
    batch.commit()

    logger.info("Transacción %s eliminada y revertida", transaction_id)
    snapshot_hub.notify(session, user_id)
    return True


def record_salary(session: Session, user_id: str, amount: Decimal, on: Optional[dt.date] = None) -> Transaction:
    """
    Registrar salario desde el dashboard. Un monto negativo es una corrección:
    se guarda como gasto con la magnitud positiva, nunca como ingreso negativo.
    """
    amount = Decimal(amount)
    if amount == 0:
        raise ValidationError("Ingresa un monto distinto de cero.")

    if amount > 0:
        data = TransactionCreate(
            amount=amount,
            type=TransactionType.income,
            category="Salary",
            date=on,
            description="Monthly Salary",
        )
    else:
        data = TransactionCreate(
            amount=-amount,
            type=TransactionType.expense,
            category="Salary",
            date=on,
            description="Salary Correction/Deduction",
        )
    return record_transaction(session, user_id, data)


def contribute_to_goal(
    session: Session,
    user_id: str,
    goal_id: str,
    amount: Decimal,
    on: Optional[dt.date] = None,
    description: Optional[str] = None,
) -> Transaction:
    goal = get_goal(session, user_id, goal_id)
    data = TransactionCreate(
        amount=amount,
        type=TransactionType.expense,
        category=goal.name,
        date=on,
        description=description or f"Aporte a {goal.name}",
        needs_vs_wants=SpendingType.savings,
        goal_id=goal.id,
    )
    return record_transaction(session, user_id, data)
