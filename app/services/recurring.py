# app/services/recurring.py

import datetime as dt
import logging
from typing import Optional

from sqlmodel import Session, select

from app.core.errors import LedgerError, ReferenceNotFound, ValidationError
from app.models.recurring_template import RecurringTemplate
from app.models.transaction import Transaction
from app.schemas.recurring import RecurringTemplateCreate
from app.schemas.transaction import TransactionCreate
from app.services.aggregates import stage_transaction
from app.services.snapshots import snapshot_hub
from app.utils.date_helpers import add_period
from app.utils.ledger_batch import LedgerBatch

logger = logging.getLogger(__name__)


def run_recurring_catch_up(session: Session, user_id: str, today: Optional[dt.date] = None) -> int:
    """
    Materializa las plantillas vencidas (next_occurrence <= hoy) y avanza cada
    una exactamente un periodo, todo en un solo batch.

    La transacción generada queda fechada hoy, no en next_occurrence. Si pasaron
    varios periodos sin abrir el dashboard se genera una sola transacción por
    pasada; las siguientes pasadas van alcanzando de a un periodo.
    """
    today = today or dt.date.today()
    due = session.exec(
        select(RecurringTemplate).where(
            RecurringTemplate.user_id == user_id,
            RecurringTemplate.active == True,  # noqa: E712
            RecurringTemplate.next_occurrence <= today,
        )
    ).all()
    if not due:
        return 0

    batch = LedgerBatch(session)
    try:
        for template in due:
            # Las plantillas no guardan budget_id ni goal_id: solo aplica el match por nombre
            stage_transaction(
                batch,
                session,
                user_id,
                TransactionCreate(
                    amount=template.amount,
                    type=template.type,
                    category=template.category,
                    date=today,
                    description=template.description,
                    is_recurring=True,
                    needs_vs_wants=template.needs_vs_wants,
                ),
            )
            template.next_occurrence = add_period(template.next_occurrence, template.frequency)
            batch.add(template)
    except LedgerError:
        session.rollback()
        raise
    batch.commit()

    logger.info("Generadas %d transacciones recurrentes para %s", len(due), user_id)
    snapshot_hub.notify(session, user_id)
    return len(due)


def create_template(session: Session, user_id: str, data: RecurringTemplateCreate) -> RecurringTemplate:
    if data.amount <= 0:
        raise ValidationError("El monto debe ser mayor a cero.")
    template = RecurringTemplate(**data.model_dump(), user_id=user_id, active=True)
    session.add(template)
    session.commit()
    session.refresh(template)
    return template


def create_template_from_transaction(session: Session, transaction: Transaction, frequency) -> RecurringTemplate:
    """La próxima ocurrencia es un periodo después de la transacción que la originó."""
    return create_template(
        session,
        transaction.user_id,
        RecurringTemplateCreate(
            amount=transaction.amount,
            category=transaction.category,
            description=transaction.description,
            type=transaction.type,
            frequency=frequency,
            next_occurrence=add_period(transaction.date, frequency),
            needs_vs_wants=transaction.needs_vs_wants,
        ),
    )


def deactivate_template(session: Session, user_id: str, template_id: str) -> RecurringTemplate:
    template = session.exec(
        select(RecurringTemplate).where(
            RecurringTemplate.id == template_id,
            RecurringTemplate.user_id == user_id,
        )
    ).first()
    if not template:
        raise ReferenceNotFound(f"Plantilla {template_id} no encontrada")

    template.active = False
    session.add(template)
    session.commit()
    session.refresh(template)
    return template
