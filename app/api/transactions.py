from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.config import NET_WORTH_WINDOW
from app.core.security import get_current_user
from app.database import get_session
from app.schemas.transaction import SalaryCreate, TransactionCreate, TransactionRead
from app.services import queries
from app.services.aggregates import delete_transaction, record_salary, record_transaction
from app.services.recurring import create_template_from_transaction

router = APIRouter(prefix="/transactions", tags=["transactions"])

@router.post("", response_model=TransactionRead)
@router.post("/", response_model=TransactionRead)
def create_transaction(
    transaction_data: TransactionCreate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    # Desde la UI el gasto no puede pasarse de lo que queda del presupuesto
    transaction = record_transaction(session, user_id, transaction_data, enforce_budget_limit=True)

    if transaction_data.is_recurring and transaction_data.frequency is not None:
        create_template_from_transaction(session, transaction, transaction_data.frequency)

    return transaction

@router.get("", response_model=List[TransactionRead])
@router.get("/", response_model=List[TransactionRead])
def list_transactions(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    limit: int = Query(NET_WORTH_WINDOW, ge=1, le=500),
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return queries.list_transactions(session, user_id, month=month, limit=limit)

@router.post("/salary", response_model=TransactionRead)
def add_salary(
    data: SalaryCreate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return record_salary(session, user_id, data.amount, on=data.date)

@router.delete("/{transaction_id}")
def remove_transaction(
    transaction_id: str,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    deleted = delete_transaction(session, user_id, transaction_id)
    return {"deleted": deleted}
