from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.security import get_current_user
from app.database import get_session
from app.schemas.recurring import CatchUpResult, RecurringTemplateCreate, RecurringTemplateRead
from app.services import queries
from app.services.recurring import create_template, deactivate_template, run_recurring_catch_up

router = APIRouter(prefix="/recurring", tags=["recurring"])

@router.post("", response_model=RecurringTemplateRead)
@router.post("/", response_model=RecurringTemplateRead)
def create_recurring_template(
    template_data: RecurringTemplateCreate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return create_template(session, user_id, template_data)

@router.get("", response_model=List[RecurringTemplateRead])
@router.get("/", response_model=List[RecurringTemplateRead])
def list_recurring_templates(
    only_active: bool = False,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return queries.list_templates(session, user_id, only_active=only_active)

@router.post("/catch-up", response_model=CatchUpResult)
def catch_up(
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return CatchUpResult(generated=run_recurring_catch_up(session, user_id))

@router.delete("/{template_id}", response_model=RecurringTemplateRead)
def deactivate_recurring_template(
    template_id: str,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    return deactivate_template(session, user_id, template_id)
