from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from app.core.config import DEFAULT_CURRENCY
from app.core.security import get_current_user
from app.database import get_session
from app.models.profile import FinancialProfile
from app.schemas.profile import ProfileCreate, ProfileRead, ProfileUpdate
from app.services import queries
from app.services.snapshots import Collection, snapshot_hub

router = APIRouter(prefix="/profile", tags=["profile"])

@router.post("", response_model=ProfileRead)
@router.post("/", response_model=ProfileRead)
def create_profile(
    profile_data: ProfileCreate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    """Onboarding: el patrimonio vivo arranca igual al inicial."""
    if queries.get_profile(session, user_id):
        raise HTTPException(status_code=400, detail="El perfil ya existe.")

    profile = FinancialProfile(
        user_id=user_id,
        total_net_worth=profile_data.initial_net_worth,
        initial_net_worth=profile_data.initial_net_worth,
        monthly_income=profile_data.monthly_income,
        salary_date=profile_data.salary_date,
        salary_frequency=profile_data.salary_frequency,
        currency=profile_data.currency or DEFAULT_CURRENCY,
        onboarding_completed=True,
    )
    session.add(profile)
    session.commit()
    session.refresh(profile)

    snapshot_hub.notify(session, user_id, [Collection.profile])
    return profile

@router.get("", response_model=ProfileRead)
@router.get("/", response_model=ProfileRead)
def read_profile(
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    profile = queries.get_profile(session, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Perfil no encontrado")
    return profile

@router.patch("", response_model=ProfileRead)
@router.patch("/", response_model=ProfileRead)
def update_profile(
    data: ProfileUpdate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user),
):
    profile = queries.get_profile(session, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Perfil no encontrado")

    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="Nada para actualizar.")
    if changes.get("monthly_income") is not None and changes["monthly_income"] < 0:
        raise HTTPException(status_code=400, detail="El ingreso mensual no puede ser negativo.")

    for field, value in changes.items():
        setattr(profile, field, value)

    session.add(profile)
    session.commit()
    session.refresh(profile)

    snapshot_hub.notify(session, user_id, [Collection.profile])
    return profile
