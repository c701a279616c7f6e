"""
Fixtures compartidos.

Cada test corre contra un SQLite en memoria nuevo; la API usa el mismo engine
vía `dependency_overrides` y un usuario fijo en lugar del token.
"""

import datetime as dt
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.security import get_current_user
from app.database import get_session
from app.main import app
from app.models.budget_category import BudgetCategory
from app.models.enums import GoalType, SpendingType
from app.models.profile import FinancialProfile
from app.models.savings_goal import SavingsGoal

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
DAY = dt.date(2024, 3, 15)
MONTH = "2024-03"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def profile(session):
    profile = FinancialProfile(
        user_id=USER_ID,
        total_net_worth=Decimal("1000"),
        initial_net_worth=Decimal("1000"),
        monthly_income=Decimal("0"),
        onboarding_completed=True,
    )
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


@pytest.fixture
def rent_budget(session):
    budget = BudgetCategory(
        user_id=USER_ID,
        name="Rent",
        type=SpendingType.need,
        planned_amount=Decimal("500"),
        month=MONTH,
    )
    session.add(budget)
    session.commit()
    session.refresh(budget)
    return budget


@pytest.fixture
def goal(session):
    goal = SavingsGoal(
        user_id=USER_ID,
        name="Emergency Fund",
        target_amount=Decimal("5000"),
        type=GoalType.emergency,
    )
    session.add(goal)
    session.commit()
    session.refresh(goal)
    return goal


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_current_user] = lambda: USER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()
