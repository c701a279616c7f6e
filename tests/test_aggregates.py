from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from app.core.errors import BudgetLimitExceeded, ReferenceNotFound, StoreUnavailable, ValidationError
from app.models.budget_category import BudgetCategory
from app.models.enums import SpendingType, TransactionType
from app.models.monthly_stats import MonthlyStats
from app.models.profile import FinancialProfile
from app.models.savings_goal import SavingsGoal
from app.models.transaction import Transaction
from app.schemas.transaction import TransactionCreate
from app.services import queries
from app.services.aggregates import contribute_to_goal, delete_transaction, record_salary, record_transaction
from tests.conftest import DAY, MONTH, OTHER_USER_ID, USER_ID


def expense(amount, category="Rent", **extra):
    return TransactionCreate(amount=Decimal(amount), type=TransactionType.expense, category=category, date=DAY, **extra)


def income(amount, category="Salary", **extra):
    return TransactionCreate(amount=Decimal(amount), type=TransactionType.income, category=category, date=DAY, **extra)


def stats_for(session, month=MONTH):
    return queries.get_month_stats(session, USER_ID, month)


def net_worth(session):
    return session.get(FinancialProfile, USER_ID).total_net_worth


class TestRecordTransaction:
    """Alta de transacciones y sus cuatro agregados."""

    def test_rent_expense_updates_every_aggregate(self, session, profile, rent_budget):
        tx = record_transaction(session, USER_ID, expense("200"))

        assert tx.id
        assert tx.budget_id == rent_budget.id
        assert stats_for(session).total_expenses == Decimal("200")
        assert stats_for(session).total_income == Decimal("0")
        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("200")
        assert net_worth(session) == Decimal("800")

    def test_delete_restores_the_rent_scenario(self, session, profile, rent_budget):
        tx = record_transaction(session, USER_ID, expense("200"))

        assert delete_transaction(session, USER_ID, tx.id) is True

        assert net_worth(session) == Decimal("1000")
        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("0")
        assert stats_for(session).total_expenses == Decimal("0")
        assert session.get(Transaction, tx.id) is None

    def test_monthly_stats_row_survives_reaching_zero(self, session, profile):
        tx = record_transaction(session, USER_ID, income("50"))
        delete_transaction(session, USER_ID, tx.id)

        rows = session.exec(select(MonthlyStats).where(MonthlyStats.user_id == USER_ID)).all()
        assert len(rows) == 1
        assert rows[0].total_income == Decimal("0")

    def test_income_increases_net_worth(self, session, profile):
        record_transaction(session, USER_ID, income("1500.50"))

        assert stats_for(session).total_income == Decimal("1500.50")
        assert net_worth(session) == Decimal("2500.50")

    def test_goal_contribution(self, session, profile, goal):
        record_transaction(
            session, USER_ID,
            expense("100", category="Emergency Fund", goal_id=goal.id, needs_vs_wants=SpendingType.savings),
        )

        assert session.get(SavingsGoal, goal.id).current_amount == Decimal("100")
        assert net_worth(session) == Decimal("900")

    def test_contribute_to_goal_helper(self, session, profile, goal):
        tx = contribute_to_goal(session, USER_ID, goal.id, Decimal("250"), on=DAY)

        assert tx.needs_vs_wants == SpendingType.savings
        assert tx.category == goal.name
        assert session.get(SavingsGoal, goal.id).current_amount == Decimal("250")

    def test_expense_without_matching_budget_leaves_budgets_alone(self, session, profile, rent_budget):
        record_transaction(session, USER_ID, expense("40", category="Groceries"))

        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("0")
        assert stats_for(session).total_expenses == Decimal("40")
        assert net_worth(session) == Decimal("960")

    def test_budget_name_match_is_scoped_to_the_month(self, session, profile, rent_budget):
        tx = record_transaction(
            session, USER_ID,
            TransactionCreate(amount=Decimal("10"), type=TransactionType.expense, category="Rent", date=DAY.replace(month=4)),
        )

        assert tx.budget_id is None
        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("0")

    def test_budget_id_wins_over_name(self, session, profile, rent_budget):
        rent_budget.name = "Housing"
        session.add(rent_budget)
        session.commit()

        record_transaction(session, USER_ID, expense("75", category="Rent", budget_id=rent_budget.id))

        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("75")

    def test_creation_time_is_timezone_aware(self, session, profile):
        draft = Transaction(user_id=USER_ID, amount=Decimal("1"), type=TransactionType.income, category="x", date=DAY)
        assert draft.created_at.tzinfo is not None

        tx = record_transaction(session, USER_ID, income("20"))

        assert tx.created_at is not None
        assert len(session.exec(select(Transaction)).all()) == 1

    def test_works_without_profile(self, session):
        tx = record_transaction(session, USER_ID, income("20"))

        assert tx.id
        assert stats_for(session).total_income == Decimal("20")

    def test_recorded_amounts_never_drift(self, session, profile):
        ids = [record_transaction(session, USER_ID, income(a)).id for a in ("0.10", "0.20", "0.30")]
        for tx_id in ids:
            delete_transaction(session, USER_ID, tx_id)

        assert net_worth(session) == Decimal("1000")
        assert stats_for(session).total_income == Decimal("0")


class TestNetWorthConservation:

    AMOUNTS = [
        (TransactionType.income, "1200"),
        (TransactionType.expense, "310.25"),
        (TransactionType.expense, "89.99"),
        (TransactionType.income, "45.50"),
        (TransactionType.expense, "600"),
    ]

    def _record_all(self, session, user_id, items):
        session.add(FinancialProfile(user_id=user_id, total_net_worth=Decimal("1000"), initial_net_worth=Decimal("1000")))
        session.commit()
        for tx_type, amount in items:
            record_transaction(
                session, user_id,
                TransactionCreate(amount=Decimal(amount), type=tx_type, category="Misc", date=DAY),
            )
        return session.get(FinancialProfile, user_id).total_net_worth

    def test_net_worth_equals_initial_plus_income_minus_expense_in_any_order(self, session):
        expected = Decimal("1000") + Decimal("1245.50") - Decimal("1000.24")

        forward = self._record_all(session, USER_ID, self.AMOUNTS)
        backward = self._record_all(session, OTHER_USER_ID, list(reversed(self.AMOUNTS)))

        assert forward == expected
        assert backward == expected


class TestFailures:

    def test_dangling_goal_id_commits_nothing(self, session, profile):
        with pytest.raises(ReferenceNotFound):
            record_transaction(session, USER_ID, expense("100", goal_id="missing"))

        assert session.exec(select(Transaction)).all() == []
        assert session.exec(select(MonthlyStats)).all() == []
        assert net_worth(session) == Decimal("1000")

    def test_dangling_budget_id_commits_nothing(self, session, profile, rent_budget):
        with pytest.raises(ReferenceNotFound):
            record_transaction(session, USER_ID, expense("100", budget_id="missing"))

        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("0")
        assert session.exec(select(Transaction)).all() == []

    def test_other_users_budget_is_not_found(self, session, profile, rent_budget):
        with pytest.raises(ReferenceNotFound):
            record_transaction(session, OTHER_USER_ID, expense("10", budget_id=rent_budget.id))

    @pytest.mark.parametrize("amount", ["0", "-5", "1.005"])
    def test_invalid_amounts_are_rejected(self, session, profile, amount):
        with pytest.raises(ValidationError):
            record_transaction(session, USER_ID, expense(amount))

        assert session.exec(select(Transaction)).all() == []

    def test_income_cannot_target_a_budget(self, session, profile, rent_budget):
        with pytest.raises(ValidationError):
            record_transaction(session, USER_ID, income("10", budget_id=rent_budget.id))

    def test_budget_limit_is_checked_only_when_asked(self, session, profile, rent_budget):
        with pytest.raises(BudgetLimitExceeded):
            record_transaction(session, USER_ID, expense("501"), enforce_budget_limit=True)
        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("0")

        record_transaction(session, USER_ID, expense("501"))
        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("501")

    def test_store_failure_rolls_back_everything(self, session, profile, rent_budget, monkeypatch):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(session, "commit", broken_commit)
        with pytest.raises(StoreUnavailable):
            record_transaction(session, USER_ID, expense("200"))
        monkeypatch.undo()

        assert session.exec(select(Transaction)).all() == []
        assert session.get(BudgetCategory, rent_budget.id).spent_amount == Decimal("0")
        assert net_worth(session) == Decimal("1000")


class TestDeleteTransaction:

    def test_missing_transaction_is_a_no_op(self, session, profile):
        assert delete_transaction(session, USER_ID, "does-not-exist") is False
        assert net_worth(session) == Decimal("1000")

    def test_cannot_delete_another_users_transaction(self, session, profile):
        tx = record_transaction(session, USER_ID, income("10"))

        assert delete_transaction(session, OTHER_USER_ID, tx.id) is False
        assert session.get(Transaction, tx.id) is not None

    def test_second_delete_does_nothing(self, session, profile, goal):
        tx = contribute_to_goal(session, USER_ID, goal.id, Decimal("60"), on=DAY)

        assert delete_transaction(session, USER_ID, tx.id) is True
        assert delete_transaction(session, USER_ID, tx.id) is False
        assert session.get(SavingsGoal, goal.id).current_amount == Decimal("0")
        assert net_worth(session) == Decimal("1000")

    def test_delete_after_goal_removed_still_reverses_the_rest(self, session, profile, goal):
        tx = contribute_to_goal(session, USER_ID, goal.id, Decimal("60"), on=DAY)
        session.delete(session.get(SavingsGoal, goal.id))
        session.commit()

        assert delete_transaction(session, USER_ID, tx.id) is True
        assert net_worth(session) == Decimal("1000")
        assert stats_for(session).total_expenses == Decimal("0")

    def test_profile_created_after_recording_absorbs_the_reversal(self, session):
        tx = record_transaction(session, USER_ID, income("20"))
        session.add(FinancialProfile(
            user_id=USER_ID,
            total_net_worth=Decimal("1000"),
            initial_net_worth=Decimal("1000"),
            monthly_income=Decimal("0"),
            onboarding_completed=True,
        ))
        session.commit()

        assert delete_transaction(session, USER_ID, tx.id) is True
        # el alta no tocó el patrimonio, la baja sí lo descuenta
        assert net_worth(session) == Decimal("980")


class TestSalary:

    def test_positive_salary_is_income(self, session, profile):
        tx = record_salary(session, USER_ID, Decimal("3000"), on=DAY)

        assert tx.type == TransactionType.income
        assert tx.description == "Monthly Salary"
        assert net_worth(session) == Decimal("4000")

    def test_negative_salary_is_stored_as_positive_expense(self, session, profile):
        tx = record_salary(session, USER_ID, Decimal("-500"), on=DAY)

        assert tx.type == TransactionType.expense
        assert tx.amount == Decimal("500")
        assert tx.category == "Salary"
        assert net_worth(session) == Decimal("500")

    def test_zero_salary_is_rejected(self, session, profile):
        with pytest.raises(ValidationError):
            record_salary(session, USER_ID, Decimal("0"))
