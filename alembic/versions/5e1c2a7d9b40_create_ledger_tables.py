"""create ledger tables

Revision ID: 5e1c2a7d9b40
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '5e1c2a7d9b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONEY = sa.Numeric(precision=14, scale=2)


def upgrade():
    op.create_table(
        "transaction",
        sa.Column("id", sqlmodel.AutoString(), primary_key=True),
        sa.Column("user_id", sqlmodel.AutoString(), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("type", sa.Enum("income", "expense", name="transactiontype"), nullable=False),
        sa.Column("category", sqlmodel.AutoString(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("description", sqlmodel.AutoString(), nullable=False),
        sa.Column("is_recurring", sa.Boolean(), nullable=False),
        sa.Column("needs_vs_wants", sa.Enum("need", "want", "savings", name="spendingtype"), nullable=True),
        sa.Column("goal_id", sqlmodel.AutoString(), nullable=True),
        sa.Column("budget_id", sqlmodel.AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_transaction_user_id", "transaction", ["user_id"])
    op.create_index("ix_transaction_date", "transaction", ["date"])
    op.create_index("ix_transaction_goal_id", "transaction", ["goal_id"])
    op.create_index("ix_transaction_budget_id", "transaction", ["budget_id"])

    op.create_table(
        "monthly_stats",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sqlmodel.AutoString(), nullable=False),
        sa.Column("month", sqlmodel.AutoString(), nullable=False),
        sa.Column("total_income", MONEY, nullable=False),
        sa.Column("total_expenses", MONEY, nullable=False),
        sa.UniqueConstraint("user_id", "month", name="uq_monthly_stats_user_month"),
    )
    op.create_index("ix_monthly_stats_user_id", "monthly_stats", ["user_id"])

    op.create_table(
        "budget_category",
        sa.Column("id", sqlmodel.AutoString(), primary_key=True),
        sa.Column("user_id", sqlmodel.AutoString(), nullable=False),
        sa.Column("name", sqlmodel.AutoString(), nullable=False),
        sa.Column("type", sa.Enum("need", "want", "savings", name="spendingtype"), nullable=False),
        sa.Column("planned_amount", MONEY, nullable=False),
        sa.Column("spent_amount", MONEY, nullable=False),
        sa.Column("month", sqlmodel.AutoString(), nullable=False),
    )
    op.create_index("ix_budget_category_user_id", "budget_category", ["user_id"])
    op.create_index("ix_budget_category_month", "budget_category", ["month"])

    op.create_table(
        "savings_goal",
        sa.Column("id", sqlmodel.AutoString(), primary_key=True),
        sa.Column("user_id", sqlmodel.AutoString(), nullable=False),
        sa.Column("name", sqlmodel.AutoString(), nullable=False),
        sa.Column("target_amount", MONEY, nullable=False),
        sa.Column("current_amount", MONEY, nullable=False),
        sa.Column("monthly_contribution", MONEY, nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("icon", sqlmodel.AutoString(), nullable=True),
        sa.Column("color", sqlmodel.AutoString(), nullable=True),
        sa.Column("type", sa.Enum("goal", "emergency", name="goaltype"), nullable=False),
    )
    op.create_index("ix_savings_goal_user_id", "savings_goal", ["user_id"])

    op.create_table(
        "recurring_template",
        sa.Column("id", sqlmodel.AutoString(), primary_key=True),
        sa.Column("user_id", sqlmodel.AutoString(), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("category", sqlmodel.AutoString(), nullable=False),
        sa.Column("description", sqlmodel.AutoString(), nullable=False),
        sa.Column("type", sa.Enum("income", "expense", name="transactiontype"), nullable=False),
        sa.Column("frequency", sa.Enum("monthly", "weekly", "bi_weekly", name="frequency"), nullable=False),
        sa.Column("next_occurrence", sa.Date(), nullable=False),
        sa.Column("needs_vs_wants", sa.Enum("need", "want", "savings", name="spendingtype"), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_recurring_template_user_id", "recurring_template", ["user_id"])
    op.create_index("ix_recurring_template_next_occurrence", "recurring_template", ["next_occurrence"])

    op.create_table(
        "financial_profile",
        sa.Column("user_id", sqlmodel.AutoString(), primary_key=True),
        sa.Column("total_net_worth", MONEY, nullable=False),
        sa.Column("initial_net_worth", MONEY, nullable=False),
        sa.Column("monthly_income", MONEY, nullable=False),
        sa.Column("salary_date", sa.Integer(), nullable=True),
        sa.Column("salary_frequency", sa.Enum("monthly", "bi_weekly", name="salaryfrequency"), nullable=True),
        sa.Column("currency", sqlmodel.AutoString(), nullable=False),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False),
    )


def downgrade():
    op.drop_table("financial_profile")
    op.drop_index("ix_recurring_template_next_occurrence", table_name="recurring_template")
    op.drop_index("ix_recurring_template_user_id", table_name="recurring_template")
    op.drop_table("recurring_template")
    op.drop_index("ix_savings_goal_user_id", table_name="savings_goal")
    op.drop_table("savings_goal")
    op.drop_index("ix_budget_category_month", table_name="budget_category")
    op.drop_index("ix_budget_category_user_id", table_name="budget_category")
    op.drop_table("budget_category")
    op.drop_index("ix_monthly_stats_user_id", table_name="monthly_stats")
    op.drop_table("monthly_stats")
    op.drop_index("ix_transaction_budget_id", table_name="transaction")
    op.drop_index("ix_transaction_goal_id", table_name="transaction")
    op.drop_index("ix_transaction_date", table_name="transaction")
    op.drop_index("ix_transaction_user_id", table_name="transaction")
    op.drop_table("transaction")
