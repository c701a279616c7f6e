from app.models.transaction import Transaction
from app.models.monthly_stats import MonthlyStats
from app.models.budget_category import BudgetCategory
from app.models.savings_goal import SavingsGoal
from app.models.recurring_template import RecurringTemplate
from app.models.profile import FinancialProfile

__all__ = [
    "Transaction",
    "MonthlyStats",
    "BudgetCategory",
    "SavingsGoal",
    "RecurringTemplate",
    "FinancialProfile",
]
