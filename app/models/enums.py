from enum import Enum

class TransactionType(str, Enum):
    income = "income"
    expense = "expense"

class SpendingType(str, Enum):
    # Regla 50/30/20
    need = "need"
    want = "want"
    savings = "savings"

class GoalType(str, Enum):
    goal = "goal"
    emergency = "emergency"

class Frequency(str, Enum):
    monthly = "monthly"
    weekly = "weekly"
    bi_weekly = "bi-weekly"

class SalaryFrequency(str, Enum):
    monthly = "monthly"
    bi_weekly = "bi-weekly"
