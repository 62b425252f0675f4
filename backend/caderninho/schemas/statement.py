from datetime import datetime

from caderninho.models.enums import EstablishmentType, PaymentType
from caderninho.schemas.common import CamelModel, Money


class StatementTransaction(CamelModel):
    expense_id: int
    description: str
    establishment_name: str
    date: datetime
    amount: Money
    payment_type: PaymentType
    payment_type_name: str
    card_name: str | None = None
    installment_info: str | None = None  # "2/10"
    is_credit_card_installment: bool = False
    due_date: datetime | None = None


class ExpenseByType(CamelModel):
    establishment_type: EstablishmentType
    establishment_type_name: str
    monthly_limit: Money | None = None
    total_spent: Money
    available_balance: Money | None = None
    percentage_used: Money | None = None
    is_over_limit: bool = False
    transactions: list[StatementTransaction] = []


class MonthlyStatement(CamelModel):
    year: int
    month: int
    expenses_by_type: list[ExpenseByType] = []
    total_expenses: Money
    total_limits: Money
    available_balance: Money
    percentage_used: Money
