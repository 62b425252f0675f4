# Import explícito dos models para registrar no SQLAlchemy metadata
from caderninho.models.user import User  # noqa: F401
from caderninho.models.establishment import Establishment  # noqa: F401
from caderninho.models.card import Card  # noqa: F401
from caderninho.models.expense import Expense  # noqa: F401
from caderninho.models.credit_card_installment import CreditCardInstallment  # noqa: F401
from caderninho.models.monthly_entry import MonthlyEntry  # noqa: F401
from caderninho.models.monthly_spending_limit import MonthlySpendingLimit  # noqa: F401
