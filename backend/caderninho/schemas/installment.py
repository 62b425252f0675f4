from datetime import datetime

from caderninho.schemas.common import CamelModel, Money


class InstallmentOut(CamelModel):
    id: int
    card_id: int
    expense_id: int
    installment_number: int
    total_installments: int
    due_date: datetime
    amount: Money
    is_paid: bool
    paid_date: datetime | None = None


class MarkAsPaid(CamelModel):
    paid_date: datetime | None = None
