from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from caderninho.db import Base
from caderninho.models.base import BaseEntity


class CreditCardInstallment(BaseEntity, Base):
    __tablename__ = "credit_card_installments"

    card_id: Mapped[int] = mapped_column(ForeignKey("cards.id"), index=True)
    expense_id: Mapped[int] = mapped_column(ForeignKey("expenses.id"), index=True)

    # 1..total_installments
    installment_number: Mapped[int] = mapped_column()
    total_installments: Mapped[int] = mapped_column()

    due_date: Mapped[datetime] = mapped_column(DateTime, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False)
    paid_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    card = relationship("Card", lazy="joined")
    expense = relationship("Expense", back_populates="installments")
