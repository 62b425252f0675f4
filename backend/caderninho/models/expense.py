from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from caderninho.db import Base
from caderninho.models.base import BaseEntity
from caderninho.models.enums import PaymentType
from caderninho.models.types import IntEnumType


class Expense(BaseEntity, Base):
    __tablename__ = "expenses"

    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True, index=True)
    description: Mapped[str] = mapped_column(String(500))
    establishment_id: Mapped[int] = mapped_column(ForeignKey("establishments.id", ondelete="RESTRICT"), index=True)
    payment_type: Mapped[PaymentType] = mapped_column(IntEnumType(PaymentType), index=True)

    # obrigatório quando o pagamento é cartão de crédito ou débito (validado no service)
    card_id: Mapped[int | None] = mapped_column(ForeignKey("cards.id", ondelete="RESTRICT"), nullable=True, index=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    date: Mapped[datetime] = mapped_column(DateTime, index=True)
    installment_count: Mapped[int] = mapped_column(default=1)

    establishment = relationship("Establishment", lazy="joined")
    card = relationship("Card", lazy="joined")
    installments = relationship(
        "CreditCardInstallment",
        back_populates="expense",
        order_by="CreditCardInstallment.installment_number",
    )
