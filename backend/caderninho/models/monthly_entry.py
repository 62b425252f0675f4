from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from caderninho.db import Base
from caderninho.models.base import BaseEntity
from caderninho.models.enums import MonthlyEntryType, OperationType
from caderninho.models.types import IntEnumType


class MonthlyEntry(BaseEntity, Base):
    """Receita ou despesa fixa do mês (salário, imposto, conta mensal...)."""

    __tablename__ = "monthly_entries"

    type: Mapped[MonthlyEntryType] = mapped_column(IntEnumType(MonthlyEntryType))
    description: Mapped[str] = mapped_column(String(200))
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    operation: Mapped[OperationType] = mapped_column(IntEnumType(OperationType))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # mês/ano de referência; entradas sem mês valem para qualquer período
    month: Mapped[int | None] = mapped_column(nullable=True, index=True)
    year: Mapped[int | None] = mapped_column(nullable=True, index=True)
