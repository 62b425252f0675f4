from decimal import Decimal

from sqlalchemy import Boolean, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from caderninho.db import Base
from caderninho.models.base import BaseEntity
from caderninho.models.enums import EstablishmentType
from caderninho.models.types import IntEnumType


class MonthlySpendingLimit(BaseEntity, Base):
    """Teto de gasto por tipo de estabelecimento em um mês/ano."""

    __tablename__ = "monthly_spending_limits"

    establishment_type: Mapped[EstablishmentType] = mapped_column(IntEnumType(EstablishmentType), index=True)
    limit_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    month: Mapped[int] = mapped_column(index=True)
    year: Mapped[int] = mapped_column(index=True)
