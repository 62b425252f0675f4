from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select

from caderninho.models.enums import EstablishmentType
from caderninho.models.monthly_spending_limit import MonthlySpendingLimit
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.monthly_spending_limit import MonthlySpendingLimitCreate
from caderninho.services.monthly_entries import next_month

logger = logging.getLogger(__name__)


class MonthlySpendingLimitService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.session = uow.session
        self.limits = Repository[MonthlySpendingLimit, int](uow, MonthlySpendingLimit)

    def _ensure_unique(
        self, establishment_type: EstablishmentType, month: int, year: int, exclude_id: int | None = None
    ) -> None:
        q = (
            select(MonthlySpendingLimit)
            .where(MonthlySpendingLimit.establishment_type == establishment_type)
            .where(MonthlySpendingLimit.month == month)
            .where(MonthlySpendingLimit.year == year)
        )
        if exclude_id is not None:
            q = q.where(MonthlySpendingLimit.id != exclude_id)

        if self.session.scalar(q.limit(1)) is not None:
            logger.warning(
                "Tentativa de criar limite duplicado para %s em %s/%s", establishment_type.name, month, year
            )
            raise ValueError(f"Já existe um limite para {establishment_type.label} em {month}/{year}")

    def create(self, payload: MonthlySpendingLimitCreate) -> MonthlySpendingLimit:
        self._ensure_unique(payload.establishment_type, payload.month, payload.year)

        limit = MonthlySpendingLimit(
            establishment_type=payload.establishment_type,
            limit_amount=payload.limit_amount,
            month=payload.month,
            year=payload.year,
            is_active=True,
        )
        self.limits.add(limit)
        self.uow.save_changes()
        logger.info(
            "Limite de gasto criado: %s - %s - R$ %s - %s/%s",
            limit.id, limit.establishment_type.name, limit.limit_amount, limit.month, limit.year,
        )
        return limit

    def update(self, limit_id: int, payload: MonthlySpendingLimitCreate) -> MonthlySpendingLimit | None:
        limit = self.limits.get_by_id(limit_id)
        if limit is None:
            return None

        if (limit.establishment_type, limit.month, limit.year) != (
            payload.establishment_type, payload.month, payload.year
        ):
            self._ensure_unique(payload.establishment_type, payload.month, payload.year, exclude_id=limit_id)

        limit.establishment_type = payload.establishment_type
        limit.limit_amount = payload.limit_amount
        limit.month = payload.month
        limit.year = payload.year
        self.uow.save_changes()
        return limit

    def delete(self, limit_id: int) -> bool:
        limit = self.limits.get_by_id(limit_id)
        if limit is None:
            return False
        self.limits.delete(limit)
        self.uow.save_changes()
        logger.info("Limite de gasto excluído: %s", limit_id)
        return True

    def toggle_active(self, limit_id: int, is_active: bool) -> MonthlySpendingLimit | None:
        limit = self.limits.get_by_id(limit_id)
        if limit is None:
            return None
        limit.is_active = is_active
        self.uow.save_changes()
        return limit

    def duplicate_to_next_month(self, limit_id: int, amount: Decimal) -> MonthlySpendingLimit | None:
        original = self.limits.get_by_id(limit_id)
        if original is None:
            return None

        month, year = next_month(original.month, original.year)
        self._ensure_unique(original.establishment_type, month, year)

        duplicated = MonthlySpendingLimit(
            establishment_type=original.establishment_type,
            limit_amount=amount,
            month=month,
            year=year,
            is_active=True,
        )
        self.limits.add(duplicated)
        self.uow.save_changes()
        logger.info(
            "Limite de gasto %s duplicado para o próximo mês: %s - %s - R$ %s - %s/%s",
            limit_id, duplicated.id, duplicated.establishment_type.name, duplicated.limit_amount, month, year,
        )
        return duplicated
