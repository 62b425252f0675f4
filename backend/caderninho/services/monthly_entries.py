from __future__ import annotations

import logging
from decimal import Decimal

from caderninho.db import utcnow
from caderninho.models.monthly_entry import MonthlyEntry
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.monthly_entry import MonthlyEntryCreate

logger = logging.getLogger(__name__)


def next_month(month: int, year: int) -> tuple[int, int]:
    if month >= 12:
        return 1, year + 1
    return month + 1, year


class MonthlyEntryService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.entries = Repository[MonthlyEntry, int](uow, MonthlyEntry)

    def create(self, payload: MonthlyEntryCreate) -> MonthlyEntry:
        entry = MonthlyEntry(
            type=payload.type,
            description=payload.description.strip(),
            amount=payload.amount,
            operation=payload.operation,
            month=payload.month,
            year=payload.year,
            is_active=True,
        )
        self.entries.add(entry)
        self.uow.save_changes()
        logger.info("Entrada mensal criada: %s - %s", entry.id, entry.description)
        return entry

    def update(self, entry_id: int, payload: MonthlyEntryCreate) -> MonthlyEntry | None:
        entry = self.entries.get_by_id(entry_id)
        if entry is None:
            logger.warning("Tentativa de atualizar entrada mensal não encontrada: %s", entry_id)
            return None

        entry.type = payload.type
        entry.description = payload.description.strip()
        entry.amount = payload.amount
        entry.operation = payload.operation
        entry.month = payload.month
        entry.year = payload.year
        self.uow.save_changes()
        logger.info("Entrada mensal atualizada: %s", entry_id)
        return entry

    def delete(self, entry_id: int) -> bool:
        entry = self.entries.get_by_id(entry_id)
        if entry is None:
            return False
        self.entries.delete(entry)
        self.uow.save_changes()
        logger.info("Entrada mensal excluída: %s", entry_id)
        return True

    def toggle_active(self, entry_id: int, is_active: bool) -> MonthlyEntry | None:
        entry = self.entries.get_by_id(entry_id)
        if entry is None:
            return None
        entry.is_active = is_active
        self.uow.save_changes()
        return entry

    def duplicate_to_next_month(self, entry_id: int, amount: Decimal) -> MonthlyEntry | None:
        """Copia a entrada para o mês seguinte ao dela (sem mês/ano: usa o mês corrente como base)."""
        original = self.entries.get_by_id(entry_id)
        if original is None:
            return None

        now = utcnow()
        month, year = next_month(original.month or now.month, original.year or now.year)

        duplicated = MonthlyEntry(
            type=original.type,
            description=original.description,
            amount=amount,
            operation=original.operation,
            month=month,
            year=year,
            is_active=True,
        )
        self.entries.add(duplicated)
        self.uow.save_changes()
        logger.info(
            "Entrada mensal %s duplicada para %02d/%s: %s", entry_id, month, year, duplicated.id
        )
        return duplicated
