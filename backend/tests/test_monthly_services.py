from decimal import Decimal

import pytest

from caderninho.db import utcnow
from caderninho.models.enums import EstablishmentType, MonthlyEntryType, OperationType
from caderninho.schemas.monthly_entry import MonthlyEntryCreate
from caderninho.schemas.monthly_spending_limit import MonthlySpendingLimitCreate
from caderninho.services.monthly_entries import MonthlyEntryService, next_month
from caderninho.services.monthly_spending_limits import MonthlySpendingLimitService


def _entry(**kw):
    data = dict(
        type=MonthlyEntryType.Salary,
        description=" Salário ",
        amount=Decimal("5000.00"),
        operation=OperationType.Income,
        month=12,
        year=2025,
    )
    data.update(kw)
    return MonthlyEntryCreate(**data)


def _limit(**kw):
    data = dict(establishment_type=EstablishmentType.Restaurant, limit_amount=Decimal("600.00"), month=3, year=2025)
    data.update(kw)
    return MonthlySpendingLimitCreate(**data)


def test_next_month_rolls_december():
    assert next_month(12, 2025) == (1, 2026)
    assert next_month(3, 2025) == (4, 2025)


def test_create_entry_trims_and_activates(uow):
    entry = MonthlyEntryService(uow).create(_entry())
    assert entry.description == "Salário"
    assert entry.is_active is True


def test_update_toggle_delete_entry(uow):
    service = MonthlyEntryService(uow)
    entry = service.create(_entry())

    updated = service.update(entry.id, _entry(description="Salário + bônus", amount=Decimal("5500.00")))
    assert updated.description == "Salário + bônus"
    assert updated.amount == Decimal("5500.00")

    assert service.toggle_active(entry.id, False).is_active is False

    assert service.delete(entry.id) is True
    assert service.update(entry.id, _entry()) is None
    assert service.toggle_active(entry.id, True) is None
    assert service.delete(entry.id) is False


def test_duplicate_entry_rolls_over_year(uow):
    service = MonthlyEntryService(uow)
    entry = service.create(_entry())

    dup = service.duplicate_to_next_month(entry.id, Decimal("5200.00"))
    assert (dup.month, dup.year) == (1, 2026)
    assert dup.amount == Decimal("5200.00")
    assert dup.description == entry.description
    assert dup.id != entry.id


def test_duplicate_entry_without_period_uses_current_month(uow):
    service = MonthlyEntryService(uow)
    entry = service.create(_entry(month=None, year=None))

    dup = service.duplicate_to_next_month(entry.id, Decimal("10.00"))
    now = utcnow()
    assert (dup.month, dup.year) == next_month(now.month, now.year)


def test_duplicate_unknown_entry(uow):
    assert MonthlyEntryService(uow).duplicate_to_next_month(404, Decimal("1.00")) is None


def test_limit_unique_per_type_and_month(uow):
    service = MonthlySpendingLimitService(uow)
    service.create(_limit())

    with pytest.raises(ValueError, match="Restaurante em 3/2025"):
        service.create(_limit(limit_amount=Decimal("700.00")))

    # outro tipo / outro mês pode
    service.create(_limit(establishment_type=EstablishmentType.Delivery))
    service.create(_limit(month=4))


def test_deleted_limit_frees_the_slot(uow):
    service = MonthlySpendingLimitService(uow)
    limit = service.create(_limit())
    assert service.delete(limit.id) is True
    assert service.create(_limit()).id != limit.id


def test_update_limit_into_taken_slot_rejected(uow):
    service = MonthlySpendingLimitService(uow)
    service.create(_limit())
    other = service.create(_limit(month=4))

    with pytest.raises(ValueError):
        service.update(other.id, _limit())

    same = service.update(other.id, _limit(month=4, limit_amount=Decimal("650.00")))
    assert same.limit_amount == Decimal("650.00")


def test_duplicate_limit(uow):
    service = MonthlySpendingLimitService(uow)
    limit = service.create(_limit(month=12))

    dup = service.duplicate_to_next_month(limit.id, Decimal("800.00"))
    assert (dup.month, dup.year) == (1, 2026)
    assert dup.limit_amount == Decimal("800.00")

    with pytest.raises(ValueError):
        service.duplicate_to_next_month(limit.id, Decimal("800.00"))


def test_toggle_limit(uow):
    service = MonthlySpendingLimitService(uow)
    limit = service.create(_limit())
    assert service.toggle_active(limit.id, False).is_active is False
    assert service.toggle_active(999, False) is None
