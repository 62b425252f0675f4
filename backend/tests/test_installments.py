from datetime import datetime
from decimal import Decimal

import pytest

from caderninho.models.card import Card
from caderninho.models.enums import CardBrand, CardType, PaymentType
from caderninho.models.expense import Expense
from caderninho.services.installments import (
    CreditCardInstallmentService,
    add_months,
    first_due_date,
    split_amount,
)


def _expense(db, card, establishment, amount="100.00", count=3, date=datetime(2025, 3, 5, 10, 30)):
    e = Expense(
        description="Compra parcelada",
        establishment_id=establishment.id,
        payment_type=PaymentType.CreditCard,
        card_id=card.id if card is not None else None,
        amount=Decimal(amount),
        date=date,
        installment_count=count,
    )
    db.add(e)
    db.flush()
    return e


@pytest.mark.parametrize(
    "amount,count,expected",
    [
        ("100.00", 3, ["33.33", "33.33", "33.34"]),
        ("100.00", 1, ["100.00"]),
        ("10.00", 4, ["2.50", "2.50", "2.50", "2.50"]),
        ("0.05", 3, ["0.01", "0.01", "0.03"]),
    ],
)
def test_split_amount(amount, count, expected):
    parts = split_amount(Decimal(amount), count)
    assert parts == [Decimal(x) for x in expected]
    assert sum(parts) == Decimal(amount)


def test_first_due_date_on_or_before_closing_day_is_same_month():
    assert first_due_date(datetime(2025, 3, 10), closing_day=10) == datetime(2025, 3, 15)
    assert first_due_date(datetime(2025, 3, 1), closing_day=10) == datetime(2025, 3, 15)


def test_first_due_date_after_closing_day_is_next_month():
    assert first_due_date(datetime(2025, 3, 11), closing_day=10) == datetime(2025, 4, 15)


def test_first_due_date_rolls_over_year():
    assert first_due_date(datetime(2025, 12, 20), closing_day=10) == datetime(2026, 1, 15)


def test_add_months_keeps_day():
    assert add_months(datetime(2025, 11, 15), 3, 15) == datetime(2026, 2, 15)
    assert add_months(datetime(2025, 1, 31), 1, 15) == datetime(2025, 2, 15)


def test_create_installments_schedule(db, uow, card, establishment):
    expense = _expense(db, card, establishment)
    created = CreditCardInstallmentService(uow).create_installments(expense)
    uow.save_changes()

    assert [i.installment_number for i in created] == [1, 2, 3]
    assert all(i.total_installments == 3 for i in created)
    assert [i.due_date for i in created] == [datetime(2025, 3, 15), datetime(2025, 4, 15), datetime(2025, 5, 15)]
    assert [i.amount for i in created] == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert all(i.is_paid is False for i in created)


def test_create_installments_after_closing_crosses_year(db, uow, card, establishment):
    expense = _expense(db, card, establishment, amount="300.00", count=2, date=datetime(2025, 12, 28))
    created = CreditCardInstallmentService(uow).create_installments(expense)

    assert [i.due_date for i in created] == [datetime(2026, 1, 15), datetime(2026, 2, 15)]


def test_create_installments_requires_card(db, uow, establishment):
    expense = _expense(db, None, establishment)
    with pytest.raises(ValueError):
        CreditCardInstallmentService(uow).create_installments(expense)


def test_create_installments_requires_existing_card(db, uow, establishment):
    expense = _expense(db, None, establishment)
    expense.card_id = 999
    with pytest.raises(ValueError, match="999"):
        CreditCardInstallmentService(uow).create_installments(expense)


def test_create_installments_requires_closing_day(db, uow, establishment):
    c = Card(name="Sem fechamento", type=CardType.Credit, brand=CardBrand.Elo, last_four_digits="0000")
    db.add(c)
    db.commit()
    expense = _expense(db, c, establishment)
    with pytest.raises(ValueError, match="fechamento"):
        CreditCardInstallmentService(uow).create_installments(expense)


def test_create_installments_rejects_zero_count(db, uow, card, establishment):
    expense = _expense(db, card, establishment)
    expense.installment_count = 0
    with pytest.raises(ValueError):
        CreditCardInstallmentService(uow).create_installments(expense)


def test_get_by_expense_and_period(db, uow, card, establishment):
    service = CreditCardInstallmentService(uow)
    expense = _expense(db, card, establishment, amount="120.00", count=4)
    service.create_installments(expense)
    uow.save_changes()

    by_expense = service.get_by_expense(expense.id)
    assert [i.installment_number for i in by_expense] == [1, 2, 3, 4]

    in_period = service.get_by_card_and_period(card.id, datetime(2025, 4, 1), datetime(2025, 5, 31))
    assert [i.installment_number for i in in_period] == [2, 3]


def test_mark_as_paid(db, uow, card, establishment):
    service = CreditCardInstallmentService(uow)
    expense = _expense(db, card, establishment, count=1)
    [installment] = service.create_installments(expense)
    uow.save_changes()

    paid = service.mark_as_paid(installment.id, datetime(2025, 3, 15))
    assert paid.is_paid is True
    assert paid.paid_date == datetime(2025, 3, 15)

    # pagar de novo sobrescreve a data
    again = service.mark_as_paid(installment.id, datetime(2025, 3, 20))
    assert again.paid_date == datetime(2025, 3, 20)


def test_mark_as_paid_unknown_raises(uow):
    with pytest.raises(LookupError):
        CreditCardInstallmentService(uow).mark_as_paid(404, datetime(2025, 1, 1))
