from datetime import datetime
from decimal import Decimal

from caderninho.models.enums import EstablishmentType, PaymentType
from caderninho.models.establishment import Establishment
from caderninho.schemas.expense import ExpenseCreate
from caderninho.schemas.monthly_spending_limit import MonthlySpendingLimitCreate
from caderninho.services.expenses import ExpenseService
from caderninho.services.monthly_spending_limits import MonthlySpendingLimitService
from caderninho.services.monthly_statement import get_monthly_statement
from caderninho.services.statement_pdf import build_statement_pdf


def _add(uow, establishment, amount, date, payment_type=PaymentType.Pix, card=None, count=1):
    return ExpenseService(uow).add_expense(
        ExpenseCreate(
            description="gasto",
            establishment_id=establishment.id,
            payment_type=payment_type,
            card_id=card.id if card is not None else None,
            amount=Decimal(amount),
            date=date,
            installment_count=count,
        )
    )


def _seed(db, uow, card, establishment):
    restaurant = Establishment(name="Cantina", type=EstablishmentType.Restaurant)
    db.add(restaurant)
    db.commit()

    _add(uow, establishment, "300.00", datetime(2025, 3, 3))
    _add(uow, establishment, "50.00", datetime(2025, 3, 20))
    _add(uow, restaurant, "120.00", datetime(2025, 3, 8))
    # fora do mês
    _add(uow, restaurant, "999.00", datetime(2025, 4, 1))
    # crédito: 2x de 45, compra em 01/03 (antes do fechamento dia 10) -> vence 15/03 e 15/04
    _add(uow, restaurant, "90.00", datetime(2025, 3, 1), PaymentType.CreditCard, card, 2)
    # crédito de fevereiro depois do fechamento -> 1ª parcela em 15/03
    _add(uow, establishment, "60.00", datetime(2025, 2, 25), PaymentType.CreditCard, card, 1)

    limits = MonthlySpendingLimitService(uow)
    limits.create(MonthlySpendingLimitCreate(
        establishment_type=EstablishmentType.Supermarket, limit_amount=Decimal("400.00"), month=3, year=2025,
    ))
    limits.create(MonthlySpendingLimitCreate(
        establishment_type=EstablishmentType.Restaurant, limit_amount=Decimal("150.00"), month=3, year=2025,
    ))
    inactive = limits.create(MonthlySpendingLimitCreate(
        establishment_type=EstablishmentType.Delivery, limit_amount=Decimal("999.00"), month=3, year=2025,
    ))
    limits.toggle_active(inactive.id, False)


def test_statement_groups_and_totals(db, uow, card, establishment):
    _seed(db, uow, card, establishment)

    st = get_monthly_statement(db, 2025, 3)

    assert [g.establishment_type for g in st.expenses_by_type] == [
        EstablishmentType.Supermarket,
        EstablishmentType.Restaurant,
    ]

    market, restaurant = st.expenses_by_type
    assert market.total_spent == Decimal("410.00")
    assert market.monthly_limit == Decimal("400.00")
    assert market.available_balance == Decimal("-10.00")
    assert market.percentage_used == Decimal("102.50")
    assert market.is_over_limit is True
    assert [t.date for t in market.transactions] == sorted((t.date for t in market.transactions), reverse=True)

    assert restaurant.total_spent == Decimal("165.00")
    assert restaurant.is_over_limit is True
    installment_tx = [t for t in restaurant.transactions if t.is_credit_card_installment]
    assert [t.installment_info for t in installment_tx] == ["1/2"]
    assert installment_tx[0].card_name == "Nubank"

    assert st.total_expenses == Decimal("575.00")
    assert st.total_limits == Decimal("550.00")
    assert st.available_balance == Decimal("-25.00")
    assert st.percentage_used == Decimal("104.55")


def test_statement_empty_month(db):
    st = get_monthly_statement(db, 2030, 1)
    assert st.expenses_by_type == []
    assert st.total_expenses == Decimal("0")
    assert st.percentage_used == Decimal("0")


def test_group_without_limit(db, uow, establishment):
    _add(uow, establishment, "10.00", datetime(2025, 5, 5))
    [group] = get_monthly_statement(db, 2025, 5).expenses_by_type
    assert group.monthly_limit is None
    assert group.percentage_used is None
    assert group.is_over_limit is False


def test_deleted_establishment_keeps_its_type(db, uow, card, establishment):
    _add(uow, establishment, "40.00", datetime(2025, 7, 2))
    _add(uow, establishment, "30.00", datetime(2025, 6, 2), PaymentType.CreditCard, card, 2)
    establishment.is_deleted = True
    db.commit()

    [group] = get_monthly_statement(db, 2025, 7).expenses_by_type
    assert group.establishment_type == EstablishmentType.Supermarket
    assert [t.establishment_name for t in group.transactions] == ["Mercado Central", "Mercado Central"]
    assert group.total_spent == Decimal("55.00")


def test_deleted_expense_left_out(db, uow, establishment):
    keep = _add(uow, establishment, "10.00", datetime(2025, 8, 1))
    gone = _add(uow, establishment, "99.00", datetime(2025, 8, 2))
    gone.is_deleted = True
    db.commit()

    [group] = get_monthly_statement(db, 2025, 8).expenses_by_type
    assert [t.expense_id for t in group.transactions] == [keep.id]


def test_zero_limit_gives_zero_percentage(db, uow, establishment):
    _add(uow, establishment, "10.00", datetime(2025, 6, 5))
    MonthlySpendingLimitService(uow).create(MonthlySpendingLimitCreate(
        establishment_type=EstablishmentType.Supermarket, limit_amount=Decimal("0"), month=6, year=2025,
    ))
    [group] = get_monthly_statement(db, 2025, 6).expenses_by_type
    assert group.percentage_used == Decimal("0")
    assert group.is_over_limit is True


def test_statement_pdf(db, uow, card, establishment):
    _seed(db, uow, card, establishment)
    pdf = build_statement_pdf(get_monthly_statement(db, 2025, 3))
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 500
