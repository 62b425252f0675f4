from datetime import datetime
from decimal import Decimal

import httpx
import pytest

from caderninho.client import CaderninhoClient
from caderninho.models.enums import (
    CardBrand,
    CardType,
    EstablishmentType,
    MonthlyEntryType,
    OperationType,
    PaymentType,
)
from caderninho.schemas.card import CardCreate
from caderninho.schemas.establishment import EstablishmentCreate
from caderninho.schemas.expense import CardInvoiceLine, ExpenseCreate, ImportCardInvoiceRequest
from caderninho.schemas.monthly_entry import MonthlyEntryCreate
from caderninho.schemas.monthly_spending_limit import MonthlySpendingLimitCreate
from caderninho.schemas.user import UserCreate


@pytest.fixture
def api(client):
    return CaderninhoClient(http=client)


def test_requires_base_url_or_http():
    with pytest.raises(ValueError):
        CaderninhoClient()


def test_client_end_to_end(api):
    user = api.create_user(UserCreate(name="Carla", email="carla@example.com", password="abc12345"))
    assert [u["id"] for u in api.list_users()] == [user["id"]]

    card = api.create_card(
        CardCreate(name="Nubank", type=CardType.Credit, brand=CardBrand.Mastercard, last_four_digits="4321", closing_day=5)
    )
    est = api.create_establishment(EstablishmentCreate(name="Drogasil", type=EstablishmentType.Pharmacy))
    assert api.list_establishments(type=EstablishmentType.Pharmacy)["totalItems"] == 1
    assert api.list_establishments(type=EstablishmentType.Supermarket)["totalItems"] == 0

    expense = api.create_expense(ExpenseCreate(
        user_id=user["id"],
        description="Remédios",
        establishment_id=est["id"],
        payment_type=PaymentType.CreditCard,
        card_id=card["id"],
        amount=Decimal("89.90"),
        date=datetime(2025, 3, 3, 14, 0),
        installment_count=2,
    ))
    installments = api.get_expense_installments(expense["id"])
    assert [i["amount"] for i in installments] == [44.95, 44.95]

    listed = api.list_installments(card["id"], datetime(2025, 3, 1), datetime(2025, 3, 31))
    assert [i["installmentNumber"] for i in listed] == [1]
    assert api.pay_installment(listed[0]["id"])["isPaid"] is True

    imported = api.import_card_invoice(ImportCardInvoiceRequest(
        card_id=card["id"],
        lines=[CardInvoiceLine(date=datetime(2025, 3, 4), establishment_name="NETFLIX.COM", amount=Decimal("55.90"))],
    ))
    assert len(imported) == 1

    assert api.list_expenses(year=2025, month=3)["totalItems"] == 2

    entry = api.create_monthly_entry(MonthlyEntryCreate(
        type=MonthlyEntryType.MonthlyBill, description="Internet", amount=Decimal("120.00"),
        operation=OperationType.Expense, month=3, year=2025,
    ))
    assert api.toggle_monthly_entry(entry["id"], False)["isActive"] is False
    assert api.duplicate_monthly_entry(entry["id"], Decimal("125.00"))["month"] == 4
    assert api.list_monthly_entries(is_active=True)["totalItems"] == 1

    limit = api.create_monthly_spending_limit(MonthlySpendingLimitCreate(
        establishment_type=EstablishmentType.Pharmacy, limit_amount=Decimal("100.00"), month=3, year=2025,
    ))
    assert api.list_monthly_spending_limits(establishment_type=EstablishmentType.Pharmacy)["totalItems"] == 1

    statement = api.get_monthly_statement(2025, 3)
    pharmacy = [g for g in statement["expensesByType"] if g["establishmentType"] == EstablishmentType.Pharmacy]
    assert pharmacy[0]["totalSpent"] == 44.95
    assert pharmacy[0]["monthlyLimit"] == 100.0

    assert api.get_monthly_statement_pdf(2025, 3).startswith(b"%PDF")

    api.delete_monthly_spending_limit(limit["id"])
    api.delete_expense(expense["id"])
    assert api.list_expenses(year=2025, month=3)["totalItems"] == 1


def test_errors_raise_http_status_error(api):
    with pytest.raises(httpx.HTTPStatusError) as exc:
        api.get_card(999)
    assert exc.value.response.status_code == 404

    with pytest.raises(httpx.HTTPStatusError) as exc:
        api.get_monthly_statement(1990, 1)
    assert exc.value.response.status_code == 400
