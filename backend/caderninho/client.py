"""
Cliente HTTP da API do Caderninho (mesmas operações da camada de serviço do app).

Usa os próprios schemas/enums do backend para montar os corpos, então a
numeração dos enums do cliente é sempre a do servidor.

    with CaderninhoClient("http://localhost:8000") as api:
        api.create_card(CardCreate(name="Nubank", type=CardType.Credit, ...))
"""
from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from enum import IntEnum
from typing import Any

import httpx
from pydantic import BaseModel

from caderninho.models.enums import EstablishmentType
from caderninho.schemas.card import CardCreate
from caderninho.schemas.establishment import EstablishmentCreate
from caderninho.schemas.expense import ExpenseCreate, ImportCardInvoiceRequest
from caderninho.schemas.monthly_entry import MonthlyEntryCreate
from caderninho.schemas.monthly_spending_limit import MonthlySpendingLimitCreate
from caderninho.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10


def _body(payload: BaseModel) -> dict[str, Any]:
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


def _params(**kwargs: Any) -> dict[str, Any]:
    # só envia o que foi informado
    out: dict[str, Any] = {}
    for key, value in kwargs.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            out[key] = "true" if value else "false"
        elif isinstance(value, datetime):
            out[key] = value.isoformat()
        else:
            out[key] = int(value) if isinstance(value, IntEnum) else value
    return out


class CaderninhoClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        timeout_s: int = DEFAULT_TIMEOUT_S,
        http: httpx.Client | None = None,
    ):
        if http is None and not base_url:
            raise ValueError("Informe base_url ou um httpx.Client")

        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout_s)
        if token:
            self._http.headers["Authorization"] = f"Bearer {token}"

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "CaderninhoClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug("[API Request] %s %s", method, url)
        r = self._http.request(method, url, **kwargs)
        if r.is_error:
            logger.warning("[API Error] %s %s -> %s", method, url, r.status_code)
        r.raise_for_status()
        if r.status_code == 204 or not r.content:
            return None
        if r.headers.get("content-type", "").startswith("application/json"):
            return r.json()
        return r.content

    # --- auth ---------------------------------------------------------------

    def login(self, email: str, password: str) -> str:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        token = data["access_token"]
        self._http.headers["Authorization"] = f"Bearer {token}"
        return token

    # --- users --------------------------------------------------------------

    def list_users(self) -> list[dict]:
        return self._request("GET", "/api/users")

    def get_user(self, user_id: int) -> dict:
        return self._request("GET", f"/api/users/{user_id}")

    def create_user(self, payload: UserCreate) -> dict:
        return self._request("POST", "/api/users", json=_body(payload))

    def update_user(self, user_id: int, payload: UserUpdate) -> dict:
        return self._request("PUT", f"/api/users/{user_id}", json=_body(payload))

    def delete_user(self, user_id: int) -> None:
        self._request("DELETE", f"/api/users/{user_id}")

    # --- cards --------------------------------------------------------------

    def list_cards(self, page_number: int = 1, page_size: int = 10, search_text: str | None = None) -> dict:
        params = _params(pageNumber=page_number, pageSize=page_size, searchText=search_text)
        return self._request("GET", "/api/cards", params=params)

    def get_card(self, card_id: int) -> dict:
        return self._request("GET", f"/api/cards/{card_id}")

    def create_card(self, payload: CardCreate) -> dict:
        return self._request("POST", "/api/cards", json=_body(payload))

    def update_card(self, card_id: int, payload: CardCreate) -> dict:
        return self._request("PUT", f"/api/cards/{card_id}", json=_body(payload))

    def delete_card(self, card_id: int) -> None:
        self._request("DELETE", f"/api/cards/{card_id}")

    # --- establishments -----------------------------------------------------

    def list_establishments(
        self,
        page_number: int = 1,
        page_size: int = 10,
        search_text: str | None = None,
        type: EstablishmentType | None = None,
    ) -> dict:
        params = _params(pageNumber=page_number, pageSize=page_size, searchText=search_text, type=type)
        return self._request("GET", "/api/establishments", params=params)

    def get_establishment(self, establishment_id: int) -> dict:
        return self._request("GET", f"/api/establishments/{establishment_id}")

    def create_establishment(self, payload: EstablishmentCreate) -> dict:
        return self._request("POST", "/api/establishments", json=_body(payload))

    def update_establishment(self, establishment_id: int, payload: EstablishmentCreate) -> dict:
        return self._request("PUT", f"/api/establishments/{establishment_id}", json=_body(payload))

    def delete_establishment(self, establishment_id: int) -> None:
        self._request("DELETE", f"/api/establishments/{establishment_id}")

    # --- expenses -----------------------------------------------------------

    def list_expenses(
        self,
        page_number: int = 1,
        page_size: int = 10,
        year: int | None = None,
        month: int | None = None,
        search_text: str | None = None,
    ) -> dict:
        params = _params(pageNumber=page_number, pageSize=page_size, year=year, month=month, searchText=search_text)
        return self._request("GET", "/api/expenses", params=params)

    def get_expense(self, expense_id: int) -> dict:
        return self._request("GET", f"/api/expenses/{expense_id}")

    def create_expense(self, payload: ExpenseCreate) -> dict:
        return self._request("POST", "/api/expenses", json=_body(payload))

    def import_card_invoice(self, payload: ImportCardInvoiceRequest) -> list[dict]:
        return self._request("POST", "/api/expenses/import-invoice", json=_body(payload))

    def get_expense_installments(self, expense_id: int) -> list[dict]:
        return self._request("GET", f"/api/expenses/{expense_id}/installments")

    def delete_expense(self, expense_id: int) -> None:
        self._request("DELETE", f"/api/expenses/{expense_id}")

    # --- installments -------------------------------------------------------

    def list_installments(self, card_id: int, start: datetime, end: datetime) -> list[dict]:
        return self._request("GET", "/api/installments", params=_params(cardId=card_id, start=start, end=end))

    def pay_installment(self, installment_id: int, paid_date: datetime | None = None) -> dict:
        body = {"paidDate": paid_date.isoformat()} if paid_date else {}
        return self._request("PATCH", f"/api/installments/{installment_id}/pay", json=body)

    # --- monthly entries ----------------------------------------------------

    def list_monthly_entries(
        self,
        page_number: int = 1,
        page_size: int = 10,
        search_text: str | None = None,
        month: int | None = None,
        year: int | None = None,
        is_active: bool | None = None,
    ) -> dict:
        params = _params(
            pageNumber=page_number, pageSize=page_size, searchText=search_text,
            month=month, year=year, isActive=is_active,
        )
        return self._request("GET", "/api/monthlyentries", params=params)

    def get_monthly_entry(self, entry_id: int) -> dict:
        return self._request("GET", f"/api/monthlyentries/{entry_id}")

    def create_monthly_entry(self, payload: MonthlyEntryCreate) -> dict:
        return self._request("POST", "/api/monthlyentries", json=_body(payload))

    def update_monthly_entry(self, entry_id: int, payload: MonthlyEntryCreate) -> dict:
        return self._request("PUT", f"/api/monthlyentries/{entry_id}", json=_body(payload))

    def delete_monthly_entry(self, entry_id: int) -> None:
        self._request("DELETE", f"/api/monthlyentries/{entry_id}")

    def toggle_monthly_entry(self, entry_id: int, is_active: bool) -> dict:
        return self._request("PATCH", f"/api/monthlyentries/{entry_id}/toggle-active", json=is_active)

    def duplicate_monthly_entry(self, entry_id: int, amount: Decimal) -> dict:
        return self._request("POST", f"/api/monthlyentries/{entry_id}/duplicate", json={"amount": str(amount)})

    # --- monthly spending limits --------------------------------------------

    def list_monthly_spending_limits(
        self,
        page_number: int = 1,
        page_size: int = 10,
        establishment_type: EstablishmentType | None = None,
        month: int | None = None,
        year: int | None = None,
        is_active: bool | None = None,
    ) -> dict:
        params = _params(
            pageNumber=page_number, pageSize=page_size, establishmentType=establishment_type,
            month=month, year=year, isActive=is_active,
        )
        return self._request("GET", "/api/monthlyspendinglimits", params=params)

    def get_monthly_spending_limit(self, limit_id: int) -> dict:
        return self._request("GET", f"/api/monthlyspendinglimits/{limit_id}")

    def create_monthly_spending_limit(self, payload: MonthlySpendingLimitCreate) -> dict:
        return self._request("POST", "/api/monthlyspendinglimits", json=_body(payload))

    def update_monthly_spending_limit(self, limit_id: int, payload: MonthlySpendingLimitCreate) -> dict:
        return self._request("PUT", f"/api/monthlyspendinglimits/{limit_id}", json=_body(payload))

    def delete_monthly_spending_limit(self, limit_id: int) -> None:
        self._request("DELETE", f"/api/monthlyspendinglimits/{limit_id}")

    def toggle_monthly_spending_limit(self, limit_id: int, is_active: bool) -> dict:
        return self._request("PATCH", f"/api/monthlyspendinglimits/{limit_id}/toggle-active", json=is_active)

    def duplicate_monthly_spending_limit(self, limit_id: int, amount: Decimal) -> dict:
        return self._request(
            "POST", f"/api/monthlyspendinglimits/{limit_id}/duplicate", json={"amount": str(amount)}
        )

    # --- monthly statement --------------------------------------------------

    def get_monthly_statement(self, year: int, month: int) -> dict:
        return self._request("GET", "/api/monthlystatement", params=_params(year=year, month=month))

    def get_monthly_statement_pdf(self, year: int, month: int) -> bytes:
        return self._request("GET", "/api/monthlystatement/pdf", params=_params(year=year, month=month))
