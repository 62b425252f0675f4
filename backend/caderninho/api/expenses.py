from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import extract
from sqlalchemy.exc import SQLAlchemyError
import logging

from caderninho.api.paging import PageParams, paginate
from caderninho.deps import get_uow
from caderninho.models.expense import Expense
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.common import PagedResponse
from caderninho.schemas.expense import ExpenseCreate, ExpenseOut, ImportCardInvoiceRequest
from caderninho.schemas.installment import InstallmentOut
from caderninho.services.expenses import ExpenseService
from caderninho.services.installments import CreditCardInstallmentService

router = APIRouter(prefix="/api/expenses", tags=["expenses"])

logger = logging.getLogger(__name__)


@router.get("", response_model=PagedResponse[ExpenseOut])
def list_expenses(
    page: PageParams = Depends(),
    year: int | None = Query(None, ge=2000, le=2100),
    month: int | None = Query(None, ge=1, le=12),
    uow: UnitOfWork = Depends(get_uow),
):
    criteria = []
    if year is not None:
        criteria.append(extract("year", Expense.date) == year)
    if month is not None:
        criteria.append(extract("month", Expense.date) == month)
    if page.search_text:
        criteria.append(Expense.description.ilike(f"%{page.search_text}%"))
    return paginate(uow.session, Expense, criteria, [Expense.date.desc(), Expense.id.desc()], page, ExpenseOut)


@router.get("/{expense_id}", response_model=ExpenseOut)
def get_expense(expense_id: int, uow: UnitOfWork = Depends(get_uow)):
    try:
        e = Repository[Expense, int](uow, Expense).get_by_id(expense_id)

        if not e:
            raise HTTPException(status_code=404, detail="Despesa não encontrada")

        return e

    except HTTPException:
        raise

    except SQLAlchemyError:
        logger.exception("DB error fetching expense_id=%s", expense_id)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.post("", response_model=ExpenseOut, status_code=201)
def create_expense(payload: ExpenseCreate, uow: UnitOfWork = Depends(get_uow)):
    try:
        return ExpenseService(uow).add_expense(payload)
    except ValueError as ex:
        logger.warning("Erro de validação ao criar despesa: %s", ex)
        raise HTTPException(status_code=400, detail=str(ex))


@router.post("/import-invoice", response_model=list[ExpenseOut], status_code=201)
def import_card_invoice(payload: ImportCardInvoiceRequest, uow: UnitOfWork = Depends(get_uow)):
    try:
        return ExpenseService(uow).import_card_invoice(payload)
    except ValueError as ex:
        logger.warning("Erro de validação ao importar fatura: %s", ex)
        raise HTTPException(status_code=400, detail=str(ex))


@router.get("/{expense_id}/installments", response_model=list[InstallmentOut])
def list_expense_installments(expense_id: int, uow: UnitOfWork = Depends(get_uow)):
    if Repository[Expense, int](uow, Expense).get_by_id(expense_id) is None:
        raise HTTPException(status_code=404, detail="Despesa não encontrada")
    return CreditCardInstallmentService(uow).get_by_expense(expense_id)


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: int, uow: UnitOfWork = Depends(get_uow)):
    if not ExpenseService(uow).delete_expense(expense_id):
        raise HTTPException(status_code=404, detail="Despesa não encontrada")
    return Response(status_code=204)
