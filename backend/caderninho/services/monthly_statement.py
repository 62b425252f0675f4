"""
Extrato mensal: despesas do mês agrupadas por tipo de estabelecimento,
comparadas com os limites de gasto ativos do mesmo mês.

Entram no mês:
  - despesas que NÃO são cartão de crédito, pela data da despesa
  - parcelas de cartão de crédito, pela data de vencimento
"""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from caderninho.models.credit_card_installment import CreditCardInstallment
from caderninho.models.enums import EstablishmentType, PaymentType
from caderninho.models.expense import Expense
from caderninho.models.monthly_spending_limit import MonthlySpendingLimit
from caderninho.schemas.statement import ExpenseByType, MonthlyStatement, StatementTransaction
from caderninho.services.installments import add_months

logger = logging.getLogger(__name__)

NOT_INFORMED = "Não informado"
ZERO = Decimal("0")


def _percentage(spent: Decimal, limit: Decimal) -> Decimal:
    if limit <= 0:
        return ZERO
    return (spent / limit * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    start = datetime(year, month, 1)
    return start, add_months(start, 1, 1)


# estabelecimentos e cartões excluídos continuam no extrato: o gasto passado
# fica no tipo real. Só despesas e parcelas excluídas saem.
def _non_credit_card_expenses(db: Session, start: datetime, end: datetime) -> list[tuple[EstablishmentType, StatementTransaction]]:
    q = (
        select(Expense)
        .where(Expense.date >= start)
        .where(Expense.date < end)
        .where(Expense.payment_type != PaymentType.CreditCard)
        .where(Expense.is_deleted.is_(False))
        .execution_options(include_deleted=True)
    )
    out = []
    for e in db.scalars(q).unique():
        est = e.establishment
        out.append((
            est.type if est is not None else EstablishmentType.Other,
            StatementTransaction(
                expense_id=e.id,
                description=e.description,
                establishment_name=est.name if est is not None else NOT_INFORMED,
                date=e.date,
                amount=Decimal(e.amount),
                payment_type=e.payment_type,
                payment_type_name=e.payment_type.label,
                card_name=e.card.name if e.card is not None else None,
                is_credit_card_installment=False,
            ),
        ))
    return out


def _credit_card_installments(db: Session, start: datetime, end: datetime) -> list[tuple[EstablishmentType, StatementTransaction]]:
    q = (
        select(CreditCardInstallment)
        .options(joinedload(CreditCardInstallment.expense))
        .where(CreditCardInstallment.due_date >= start)
        .where(CreditCardInstallment.due_date < end)
        .where(CreditCardInstallment.is_deleted.is_(False))
        .execution_options(include_deleted=True)
    )
    out = []
    for i in db.scalars(q).unique():
        expense = i.expense
        est = expense.establishment if expense is not None else None
        out.append((
            est.type if est is not None else EstablishmentType.Other,
            StatementTransaction(
                expense_id=i.expense_id,
                description=expense.description if expense is not None else NOT_INFORMED,
                establishment_name=est.name if est is not None else NOT_INFORMED,
                date=expense.date if expense is not None else i.due_date,
                amount=Decimal(i.amount),
                payment_type=PaymentType.CreditCard,
                payment_type_name=PaymentType.CreditCard.label,
                card_name=i.card.name if i.card is not None else None,
                installment_info=f"{i.installment_number}/{i.total_installments}",
                is_credit_card_installment=True,
                due_date=i.due_date,
            ),
        ))
    return out


def get_monthly_statement(db: Session, year: int, month: int) -> MonthlyStatement:
    start, end = _month_bounds(year, month)

    grouped: dict[EstablishmentType, list[StatementTransaction]] = defaultdict(list)
    for est_type, tx in _non_credit_card_expenses(db, start, end) + _credit_card_installments(db, start, end):
        grouped[est_type].append(tx)

    limits = list(
        db.scalars(
            select(MonthlySpendingLimit)
            .where(MonthlySpendingLimit.year == year)
            .where(MonthlySpendingLimit.month == month)
            .where(MonthlySpendingLimit.is_active.is_(True))
        )
    )
    limit_by_type = {l.establishment_type: Decimal(l.limit_amount) for l in limits}

    by_type: list[ExpenseByType] = []
    for est_type, txs in grouped.items():
        total = sum((t.amount for t in txs), ZERO)
        item = ExpenseByType(
            establishment_type=est_type,
            establishment_type_name=est_type.label,
            total_spent=total,
            transactions=sorted(txs, key=lambda t: t.date, reverse=True),
        )
        limit = limit_by_type.get(est_type)
        if limit is not None:
            item.monthly_limit = limit
            item.available_balance = limit - total
            item.percentage_used = _percentage(total, limit)
            item.is_over_limit = total > limit
        by_type.append(item)

    by_type.sort(key=lambda e: e.total_spent, reverse=True)

    total_expenses = sum((e.total_spent for e in by_type), ZERO)
    total_limits = sum(limit_by_type.values(), ZERO)

    statement = MonthlyStatement(
        year=year,
        month=month,
        expenses_by_type=by_type,
        total_expenses=total_expenses,
        total_limits=total_limits,
        available_balance=total_limits - total_expenses,
        percentage_used=_percentage(total_expenses, total_limits),
    )

    logger.info(
        "Extrato gerado: %02d/%s - Total: %s, Limite: %s, Disponível: %s",
        month, year, total_expenses, total_limits, statement.available_balance,
    )
    return statement
