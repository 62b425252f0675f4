"""
Parcelas de cartão de crédito.

Regra de geração:
  - valor base = amount / N truncado em centavos; a última parcela absorve
    a diferença, de modo que a soma bate exatamente com o valor da despesa
  - compra até o dia de fechamento do cartão -> 1ª parcela vence no mesmo mês,
    depois do fechamento -> no mês seguinte
  - todas vencem no dia INSTALLMENT_DUE_DAY (15), uma por mês
"""
from __future__ import annotations

import logging
from datetime import datetime
from decimal import ROUND_DOWN, Decimal

from sqlalchemy import select

from caderninho.core.settings import settings
from caderninho.models.card import Card
from caderninho.models.credit_card_installment import CreditCardInstallment
from caderninho.models.expense import Expense
from caderninho.repositories.base import Repository, UnitOfWork

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def add_months(dt: datetime, months: int, day: int) -> datetime:
    """Soma meses mantendo o dia fixo (day <= 28, então sempre existe)."""
    idx = dt.year * 12 + (dt.month - 1) + months
    return datetime(idx // 12, idx % 12 + 1, day)


def first_due_date(expense_date: datetime, closing_day: int, due_day: int | None = None) -> datetime:
    due_day = due_day or settings.INSTALLMENT_DUE_DAY
    if expense_date.day <= closing_day:
        return add_months(expense_date, 0, due_day)
    return add_months(expense_date, 1, due_day)


def split_amount(amount: Decimal, count: int) -> list[Decimal]:
    base = (Decimal(amount) / count).quantize(CENTS, rounding=ROUND_DOWN)
    last = Decimal(amount) - base * (count - 1)
    return [base] * (count - 1) + [last]


class CreditCardInstallmentService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.session = uow.session
        self.installments = Repository[CreditCardInstallment, int](uow, CreditCardInstallment)
        self.cards = Repository[Card, int](uow, Card)

    def create_installments(self, expense: Expense) -> list[CreditCardInstallment]:
        """
        Gera as parcelas da despesa e adiciona na sessão.
        O commit fica com quem chamou (junto com a própria despesa).
        """
        logger.info(
            "Criando parcelas para a despesa %s com %s parcelas", expense.id, expense.installment_count
        )

        if expense.installment_count is None or expense.installment_count < 1:
            raise ValueError("O número de parcelas deve ser maior ou igual a 1")

        if expense.card_id is None:
            raise ValueError("A despesa deve ter um cartão de crédito associado")

        card = self.cards.get_by_id(expense.card_id)
        if card is None:
            raise ValueError(f"Cartão com ID {expense.card_id} não encontrado")

        if card.closing_day is None:
            raise ValueError(f"O cartão '{card.name}' não possui dia de fechamento configurado")

        amounts = split_amount(expense.amount, expense.installment_count)
        first = first_due_date(expense.date, card.closing_day)

        installments: list[CreditCardInstallment] = []
        for number, amount in enumerate(amounts, start=1):
            due_date = add_months(first, number - 1, settings.INSTALLMENT_DUE_DAY)
            installment = CreditCardInstallment(
                card_id=card.id,
                expense=expense,
                installment_number=number,
                total_installments=expense.installment_count,
                due_date=due_date,
                amount=amount,
                is_paid=False,
            )
            self.installments.add(installment)
            installments.append(installment)
            logger.debug(
                "Parcela %s/%s criada com vencimento em %s no valor de %s",
                number, expense.installment_count, due_date.strftime("%d/%m/%Y"), amount,
            )

        logger.info("Criadas %s parcelas para a despesa %s", len(installments), expense.id)
        return installments

    def get_by_expense(self, expense_id: int) -> list[CreditCardInstallment]:
        q = (
            select(CreditCardInstallment)
            .where(CreditCardInstallment.expense_id == expense_id)
            .order_by(CreditCardInstallment.installment_number)
        )
        return list(self.session.scalars(q).unique())

    def get_by_card_and_period(self, card_id: int, start: datetime, end: datetime) -> list[CreditCardInstallment]:
        logger.info(
            "Buscando parcelas do cartão %s entre %s e %s",
            card_id, start.strftime("%d/%m/%Y"), end.strftime("%d/%m/%Y"),
        )
        q = (
            select(CreditCardInstallment)
            .where(CreditCardInstallment.card_id == card_id)
            .where(CreditCardInstallment.due_date >= start)
            .where(CreditCardInstallment.due_date <= end)
            .order_by(CreditCardInstallment.due_date, CreditCardInstallment.installment_number)
        )
        return list(self.session.scalars(q).unique())

    def mark_as_paid(self, installment_id: int, paid_date: datetime) -> CreditCardInstallment:
        installment = self.installments.get_by_id(installment_id)
        if installment is None:
            raise LookupError(f"Parcela com ID {installment_id} não encontrada")

        if installment.is_paid:
            logger.warning("Parcela %s já está marcada como paga", installment_id)

        installment.is_paid = True
        installment.paid_date = paid_date
        self.uow.save_changes()

        logger.info("Parcela %s marcada como paga em %s", installment_id, paid_date.strftime("%d/%m/%Y"))
        return installment
