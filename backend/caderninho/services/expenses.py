from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import select, update

from caderninho.db import to_naive_utc, utcnow
from caderninho.models.card import Card
from caderninho.models.credit_card_installment import CreditCardInstallment
from caderninho.models.enums import EstablishmentType, PaymentType
from caderninho.models.establishment import Establishment
from caderninho.models.expense import Expense
from caderninho.models.user import User
from caderninho.repositories.base import Repository, UnitOfWork
from caderninho.schemas.expense import ExpenseCreate, ImportCardInvoiceRequest
from caderninho.services.installments import CreditCardInstallmentService

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.session = uow.session
        self.expenses = Repository[Expense, int](uow, Expense)
        self.users = Repository[User, int](uow, User)
        self.cards = Repository[Card, int](uow, Card)
        self.establishments = Repository[Establishment, int](uow, Establishment)
        self.installment_service = CreditCardInstallmentService(uow)

    def _build(self, payload: ExpenseCreate) -> Expense:
        if payload.user_id is not None and self.users.get_by_id(payload.user_id) is None:
            raise ValueError("Usuário não encontrado")

        if self.establishments.get_by_id(payload.establishment_id) is None:
            raise ValueError("Estabelecimento não encontrado")

        if payload.payment_type.requires_card:
            if payload.card_id is None:
                raise ValueError(
                    "O cartão é obrigatório quando o tipo de pagamento é Cartão de Crédito ou Cartão de Débito"
                )
            if self.cards.get_by_id(payload.card_id) is None:
                raise ValueError("Cartão não encontrado")

        expense = Expense(
            user_id=payload.user_id,
            description=payload.description.strip(),
            establishment_id=payload.establishment_id,
            payment_type=payload.payment_type,
            card_id=payload.card_id,
            amount=payload.amount,
            date=to_naive_utc(payload.date),
            installment_count=payload.installment_count,
        )
        self.expenses.add(expense)

        if payload.payment_type == PaymentType.CreditCard:
            self.installment_service.create_installments(expense)
        return expense

    def add_expense(self, payload: ExpenseCreate) -> Expense:
        try:
            expense = self._build(payload)
            self.uow.save_changes()
        except Exception:
            self.uow.rollback()
            logger.exception("Erro ao criar despesa: %s", payload.description)
            raise

        logger.info(
            "Despesa criada com sucesso: %s - %s - R$ %s", expense.id, expense.description, expense.amount
        )
        return expense

    def import_card_invoice(self, request: ImportCardInvoiceRequest) -> list[Expense]:
        """
        Importa as linhas de uma fatura de cartão como despesas à vista no crédito.
        - linhas com valor <= 0 (estornos/pagamentos) são ignoradas
        - estabelecimento é procurado pelo nome da fatura; se não existir, é criado como "Outros"
        - linha repetida (mesma data, estabelecimento, valor e cartão) é ignorada
        """
        logger.info(
            "Iniciando importação de fatura para o cartão %s com %s linhas", request.card_id, len(request.lines)
        )
        try:
            if request.user_id is not None and self.users.get_by_id(request.user_id) is None:
                raise ValueError("Usuário não encontrado")

            if self.cards.get_by_id(request.card_id) is None:
                raise ValueError("Cartão não encontrado")

            created: list[Expense] = []
            for line in request.lines:
                if line.amount <= 0:
                    continue

                establishment = self.session.scalar(
                    select(Establishment).where(Establishment.card_invoice_name == line.establishment_name)
                )
                if establishment is None:
                    logger.info(
                        "Estabelecimento '%s' não encontrado. Criando novo com tipo 'Outros'",
                        line.establishment_name,
                    )
                    establishment = Establishment(
                        name=line.establishment_name,
                        card_invoice_name=line.establishment_name,
                        type=EstablishmentType.Other,
                    )
                    self.establishments.add(establishment)
                    self.session.flush()

                line_date = to_naive_utc(line.date)
                day_start = line_date.replace(hour=0, minute=0, second=0, microsecond=0)
                duplicate = self.session.scalar(
                    select(Expense)
                    .where(Expense.date >= day_start)
                    .where(Expense.date < day_start + timedelta(days=1))
                    .where(Expense.establishment_id == establishment.id)
                    .where(Expense.amount == line.amount)
                    .where(Expense.card_id == request.card_id)
                    .limit(1)
                )
                if duplicate is not None:
                    logger.warning(
                        "Despesa duplicada ignorada: %s - %s - R$ %s",
                        line_date.strftime("%d/%m/%Y"), line.establishment_name, line.amount,
                    )
                    continue

                expense = self._build(
                    ExpenseCreate(
                        user_id=request.user_id,
                        description=f"Compra em {line.establishment_name}",
                        establishment_id=establishment.id,
                        payment_type=PaymentType.CreditCard,
                        card_id=request.card_id,
                        amount=line.amount,
                        date=line_date,
                        installment_count=1,
                    )
                )
                # flush por linha: a checagem de duplicidade da próxima linha precisa enxergar esta
                self.session.flush()
                created.append(expense)

            self.uow.save_changes()
        except Exception:
            self.uow.rollback()
            logger.exception("Erro ao importar fatura do cartão %s", request.card_id)
            raise

        logger.info("Importação concluída. %s despesas criadas", len(created))
        return created

    def delete_expense(self, expense_id: int) -> bool:
        expense = self.expenses.get_by_id(expense_id)
        if expense is None:
            return False

        self.expenses.delete(expense)
        self.session.execute(
            update(CreditCardInstallment)
            .where(CreditCardInstallment.expense_id == expense_id)
            .values(is_deleted=True, updated_at=utcnow())
        )
        self.uow.save_changes()
        logger.info("Despesa %s excluída (com parcelas)", expense_id)
        return True
