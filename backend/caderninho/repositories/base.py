"""
Repositório genérico + Unit of Work sobre a Session do SQLAlchemy.

A camada é um repasse direto para a sessão: o change tracking, as queries
e a transação são do ORM. Exclusões são lógicas (is_deleted) e ficam
invisíveis pelo filtro global definido em caderninho.db.
"""
from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from caderninho.db import utcnow
from caderninho.models.base import BaseEntity

TEntity = TypeVar("TEntity", bound=BaseEntity)
TKey = TypeVar("TKey")


class UnitOfWork:
    """Fronteira de transação: agrupa as operações e confirma tudo num único commit."""

    def __init__(self, session: Session):
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def save_changes(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()


class Repository(Generic[TEntity, TKey]):
    def __init__(self, uow: UnitOfWork, model: type[TEntity]):
        self.uow = uow
        self.session = uow.session
        self.model = model

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def delete(self, entity: TEntity) -> None:
        entity.is_deleted = True

    def delete_by_id(self, id: TKey) -> None:
        if id is None:
            raise ValueError("id")
        self.session.execute(
            update(self.model)
            .where(self.model.id == id)
            .values(is_deleted=True, updated_at=utcnow())
        )

    def get_by_id(self, id: TKey) -> TEntity | None:
        return self.session.scalar(select(self.model).where(self.model.id == id))
