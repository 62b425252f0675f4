import os

# banco em memória compartilhado (StaticPool), precisa estar definido antes de importar o app
os.environ["CADERNINHO_DATABASE_URL"] = "sqlite://"
os.environ.setdefault("CADERNINHO_AUTH_ENABLED", "false")
os.environ.setdefault("CADERNINHO_ENV", "lab")

import pytest
from fastapi.testclient import TestClient

import caderninho.models  # noqa: F401  registra as tabelas no metadata
from caderninho.db import Base, SessionLocal, engine, get_db
from caderninho.main import app
from caderninho.models.card import Card
from caderninho.models.enums import CardBrand, CardType, EstablishmentType
from caderninho.models.establishment import Establishment
from caderninho.repositories.base import UnitOfWork


# schema zerado a cada teste: cada teste enxerga só o que criou
@pytest.fixture(autouse=True)
def _reset_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def uow(db):
    return UnitOfWork(db)


@pytest.fixture
def client():
    def _get_db():
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def card(db):
    c = Card(name="Nubank", type=CardType.Credit, brand=CardBrand.Mastercard, last_four_digits="1234", closing_day=10)
    db.add(c)
    db.commit()
    return c


@pytest.fixture
def establishment(db):
    e = Establishment(name="Mercado Central", type=EstablishmentType.Supermarket, card_invoice_name="MERCADO CENTRAL")
    db.add(e)
    db.commit()
    return e

