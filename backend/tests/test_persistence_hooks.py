import time
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from caderninho.models.enums import CardBrand, CardType
from caderninho.db import utcnow
from caderninho.models.card import Card


def _card(db, name="Inter"):
    c = Card(name=name, type=CardType.Debit, brand=CardBrand.Visa, last_four_digits="9876")
    db.add(c)
    db.commit()
    return c


def test_timestamps_set_on_insert(db):
    c = _card(db)
    assert c.created_at is not None
    assert c.updated_at is not None
    assert c.created_at == c.updated_at


def test_updated_at_bumped_on_change(db):
    c = _card(db)
    created = c.created_at
    before = c.updated_at

    time.sleep(0.01)
    c.name = "Inter Black"
    db.commit()

    assert c.created_at == created
    assert c.updated_at > before


def test_soft_deleted_hidden_from_queries(db):
    keep = _card(db, "Keep")
    gone = _card(db, "Gone")
    gone.is_deleted = True
    db.commit()

    names = [c.name for c in db.scalars(select(Card))]
    assert names == ["Keep"]
    assert keep.id != gone.id


def test_include_deleted_opt_out(db):
    c = _card(db)
    c.is_deleted = True
    db.commit()

    rows = db.scalars(select(Card).execution_options(include_deleted=True)).all()
    assert [r.id for r in rows] == [c.id]


def test_count_with_explicit_filter(db):
    _card(db, "A")
    b = _card(db, "B")
    b.is_deleted = True
    db.commit()

    assert db.scalar(select(func.count(Card.id)).where(Card.is_deleted.is_(False))) == 1


def test_utcnow_is_naive_utc():
    now = utcnow()
    assert now.tzinfo is None
    assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - now) < timedelta(seconds=5)
