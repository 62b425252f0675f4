from sqlalchemy import select

import pytest

from caderninho.models.enums import EstablishmentType
from caderninho.models.establishment import Establishment
from caderninho.models.user import User
from caderninho.repositories.base import Repository


def _user(name="Maria", email="maria@example.com"):
    return User(name=name, email=email, password_hash="", is_active=True)


def test_add_persists_equivalent_values(uow):
    repo = Repository[User, int](uow, User)
    u = _user()
    repo.add(u)
    uow.save_changes()
    user_id = u.id

    uow.session.expunge_all()
    stored = repo.get_by_id(user_id)

    assert stored is not None
    assert stored.name == "Maria"
    assert stored.email == "maria@example.com"
    assert stored.is_active is True
    assert stored.is_deleted is False


def test_get_after_insert_returns_record(uow):
    repo = Repository[Establishment, int](uow, Establishment)
    e = Establishment(name="Posto Shell", type=EstablishmentType.GasStation)
    repo.add(e)
    uow.save_changes()

    got = repo.get_by_id(e.id)
    assert got is not None
    assert got.name == "Posto Shell"
    assert got.type == EstablishmentType.GasStation


def test_get_unknown_id_returns_none(uow):
    assert Repository[User, int](uow, User).get_by_id(999) is None


def test_delete_by_entity_hides_row(uow):
    repo = Repository[User, int](uow, User)
    u = _user()
    repo.add(u)
    uow.save_changes()

    repo.delete(u)
    uow.save_changes()

    assert repo.get_by_id(u.id) is None


def test_delete_by_id_hides_row(uow):
    repo = Repository[User, int](uow, User)
    u = _user()
    repo.add(u)
    uow.save_changes()
    user_id = u.id

    repo.delete_by_id(user_id)
    uow.save_changes()

    assert repo.get_by_id(user_id) is None


def test_delete_by_id_unknown_is_noop(uow):
    repo = Repository[User, int](uow, User)
    repo.delete_by_id(12345)
    uow.save_changes()


def test_delete_by_id_none_raises(uow):
    with pytest.raises(ValueError):
        Repository[User, int](uow, User).delete_by_id(None)


def test_soft_deleted_row_still_in_table(uow):
    repo = Repository[User, int](uow, User)
    u = _user()
    repo.add(u)
    uow.save_changes()
    repo.delete_by_id(u.id)
    uow.save_changes()

    row = uow.session.scalar(
        select(User).where(User.id == u.id).execution_options(include_deleted=True)
    )
    assert row is not None
    assert row.is_deleted is True


def test_rollback_discards_pending(uow):
    repo = Repository[User, int](uow, User)
    repo.add(_user())
    uow.rollback()

    assert uow.session.scalars(select(User)).all() == []
