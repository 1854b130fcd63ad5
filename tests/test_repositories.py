import pytest

from app.core.security import verify_password
from app.repositories.base import ConstraintViolationError
from app.repositories.category import CategoryRepository
from app.repositories.producer import ProducerRepository
from conftest import VALID_CPF


def make_producer(db_session, **overrides):
    values = {
        "name": "Ana",
        "email": "a@x.com",
        "phone": "1",
        "cpf": VALID_CPF,
        "address": "Rua 1",
        "password": "Abcdef12",
    }
    values.update(overrides)
    return ProducerRepository(db_session).insert(values)


def test_insert_and_update_hash_the_password(db_session):
    repository = ProducerRepository(db_session)
    producer = make_producer(db_session)
    assert verify_password("Abcdef12", producer.password)

    repository.update(producer, {"password": "Newpass99"})
    assert producer.password != "Newpass99"
    assert verify_password("Newpass99", producer.password)

    first_hash = producer.password
    repository.update(producer, {"phone": "2"})
    assert producer.password == first_hash


def test_lookups(db_session):
    producer = make_producer(db_session)
    repository = ProducerRepository(db_session)
    assert repository.find_by_email("a@x.com").id == producer.id
    assert repository.find_by_email_or_cpf("other@x.com", VALID_CPF).id == producer.id
    assert repository.find_by_email_or_cpf("other@x.com", "00000000000") is None
    assert repository.find_all() == [producer]


def test_unique_violation_is_translated_and_rolled_back(db_session):
    repository = CategoryRepository(db_session)
    repository.insert({"name": "Frutas"})
    with pytest.raises(ConstraintViolationError):
        repository.insert({"name": "Frutas"})
    assert [c.name for c in repository.find_all()] == ["Frutas"]
