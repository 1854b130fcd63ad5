import os

# Must be set before the app (and its settings) are imported
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import keyring
import pytest
from fastapi.testclient import TestClient
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.database.base  # noqa: F401
from app.database.session import Base, build_engine, get_db
from app.main import app

VALID_CPF = "52998224725"
OTHER_CPF = "12345678909"
THIRD_CPF = "11144477735"
PASSWORD = "Abcdef12"


@pytest.fixture
def anyio_backend():
    return "asyncio"


class MemoryKeyring(KeyringBackend):
    """Keyring backend that keeps passwords in a dict for the duration of a test."""
    priority = 1

    def __init__(self):
        super().__init__()
        self.passwords = {}

    def get_password(self, service, username):
        return self.passwords.get((service, username))

    def set_password(self, service, username, password):
        self.passwords[(service, username)] = password

    def delete_password(self, service, username):
        if (service, username) not in self.passwords:
            raise PasswordDeleteError(username)
        del self.passwords[(service, username)]


@pytest.fixture
def memory_keyring():
    previous = keyring.get_keyring()
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    yield backend
    keyring.set_keyring(previous)


@pytest.fixture
def db_engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def producer_payload(**overrides):
    payload = {
        "name": "Ana",
        "establishmentName": "Sítio da Ana",
        "email": "a@x.com",
        "phone": "1",
        "cpf": VALID_CPF,
        "address": "Rua 1",
        "password": PASSWORD,
    }
    payload.update(overrides)
    return payload


def register(client, **overrides):
    response = client.post("/producers", json=producer_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["producer"]


def login(client, email="a@x.com", password=PASSWORD):
    response = client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def producer(client):
    """A registered producer together with a valid token."""
    data = register(client)
    data["token"] = login(client)
    return data


@pytest.fixture
def other_producer(client):
    data = register(client, name="Bruno", email="b@x.com", cpf=OTHER_CPF)
    data["token"] = login(client, email="b@x.com")
    return data


@pytest.fixture
def category(client, producer):
    response = client.post("/categories", json={"name": "Frutas"}, headers=auth_headers(producer["token"]))
    assert response.status_code == 201, response.text
    return response.json()


def product_payload(category_id, **overrides):
    payload = {
        "name": "Banana Prata",
        "description": "Colhida esta semana",
        "price": 12.5,
        "stock_quantity": 30,
        "measurement_unit": "cx",
        "unit_details": "Caixa com 18 kg",
        "image_url": "https://example.com/banana.png",
        "categoryId": category_id,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def product(client, producer, category):
    response = client.post(
        "/products", json=product_payload(category["id"]), headers=auth_headers(producer["token"])
    )
    assert response.status_code == 201, response.text
    return response.json()
