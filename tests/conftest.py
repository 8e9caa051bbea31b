from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from bpo_financeiro.core import config
from bpo_financeiro.core.security import SESSION_LEGACY, SESSION_MANAGED, create_session_token
from bpo_financeiro.database import get_session
from bpo_financeiro.main import app

CNPJ = "12345678000199"
CNPJ_MASKED = "12.345.678/0001-99"
PASSWORD = "segredo1"


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def signup_disabled(monkeypatch):
    monkeypatch.setattr(config, "MANAGED_AUTH_SIGNUP_ENABLED", False)


def auth_headers(owner_id: UUID, cnpj: str = CNPJ, mode: str = SESSION_MANAGED) -> dict:
    return {"Authorization": f"Bearer {create_session_token(owner_id, cnpj, mode)}"}


def legacy_headers(profile_id: UUID, cnpj: str = CNPJ) -> dict:
    return auth_headers(profile_id, cnpj, SESSION_LEGACY)


def login(client: TestClient, document: str = CNPJ, password: str = PASSWORD):
    return client.post("/auth/login", data={"username": document, "password": password})


def register(client: TestClient, document: str = CNPJ, company: str = "Padaria Central", password: str = PASSWORD):
    return client.post(
        "/auth/register",
        json={"cnpj": document, "company_name": company, "password": password, "confirm_password": password},
    )


def bearer(response) -> dict:
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
