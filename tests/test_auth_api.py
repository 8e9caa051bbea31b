from datetime import date
from decimal import Decimal

from sqlmodel import select

from bpo_financeiro.models.auth_user import AuthUser
from bpo_financeiro.models.enums import TransactionType
from bpo_financeiro.models.profile import Profile
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.services import legacy_auth

from conftest import CNPJ, CNPJ_MASKED, PASSWORD, bearer, login, register


def _profile(session, cnpj=CNPJ):
    return session.exec(select(Profile).where(Profile.cnpj == cnpj)).first()


def test_register_creates_managed_identity_and_profile(client, session):
    response = register(client, CNPJ_MASKED)

    assert response.status_code == 201
    body = response.json()
    assert body["cnpj"] == CNPJ
    assert body["company_name"] == "Padaria Central"

    profile = _profile(session)
    user = session.exec(select(AuthUser).where(AuthUser.email == f"{CNPJ}@bpo.local")).first()
    assert user is not None
    assert profile.user_id == user.id
    assert profile.password_hash is None


def test_register_rejects_duplicate_cnpj(client):
    assert register(client).status_code == 201

    response = register(client, CNPJ_MASKED, company="Outra")

    assert response.status_code == 409
    assert response.json()["detail"] == "CNPJ já cadastrado"


def test_register_validates_document_and_password(client):
    assert register(client, "123").json()["detail"] == "Por favor, insira um CPF ou CNPJ válido"
    assert register(client, password="123").json()["detail"] == "A senha deve ter pelo menos 6 caracteres"

    response = client.post(
        "/auth/register",
        json={"cnpj": CNPJ, "company_name": "X", "password": PASSWORD, "confirm_password": "outra"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "As senhas não coincidem"


def test_login_with_managed_identity(client, session):
    register(client)

    response = login(client, CNPJ_MASKED)

    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "managed"
    assert body["token_type"] == "bearer"
    assert body["user"]["id"] == str(_profile(session).user_id)

    me = client.get("/auth/me", headers=bearer(response))
    assert me.status_code == 200
    assert me.json()["company_name"] == "Padaria Central"


def test_register_falls_back_to_legacy_when_signup_is_disabled(client, session, signup_disabled):
    assert register(client).status_code == 201

    profile = _profile(session)
    assert profile.user_id is None
    assert legacy_auth.is_strong_hash(profile.password_hash)

    response = login(client)
    assert response.status_code == 200
    assert response.json()["mode"] == "legacy"
    assert response.json()["user"]["id"] == str(profile.id)

    me = client.get("/auth/me", headers=bearer(response))
    assert me.status_code == 200
    assert me.json()["cnpj"] == CNPJ


def test_legacy_login_provisions_identity_and_migrates_data(client, session):
    profile = Profile(cnpj=CNPJ, company_name="Padaria Central", password_hash=legacy_auth.legacy_hash(PASSWORD, CNPJ))
    session.add(profile)
    session.commit()
    session.refresh(profile)
    legacy_id = profile.id
    session.add(
        Transaction(
            user_id=legacy_id,
            type=TransactionType.expense,
            description="Aluguel",
            amount=Decimal("1500.00"),
            due_date=date(2025, 3, 5),
            category="Moradia",
        )
    )
    session.commit()

    response = login(client)

    assert response.status_code == 200
    assert response.json()["mode"] == "managed"
    session.refresh(profile)
    assert profile.user_id is not None
    assert profile.password_hash.startswith("$")
    assert response.json()["user"]["id"] == str(profile.user_id)

    history = client.get("/transactions", headers=bearer(response)).json()
    assert [row["description"] for row in history] == ["Aluguel"]


def test_login_errors_are_undifferentiated(client):
    register(client)

    wrong_password = login(client, password="errada")
    unknown_cnpj = login(client, document="98765432000100")
    invalid_document = login(client, document="abc")

    for response in (wrong_password, unknown_cnpj, invalid_document):
        assert response.status_code == 401
        assert response.json()["detail"] == "CNPJ ou senha incorretos"


def test_me_requires_a_valid_session(client):
    assert client.get("/auth/me").status_code == 401
    response = client.get("/auth/me", headers={"Authorization": "Bearer invalido"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Sessão inválida"


def test_recovery_contact(client):
    body = client.get("/auth/recovery-contact").json()

    assert body["email"]
    assert body["whatsapp"]
