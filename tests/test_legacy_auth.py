import hashlib
from datetime import date
from decimal import Decimal

import pytest
from sqlmodel import select

from bpo_financeiro.core.exceptions import DuplicateTaxIdError
from bpo_financeiro.models.auth_user import AuthUser
from bpo_financeiro.models.enums import PatternKind, TransactionType
from bpo_financeiro.models.pattern import Pattern
from bpo_financeiro.models.profile import Profile
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.services import legacy_auth

from conftest import CNPJ, PASSWORD


def _legacy_profile(session, password=PASSWORD, cnpj=CNPJ):
    profile = Profile(cnpj=cnpj, company_name="Padaria Central", password_hash=legacy_auth.legacy_hash(password, cnpj))
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


def _identity(session, email="outro@bpo.local"):
    user = AuthUser(email=email, encrypted_password="x")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def test_legacy_hash_matches_md5_of_salted_password():
    # md5("segredo1" + "12345678000199" + "bpo_salt")
    expected = hashlib.md5(b"segredo112345678000199bpo_salt").hexdigest()
    assert legacy_auth.legacy_hash(PASSWORD, CNPJ) == expected
    assert not legacy_auth.is_strong_hash(expected)


def test_strong_hash_is_bcrypt_over_salted_password():
    stored = legacy_auth.strong_hash(PASSWORD, CNPJ)

    assert stored.startswith("$2")
    assert "$10$" in stored
    assert legacy_auth.check_stored_hash(stored, PASSWORD, CNPJ)
    assert not legacy_auth.check_stored_hash(stored, PASSWORD, "98765432000100")


def test_register_user_stores_bcrypt_hash(session):
    profile_id = legacy_auth.register_user(session, CNPJ, "Padaria Central", PASSWORD)

    profile = session.get(Profile, profile_id)
    assert profile.cnpj == CNPJ
    assert profile.user_id is None
    assert legacy_auth.is_strong_hash(profile.password_hash)


def test_register_user_rejects_duplicate_cnpj(session):
    legacy_auth.register_user(session, CNPJ, "Padaria Central", PASSWORD)

    with pytest.raises(DuplicateTaxIdError):
        legacy_auth.register_user(session, CNPJ, "Outra Empresa", "outrasenha")


def test_authenticate_user_upgrades_legacy_hash(session):
    profile = _legacy_profile(session)

    rows = legacy_auth.authenticate_user(session, CNPJ, PASSWORD)

    assert len(rows) == 1
    assert rows[0].profile_id == profile.id
    assert rows[0].profile_company_name == "Padaria Central"
    session.refresh(profile)
    assert profile.password_hash.startswith("$")
    # Segundo login já confere pelo bcrypt
    assert len(legacy_auth.authenticate_user(session, CNPJ, PASSWORD)) == 1


def test_authenticate_user_links_unlinked_profile_to_caller(session):
    profile = _legacy_profile(session)
    user = _identity(session)

    legacy_auth.authenticate_user(session, CNPJ, PASSWORD, caller=user.id)

    session.refresh(profile)
    assert profile.user_id == user.id


def test_authenticate_user_wrong_password_and_unknown_cnpj_look_the_same(session):
    profile = _legacy_profile(session)

    assert legacy_auth.authenticate_user(session, CNPJ, "errada") == []
    assert legacy_auth.authenticate_user(session, "98765432000100", PASSWORD) == []
    session.refresh(profile)
    assert not legacy_auth.is_strong_hash(profile.password_hash)


def test_verify_user_password_accepts_both_hash_formats(session):
    profile = _legacy_profile(session)
    assert legacy_auth.verify_user_password(session, None, PASSWORD, CNPJ)

    profile.password_hash = legacy_auth.strong_hash(PASSWORD, CNPJ)
    session.add(profile)
    session.commit()

    assert legacy_auth.verify_user_password(session, None, PASSWORD, CNPJ)
    assert not legacy_auth.verify_user_password(session, None, "errada", CNPJ)


def test_update_user_password_requires_current_password(session):
    _legacy_profile(session)

    assert not legacy_auth.update_user_password(session, None, "errada", "novasenha", CNPJ)
    assert legacy_auth.update_user_password(session, None, PASSWORD, "novasenha", CNPJ)

    assert legacy_auth.verify_user_password(session, None, "novasenha", CNPJ)
    assert not legacy_auth.verify_user_password(session, None, PASSWORD, CNPJ)


def test_migrate_legacy_to_auth_moves_rows_and_is_idempotent(session):
    profile = _legacy_profile(session)
    user = _identity(session)
    session.add(
        Transaction(
            user_id=profile.id,
            type=TransactionType.expense,
            description="Aluguel",
            amount=Decimal("1500.00"),
            due_date=date(2025, 3, 5),
            category="Moradia",
        )
    )
    session.add(Pattern(user_id=profile.id, type=TransactionType.expense, pattern_type=PatternKind.category, value="Moradia"))
    session.commit()

    legacy_auth.migrate_legacy_to_auth(session, CNPJ, user.id)
    legacy_auth.migrate_legacy_to_auth(session, CNPJ, user.id)

    session.refresh(profile)
    assert profile.user_id == user.id
    assert session.exec(select(Transaction).where(Transaction.user_id == profile.id)).all() == []
    assert len(session.exec(select(Transaction).where(Transaction.user_id == user.id)).all()) == 1
    assert len(session.exec(select(Pattern).where(Pattern.user_id == user.id)).all()) == 1


def test_migrate_legacy_to_auth_leaves_rows_of_profile_linked_elsewhere(session):
    profile = _legacy_profile(session)
    owner = _identity(session, "dono@bpo.local")
    stranger = _identity(session, "estranho@bpo.local")
    profile.user_id = owner.id
    session.add(profile)
    session.add(
        Transaction(
            user_id=profile.id,
            type=TransactionType.income,
            description="Venda",
            amount=Decimal("10.00"),
            due_date=date(2025, 3, 5),
            category="Vendas",
        )
    )
    session.commit()

    legacy_auth.migrate_legacy_to_auth(session, CNPJ, stranger.id)

    session.refresh(profile)
    assert profile.user_id == owner.id
    assert len(session.exec(select(Transaction).where(Transaction.user_id == profile.id)).all()) == 1
