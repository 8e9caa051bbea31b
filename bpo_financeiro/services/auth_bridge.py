"""Ponte entre o login legado (CNPJ + senha no perfil) e as identidades gerenciadas.

Durante a transição as duas representações convivem: o cadastro tenta a
identidade gerenciada e cai para ``register_user``; o login tenta a identidade
e cai para ``authenticate_user``, provisionando a identidade quando a senha
legada confere.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlmodel import Session

from bpo_financeiro.core import config, identity
from bpo_financeiro.core.exceptions import (
    AuthenticationError,
    DuplicateTaxIdError,
    IdentityError,
    InvalidCredentialsError,
    ValidationError,
)
from bpo_financeiro.core.security import SESSION_LEGACY, SESSION_MANAGED, create_session_token
from bpo_financeiro.models.profile import Profile
from bpo_financeiro.services import legacy_auth
from bpo_financeiro.utils.document_helpers import derived_email, normalize_document

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "CNPJ ou senha incorretos"


@dataclass(frozen=True)
class SignedIn:
    access_token: str
    owner_id: UUID
    mode: str
    profile: Profile


def validate_new_password(password: str, confirm_password: Optional[str] = None) -> None:
    if confirm_password is not None and password != confirm_password:
        raise ValidationError("As senhas não coincidem")
    if len(password) < config.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"A senha deve ter pelo menos {config.MIN_PASSWORD_LENGTH} caracteres")


def sign_up(session: Session, document: str, company_name: str, password: str) -> Profile:
    cnpj = normalize_document(document)
    company_name = (company_name or "").strip()
    if not company_name:
        raise ValidationError("Informe o nome da empresa")
    validate_new_password(password)

    if legacy_auth.find_profile_by_cnpj(session, cnpj):
        raise DuplicateTaxIdError("CNPJ já cadastrado")

    try:
        identity.sign_up(
            session,
            derived_email(cnpj),
            password,
            data={"cnpj": cnpj, "company_name": company_name},
        )
    except IdentityError as exc:
        logger.warning("Cadastro gerenciado indisponível (%s); usando register_user", exc)
        legacy_auth.register_user(session, cnpj, company_name, password)

    profile = legacy_auth.find_profile_by_cnpj(session, cnpj)
    if profile is None:
        # Identidade criada sem perfil: garante o perfil pelo caminho legado
        legacy_auth.register_user(session, cnpj, company_name, password)
        profile = legacy_auth.find_profile_by_cnpj(session, cnpj)
    return profile


def _provision_identity(session: Session, profile: Profile, password: str) -> Optional[UUID]:
    """Cria ou ressincroniza a identidade de um perfil cuja senha legada conferiu."""
    if profile.user_id is not None:
        user = identity.get_user(session, profile.user_id)
        if user is not None:
            if not identity.check_password(user, password):
                identity.update_password(session, user, password)
            return user.id

    email = derived_email(profile.cnpj)
    existing = identity.get_user_by_email(session, email)
    if existing is not None:
        identity.update_password(session, existing, password)
        return existing.id

    try:
        user = identity.sign_up(
            session,
            email,
            password,
            data={"cnpj": profile.cnpj, "company_name": profile.company_name},
        )
    except IdentityError as exc:
        logger.info("Identidade não provisionada para o perfil %s: %s", profile.id, exc)
        return None
    return user.id


def sign_in(session: Session, document: str, password: str) -> SignedIn:
    try:
        cnpj = normalize_document(document)
    except ValidationError:
        raise AuthenticationError(INVALID_CREDENTIALS)

    try:
        user = identity.sign_in_with_password(session, derived_email(cnpj), password)
    except InvalidCredentialsError:
        user = None

    if user is not None:
        legacy_auth.migrate_legacy_to_auth(session, cnpj, user.id)
        profile = legacy_auth.find_profile_by_cnpj(session, cnpj)
        if profile is None:
            raise AuthenticationError(INVALID_CREDENTIALS)
        return SignedIn(create_session_token(user.id, cnpj, SESSION_MANAGED), user.id, SESSION_MANAGED, profile)

    rows = legacy_auth.authenticate_user(session, cnpj, password)
    if not rows:
        raise AuthenticationError(INVALID_CREDENTIALS)

    profile = session.get(Profile, rows[0].profile_id)
    owner_id = _provision_identity(session, profile, password)
    if owner_id is None:
        return SignedIn(create_session_token(profile.id, cnpj, SESSION_LEGACY), profile.id, SESSION_LEGACY, profile)

    legacy_auth.migrate_legacy_to_auth(session, cnpj, owner_id)
    session.refresh(profile)
    return SignedIn(create_session_token(owner_id, cnpj, SESSION_MANAGED), owner_id, SESSION_MANAGED, profile)


def _identity_caller(caller: UUID, profile: Profile) -> Optional[UUID]:
    # Em sessões legadas o chamador é o próprio id do perfil, que não é identidade
    return None if caller == profile.id else caller


def verify_password(session: Session, caller: UUID, profile: Profile, password: str) -> bool:
    if legacy_auth.verify_user_password(session, caller, password, profile.cnpj):
        return True
    # Perfis criados pelo cadastro gerenciado não guardam hash legado
    if profile.user_id is not None:
        user = identity.get_user(session, profile.user_id)
        if user is not None and identity.check_password(user, password):
            return True
    return False


def change_password(
    session: Session,
    caller: UUID,
    profile: Profile,
    current_password: str,
    new_password: str,
    confirm_password: Optional[str] = None,
) -> bool:
    validate_new_password(new_password, confirm_password)

    legacy_ok = False
    if profile.password_hash:
        legacy_ok = legacy_auth.update_user_password(
            session, _identity_caller(caller, profile), current_password, new_password, profile.cnpj
        )

    user = identity.get_user(session, profile.user_id) if profile.user_id else None
    managed_ok = user is not None and identity.check_password(user, current_password)

    if not (legacy_ok or managed_ok):
        return False

    if user is not None:
        identity.update_password(session, user, new_password)
    if profile.password_hash and not legacy_ok:
        session.refresh(profile)
        profile.password_hash = legacy_auth.strong_hash(new_password, profile.cnpj)
        session.add(profile)
        session.commit()
    logger.info("Senha alterada para o perfil %s", profile.id)
    return True
