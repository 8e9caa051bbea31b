"""Provedor de identidades gerenciadas.

Equivale ao serviço de autenticação externo: contas por e-mail/senha com
metadados. O e-mail é derivado do CNPJ/CPF (``<dígitos>@bpo.local``).
"""
import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from bpo_financeiro.core import config
from bpo_financeiro.core.exceptions import InvalidCredentialsError, SignupUnavailableError
from bpo_financeiro.core.security import get_password_hash, verify_password
from bpo_financeiro.models.auth_user import AuthUser

logger = logging.getLogger(__name__)


def get_user(session: Session, user_id: UUID) -> Optional[AuthUser]:
    return session.get(AuthUser, user_id)


def get_user_by_email(session: Session, email: str) -> Optional[AuthUser]:
    return session.exec(select(AuthUser).where(AuthUser.email == email.lower())).first()


def sign_up(session: Session, email: str, password: str, data: Optional[dict] = None) -> AuthUser:
    """Cria a identidade. O gatilho handle_new_user cria o perfil a partir de ``data``."""
    if not config.MANAGED_AUTH_SIGNUP_ENABLED:
        raise SignupUnavailableError("Cadastro de identidades desativado")

    if get_user_by_email(session, email):
        raise SignupUnavailableError("E-mail já possui identidade")

    user = AuthUser(
        email=email.lower(),
        encrypted_password=get_password_hash(password),
        raw_user_meta_data=dict(data or {}),
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning("sign_up falhou para %s: %s", email, exc)
        raise SignupUnavailableError("Não foi possível criar a identidade") from exc
    session.refresh(user)
    return user


def sign_in_with_password(session: Session, email: str, password: str) -> AuthUser:
    user = get_user_by_email(session, email)
    if not user or not verify_password(password, user.encrypted_password):
        raise InvalidCredentialsError("Credenciais inválidas")

    user.last_sign_in_at = datetime.now(timezone.utc)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def check_password(user: AuthUser, password: str) -> bool:
    return verify_password(password, user.encrypted_password)


def update_password(session: Session, user: AuthUser, new_password: str) -> AuthUser:
    user.encrypted_password = get_password_hash(new_password)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
