"""Procedimentos do esquema de senha legado.

O hash legado é ``md5(senha + cnpj + "bpo_salt")``; o hash forte é bcrypt
(custo 10) sobre a mesma concatenação. Um hash que começa com ``$`` é
tratado como forte. Todas as buscas são somente por CNPJ, igual ao login.

Cada função é uma unidade de trabalho: faz um único commit ao final.
"""
import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from sqlmodel import Session, select

from bpo_financeiro.core.config import LEGACY_SALT
from bpo_financeiro.core.exceptions import DuplicateTaxIdError
from bpo_financeiro.core.security import legacy_pwd_context
from bpo_financeiro.models.pattern import Pattern
from bpo_financeiro.models.profile import Profile
from bpo_financeiro.models.transaction import Transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedProfile:
    profile_id: UUID
    profile_cnpj: str
    profile_company_name: str


def _salted(password: str, cnpj: str) -> str:
    return f"{password}{cnpj}{LEGACY_SALT}"


def legacy_hash(password: str, cnpj: str) -> str:
    return hashlib.md5(_salted(password, cnpj).encode("utf-8")).hexdigest()


def strong_hash(password: str, cnpj: str) -> str:
    return legacy_pwd_context.hash(_salted(password, cnpj))


def is_strong_hash(stored: Optional[str]) -> bool:
    return bool(stored) and stored.startswith("$")


def check_stored_hash(stored: Optional[str], password: str, cnpj: str) -> bool:
    if not stored:
        return False
    if is_strong_hash(stored):
        try:
            return legacy_pwd_context.verify(_salted(password, cnpj), stored)
        except ValueError:
            logger.warning("Hash forte malformado para o CNPJ %s", cnpj)
            return False
    return hmac.compare_digest(legacy_hash(password, cnpj), stored)


def find_profile_by_cnpj(session: Session, cnpj: str) -> Optional[Profile]:
    return session.exec(select(Profile).where(Profile.cnpj == cnpj).limit(1)).first()


def register_user(session: Session, cnpj: str, company_name: str, password: str) -> UUID:
    if find_profile_by_cnpj(session, cnpj):
        raise DuplicateTaxIdError("CNPJ já cadastrado")

    profile = Profile(
        cnpj=cnpj,
        company_name=company_name,
        password_hash=strong_hash(password, cnpj),
    )
    session.add(profile)
    session.commit()
    session.refresh(profile)
    logger.info("register_user: perfil %s criado", profile.id)
    return profile.id


def authenticate_user(
    session: Session,
    cnpj: str,
    password: str,
    caller: Optional[UUID] = None,
) -> List[AuthenticatedProfile]:
    """Zero ou uma linha. Perfil inexistente e senha errada dão o mesmo resultado.

    Um acerto no hash legado troca o hash por bcrypt na hora e vincula o
    perfil ao ``caller`` se ainda não houver vínculo.
    """
    profile = find_profile_by_cnpj(session, cnpj)
    if not profile or not profile.password_hash:
        return []

    if is_strong_hash(profile.password_hash):
        if not check_stored_hash(profile.password_hash, password, cnpj):
            return []
    else:
        if not hmac.compare_digest(legacy_hash(password, cnpj), profile.password_hash):
            return []
        profile.password_hash = strong_hash(password, cnpj)
        if profile.user_id is None and caller is not None:
            profile.user_id = caller
        session.add(profile)
        session.commit()
        session.refresh(profile)
        logger.info("authenticate_user: hash legado do perfil %s atualizado para bcrypt", profile.id)

    return [AuthenticatedProfile(profile.id, profile.cnpj, profile.company_name)]


def verify_user_password(session: Session, caller: Optional[UUID], password: str, cnpj: str) -> bool:
    # caller não restringe a busca: mesmo critério do login
    profile = find_profile_by_cnpj(session, cnpj)
    if not profile:
        return False
    return check_stored_hash(profile.password_hash, password, cnpj)


def update_user_password(
    session: Session,
    caller: Optional[UUID],
    current_password: str,
    new_password: str,
    cnpj: str,
) -> bool:
    profile = find_profile_by_cnpj(session, cnpj)
    if not profile:
        return False

    if not check_stored_hash(profile.password_hash, current_password, cnpj):
        return False

    profile.password_hash = strong_hash(new_password, cnpj)
    if profile.user_id is None:
        profile.user_id = caller
    session.add(profile)
    session.commit()
    logger.info("update_user_password: senha do perfil %s alterada", profile.id)
    return True


def migrate_legacy_to_auth(session: Session, cnpj: str, caller: UUID) -> None:
    """Vincula o perfil legado ao chamador e transfere os dados do id antigo.

    Idempotente. Só move linhas quando o perfil está vinculado ao chamador.
    """
    profile = find_profile_by_cnpj(session, cnpj)
    if not profile:
        return

    if profile.user_id is None:
        profile.user_id = caller
        session.add(profile)

    if profile.user_id != caller:
        logger.warning("migrate_legacy_to_auth: perfil %s vinculado a outra identidade", profile.id)
        session.commit()
        return

    moved = 0
    for model in (Transaction, Pattern):
        rows = session.exec(select(model).where(model.user_id == profile.id)).all()
        for row in rows:
            row.user_id = caller
            session.add(row)
        moved += len(rows)

    session.commit()
    if moved:
        logger.info("migrate_legacy_to_auth: %s registros movidos para %s", moved, caller)
