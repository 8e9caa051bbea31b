"""Gatilhos de banco expressos como eventos do mapper do SQLAlchemy.

``update_updated_at_column`` mantém ``updated_at`` em todo UPDATE e
``handle_new_user`` cria o perfil a partir dos metadados de uma identidade
gerenciada recém-inserida.
"""
import logging
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import event, or_, select

from bpo_financeiro.models.auth_user import AuthUser
from bpo_financeiro.models.pattern import Pattern
from bpo_financeiro.models.profile import Profile
from bpo_financeiro.models.transaction import Transaction

logger = logging.getLogger(__name__)


def update_updated_at_column(mapper, connection, target):
    target.updated_at = datetime.now(timezone.utc)


for _model in (AuthUser, Profile, Transaction, Pattern):
    event.listen(_model, "before_update", update_updated_at_column)


@event.listens_for(AuthUser, "after_insert")
def handle_new_user(mapper, connection, target):
    metadata = target.raw_user_meta_data or {}
    cnpj = metadata.get("cnpj")
    company_name = metadata.get("company_name")

    if not cnpj or not company_name:
        # Sem metadados não cria perfil incompleto
        return

    profiles = Profile.__table__
    existing = connection.execute(
        select(profiles.c.id).where(
            or_(profiles.c.user_id == target.id, profiles.c.cnpj == cnpj)
        )
    ).first()
    if existing:
        # Perfil legado com este CNPJ é vinculado depois por migrate_legacy_to_auth
        logger.info("handle_new_user: perfil já existe para %s, nada a criar", target.email)
        return

    now = datetime.now(timezone.utc)
    connection.execute(
        profiles.insert().values(
            id=uuid4(),
            cnpj=cnpj,
            company_name=company_name,
            password_hash=None,
            user_id=target.id,
            created_at=now,
            updated_at=now,
        )
    )
    logger.info("handle_new_user: perfil criado para %s", target.email)
