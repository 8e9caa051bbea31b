"""Políticas por linha: cada leitura/escrita fica restrita ao dono.

Linhas de outro dono simplesmente não aparecem (404), nunca 403.
"""
from typing import Optional, Type, TypeVar
from uuid import UUID

from fastapi import Depends, HTTPException
from sqlalchemy import and_, or_
from sqlmodel import Session, SQLModel, select

from bpo_financeiro.core.security import get_current_user
from bpo_financeiro.database import get_session
from bpo_financeiro.models.profile import Profile

ModelT = TypeVar("ModelT", bound=SQLModel)


def owned(statement, model: Type[SQLModel], caller: UUID):
    """Aplica ``user_id = caller`` a um select."""
    return statement.where(model.user_id == caller)


def get_owned(session: Session, model: Type[ModelT], row_id: UUID, caller: UUID) -> Optional[ModelT]:
    return session.exec(owned(select(model), model, caller).where(model.id == row_id)).first()


def profile_of(session: Session, caller: UUID) -> Optional[Profile]:
    """Perfil do próprio chamador.

    Sessões gerenciadas casam por ``user_id``; sessões legadas (perfil ainda
    sem identidade vinculada) usam o id do próprio perfil.
    """
    return session.exec(
        select(Profile).where(
            or_(
                Profile.user_id == caller,
                and_(Profile.user_id.is_(None), Profile.id == caller),
            )
        )
    ).first()


def get_current_profile(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> Profile:
    profile = profile_of(session, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Perfil não encontrado")
    return profile
