from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlmodel import Session, select

from bpo_financeiro.core.policies import get_owned, owned
from bpo_financeiro.core.security import get_current_user
from bpo_financeiro.database import get_session
from bpo_financeiro.models.enums import PatternKind, TransactionType
from bpo_financeiro.models.pattern import Pattern
from bpo_financeiro.schemas.pattern import PatternCreate, PatternRead

router = APIRouter(prefix="/patterns", tags=["patterns"])


def _search(statement, term: Optional[str]):
    term = (term or "").strip()
    if not term:
        return statement
    return statement.where(func.lower(Pattern.value).contains(term.lower()))


@router.get("", response_model=List[PatternRead])
@router.get("/", response_model=List[PatternRead])
def list_patterns(
    type: Optional[TransactionType] = Query(None),
    pattern_type: Optional[PatternKind] = Query(None),
    search: Optional[str] = Query(None),
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    statement = owned(select(Pattern), Pattern, user_id)
    if type is not None:
        statement = statement.where(Pattern.type == type)
    if pattern_type is not None:
        statement = statement.where(Pattern.pattern_type == pattern_type)
    statement = _search(statement, search).order_by(Pattern.created_at.desc())
    return session.exec(statement).all()


@router.get("/suggestions", response_model=List[PatternRead])
def pattern_suggestions(
    type: TransactionType,
    pattern_type: PatternKind,
    q: str = Query("", description="Trecho digitado no campo"),
    limit: int = Query(10, ge=1, le=50),
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    statement = owned(select(Pattern), Pattern, user_id).where(
        Pattern.type == type,
        Pattern.pattern_type == pattern_type,
    )
    statement = _search(statement, q).order_by(Pattern.created_at.desc()).limit(limit)
    return session.exec(statement).all()


@router.post("", response_model=PatternRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=PatternRead, status_code=status.HTTP_201_CREATED)
def create_pattern(
    data: PatternCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    pattern = Pattern(**data.model_dump(), user_id=user_id)
    session.add(pattern)
    session.commit()
    session.refresh(pattern)
    return pattern


@router.delete("/{pattern_id}")
def delete_pattern(
    pattern_id: UUID,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    pattern = get_owned(session, Pattern, pattern_id, user_id)
    if not pattern:
        raise HTTPException(status_code=404, detail="Padrão não encontrado")

    session.delete(pattern)
    session.commit()
    return {"message": "Padrão excluído com sucesso"}
