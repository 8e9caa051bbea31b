from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, func, select

from bpo_financeiro.core.exceptions import ValidationError
from bpo_financeiro.core.policies import get_current_profile, owned
from bpo_financeiro.core.security import get_current_user
from bpo_financeiro.database import get_session
from bpo_financeiro.models.profile import Profile
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.schemas.profile import ChangePasswordIn, ProfileRead, VerifyPasswordIn, VerifyPasswordOut
from bpo_financeiro.services import auth_bridge
from bpo_financeiro.utils.document_helpers import format_document

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileRead)
@router.get("/", response_model=ProfileRead)
def read_profile(
    user_id: UUID = Depends(get_current_user),
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    count, last_created = session.exec(
        owned(select(func.count(Transaction.id), func.max(Transaction.created_at)), Transaction, user_id)
    ).one()

    return ProfileRead(
        cnpj=profile.cnpj,
        cnpj_formatted=format_document(profile.cnpj),
        company_name=profile.company_name,
        created_at=profile.created_at,
        transaction_count=count or 0,
        last_transaction_date=last_created,
        managed_identity=profile.user_id is not None,
    )


@router.post("/verify-password", response_model=VerifyPasswordOut)
def verify_password(
    data: VerifyPasswordIn,
    user_id: UUID = Depends(get_current_user),
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    return VerifyPasswordOut(valid=auth_bridge.verify_password(session, user_id, profile, data.password))


@router.post("/change-password")
def change_password(
    data: ChangePasswordIn,
    user_id: UUID = Depends(get_current_user),
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    try:
        changed = auth_bridge.change_password(
            session,
            user_id,
            profile,
            data.current_password,
            data.new_password,
            data.confirm_password,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if not changed:
        raise HTTPException(status_code=400, detail="Senha atual incorreta")
    return {"message": "Senha alterada com sucesso"}
