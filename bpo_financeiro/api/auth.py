from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from bpo_financeiro.core.config import SUPPORT_EMAIL, SUPPORT_WHATSAPP
from bpo_financeiro.core.exceptions import AuthenticationError, DuplicateTaxIdError, ValidationError
from bpo_financeiro.core.policies import get_current_profile
from bpo_financeiro.core.security import get_current_user
from bpo_financeiro.database import get_session
from bpo_financeiro.models.profile import Profile
from bpo_financeiro.schemas.auth import (
    RecoveryContact,
    SessionUser,
    SignupRequest,
    SignupResponse,
    TokenResponse,
)
from bpo_financeiro.services import auth_bridge

router = APIRouter(prefix="/auth", tags=["auth"])

# Cadastro
@router.post("/register", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def register(payload: SignupRequest, session: Session = Depends(get_session)):
    try:
        if payload.confirm_password is not None:
            auth_bridge.validate_new_password(payload.password, payload.confirm_password)
        profile = auth_bridge.sign_up(session, payload.cnpj, payload.company_name, payload.password)
    except DuplicateTaxIdError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return SignupResponse(
        id=profile.id,
        cnpj=profile.cnpj,
        company_name=profile.company_name,
        message="Cadastro realizado com sucesso! Agora você pode fazer login com seu CNPJ e senha",
    )

# Login (username = CPF/CNPJ)
@router.post("/login", response_model=TokenResponse)
def login(form_data: OAuth2PasswordRequestForm = Depends(), session: Session = Depends(get_session)):
    try:
        signed_in = auth_bridge.sign_in(session, form_data.username, form_data.password)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        )

    profile = signed_in.profile
    return TokenResponse(
        access_token=signed_in.access_token,
        mode=signed_in.mode,
        user=SessionUser(id=signed_in.owner_id, cnpj=profile.cnpj, company_name=profile.company_name),
    )

# Sessão atual
@router.get("/me", response_model=SessionUser)
def read_users_me(
    user_id: UUID = Depends(get_current_user),
    profile: Profile = Depends(get_current_profile),
):
    return SessionUser(id=user_id, cnpj=profile.cnpj, company_name=profile.company_name)

# Aba "Recuperar": a senha é redefinida pelo suporte
@router.get("/recovery-contact", response_model=RecoveryContact)
def recovery_contact():
    return RecoveryContact(
        email=SUPPORT_EMAIL,
        whatsapp=SUPPORT_WHATSAPP,
        message="Entre em contato com nossa equipe para recuperar o acesso à sua conta",
    )
