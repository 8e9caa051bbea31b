from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class SignupRequest(BaseModel):
    cnpj: str  # CPF ou CNPJ, com ou sem máscara
    company_name: str
    password: str
    confirm_password: Optional[str] = None


class SignupResponse(BaseModel):
    id: UUID
    cnpj: str
    company_name: str
    message: str


class SessionUser(BaseModel):
    id: UUID
    cnpj: str
    company_name: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    mode: str
    user: SessionUser


class RecoveryContact(BaseModel):
    email: str
    whatsapp: str
    message: str
